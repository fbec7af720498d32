"""File for widely used constants."""

# Default insets of the plot area within the chart container.
MARGIN_TOP = 60
MARGIN_RIGHT = 0
MARGIN_BOTTOM = 40
MARGIN_LEFT = 0

# Charts narrower than this are not rendered at all.
MIN_CHART_WIDTH = 10

# Padding added to the temperature extent before "nicing" the domain.
TEMP_DOMAIN_PADDING = 5
# Dew point fallback when the payload has none.
DEW_POINT_OFFSET = 5

# Minimum upper bound of the precipitation domain (mm).
PRECIP_DOMAIN_MIN_MAX = 5
# Precipitation bars use the plot band below this fraction of the plot height.
PRECIP_BAND_TOP = 0.7
PRECIP_BAR_WIDTH = 6

# Cloud band: centered at this fraction of the plot height, half-width in px.
CLOUD_CENTER_FRACTION = 0.12
CLOUD_MAX_HALF_WIDTH = 15

# Minimum upper bound of the wind speed domain (km/h).
WIND_DOMAIN_MIN_MAX = 20
# The wind line uses the plot band below this fraction of the plot height.
WIND_BAND_TOP = 0.55
WIND_MASK_RADIUS = 10
# Draw a direction marker at every n-th sample.
WIND_MARKER_EVERY = 2

# A row is snow-dominant above this snow ratio.
SNOW_DOMINANT_RATIO = 0.5

# Sunny hours need a "sunniness" (1 - cloud cover) above this threshold.
SUNNY_MIN_SUNNINESS = 0.1
# Nominal number of hours across the plot, used to size sunny highlights.
SUNNY_PILL_HOURS = 48
SUNNY_PILL_WIDTH_HOURS = 1.5

# Particle glyphs under the cloud band.
MAX_PARTICLES = 5
PARTICLES_PER_MM = 2
PARTICLE_JITTER_PX = 5
PARTICLE_SIZE = 9
PARTICLE_SPACING = 11

# Next precipitation event lookahead.
PRECIP_HORIZON_HOURS = 24

# Default number of ticks on the time axis.
TIME_AXIS_TICKS = 8

# Gradient anchors for temperature colors (°C).
TEMP_GRADIENT_HOT = 40
TEMP_GRADIENT_COLD = -10
