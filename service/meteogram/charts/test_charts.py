import altair as alt
import pytest

from service.meteogram.base.errors import EmptyDatasetError
from service.meteogram.testhelpers import PandasTestCase, make_rows

from . import charts


class TestMeteogramChart(PandasTestCase):

    def test_chart_data_metric(self):
        rows = make_rows(
            n=3,
            temperature_2m=[0.0, 10.0, 20.0],
            precipitation=[0.0, 1.0, 1.0],
            rain=[0.0, 1.0, 0.0],
            winddirection_10m=[0.0, 90.0, 180.0],
        )
        df = charts.meteogram_chart_data(rows)
        self.assertEqual(len(df), 3)
        self.assertSeriesValuesEqual(df["temp_display"], [0.0, 10.0, 20.0])
        self.assertSeriesValuesEqual(df["precip_type"], ["none", "rain", "snow"])
        self.assertSeriesValuesEqual(df["wind_compass"], ["N", "E", "S"])

    def test_chart_data_imperial(self):
        rows = make_rows(
            n=2,
            temperature_2m=[0.0, 100.0],
            precipitation=[0.0, 10.0],
            windspeed_10m=[0.0, 100.0],
        )
        df = charts.meteogram_chart_data(rows, "imperial")
        self.assertSeriesValuesEqual(df["temp_display"], [32.0, 212.0])
        self.assertEqual(df["precip_display"].iloc[1], pytest.approx(0.393701))
        self.assertEqual(df["wind_display"].iloc[1], pytest.approx(62.1371))
        # Raw values are kept.
        self.assertSeriesValuesEqual(df["temperature"], [0.0, 100.0])

    def test_chart_data_empty(self):
        with self.assertRaises(EmptyDatasetError):
            charts.meteogram_chart_data([])

    def test_meteogram_chart(self):
        # Smoke test to verify charts can be generated.
        chart = charts.meteogram_chart(make_rows(n=48))
        self.assertIsInstance(chart, alt.LayerChart)
        spec = chart.to_dict()
        self.assertEqual(spec["title"], "Meteogram")
        self.assertEqual(spec["resolve"], {"scale": {"y": "independent"}})
