from .models import *

__all__ = [
    "ChartDefs",
    "CirclePrimitive",
    "CurrentConditions",
    "DailyPayload",
    "DailyRow",
    "ForecastPayload",
    "GlyphPrimitive",
    "HourlyPayload",
    "HourlyRow",
    "Layer",
    "LinePrimitive",
    "LinearGradient",
    "Margin",
    "Mask",
    "NormalizedForecast",
    "MeteogramRender",
    "PathPrimitive",
    "PrecipitationEvent",
    "PrecipType",
    "Primitive",
    "RectPrimitive",
    "Style",
    "TextPrimitive",
    "TooltipState",
    "Viewport",
]
