"""Helpers for dealing with environment variables.

Especially relevant for Cloud deployments, where most parameters
will be provided as env vars.
"""

import os
from pydantic import BaseModel

from service.meteogram import models
from service.meteogram.base import units


def _int_var(name: str, default: int) -> int:
    val = os.getenv(name)
    if not val:
        return default
    try:
        return int(val)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {val!r}")


def _margin_var(name: str) -> models.Margin:
    val = os.getenv(name)
    if not val:
        return models.Margin()
    parts = val.split(",")
    if len(parts) != 4:
        raise ValueError(f"{name} must be 'top,right,bottom,left', got {val!r}")
    try:
        top, right, bottom, left = (float(p) for p in parts)
    except ValueError:
        raise ValueError(f"{name} must contain numbers, got {val!r}")
    return models.Margin(top=top, right=right, bottom=bottom, left=left)


class MeteogramSettings(BaseModel):
    unit_system: units.UnitSystem = units.METRIC
    width: int = 800
    height: int = 300
    margin: models.Margin = models.Margin()

    @classmethod
    def from_env(cls):
        unit_system = os.getenv("METEOGRAM_UNIT_SYSTEM", units.METRIC).lower()
        if unit_system not in units.UNIT_SYSTEMS:
            raise ValueError(
                f"METEOGRAM_UNIT_SYSTEM must be one of {units.UNIT_SYSTEMS}, got {unit_system!r}"
            )
        return cls(
            unit_system=unit_system,
            width=_int_var("METEOGRAM_WIDTH", 800),
            height=_int_var("METEOGRAM_HEIGHT", 300),
            margin=_margin_var("METEOGRAM_MARGIN"),
        )

    def viewport(self) -> models.Viewport:
        return models.Viewport(width=self.width, height=self.height, margin=self.margin)
