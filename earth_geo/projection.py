"""Conversion between geographic coordinates and world positions.

The world is treated as an equirectangular map of an Earth-sized sphere:
one degree of longitude or latitude is EQUATORIAL_CIRCUMFERENCE_M / 360
meters (one meter per world unit) everywhere. This is not geodetically
exact and is not meant to be.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional

from .domain.models import GeoFix, PlanarPosition, WorldCenter

EQUATORIAL_CIRCUMFERENCE_M = 40_075_696.0
METERS_PER_DEGREE = EQUATORIAL_CIRCUMFERENCE_M / 360

# Returned by to_geo for positions that fall off the map.
OUT_OF_RANGE_FIX = GeoFix(latitude=89.9999, longitude=0.0)


@dataclass(frozen=True, slots=True)
class Projection:
    """Process-wide projection parameters.

    Attributes:
        center_longitude: Longitude mapped to x = 0
        center_latitude: Latitude mapped to z = 0
        scale_x: Degrees-per-meter multiplier along x
        scale_z: Degrees-per-meter multiplier along z
        reference_center: Optional world center used to re-center the map
        snap_to_grid: Floor planar output to integer block coordinates
    """

    center_longitude: float = 0.0
    center_latitude: float = 0.0
    scale_x: float = 1.0
    scale_z: float = 1.0
    reference_center: Optional[WorldCenter] = None
    snap_to_grid: bool = False

    @property
    def vertical_offset(self) -> float:
        """Height to subtract from the ground level (reference center y)."""
        if self.reference_center is None:
            return 0.0
        return self.reference_center.y

    def to_geo(self, x: float, z: float) -> GeoFix:
        """Convert a planar position to latitude/longitude.

        Positions outside the map yield OUT_OF_RANGE_FIX instead of an
        error; callers should treat that as informational only.
        """
        lon = x * self.scale_x / METERS_PER_DEGREE + self.center_longitude
        lat = z * self.scale_z / METERS_PER_DEGREE + self.center_latitude
        if -90 < lat < 90 and -180 < lon < 180:
            return GeoFix(latitude=lat, longitude=lon)
        return OUT_OF_RANGE_FIX

    def to_planar(self, fix: GeoFix) -> PlanarPosition:
        """Convert a geo fix to a planar position with y left unset."""
        lon = fix.longitude
        lat = fix.latitude
        if self.reference_center is not None:
            lon -= self.reference_center.x
            lat -= self.reference_center.z

        x = (lon / self.scale_x - self.center_longitude) * METERS_PER_DEGREE
        z = (lat / self.scale_z - self.center_latitude) * METERS_PER_DEGREE
        if self.snap_to_grid:
            x = float(math.floor(x))
            z = float(math.floor(z))
        return PlanarPosition(x=x, z=z)
