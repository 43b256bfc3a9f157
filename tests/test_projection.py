import pytest

from earth_geo.domain.models import GeoFix, WorldCenter
from earth_geo.projection import (
    EQUATORIAL_CIRCUMFERENCE_M,
    METERS_PER_DEGREE,
    OUT_OF_RANGE_FIX,
    Projection,
)


@pytest.mark.parametrize(
    "lat, lon",
    [
        (0.0, 0.0),
        (52.52, 13.405),
        (-33.8688, 151.2093),
        (40.7128, -74.0060),
        (89.9, 179.9),
        (-89.9, -179.9),
    ],
)
def test_round_trip_recovers_coordinates(lat, lon):
    projection = Projection()

    planar = projection.to_planar(GeoFix(latitude=lat, longitude=lon))
    back = projection.to_geo(planar.x, planar.z)

    assert back.latitude == pytest.approx(lat, abs=1e-9)
    assert back.longitude == pytest.approx(lon, abs=1e-9)


def test_one_degree_is_a_360th_of_the_equator():
    planar = Projection().to_planar(GeoFix(latitude=1.0, longitude=-1.0))

    assert METERS_PER_DEGREE == EQUATORIAL_CIRCUMFERENCE_M / 360
    assert planar.z == pytest.approx(METERS_PER_DEGREE)
    assert planar.x == pytest.approx(-METERS_PER_DEGREE)
    assert planar.y is None


@pytest.mark.parametrize(
    "x, z",
    [
        (0.0, METERS_PER_DEGREE * 91),
        (0.0, -METERS_PER_DEGREE * 91),
        (METERS_PER_DEGREE * 200, 0.0),
        (-METERS_PER_DEGREE * 181, 0.0),
    ],
)
def test_off_map_positions_yield_fallback_fix(x, z):
    fix = Projection().to_geo(x, z)

    assert fix == OUT_OF_RANGE_FIX
    assert fix.latitude == 89.9999
    assert fix.longitude == 0


def test_snap_to_grid_floors_coordinates():
    projection = Projection(snap_to_grid=True)

    planar = projection.to_planar(GeoFix(latitude=0.00001, longitude=-0.00001))

    assert planar.x == -2
    assert planar.z == 1


def test_reference_center_shifts_before_projecting():
    plain = Projection()
    centered = Projection(reference_center=WorldCenter(x=10.0, y=5.0, z=20.0))

    shifted = centered.to_planar(GeoFix(latitude=30.0, longitude=15.0))
    expected = plain.to_planar(GeoFix(latitude=10.0, longitude=5.0))

    assert shifted.x == pytest.approx(expected.x)
    assert shifted.z == pytest.approx(expected.z)
    assert centered.vertical_offset == 5.0
    assert plain.vertical_offset == 0.0


def test_center_and_scale_in_to_geo():
    projection = Projection(center_longitude=10.0, center_latitude=-5.0, scale_x=2.0)

    at_origin = projection.to_geo(0.0, 0.0)
    east = projection.to_geo(METERS_PER_DEGREE, 0.0)

    assert at_origin.longitude == pytest.approx(10.0)
    assert at_origin.latitude == pytest.approx(-5.0)
    assert east.longitude == pytest.approx(12.0)


def test_scale_in_to_planar():
    planar = Projection(scale_x=2.0, scale_z=0.5).to_planar(
        GeoFix(latitude=1.0, longitude=10.0)
    )

    assert planar.x == pytest.approx(5 * METERS_PER_DEGREE)
    assert planar.z == pytest.approx(2 * METERS_PER_DEGREE)
