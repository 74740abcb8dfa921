import math

import pytest

from geo_attendance.core.exceptions import ValidationError
from geo_attendance.geofence.calculator import check_geofence, distance_meters, is_inside
from geo_attendance.geofence.model import Coordinates

from fakes import FAR_AWAY, OFFICE, make_fence

POINTS = [
    Coordinates(0.0, 0.0),
    Coordinates(12.9716, 77.5946),
    Coordinates(-33.8688, 151.2093),
    Coordinates(89.9, -179.9),
]


@pytest.mark.parametrize("point", POINTS)
def test_distance_to_self_is_zero(point):
    assert distance_meters(point, point) == 0


def test_distance_is_symmetric():
    for a in POINTS:
        for b in POINTS:
            assert distance_meters(a, b) == distance_meters(b, a)


def test_one_degree_of_latitude_is_about_111_km():
    d = distance_meters(Coordinates(0.0, 0.0), Coordinates(1.0, 0.0))
    assert d == pytest.approx(111_195, rel=1e-4)


def test_antipodal_points_are_half_the_circumference_apart():
    d = distance_meters(Coordinates(0.0, 0.0), Coordinates(0.0, 180.0))
    assert d == pytest.approx(math.pi * 6_371_000, rel=1e-9)


def test_point_exactly_on_the_radius_is_inside():
    radius = distance_meters(FAR_AWAY, OFFICE)

    check = is_inside(FAR_AWAY, OFFICE, radius)

    assert check.is_within is True
    assert check.distance_meters == radius


def test_point_just_beyond_the_radius_is_outside():
    radius = distance_meters(FAR_AWAY, OFFICE)

    assert is_inside(FAR_AWAY, OFFICE, radius - 0.01).is_within is False


def test_nan_coordinates_propagate_and_are_never_inside():
    check = is_inside(Coordinates(float("nan"), 77.0), OFFICE, 1_000_000)

    assert math.isnan(check.distance_meters)
    assert check.is_within is False


def test_check_geofence_reports_closest_fence_even_when_outside():
    near = make_fence("NEAR", center=Coordinates(12.9800, 77.5946), radius=50)
    far = make_fence("FAR", center=Coordinates(13.5, 77.5946), radius=50)

    result = check_geofence(FAR_AWAY, [far, near])

    assert result.is_within is False
    assert result.closest_fence is near
    assert result.distance_meters == pytest.approx(distance_meters(FAR_AWAY, near.center))
    assert "too far" in result.message()


def test_check_geofence_inside_any_fence():
    small = make_fence("SMALL", center=OFFICE, radius=10)
    big = make_fence("BIG", center=Coordinates(12.9900, 77.5946), radius=5_000)

    result = check_geofence(FAR_AWAY, [small, big])

    assert result.is_within is True
    assert result.allowed_radius == big.radius_meters


def test_no_fences_means_everything_is_allowed():
    result = check_geofence(FAR_AWAY, [])

    assert result.is_within is True
    assert result.is_configured is False
    assert result.closest_fence is None
    assert result.message() == "Geo-fence not configured. All locations allowed."


def test_client_coordinates_are_range_checked():
    assert Coordinates.from_client("12.9716", 77.5946) == OFFICE

    for lat, lng in [(None, 1), ("abc", 1), (91, 0), (0, -181), (float("nan"), 0)]:
        with pytest.raises(ValidationError):
            Coordinates.from_client(lat, lng)
