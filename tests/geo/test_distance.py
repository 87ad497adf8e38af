import pytest

from src.shiftdesk.shiftdesk.core.exceptions import ValidationError
from src.shiftdesk.shiftdesk.geo.model import GeoPoint
from src.shiftdesk.shiftdesk.geo.validator import distance_meters, is_within_radius


def test_coincident_points_are_zero_apart():
    p = GeoPoint(10.7769, 106.7009)
    assert distance_meters(p, p) == 0


def test_distance_is_symmetric():
    a = GeoPoint(21.0285, 105.8542)
    b = GeoPoint(10.7769, 106.7009)
    assert distance_meters(a, b) == pytest.approx(distance_meters(b, a), abs=1e-6)


def test_one_degree_of_longitude_at_equator():
    d = distance_meters(GeoPoint(0, 0), GeoPoint(0, 1))
    assert d == pytest.approx(111_195, rel=0.01)


def test_hanoi_to_saigon_is_about_1140_km():
    d = distance_meters(GeoPoint(21.0285, 105.8542), GeoPoint(10.7769, 106.7009))
    assert 1_130_000 < d < 1_150_000


def test_antipodal_points_do_not_blow_up():
    d = distance_meters(GeoPoint(0, 0), GeoPoint(0, 180))
    assert d == pytest.approx(6_371_000 * 3.141592653589793, rel=1e-9)


def test_radius_check_is_inclusive_at_boundary():
    office = GeoPoint(10.7769, 106.7009)
    here = GeoPoint(10.7779, 106.7019)
    d = distance_meters(here, office)

    assert is_within_radius(here, office, d) is True
    assert is_within_radius(here, office, d - 0.01) is False


@pytest.mark.parametrize("lat, lon", [(90.5, 0), (-91, 0), (0, 180.1), (0, -200)])
def test_geopoint_rejects_out_of_range_coordinates(lat, lon):
    with pytest.raises(ValidationError):
        GeoPoint(lat, lon)
