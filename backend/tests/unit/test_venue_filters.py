"""Unit tests: build_venue_filter (query parameters -> MongoDB predicate)."""
import re

import pytest

from schemas.venues import VenueQuery
from utils.errors import VenueValidationError
from utils.venue_filters import NEAR_MAX_DISTANCE_M, build_venue_filter, near_point

pytestmark = pytest.mark.unit


def test_no_parameters_matches_everything():
    """An empty query yields an empty predicate."""
    assert build_venue_filter(VenueQuery()) == {}


def test_empty_strings_are_absent():
    """Empty query values contribute nothing."""
    assert build_venue_filter(VenueQuery(name="", minStars="", category="")) == {}


@pytest.mark.parametrize(
    "param,field",
    [
        ("name", "name"),
        ("phone", "contact.phone"),
        ("email", "contact.email"),
        ("category", "categories"),
    ],
)
def test_substring_parameters(param, field):
    """Each text parameter becomes a case-insensitive regex on its document field."""
    predicate = build_venue_filter(VenueQuery(**{param: "sol"}))
    assert predicate == {field: {"$regex": "sol", "$options": "i"}}


def test_regex_metacharacters_are_escaped():
    """User input is matched literally, never as pattern syntax."""
    predicate = build_venue_filter(VenueQuery(name="a.b(c)*"))
    pattern = predicate["name"]["$regex"]
    assert pattern == re.escape("a.b(c)*")
    assert re.search(pattern, "xa.b(c)*y")
    assert not re.search(pattern, "axb(c)")


def test_min_stars_is_integer_threshold():
    """minStars becomes $gte on stars."""
    assert build_venue_filter(VenueQuery(minStars="3")) == {"stars": {"$gte": 3}}


@pytest.mark.parametrize("value", ["abc", "3.5", "NaN", "4 stars"])
def test_min_stars_not_integer_raises(value):
    """A non-integer minStars is a validation error, not a partial predicate."""
    with pytest.raises(VenueValidationError, match="minStars"):
        build_venue_filter(VenueQuery(name="x", minStars=value))


def test_both_coordinates_add_near_condition():
    """longitude + latitude produce a $near on contact.location within 10 km."""
    predicate = build_venue_filter(VenueQuery(longitude="-3.7038", latitude="40.4168"))
    assert predicate == {
        "contact.location": {
            "$near": {
                "$geometry": {"type": "Point", "coordinates": [-3.7038, 40.4168]},
                "$maxDistance": 10000,
            }
        }
    }
    assert NEAR_MAX_DISTANCE_M == 10000


@pytest.mark.parametrize(
    "longitude,latitude",
    [
        ("-3.7", None),
        (None, "40.4"),
        ("west", "40.4"),
        ("-3.7", "nan"),
        ("-3.7", "inf"),
        ("200", "40.4"),
        ("-3.7", "95"),
    ],
)
def test_incomplete_or_invalid_coordinates_are_ignored(longitude, latitude):
    """One coordinate alone, or an unusable one, yields the same predicate as neither."""
    with_coords = build_venue_filter(VenueQuery(name="sol", longitude=longitude, latitude=latitude))
    assert with_coords == build_venue_filter(VenueQuery(name="sol"))


def test_all_parameters_combine_conjunctively():
    """Every present parameter contributes exactly one condition."""
    predicate = build_venue_filter(
        VenueQuery(
            name="Sol",
            phone="555",
            email="@cafe",
            minStars="4",
            category="cafe",
            longitude="2.17",
            latitude="41.38",
        )
    )
    assert set(predicate) == {
        "name",
        "contact.phone",
        "contact.email",
        "stars",
        "categories",
        "contact.location",
    }
    assert predicate["contact.location"] == near_point(2.17, 41.38)


def test_adding_a_parameter_never_drops_conditions():
    """The predicate for a superset of parameters contains the subset's predicate."""
    narrow = build_venue_filter(VenueQuery(name="sol", minStars="2"))
    wider = build_venue_filter(VenueQuery(name="sol"))
    assert wider.items() <= narrow.items()


def test_query_is_not_mutated():
    """VenueQuery is immutable; building a filter leaves it unchanged."""
    query = VenueQuery(name="sol")
    build_venue_filter(query)
    assert query.name == "sol"
    with pytest.raises(Exception):
        query.name = "other"


@pytest.mark.parametrize("value", ["9" * 20, str(2**63), str(-(2**63) - 1)])
def test_min_stars_outside_int64_raises(value):
    """A threshold BSON cannot encode is rejected before it reaches the driver."""
    with pytest.raises(VenueValidationError, match="out of range"):
        build_venue_filter(VenueQuery(minStars=value))


def test_min_stars_int64_bounds_accepted():
    """The int64 limits themselves are valid thresholds."""
    assert build_venue_filter(VenueQuery(minStars=str(2**63 - 1))) == {"stars": {"$gte": 2**63 - 1}}
    assert build_venue_filter(VenueQuery(minStars=str(-(2**63)))) == {"stars": {"$gte": -(2**63)}}
