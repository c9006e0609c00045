"""Build the MongoDB find() predicate for GET /restaurants from optional query parameters."""
import math
import re
from typing import Any

from schemas.venues import VenueQuery
from utils.errors import VenueValidationError

NEAR_MAX_DISTANCE_M = 10000
_INT64_MIN = -(2**63)
_INT64_MAX = 2**63 - 1

# query parameter -> document field matched by case-insensitive substring
_SUBSTRING_FIELDS = (
    ("name", "name"),
    ("phone", "contact.phone"),
    ("email", "contact.email"),
    ("category", "categories"),
)


def _present(value: str | None) -> bool:
    return value is not None and value != ""


def _substring(value: str) -> dict[str, str]:
    """Case-insensitive literal substring match; regex metacharacters in value are escaped."""
    return {"$regex": re.escape(value), "$options": "i"}


def _parse_min_stars(value: str) -> int:
    """Parse minStars as a base-10 integer that fits a BSON int64."""
    try:
        threshold = int(value.strip(), 10)
    except ValueError:
        raise VenueValidationError(f"minStars must be an integer, got {value!r}") from None
    if not _INT64_MIN <= threshold <= _INT64_MAX:
        raise VenueValidationError(f"minStars is out of range, got {value!r}")
    return threshold


def _parse_coordinate(value: str | None, limit: float) -> float | None:
    """Return value as a finite float within [-limit, limit], or None if absent or invalid."""
    if not _present(value):
        return None
    try:
        number = float(value)
    except ValueError:
        return None
    if not math.isfinite(number) or abs(number) > limit:
        return None
    return number


def near_point(longitude: float, latitude: float, max_distance_m: int = NEAR_MAX_DISTANCE_M) -> dict[str, Any]:
    """$near condition on a GeoJSON point; MongoDB returns matches nearest first."""
    return {
        "$near": {
            "$geometry": {"type": "Point", "coordinates": [longitude, latitude]},
            "$maxDistance": max_distance_m,
        }
    }


def build_venue_filter(query: VenueQuery) -> dict[str, Any]:
    """
    Return one predicate ANDing the conditions of every present parameter ({} when none).

    longitude/latitude only apply together: if either is missing or not a valid coordinate,
    both are ignored. A minStars that is not an integer raises VenueValidationError.
    """
    conditions: list[tuple[str, Any]] = [
        (field, _substring(getattr(query, param)))
        for param, field in _SUBSTRING_FIELDS
        if _present(getattr(query, param))
    ]
    if _present(query.minStars):
        conditions.append(("stars", {"$gte": _parse_min_stars(query.minStars)}))

    longitude = _parse_coordinate(query.longitude, 180.0)
    latitude = _parse_coordinate(query.latitude, 90.0)
    if longitude is not None and latitude is not None:
        conditions.append(("contact.location", near_point(longitude, latitude)))

    return dict(conditions)
