from decimal import Decimal, ROUND_HALF_UP
from math import radians, sin, cos, atan2, sqrt
from typing import Any, Dict, Iterable, List, Mapping


"""Distance utilities.

Provides the Haversine great-circle distance and the ranking used by the
school listing. Exported helpers:
- haversine_distance: Haversine in kilometers (atan2 form, stable at antipodes)
- round_km: 3-decimal rounding, half-up on the exact float value
- rank_by_distance: annotate schools with distance_km and sort ascending

- distance
"""

EARTH_RADIUS_KM = 6371.0

_KM_QUANTUM = Decimal("0.001")


def haversine_distance(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Compute Haversine distance (in kilometers) between two WGS84 coordinates. - haversine

    All inputs are decimal degrees.
    """
    dlat = radians(lat2 - lat1)
    dlon = radians(lon2 - lon1)
    a = sin(dlat / 2) ** 2 + cos(radians(lat1)) * cos(radians(lat2)) * sin(dlon / 2) ** 2
    # float drift can push a just past 1 for antipodal points
    a = min(1.0, max(0.0, a))
    c = 2 * atan2(sqrt(a), sqrt(1 - a))
    return EARTH_RADIUS_KM * c


def round_km(value: float) -> float:
    """Round a distance to 3 decimal places. - round_km

    Ties round away from zero (ROUND_HALF_UP) and are decided on the exact
    binary value of the float, so 0.0625 -> 0.063. This matches JavaScript's
    toFixed(3).
    """
    return float(Decimal(value).quantize(_KM_QUANTUM, rounding=ROUND_HALF_UP))


def rank_by_distance(latitude: float, longitude: float, schools: Iterable[Mapping[str, Any]]) -> List[Dict[str, Any]]:
    """Return schools annotated with distance_km, nearest first. - rank_by_distance

    The sort is stable on the rounded distance: schools at equal distance keep
    the order in which they were given.
    """
    results: List[Dict[str, Any]] = []
    for school in schools:
        distance = haversine_distance(latitude, longitude, school["latitude"], school["longitude"])
        results.append(
            {
                "id": school["id"],
                "name": school["name"],
                "address": school["address"],
                "latitude": school["latitude"],
                "longitude": school["longitude"],
                "distance_km": round_km(distance),
            }
        )

    # sort by distance asc
    results.sort(key=lambda r: r["distance_km"])
    return results
