"""
Great-circle distance helpers.
"""
import math

EARTH_RADIUS_KM = 6371.0


def degrees_to_radians(degrees: float) -> float:
    return degrees * math.pi / 180


def haversine_km(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Compute distance in kilometers between two lat/lon points."""
    dlat = degrees_to_radians(lat2 - lat1)
    dlon = degrees_to_radians(lon2 - lon1)
    a = (
        math.sin(dlat / 2) ** 2
        + math.cos(degrees_to_radians(lat1))
        * math.cos(degrees_to_radians(lat2))
        * math.sin(dlon / 2) ** 2
    )
    # rounding can push a just outside [0, 1] for antipodal points
    a = min(1.0, max(0.0, a))
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_KM * c
