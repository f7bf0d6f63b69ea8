import math

from app.core.errors import InputError
from app.services.reference import DISTRICTS_BY_STATE
from app.utils import round_half_up

EARTH_RADIUS_KM = 6371
HIGH_CONFIDENCE_KM = 50
MEDIUM_CONFIDENCE_KM = 100
UNKNOWN = "UNKNOWN"


def haversine_km(lat1, lon1, lat2, lon2):
    """Great-circle distance in kilometres."""
    d_lat = math.radians(lat2 - lat1)
    d_lon = math.radians(lon2 - lon1)
    a = (math.sin(d_lat / 2) ** 2
         + math.cos(math.radians(lat1)) * math.cos(math.radians(lat2)) * math.sin(d_lon / 2) ** 2)
    a = min(a, 1.0)
    return EARTH_RADIUS_KM * 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))


def confidence_for(distance_km):
    if distance_km < HIGH_CONFIDENCE_KM:
        return "high"
    if distance_km < MEDIUM_CONFIDENCE_KM:
        return "medium"
    return "low"


def validate_coordinates(latitude, longitude):
    if latitude is None or longitude is None:
        raise InputError("Latitude and longitude are required")
    try:
        latitude, longitude = float(latitude), float(longitude)
    except (TypeError, ValueError):
        raise InputError("Latitude and longitude must be numbers") from None
    if math.isnan(latitude) or not -90 <= latitude <= 90:
        raise InputError("Latitude must be between -90 and 90")
    if math.isnan(longitude) or not -180 <= longitude <= 180:
        raise InputError("Longitude must be between -180 and 180")
    return latitude, longitude


def locate(latitude, longitude, table=None):
    """Nearest known district to a coordinate, across all supported states.

    Exact ties keep the first district seen. With an empty table the result is
    UNKNOWN with no distance.
    """
    latitude, longitude = validate_coordinates(latitude, longitude)
    table = DISTRICTS_BY_STATE if table is None else table

    nearest_district, nearest_state, min_distance = None, None, math.inf
    for state, districts in table.items():
        for district, (lat, lng) in districts.items():
            distance = haversine_km(latitude, longitude, lat, lng)
            if distance < min_distance:
                nearest_district, nearest_state, min_distance = district, state, distance

    if nearest_district is None:
        return {"district": UNKNOWN, "state": UNKNOWN, "confidence": "low", "distance_km": None}

    return {
        "district": nearest_district,
        "state": nearest_state,
        "confidence": confidence_for(min_distance),
        "distance_km": round_half_up(min_distance, 1),
    }
