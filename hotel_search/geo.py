"""Great-circle distance between two coordinates."""

import math
from enum import Enum
from typing import Union


class DistanceUnit(str, Enum):
    KILOMETERS = "kilometers"
    MILES = "miles"


# statute miles per degree of arc (60 nautical miles * 1.1515)
MILES_PER_DEGREE = 60 * 1.1515
KM_PER_MILE = 1.609344


def distance(
    lat1: float,
    lon1: float,
    lat2: float,
    lon2: float,
    unit: Union[DistanceUnit, str] = DistanceUnit.MILES,
) -> float:
    """Spherical law of cosines distance, rounded to 2 decimals.

    Every coordinate is taken as its absolute value first, so hemisphere
    signs are discarded: (41, -8) and (41, 8) are the same point here.
    Results for coordinates outside +-90 / +-180 are not meaningful.
    Any unit other than kilometers (case-insensitive) gives miles.
    """
    lat1, lon1, lat2, lon2 = abs(lat1), abs(lon1), abs(lat2), abs(lon2)

    theta = lon1 - lon2
    cos_d = (
        math.sin(math.radians(lat1)) * math.sin(math.radians(lat2))
        + math.cos(math.radians(lat1))
        * math.cos(math.radians(lat2))
        * math.cos(math.radians(theta))
    )
    # float noise can push identical points just past 1.0
    cos_d = min(1.0, max(-1.0, cos_d))

    miles = math.degrees(math.acos(cos_d)) * MILES_PER_DEGREE

    if str(getattr(unit, "value", unit)).strip().lower() == DistanceUnit.KILOMETERS.value:
        return round(miles * KM_PER_MILE, 2)
    return round(miles, 2)


def distance_km(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    return distance(lat1, lon1, lat2, lon2, DistanceUnit.KILOMETERS)
