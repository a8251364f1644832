"""
WGS84 Ellipsoid Geometry.

Distance from the centre of the Earth to the reference ellipsoid.
"""

import numpy as np
from typing import Union

from arraymeta.errors import RangeError

# WGS84 parameters
WGS84_A = 6378137.0      # semi-major axis (equator), meters
WGS84_B = 6356752.3142   # semi-minor axis (poles), meters


def sea_level_radius(latitude: Union[float, np.ndarray]) -> Union[float, np.ndarray]:
    """
    Distance from the Earth's centre to WGS84 sea level.

    Formula:
        r = hypot(a * cos(φ), b * sin(φ))

    Parameters
    ----------
    latitude : float or ndarray
        Geodetic latitude in degrees, within [-90, 90]

    Returns
    -------
    radius : float or ndarray
        Sea level radius in meters

    Raises
    ------
    RangeError
        If any latitude is outside [-90, 90]
    """
    lat = np.asarray(latitude, dtype=np.float64)
    if np.any(np.abs(lat) > 90.0) or np.any(np.isnan(lat)):
        raise RangeError(f"Latitude out of range [-90, 90]: {latitude}")

    r_lat = np.radians(lat)
    radius = np.hypot(WGS84_A * np.cos(r_lat), WGS84_B * np.sin(r_lat))

    if radius.ndim == 0:
        return float(radius)
    return radius
