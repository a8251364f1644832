"""
Antenna Positions in ITRF.

Convert East-North-Up antenna offsets, measured from the array reference
point, to geocentric ITRF positions.

Offsets are first laid out at longitude 0, latitude 0 in an Earth-centred
frame (+X through lon 0 on the equator, +Y through lon 90E, +Z along the
spin axis), then rotated onto the array reference point.

The rotated vector is handed to casacore as a WGS84 position and converted
to ITRF by the measures server.
"""

import numpy as np
from typing import Callable, Optional
from scipy.spatial.transform import Rotation

from arraymeta.config import ArrayReference
from arraymeta.errors import ConversionError, ShapeError
from arraymeta.geometry.geodetic import sea_level_radius

# (lon rad, lat rad, height m) -> ITRF xyz (m)
Converter = Callable[[float, float, float], np.ndarray]


def _check_offsets(offsets) -> np.ndarray:
    offsets = np.asarray(offsets, dtype=np.float64)
    if offsets.ndim == 1 and offsets.size == 0:
        return offsets.reshape(0, 3)
    if offsets.ndim != 2 or offsets.shape[1] != 3:
        raise ShapeError(
            f"Antenna offsets must have shape (n_ant, 3), got {offsets.shape}"
        )
    return offsets


def array_rotation(reference: ArrayReference) -> Rotation:
    """
    Rotation carrying the (0°, 0°) local frame to the array position.

    Y by -latitude lifts the equatorial frame to the array latitude;
    Z by +longitude then swings it round to the array meridian.
    """
    r_lat = Rotation.from_euler("y", -np.radians(reference.latitude))
    r_lon = Rotation.from_euler("z", np.radians(reference.longitude))
    return r_lon * r_lat


def local_to_wgs84(offsets, reference: ArrayReference) -> np.ndarray:
    """
    Rotate antenna offsets to the array position.

    Parameters
    ----------
    offsets : array-like (n_ant, 3)
        East, North, Up offsets in meters
    reference : ArrayReference
        Array centre (degrees, degrees, meters)

    Returns
    -------
    wgs : ndarray (n_ant, 3)
        Longitude (rad), latitude (rad) and height above sea level (m)
        of each antenna, in input order
    """
    offsets = _check_offsets(offsets)
    sea_lev = sea_level_radius(reference.latitude)

    # (E, N, U) -> (X, Y, Z) at lon 0, lat 0
    local = np.empty_like(offsets)
    local[:, 0] = offsets[:, 2] + sea_lev + reference.altitude
    local[:, 1] = offsets[:, 0]
    local[:, 2] = offsets[:, 1]

    if len(local) == 0:
        return local

    rotated = array_rotation(reference).apply(local)

    length = np.linalg.norm(rotated, axis=1)
    longitude = np.arctan2(rotated[:, 1], rotated[:, 0])
    latitude = np.arcsin(rotated[:, 2] / length)

    # height above the reference sea level
    height = length - sea_lev

    return np.column_stack([longitude, latitude, height])


def wgs84_to_itrf(longitude: float, latitude: float, height: float) -> np.ndarray:
    """
    Convert a WGS84 position to ITRF Cartesian coordinates.

    Parameters
    ----------
    longitude, latitude : float
        Radians
    height : float
        Meters above the WGS84 ellipsoid

    Returns
    -------
    xyz : ndarray (3,)
        ITRF position in meters

    Raises
    ------
    ConversionError
        If the measures server cannot convert the position
    """
    from casacore.measures import measures

    dm = measures()
    try:
        pos = dm.position(
            "WGS84",
            f"{float(longitude)!r}rad",
            f"{float(latitude)!r}rad",
            f"{float(height)!r}m",
        )
        itrf = dm.measure(pos, "ITRF")
    except RuntimeError as err:
        raise ConversionError(f"WGS84 -> ITRF conversion failed: {err}") from err

    lon = itrf["m0"]["value"]
    lat = itrf["m1"]["value"]
    radius = itrf["m2"]["value"]

    xyz = radius * np.array([
        np.cos(lat) * np.cos(lon),
        np.cos(lat) * np.sin(lon),
        np.sin(lat),
    ])
    if not np.all(np.isfinite(xyz)):
        raise ConversionError(f"WGS84 -> ITRF conversion gave {xyz}")

    return xyz


def to_geocentric(
    offsets,
    reference: ArrayReference,
    converter: Optional[Converter] = None,
) -> np.ndarray:
    """
    Geocentric (ITRF) positions of antennas placed around the array centre.

    Parameters
    ----------
    offsets : array-like (n_ant, 3)
        East, North, Up offsets in meters from the array reference
    reference : ArrayReference
        Array longitude, latitude (degrees) and altitude (meters)
    converter : callable, optional
        (lon, lat, height) -> xyz. Defaults to casacore measures.

    Returns
    -------
    itrf : ndarray (n_ant, 3)
        Geocentric positions in meters, same order as ``offsets``
    """
    if converter is None:
        converter = wgs84_to_itrf

    wgs = local_to_wgs84(offsets, reference)
    itrf = np.zeros((len(wgs), 3), dtype=np.float64)

    for i, (lon, lat, height) in enumerate(wgs):
        itrf[i] = converter(lon, lat, height)

    return itrf
