"""
Zenith Direction.

The zenith is trivially (az=0°, el=90°) in the AZEL frame. Expressing it
in J2000 needs sidereal time, precession and nutation at the observer,
all of which are left to the casacore measures server.
"""

import numpy as np
from dataclasses import dataclass
from typing import Sequence, Union

from arraymeta.config import ArrayReference
from arraymeta.errors import ConversionError, RangeError
from arraymeta.sky.epoch import Epoch

# Supported direction reference frames
DIRECTION_FRAMES = ("J2000", "B1950", "ICRS", "GALACTIC", "AZEL", "APP")


@dataclass(frozen=True)
class Direction:
    """Sky direction tagged with its reference frame."""
    longitude: float                 # radians (RA / azimuth / l)
    latitude: float                  # radians (Dec / elevation / b)
    frame: str

    def __post_init__(self):
        if self.frame not in DIRECTION_FRAMES:
            raise RangeError(
                f"Unknown direction frame '{self.frame}', "
                f"expected one of {DIRECTION_FRAMES}"
            )

    @classmethod
    def zenith_azel(cls) -> "Direction":
        """Local zenith in the horizon frame."""
        return cls(0.0, np.pi / 2, "AZEL")

    @property
    def values(self) -> np.ndarray:
        """(longitude, latitude) in radians."""
        return np.array([self.longitude, self.latitude])


def _check_location(location: Union[ArrayReference, Sequence[float]]) -> None:
    """An observer needs a defined local vertical."""
    if isinstance(location, ArrayReference):
        lat = float(location.latitude)
        if not abs(lat) <= 90.0:
            raise RangeError(f"Latitude out of range [-90, 90]: {lat}")
        return

    xyz = np.asarray(location, dtype=np.float64)
    if xyz.shape != (3,):
        raise ConversionError(f"ITRF location must be (x, y, z), got shape {xyz.shape}")
    if not np.all(np.isfinite(xyz)) or np.linalg.norm(xyz) == 0.0:
        raise ConversionError(f"ITRF location {tuple(xyz)} has no local vertical")


def _position_measure(dm, location: Union[ArrayReference, Sequence[float]]):
    if isinstance(location, ArrayReference):
        return dm.position(
            "WGS84",
            f"{float(location.longitude)!r}deg",
            f"{float(location.latitude)!r}deg",
            f"{float(location.altitude)!r}m",
        )
    x, y, z = (float(v) for v in location)
    return dm.position("ITRF", f"{x!r}m", f"{y!r}m", f"{z!r}m")


def get_zenith(
    location: Union[ArrayReference, Sequence[float]],
    epoch: Epoch,
    frame: str = "J2000",
) -> Direction:
    """
    Direction of the zenith at a location and time.

    Parameters
    ----------
    location : ArrayReference or (x, y, z)
        Geodetic array reference, or an ITRF position in meters
    epoch : Epoch
        Observation time
    frame : str
        Output frame (default J2000)

    Returns
    -------
    zenith : Direction
        Zenith expressed in ``frame``

    Raises
    ------
    ConversionError
        If the ITRF location is degenerate (origin or non-finite) or the
        measures server cannot resolve the conversion
    RangeError
        Unknown frame, or geodetic latitude outside [-90, 90]
    """
    if frame not in DIRECTION_FRAMES:
        raise RangeError(f"Unknown direction frame '{frame}'")
    _check_location(location)

    from casacore.measures import measures

    dm = measures()
    try:
        zenith = dm.direction("AZEL", "0deg", "90deg")
        dm.do_frame(_position_measure(dm, location))
        dm.do_frame(epoch.to_measure(dm))
        pointing = dm.measure(zenith, frame)
    except RuntimeError as err:
        raise ConversionError(f"AZEL -> {frame} zenith conversion failed: {err}") from err

    lon = pointing["m0"]["value"]
    lat = pointing["m1"]["value"]
    if not (np.isfinite(lon) and np.isfinite(lat)):
        raise ConversionError(f"AZEL -> {frame} zenith conversion gave ({lon}, {lat})")

    return Direction(float(lon), float(lat), frame)
