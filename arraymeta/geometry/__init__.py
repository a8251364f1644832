"""
Array Geometry.

Local antenna offsets -> ITRF positions -> zenith baselines.
"""

from arraymeta.geometry.geodetic import (
    WGS84_A,
    WGS84_B,
    sea_level_radius,
)
from arraymeta.geometry.itrf import (
    local_to_wgs84,
    wgs84_to_itrf,
    to_geocentric,
)
from arraymeta.geometry.baselines import (
    Baseline,
    BaselineSet,
    n_baselines,
    baseline_indices,
    zenith_uvws,
    enumerate_baselines,
)

__all__ = [
    # Ellipsoid
    "WGS84_A",
    "WGS84_B",
    "sea_level_radius",
    # ITRF
    "local_to_wgs84",
    "wgs84_to_itrf",
    "to_geocentric",
    # Baselines
    "Baseline",
    "BaselineSet",
    "n_baselines",
    "baseline_indices",
    "zenith_uvws",
    "enumerate_baselines",
]
