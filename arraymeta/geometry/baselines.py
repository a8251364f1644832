"""
Zenith Baselines.

Baselines of a non-tracking, zenith-pointed array. A single static
snapshot: no Earth rotation, no time dependence.

Ordering (relied on by the MS writers):
    for i in 0..n_ant-1:
        for j in i..n_ant-1:
            baseline (i, j) = position[i] - position[j]

Autocorrelations (i, i) are included and have a zero vector.
"""

import numpy as np
from dataclasses import dataclass
from typing import Iterator, NamedTuple, Tuple

from arraymeta.errors import RangeError, ShapeError


class Baseline(NamedTuple):
    """Single antenna pair and its vector."""
    antenna1: int
    antenna2: int
    vector: np.ndarray               # (3,) meters


def n_baselines(n_ant: int) -> int:
    """Number of baselines including autocorrelations."""
    if n_ant < 0:
        raise RangeError(f"Antenna count must be >= 0, got {n_ant}")
    return n_ant * (n_ant + 1) // 2


def baseline_indices(n_ant: int) -> Tuple[np.ndarray, np.ndarray]:
    """
    Antenna index pairs in baseline order.

    Returns
    -------
    antenna1, antenna2 : ndarray (n_bl,) int32
    """
    n_bl = n_baselines(n_ant)
    antenna1 = np.zeros(n_bl, dtype=np.int32)
    antenna2 = np.zeros(n_bl, dtype=np.int32)

    c = 0
    for i in range(n_ant):
        for j in range(i, n_ant):
            antenna1[c] = i
            antenna2[c] = j
            c += 1

    return antenna1, antenna2


def _check_positions(positions) -> np.ndarray:
    positions = np.asarray(positions, dtype=np.float64)
    if positions.ndim == 1 and positions.size == 0:
        return positions.reshape(0, 3)
    if positions.ndim != 2 or positions.shape[1] != 3:
        raise ShapeError(
            f"Positions must have shape (n_ant, 3), got {positions.shape}"
        )
    return positions


def zenith_uvws(positions) -> np.ndarray:
    """
    Baseline vectors of every antenna pair, autocorrelations included.

    Parameters
    ----------
    positions : array-like (n_ant, 3)
        Antenna positions (ITRF, meters)

    Returns
    -------
    uvw : ndarray (n_bl, 3)
        position[antenna1] - position[antenna2]
    """
    positions = _check_positions(positions)
    antenna1, antenna2 = baseline_indices(positions.shape[0])
    return positions[antenna1] - positions[antenna2]


@dataclass
class BaselineSet:
    """All baselines of an array snapshot."""
    antenna1: np.ndarray             # (n_bl,)
    antenna2: np.ndarray             # (n_bl,)
    uvw: np.ndarray                  # (n_bl, 3)
    n_ant: int

    def __len__(self) -> int:
        return len(self.antenna1)

    def __getitem__(self, index: int) -> Baseline:
        return Baseline(
            int(self.antenna1[index]),
            int(self.antenna2[index]),
            self.uvw[index],
        )

    def __iter__(self) -> Iterator[Baseline]:
        for index in range(len(self)):
            yield self[index]

    def index_of(self, ant_a: int, ant_b: int) -> int:
        """
        Baseline index of an antenna pair (either order).

        Row i starts after the i previous rows of n_ant, n_ant-1, ...
        entries, hence i*n_ant - i*(i-1)/2.
        """
        i, j = min(ant_a, ant_b), max(ant_a, ant_b)
        if i < 0 or j >= self.n_ant:
            raise RangeError(
                f"Antenna pair ({ant_a}, {ant_b}) outside 0..{self.n_ant - 1}"
            )
        return i * self.n_ant - i * (i - 1) // 2 + (j - i)


def enumerate_baselines(positions) -> BaselineSet:
    """
    Enumerate all antenna pairs and their baseline vectors.

    Parameters
    ----------
    positions : array-like (n_ant, 3)
        Antenna positions (ITRF, meters)

    Returns
    -------
    baselines : BaselineSet
        n_ant * (n_ant + 1) / 2 baselines in pair order
    """
    positions = _check_positions(positions)
    n_ant = positions.shape[0]
    antenna1, antenna2 = baseline_indices(n_ant)
    uvw = positions[antenna1] - positions[antenna2]

    return BaselineSet(antenna1=antenna1, antenna2=antenna2, uvw=uvw, n_ant=n_ant)
