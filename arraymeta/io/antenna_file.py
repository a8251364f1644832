"""
Antenna Offset Files.

Plain text, three numbers per antenna (East, North, Up in meters),
whitespace separated. Lines starting with '#' are ignored.
"""

import numpy as np
from typing import Optional

from arraymeta.errors import ParseError, RangeError, ShapeError


def parse_antenna_offsets(text: str, n_ant: Optional[int] = None) -> np.ndarray:
    """
    Parse antenna offsets from text.

    Parameters
    ----------
    text : str
        File contents
    n_ant : int, optional
        Number of antennas to read. Extra values are ignored.
        Default: every complete triple in the text.

    Returns
    -------
    offsets : ndarray (n_ant, 3)
    """
    tokens = []
    for line in text.splitlines():
        line = line.split("#", 1)[0]
        tokens.extend(line.split())

    try:
        values = np.array([float(tok) for tok in tokens], dtype=np.float64)
    except ValueError as err:
        raise ParseError(f"Non-numeric antenna offset: {err}") from err

    if n_ant is not None and n_ant < 0:
        raise RangeError(f"Antenna count must be >= 0, got {n_ant}")

    if n_ant is None:
        if len(values) % 3 != 0:
            raise ShapeError(
                f"Antenna offsets must be triples, got {len(values)} values"
            )
        n_ant = len(values) // 3
    elif len(values) < 3 * n_ant:
        raise ShapeError(
            f"Expected {n_ant} antennas, found only {len(values) // 3}"
        )

    return values[:3 * n_ant].reshape(n_ant, 3)


def read_antenna_offsets(filename: str, n_ant: Optional[int] = None) -> np.ndarray:
    """Read antenna offsets from a text file. See ``parse_antenna_offsets``."""
    with open(filename, "r") as f:
        return parse_antenna_offsets(f.read(), n_ant=n_ant)
