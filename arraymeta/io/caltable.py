"""
Calibration Table Ingestion.

Read per-antenna complex gains and their flags from a CASA calibration
table and repack them for transport.

Expected table layout, one row per antenna:
    CPARAM      complex  (n_chan, n_pol) per row
    FLAG        bool     same shape as CPARAM
    ANTENNA1    int      row index == antenna index
"""

import numpy as np
from dataclasses import dataclass
from typing import List, Optional, Tuple

from arraymeta.errors import ShapeError, StructuralError
from arraymeta.io.flags import pack_flags

GAIN_COLUMN = "CPARAM"
FLAG_COLUMN = "FLAG"
ANTENNA_COLUMN = "ANTENNA1"


@dataclass
class CalibrationEntry:
    """One antenna's gains and flags (flag True = sample invalid)."""
    antenna: int
    gain: np.ndarray                 # complex, cell shape
    flag: np.ndarray                 # bool, cell shape

    @property
    def n_flagged(self) -> int:
        return int(self.flag.sum())


def _check_uniform_shape(tb, column: str) -> None:
    """All cells of an array column must share the row-0 shape."""
    shapes = tb.getcolshapestring(column)
    if len(set(shapes)) > 1:
        raise ShapeError(
            f"Column {column} has non-uniform cell shapes: {sorted(set(shapes))}"
        )


def load_calibration(tb, n_ant: Optional[int] = None) -> List[CalibrationEntry]:
    """
    Read gains and flags from an open calibration table.

    The table is owned by the caller; it is neither opened nor closed here.

    Parameters
    ----------
    tb : casacore.tables.table
        Open calibration table
    n_ant : int, optional
        Expected number of antennas (rows)

    Returns
    -------
    entries : list of CalibrationEntry
        One per antenna, in antenna order

    Raises
    ------
    ShapeError
        Non-uniform cell shapes, or FLAG shape differs from CPARAM shape
    StructuralError
        Row count differs from ``n_ant``, or ANTENNA1 differs from the
        row index for any row
    """
    nrow = tb.nrows()

    if n_ant is not None and nrow != n_ant:
        raise StructuralError(
            f"Cal table has {nrow} rows, expected one per antenna ({n_ant})"
        )
    if nrow == 0:
        return []

    _check_uniform_shape(tb, GAIN_COLUMN)
    _check_uniform_shape(tb, FLAG_COLUMN)

    gain = np.asarray(tb.getcol(GAIN_COLUMN))
    flag = np.asarray(tb.getcol(FLAG_COLUMN), dtype=bool)
    if gain.shape != flag.shape:
        raise ShapeError(
            f"{FLAG_COLUMN} shape {flag.shape} does not match "
            f"{GAIN_COLUMN} shape {gain.shape}"
        )

    # row r must hold antenna r
    antenna1 = np.asarray(tb.getcol(ANTENNA_COLUMN))
    mismatch = np.flatnonzero(antenna1 != np.arange(nrow))
    if len(mismatch) > 0:
        row = int(mismatch[0])
        raise StructuralError(
            f"Cal table rows are not in antenna order: "
            f"row {row} has {ANTENNA_COLUMN}={int(antenna1[row])}"
        )

    return [
        CalibrationEntry(antenna=row, gain=gain[row], flag=flag[row])
        for row in range(nrow)
    ]


def pack_calibration(
    entries: List[CalibrationEntry],
) -> Tuple[np.ndarray, np.ndarray, Tuple[int, ...]]:
    """
    Flatten calibration entries into transport buffers.

    Returns
    -------
    gain : ndarray (n,) complex64
        Gains, row-major over (antenna, cell...)
    flag : ndarray (n,) uint8
        Flags in the same order, 1 = flagged
    shape : tuple
        (n_ant, cell shape...)
    """
    if not entries:
        return np.zeros(0, dtype=np.complex64), np.zeros(0, dtype=np.uint8), (0,)

    cell_shape = entries[0].gain.shape
    for entry in entries:
        if entry.gain.shape != cell_shape or entry.flag.shape != cell_shape:
            raise ShapeError(
                f"Antenna {entry.antenna} cell shape {entry.gain.shape}/"
                f"{entry.flag.shape} differs from {cell_shape}"
            )

    gains = np.stack([entry.gain for entry in entries]).astype(np.complex64)
    flags = np.stack([entry.flag for entry in entries])
    shape = gains.shape

    return gains.reshape(-1), pack_flags(flags), shape


def read_cal_table(
    cal_path: str,
    n_ant: Optional[int] = None,
    verbose: bool = False,
) -> Tuple[np.ndarray, np.ndarray, Tuple[int, ...]]:
    """
    Read a calibration table from disk into transport buffers.

    Parameters
    ----------
    cal_path : str
        Path to the CASA calibration table
    n_ant : int, optional
        Expected number of antennas
    verbose : bool
        Print a summary

    Returns
    -------
    gain, flag, shape
        See ``pack_calibration``
    """
    from casacore.tables import table

    with table(cal_path, ack=False) as tb:
        entries = load_calibration(tb, n_ant=n_ant)

    gain, flag, shape = pack_calibration(entries)

    if verbose:
        n_flagged = sum(entry.n_flagged for entry in entries)
        print(f"[ARRAYMETA] Cal table {cal_path}: {len(entries)} antennas, "
              f"cell shape {shape[1:]}")
        if flag.size > 0:
            print(f"[ARRAYMETA] Flagged: {n_flagged}/{flag.size} "
                  f"({100*n_flagged/flag.size:.1f}%)")

    return gain, flag, shape
