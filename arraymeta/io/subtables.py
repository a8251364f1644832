"""
MeasurementSet Sub-table Writers.

Fill the ANTENNA, FEED, FIELD, OBSERVATION, POINTING, POLARIZATION,
PROCESSOR, SPECTRAL_WINDOW and SOURCE sub-tables of a zenith-pointed
array.

Every writer takes an open, writable casacore table owned by the caller.
Directions default to the AZEL zenith; when a Direction is given the
column reference frame is set to its frame.
"""

import numpy as np
from typing import Optional

from arraymeta.config import ArrayConfig
from arraymeta.errors import RangeError, ShapeError
from arraymeta.sky.zenith import Direction

# casacore Stokes codes
STOKES_XX = 9
STOKES_XY = 10
STOKES_YX = 11
STOKES_YY = 12

# MFrequency::LSRK
MEAS_FREQ_REF = 1

# "forever"
INTERVAL_INF = 1e30


def _direction_or_zenith(direction: Optional[Direction]) -> Direction:
    return Direction.zenith_azel() if direction is None else direction


def set_direction_ref(tb, column: str, frame: str) -> None:
    """Set the MEASINFO reference frame of a direction column."""
    measinfo = dict(tb.getcolkeyword(column, "MEASINFO"))
    measinfo["Ref"] = frame
    tb.putcolkeyword(column, "MEASINFO", measinfo)


def fill_antenna_table(tb, positions: np.ndarray, config: ArrayConfig) -> int:
    """
    Add one ANTENNA row per position.

    Parameters
    ----------
    tb : casacore.tables.table
        ANTENNA sub-table, writable
    positions : ndarray (n_ant, 3)
        ITRF positions in meters
    config : ArrayConfig
        Naming and antenna properties

    Returns
    -------
    n_ant : int
    """
    positions = np.asarray(positions, dtype=np.float64)
    if positions.ndim != 2 or positions.shape[1] != 3:
        raise ShapeError(f"Positions must have shape (n_ant, 3), got {positions.shape}")

    n_ant = positions.shape[0]
    start = tb.nrows()
    tb.addrows(n_ant)

    for ant in range(n_ant):
        row = start + ant
        tb.putcell("NAME", row, config.antenna_name(ant))
        tb.putcell("STATION", row, config.station_name)
        tb.putcell("TYPE", row, config.antenna_type)
        tb.putcell("MOUNT", row, config.antenna_mount)
        tb.putcell("OFFSET", row, np.zeros(3))
        tb.putcell("DISH_DIAMETER", row, config.dish_diameter)

    tb.putcol("POSITION", positions, startrow=start, nrow=n_ant)

    return n_ant


def fill_feed_table(tb, n_ant: int) -> int:
    """Add one dual-linear (X, Y) FEED row per antenna."""
    start = tb.nrows()
    tb.addrows(n_ant)

    pol_response = np.eye(2, dtype=np.complex64)

    for ant in range(n_ant):
        row = start + ant
        tb.putcell("POSITION", row, np.zeros(3))
        tb.putcell("BEAM_OFFSET", row, np.zeros((2, 2)))
        tb.putcell("POLARIZATION_TYPE", row, np.array(["X", "Y"]))
        tb.putcell("POL_RESPONSE", row, pol_response)
        tb.putcell("RECEPTOR_ANGLE", row, np.zeros(2))
        tb.putcell("ANTENNA_ID", row, ant)
        tb.putcell("BEAM_ID", row, -1)
        tb.putcell("FEED_ID", row, 0)
        tb.putcell("INTERVAL", row, INTERVAL_INF)
        tb.putcell("NUM_RECEPTORS", row, 2)
        tb.putcell("SPECTRAL_WINDOW_ID", row, -1)
        tb.putcell("TIME", row, 0.0)

    return n_ant


def add_field(tb, name: str, direction: Optional[Direction] = None) -> int:
    """
    Append a FIELD row.

    Returns
    -------
    row : int
        Index of the new row
    """
    direction = _direction_or_zenith(direction)
    dir_cell = direction.values.reshape(1, 2)

    for column in ("DELAY_DIR", "PHASE_DIR", "REFERENCE_DIR"):
        set_direction_ref(tb, column, direction.frame)

    row = tb.nrows()
    tb.addrows(1)
    tb.putcell("NAME", row, name)
    tb.putcell("NUM_POLY", row, 0)
    tb.putcell("DELAY_DIR", row, dir_cell)
    tb.putcell("PHASE_DIR", row, dir_cell)
    tb.putcell("REFERENCE_DIR", row, dir_cell)
    tb.putcell("SOURCE_ID", row, 0)

    return row


def fill_field_table(tb, name: str, direction: Optional[Direction] = None) -> int:
    """Write the first FIELD row. The table must be empty."""
    if tb.nrows() != 0:
        raise ValueError(f"FIELD table already has {tb.nrows()} rows")
    return add_field(tb, name, direction)


def fill_observation_table(tb, start_time: float, finish_time: float, config: ArrayConfig) -> int:
    """Write the single OBSERVATION row (times in MJD seconds)."""
    tb.addrows(1)
    tb.putcell("TIME_RANGE", 0, np.array([start_time, finish_time]))
    tb.putcell("OBSERVER", 0, config.observer)
    tb.putcell("PROJECT", 0, config.project)
    tb.putcell("TELESCOPE_NAME", 0, config.telescope_name)
    return 0


def update_observation_table(tb, start_time: float, finish_time: float) -> int:
    tb.putcell("TIME_RANGE", 0, np.array([start_time, finish_time]))
    return 0


def fill_pointing_table(
    tb,
    n_ant: int,
    time: float,
    direction: Optional[Direction] = None,
) -> int:
    """Add one non-tracking POINTING row per antenna."""
    direction = _direction_or_zenith(direction)
    dir_cell = direction.values.reshape(1, 2)

    for column in ("DIRECTION", "TARGET"):
        set_direction_ref(tb, column, direction.frame)

    start = tb.nrows()
    tb.addrows(n_ant)

    for ant in range(n_ant):
        row = start + ant
        tb.putcell("DIRECTION", row, dir_cell)
        tb.putcell("TARGET", row, dir_cell)
        tb.putcell("ANTENNA_ID", row, ant)
        tb.putcell("INTERVAL", row, INTERVAL_INF)
        tb.putcell("NUM_POLY", row, 0)
        tb.putcell("TIME", row, 0.0)
        tb.putcell("TIME_ORIGIN", row, time)
        tb.putcell("TRACKING", row, False)

    return n_ant


def fill_polarization_table(tb) -> int:
    """Write the XX, XY, YX, YY POLARIZATION row."""
    tb.addrows(1)
    tb.putcell("NUM_CORR", 0, 4)
    tb.putcell("CORR_TYPE", 0, np.array([STOKES_XX, STOKES_XY, STOKES_YX, STOKES_YY], dtype=np.int32))

    # (n_corr, 2) receptor pairs
    corr_product = np.array([[0, 0], [0, 1], [1, 0], [1, 1]], dtype=np.int32)
    tb.putcell("CORR_PRODUCT", 0, corr_product)

    return 0


def fill_processor_table(tb, config: ArrayConfig) -> int:
    tb.addrows(1)
    tb.putcell("TYPE", 0, "CORRELATOR")
    tb.putcell("SUB_TYPE", 0, config.correlator_name)
    return 0


def channel_frequencies(n_chan: int, center_freq: float, bandwidth: float) -> np.ndarray:
    """
    Channel centre frequencies of a window.

    Channel i sits at ref + (i + 0.5) * bw / n_chan with ref = centre - bw/2.
    """
    if n_chan <= 0:
        raise RangeError(f"Channel count must be > 0, got {n_chan}")
    ref_freq = center_freq - bandwidth / 2
    chan_bw = bandwidth / n_chan
    return ref_freq + (np.arange(n_chan) + 0.5) * chan_bw


def fill_spectral_window_table(tb, n_chan: int, center_freq: float, bandwidth: float) -> int:
    """
    Append a SPECTRAL_WINDOW row.

    Returns
    -------
    row : int
        Index of the new window
    """
    chan_freq = channel_frequencies(n_chan, center_freq, bandwidth)
    chan_bw = np.full(n_chan, bandwidth / n_chan)

    row = tb.nrows()
    tb.addrows(1)
    tb.putcell("MEAS_FREQ_REF", row, MEAS_FREQ_REF)
    tb.putcell("CHAN_FREQ", row, chan_freq)
    tb.putcell("REF_FREQUENCY", row, center_freq - bandwidth / 2)
    tb.putcell("CHAN_WIDTH", row, chan_bw)
    tb.putcell("EFFECTIVE_BW", row, chan_bw)
    tb.putcell("RESOLUTION", row, chan_bw)
    tb.putcell("FREQ_GROUP_NAME", row, "Group 1")
    tb.putcell("NAME", row, f"{center_freq:g}")
    tb.putcell("NET_SIDEBAND", row, 1)
    tb.putcell("NUM_CHAN", row, n_chan)
    tb.putcell("TOTAL_BANDWIDTH", row, bandwidth)

    return row


def add_source_table(ms) -> str:
    """
    Create the optional SOURCE sub-table and link it from the main table.

    TRANSITION, REST_FREQUENCY and SYSVEL are added to the required
    columns.

    Parameters
    ----------
    ms : casacore.tables.table
        Main table of the MeasurementSet, writable

    Returns
    -------
    path : str
        Path of the new SOURCE table
    """
    from casacore.tables import (
        default_ms_subtable,
        makearrcoldesc,
        maketabdesc,
        required_ms_desc,
    )

    desc = required_ms_desc("SOURCE")
    extra = maketabdesc([
        makearrcoldesc("TRANSITION", "", ndim=1),
        makearrcoldesc("REST_FREQUENCY", 0.0, ndim=1),
        makearrcoldesc("SYSVEL", 0.0, ndim=1),
    ])
    desc.update({k: v for k, v in extra.items() if not k.startswith("_")})

    path = f"{ms.name()}/SOURCE"
    source = default_ms_subtable("SOURCE", path, desc)
    source.close()
    ms.putkeyword("SOURCE", f"Table: {path}")

    return path


def fill_source_table(
    tb,
    start_time: float,
    finish_time: float,
    name: str,
    direction: Optional[Direction] = None,
) -> int:
    """Write the single SOURCE row covering [start_time, finish_time]."""
    direction = _direction_or_zenith(direction)
    set_direction_ref(tb, "DIRECTION", direction.frame)

    tb.addrows(1)
    tb.putcell("SOURCE_ID", 0, 0)
    tb.putcell("TIME", 0, (finish_time + start_time) / 2)
    tb.putcell("INTERVAL", 0, finish_time - start_time)
    tb.putcell("SPECTRAL_WINDOW_ID", 0, -1)
    tb.putcell("NUM_LINES", 0, 0)
    tb.putcell("NAME", 0, name)
    tb.putcell("CALIBRATION_GROUP", 0, 0)
    tb.putcell("CODE", 0, "")
    tb.putcell("DIRECTION", 0, direction.values)
    tb.putcell("PROPER_MOTION", 0, np.zeros(2))

    return 0


def update_source_table(tb, start_time: float, finish_time: float) -> int:
    tb.putcell("TIME", 0, (finish_time + start_time) / 2)
    tb.putcell("INTERVAL", 0, finish_time - start_time)
    return 0
