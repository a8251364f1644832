"""
MeasurementSet Creation.

Build an empty MeasurementSet describing a zenith-pointed array:
antenna offsets -> ITRF -> ANTENNA, plus the descriptive sub-tables.
The main table is left empty; its baseline layout is returned.
"""

import os
import shutil
import numpy as np

from arraymeta.config import ArrayConfig
from arraymeta.geometry.baselines import BaselineSet, enumerate_baselines
from arraymeta.geometry.itrf import to_geocentric
from arraymeta.io import subtables
from arraymeta.sky.epoch import Epoch
from arraymeta.sky.zenith import get_zenith


def create_ms(
    ms_path: str,
    config: ArrayConfig,
    offsets: np.ndarray,
    start: Epoch,
    duration: float = 0.0,
    track_zenith: bool = False,
    overwrite: bool = False,
    verbose: bool = False,
) -> BaselineSet:
    """
    Create a MeasurementSet with all metadata sub-tables filled.

    Parameters
    ----------
    ms_path : str
        Output MeasurementSet path
    config : ArrayConfig
        Array reference and identity strings
    offsets : ndarray (n_ant, 3)
        East, North, Up antenna offsets in meters
    start : Epoch
        Observation start
    duration : float
        Observation length in seconds
    track_zenith : bool
        If True, FIELD/POINTING/SOURCE hold the J2000 zenith at ``start``;
        otherwise the AZEL zenith
    overwrite : bool
        Replace an existing MS
    verbose : bool
        Print progress

    Returns
    -------
    baselines : BaselineSet
        Baseline layout of the main table
    """
    from casacore.tables import default_ms, table

    if os.path.exists(ms_path) and not overwrite:
        raise FileExistsError(f"MS already exists: {ms_path}")

    positions = to_geocentric(offsets, config.reference)
    baselines = enumerate_baselines(positions)
    n_ant = len(positions)

    if verbose:
        print(f"[ARRAYMETA] {n_ant} antennas, {len(baselines)} baselines")

    direction = None
    if track_zenith:
        direction = get_zenith(config.reference, start)
        if verbose:
            print(f"[ARRAYMETA] Zenith (J2000): "
                  f"RA={np.degrees(direction.longitude):.4f}°, "
                  f"Dec={np.degrees(direction.latitude):.4f}°")

    finish_time = start.seconds + duration

    # only replace an existing MS once the geometry is known
    if os.path.exists(ms_path):
        shutil.rmtree(ms_path)

    with default_ms(ms_path) as ms:
        subtables.add_source_table(ms)

    def _sub(name):
        return table(f"{ms_path}/{name}", readonly=False, ack=False)

    with _sub("ANTENNA") as tb:
        subtables.fill_antenna_table(tb, positions, config)
    with _sub("FEED") as tb:
        subtables.fill_feed_table(tb, n_ant)
    with _sub("FIELD") as tb:
        subtables.fill_field_table(tb, config.field_name, direction)
    with _sub("OBSERVATION") as tb:
        subtables.fill_observation_table(tb, start.seconds, finish_time, config)
    with _sub("POINTING") as tb:
        subtables.fill_pointing_table(tb, n_ant, start.seconds, direction)
    with _sub("POLARIZATION") as tb:
        subtables.fill_polarization_table(tb)
    with _sub("PROCESSOR") as tb:
        subtables.fill_processor_table(tb, config)
    with _sub("SOURCE") as tb:
        subtables.fill_source_table(
            tb, start.seconds, finish_time, config.field_name, direction
        )

    if config.spectral is not None:
        spw = config.spectral
        with _sub("SPECTRAL_WINDOW") as tb:
            spw_id = subtables.fill_spectral_window_table(
                tb, spw.n_chan, spw.center_freq, spw.bandwidth
            )
        with _sub("DATA_DESCRIPTION") as tb:
            row = tb.nrows()
            tb.addrows(1)
            tb.putcell("SPECTRAL_WINDOW_ID", row, spw_id)
            tb.putcell("POLARIZATION_ID", row, 0)

    if verbose:
        print(f"[ARRAYMETA] Wrote {ms_path}")

    return baselines
