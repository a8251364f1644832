"""
I/O Module for arraymeta.

Handles:
- Antenna offset text files
- Calibration table ingestion and flag packing
- HDF5 transport files
- MeasurementSet sub-table writing
"""

from arraymeta.io.antenna_file import read_antenna_offsets, parse_antenna_offsets
from arraymeta.io.flags import (
    bool_array_to_char_vector,
    char_vector_to_bool_array,
    pack_flags,
    unpack_flags,
)
from arraymeta.io.caltable import (
    CalibrationEntry,
    load_calibration,
    pack_calibration,
    read_cal_table,
)
from arraymeta.io.transport import save_cal_transport, load_cal_transport
from arraymeta.io.ms_writer import create_ms

__all__ = [
    "read_antenna_offsets",
    "parse_antenna_offsets",
    # Flags
    "bool_array_to_char_vector",
    "char_vector_to_bool_array",
    "pack_flags",
    "unpack_flags",
    # Calibration
    "CalibrationEntry",
    "load_calibration",
    "pack_calibration",
    "read_cal_table",
    "save_cal_transport",
    "load_cal_transport",
    # MS
    "create_ms",
]
