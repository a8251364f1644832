"""
HDF5 Calibration Transport Files.

Packed gains and flags in HDF5 format.

File structure:
    transport.h5/
        {name}/                 # default "gain"
            gain                # (n,) complex64, row-major over shape
            flag                # (n,) uint8, 1 = flagged
            shape               # (ndim,) int64 - (n_ant, cell shape...)
            attrs:
                source          # originating cal table path
                created         # ISO timestamp
"""

import numpy as np
import h5py
from datetime import datetime
from typing import Any, Dict, Sequence

from arraymeta.errors import ShapeError
from arraymeta.io.flags import unpack_flags


def save_cal_transport(
    filepath: str,
    gain: np.ndarray,
    flag: np.ndarray,
    shape: Sequence[int],
    name: str = "gain",
    source: str = "",
    overwrite: bool = False,
) -> None:
    """
    Save packed gains and flags to an HDF5 file.

    Parameters
    ----------
    filepath : str
        Path to HDF5 file (appended to if it exists)
    gain : ndarray (n,) complex
    flag : ndarray (n,) uint8
    shape : sequence of int
        Logical shape, prod(shape) == n
    name : str
        Group name
    source : str
        Originating calibration table
    overwrite : bool
        If True, replace an existing group of the same name
    """
    gain = np.asarray(gain, dtype=np.complex64).reshape(-1)
    flag = np.asarray(flag, dtype=np.uint8).reshape(-1)
    shape = np.asarray(shape, dtype=np.int64)

    n = int(np.prod(shape))
    if gain.size != n or flag.size != n:
        raise ShapeError(
            f"Transport buffers do not match shape {tuple(shape)}: "
            f"{gain.size} gains, {flag.size} flags"
        )

    with h5py.File(filepath, "a") as f:
        if name in f:
            if overwrite:
                del f[name]
            else:
                raise ValueError(
                    f"Group '{name}' already exists. Use overwrite=True to replace."
                )

        grp = f.create_group(name)
        grp.create_dataset("gain", data=gain, compression="gzip")
        grp.create_dataset("flag", data=flag, compression="gzip")
        grp.create_dataset("shape", data=shape)
        grp.attrs["source"] = source
        grp.attrs["created"] = datetime.now().isoformat()


def load_cal_transport(filepath: str, name: str = "gain") -> Dict[str, Any]:
    """
    Load packed gains and flags from an HDF5 file.

    Returns
    -------
    data : dict
        gain : ndarray (n,) complex64
        flag : ndarray (n,) uint8
        shape : tuple
        flags : ndarray of bool, reshaped to ``shape``
        gains : ndarray complex, reshaped to ``shape``
        source, created : str
    """
    with h5py.File(filepath, "r") as f:
        if name not in f:
            raise KeyError(f"Group '{name}' not found in {filepath}")

        grp = f[name]
        gain = grp["gain"][...]
        flag = grp["flag"][...]
        shape = tuple(int(s) for s in grp["shape"][...])
        source = grp.attrs.get("source", "")
        created = grp.attrs.get("created", "")

    return {
        "gain": gain,
        "flag": flag,
        "shape": shape,
        "gains": gain.reshape(shape),
        "flags": unpack_flags(flag, shape),
        "source": source,
        "created": created,
    }
