"""
Flag Packing.

Boolean flag arrays <-> one byte per flag (true -> 1, false -> 0) for
transport. Both directions walk the array in C (row-major) order, which is
the casacore cell order as exposed by python-casacore, and both require the
byte buffer to be pre-sized to exactly the number of flags.
"""

import numpy as np

from arraymeta.errors import ShapeError


def bool_array_to_char_vector(bool_arr: np.ndarray, char_vec: np.ndarray) -> np.ndarray:
    """
    Pack a boolean array into a pre-sized byte buffer.

    Parameters
    ----------
    bool_arr : ndarray of bool
        Flags of any shape
    char_vec : ndarray (n,) uint8
        Output buffer, ``n == bool_arr.size``

    Returns
    -------
    char_vec : ndarray
        The filled buffer

    Raises
    ------
    ShapeError
        If the sizes differ
    """
    bool_arr = np.asarray(bool_arr)
    if bool_arr.size != char_vec.size:
        raise ShapeError(
            f"Flag buffer size mismatch: "
            f"{bool_arr.size} flags, buffer of {char_vec.size}"
        )
    char_vec.flat[:] = bool_arr.ravel().astype(np.uint8)
    return char_vec


def char_vector_to_bool_array(char_vec: np.ndarray, bool_arr: np.ndarray) -> np.ndarray:
    """
    Unpack a byte buffer into a pre-shaped boolean array.

    Any non-zero byte is a set flag.

    Raises
    ------
    ShapeError
        If the sizes differ
    """
    char_vec = np.asarray(char_vec)
    if bool_arr.size != char_vec.size:
        raise ShapeError(
            f"Flag buffer size mismatch: "
            f"buffer of {char_vec.size}, {bool_arr.size} flags"
        )
    bool_arr[...] = (char_vec.reshape(bool_arr.shape) != 0)
    return bool_arr


def pack_flags(bool_arr: np.ndarray) -> np.ndarray:
    """Allocate a correctly sized buffer and pack ``bool_arr`` into it."""
    bool_arr = np.asarray(bool_arr)
    return bool_array_to_char_vector(bool_arr, np.zeros(bool_arr.size, dtype=np.uint8))


def unpack_flags(char_vec: np.ndarray, shape) -> np.ndarray:
    """Allocate a boolean array of ``shape`` and unpack ``char_vec`` into it."""
    return char_vector_to_bool_array(char_vec, np.zeros(shape, dtype=bool))
