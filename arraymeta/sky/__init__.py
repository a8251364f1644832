"""
Epochs and sky directions.
"""

from arraymeta.sky.epoch import Epoch, str_to_epoch
from arraymeta.sky.zenith import DIRECTION_FRAMES, Direction, get_zenith

__all__ = [
    "Epoch",
    "str_to_epoch",
    "DIRECTION_FRAMES",
    "Direction",
    "get_zenith",
]
