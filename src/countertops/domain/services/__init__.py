"""Domain services: preprocessing, orientation, free-space discovery."""

from .free_space import GridScanFreeSpaceFinder
from .inventory import InventorySummary, summarize_countertops
from .orientation import find_unplaceable, fits_slab, orient_pieces, should_rotate
from .preprocessor import PreprocessResult, preprocess

__all__ = [
    "GridScanFreeSpaceFinder",
    "InventorySummary",
    "PreprocessResult",
    "find_unplaceable",
    "fits_slab",
    "orient_pieces",
    "preprocess",
    "should_rotate",
    "summarize_countertops",
]
