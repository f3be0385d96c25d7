import logging

import numpy as np
import pytest

from planebridge.axes import ShapeVector
from planebridge.buffers import SampleType
from planebridge.storage import DenseArray, PlanarArray


@pytest.fixture
def stack_array() -> PlanarArray:
    """4x3 planes over C=5, Z=2 with each plane filled with its raster index."""
    arr = np.empty((2, 5, 3, 4), dtype=np.uint16)
    for z in range(2):
        for c in range(5):
            arr[z, c] = c + 5 * z
    return PlanarArray.from_ndarray(arr, axes="ZCYX")


@pytest.fixture
def flat_array() -> PlanarArray:
    return PlanarArray(ShapeVector((4, 3)), SampleType.FLOAT32)


@pytest.fixture
def dense_array() -> DenseArray:
    return DenseArray(np.zeros((5, 3, 4), dtype=np.uint8), axes="CYX")


class ListHandler(logging.Handler):
    def __init__(self) -> None:
        super().__init__(level=logging.DEBUG)
        self.records = []

    def emit(self, record: logging.LogRecord) -> None:
        self.records.append(record)


@pytest.fixture
def log_records():
    """Capture planebridge log records (the package logger does not propagate)."""
    from planebridge.logger import attach_handler, get_logger, set_level

    base = get_logger("planebridge")
    handler = ListHandler()
    old_level = base.level
    attach_handler(handler)
    base.setLevel(logging.DEBUG)
    yield handler.records
    base.removeHandler(handler)
    set_level(old_level)
