"""
densestat — плотные матрицы, потоковая статистика и учебные численные утилиты.

Пакеты:
- core: Matrix, ScalarType, Status/Result/DataError
- stats: StreamingAccumulator, статистики векторов и матриц
- toolkit: series, transform, prob, plot, ml
"""

import logging as _logging

from densestat.core import DataError, Matrix, Result, ScalarType, Status
from densestat.stats import StreamingAccumulator

_logging.getLogger(__name__).addHandler(_logging.NullHandler())

__version__ = "0.1.0"

__all__ = [
    "DataError",
    "Matrix",
    "Result",
    "ScalarType",
    "Status",
    "StreamingAccumulator",
]
