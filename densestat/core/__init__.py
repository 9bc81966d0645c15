"""
Core: плотная матрица, теги скалярных типов и таксономия ошибок.

Не зависит от stats/toolkit; используется всеми остальными модулями.
"""

from densestat.core.dtypes import ScalarType, TypeTag
from densestat.core.matrix import Matrix
from densestat.core.status import DataError, Result, Status

__all__ = [
    # Errors
    "DataError",
    "Result",
    "Status",
    # Types
    "ScalarType",
    "TypeTag",
    # Matrix
    "Matrix",
]
