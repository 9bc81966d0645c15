"""
Tensor — редукции над плоскими буферами с тегом типа

- elements: число элементов тензора формы shape (произведение размерностей)
- minmax: минимум и максимум в представлении тега
- mean: среднее как double

Поддерживаются целые (включая size/hex/oct/bin) и вещественные теги;
bool и cstr не являются элементами тензора → UNSUPPORTED.
Broadcasting и арифметика тензоров не реализуются.
"""

import logging
import operator
from typing import Optional, Sequence, Union

from densestat.core.dtypes import ScalarType, TypeTag
from densestat.core.status import Result, Status

logger = logging.getLogger(__name__)


def _element_kind(dtype: TypeTag) -> Optional[ScalarType]:
    kind = ScalarType.resolve(dtype)
    if kind is None or not (kind.is_integer or kind.is_float):
        return None
    return kind


def elements(shape: Optional[Sequence[int]]) -> Result[int]:
    """
    Число элементов: произведение размерностей.

    Пустая форма (ранг 0) — скаляр, 1 элемент; нулевая размерность даёт 0.

    Examples:
        >>> elements([2, 3, 4]).value
        24
        >>> elements([]).value
        1
    """
    if shape is None:
        return Result.failure(Status.INVALID, "shape is None")

    total = 1
    for axis, dim in enumerate(shape):
        if isinstance(dim, bool):
            return Result.failure(Status.INVALID, f"axis {axis}: {dim!r} is not a dimension")
        try:
            size = operator.index(dim)
        except TypeError:
            return Result.failure(Status.INVALID, f"axis {axis}: {dim!r} is not a dimension")
        if size < 0:
            return Result.failure(Status.INVALID, f"axis {axis}: negative dimension {size}")
        total *= size
    return Result.success(total)


def minmax(
    values: Optional[Sequence], dtype: TypeTag
) -> Result[tuple[Union[int, float], Union[int, float]]]:
    """
    Минимум и максимум, приведённые к представлению тега (int для целых).

    Returns:
        Result с (min, max); INVALID (нет данных), UNSUPPORTED (тег)
    """
    if values is None or len(values) == 0:
        return Result.failure(Status.INVALID, "values are missing or empty")
    kind = _element_kind(dtype)
    if kind is None:
        logger.debug("unsupported tensor element tag %r", dtype)
        return Result.failure(Status.UNSUPPORTED, f"type tag {dtype!r}")

    # целые сравниваются без округления до double (u64 > 2**53)
    read = int if kind.is_integer else kind.read
    lo = hi = read(values[0])
    for v in values[1:]:
        x = read(v)
        if x < lo:
            lo = x
        if x > hi:
            hi = x
    return Result.success((kind.store(lo), kind.store(hi)))


def mean(values: Optional[Sequence], dtype: TypeTag) -> Result[float]:
    """
    Среднее: прямое суммирование в double / n.

    Examples:
        >>> mean([1, 2, 3, 4], "u8").value
        2.5
    """
    if values is None or len(values) == 0:
        return Result.failure(Status.INVALID, "values are missing or empty")
    kind = _element_kind(dtype)
    if kind is None:
        logger.debug("unsupported tensor element tag %r", dtype)
        return Result.failure(Status.UNSUPPORTED, f"type tag {dtype!r}")

    total = 0.0
    for v in values:
        total += kind.read(v)
    return Result.success(total / len(values))
