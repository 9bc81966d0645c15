"""
Vector Statistics — статистики над плоскими массивами double

Чистые функции над последовательностями float:
- mean: прямое суммирование слева направо / n
- variance: через свежий StreamingAccumulator (численная устойчивость)
- stddev: sqrt(variance)
- minmax: один проход

Ошибки (Result.status):
- NULL: values is None
- EMPTY: n == 0 (mean, minmax) или n < 2 (variance, stddev)
"""

import math
from typing import Optional, Sequence

from densestat.core.status import Result, Status
from densestat.stats.accumulator import StreamingAccumulator


def mean(values: Optional[Sequence[float]]) -> Result[float]:
    """
    Арифметическое среднее.

    Examples:
        >>> mean([1.0, 2.0, 3.0, 4.0, 5.0]).value
        3.0
    """
    if values is None:
        return Result.failure(Status.NULL, "values are None")
    n = len(values)
    if n == 0:
        return Result.failure(Status.EMPTY, "mean of empty sequence")

    # Явный цикл: sum() для float использует компенсированное суммирование
    total = 0.0
    for v in values:
        total += v
    return Result.success(total / n)


def variance(values: Optional[Sequence[float]]) -> Result[float]:
    """Выборочная дисперсия (n - 1) через Welford."""
    if values is None:
        return Result.failure(Status.NULL, "values are None")
    if len(values) < 2:
        return Result.failure(Status.EMPTY, "variance needs at least 2 values")

    acc = StreamingAccumulator()
    for v in values:
        acc.push(v)
    return Result.success(acc.variance())


def stddev(values: Optional[Sequence[float]]) -> Result[float]:
    result = variance(values)
    if not result.ok:
        return result
    return Result.success(math.sqrt(result.value))


def minmax(values: Optional[Sequence[float]]) -> Result[tuple[float, float]]:
    """
    Минимум и максимум за один проход.

    Returns:
        Result с кортежем (min, max)
    """
    if values is None:
        return Result.failure(Status.NULL, "values are None")
    if len(values) == 0:
        return Result.failure(Status.EMPTY, "minmax of empty sequence")

    lo = hi = values[0]
    for v in values[1:]:
        if v < lo:
            lo = v
        if v > hi:
            hi = v
    return Result.success((lo, hi))
