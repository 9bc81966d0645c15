"""
Transform — масштабирование и кодирование признаков

Масштабирование (scale):
- minmax: (x - min) / (max - min); нулевой диапазон заменяется на 1
- zscore: (x - mean) / std, std генеральной совокупности; нулевой std → 1

Кодирование (encode), только строки:
- label: индекс категории в порядке первого появления
- onehot: те же индексы; развёртка в 0/1 матрицу — one_hot()

Пустой вход для scale — успешный no-op.
"""

import logging
import operator
from enum import Enum
from typing import MutableSequence, Optional, Sequence, Union

from densestat.core.dtypes import ScalarType, TypeTag
from densestat.core.matrix import Matrix
from densestat.core.status import Result, Status
from densestat.stats.accumulator import StreamingAccumulator

logger = logging.getLogger(__name__)


# =============================================================================
# ENUMS
# =============================================================================


class ScaleMethod(str, Enum):
    """Метод масштабирования"""

    MINMAX = "minmax"
    ZSCORE = "zscore"


class EncodeMethod(str, Enum):
    """Метод кодирования категорий"""

    LABEL = "label"
    ONEHOT = "onehot"


def _resolve(enum_cls, value):
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(value)
    except ValueError:
        return None


# =============================================================================
# SCALING
# =============================================================================


def scale(
    values: Optional[Sequence],
    out: Optional[MutableSequence],
    dtype: TypeTag,
    method: Union[ScaleMethod, str],
) -> Status:
    """
    Масштабирование values в out с записью через тег типа.

    Returns:
        OK (в т.ч. для пустого входа), INVALID (неизвестный метод,
        короткий out), UNSUPPORTED (нечисловой тег)
    """
    if values is None or out is None or len(values) == 0:
        return Status.OK

    kind = ScalarType.resolve(dtype)
    if kind is None or not kind.is_numeric:
        logger.debug("unsupported type tag %r", dtype)
        return Status.UNSUPPORTED

    scale_method = _resolve(ScaleMethod, method)
    if scale_method is None:
        logger.debug("unknown scale method %r", method)
        return Status.INVALID

    if len(out) < len(values):
        return Status.INVALID

    data = [kind.read(v) for v in values]

    if scale_method is ScaleMethod.MINMAX:
        lo = min(data)
        hi = max(data)
        span = hi - lo
        if span == 0.0:
            span = 1.0
        for i, v in enumerate(data):
            out[i] = kind.store((v - lo) / span)
        return Status.OK

    acc = StreamingAccumulator()
    acc.extend(data)
    mu = acc.mean()
    sigma = acc.population_variance() ** 0.5
    if sigma == 0.0:
        sigma = 1.0
    for i, v in enumerate(data):
        out[i] = kind.store((v - mu) / sigma)
    return Status.OK


# =============================================================================
# ENCODING
# =============================================================================


def encode(
    values: Optional[Sequence[str]],
    out: Optional[MutableSequence[int]],
    method: Union[EncodeMethod, str],
    dtype: TypeTag = ScalarType.CSTR,
) -> Status:
    """
    Кодирование строковых категорий индексами первого появления.

    Examples:
        >>> out = [0] * 4
        >>> encode(["red", "blue", "red", "green"], out, "label")
        <Status.OK: 'ok'>
        >>> out
        [0, 1, 0, 2]
    """
    if values is None or out is None:
        return Status.INVALID

    if ScalarType.resolve(dtype) is not ScalarType.CSTR:
        logger.debug("encode only supports cstr, got %r", dtype)
        return Status.INVALID

    if _resolve(EncodeMethod, method) is None:
        logger.debug("unknown encode method %r", method)
        return Status.INVALID

    if len(out) < len(values):
        return Status.INVALID

    codes: dict[str, int] = {}
    for i, v in enumerate(values):
        if v not in codes:
            codes[v] = len(codes)
        out[i] = codes[v]
    return Status.OK


def one_hot(codes: Optional[Sequence[int]]) -> Result[Matrix]:
    """
    Развёртка индексов категорий в матрицу len(codes) x n_categories.

    n_categories = max(codes) + 1. Коды — неотрицательные целые
    (int или тип с __index__), иначе INVALID.
    """
    if codes is None:
        return Result.failure(Status.NULL, "codes are None")
    if len(codes) == 0:
        return Result.failure(Status.EMPTY, "no codes to expand")

    indices = []
    for c in codes:
        if isinstance(c, bool):
            return Result.failure(Status.INVALID, f"category code {c!r} is not an integer")
        try:
            index = operator.index(c)
        except TypeError:
            return Result.failure(Status.INVALID, f"category code {c!r} is not an integer")
        if index < 0:
            return Result.failure(Status.INVALID, "category codes must be non-negative")
        indices.append(index)

    out = Matrix.create(len(indices), max(indices) + 1)
    if out is None:
        return Result.failure(Status.ALLOC, "one-hot matrix")

    for r, c in enumerate(indices):
        status = out.set(r, c, 1.0)
        if status is not Status.OK:
            out.free()
            return Result.failure(status, f"row {r}, code {c}")
    return Result.success(out)
