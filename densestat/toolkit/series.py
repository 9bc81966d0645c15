"""
Series — преобразования последовательностей

- cumsum: накопленная сумма
- rolling_mean: скользящее среднее по окну (хвостовое)

Вход читается и выход пишется через тег типа (ScalarType.read/store),
выходной буфер принадлежит вызывающему коду и должен вмещать len(values).

Статусы:
- INVALID: values/out is None, пустой вход, window == 0, короткий out
- UNSUPPORTED: нечисловой или неизвестный тег
"""

import logging
from typing import MutableSequence, Optional, Sequence

from densestat.core.dtypes import ScalarType, TypeTag
from densestat.core.status import Status

logger = logging.getLogger(__name__)


def _check_buffers(
    values: Optional[Sequence],
    out: Optional[MutableSequence],
    dtype: TypeTag,
) -> tuple[Status, Optional[ScalarType]]:
    if values is None or out is None or len(values) == 0:
        return Status.INVALID, None
    if len(out) < len(values):
        logger.debug("output buffer too short: %d < %d", len(out), len(values))
        return Status.INVALID, None

    kind = ScalarType.resolve(dtype)
    if kind is None or not kind.is_numeric:
        logger.debug("unsupported type tag %r", dtype)
        return Status.UNSUPPORTED, None
    return Status.OK, kind


def cumsum(
    values: Optional[Sequence],
    out: Optional[MutableSequence],
    dtype: TypeTag,
) -> Status:
    """
    out[i] = values[0] + ... + values[i]

    Examples:
        >>> out = [0] * 4
        >>> cumsum([1, 2, 3, 4], out, "i32")
        <Status.OK: 'ok'>
        >>> out
        [1, 3, 6, 10]
    """
    status, kind = _check_buffers(values, out, dtype)
    if status is not Status.OK:
        return status

    total = 0.0
    for i, v in enumerate(values):
        total += kind.read(v)
        out[i] = kind.store(total)
    return Status.OK


def rolling_mean(
    values: Optional[Sequence],
    out: Optional[MutableSequence],
    window: int,
    dtype: TypeTag,
) -> Status:
    """
    Хвостовое скользящее среднее.

    Для i < window - 1 усредняется доступный префикс (i + 1 значений).
    """
    if window <= 0:
        return Status.INVALID

    status, kind = _check_buffers(values, out, dtype)
    if status is not Status.OK:
        return status

    total = 0.0
    for i, v in enumerate(values):
        total += kind.read(v)
        if i >= window:
            # значение, покидающее окно
            total -= kind.read(values[i - window])
        denom = min(i + 1, window)
        out[i] = kind.store(total / denom)
    return Status.OK
