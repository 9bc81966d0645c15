"""
Prob — описательные статистики и генерация выборок

- mean: среднее по буферу с тегом типа
- std: стандартное отклонение генеральной совокупности (делитель n)
- sample: выборка из uniform / normal (Box–Muller) / binomial

Генератор передаётся явно (random.Random) для воспроизводимости;
по умолчанию используется новый несидированный экземпляр.
"""

import logging
import math
import random
from enum import Enum
from typing import MutableSequence, Optional, Sequence, Union

from densestat.core.dtypes import ScalarType, TypeTag
from densestat.core.status import Result, Status
from densestat.toolkit.config import BinomialParams, NormalParams, UniformParams

logger = logging.getLogger(__name__)

DistributionParams = Union[UniformParams, NormalParams, BinomialParams]


class Distribution(str, Enum):
    """Поддерживаемые распределения"""

    UNIFORM = "uniform"
    NORMAL = "normal"
    BINOMIAL = "binomial"


_PARAMS_TYPE = {
    Distribution.UNIFORM: UniformParams,
    Distribution.NORMAL: NormalParams,
    Distribution.BINOMIAL: BinomialParams,
}


def _numeric_kind(dtype: TypeTag) -> Optional[ScalarType]:
    kind = ScalarType.resolve(dtype)
    if kind is None or not kind.is_numeric:
        return None
    return kind


# =============================================================================
# DESCRIPTIVE
# =============================================================================


def mean(values: Optional[Sequence], dtype: TypeTag) -> Result[float]:
    if values is None or len(values) == 0:
        return Result.failure(Status.INVALID, "values are missing or empty")
    kind = _numeric_kind(dtype)
    if kind is None:
        return Result.failure(Status.UNSUPPORTED, f"type tag {dtype!r}")

    total = 0.0
    for v in values:
        total += kind.read(v)
    return Result.success(total / len(values))


def std(values: Optional[Sequence], dtype: TypeTag) -> Result[float]:
    """
    Стандартное отклонение генеральной совокупности (делитель n, не n - 1).

    Examples:
        >>> std([2, 4, 4, 4, 5, 5, 7, 9], "i32").value
        2.0
    """
    mu = mean(values, dtype)
    if not mu.ok:
        return mu

    kind = ScalarType.resolve(dtype)
    var = 0.0
    for v in values:
        d = kind.read(v) - mu.value
        var += d * d
    var /= len(values)
    return Result.success(math.sqrt(var))


# =============================================================================
# SAMPLING
# =============================================================================


def _normal(rng: random.Random, mu: float, sigma: float) -> float:
    # Box–Muller; u1 в (0, 1], чтобы log(u1) был конечным
    u1 = 1.0 - rng.random()
    u2 = rng.random()
    r = math.sqrt(-2.0 * math.log(u1))
    theta = 2.0 * math.pi * u2
    return mu + sigma * r * math.cos(theta)


def _binomial(rng: random.Random, n: int, p: float) -> int:
    successes = 0
    for _ in range(n):
        if rng.random() < p:
            successes += 1
    return successes


def sample(
    out: Optional[MutableSequence],
    count: int,
    distribution: Union[Distribution, str],
    dtype: TypeTag,
    params: Optional[DistributionParams],
    rng: Optional[random.Random] = None,
) -> Status:
    """
    Запись count значений из распределения в out[0:count].

    Returns:
        OK, INVALID (нет буфера/параметров, неизвестное распределение,
        параметры не того типа, короткий out), UNSUPPORTED (тег)
    """
    if out is None or params is None or count < 0:
        return Status.INVALID

    kind = _numeric_kind(dtype)
    if kind is None:
        logger.debug("unsupported type tag %r", dtype)
        return Status.UNSUPPORTED

    try:
        dist = Distribution(distribution)
    except ValueError:
        logger.debug("unknown distribution %r", distribution)
        return Status.INVALID

    if not isinstance(params, _PARAMS_TYPE[dist]):
        logger.debug("%s expects %s", dist.value, _PARAMS_TYPE[dist].__name__)
        return Status.INVALID

    if len(out) < count:
        return Status.INVALID

    rng = rng or random.Random()

    for i in range(count):
        if dist is Distribution.UNIFORM:
            v = params.a + rng.random() * (params.b - params.a)
        elif dist is Distribution.NORMAL:
            v = _normal(rng, params.mean, params.std)
        else:
            v = float(_binomial(rng, params.n, params.p))
        out[i] = kind.store(v)
    return Status.OK
