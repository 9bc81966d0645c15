"""
Plot — ASCII-графики в терминале

- line: столбчатая "заливка" по порогам (height строк x width столбцов)
- histogram: равные бины на [min, max], столбцы '#' пропорциональны частоте

render_* возвращают текст, line()/histogram() пишут его в поток.
NaN/Inf во входе и диапазон, не представимый в double, дают INVALID.
"""

import math
import sys
from typing import Optional, Sequence, TextIO

from densestat.core.dtypes import ScalarType, TypeTag
from densestat.core.status import Result, Status
from densestat.stats.vector import minmax
from densestat.toolkit.config import PlotConfig


def _read_all(values: Optional[Sequence], dtype: TypeTag) -> Result[list[float]]:
    if values is None or len(values) == 0:
        return Result.failure(Status.INVALID, "nothing to plot")
    kind = ScalarType.resolve(dtype)
    if kind is None or not kind.is_numeric:
        return Result.failure(Status.UNSUPPORTED, f"type tag {dtype!r}")
    points = [kind.read(v) for v in values]
    for i, v in enumerate(points):
        # NaN/Inf ломают масштаб осей и номер бина
        if not math.isfinite(v):
            return Result.failure(Status.INVALID, f"non-finite value {v!r} at index {i}")
    return Result.success(points)


def _bounds(points: list[float]) -> Result[tuple[float, float, float]]:
    """(min, max, span); нулевой span заменяется на 1."""
    lo, hi = minmax(points).value
    span = hi - lo
    if not math.isfinite(span):
        return Result.failure(Status.INVALID, f"range [{lo!r}, {hi!r}] overflows")
    if span == 0:
        span = 1.0
    return Result.success((lo, hi, span))


def _footer(lo: float, hi: float, n: int) -> str:
    return f"min: {lo:.3f}  max: {hi:.3f}  n={n}"


def render_line(
    values: Optional[Sequence],
    dtype: TypeTag,
    title: str = "",
    config: Optional[PlotConfig] = None,
) -> Result[str]:
    """
    Line plot: ячейка (row, col) закрашена, если значение в столбце
    не ниже порога строки; пороги идут от max (верх) до min (низ).
    """
    data = _read_all(values, dtype)
    if not data.ok:
        return data
    config = config or PlotConfig()
    points = data.value
    n = len(points)

    bounds = _bounds(points)
    if not bounds.ok:
        return bounds
    lo, hi, span = bounds.value

    lines = ["", f"=== {title or 'line plot'} ==="]
    for row in range(config.height):
        threshold = hi - (span * row / (config.height - 1))
        cells = []
        for col in range(config.width):
            v = points[col * n // config.width]
            cells.append("*" if v >= threshold else " ")
        lines.append("".join(cells))
    lines.append(_footer(lo, hi, n))
    return Result.success("\n".join(lines) + "\n")


def render_histogram(
    values: Optional[Sequence],
    dtype: TypeTag,
    bins: int,
    title: str = "",
    config: Optional[PlotConfig] = None,
) -> Result[str]:
    """Гистограмма с bins равными интервалами; max попадает в последний бин."""
    if bins <= 0:
        return Result.failure(Status.INVALID, "bins must be positive")
    data = _read_all(values, dtype)
    if not data.ok:
        return data
    config = config or PlotConfig()
    points = data.value

    bounds = _bounds(points)
    if not bounds.ok:
        return bounds
    lo, hi, span = bounds.value

    counts = [0] * bins
    for v in points:
        b = int((v - lo) / span * bins)
        if b >= bins:
            b = bins - 1
        counts[b] += 1

    peak = max(counts) or 1

    lines = ["", f"=== {title or 'histogram'} ==="]
    for i, c in enumerate(counts):
        low = lo + span * i / bins
        high = lo + span * (i + 1) / bins
        bar = "#" * (c * config.bar_width // peak)
        lines.append(f"[{low:8.3f} - {high:8.3f}] | {bar} ({c})")
    lines.append(_footer(lo, hi, len(points)))
    return Result.success("\n".join(lines) + "\n")


def line(
    values: Optional[Sequence],
    dtype: TypeTag,
    title: str = "",
    config: Optional[PlotConfig] = None,
    stream: Optional[TextIO] = None,
) -> Status:
    rendered = render_line(values, dtype, title, config)
    if rendered.ok:
        (stream or sys.stdout).write(rendered.value)
    return rendered.status


def histogram(
    values: Optional[Sequence],
    dtype: TypeTag,
    bins: int,
    title: str = "",
    config: Optional[PlotConfig] = None,
    stream: Optional[TextIO] = None,
) -> Status:
    rendered = render_histogram(values, dtype, bins, title, config)
    if rendered.ok:
        (stream or sys.stdout).write(rendered.value)
    return rendered.status
