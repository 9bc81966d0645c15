"""
Matrix Statistics — статистики по столбцам Matrix

- column_mean: матрица 1 x cols со средним каждого столбца
- covariance: cols x cols, второй момент относительно НУЛЯ / (rows - 1)
- centered_covariance: cols x cols, классическая выборочная ковариация

ВАЖНО (covariance):
    covariance() НЕ вычитает средние столбцов:

        cov[i, j] = Σ_k m[k, i] * m[k, j] / (rows - 1)

    Это матрица смешанных моментов (Gram / (n - 1)), а не ковариация в
    статистическом смысле. Поведение сохранено намеренно и закреплено
    тестами; для E[(X_i - μ_i)(X_j - μ_j)] используйте centered_covariance().

Все результаты — новые Matrix, владение переходит вызывающему коду.

Ошибки:
- NULL: m is None или освобождена
- EMPTY: rows == 0 / cols == 0 (column_mean), rows < 2 (covariance)
- ALLOC: не удалось выделить результат
"""

import logging
from typing import Optional

from densestat.core.matrix import Matrix
from densestat.core.status import Result, Status

logger = logging.getLogger(__name__)


def column_mean(m: Optional[Matrix]) -> Result[Matrix]:
    """
    Среднее по каждому столбцу.

    Examples:
        >>> m = Matrix.from_rows([[1, 2], [3, 4], [5, 6]]).unwrap()
        >>> column_mean(m).unwrap().to_rows()
        [[3.0, 4.0]]
    """
    if m is None or m.is_freed:
        return Result.failure(Status.NULL, "matrix is missing or freed")

    n_rows, n_cols = m.shape
    if n_rows == 0 or n_cols == 0:
        return Result.failure(Status.EMPTY, "matrix has no elements")

    out = Matrix.create(1, n_cols)
    if out is None:
        return Result.failure(Status.ALLOC, f"column mean 1x{n_cols}")

    for j in range(n_cols):
        total = 0.0
        for i in range(n_rows):
            total += m.get(i, j).value
        out.set(0, j, total / n_rows)
    return Result.success(out)


def covariance(m: Optional[Matrix]) -> Result[Matrix]:
    """
    Второй момент относительно нуля, нормированный на (rows - 1).

    Считается только верхний треугольник (i <= j), затем зеркалится.
    """
    if m is None or m.is_freed:
        return Result.failure(Status.NULL, "matrix is missing or freed")

    n_rows, n_cols = m.shape
    if n_rows < 2:
        logger.debug("covariance rejected: %d row(s)", n_rows)
        return Result.failure(Status.EMPTY, "covariance needs at least 2 rows")

    out = Matrix.create(n_cols, n_cols)
    if out is None:
        return Result.failure(Status.ALLOC, f"covariance {n_cols}x{n_cols}")

    for i in range(n_cols):
        for j in range(i, n_cols):
            total = 0.0
            for k in range(n_rows):
                total += m.get(k, i).value * m.get(k, j).value
            total /= n_rows - 1
            out.set(i, j, total)
            out.set(j, i, total)
    return Result.success(out)


def centered_covariance(m: Optional[Matrix]) -> Result[Matrix]:
    """
    Выборочная ковариация: Σ_k (x_ki - μ_i)(x_kj - μ_j) / (rows - 1).
    """
    if m is None or m.is_freed:
        return Result.failure(Status.NULL, "matrix is missing or freed")

    n_rows, n_cols = m.shape
    if n_rows < 2:
        return Result.failure(Status.EMPTY, "covariance needs at least 2 rows")

    means = column_mean(m)
    if not means.ok:
        return means

    out = Matrix.create(n_cols, n_cols)
    if out is None:
        means.value.free()
        return Result.failure(Status.ALLOC, f"covariance {n_cols}x{n_cols}")

    mu = [means.value.get(0, j).value for j in range(n_cols)]
    means.value.free()

    for i in range(n_cols):
        for j in range(i, n_cols):
            total = 0.0
            for k in range(n_rows):
                total += (m.get(k, i).value - mu[i]) * (m.get(k, j).value - mu[j])
            total /= n_rows - 1
            out.set(i, j, total)
            out.set(j, i, total)
    return Result.success(out)
