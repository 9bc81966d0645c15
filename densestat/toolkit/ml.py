"""
ML — учебные модели на плоских row-major буферах

Модели:
- linear_regression: batch gradient descent, MSE
- logistic_regression: batch gradient descent, log-loss (sigmoid)
- kmeans: Lloyd, центры инициализируются первыми k строками

Обучение покоординатное: в каждой эпохе веса обновляются по очереди
j = 0..cols-1, и предсказания для градиента по w_j используют уже
обновлённые w_0..w_{j-1}. Свободного члена нет: при необходимости
вызывающий код добавляет столбец единиц в X.

ФОРМУЛЫ:
    linear:   grad_j = Σ_i (x_i · w - y_i) * x_ij
    logistic: grad_j = Σ_i (σ(x_i · w) - y_i) * x_ij
    w_j -= learning_rate * grad_j / rows
"""

import logging
import math
from dataclasses import dataclass, field
from enum import Enum
from typing import MutableSequence, Optional, Sequence, Union

from densestat.core.dtypes import ScalarType, TypeTag
from densestat.core.status import Result, Status
from densestat.toolkit.config import KMeansConfig, RegressionConfig

logger = logging.getLogger(__name__)


# =============================================================================
# MODEL
# =============================================================================


class ModelKind(str, Enum):
    """Тип модели"""

    LINEAR_REGRESSION = "linear_regression"
    LOGISTIC_REGRESSION = "logistic_regression"
    KMEANS = "kmeans"


@dataclass
class Model:
    """Обученная модель. Владеет своими параметрами до free_model()."""

    kind: ModelKind
    rows: int
    cols: int

    # Регрессия: len(weights) == cols
    weights: list[float] = field(default_factory=list)

    # k-means: row-major k x cols
    centers: list[float] = field(default_factory=list)
    k: int = 0

    freed: bool = False

    def center(self, c: int) -> list[float]:
        return self.centers[c * self.cols:(c + 1) * self.cols]


def sigmoid(x: float) -> float:
    """Логистическая функция без переполнения exp() на больших |x|."""
    if x >= 0:
        return 1.0 / (1.0 + math.exp(-x))
    e = math.exp(x)
    return e / (1.0 + e)


# =============================================================================
# TRAINING
# =============================================================================


def _dot_row(weights: list[float], X: list[float], i: int, cols: int) -> float:
    acc = 0.0
    base = i * cols
    for k in range(cols):
        acc += weights[k] * X[base + k]
    return acc


def _fit_regression(
    X: list[float],
    y: list[float],
    rows: int,
    cols: int,
    config: RegressionConfig,
    logistic: bool,
) -> list[float]:
    weights = [0.0] * cols
    lr = config.learning_rate
    for _ in range(config.iterations):
        for j in range(cols):
            grad = 0.0
            for i in range(rows):
                z = _dot_row(weights, X, i, cols)
                pred = sigmoid(z) if logistic else z
                grad += (pred - y[i]) * X[i * cols + j]
            weights[j] -= lr * grad / rows
    return weights


def _nearest_center(X: list[float], i: int, cols: int, centers: list[float], k: int) -> int:
    best = math.inf
    best_id = 0
    base = i * cols
    for c in range(k):
        d = 0.0
        for j in range(cols):
            diff = X[base + j] - centers[c * cols + j]
            d += diff * diff
        if d < best:
            best = d
            best_id = c
    return best_id


def _fit_kmeans(X: list[float], rows: int, cols: int, config: KMeansConfig) -> list[float]:
    k = config.k
    centers = X[: k * cols]

    for _ in range(config.iterations):
        labels = [_nearest_center(X, i, cols, centers, k) for i in range(rows)]

        sums = [0.0] * (k * cols)
        counts = [0] * k
        for i, c in enumerate(labels):
            counts[c] += 1
            for j in range(cols):
                sums[c * cols + j] += X[i * cols + j]

        for c in range(k):
            # пустой кластер сохраняет прежний центр
            if counts[c] == 0:
                continue
            for j in range(cols):
                centers[c * cols + j] = sums[c * cols + j] / counts[c]
    return centers


def train(
    X: Optional[Sequence],
    y: Optional[Sequence],
    rows: int,
    cols: int,
    dtype: TypeTag,
    kind: Union[ModelKind, str],
    config: Union[RegressionConfig, KMeansConfig, None] = None,
) -> Result[Model]:
    """
    Обучение модели на X (rows x cols, row-major) и целевой y (rows).

    Для kmeans y игнорируется и может быть None.

    Returns:
        Result с Model; INVALID (нет/короткие буферы, rows < k, config не
        того типа), UNSUPPORTED (тег типа, неизвестная модель), ALLOC
    """
    if X is None or rows <= 0 or cols <= 0:
        return Result.failure(Status.INVALID, "X is missing or shape is empty")

    try:
        model_kind = ModelKind(kind)
    except ValueError:
        logger.debug("unknown model kind %r", kind)
        return Result.failure(Status.UNSUPPORTED, f"model {kind!r}")

    if model_kind is not ModelKind.KMEANS and y is None:
        return Result.failure(Status.INVALID, "regression requires y")

    element = ScalarType.resolve(dtype)
    if element is None or not element.is_numeric:
        logger.debug("unsupported type tag %r", dtype)
        return Result.failure(Status.UNSUPPORTED, f"type tag {dtype!r}")

    if len(X) < rows * cols:
        return Result.failure(Status.INVALID, f"X has {len(X)} values, need {rows * cols}")
    if model_kind is not ModelKind.KMEANS and len(y) < rows:
        return Result.failure(Status.INVALID, f"y has {len(y)} values, need {rows}")

    if config is None:
        if model_kind is ModelKind.LINEAR_REGRESSION:
            config = RegressionConfig.linear()
        elif model_kind is ModelKind.LOGISTIC_REGRESSION:
            config = RegressionConfig.logistic()
        else:
            config = KMeansConfig()

    expected = KMeansConfig if model_kind is ModelKind.KMEANS else RegressionConfig
    if not isinstance(config, expected):
        return Result.failure(Status.INVALID, f"{model_kind.value} expects {expected.__name__}")

    try:
        features = [element.read(X[i]) for i in range(rows * cols)]

        if model_kind is ModelKind.KMEANS:
            if rows < config.k:
                return Result.failure(
                    Status.INVALID, f"kmeans needs at least k={config.k} rows, got {rows}"
                )
            centers = _fit_kmeans(features, rows, cols, config)
            model = Model(kind=model_kind, rows=rows, cols=cols, centers=centers, k=config.k)
        else:
            targets = [element.read(y[i]) for i in range(rows)]
            weights = _fit_regression(
                features,
                targets,
                rows,
                cols,
                config,
                logistic=model_kind is ModelKind.LOGISTIC_REGRESSION,
            )
            model = Model(kind=model_kind, rows=rows, cols=cols, weights=weights)
    except MemoryError:
        logger.warning("allocation failed while training %s", model_kind.value)
        return Result.failure(Status.ALLOC, model_kind.value)

    logger.debug(
        "trained %s on %dx%d (%d iterations)",
        model_kind.value,
        rows,
        cols,
        config.iterations,
    )
    return Result.success(model)


# =============================================================================
# PREDICTION
# =============================================================================


def predict(
    model: Optional[Model],
    X: Optional[Sequence],
    rows: int,
    cols: int,
    out: Optional[MutableSequence],
    dtype: TypeTag,
) -> Status:
    """
    Предсказание для X (rows x cols) в out.

    - linear: x · w
    - logistic: 0/1 (порог 0.5) для i32/i64, вероятность для остальных тегов
    - kmeans: индекс ближайшего центра как i32 при любом теге

    Returns:
        OK, INVALID, NULL (модель освобождена), DIM_MISMATCH (cols != model.cols),
        UNSUPPORTED (тег)
    """
    if model is None or X is None or out is None or rows <= 0 or cols <= 0:
        return Status.INVALID
    if model.freed:
        return Status.NULL

    element = ScalarType.resolve(dtype)
    if element is None or not element.is_numeric:
        return Status.UNSUPPORTED

    if cols != model.cols:
        logger.debug("predict cols %d != model cols %d", cols, model.cols)
        return Status.DIM_MISMATCH
    if len(X) < rows * cols or len(out) < rows:
        return Status.INVALID

    features = [element.read(X[i]) for i in range(rows * cols)]

    if model.kind is ModelKind.KMEANS:
        for i in range(rows):
            best = _nearest_center(features, i, cols, model.centers, model.k)
            out[i] = ScalarType.I32.store(best)
        return Status.OK

    hard_labels = element in (ScalarType.I32, ScalarType.I64)
    for i in range(rows):
        z = _dot_row(model.weights, features, i, cols)
        if model.kind is ModelKind.LOGISTIC_REGRESSION:
            z = sigmoid(z)
            if hard_labels:
                z = 1.0 if z >= 0.5 else 0.0
        out[i] = element.store(z)
    return Status.OK


def free_model(model: Optional[Model]) -> Status:
    """Освобождение параметров модели; None — успешный no-op."""
    if model is None:
        return Status.OK
    model.weights = []
    model.centers = []
    model.freed = True
    return Status.OK
