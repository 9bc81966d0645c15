"""
Toolkit Config — параметры вспомогательных модулей

Immutable Pydantic модели (frozen=True) с валидацией диапазонов:
- RegressionConfig: шаг и число итераций градиентного спуска
- KMeansConfig: число кластеров и итераций
- PlotConfig: размеры ASCII-графиков
- UniformParams / NormalParams / BinomialParams: параметры распределений
"""

from typing import Final

from pydantic import BaseModel, Field, model_validator


# =============================================================================
# DEFAULTS
# =============================================================================

LINEAR_LEARNING_RATE_DEFAULT: Final[float] = 0.001
LINEAR_ITERATIONS_DEFAULT: Final[int] = 500

LOGISTIC_LEARNING_RATE_DEFAULT: Final[float] = 0.01
LOGISTIC_ITERATIONS_DEFAULT: Final[int] = 400

KMEANS_K_DEFAULT: Final[int] = 3
KMEANS_ITERATIONS_DEFAULT: Final[int] = 20

PLOT_WIDTH_DEFAULT: Final[int] = 60
PLOT_HEIGHT_DEFAULT: Final[int] = 15
HISTOGRAM_BAR_WIDTH_DEFAULT: Final[int] = 40


# =============================================================================
# ML
# =============================================================================


class RegressionConfig(BaseModel):
    """Параметры batch gradient descent."""

    learning_rate: float = Field(..., gt=0, description="Шаг градиентного спуска")
    iterations: int = Field(..., ge=1, description="Число эпох")

    model_config = {"frozen": True}

    @classmethod
    def linear(cls) -> "RegressionConfig":
        return cls(
            learning_rate=LINEAR_LEARNING_RATE_DEFAULT,
            iterations=LINEAR_ITERATIONS_DEFAULT,
        )

    @classmethod
    def logistic(cls) -> "RegressionConfig":
        return cls(
            learning_rate=LOGISTIC_LEARNING_RATE_DEFAULT,
            iterations=LOGISTIC_ITERATIONS_DEFAULT,
        )


class KMeansConfig(BaseModel):
    """Параметры k-means (Lloyd)."""

    k: int = Field(KMEANS_K_DEFAULT, ge=1, description="Число кластеров")
    iterations: int = Field(KMEANS_ITERATIONS_DEFAULT, ge=1, description="Число итераций")

    model_config = {"frozen": True}


# =============================================================================
# PLOT
# =============================================================================


class PlotConfig(BaseModel):
    """Размеры ASCII-графиков (в символах)."""

    width: int = Field(PLOT_WIDTH_DEFAULT, ge=1, description="Ширина line plot")
    height: int = Field(PLOT_HEIGHT_DEFAULT, ge=2, description="Высота line plot")
    bar_width: int = Field(
        HISTOGRAM_BAR_WIDTH_DEFAULT, ge=1, description="Длина самого длинного столбца гистограммы"
    )

    model_config = {"frozen": True}


# =============================================================================
# DISTRIBUTIONS
# =============================================================================


class UniformParams(BaseModel):
    """U(a, b)."""

    a: float = Field(0.0, description="Нижняя граница")
    b: float = Field(1.0, description="Верхняя граница")

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def validate_bounds(self) -> "UniformParams":
        if self.b < self.a:
            raise ValueError(f"upper bound {self.b} is below lower bound {self.a}")
        return self


class NormalParams(BaseModel):
    """N(mean, std^2)."""

    mean: float = Field(0.0, description="Среднее")
    std: float = Field(1.0, ge=0, description="Стандартное отклонение")

    model_config = {"frozen": True}


class BinomialParams(BaseModel):
    """B(n, p)."""

    n: int = Field(..., ge=0, description="Число испытаний")
    p: float = Field(..., ge=0, le=1, description="Вероятность успеха")

    model_config = {"frozen": True}
