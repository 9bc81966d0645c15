"""
Toolkit — вспомогательные модули над буферами с тегами типов.

- series: cumsum, rolling_mean
- transform: scale, encode, one_hot
- prob: mean, std, sample
- tensor: elements, minmax, mean
- plot: ASCII line plot и гистограмма
- ml: линейная/логистическая регрессия, k-means

mean/std/minmax из prob и tensor экспортируются с префиксом модуля.
"""

from densestat.toolkit.config import (
    BinomialParams,
    KMeansConfig,
    NormalParams,
    PlotConfig,
    RegressionConfig,
    UniformParams,
)
from densestat.toolkit.ml import Model, ModelKind, free_model, predict, train
from densestat.toolkit.plot import histogram, line, render_histogram, render_line
from densestat.toolkit.prob import Distribution, sample
from densestat.toolkit.prob import mean as prob_mean
from densestat.toolkit.prob import std as prob_std
from densestat.toolkit.series import cumsum, rolling_mean
from densestat.toolkit.tensor import elements
from densestat.toolkit.tensor import mean as tensor_mean
from densestat.toolkit.tensor import minmax as tensor_minmax
from densestat.toolkit.transform import EncodeMethod, ScaleMethod, encode, one_hot, scale

__all__ = [
    # Config
    "RegressionConfig",
    "KMeansConfig",
    "PlotConfig",
    "UniformParams",
    "NormalParams",
    "BinomialParams",
    # Series
    "cumsum",
    "rolling_mean",
    # Transform
    "ScaleMethod",
    "EncodeMethod",
    "scale",
    "encode",
    "one_hot",
    # Prob
    "Distribution",
    "prob_mean",
    "prob_std",
    "sample",
    # Tensor
    "elements",
    "tensor_minmax",
    "tensor_mean",
    # Plot
    "render_line",
    "render_histogram",
    "line",
    "histogram",
    # ML
    "Model",
    "ModelKind",
    "train",
    "predict",
    "free_model",
]
