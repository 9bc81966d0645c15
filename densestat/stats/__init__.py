"""
Statistics: Welford-аккумулятор, статистики векторов и матриц.
"""

# Streaming accumulator
from densestat.stats.accumulator import StreamingAccumulator

# Vector statistics
from densestat.stats.vector import mean, minmax, stddev, variance

# Matrix statistics
from densestat.stats.matrix_stats import (
    centered_covariance,
    column_mean,
    covariance,
)

__all__ = [
    # Streaming accumulator
    "StreamingAccumulator",
    # Vector statistics
    "mean",
    "variance",
    "stddev",
    "minmax",
    # Matrix statistics
    "column_mean",
    "covariance",
    "centered_covariance",
]
