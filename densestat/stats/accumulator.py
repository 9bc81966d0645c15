"""
StreamingAccumulator — онлайн mean/variance (алгоритм Welford)

Value object фиксированного размера (count, running_mean, m2), обновляемый
по одному значению без хранения выборки.

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. m2 >= 0 (сумма квадратов отклонений от текущего среднего)
2. mean() осмыслен только при count > 0, иначе 0.0
3. variance() осмыслен только при count >= 2, иначе 0.0 (нет деления на ноль)

ФОРМУЛЫ (push):
    count += 1
    delta  = x - mean
    mean  += delta / count
    delta2 = x - mean          # пересчитывается ПОСЛЕ обновления mean
    m2    += delta * delta2

    variance = m2 / (count - 1)   (выборочная, поправка Бесселя)
"""

import math
from dataclasses import dataclass
from typing import Iterable


@dataclass
class StreamingAccumulator:
    """Аккумулятор Welford."""

    count: int = 0
    running_mean: float = 0.0
    m2: float = 0.0

    def reset(self) -> None:
        """Возврат в нулевое состояние."""
        self.count = 0
        self.running_mean = 0.0
        self.m2 = 0.0

    def push(self, value: float) -> None:
        """Добавление одного значения (Welford update)."""
        self.count += 1
        delta = value - self.running_mean
        self.running_mean += delta / self.count
        delta2 = value - self.running_mean
        self.m2 += delta * delta2

    def extend(self, values: Iterable[float]) -> None:
        for v in values:
            self.push(v)

    def mean(self) -> float:
        return self.running_mean if self.count > 0 else 0.0

    def variance(self) -> float:
        """Выборочная дисперсия (n - 1); 0.0 при count < 2."""
        if self.count < 2:
            return 0.0
        return self.m2 / (self.count - 1)

    def population_variance(self) -> float:
        """Дисперсия генеральной совокупности (n); 0.0 при count == 0."""
        if self.count == 0:
            return 0.0
        return self.m2 / self.count

    def stddev(self) -> float:
        return math.sqrt(self.variance())
