"""
Тесты для статистик векторов (mean / variance / stddev / minmax)
"""

import math

import pytest

from densestat.core.status import Status
from densestat.stats.vector import mean, minmax, stddev, variance


class TestMean:
    """Тесты для mean"""

    def test_simple(self) -> None:
        assert mean([1.0, 2.0, 3.0, 4.0, 5.0]).value == 3.0

    def test_single(self) -> None:
        assert mean([-7.25]).value == -7.25

    def test_empty(self) -> None:
        """Пустой вектор → EMPTY"""
        assert mean([]).status is Status.EMPTY

    def test_none(self) -> None:
        """None → NULL"""
        assert mean(None).status is Status.NULL

    def test_left_to_right_summation(self) -> None:
        """Суммирование прямое, без компенсации"""
        # 1e16 + 1 округляется до 1e16
        assert mean([1e16, 1.0, -1e16]).value == 0.0


class TestVariance:
    """Тесты для variance / stddev"""

    def test_known_sample(self) -> None:
        """Выборочная дисперсия с поправкой Бесселя"""
        result = variance([2, 4, 4, 4, 5, 5, 7, 9])
        assert result.ok
        assert result.value == pytest.approx(32.0 / 7.0)

    def test_constant(self) -> None:
        assert variance([3.0, 3.0, 3.0]).value == 0.0

    def test_single_value_is_empty(self) -> None:
        """n < 2 → EMPTY"""
        assert variance([1.0]).status is Status.EMPTY
        assert variance([]).status is Status.EMPTY

    def test_none(self) -> None:
        assert variance(None).status is Status.NULL

    def test_stddev(self) -> None:
        assert stddev([1.0, 3.0]).value == pytest.approx(math.sqrt(2.0))

    def test_stddev_propagates_errors(self) -> None:
        assert stddev([1.0]).status is Status.EMPTY
        assert stddev(None).status is Status.NULL


class TestMinMax:
    """Тесты для minmax"""

    def test_simple(self) -> None:
        assert minmax([1.0, 2.0, 3.0, 4.0, 5.0]).value == (1.0, 5.0)

    def test_unordered(self) -> None:
        assert minmax([3.0, -1.0, 8.0, 0.0]).value == (-1.0, 8.0)

    def test_single(self) -> None:
        assert minmax([4.0]).value == (4.0, 4.0)

    def test_empty(self) -> None:
        assert minmax([]).status is Status.EMPTY

    def test_none(self) -> None:
        assert minmax(None).status is Status.NULL
