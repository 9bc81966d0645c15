"""
Тесты для Tensor (elements / minmax / mean)
"""

import pytest

from densestat.core.status import Status
from densestat.toolkit.tensor import elements, mean, minmax

# =============================================================================
# ТЕСТЫ ELEMENTS
# =============================================================================


class TestElements:
    """Тесты для elements"""

    def test_product_of_shape(self) -> None:
        assert elements([2, 3, 4]).value == 24

    def test_scalar_shape(self) -> None:
        """Ранг 0 — один элемент"""
        assert elements([]).value == 1

    def test_zero_dimension(self) -> None:
        assert elements([5, 0, 3]).value == 0

    def test_tuple_shape(self) -> None:
        assert elements((7,)).value == 7

    def test_none_shape(self) -> None:
        assert elements(None).status is Status.INVALID

    def test_negative_dimension(self) -> None:
        result = elements([2, -1])
        assert result.status is Status.INVALID
        assert "axis 1" in result.details

    def test_non_integer_dimension(self) -> None:
        assert elements([2.0, 3]).status is Status.INVALID
        assert elements([True, 3]).status is Status.INVALID


# =============================================================================
# ТЕСТЫ MINMAX / MEAN
# =============================================================================


class TestMinMax:
    """Тесты для minmax"""

    def test_integers(self) -> None:
        result = minmax([3, -7, 12, 0], "i32")
        assert result.ok
        assert result.value == (-7, 12)
        assert all(isinstance(v, int) for v in result.value)

    def test_doubles(self) -> None:
        assert minmax([0.5, -2.25, 1.0], "f64").value == (-2.25, 1.0)

    def test_f32_rounds_bounds(self) -> None:
        lo, hi = minmax([0.1, 0.2], "f32").value
        assert lo == pytest.approx(0.1, rel=1e-7)
        assert lo != 0.1
        assert hi == pytest.approx(0.2, rel=1e-7)

    def test_large_unsigned_exact(self) -> None:
        """u64 выше 2**53 не теряет младшие биты"""
        big = 2**63 + 1
        assert minmax([big, big - 2], "u64").value == (big - 2, big)

    def test_single_value(self) -> None:
        assert minmax([4], "u8").value == (4, 4)

    def test_empty(self) -> None:
        assert minmax([], "i32").status is Status.INVALID
        assert minmax(None, "i32").status is Status.INVALID

    @pytest.mark.parametrize("tag", ["bool", "cstr", "f128"])
    def test_unsupported_tags(self, tag) -> None:
        assert minmax([1], tag).status is Status.UNSUPPORTED


class TestMean:
    """Тесты для mean"""

    def test_unsigned(self) -> None:
        assert mean([1, 2, 3, 4], "u8").value == 2.5

    def test_doubles(self) -> None:
        assert mean([0.5, 1.5], "f64").value == 1.0

    def test_hex_as_u64(self) -> None:
        assert mean([0x10, 0x20], "hex").value == 24.0

    def test_empty(self) -> None:
        assert mean([], "f64").status is Status.INVALID
        assert mean(None, "f64").status is Status.INVALID

    def test_unsupported_tag(self) -> None:
        assert mean([True], "bool").status is Status.UNSUPPORTED
