"""
Тесты для Transform (scale / encode / one_hot)

Проверяет:
1. minmax и zscore масштабирование, вырожденный диапазон
2. label/onehot кодирование в порядке первого появления
3. Развёртку индексов в one-hot матрицу
4. Коды ошибок
"""

import pytest

from densestat.core import matrix as matrix_module
from densestat.core.status import Status
from densestat.toolkit.transform import EncodeMethod, ScaleMethod, encode, one_hot, scale

# =============================================================================
# ТЕСТЫ SCALE
# =============================================================================


class TestScaleMinMax:
    """Тесты для minmax"""

    def test_unit_range(self) -> None:
        out = [0.0] * 3
        assert scale([2, 4, 6], out, "f64", "minmax") is Status.OK
        assert out == [0.0, 0.5, 1.0]

    def test_constant_input(self) -> None:
        """Нулевой диапазон заменяется на 1 → все нули"""
        out = [9.0, 9.0]
        scale([3.0, 3.0], out, "f64", ScaleMethod.MINMAX)
        assert out == [0.0, 0.0]

    def test_integer_output_truncates(self) -> None:
        out = [0] * 3
        scale([0, 5, 10], out, "i32", "minmax")
        assert out == [0, 0, 1]


class TestScaleZScore:
    """Тесты для zscore"""

    def test_population_std(self) -> None:
        """Делитель std — n (генеральная совокупность)"""
        values = [2, 4, 4, 4, 5, 5, 7, 9]
        out = [0.0] * len(values)
        scale(values, out, "f64", "zscore")
        assert out[0] == pytest.approx(-1.5)
        assert out[-1] == pytest.approx(2.0)
        assert sum(out) == pytest.approx(0.0, abs=1e-12)

    def test_constant_input(self) -> None:
        """Нулевой std заменяется на 1"""
        out = [1.0, 1.0]
        scale([4.0, 4.0], out, "f64", "zscore")
        assert out == [0.0, 0.0]


class TestScaleErrors:
    """Тесты для кодов ошибок scale"""

    def test_empty_input_is_noop(self) -> None:
        """Пустой вход — OK без записи"""
        out = [5.0]
        assert scale([], out, "f64", "minmax") is Status.OK
        assert out == [5.0]
        assert scale(None, out, "f64", "minmax") is Status.OK

    def test_unknown_method(self) -> None:
        assert scale([1.0], [0.0], "f64", "robust") is Status.INVALID

    def test_short_output(self) -> None:
        assert scale([1.0, 2.0], [0.0], "f64", "minmax") is Status.INVALID

    def test_unsupported_tag(self) -> None:
        assert scale(["a"], [0], "cstr", "minmax") is Status.UNSUPPORTED


# =============================================================================
# ТЕСТЫ ENCODE
# =============================================================================


class TestEncode:
    """Тесты для encode"""

    def test_label_first_seen_order(self) -> None:
        out = [0] * 4
        assert encode(["red", "blue", "red", "green"], out, "label") is Status.OK
        assert out == [0, 1, 0, 2]

    def test_onehot_produces_same_codes(self) -> None:
        out = [0] * 3
        assert encode(["b", "a", "b"], out, EncodeMethod.ONEHOT) is Status.OK
        assert out == [0, 1, 0]

    def test_numeric_tag_rejected(self) -> None:
        """Кодируются только строки"""
        assert encode(["a"], [0], "label", dtype="i32") is Status.INVALID

    def test_unknown_method(self) -> None:
        assert encode(["a"], [0], "ordinal") is Status.INVALID

    def test_missing_buffers(self) -> None:
        assert encode(None, [0], "label") is Status.INVALID
        assert encode(["a"], None, "label") is Status.INVALID

    def test_short_output(self) -> None:
        assert encode(["a", "b"], [0], "label") is Status.INVALID


class TestOneHot:
    """Тесты для one_hot"""

    def test_expansion(self) -> None:
        result = one_hot([0, 2, 1])
        assert result.ok
        assert result.value.to_rows() == [
            [1.0, 0.0, 0.0],
            [0.0, 0.0, 1.0],
            [0.0, 1.0, 0.0],
        ]

    def test_row_sums_are_one(self) -> None:
        codes = [0] * 4
        encode(["x", "y", "z", "x"], codes, "onehot")
        rows = one_hot(codes).unwrap().to_rows()
        assert all(sum(row) == 1.0 for row in rows)

    def test_errors(self) -> None:
        assert one_hot(None).status is Status.NULL
        assert one_hot([]).status is Status.EMPTY
        assert one_hot([0, -1]).status is Status.INVALID


class TestOneHotCodes:
    """Тесты для валидации кодов one_hot"""

    def test_float_codes_invalid(self) -> None:
        """Нецелые коды → INVALID, а не ALLOC"""
        result = one_hot([0.0, 1.0])
        assert result.status is Status.INVALID
        assert "not an integer" in result.details

    def test_bool_codes_invalid(self) -> None:
        assert one_hot([True, False]).status is Status.INVALID

    def test_string_codes_invalid(self) -> None:
        assert one_hot(["0"]).status is Status.INVALID

    def test_index_protocol_codes(self) -> None:
        """Коды с __index__ принимаются"""

        class Code:
            def __init__(self, value):
                self.value = value

            def __index__(self):
                return self.value

        result = one_hot([Code(1), Code(0)])
        assert result.value.to_rows() == [[0.0, 1.0], [1.0, 0.0]]

    def test_allocation_failure(self, monkeypatch) -> None:
        def _fail(size):
            raise MemoryError(size)

        monkeypatch.setattr(matrix_module, "_allocate_buffer", _fail)
        assert one_hot([0, 1]).status is Status.ALLOC
