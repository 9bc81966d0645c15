"""
Тесты для ScalarType

Проверяет:
1. Разрешение тегов
2. Предикаты и размеры элементов
3. Правила записи: усечение, wrap, насыщение, NaN, f32, bool
"""

import math

import pytest

from densestat.core.dtypes import ScalarType

# =============================================================================
# ТЕСТЫ РАЗРЕШЕНИЯ ТЕГОВ
# =============================================================================


class TestResolve:
    """Тесты для ScalarType.resolve"""

    def test_string_tag(self) -> None:
        """Строковый тег → член перечисления"""
        assert ScalarType.resolve("i32") is ScalarType.I32
        assert ScalarType.resolve("cstr") is ScalarType.CSTR

    def test_member_passthrough(self) -> None:
        """Член перечисления возвращается как есть"""
        assert ScalarType.resolve(ScalarType.F64) is ScalarType.F64

    def test_unknown_tag(self) -> None:
        """Неизвестный тег → None"""
        assert ScalarType.resolve("float128") is None
        assert ScalarType.resolve(None) is None
        assert ScalarType.resolve(3) is None


class TestPredicates:
    """Тесты для is_integer / is_float / is_numeric / itemsize"""

    def test_integer_kinds(self) -> None:
        """hex/oct/bin/size — целые"""
        for tag in ("i8", "u64", "size", "hex", "oct", "bin"):
            assert ScalarType(tag).is_integer

    def test_float_kinds(self) -> None:
        assert ScalarType.F32.is_float
        assert ScalarType.F64.is_float
        assert not ScalarType.I32.is_float

    def test_cstr_not_numeric(self) -> None:
        """cstr — единственный нечисловой тег"""
        assert not ScalarType.CSTR.is_numeric
        assert ScalarType.BOOL.is_numeric

    @pytest.mark.parametrize(
        "tag, size",
        [("i8", 1), ("u16", 2), ("i32", 4), ("u64", 8), ("f32", 4), ("f64", 8), ("bool", 1), ("size", 8)],
    )
    def test_itemsize(self, tag, size) -> None:
        assert ScalarType(tag).itemsize == size


# =============================================================================
# ТЕСТЫ ЗАПИСИ
# =============================================================================


class TestStoreIntegers:
    """Тесты приведения к целым"""

    def test_truncates_toward_zero(self) -> None:
        """Дробная часть отбрасывается к нулю"""
        assert ScalarType.I32.store(2.9) == 2
        assert ScalarType.I32.store(-2.9) == -2

    def test_signed_wraps(self) -> None:
        """Переполнение знакового типа оборачивается по ширине"""
        assert ScalarType.I8.store(130.7) == -126
        assert ScalarType.I8.store(127.0) == 127
        assert ScalarType.I16.store(65536.0 + 5) == 5

    def test_unsigned_wraps(self) -> None:
        """Переполнение беззнакового типа оборачивается по ширине"""
        assert ScalarType.U8.store(256.0) == 0
        assert ScalarType.U8.store(300.0) == 44

    def test_unsigned_clamps_negative(self) -> None:
        """Отрицательные значения в беззнаковый тип → 0"""
        assert ScalarType.U32.store(-5.0) == 0
        assert ScalarType.HEX.store(-1.0) == 0

    def test_nan_is_zero(self) -> None:
        """NaN → 0"""
        assert ScalarType.I64.store(math.nan) == 0

    def test_infinity_saturates(self) -> None:
        """±Inf насыщается до границ типа"""
        assert ScalarType.I16.store(math.inf) == 32767
        assert ScalarType.I16.store(-math.inf) == -32768
        assert ScalarType.U8.store(math.inf) == 255
        assert ScalarType.U8.store(-math.inf) == 0

    def test_returns_int(self) -> None:
        assert isinstance(ScalarType.SIZE.store(3.0), int)


class TestStoreOther:
    """Тесты для f32 / f64 / bool / cstr"""

    def test_f64_identity(self) -> None:
        assert ScalarType.F64.store(0.1) == 0.1

    def test_f32_rounds(self) -> None:
        """f32 теряет точность double"""
        stored = ScalarType.F32.store(0.1)
        assert stored != 0.1
        assert stored == pytest.approx(0.1, rel=1e-7)

    def test_f32_overflow_is_infinite(self) -> None:
        """За пределами диапазона f32 → ±Inf"""
        assert ScalarType.F32.store(1e40) == math.inf
        assert ScalarType.F32.store(-1e40) == -math.inf

    def test_bool_threshold(self) -> None:
        """bool: True только для значений > 0.5"""
        assert ScalarType.BOOL.store(0.51) is True
        assert ScalarType.BOOL.store(0.5) is False
        assert ScalarType.BOOL.store(-3.0) is False

    def test_cstr_store_rejected(self) -> None:
        with pytest.raises(TypeError):
            ScalarType.CSTR.store(1.0)

    def test_read_bool(self) -> None:
        """bool читается как 1.0 / 0.0"""
        assert ScalarType.BOOL.read(True) == 1.0
        assert ScalarType.BOOL.read(False) == 0.0
        assert ScalarType.I32.read(7) == 7.0
