"""
ScalarType — теги скалярных типов для буферов вызывающего кода

Закрытое перечисление поддерживаемых тегов ("i8", "f32", "bool", ...).
Вместо сравнения строк в каждом модуле все чтения/записи проходят через
единый accessor ScalarType.read()/ScalarType.store().

Правила записи (store):
- Целые: усечение к нулю, затем wrap по ширине типа (как C-приведение)
- Беззнаковые: отрицательные значения ограничиваются нулём
- bool: True если value > 0.5
- f32: округление через single precision
- NaN в целом типе → 0, ±Inf → насыщение до границы типа
- hex/oct/bin: подсказки представления, хранятся как u64
"""

import math
import struct
from enum import Enum
from typing import Final, Optional, Union

# =============================================================================
# CONSTANTS
# =============================================================================

_INTEGER_LAYOUT: Final[dict[str, tuple[int, bool]]] = {
    # tag: (bits, signed)
    "i8": (8, True),
    "i16": (16, True),
    "i32": (32, True),
    "i64": (64, True),
    "u8": (8, False),
    "u16": (16, False),
    "u32": (32, False),
    "u64": (64, False),
    "size": (64, False),
    "hex": (64, False),
    "oct": (64, False),
    "bin": (64, False),
}


# =============================================================================
# SCALAR TYPE
# =============================================================================


class ScalarType(str, Enum):
    """Тег скалярного типа элементов буфера"""

    I8 = "i8"
    I16 = "i16"
    I32 = "i32"
    I64 = "i64"
    U8 = "u8"
    U16 = "u16"
    U32 = "u32"
    U64 = "u64"
    F32 = "f32"
    F64 = "f64"
    SIZE = "size"
    BOOL = "bool"
    HEX = "hex"
    OCT = "oct"
    BIN = "bin"
    CSTR = "cstr"

    @classmethod
    def resolve(cls, tag: Union["ScalarType", str, None]) -> Optional["ScalarType"]:
        """
        Приведение тега к ScalarType.

        Returns:
            ScalarType или None для неизвестного тега

        Examples:
            >>> ScalarType.resolve("f32")
            <ScalarType.F32: 'f32'>
            >>> ScalarType.resolve("f128") is None
            True
        """
        if isinstance(tag, cls):
            return tag
        if not isinstance(tag, str):
            return None
        try:
            return cls(tag)
        except ValueError:
            return None

    # -------------------------------------------------------------------------
    # Predicates
    # -------------------------------------------------------------------------

    @property
    def is_integer(self) -> bool:
        return self.value in _INTEGER_LAYOUT

    @property
    def is_float(self) -> bool:
        return self in (ScalarType.F32, ScalarType.F64)

    @property
    def is_numeric(self) -> bool:
        return self is not ScalarType.CSTR

    @property
    def itemsize(self) -> int:
        """Размер элемента в байтах (0 для cstr)."""
        if self is ScalarType.BOOL:
            return 1
        if self is ScalarType.F32:
            return 4
        if self is ScalarType.F64:
            return 8
        if self is ScalarType.CSTR:
            return 0
        bits, _ = _INTEGER_LAYOUT[self.value]
        return bits // 8

    # -------------------------------------------------------------------------
    # Accessors
    # -------------------------------------------------------------------------

    def read(self, value: Union[int, float, bool]) -> float:
        """Элемент буфера как double."""
        if self is ScalarType.BOOL:
            return 1.0 if value else 0.0
        return float(value)

    def store(self, value: float) -> Union[int, float, bool]:
        """
        Приведение double к представлению элемента этого типа.

        Examples:
            >>> ScalarType.I8.store(130.7)
            -126
            >>> ScalarType.U32.store(-5.0)
            0
            >>> ScalarType.BOOL.store(0.6)
            True
        """
        if self is ScalarType.F64:
            return float(value)
        if self is ScalarType.F32:
            return _round_f32(value)
        if self is ScalarType.BOOL:
            return value > 0.5
        if self is ScalarType.CSTR:
            raise TypeError("cstr elements cannot be stored from a number")

        bits, signed = _INTEGER_LAYOUT[self.value]
        return _to_integer(value, bits, signed)


# =============================================================================
# HELPERS
# =============================================================================


def _round_f32(value: float) -> float:
    try:
        return struct.unpack("f", struct.pack("f", value))[0]
    except OverflowError:
        return math.copysign(math.inf, value)


def _to_integer(value: float, bits: int, signed: bool) -> int:
    if signed:
        lo, hi = -(1 << (bits - 1)), (1 << (bits - 1)) - 1
    else:
        lo, hi = 0, (1 << bits) - 1

    if math.isnan(value):
        return 0
    if math.isinf(value):
        return hi if value > 0 else lo

    if not signed and value < 0:
        return 0

    truncated = int(value)
    wrapped = truncated & ((1 << bits) - 1)
    if signed and wrapped > hi:
        wrapped -= 1 << bits
    return wrapped


TypeTag = Union[ScalarType, str]
