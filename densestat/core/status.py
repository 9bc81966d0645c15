"""
Status & Result — единая таксономия ошибок

Все fallible операции densestat возвращают дискриминированный результат:
- Status: код завершения (OK или вид ошибки)
- Result: frozen dataclass со статусом, значением и диагностикой

Обычные ошибки использования (None-аргумент, индекс вне диапазона,
несовпадение размерностей) НЕ бросают исключений: вызывающий код обязан
проверить статус. DataError бросается только из явного unwrap().

Виды ошибок:
- NULL: обязательный аргумент/handle отсутствует (None или освобождён)
- ALLOC: не удалось выделить буфер
- BOUNDS: индекс строки/столбца вне [0, dim)
- DIM_MISMATCH: формы операндов несовместимы
- EMPTY: недостаточно элементов (1 для mean, 2 для variance/covariance)
- INVALID: невалидные параметры (вспомогательные модули)
- UNSUPPORTED: неподдерживаемый тег типа / метод / модель
"""

from dataclasses import dataclass
from enum import Enum
from typing import Generic, Optional, TypeVar

T = TypeVar("T")


# =============================================================================
# STATUS
# =============================================================================


class Status(str, Enum):
    """Код завершения операции"""

    OK = "ok"
    NULL = "null"
    ALLOC = "alloc"
    BOUNDS = "bounds"
    DIM_MISMATCH = "dim_mismatch"
    EMPTY = "empty"
    INVALID = "invalid"
    UNSUPPORTED = "unsupported"


_STATUS_MESSAGES = {
    Status.OK: "Success",
    Status.NULL: "Required argument is missing",
    Status.ALLOC: "Allocation failed",
    Status.BOUNDS: "Index out of bounds",
    Status.DIM_MISMATCH: "Dimension mismatch",
    Status.EMPTY: "Not enough elements",
    Status.INVALID: "Invalid argument",
    Status.UNSUPPORTED: "Unsupported type or method",
}


# =============================================================================
# EXCEPTIONS
# =============================================================================


class DataError(Exception):
    """
    Ошибка densestat, поднятая из Result.unwrap() или операторов Matrix.

    Attributes:
        status: Вид ошибки (никогда не Status.OK)
        details: Диагностика операции
    """

    def __init__(self, status: Status, details: str = ""):
        self.status = status
        self.details = details
        message = _STATUS_MESSAGES.get(status, status.value)
        if details:
            message = f"{message}: {details}"
        super().__init__(message)


# =============================================================================
# RESULT
# =============================================================================


@dataclass(frozen=True)
class Result(Generic[T]):
    """Результат fallible операции."""

    status: Status
    value: Optional[T] = None

    # Детали
    details: str = ""

    @property
    def ok(self) -> bool:
        return self.status is Status.OK

    def unwrap(self) -> T:
        """
        Значение успешного результата.

        Raises:
            DataError: если status != OK
        """
        if self.status is not Status.OK:
            raise DataError(self.status, self.details)
        return self.value  # type: ignore[return-value]

    @classmethod
    def success(cls, value: T, details: str = "") -> "Result[T]":
        return cls(status=Status.OK, value=value, details=details)

    @classmethod
    def failure(cls, status: Status, details: str = "") -> "Result[T]":
        if status is Status.OK:
            raise ValueError("failure() requires a non-OK status")
        return cls(status=status, value=None, details=details)
