"""
Matrix — плотная матрица double в row-major раскладке

Модуль предоставляет владеющий тип Matrix:
- Создание с валидацией размерностей и zero-инициализацией буфера
- Проверяемый доступ get/set (BOUNDS вместо молчаливого clamp)
- fill, глубокое копирование
- Линейная алгебра: сложение и умножение

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. rows > 0 и cols > 0 для любой успешно созданной матрицы
2. len(data) == rows * cols всегда; index(r, c) = r * cols + c
3. rows/cols не меняются за время жизни объекта (нет reshape)
4. copy/add/mul всегда выделяют новый буфер, никогда не алиасят источник
5. Порядок накопления в mul: для фиксированной (i, j) слагаемые
   суммируются по возрастанию k, без компенсированного суммирования

Владение:
    Matrix эксклюзивно владеет буфером. free() освобождает его; после этого
    handle ведёт себя как None (rows == cols == 0, операции возвращают NULL).
    Повторный free() и free(None) — успешный no-op.
"""

import logging
import operator
from typing import Optional, Sequence

from densestat.core.status import Result, Status

logger = logging.getLogger(__name__)


# =============================================================================
# ALLOCATION
# =============================================================================


def _allocate_buffer(size: int) -> list[float]:
    """Zero-инициализированный буфер. MemoryError/OverflowError пропагируют."""
    return [0.0] * size


def _as_index(value: object) -> Optional[int]:
    """Целое через __index__ (int, numpy-целые); bool не принимается."""
    if isinstance(value, bool):
        return None
    try:
        return operator.index(value)
    except TypeError:
        return None


# =============================================================================
# MATRIX
# =============================================================================


class Matrix:
    """
    Плотная матрица double, row-major.

    Создаётся только через Matrix.create() / Matrix.from_rows();
    конструктор внутренний и не валидирует аргументы.
    """

    __slots__ = ("_rows", "_cols", "_data")

    def __init__(self, rows: int, cols: int, data: list[float]):
        self._rows = rows
        self._cols = cols
        self._data: Optional[list[float]] = data

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    @classmethod
    def create(cls, rows: int, cols: int) -> Optional["Matrix"]:
        """
        Создание матрицы rows x cols, заполненной нулями.

        Args:
            rows: Количество строк (> 0)
            cols: Количество столбцов (> 0)

        Returns:
            Новая Matrix или None, если размерность нулевая/невалидная
            либо буфер не удалось выделить

        Examples:
            >>> Matrix.create(2, 3).shape
            (2, 3)
            >>> Matrix.create(0, 3) is None
            True
        """
        n_rows = _as_index(rows)
        n_cols = _as_index(cols)
        if n_rows is None or n_cols is None or n_rows <= 0 or n_cols <= 0:
            logger.debug("rejected matrix dimensions %rx%r", rows, cols)
            return None
        rows, cols = n_rows, n_cols

        try:
            data = _allocate_buffer(rows * cols)
        except (MemoryError, OverflowError):
            logger.warning("matrix allocation failed for %dx%d", rows, cols)
            return None

        return cls(rows, cols, data)

    @classmethod
    def from_rows(cls, values: Sequence[Sequence[float]]) -> Result["Matrix"]:
        """
        Создание матрицы из списка строк.

        Returns:
            Result с новой Matrix; EMPTY для пустого ввода,
            DIM_MISMATCH для строк разной длины, ALLOC при нехватке памяти
        """
        if values is None:
            return Result.failure(Status.NULL, "rows are None")
        if len(values) == 0 or len(values[0]) == 0:
            return Result.failure(Status.EMPTY, "matrix needs at least one row and column")

        n_cols = len(values[0])
        for r, row in enumerate(values):
            if len(row) != n_cols:
                return Result.failure(
                    Status.DIM_MISMATCH,
                    f"row {r} has {len(row)} values, expected {n_cols}",
                )

        m = cls.create(len(values), n_cols)
        if m is None:
            return Result.failure(Status.ALLOC, f"{len(values)}x{n_cols}")

        for r, row in enumerate(values):
            for c, v in enumerate(row):
                m._data[r * n_cols + c] = float(v)
        return Result.success(m)

    def free(self) -> None:
        """Освобождение буфера. Повторный вызов — no-op."""
        self._data = None
        self._rows = 0
        self._cols = 0

    def __enter__(self) -> "Matrix":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.free()

    # -------------------------------------------------------------------------
    # Properties
    # -------------------------------------------------------------------------

    @property
    def rows(self) -> int:
        return self._rows

    @property
    def cols(self) -> int:
        return self._cols

    @property
    def shape(self) -> tuple[int, int]:
        return (self._rows, self._cols)

    @property
    def is_freed(self) -> bool:
        return self._data is None

    def _locate(self, row: object, col: object) -> Optional[int]:
        """Плоский индекс row * cols + col; None, если (row, col) вне матрицы."""
        r = _as_index(row)
        c = _as_index(col)
        if r is None or c is None:
            return None
        if not (0 <= r < self._rows and 0 <= c < self._cols):
            return None
        return r * self._cols + c

    # -------------------------------------------------------------------------
    # Element access
    # -------------------------------------------------------------------------

    def get(self, row: int, col: int) -> Result[float]:
        """
        Чтение элемента (row, col).

        Returns:
            Result со значением; NULL если матрица освобождена,
            BOUNDS если row >= rows или col >= cols (или индекс отрицательный)
        """
        if self._data is None:
            return Result.failure(Status.NULL, "matrix has been freed")
        index = self._locate(row, col)
        if index is None:
            return Result.failure(
                Status.BOUNDS, f"({row!r}, {col!r}) outside {self._rows}x{self._cols}"
            )
        return Result.success(self._data[index])

    def set(self, row: int, col: int, value: float) -> Status:
        """Запись элемента (row, col). Ошибки те же, что у get()."""
        if self._data is None:
            return Status.NULL
        index = self._locate(row, col)
        if index is None:
            return Status.BOUNDS
        self._data[index] = float(value)
        return Status.OK

    def fill(self, value: float) -> None:
        """Перезапись всех элементов значением value. No-op после free()."""
        if self._data is None:
            return
        value = float(value)
        for i in range(len(self._data)):
            self._data[i] = value

    def to_rows(self) -> list[list[float]]:
        """Копия содержимого как список строк ([] после free())."""
        if self._data is None:
            return []
        return [
            self._data[r * self._cols:(r + 1) * self._cols] for r in range(self._rows)
        ]

    # -------------------------------------------------------------------------
    # Copy & linear algebra
    # -------------------------------------------------------------------------

    def copy(self) -> Result["Matrix"]:
        """
        Глубокая копия с собственным буфером.

        Returns:
            Result с новой Matrix; NULL если источник освобождён, ALLOC
        """
        if self._data is None:
            return Result.failure(Status.NULL, "source matrix has been freed")

        dst = Matrix.create(self._rows, self._cols)
        if dst is None:
            return Result.failure(Status.ALLOC, f"copy of {self._rows}x{self._cols}")

        dst._data[:] = self._data
        return Result.success(dst)

    def add(self, other: Optional["Matrix"]) -> Result["Matrix"]:
        """
        Поэлементная сумма self + other.

        Returns:
            Result с новой Matrix той же формы;
            NULL, DIM_MISMATCH (формы различаются), ALLOC
        """
        if self._data is None or other is None or other._data is None:
            return Result.failure(Status.NULL, "operand is missing or freed")

        if self._rows != other._rows or self._cols != other._cols:
            logger.debug("add shape mismatch %s vs %s", self.shape, other.shape)
            return Result.failure(
                Status.DIM_MISMATCH, f"{self.shape} + {other.shape}"
            )

        out = Matrix.create(self._rows, self._cols)
        if out is None:
            return Result.failure(Status.ALLOC, f"sum of {self._rows}x{self._cols}")

        a = self._data
        b = other._data
        r = out._data
        for i in range(len(a)):
            r[i] = a[i] + b[i]
        return Result.success(out)

    def mul(self, other: Optional["Matrix"]) -> Result["Matrix"]:
        """
        Матричное произведение self @ other.

        Результат rows(self) x cols(other):
            out[i, j] = Σ_k self[i, k] * other[k, j], k по возрастанию

        Returns:
            Result с новой Matrix;
            NULL, DIM_MISMATCH (cols(self) != rows(other)), ALLOC
        """
        if self._data is None or other is None or other._data is None:
            return Result.failure(Status.NULL, "operand is missing or freed")

        if self._cols != other._rows:
            logger.debug("mul shape mismatch %s vs %s", self.shape, other.shape)
            return Result.failure(
                Status.DIM_MISMATCH, f"{self.shape} @ {other.shape}"
            )

        out = Matrix.create(self._rows, other._cols)
        if out is None:
            return Result.failure(
                Status.ALLOC, f"product of {self._rows}x{other._cols}"
            )

        a = self._data
        b = other._data
        r = out._data
        n_inner = self._cols
        n_out = other._cols
        for i in range(self._rows):
            for j in range(n_out):
                # Явный цикл: sum() компенсирует ошибку округления для float
                acc = 0.0
                for k in range(n_inner):
                    acc += a[i * n_inner + k] * b[k * n_out + j]
                r[i * n_out + j] = acc
        return Result.success(out)

    # -------------------------------------------------------------------------
    # Python protocol
    # -------------------------------------------------------------------------

    def __add__(self, other: object) -> "Matrix":
        if not isinstance(other, Matrix):
            return NotImplemented
        return self.add(other).unwrap()

    def __matmul__(self, other: object) -> "Matrix":
        if not isinstance(other, Matrix):
            return NotImplemented
        return self.mul(other).unwrap()

    def __copy__(self) -> "Matrix":
        return self.copy().unwrap()

    def __deepcopy__(self, memo: dict) -> "Matrix":
        return self.copy().unwrap()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Matrix):
            return NotImplemented
        return self.shape == other.shape and self._data == other._data

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        if self._data is None:
            return "Matrix(freed)"
        return f"Matrix({self._rows}x{self._cols}, {self.to_rows()!r})"


# =============================================================================
# HANDLE-LEVEL FUNCTIONS (None-tolerant)
# =============================================================================


def create(rows: int, cols: int) -> Optional[Matrix]:
    """Синоним Matrix.create()."""
    return Matrix.create(rows, cols)


def free(m: Optional[Matrix]) -> None:
    """Освобождение матрицы; free(None) — успешный no-op."""
    if m is None:
        return
    m.free()


def rows(m: Optional[Matrix]) -> int:
    """Количество строк; 0 для None или освобождённой матрицы."""
    return 0 if m is None else m.rows


def cols(m: Optional[Matrix]) -> int:
    """Количество столбцов; 0 для None или освобождённой матрицы."""
    return 0 if m is None else m.cols


def get(m: Optional[Matrix], row: int, col: int) -> Result[float]:
    """Чтение элемента; NULL для None."""
    if m is None:
        return Result.failure(Status.NULL, "matrix is None")
    return m.get(row, col)


def set(m: Optional[Matrix], row: int, col: int, value: float) -> Status:
    """Запись элемента; NULL для None."""
    if m is None:
        return Status.NULL
    return m.set(row, col, value)


def fill(m: Optional[Matrix], value: float) -> None:
    """Заполнение значением; fill(None) — no-op."""
    if m is None:
        return
    m.fill(value)


def copy(src: Optional[Matrix]) -> Result[Matrix]:
    if src is None:
        return Result.failure(Status.NULL, "source matrix is None")
    return src.copy()


def add(a: Optional[Matrix], b: Optional[Matrix]) -> Result[Matrix]:
    if a is None:
        return Result.failure(Status.NULL, "left operand is None")
    return a.add(b)


def mul(a: Optional[Matrix], b: Optional[Matrix]) -> Result[Matrix]:
    if a is None:
        return Result.failure(Status.NULL, "left operand is None")
    return a.mul(b)


__all__ = [
    "Matrix",
    "add",
    "cols",
    "copy",
    "create",
    "fill",
    "free",
    "get",
    "mul",
    "rows",
    "set",
]
