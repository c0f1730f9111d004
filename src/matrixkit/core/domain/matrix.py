"""
Matrix — плотная вещественная матрица

Прямоугольный row-major grid вещественных чисел с арифметикой и
рекурсивным pipeline determinant → cofactor → inverse.

Модель мутабельности (двойная):
- set / set_row / set_column / set_data мутируют in-place
- все остальные операции возвращают НОВУЮ Matrix и не трогают операнды

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Rectangularity: каждая строка содержит ровно cols элементов, rows >= 1, cols >= 1
2. Матрица владеет своим grid эксклюзивно (конструктор копирует данные)
3. Валидация до мутации: неудачная операция не оставляет матрицу частично изменённой
4. Submatrix является независимой копией, не view
5. Элементы конечные вещественные числа (NaN/Inf → InvalidArgumentError)

АЛГОРИТМ determinant (Laplace expansion по первой строке):
    det(1x1) = a
    det(2x2) = a*d - b*c
    det(NxN) = Σ_j (-1)^j * a[0][j] * det(sub(0, j))

Сложность O(N!): без memoization и pivoting,
не production-grade для больших N.

ИНВЕРСИЯ:
    adj(A) = cofactor(A)^T
    A^-1 = adj(A) / det(A),  если |det(A)| >= tol (абсолютный допуск)
"""

import json
import logging
from collections.abc import Sequence
from typing import Any, Final

from matrixkit.core.contracts.validators import validate_matrix_contract
from matrixkit.core.domain.snapshots import MatrixSnapshot
from matrixkit.core.errors import (
    DimensionError,
    InvalidArgumentError,
    SingularMatrixError,
)
from matrixkit.core.math.numerical_safeguards import (
    EPS_FLOAT_COMPARE_ABS,
    EPS_FLOAT_COMPARE_REL,
    EPS_SINGULAR,
    LAPLACE_WARN_SIZE,
    ensure_real,
    is_below_tolerance,
    is_close,
    is_real_number,
    sign_for,
    validate_index,
    validate_positive_size,
    validate_tolerance,
)

logger = logging.getLogger(__name__)

# =============================================================================
# PRESENTATION
# =============================================================================

# Ячейка: ширина 8, 4 знака после точки, пробел-разделитель
MATRIX_CELL_FORMAT: Final[str] = "%8.4f "


# =============================================================================
# GRID VALIDATION
# =============================================================================


def _is_row(value: object) -> bool:
    return isinstance(value, Sequence) and not isinstance(value, (str, bytes))


def _validate_grid(data: Sequence[Sequence[float]]) -> list[list[float]]:
    """
    Валидация grid и построение независимой копии.

    Raises:
        DimensionError: пустой grid, не 2D структура, пустые или рваные строки
        InvalidArgumentError: не-числовой элемент
    """
    if not _is_row(data):
        raise DimensionError.for_invalid_structure("grid must be a sequence of rows")

    if len(data) == 0:
        raise DimensionError.for_empty("matrix")

    if not _is_row(data[0]):
        raise DimensionError("Matrix must be 2-dimensional array")

    cols = len(data[0])
    if cols == 0:
        raise DimensionError.for_invalid_structure("rows cannot be empty")

    grid: list[list[float]] = []
    for i, row in enumerate(data):
        if not _is_row(row):
            raise DimensionError.for_invalid_structure(f"row {i} is not a sequence")
        if len(row) != cols:
            raise DimensionError.for_inconsistent_row(cols, len(row), i)
        grid.append([ensure_real(value, i, j) for j, value in enumerate(row)])

    return grid


# =============================================================================
# MATRIX
# =============================================================================


class Matrix:
    """
    Плотная матрица R x C над вещественными числами.

    Не потокобезопасна: конкурентная мутация одного экземпляра должна
    сериализоваться вызывающей стороной.
    """

    def __init__(self, data: Sequence[Sequence[float]]):
        """
        Args:
            data: Прямоугольный grid (последовательность строк)

        Raises:
            DimensionError: Если grid пустой или не прямоугольный
            InvalidArgumentError: Если элемент не вещественное число
        """
        self._data = _validate_grid(data)
        self._rows = len(self._data)
        self._cols = len(self._data[0])

    # -------------------------------------------------------------------------
    # Factories
    # -------------------------------------------------------------------------

    @classmethod
    def identity(cls, n: int) -> "Matrix":
        """
        Единичная матрица n x n.

        Raises:
            InvalidArgumentError: Если n не положительное целое
        """
        validate_positive_size(n, "size")
        return cls([[1.0 if i == j else 0.0 for j in range(n)] for i in range(n)])

    @classmethod
    def zeros(cls, rows: int, cols: int) -> "Matrix":
        """Нулевая матрица rows x cols."""
        return cls._filled(rows, cols, 0.0)

    @classmethod
    def ones(cls, rows: int, cols: int) -> "Matrix":
        """Матрица rows x cols, заполненная единицами."""
        return cls._filled(rows, cols, 1.0)

    @classmethod
    def _filled(cls, rows: int, cols: int, value: float) -> "Matrix":
        validate_positive_size(rows, "rows")
        validate_positive_size(cols, "cols")
        return cls([[value] * cols for _ in range(rows)])

    # -------------------------------------------------------------------------
    # Shape & access
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
    def is_square(self) -> bool:
        return self._rows == self._cols

    def get_data(self) -> list[list[float]]:
        """Копия grid; мутация результата не влияет на матрицу."""
        return [list(row) for row in self._data]

    def get(self, i: int, j: int) -> float:
        """
        Элемент (i, j).

        Границы не проверяются явно: выход за диапазон даёт IndexError,
        отрицательные индексы работают как в list.
        """
        return self._data[i][j]

    def set(self, i: int, j: int, value: float) -> None:
        """
        Установка элемента (i, j) in-place.

        Raises:
            InvalidArgumentError: Если value не вещественное число
            IndexError: Если (i, j) вне grid
        """
        self._data[i][j] = ensure_real(value, i, j)

    # -------------------------------------------------------------------------
    # Bulk replacement (in-place)
    # -------------------------------------------------------------------------

    def set_row(self, i: int, values: Sequence[float]) -> None:
        """
        Замена строки i.

        Порядок проверок: сначала длина (DimensionError), затем индекс
        (InvalidArgumentError). Остальные строки не меняются.
        """
        if not _is_row(values):
            raise DimensionError.for_invalid_structure("row must be a sequence")
        if len(values) != self._cols:
            raise DimensionError.for_length(self._cols, len(values), "row")
        validate_index(i, self._rows, "row")

        self._data[i] = [ensure_real(value, i, j) for j, value in enumerate(values)]

    def set_column(self, j: int, values: Sequence[float]) -> None:
        """
        Замена столбца j. Правила симметричны set_row.
        """
        if not _is_row(values):
            raise DimensionError.for_invalid_structure("column must be a sequence")
        if len(values) != self._rows:
            raise DimensionError.for_length(self._rows, len(values), "column")
        validate_index(j, self._cols, "column")

        column = [ensure_real(value, i, j) for i, value in enumerate(values)]
        for i, value in enumerate(column):
            self._data[i][j] = value

    def set_data(self, data: Sequence[Sequence[float]]) -> None:
        """
        Полная замена grid.

        Новый grid проходит ту же валидацию, что и конструктор; при ошибке
        матрица остаётся без изменений. rows и cols пересчитываются.
        """
        grid = _validate_grid(data)
        self._data = grid
        self._rows = len(grid)
        self._cols = len(grid[0])

    # -------------------------------------------------------------------------
    # Arithmetic
    # -------------------------------------------------------------------------

    def add(self, other: "Matrix") -> "Matrix":
        """Поэлементная сумма. Shapes должны совпадать."""
        _require_matrix(other)
        if self.shape != other.shape:
            raise DimensionError.for_addition(self._rows, self._cols, other.rows, other.cols)

        return Matrix(
            [
                [a + b for a, b in zip(row, other_row)]
                for row, other_row in zip(self._data, other._data)
            ]
        )

    def subtract(self, other: "Matrix") -> "Matrix":
        """Поэлементная разность. Shapes должны совпадать."""
        _require_matrix(other)
        if self.shape != other.shape:
            raise DimensionError.for_subtraction(self._rows, self._cols, other.rows, other.cols)

        return Matrix(
            [
                [a - b for a, b in zip(row, other_row)]
                for row, other_row in zip(self._data, other._data)
            ]
        )

    def multiply(self, scalar: float) -> "Matrix":
        """Умножение на скаляр. Shape сохраняется."""
        factor = ensure_real(scalar)
        return Matrix([[value * factor for value in row] for row in self._data])

    def matrix_multiply(self, other: "Matrix") -> "Matrix":
        """
        Матричное произведение self x other.

        Triple loop с накоплением суммы, без компенсации ошибок округления.

        Returns:
            Matrix shape (self.rows, other.cols)

        Raises:
            DimensionError: Если self.cols != other.rows
        """
        _require_matrix(other)
        if self._cols != other.rows:
            raise DimensionError.for_multiplication(
                self._rows, self._cols, other.rows, other.cols
            )

        result: list[list[float]] = []
        for i in range(self._rows):
            result_row = []
            for j in range(other.cols):
                total = 0.0
                for k in range(self._cols):
                    total += self._data[i][k] * other._data[k][j]
                result_row.append(total)
            result.append(result_row)

        return Matrix(result)

    def transpose(self) -> "Matrix":
        """Транспонирование: shape (cols, rows), result[j][i] = self[i][j]."""
        return Matrix(
            [[self._data[i][j] for i in range(self._rows)] for j in range(self._cols)]
        )

    # -------------------------------------------------------------------------
    # Determinant / cofactor / inverse
    # -------------------------------------------------------------------------

    def get_sub_matrix(self, exclude_row: int, exclude_col: int) -> "Matrix":
        """
        Minor: матрица без строки exclude_row и столбца exclude_col.

        Порядок оставшихся строк и столбцов сохраняется. Результат:
        независимая копия.

        Raises:
            InvalidArgumentError: Если индекс вне диапазона
            DimensionError: Если результат пустой (1 строка или 1 столбец)
        """
        validate_index(exclude_row, self._rows, "row")
        validate_index(exclude_col, self._cols, "column")

        return Matrix(
            [
                [value for j, value in enumerate(row) if j != exclude_col]
                for i, row in enumerate(self._data)
                if i != exclude_row
            ]
        )

    def determinant(self) -> float:
        """
        Определитель через Laplace expansion по первой строке.

        Raises:
            DimensionError: Если матрица не квадратная
        """
        self._require_square("Determinant")
        self._warn_if_large("determinant")
        return self._laplace_determinant()

    def cofactor(self) -> "Matrix":
        """
        Матрица алгебраических дополнений:
            cofactor[i][j] = (-1)^(i+j) * det(sub(i, j))

        Для 1x1 результат [[1.0]] (определитель пустого minor равен 1).

        Raises:
            DimensionError: Если матрица не квадратная
        """
        self._require_square("Cofactor")
        self._warn_if_large("cofactor")
        return self._cofactor_matrix()

    def inverse(self, tol: float = EPS_SINGULAR) -> "Matrix":
        """
        Обратная матрица через adjugate.

        Args:
            tol: Абсолютный порог вырожденности (default: EPS_SINGULAR = 1e-10)

        Returns:
            adj(A) * (1 / det(A))

        Raises:
            DimensionError: Если матрица не квадратная
            SingularMatrixError: Если |det| < tol
            ValueError: Если tol <= 0
        """
        validate_tolerance(tol)
        det = self.determinant()

        if is_below_tolerance(det, tol):
            logger.debug("Singular %dx%d matrix: det=%.3e tol=%.1e", self._rows, self._cols, det, tol)
            raise SingularMatrixError.with_determinant(det, tol)

        adjugate = self._cofactor_matrix().transpose()
        return adjugate.multiply(1.0 / det)

    def _laplace_determinant(self) -> float:
        n = self._rows
        data = self._data

        if n == 1:
            return data[0][0]

        if n == 2:
            return data[0][0] * data[1][1] - data[0][1] * data[1][0]

        det = 0.0
        for j in range(n):
            minor = self.get_sub_matrix(0, j)
            det += sign_for(j) * data[0][j] * minor._laplace_determinant()

        return det

    def _cofactor_matrix(self) -> "Matrix":
        n = self._rows
        if n == 1:
            return Matrix([[1.0]])

        result: list[list[float]] = []
        for i in range(n):
            result_row = []
            for j in range(n):
                minor = self.get_sub_matrix(i, j)
                result_row.append(sign_for(i + j) * minor._laplace_determinant())
            result.append(result_row)

        return Matrix(result)

    def _require_square(self, operation: str) -> None:
        if not self.is_square:
            raise DimensionError.for_square_required(self._rows, self._cols, operation)

    def _warn_if_large(self, operation: str) -> None:
        if self._rows > LAPLACE_WARN_SIZE:
            logger.warning(
                "Laplace %s on %dx%d matrix is O(N!) and may not finish in reasonable time",
                operation,
                self._rows,
                self._cols,
            )

    # -------------------------------------------------------------------------
    # Comparison
    # -------------------------------------------------------------------------

    def is_close(
        self,
        other: "Matrix",
        rel_tol: float = EPS_FLOAT_COMPARE_REL,
        abs_tol: float = EPS_FLOAT_COMPARE_ABS,
    ) -> bool:
        """Поэлементное сравнение с допуском; разные shapes → False."""
        _require_matrix(other)
        if self.shape != other.shape:
            return False
        return all(
            is_close(a, b, rel_tol=rel_tol, abs_tol=abs_tol)
            for row, other_row in zip(self._data, other._data)
            for a, b in zip(row, other_row)
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Matrix):
            return NotImplemented
        return self._data == other._data

    # Мутабельна, не хэшируется
    __hash__ = None  # type: ignore[assignment]

    # -------------------------------------------------------------------------
    # Operators
    # -------------------------------------------------------------------------

    def __add__(self, other: object) -> "Matrix":
        if not isinstance(other, Matrix):
            return NotImplemented
        return self.add(other)

    def __sub__(self, other: object) -> "Matrix":
        if not isinstance(other, Matrix):
            return NotImplemented
        return self.subtract(other)

    def __mul__(self, scalar: object) -> "Matrix":
        if not is_real_number(scalar):
            return NotImplemented
        return self.multiply(scalar)  # type: ignore[arg-type]

    __rmul__ = __mul__

    def __matmul__(self, other: object) -> "Matrix":
        if not isinstance(other, Matrix):
            return NotImplemented
        return self.matrix_multiply(other)

    # -------------------------------------------------------------------------
    # Serialization
    # -------------------------------------------------------------------------

    def to_snapshot(self) -> MatrixSnapshot:
        return MatrixSnapshot(rows=self._rows, cols=self._cols, data=self.get_data())

    def to_dict(self) -> dict:
        """Форма {"rows": R, "cols": C, "data": [[...]]}."""
        return self.to_snapshot().model_dump()

    def to_json(self) -> str:
        return self.to_snapshot().model_dump_json()

    @classmethod
    def from_snapshot(cls, snapshot: MatrixSnapshot) -> "Matrix":
        return cls(snapshot.data)

    @classmethod
    def from_dict(cls, data: Any) -> "Matrix":
        """
        Десериализация: matrix.json контракт → strict MatrixSnapshot → Matrix.

        Raises:
            ContractViolationError: Если payload не соответствует matrix.json
            pydantic.ValidationError: Если заявленный shape не совпадает с data
            InvalidArgumentError: Если элемент NaN или Inf
        """
        validate_matrix_contract(data)
        return cls.from_snapshot(MatrixSnapshot.model_validate(data))

    @classmethod
    def from_json(cls, payload: str | bytes) -> "Matrix":
        """
        Raises:
            json.JSONDecodeError: Если payload не JSON
            (остальные как у from_dict)
        """
        return cls.from_dict(json.loads(payload))

    # -------------------------------------------------------------------------
    # Presentation
    # -------------------------------------------------------------------------

    def __str__(self) -> str:
        return "".join(
            "[ " + "".join(MATRIX_CELL_FORMAT % value for value in row) + "]\n"
            for row in self._data
        )

    def __repr__(self) -> str:
        return f"Matrix({self._data!r})"


def _require_matrix(other: object) -> None:
    if not isinstance(other, Matrix):
        raise InvalidArgumentError(f"Expected Matrix operand, got {type(other).__name__}")
