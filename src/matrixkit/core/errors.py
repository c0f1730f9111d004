"""
Errors — таксономия ошибок matrixkit

Единый контракт сигнализации ошибок для Matrix и Vector engine.

Все ошибки наследуются от MatrixError:
- DimensionError: несовместимые размерности / невалидная структура grid
- InvalidArgumentError: индекс вне диапазона, невалидный размер, не-число, NaN/Inf
  - ContractViolationError: payload from_dict/from_json нарушает JSON Schema
- SingularMatrixError: |det| < tolerance при обращении матрицы
- ZeroVectorError: нормализация вектора с magnitude < tolerance

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Ошибка выбрасывается ДО любой мутации и ДО построения результата
2. Библиотека не глотает и не ретраит ошибки, восстановление на стороне caller
3. Classmethod-фабрики только форматируют текст, логики в них нет
"""


class MatrixError(Exception):
    """Базовый класс всех ошибок matrixkit."""


# =============================================================================
# DIMENSION ERRORS
# =============================================================================


class DimensionError(MatrixError):
    """
    Несовместимые размерности матриц или векторов.

    Примеры:
    - сложение матриц разного shape
    - умножение, где cols(A) != rows(B)
    - determinant/cofactor/inverse для неквадратной матрицы
    - пустой или не прямоугольный grid
    """

    def __init__(self, message: str = "Matrix dimension mismatch"):
        super().__init__(message)

    @classmethod
    def for_addition(cls, rows1: int, cols1: int, rows2: int, cols2: int) -> "DimensionError":
        return cls(
            f"Cannot add matrices: ({rows1}x{cols1}) and ({rows2}x{cols2}) "
            f"must have same dimensions"
        )

    @classmethod
    def for_subtraction(cls, rows1: int, cols1: int, rows2: int, cols2: int) -> "DimensionError":
        return cls(
            f"Cannot subtract matrices: ({rows1}x{cols1}) and ({rows2}x{cols2}) "
            f"must have same dimensions"
        )

    @classmethod
    def for_multiplication(
        cls, rows1: int, cols1: int, rows2: int, cols2: int
    ) -> "DimensionError":
        return cls(
            f"Cannot multiply matrices: ({rows1}x{cols1}) x ({rows2}x{cols2}) - "
            f"columns of first matrix ({cols1}) must equal rows of second matrix ({rows2})"
        )

    @classmethod
    def for_square_required(
        cls, rows: int, cols: int, operation: str = "operation"
    ) -> "DimensionError":
        return cls(f"{operation} requires square matrix, but matrix is ({rows}x{cols})")

    @classmethod
    def for_vectors(cls, size1: int, size2: int, operation: str = "operation") -> "DimensionError":
        return cls(
            f"Cannot perform {operation}: vectors must have same size, "
            f"but have {size1} and {size2}"
        )

    @classmethod
    def for_length(cls, expected: int, actual: int, kind: str = "row") -> "DimensionError":
        return cls(f"Invalid {kind} length: expected {expected} elements, got {actual}")

    @classmethod
    def for_empty(cls, kind: str = "matrix") -> "DimensionError":
        return cls(f"{kind.capitalize()} cannot be empty")

    @classmethod
    def for_invalid_structure(cls, reason: str, kind: str = "matrix") -> "DimensionError":
        return cls(f"Invalid {kind} structure: {reason}")

    @classmethod
    def for_inconsistent_row(
        cls, expected_length: int, actual_length: int, row_index: int
    ) -> "DimensionError":
        return cls(
            f"Inconsistent row length at row {row_index}: "
            f"expected {expected_length} columns, got {actual_length}"
        )


# =============================================================================
# ARGUMENT ERRORS
# =============================================================================


class InvalidArgumentError(MatrixError):
    """
    Невалидный аргумент операции.

    Индекс вне диапазона, неположительный размер фабрики,
    не-числовой или не конечный (NaN/Inf) элемент или скаляр.
    """

    def __init__(self, message: str = "Invalid argument provided"):
        super().__init__(message)

    @classmethod
    def for_invalid_index(cls, index: int, upper: int, kind: str = "index") -> "InvalidArgumentError":
        return cls(f"Invalid {kind} index: {index}. Must be between 0 and {upper - 1}")

    @classmethod
    def for_invalid_size(cls, size: object, parameter: str = "size") -> "InvalidArgumentError":
        return cls(f"Invalid {parameter}: {size!r}. Must be a positive integer")

    @classmethod
    def for_non_numeric(
        cls, value: object, row: int | None = None, col: int | None = None
    ) -> "InvalidArgumentError":
        return cls(
            f"Non-numeric value{_location(row, col)}: expected real number, "
            f"got {type(value).__name__}"
        )

    @classmethod
    def for_non_finite(
        cls, value: object, row: int | None = None, col: int | None = None
    ) -> "InvalidArgumentError":
        return cls(f"Non-finite value{_location(row, col)}: {value!r} is not a finite real number")


class ContractViolationError(InvalidArgumentError):
    """
    Сериализованный payload не соответствует JSON Schema контракту.

    Хранит имя схемы и путь к нарушившему элементу ("data/0/1").
    """

    def __init__(
        self,
        message: str = "Payload violates contract",
        schema_name: str | None = None,
        path: str | None = None,
    ):
        super().__init__(message)
        self.schema_name = schema_name
        self.path = path

    @classmethod
    def for_schema(cls, schema_name: str, path: str, reason: str) -> "ContractViolationError":
        return cls(
            f"Payload violates {schema_name} contract at {path or '<root>'}: {reason}",
            schema_name=schema_name,
            path=path,
        )


def _location(row: int | None, col: int | None) -> str:
    if row is not None and col is not None:
        return f" at position ({row}, {col})"
    if row is not None:
        return f" at index {row}"
    return ""


# =============================================================================
# NUMERICAL ERRORS
# =============================================================================


class SingularMatrixError(MatrixError):
    """
    Матрица вырождена: |det| < tolerance.

    Хранит determinant и tolerance для диагностики.
    Tolerance абсолютная, не относительная.
    """

    def __init__(
        self,
        message: str = "Matrix is singular (determinant = 0)",
        determinant: float | None = None,
        tolerance: float | None = None,
    ):
        super().__init__(message)
        self.determinant = determinant
        self.tolerance = tolerance

    @classmethod
    def with_determinant(cls, determinant: float, tolerance: float) -> "SingularMatrixError":
        return cls(
            f"Matrix is singular: determinant = {determinant:.15f} "
            f"(below tolerance of {tolerance})",
            determinant=determinant,
            tolerance=tolerance,
        )


class ZeroVectorError(MatrixError, ArithmeticError):
    """
    Вектор нулевой длины (magnitude < tolerance) не может быть нормализован.

    Отдельный вид в таксономии ("degenerate operand"), также ArithmeticError.
    """

    def __init__(
        self,
        message: str = "Cannot normalize zero vector",
        magnitude: float | None = None,
    ):
        super().__init__(message)
        self.magnitude = magnitude

    @classmethod
    def for_normalization(cls, magnitude: float) -> "ZeroVectorError":
        return cls(
            f"Cannot normalize zero vector (magnitude = {magnitude:.3e})",
            magnitude=magnitude,
        )
