"""
Numerical Safeguards — Tolerances & Validation Primitives

Модуль задаёт численные допуски и примитивы проверки, общие для
Matrix и Vector engine:
- Epsilon-константы (singularity, zero vector, float comparison)
- Epsilon-сравнения float с учётом машинной точности
- Проверка скаляров, размеров и индексов до начала вычислений

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Все допуски АБСОЛЮТНЫЕ (кроме rel_tol в is_close)
2. Валидация выполняется до любой мутации и аллокации результата
3. bool, NaN и ±Inf не считаются вещественными элементами
4. Все операции детерминированы и воспроизводимы
"""

import math
from numbers import Real
from typing import Final

from matrixkit.core.errors import InvalidArgumentError

# =============================================================================
# EPSILON-ПАРАМЕТРЫ
# =============================================================================

# Порог вырожденности: |det| < EPS_SINGULAR → SingularMatrixError
# Абсолютный допуск: для матриц с большими элементами может пропускать
# плохо обусловленные матрицы (известное ограничение точности)
EPS_SINGULAR: Final[float] = 1e-10

# Порог нулевого вектора: magnitude < EPS_ZERO_VECTOR → ZeroVectorError
EPS_ZERO_VECTOR: Final[float] = 1e-10

# Epsilon для сравнения float (относительная толерантность)
EPS_FLOAT_COMPARE_REL: Final[float] = 1e-9

# Epsilon для сравнения float (абсолютная толерантность)
EPS_FLOAT_COMPARE_ABS: Final[float] = 1e-12

# Размер, начиная с которого Laplace expansion логирует предупреждение (O(N!))
LAPLACE_WARN_SIZE: Final[int] = 10


# =============================================================================
# ПРОВЕРКА ЗНАЧЕНИЙ
# =============================================================================


def is_valid_float(value: float) -> bool:
    """
    Проверка, является ли float валидным (не NaN, не Inf).

    Args:
        value: Проверяемое значение

    Returns:
        True если значение конечное, False если NaN или Inf
    """
    return math.isfinite(value)


def is_real_number(value: object) -> bool:
    """
    Проверка, что значение является вещественным числом.

    bool формально является int, но как элемент матрицы отвергается.

    Examples:
        >>> is_real_number(1.5)
        True
        >>> is_real_number(True)
        False
        >>> is_real_number("1")
        False
    """
    return isinstance(value, Real) and not isinstance(value, bool)


def ensure_real(value: object, row: int | None = None, col: int | None = None) -> float:
    """
    Приведение значения к float с проверкой типа и конечности.

    NaN, ±Inf и int вне диапазона float отвергаются.

    Args:
        value: Элемент или скаляр
        row: Индекс строки (для сообщения об ошибке)
        col: Индекс столбца (для сообщения об ошибке)

    Returns:
        float(value)

    Raises:
        InvalidArgumentError: Если value не вещественное число, NaN или Inf
    """
    if not is_real_number(value):
        raise InvalidArgumentError.for_non_numeric(value, row, col)

    try:
        result = float(value)
    except OverflowError as e:
        raise InvalidArgumentError.for_non_finite(value, row, col) from e

    if not is_valid_float(result):
        raise InvalidArgumentError.for_non_finite(value, row, col)
    return result


# =============================================================================
# EPSILON-СРАВНЕНИЯ FLOAT
# =============================================================================


def is_close(
    a: float,
    b: float,
    rel_tol: float = EPS_FLOAT_COMPARE_REL,
    abs_tol: float = EPS_FLOAT_COMPARE_ABS,
) -> bool:
    """
    Сравнение float с учётом машинной точности.

    Алгоритм:
        abs(a - b) <= max(rel_tol * max(abs(a), abs(b)), abs_tol)

    Examples:
        >>> is_close(1.0, 1.0 + 1e-10)
        True
        >>> is_close(1.0, 1.1)
        False
    """
    return math.isclose(a, b, rel_tol=rel_tol, abs_tol=abs_tol)


def is_below_tolerance(value: float, tol: float) -> bool:
    """
    Строгая проверка abs(value) < tol.

    Используется для решений о вырожденности (determinant, magnitude).
    В отличие от is_close, граница tol НЕ считается нулём.

    Raises:
        ValueError: Если tol <= 0
    """
    validate_tolerance(tol)
    return abs(value) < tol


def sign_for(k: int) -> float:
    """
    Знак члена Laplace expansion: +1 для чётного k, -1 для нечётного.

    Examples:
        >>> sign_for(0)
        1.0
        >>> sign_for(3)
        -1.0
    """
    return 1.0 if k % 2 == 0 else -1.0


# =============================================================================
# ВАЛИДАЦИЯ ПАРАМЕТРОВ
# =============================================================================


def validate_tolerance(tol: float, name: str = "tol") -> None:
    """
    Валидация допуска.

    Raises:
        ValueError: Если tol <= 0 или NaN/Inf
    """
    if not is_valid_float(tol):
        raise ValueError(f"{name} must be a valid float (not NaN/Inf), got {tol}")

    if tol <= 0:
        raise ValueError(f"{name} must be positive, got {tol}")


def validate_positive_size(value: object, name: str = "size") -> int:
    """
    Валидация размера для фабрик (identity, zeros, ones).

    Args:
        value: Проверяемый размер
        name: Имя параметра (для сообщения об ошибке)

    Returns:
        Размер как int

    Raises:
        InvalidArgumentError: Если value не int или value < 1
    """
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        raise InvalidArgumentError.for_invalid_size(value, name)
    return value


def validate_index(index: int, upper: int, kind: str = "index") -> None:
    """
    Валидация индекса в диапазоне [0, upper).

    Отрицательные индексы НЕ допускаются (в отличие от list indexing).

    Raises:
        InvalidArgumentError: Если index вне [0, upper)
    """
    if isinstance(index, bool) or not isinstance(index, int) or index < 0 or index >= upper:
        raise InvalidArgumentError.for_invalid_index(index, upper, kind)
