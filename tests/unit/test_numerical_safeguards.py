"""
Тесты для модуля Numerical Safeguards

Проверяет:
1. Epsilon-константы
2. Проверку вещественных чисел (bool отвергается)
3. Epsilon-сравнения float
4. Валидацию допусков, размеров и индексов
"""

import math

import pytest

from matrixkit.core.errors import InvalidArgumentError
from matrixkit.core.math.numerical_safeguards import (
    EPS_FLOAT_COMPARE_ABS,
    EPS_FLOAT_COMPARE_REL,
    EPS_SINGULAR,
    EPS_ZERO_VECTOR,
    LAPLACE_WARN_SIZE,
    ensure_real,
    is_below_tolerance,
    is_close,
    is_real_number,
    is_valid_float,
    sign_for,
    validate_index,
    validate_positive_size,
    validate_tolerance,
)

# =============================================================================
# ТЕСТЫ КОНСТАНТ
# =============================================================================


class TestConstants:
    """Тесты epsilon-констант"""

    def test_singular_and_zero_vector_thresholds(self) -> None:
        """Пороги вырожденности фиксированы на 1e-10"""
        assert EPS_SINGULAR == 1e-10
        assert EPS_ZERO_VECTOR == 1e-10

    def test_compare_tolerances_positive(self) -> None:
        assert EPS_FLOAT_COMPARE_REL > 0
        assert EPS_FLOAT_COMPARE_ABS > 0
        assert EPS_FLOAT_COMPARE_ABS < EPS_SINGULAR

    def test_laplace_warn_size(self) -> None:
        assert LAPLACE_WARN_SIZE == 10


# =============================================================================
# ТЕСТЫ ПРОВЕРКИ ЗНАЧЕНИЙ
# =============================================================================


class TestRealNumbers:
    """Тесты is_real_number / ensure_real"""

    def test_ints_and_floats_are_real(self) -> None:
        assert is_real_number(1)
        assert is_real_number(-2.5)
        assert is_real_number(0)

    def test_bool_is_not_real(self) -> None:
        """bool формально int, но отвергается"""
        assert not is_real_number(True)
        assert not is_real_number(False)

    def test_non_numbers_rejected(self) -> None:
        assert not is_real_number("1")
        assert not is_real_number(None)
        assert not is_real_number([1])
        assert not is_real_number(1 + 2j)

    def test_ensure_real_converts_to_float(self) -> None:
        result = ensure_real(3)
        assert result == 3.0
        assert isinstance(result, float)

    def test_ensure_real_raises_with_position(self) -> None:
        with pytest.raises(InvalidArgumentError, match=r"at position \(1, 2\)"):
            ensure_real("x", 1, 2)

    def test_ensure_real_raises_with_index(self) -> None:
        with pytest.raises(InvalidArgumentError, match="at index 4"):
            ensure_real(None, 4)

    def test_ensure_real_rejects_non_finite(self) -> None:
        """NaN/Inf проходят isinstance(Real), но не ensure_real"""
        for value in (math.nan, math.inf, -math.inf):
            assert is_real_number(value)
            with pytest.raises(InvalidArgumentError, match="Non-finite"):
                ensure_real(value)

    def test_ensure_real_rejects_int_overflow(self) -> None:
        with pytest.raises(InvalidArgumentError, match=r"Non-finite value at position \(0, 1\)"):
            ensure_real(10**400, 0, 1)

    def test_is_valid_float(self) -> None:
        assert is_valid_float(1.0)
        assert not is_valid_float(float("nan"))
        assert not is_valid_float(float("inf"))


# =============================================================================
# ТЕСТЫ EPSILON-СРАВНЕНИЙ
# =============================================================================


class TestIsClose:
    """Тесты is_close"""

    def test_close_values(self) -> None:
        assert is_close(1.0, 1.0 + 1e-10)
        assert is_close(0.0, 1e-13)

    def test_distant_values(self) -> None:
        assert not is_close(1.0, 1.1)
        assert not is_close(0.0, 1e-6)

    def test_custom_tolerances(self) -> None:
        assert is_close(1.0, 1.05, rel_tol=0.1)
        assert is_close(0.0, 1e-6, abs_tol=1e-5)


class TestIsBelowTolerance:
    """Тесты is_below_tolerance: строгая граница"""

    def test_below(self) -> None:
        assert is_below_tolerance(0.0, 1e-10)
        assert is_below_tolerance(5e-11, 1e-10)
        assert is_below_tolerance(-5e-11, 1e-10)

    def test_boundary_not_below(self) -> None:
        """Ровно tol не считается нулём"""
        assert not is_below_tolerance(1e-10, 1e-10)
        assert not is_below_tolerance(-1e-10, 1e-10)

    def test_above(self) -> None:
        assert not is_below_tolerance(1.0, 1e-10)
        assert not is_below_tolerance(-2.0, 1e-10)

    def test_invalid_tol_raises(self) -> None:
        with pytest.raises(ValueError, match="tol must be positive"):
            is_below_tolerance(1.0, 0.0)


class TestSignFor:
    """Тесты знака Laplace expansion"""

    def test_alternation(self) -> None:
        assert [sign_for(k) for k in range(5)] == [1.0, -1.0, 1.0, -1.0, 1.0]


# =============================================================================
# ТЕСТЫ ВАЛИДАЦИИ
# =============================================================================


class TestValidateTolerance:
    def test_valid(self) -> None:
        validate_tolerance(1e-10)
        validate_tolerance(1.0)

    def test_non_positive_raises(self) -> None:
        with pytest.raises(ValueError, match="must be positive"):
            validate_tolerance(0.0)
        with pytest.raises(ValueError, match="must be positive"):
            validate_tolerance(-1e-10)

    def test_nan_inf_raises(self) -> None:
        with pytest.raises(ValueError, match="not NaN/Inf"):
            validate_tolerance(float("nan"))
        with pytest.raises(ValueError, match="not NaN/Inf"):
            validate_tolerance(math.inf, name="abs_tol")


class TestValidatePositiveSize:
    def test_valid(self) -> None:
        assert validate_positive_size(1) == 1
        assert validate_positive_size(7, "rows") == 7

    @pytest.mark.parametrize("value", [0, -1, 2.0, "3", None, True])
    def test_invalid_raises(self, value) -> None:
        with pytest.raises(InvalidArgumentError, match="Must be a positive integer"):
            validate_positive_size(value)


class TestValidateIndex:
    def test_valid_bounds(self) -> None:
        validate_index(0, 3)
        validate_index(2, 3)

    @pytest.mark.parametrize("index", [-1, 3, 10])
    def test_out_of_range_raises(self, index) -> None:
        with pytest.raises(InvalidArgumentError, match=r"Invalid row index: .*Must be between 0 and 2"):
            validate_index(index, 3, "row")
