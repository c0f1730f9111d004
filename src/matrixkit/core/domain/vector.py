"""
Vector — вещественный вектор

Immutable последовательность вещественных чисел. Все операции возвращают
новый Vector; мутаторов нет.

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Размер фиксирован после конструирования (пустой вектор допустим)
2. dot / add / subtract требуют равных размеров
3. normalize отказывает при magnitude < tol (ZeroVectorError)
4. Элементы конечные вещественные числа (NaN/Inf → InvalidArgumentError)
"""

import json
import logging
import math
from collections.abc import Iterable, Iterator
from typing import Any, Final

from matrixkit.core.contracts.validators import validate_vector_contract
from matrixkit.core.domain.snapshots import VectorSnapshot
from matrixkit.core.errors import DimensionError, InvalidArgumentError, ZeroVectorError
from matrixkit.core.math.numerical_safeguards import (
    EPS_FLOAT_COMPARE_ABS,
    EPS_FLOAT_COMPARE_REL,
    EPS_ZERO_VECTOR,
    ensure_real,
    is_below_tolerance,
    is_close,
    is_real_number,
    validate_tolerance,
)

logger = logging.getLogger(__name__)

# Элемент: 4 знака после точки, разделитель ", "
VECTOR_CELL_FORMAT: Final[str] = "%.4f"


class Vector:
    """Вектор размера N >= 0 над вещественными числами."""

    __slots__ = ("_data",)

    def __init__(self, data: Iterable[float]):
        """
        Args:
            data: Последовательность (или итератор) вещественных чисел

        Raises:
            DimensionError: Если data не iterable или строка
            InvalidArgumentError: Если элемент не конечное вещественное число
        """
        if isinstance(data, (str, bytes)) or not isinstance(data, Iterable):
            raise DimensionError.for_invalid_structure(
                f"expected iterable of numbers, got {type(data).__name__}", kind="vector"
            )
        self._data: tuple[float, ...] = tuple(
            ensure_real(value, i) for i, value in enumerate(data)
        )

    @property
    def size(self) -> int:
        return len(self._data)

    def get(self, i: int) -> float:
        """Элемент i; выход за диапазон даёт IndexError."""
        return self._data[i]

    def get_data(self) -> list[float]:
        return list(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __iter__(self) -> Iterator[float]:
        return iter(self._data)

    # -------------------------------------------------------------------------
    # Arithmetic
    # -------------------------------------------------------------------------

    def dot(self, other: "Vector") -> float:
        """
        Скалярное произведение.

        Raises:
            DimensionError: Если размеры различаются
        """
        self._require_same_size(other, "dot product")

        total = 0.0
        for a, b in zip(self._data, other._data):
            total += a * b
        return total

    def add(self, other: "Vector") -> "Vector":
        self._require_same_size(other, "addition")
        return Vector(a + b for a, b in zip(self._data, other._data))

    def subtract(self, other: "Vector") -> "Vector":
        self._require_same_size(other, "subtraction")
        return Vector(a - b for a, b in zip(self._data, other._data))

    def multiply(self, scalar: float) -> "Vector":
        factor = ensure_real(scalar)
        return Vector(value * factor for value in self._data)

    def magnitude(self) -> float:
        """L2 норма: sqrt(dot(self, self))."""
        return math.sqrt(self.dot(self))

    def normalize(self, tol: float = EPS_ZERO_VECTOR) -> "Vector":
        """
        Единичный вектор того же направления.

        Args:
            tol: Абсолютный порог нулевого вектора (default: EPS_ZERO_VECTOR = 1e-10)

        Raises:
            ZeroVectorError: Если magnitude < tol (в т.ч. пустой вектор)
            ValueError: Если tol <= 0
        """
        validate_tolerance(tol)
        mag = self.magnitude()

        if is_below_tolerance(mag, tol):
            logger.debug("Zero vector of size %d: magnitude=%.3e tol=%.1e", self.size, mag, tol)
            raise ZeroVectorError.for_normalization(mag)

        return self.multiply(1.0 / mag)

    def _require_same_size(self, other: "Vector", operation: str) -> None:
        _require_vector(other)
        if self.size != other.size:
            raise DimensionError.for_vectors(self.size, other.size, operation)

    # -------------------------------------------------------------------------
    # Comparison & operators
    # -------------------------------------------------------------------------

    def is_close(
        self,
        other: "Vector",
        rel_tol: float = EPS_FLOAT_COMPARE_REL,
        abs_tol: float = EPS_FLOAT_COMPARE_ABS,
    ) -> bool:
        """Поэлементное сравнение с допуском; разные размеры → False."""
        _require_vector(other)
        if self.size != other.size:
            return False
        return all(
            is_close(a, b, rel_tol=rel_tol, abs_tol=abs_tol)
            for a, b in zip(self._data, other._data)
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Vector):
            return NotImplemented
        return self._data == other._data

    def __hash__(self) -> int:
        return hash(self._data)

    def __add__(self, other: object) -> "Vector":
        if not isinstance(other, Vector):
            return NotImplemented
        return self.add(other)

    def __sub__(self, other: object) -> "Vector":
        if not isinstance(other, Vector):
            return NotImplemented
        return self.subtract(other)

    def __mul__(self, scalar: object) -> "Vector":
        if not is_real_number(scalar):
            return NotImplemented
        return self.multiply(scalar)  # type: ignore[arg-type]

    __rmul__ = __mul__

    # -------------------------------------------------------------------------
    # Serialization & presentation
    # -------------------------------------------------------------------------

    def to_snapshot(self) -> VectorSnapshot:
        return VectorSnapshot(size=self.size, data=list(self._data))

    def to_dict(self) -> dict:
        """Форма {"size": N, "data": [...]}."""
        return self.to_snapshot().model_dump()

    def to_json(self) -> str:
        return self.to_snapshot().model_dump_json()

    @classmethod
    def from_snapshot(cls, snapshot: VectorSnapshot) -> "Vector":
        return cls(snapshot.data)

    @classmethod
    def from_dict(cls, data: Any) -> "Vector":
        """
        Raises:
            ContractViolationError: Если payload не соответствует vector.json
            pydantic.ValidationError: Если size не совпадает с len(data)
        """
        validate_vector_contract(data)
        return cls.from_snapshot(VectorSnapshot.model_validate(data))

    @classmethod
    def from_json(cls, payload: str | bytes) -> "Vector":
        return cls.from_dict(json.loads(payload))

    def __str__(self) -> str:
        return "[ " + ", ".join(VECTOR_CELL_FORMAT % value for value in self._data) + " ]"

    def __repr__(self) -> str:
        return f"Vector({list(self._data)!r})"


def _require_vector(other: object) -> None:
    if not isinstance(other, Vector):
        raise InvalidArgumentError(f"Expected Vector operand, got {type(other).__name__}")
