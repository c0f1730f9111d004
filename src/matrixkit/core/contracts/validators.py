"""
Contracts — JSON Schema граница десериализации

Каждый payload, входящий через Matrix.from_dict / Matrix.from_json и
Vector.from_dict / Vector.from_json, сначала проверяется против
JSON Schema (Draft 2020-12), и только потом разбирается в snapshot.

Схемы (package data, core/contracts/schema/):
- matrix.json: {"rows", "cols", "data": [[number]]}
- vector.json: {"size", "data": [number]}

Схема проверяет структуру и типы (bool не number, строки не number).
Согласованность заявленного shape с data проверяет snapshot.

Нарушение контракта → ContractViolationError с путём к элементу
(по jsonschema best_match), а не сырой jsonschema.ValidationError.
"""

import json
from pathlib import Path
from typing import Any, Dict, Final, Iterator

import jsonschema
from jsonschema import Draft202012Validator
from jsonschema.exceptions import ValidationError, best_match

from matrixkit.core.errors import ContractViolationError

SCHEMA_DIR: Final[Path] = Path(__file__).parent / "schema"


# =============================================================================
# SCHEMA LOADER
# =============================================================================


class SchemaLoader:
    """Кэширующий загрузчик схем из каталога (по умолчанию SCHEMA_DIR)."""

    def __init__(self, schema_dir: Path | None = None):
        self._schema_dir = schema_dir or SCHEMA_DIR
        if not self._schema_dir.is_dir():
            raise RuntimeError(f"Schema directory not found: {self._schema_dir}")
        self._schemas: Dict[str, Dict[str, Any]] = {}

    def load_schema(self, schema_name: str) -> Dict[str, Any]:
        """
        Raises:
            FileNotFoundError: Если <schema_name>.json отсутствует
            ValueError: Если файл не проходит meta-validation Draft 2020-12
        """
        cached = self._schemas.get(schema_name)
        if cached is not None:
            return cached

        schema_path = self._schema_dir / f"{schema_name}.json"
        if not schema_path.is_file():
            raise FileNotFoundError(f"Schema not found: {schema_path}")

        schema = json.loads(schema_path.read_text(encoding="utf-8"))
        try:
            Draft202012Validator.check_schema(schema)
        except jsonschema.SchemaError as e:
            raise ValueError(f"Invalid JSON Schema in {schema_name}.json: {e.message}") from e

        self._schemas[schema_name] = schema
        return schema


# =============================================================================
# CONTRACT VALIDATOR
# =============================================================================


def _error_path(error: ValidationError) -> str:
    """Путь к нарушившему элементу: "data/0/1"; пустая строка для корня."""
    return "/".join(str(part) for part in error.absolute_path)


class ContractValidator:
    """
    Контракт одной сериализованной формы ("matrix" или "vector").

    validate() переводит нарушения схемы в ContractViolationError;
    is_valid() / iter_errors() отдают сырые результаты jsonschema.
    """

    def __init__(self, schema_name: str, loader: SchemaLoader | None = None):
        self.schema_name = schema_name
        self._validator = Draft202012Validator((loader or SchemaLoader()).load_schema(schema_name))

    @property
    def schema(self) -> Dict[str, Any]:
        return self._validator.schema

    def validate(self, payload: Any) -> None:
        """
        Raises:
            ContractViolationError: По наиболее релевантной ошибке схемы
        """
        error = best_match(self._validator.iter_errors(payload))
        if error is not None:
            raise ContractViolationError.for_schema(
                self.schema_name, _error_path(error), error.message
            ) from error

    def is_valid(self, payload: Any) -> bool:
        return self._validator.is_valid(payload)

    def iter_errors(self, payload: Any) -> Iterator[ValidationError]:
        return self._validator.iter_errors(payload)


MATRIX_CONTRACT: Final[ContractValidator] = ContractValidator("matrix")
VECTOR_CONTRACT: Final[ContractValidator] = ContractValidator("vector")


def validate_matrix_contract(payload: Any) -> None:
    """
    Проверка payload формы {"rows", "cols", "data"} перед Matrix.from_dict.

    Raises:
        ContractViolationError: Если payload не соответствует matrix.json
    """
    MATRIX_CONTRACT.validate(payload)


def validate_vector_contract(payload: Any) -> None:
    """
    Проверка payload формы {"size", "data"} перед Vector.from_dict.

    Raises:
        ContractViolationError: Если payload не соответствует vector.json
    """
    VECTOR_CONTRACT.validate(payload)
