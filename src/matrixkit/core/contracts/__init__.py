"""
Contract Validation Module

JSON Schema контракты сериализованных Matrix/Vector (граница from_dict/from_json).
"""

from .validators import (
    MATRIX_CONTRACT,
    SCHEMA_DIR,
    VECTOR_CONTRACT,
    ContractValidator,
    SchemaLoader,
    validate_matrix_contract,
    validate_vector_contract,
)

__all__ = [
    # Schemas
    "SCHEMA_DIR",
    "SchemaLoader",
    # Validators
    "ContractValidator",
    "MATRIX_CONTRACT",
    "VECTOR_CONTRACT",
    # Functions
    "validate_matrix_contract",
    "validate_vector_contract",
]
