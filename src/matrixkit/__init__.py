"""
matrixkit — dense real matrices and vectors.

Matrix engine (Laplace determinant, cofactor, adjugate inverse) and
Vector engine with a shared error taxonomy.
"""

from matrixkit.core.domain import Matrix, MatrixSnapshot, Vector, VectorSnapshot
from matrixkit.core.errors import (
    ContractViolationError,
    DimensionError,
    InvalidArgumentError,
    MatrixError,
    SingularMatrixError,
    ZeroVectorError,
)

__version__ = "0.1.0"

__all__ = [
    # Domain
    "Matrix",
    "Vector",
    "MatrixSnapshot",
    "VectorSnapshot",
    # Errors
    "MatrixError",
    "DimensionError",
    "InvalidArgumentError",
    "ContractViolationError",
    "SingularMatrixError",
    "ZeroVectorError",
]
