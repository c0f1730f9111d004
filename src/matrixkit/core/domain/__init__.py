"""
Domain models: Matrix, Vector и их сериализуемые снимки.
"""

from matrixkit.core.domain.matrix import MATRIX_CELL_FORMAT, Matrix
from matrixkit.core.domain.snapshots import MatrixSnapshot, VectorSnapshot
from matrixkit.core.domain.vector import VECTOR_CELL_FORMAT, Vector

__all__ = [
    # Matrix
    "Matrix",
    "MatrixSnapshot",
    "MATRIX_CELL_FORMAT",
    # Vector
    "Vector",
    "VectorSnapshot",
    "VECTOR_CELL_FORMAT",
]
