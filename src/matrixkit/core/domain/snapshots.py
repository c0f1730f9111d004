"""
Snapshots — сериализуемые снимки Matrix и Vector

Immutable Pydantic модели сериализованной формы.
Strict mode: строки и bool не приводятся к числам, int допустим как float.
Полная совместимость с JSON Schema (core/contracts/schema/*.json).

Snapshot фиксирует состояние Matrix/Vector на момент сериализации.
"""

from pydantic import BaseModel, Field, model_validator


# =============================================================================
# MATRIX SNAPSHOT
# =============================================================================


class MatrixSnapshot(BaseModel):
    """
    Снимок матрицы.

    Форма: {"rows": R, "cols": C, "data": [[...], ...]}

    Заявленный shape обязан совпадать с data, иначе ValidationError.
    """

    rows: int = Field(..., gt=0, description="Количество строк")
    cols: int = Field(..., gt=0, description="Количество столбцов")
    data: list[list[float]] = Field(..., min_length=1, description="Row-major grid")

    model_config = {"frozen": True, "strict": True}

    @model_validator(mode="after")
    def validate_shape(self) -> "MatrixSnapshot":
        """Проверка согласованности rows/cols с data."""
        if len(self.data) != self.rows:
            raise ValueError(
                f"declared rows={self.rows} but data has {len(self.data)} rows"
            )
        for i, row in enumerate(self.data):
            if len(row) != self.cols:
                raise ValueError(
                    f"declared cols={self.cols} but row {i} has {len(row)} elements"
                )
        return self


# =============================================================================
# VECTOR SNAPSHOT
# =============================================================================


class VectorSnapshot(BaseModel):
    """
    Снимок вектора.

    Форма: {"size": N, "data": [...]}; пустой вектор допустим.
    """

    size: int = Field(..., ge=0, description="Количество элементов")
    data: list[float] = Field(..., description="Элементы вектора")

    model_config = {"frozen": True, "strict": True}

    @model_validator(mode="after")
    def validate_size(self) -> "VectorSnapshot":
        if len(self.data) != self.size:
            raise ValueError(
                f"declared size={self.size} but data has {len(self.data)} elements"
            )
        return self
