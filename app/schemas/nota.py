from typing import Optional

from pydantic import BaseModel, Field

NotaValor = Optional[float]


class NotaUpsert(BaseModel):
    alumno_id: int
    materia_id: int
    nota1: NotaValor = Field(default=None, ge=0, le=10, allow_inf_nan=False)
    nota2: NotaValor = Field(default=None, ge=0, le=10, allow_inf_nan=False)
    nota3: NotaValor = Field(default=None, ge=0, le=10, allow_inf_nan=False)
