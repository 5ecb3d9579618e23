from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class MateriaBase(BaseModel):
    nombre: str = Field(min_length=1, max_length=200)
    codigo: str = Field(min_length=1, max_length=20)
    anio: int = Field(ge=1900)


class MateriaCreate(MateriaBase):
    pass


class MateriaUpdate(BaseModel):
    nombre: Optional[str] = Field(default=None, min_length=1, max_length=200)
    codigo: Optional[str] = Field(default=None, min_length=1, max_length=20)
    anio: Optional[int] = Field(default=None, ge=1900)


class Materia(MateriaBase):
    model_config = ConfigDict(from_attributes=True)

    id: int
