from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _validar_dni(v: Optional[str]) -> Optional[str]:
    if v is None:
        return v
    v = str(v).strip()
    if not v.isdigit():
        raise ValueError("DNI numérico")
    return v


class AlumnoBase(BaseModel):
    nombre: str = Field(min_length=1, max_length=100)
    apellido: str = Field(min_length=1, max_length=100)
    dni: str = Field(max_length=20)


class AlumnoCreate(AlumnoBase):
    @field_validator("dni", mode="before")
    @classmethod
    def dni_numerico(cls, v):
        return _validar_dni(v)


class AlumnoUpdate(BaseModel):
    nombre: Optional[str] = Field(default=None, min_length=1, max_length=100)
    apellido: Optional[str] = Field(default=None, min_length=1, max_length=100)
    dni: Optional[str] = Field(default=None, max_length=20)

    @field_validator("dni", mode="before")
    @classmethod
    def dni_numerico(cls, v):
        return _validar_dni(v)


class Alumno(AlumnoBase):
    model_config = ConfigDict(from_attributes=True)

    id: int
