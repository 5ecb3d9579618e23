from .base import BaseModel
from .usuario import Usuario
from .alumno import Alumno
from .materia import Materia
from .nota import Nota

__all__ = [
    "BaseModel",
    "Usuario",
    "Alumno",
    "Materia",
    "Nota",
]
