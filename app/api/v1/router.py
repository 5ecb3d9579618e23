from fastapi import APIRouter, Depends

from app.api import auth
from app.api.deps import get_current_user
from app.api.v1 import alumnos, materias, notas

api_router = APIRouter()

# Registro y login son públicos
api_router.include_router(auth.router, prefix="/auth", tags=["auth"])

# Todo el CRUD pasa antes por la autenticación
protegido = [Depends(get_current_user)]
api_router.include_router(
    alumnos.router, prefix="/alumnos", tags=["alumnos"], dependencies=protegido
)
api_router.include_router(
    materias.router, prefix="/materias", tags=["materias"], dependencies=protegido
)
api_router.include_router(
    notas.router, prefix="/notas", tags=["notas"], dependencies=protegido
)
