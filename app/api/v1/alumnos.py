from fastapi import APIRouter, Depends, Path, status
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_db
from app.crud.alumno import alumno as crud_alumno
from app.schemas.alumno import Alumno, AlumnoCreate, AlumnoUpdate
from app.utils.helpers import ResponseFormatter

router = APIRouter()


def _serializar(obj) -> dict:
    return Alumno.model_validate(obj).model_dump()


@router.get("")
async def read_alumnos(db: AsyncSession = Depends(get_db)):
    """Listar todos los alumnos"""
    alumnos = await crud_alumno.get_multi(db)
    return ResponseFormatter.success([_serializar(a) for a in alumnos])


@router.get("/{id}")
async def read_alumno(id: int = Path(...), db: AsyncSession = Depends(get_db)):
    """Obtener un alumno por id"""
    alumno_obj = await crud_alumno.get_or_404(db, id)
    return ResponseFormatter.success(_serializar(alumno_obj))


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_alumno(alumno_in: AlumnoCreate, db: AsyncSession = Depends(get_db)):
    """Crear alumno"""
    alumno_obj = await crud_alumno.create(db, obj_in=alumno_in)
    return JSONResponse(
        status_code=status.HTTP_201_CREATED,
        content=ResponseFormatter.success(_serializar(alumno_obj), "Alumno creado"),
    )


@router.put("/{id}")
async def update_alumno(
    alumno_in: AlumnoUpdate, id: int = Path(...), db: AsyncSession = Depends(get_db)
):
    """Actualizar alumno; los campos no enviados se conservan"""
    alumno_obj = await crud_alumno.update(db, id=id, obj_in=alumno_in)
    return ResponseFormatter.success(_serializar(alumno_obj), "Alumno actualizado")


@router.delete("/{id}")
async def delete_alumno(id: int = Path(...), db: AsyncSession = Depends(get_db)):
    """Eliminar alumno"""
    await crud_alumno.remove(db, id=id)
    return ResponseFormatter.success(mensaje="Alumno eliminado")
