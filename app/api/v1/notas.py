from fastapi import APIRouter, Depends, Path, status
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_db
from app.crud.nota import nota as crud_nota, nota_to_dict
from app.schemas.nota import NotaUpsert
from app.utils.helpers import ResponseFormatter

router = APIRouter()


@router.post("")
async def upsert_nota(nota_in: NotaUpsert, db: AsyncSession = Depends(get_db)):
    """Crear o actualizar las notas de un alumno en una materia"""
    nota_obj, creada = await crud_nota.upsert(db, **nota_in.model_dump())
    return JSONResponse(
        status_code=status.HTTP_201_CREATED if creada else status.HTTP_200_OK,
        content=ResponseFormatter.success(
            nota_to_dict(nota_obj), "Notas creadas" if creada else "Notas actualizadas"
        ),
    )


@router.get("/alumno/{id}")
async def notas_de_alumno(id: int = Path(...), db: AsyncSession = Depends(get_db)):
    """Notas de un alumno con promedio por materia y promedio general"""
    data = await crud_nota.promedios_por_alumno(db, alumno_id=id)
    return ResponseFormatter.success(data)


@router.get("/materia/{id}")
async def notas_de_materia(id: int = Path(...), db: AsyncSession = Depends(get_db)):
    """Notas de todos los alumnos en una materia con el promedio de la materia"""
    data = await crud_nota.promedios_por_materia(db, materia_id=id)
    return ResponseFormatter.success(data)
