from fastapi import APIRouter, Depends, Path, status
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_db
from app.crud.materia import materia as crud_materia
from app.schemas.materia import Materia, MateriaCreate, MateriaUpdate
from app.utils.helpers import ResponseFormatter

router = APIRouter()


def _serializar(obj) -> dict:
    return Materia.model_validate(obj).model_dump()


@router.get("")
async def read_materias(db: AsyncSession = Depends(get_db)):
    """Listar todas las materias"""
    materias = await crud_materia.get_multi(db)
    return ResponseFormatter.success([_serializar(m) for m in materias])


@router.get("/{id}")
async def read_materia(id: int = Path(...), db: AsyncSession = Depends(get_db)):
    materia_obj = await crud_materia.get_or_404(db, id)
    return ResponseFormatter.success(_serializar(materia_obj))


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_materia(materia_in: MateriaCreate, db: AsyncSession = Depends(get_db)):
    materia_obj = await crud_materia.create(db, obj_in=materia_in)
    return JSONResponse(
        status_code=status.HTTP_201_CREATED,
        content=ResponseFormatter.success(_serializar(materia_obj), "Materia creada"),
    )


@router.put("/{id}")
async def update_materia(
    materia_in: MateriaUpdate, id: int = Path(...), db: AsyncSession = Depends(get_db)
):
    materia_obj = await crud_materia.update(db, id=id, obj_in=materia_in)
    return ResponseFormatter.success(_serializar(materia_obj), "Materia actualizada")


@router.delete("/{id}")
async def delete_materia(id: int = Path(...), db: AsyncSession = Depends(get_db)):
    await crud_materia.remove(db, id=id)
    return ResponseFormatter.success(mensaje="Materia eliminada")
