import logging
from typing import Any, Dict, Generic, List, Optional, Type, TypeVar, Union

from pydantic import BaseModel
from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.config.database import Base
from app.core.exceptions import Conflict, NotFound

logger = logging.getLogger(__name__)

ModelType = TypeVar("ModelType", bound=Base)
CreateSchemaType = TypeVar("CreateSchemaType", bound=BaseModel)
UpdateSchemaType = TypeVar("UpdateSchemaType", bound=BaseModel)


class CRUDBase(Generic[ModelType, CreateSchemaType, UpdateSchemaType]):
    """
    Objeto CRUD con métodos por defecto para Create, Read, Update, Delete (CRUD).

    `unique_field` es la columna de negocio que no puede repetirse entre filas
    (p. ej. el DNI de un alumno). `not_found_message` y `conflict_message` son
    los mensajes devueltos al cliente; `update_conflict_message` reemplaza al
    segundo cuando el choque ocurre al actualizar otra fila.
    """

    def __init__(
        self,
        model: Type[ModelType],
        *,
        unique_field: Optional[str] = None,
        not_found_message: str = "Recurso no encontrado",
        conflict_message: str = "El valor ya está registrado",
        update_conflict_message: Optional[str] = None,
    ):
        self.model = model
        self.unique_field = unique_field
        self.not_found_message = not_found_message
        self.conflict_message = conflict_message
        self.update_conflict_message = update_conflict_message or conflict_message

    async def get(self, db: AsyncSession, id: Any) -> Optional[ModelType]:
        result = await db.execute(select(self.model).where(self.model.id == id))
        return result.scalar_one_or_none()

    async def get_or_404(self, db: AsyncSession, id: Any) -> ModelType:
        obj = await self.get(db, id)
        if obj is None:
            raise NotFound(self.model.__name__, self.not_found_message)
        return obj

    async def get_multi(self, db: AsyncSession) -> List[ModelType]:
        result = await db.execute(select(self.model).order_by(self.model.id))
        return list(result.scalars().all())

    async def ensure_unique(
        self,
        db: AsyncSession,
        value: Any,
        *,
        exclude_id: Optional[Any] = None,
        mensaje: Optional[str] = None,
    ) -> None:
        """Falla con Conflict si otra fila ya usa `value` en la columna única"""
        if self.unique_field is None or value is None:
            return
        column = getattr(self.model, self.unique_field)
        query = select(self.model.id).where(column == value)
        if exclude_id is not None:
            query = query.where(self.model.id != exclude_id)
        result = await db.execute(query.limit(1))
        if result.scalar_one_or_none() is not None:
            logger.info(
                "Conflicto en %s.%s=%r", self.model.__tablename__, self.unique_field, value
            )
            raise Conflict(mensaje or self.conflict_message)

    async def _commit_or_conflict(
        self, db: AsyncSession, mensaje: Optional[str] = None
    ) -> None:
        # La comprobación previa no es atómica: el índice único decide
        try:
            await db.commit()
        except IntegrityError as e:
            await db.rollback()
            logger.info("Violación de unicidad en %s: %s", self.model.__tablename__, e.orig)
            raise Conflict(mensaje or self.conflict_message) from e

    async def create(self, db: AsyncSession, *, obj_in: CreateSchemaType) -> ModelType:
        obj_in_data = obj_in.model_dump()
        if self.unique_field:
            await self.ensure_unique(db, obj_in_data.get(self.unique_field))
        db_obj = self.model(**obj_in_data)
        db.add(db_obj)
        await self._commit_or_conflict(db)
        await db.refresh(db_obj)
        return db_obj

    async def update(
        self,
        db: AsyncSession,
        *,
        id: Any,
        obj_in: Union[UpdateSchemaType, Dict[str, Any]],
    ) -> ModelType:
        """
        Actualización parcial: los campos ausentes o nulos conservan su valor.
        """
        db_obj = await self.get_or_404(db, id)

        if isinstance(obj_in, dict):
            update_data = obj_in
        else:
            update_data = obj_in.model_dump(exclude_unset=True)
        update_data = {k: v for k, v in update_data.items() if v is not None}

        if self.unique_field and self.unique_field in update_data:
            await self.ensure_unique(
                db,
                update_data[self.unique_field],
                exclude_id=id,
                mensaje=self.update_conflict_message,
            )

        for field, value in update_data.items():
            if hasattr(db_obj, field):
                setattr(db_obj, field, value)

        db.add(db_obj)
        await self._commit_or_conflict(db, self.update_conflict_message)
        await db.refresh(db_obj)
        return db_obj

    async def remove(self, db: AsyncSession, *, id: Any) -> None:
        result = await db.execute(delete(self.model).where(self.model.id == id))
        if result.rowcount == 0:
            await db.rollback()
            raise NotFound(self.model.__name__, self.not_found_message)
        await db.commit()

