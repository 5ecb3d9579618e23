from typing import Optional
from passlib.context import CryptContext
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import Conflict
from app.core.security import get_password_hash, verify_password
from app.crud.base import CRUDBase
from app.models.usuario import Usuario
from app.schemas.auth import UserRegister


class CRUDUsuario(CRUDBase[Usuario, UserRegister, UserRegister]):
    def __init__(self):
        super().__init__(
            Usuario,
            unique_field="email",
            not_found_message="Usuario no encontrado",
            conflict_message="El email ya esta registrado",
        )

    async def get_by_email(self, db: AsyncSession, *, email: str) -> Optional[Usuario]:
        result = await db.execute(select(Usuario).where(Usuario.email == email))
        return result.scalar_one_or_none()

    async def register(
        self, db: AsyncSession, *, obj_in: UserRegister, pwd_context: CryptContext
    ) -> Usuario:
        if await self.get_by_email(db, email=obj_in.email):
            raise Conflict(self.conflict_message)
        db_obj = Usuario(
            nombre=obj_in.nombre,
            email=obj_in.email,
            password=get_password_hash(pwd_context, obj_in.password),
        )
        db.add(db_obj)
        await self._commit_or_conflict(db)
        await db.refresh(db_obj)
        return db_obj

    async def authenticate(
        self, db: AsyncSession, *, email: str, password: str, pwd_context: CryptContext
    ) -> Optional[Usuario]:
        """Autenticar usuario por email y contraseña"""
        user = await self.get_by_email(db, email=email)
        if not user:
            return None
        if not verify_password(pwd_context, password, user.password):
            return None
        return user


usuario = CRUDUsuario()
