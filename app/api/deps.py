import logging
from typing import AsyncIterator

from fastapi import Depends, Request
from passlib.context import CryptContext
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.auth import AuthGate
from app.core.exceptions import Unauthorized
from app.core.security import TokenService
from app.models.usuario import Usuario

logger = logging.getLogger(__name__)


async def get_db(request: Request) -> AsyncIterator[AsyncSession]:
    """Sesión de base de datos por petición"""
    async with request.app.state.session_factory() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise


def get_token_service(request: Request) -> TokenService:
    return request.app.state.token_service


def get_pwd_context(request: Request) -> CryptContext:
    return request.app.state.pwd_context


def get_auth_gate(request: Request) -> AuthGate:
    return request.app.state.auth_gate


async def get_current_user(
    request: Request,
    db: AsyncSession = Depends(get_db),
    gate: AuthGate = Depends(get_auth_gate),
) -> Usuario:
    """
    Obtener usuario actual desde el token JWT.

    Cualquier rechazo produce el mismo 401 para no revelar el motivo.
    """
    result = await gate.authenticate(db, request.headers.get("Authorization"))
    if not result.authenticated:
        logger.info(
            "Autenticación rechazada (%s) en %s %s",
            result.reason,
            request.method,
            request.url.path,
        )
        raise Unauthorized()

    request.state.user = result.subject
    return result.subject
