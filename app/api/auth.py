import logging

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
from passlib.context import CryptContext
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_current_user, get_db, get_pwd_context, get_token_service
from app.core.exceptions import Unauthorized
from app.core.security import TokenService
from app.crud.usuario import usuario as crud_usuario
from app.models.usuario import Usuario
from app.schemas.auth import Token, UserLogin, UserPublic, UserRegister
from app.utils.helpers import ResponseFormatter

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/register", status_code=status.HTTP_201_CREATED)
async def register(
    user_data: UserRegister,
    db: AsyncSession = Depends(get_db),
    pwd_context: CryptContext = Depends(get_pwd_context),
):
    """Registrar un nuevo usuario"""
    user = await crud_usuario.register(db, obj_in=user_data, pwd_context=pwd_context)
    logger.info("Usuario registrado id=%s", user.id)
    return JSONResponse(
        status_code=status.HTTP_201_CREATED,
        content=ResponseFormatter.success(mensaje="Usuario registrado correctamente"),
    )


@router.post("/login")
async def login(
    user_data: UserLogin,
    db: AsyncSession = Depends(get_db),
    pwd_context: CryptContext = Depends(get_pwd_context),
    tokens: TokenService = Depends(get_token_service),
):
    """
    Endpoint de login que devuelve un JWT token
    """
    user = await crud_usuario.authenticate(
        db, email=user_data.email, password=user_data.password, pwd_context=pwd_context
    )
    if not user:
        raise Unauthorized("Credenciales invalidas")

    token = tokens.issue(user.id, user.email)
    data = Token(token=token, user=UserPublic(id=user.id, nombre=user.nombre))
    return ResponseFormatter.success(data.model_dump(exclude_none=True))


@router.get("/me")
async def me(current_user: Usuario = Depends(get_current_user)):
    """Información del usuario autenticado"""
    return ResponseFormatter.success(UserPublic.model_validate(current_user).model_dump())
