import logging
from dataclasses import dataclass
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from app.core.security import TokenError, TokenService
from app.crud.usuario import usuario as crud_usuario
from app.models.usuario import Usuario

logger = logging.getLogger(__name__)

MISSING_HEADER = "missing_header"
USER_NOT_FOUND = "user_not_found"


@dataclass(frozen=True)
class AuthResult:
    """Resultado de autenticar una petición: un sujeto o un motivo de rechazo"""

    subject: Optional[Usuario] = None
    reason: Optional[str] = None

    @property
    def authenticated(self) -> bool:
        return self.subject is not None


def extract_bearer(authorization: Optional[str]) -> Optional[str]:
    if not authorization:
        return None
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


class AuthGate:
    """
    Autentica peticiones a partir de la cabecera Authorization.

    Solo lee: verifica el token y busca al usuario por id. El motivo de
    rechazo queda disponible para logging pero nunca se expone al cliente.
    """

    def __init__(self, tokens: TokenService):
        self.tokens = tokens

    async def authenticate(self, db: AsyncSession, authorization: Optional[str]) -> AuthResult:
        token = extract_bearer(authorization)
        if token is None:
            return AuthResult(reason=MISSING_HEADER)

        try:
            claims = self.tokens.verify(token)
        except TokenError as e:
            return AuthResult(reason=e.reason)

        user = await crud_usuario.get(db, claims.user_id)
        if user is None:
            return AuthResult(reason=USER_NOT_FOUND)

        return AuthResult(subject=user)
