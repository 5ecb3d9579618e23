from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Callable, Optional

from jose import ExpiredSignatureError, JWTError, jwt
from passlib.context import CryptContext

from app.config.settings import Settings


class TokenError(Exception):
    """Token rechazado por el servicio de tokens"""

    reason = "invalid"


class MalformedToken(TokenError):
    reason = "malformed"


class InvalidSignature(TokenError):
    reason = "invalid_signature"


class TokenExpired(TokenError):
    reason = "expired"


@dataclass(frozen=True)
class TokenClaims:
    user_id: int
    email: str


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class TokenService:
    """
    Emite y verifica tokens JWT firmados con el secreto del proceso.

    El reloj es inyectable para poder verificar la expiración en tests.
    """

    def __init__(
        self,
        secret_key: str,
        algorithm: str = "HS256",
        expires_delta: timedelta = timedelta(minutes=60),
        now: Callable[[], datetime] = _utcnow,
    ):
        self.secret_key = secret_key
        self.algorithm = algorithm
        self.expires_delta = expires_delta
        self._now = now

    @classmethod
    def from_settings(cls, settings: Settings, **kwargs) -> "TokenService":
        return cls(
            secret_key=settings.secret_key,
            algorithm=settings.algorithm,
            expires_delta=timedelta(minutes=settings.access_token_expire_minutes),
            **kwargs,
        )

    def issue(self, user_id: int, email: str, expires_delta: Optional[timedelta] = None) -> str:
        expire = self._now() + (expires_delta or self.expires_delta)
        to_encode = {
            "sub": str(user_id),
            "email": email,
            "exp": int(expire.timestamp()),
        }
        return jwt.encode(to_encode, self.secret_key, algorithm=self.algorithm)

    def verify(self, token: str) -> TokenClaims:
        # Estructura antes que firma, firma antes que expiración
        try:
            jwt.get_unverified_header(token)
            jwt.get_unverified_claims(token)
        except JWTError as e:
            raise MalformedToken(str(e)) from e

        try:
            payload = jwt.decode(
                token,
                self.secret_key,
                algorithms=[self.algorithm],
                options={"verify_exp": False},
            )
        except ExpiredSignatureError as e:
            raise TokenExpired(str(e)) from e
        except JWTError as e:
            raise InvalidSignature(str(e)) from e

        exp = payload.get("exp")
        sub = payload.get("sub")
        email = payload.get("email")
        if not isinstance(exp, (int, float)) or sub is None or email is None:
            raise MalformedToken("Faltan claims obligatorios")

        if self._now().timestamp() >= exp:
            raise TokenExpired("Token expirado")

        try:
            user_id = int(sub)
        except (TypeError, ValueError) as e:
            raise MalformedToken("Claim sub inválido") from e

        return TokenClaims(user_id=user_id, email=email)


def build_password_context(rounds: int = 12) -> CryptContext:
    return CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=rounds)


def get_password_hash(pwd_context: CryptContext, password: str) -> str:
    return pwd_context.hash(password)


def verify_password(pwd_context: CryptContext, plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)
