import re
from typing import Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


class UserRegister(BaseModel):
    nombre: str = Field(
        min_length=1, validation_alias=AliasChoices("nombre", "name")
    )
    email: str
    password: str = Field(min_length=6)

    @field_validator("nombre")
    @classmethod
    def nombre_obligatorio(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("El nombre es obligatorio")
        return v

    @field_validator("email")
    @classmethod
    def email_valido(cls, v: str) -> str:
        v = v.strip().lower()
        if not EMAIL_RE.match(v):
            raise ValueError("Email invalido")
        return v


class UserLogin(BaseModel):
    email: str
    password: str

    @field_validator("email")
    @classmethod
    def normalizar_email(cls, v: str) -> str:
        return v.strip().lower()


class UserPublic(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    nombre: str
    email: Optional[str] = None


class Token(BaseModel):
    token: str
    user: UserPublic
