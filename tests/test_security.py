from datetime import datetime, timedelta, timezone

import pytest
from jose import jwt

from app.core.security import (
    InvalidSignature,
    MalformedToken,
    TokenExpired,
    TokenService,
    build_password_context,
    get_password_hash,
    verify_password,
)


class Reloj:
    def __init__(self, ahora):
        self.ahora = ahora

    def __call__(self):
        return self.ahora


@pytest.fixture
def reloj():
    return Reloj(datetime(2025, 3, 1, 12, 0, tzinfo=timezone.utc))


@pytest.fixture
def tokens(reloj):
    return TokenService("secreto", expires_delta=timedelta(minutes=30), now=reloj)


def test_token_emitido_es_valido(tokens):
    claims = tokens.verify(tokens.issue(7, "ana@example.com"))
    assert claims.user_id == 7
    assert claims.email == "ana@example.com"


def test_token_expira(tokens, reloj):
    token = tokens.issue(7, "ana@example.com")

    reloj.ahora += timedelta(minutes=29, seconds=59)
    assert tokens.verify(token).user_id == 7

    reloj.ahora += timedelta(seconds=1)
    with pytest.raises(TokenExpired):
        tokens.verify(token)


def test_token_con_otro_secreto(tokens, reloj):
    otro = TokenService("otro-secreto", now=reloj)
    with pytest.raises(InvalidSignature):
        tokens.verify(otro.issue(7, "ana@example.com"))


def test_firma_invalida_se_detecta_antes_que_expiracion(tokens, reloj):
    otro = TokenService("otro-secreto", now=reloj)
    token = otro.issue(7, "ana@example.com")
    reloj.ahora += timedelta(days=1)
    with pytest.raises(InvalidSignature):
        tokens.verify(token)


@pytest.mark.parametrize("token", ["", "no-es-un-token", "a.b", "a.b.c"])
def test_token_malformado(tokens, token):
    with pytest.raises(MalformedToken):
        tokens.verify(token)


def test_token_sin_claims_obligatorios(tokens):
    token = jwt.encode({"sub": "7"}, "secreto", algorithm="HS256")
    with pytest.raises(MalformedToken):
        tokens.verify(token)


def test_payload_del_token(tokens, reloj):
    payload = jwt.get_unverified_claims(tokens.issue(3, "x@example.com"))
    assert payload["sub"] == "3"
    assert payload["email"] == "x@example.com"
    assert payload["exp"] == int((reloj.ahora + timedelta(minutes=30)).timestamp())


def test_hash_de_password():
    pwd_context = build_password_context(rounds=4)
    hashed = get_password_hash(pwd_context, "secreto1")
    assert hashed != "secreto1"
    assert verify_password(pwd_context, "secreto1", hashed)
    assert not verify_password(pwd_context, "otro", hashed)
