from datetime import timedelta

from app.core.security import TokenService


async def test_register(client):
    response = await client.post(
        "/api/auth/register",
        json={"nombre": "Ana", "email": "Ana@Example.com", "password": "secreto1"},
    )
    assert response.status_code == 201
    assert response.json() == {"ok": True, "mensaje": "Usuario registrado correctamente"}


async def test_register_acepta_name(client):
    response = await client.post(
        "/api/auth/register",
        json={"name": "Ana", "email": "ana@example.com", "password": "secreto1"},
    )
    assert response.status_code == 201


async def test_register_email_duplicado(client):
    body = {"nombre": "Ana", "email": "ana@example.com", "password": "secreto1"}
    assert (await client.post("/api/auth/register", json=body)).status_code == 201

    response = await client.post("/api/auth/register", json=body)
    assert response.status_code == 400
    assert response.json() == {"ok": False, "mensaje": "El email ya esta registrado"}


async def test_register_validacion(client):
    response = await client.post(
        "/api/auth/register",
        json={"nombre": "", "email": "no-es-email", "password": "123"},
    )
    assert response.status_code == 400
    body = response.json()
    assert body["ok"] is False
    assert body["mensaje"] == "Errores de validación"
    campos = {e["campo"] for e in body["errores"]}
    assert {"nombre", "email", "password"} <= campos


async def test_login(client):
    await client.post(
        "/api/auth/register",
        json={"nombre": "Ana", "email": "ana@example.com", "password": "secreto1"},
    )
    response = await client.post(
        "/api/auth/login", json={"email": "ana@example.com", "password": "secreto1"}
    )
    assert response.status_code == 200
    body = response.json()
    assert body["ok"] is True
    assert body["data"]["token"]
    assert body["data"]["user"]["nombre"] == "Ana"
    assert set(body["data"]["user"]) == {"id", "nombre"}


async def test_login_password_incorrecta(client):
    await client.post(
        "/api/auth/register",
        json={"nombre": "Ana", "email": "ana@example.com", "password": "secreto1"},
    )
    response = await client.post(
        "/api/auth/login", json={"email": "ana@example.com", "password": "otra-cosa"}
    )
    assert response.status_code == 401
    assert response.json()["ok"] is False


async def test_login_usuario_inexistente(client):
    response = await client.post(
        "/api/auth/login", json={"email": "nadie@example.com", "password": "secreto1"}
    )
    assert response.status_code == 401


async def test_me(client, auth_headers):
    response = await client.get("/api/auth/me", headers=auth_headers)
    assert response.status_code == 200
    data = response.json()["data"]
    assert data["email"] == "docente@example.com"
    assert data["nombre"] == "Docente"


async def test_crud_sin_token(client):
    response = await client.get("/api/alumnos")
    assert response.status_code == 401
    assert response.headers["www-authenticate"] == "Bearer"
    assert response.json() == {"ok": False, "mensaje": "No autorizado"}


async def test_rechazos_son_uniformes(app, client, settings):
    expirado = TokenService.from_settings(settings).issue(
        1, "docente@example.com", expires_delta=timedelta(seconds=-1)
    )
    usuario_inexistente = app.state.token_service.issue(999, "fantasma@example.com")
    otro_secreto = TokenService("otro", expires_delta=timedelta(minutes=5)).issue(
        1, "docente@example.com"
    )

    cabeceras = [
        {"Authorization": "Bearer basura"},
        {"Authorization": f"Token {usuario_inexistente}"},
        {"Authorization": f"Bearer {expirado}"},
        {"Authorization": f"Bearer {usuario_inexistente}"},
        {"Authorization": f"Bearer {otro_secreto}"},
    ]
    for headers in cabeceras:
        response = await client.get("/api/materias", headers=headers)
        assert response.status_code == 401
        assert response.json() == {"ok": False, "mensaje": "No autorizado"}


async def test_rutas_publicas(client):
    assert (await client.get("/")).json()["ok"] is True
    response = await client.get("/health")
    assert response.status_code == 200
    assert response.json()["data"]["database"] == "up"


async def test_ruta_inexistente_usa_el_sobre(client):
    response = await client.get("/api/no-existe")
    assert response.status_code == 404
    assert response.json()["ok"] is False
