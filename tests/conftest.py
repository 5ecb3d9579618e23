import httpx
import pytest

from app.config.database import init_db
from app.config.settings import Settings
from app.main import create_app


@pytest.fixture
def settings():
    return Settings(
        _env_file=None,
        database_url="sqlite+aiosqlite://",
        secret_key="secreto-de-pruebas",
        access_token_expire_minutes=30,
        bcrypt_rounds=4,
        log_level="WARNING",
    )


@pytest.fixture
async def app(settings):
    application = create_app(settings)
    await init_db(application.state.engine, max_wait=5)
    yield application
    await application.state.engine.dispose()


@pytest.fixture
async def db(app):
    async with app.state.session_factory() as session:
        yield session


@pytest.fixture
async def client(app):
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


@pytest.fixture
async def auth_headers(client):
    await client.post(
        "/api/auth/register",
        json={"nombre": "Docente", "email": "docente@example.com", "password": "secreto1"},
    )
    response = await client.post(
        "/api/auth/login",
        json={"email": "docente@example.com", "password": "secreto1"},
    )
    token = response.json()["data"]["token"]
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def crear_alumno(client, auth_headers):
    async def _crear(nombre="Ana", apellido="Gomez", dni="30111222"):
        response = await client.post(
            "/api/alumnos",
            json={"nombre": nombre, "apellido": apellido, "dni": dni},
            headers=auth_headers,
        )
        assert response.status_code == 201, response.text
        return response.json()["data"]

    return _crear


@pytest.fixture
def crear_materia(client, auth_headers):
    async def _crear(nombre="Matematica", codigo="MAT1", anio=2024):
        response = await client.post(
            "/api/materias",
            json={"nombre": nombre, "codigo": codigo, "anio": anio},
            headers=auth_headers,
        )
        assert response.status_code == 201, response.text
        return response.json()["data"]

    return _crear
