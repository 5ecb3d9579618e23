import asyncio
import logging

from sqlalchemy import event, text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import declarative_base
from sqlalchemy.pool import StaticPool

from .settings import Settings

logger = logging.getLogger(__name__)

Base = declarative_base()


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def create_engine(settings: Settings) -> AsyncEngine:
    """Crear el engine asíncrono según el backend configurado"""
    url = settings.database_url

    if url.startswith("sqlite"):
        # SQLite (desarrollo y tests): sin pool configurable
        kwargs = {"connect_args": {"check_same_thread": False}}
        if ":memory:" in url or url.rstrip("/").endswith("sqlite+aiosqlite:"):
            kwargs["poolclass"] = StaticPool
        engine = create_async_engine(url, echo=settings.debug, **kwargs)
        event.listen(engine.sync_engine, "connect", _enable_sqlite_foreign_keys)
        return engine

    return create_async_engine(
        url,
        echo=settings.debug,
        pool_pre_ping=True,
        pool_recycle=1200,
        pool_size=settings.db_pool_size,
        max_overflow=settings.db_max_overflow,
        pool_timeout=settings.db_pool_timeout,
        connect_args={
            "server_settings": {
                "application_name": "notas_api",
            },
            "command_timeout": settings.db_command_timeout,
        },
    )


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker:
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=True,
    )


async def ping_db(engine: AsyncEngine) -> bool:
    """Verificar que la base de datos responde"""
    try:
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
        return True
    except Exception as e:
        logger.warning("Base de datos no disponible: %s", e)
        return False


async def wait_for_db(engine: AsyncEngine, max_wait: int = 60, delay: float = 2.0) -> bool:
    """Esperar a que la base de datos esté lista"""
    logger.info("Esperando a la base de datos...")
    loop = asyncio.get_running_loop()
    start_time = loop.time()

    while True:
        if await ping_db(engine):
            return True

        if loop.time() - start_time > max_wait:
            logger.error("Timeout esperando la base de datos tras %s segundos", max_wait)
            return False

        await asyncio.sleep(delay)


async def init_db(engine: AsyncEngine, max_wait: int = 60) -> None:
    """Crear las tablas una vez que la base de datos responde"""
    # Registrar los modelos en el metadata
    import app.models  # noqa: F401

    if not await wait_for_db(engine, max_wait=max_wait):
        raise RuntimeError("La base de datos no está disponible")

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    logger.info("Tablas de la base de datos inicializadas")


async def close_db(engine: AsyncEngine) -> None:
    await engine.dispose()
    logger.info("Conexiones a la base de datos cerradas")
