import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.api.v1.router import api_router
from app.config.database import (
    close_db,
    create_engine,
    create_session_factory,
    init_db,
    ping_db,
)
from app.config.settings import Settings, get_settings
from app.core.auth import AuthGate
from app.core.exceptions import AppError, InternalError
from app.core.security import TokenService, build_password_context
from app.utils.helpers import ResponseFormatter

logger = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("🚀 Iniciando API de notas...")
    try:
        await init_db(app.state.engine)
        logger.info("✅ Base de datos inicializada correctamente")
    except Exception:
        logger.exception("❌ Error crítico en base de datos")
        raise

    yield

    logger.info("🔄 Cerrando API de notas...")
    await close_db(app.state.engine)


def _internal_error_response() -> JSONResponse:
    # Nunca se expone el detalle interno al cliente
    error = InternalError()
    return JSONResponse(
        status_code=error.status_code,
        content=ResponseFormatter.error(error.mensaje),
    )


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError):
        headers = None
        if exc.status_code == status.HTTP_401_UNAUTHORIZED:
            headers = {"WWW-Authenticate": "Bearer"}
        return JSONResponse(
            status_code=exc.status_code,
            content=ResponseFormatter.error(exc.mensaje, exc.errores),
            headers=headers,
        )

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        errores = [
            {
                "campo": ".".join(str(p) for p in err.get("loc", ()) if p != "body"),
                "mensaje": err.get("msg"),
            }
            for err in exc.errors()
        ]
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=ResponseFormatter.error("Errores de validación", errores),
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content=ResponseFormatter.error(str(exc.detail)),
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(SQLAlchemyError)
    async def store_error_handler(request: Request, exc: SQLAlchemyError):
        logger.error(
            "Error de base de datos en %s %s", request.method, request.url.path, exc_info=exc
        )
        return _internal_error_response()

    @app.exception_handler(Exception)
    async def unexpected_error_handler(request: Request, exc: Exception):
        logger.error(
            "Error inesperado en %s %s", request.method, request.url.path, exc_info=exc
        )
        return _internal_error_response()


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Construir la aplicación con una configuración explícita"""
    settings = settings or get_settings()
    configure_logging(settings.log_level)

    app = FastAPI(
        title="API de Notas",
        description="Gestión de alumnos, materias y notas con autenticación JWT",
        version="1.0.0",
        lifespan=lifespan,
    )

    engine = create_engine(settings)
    token_service = TokenService.from_settings(settings)

    app.state.settings = settings
    app.state.engine = engine
    app.state.session_factory = create_session_factory(engine)
    app.state.token_service = token_service
    app.state.auth_gate = AuthGate(token_service)
    app.state.pwd_context = build_password_context(settings.bcrypt_rounds)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)
    app.include_router(api_router, prefix="/api")

    @app.get("/", tags=["general"])
    async def root():
        return ResponseFormatter.success(mensaje="Servidor FastAPI funcionando")

    @app.get("/health", tags=["general"])
    async def health_check():
        """Verificación de salud: la base de datos debe responder"""
        if await ping_db(app.state.engine):
            return ResponseFormatter.success({"status": "healthy", "database": "up"})
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content=ResponseFormatter.error("Base de datos no disponible"),
        )

    return app


def run() -> None:
    import uvicorn

    settings = get_settings()
    uvicorn.run(create_app(settings), host=settings.host, port=settings.port)


if __name__ == "__main__":
    run()
