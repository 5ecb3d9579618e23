from typing import Any, List, Optional


class AppError(Exception):
    """Error de dominio que se traduce a una respuesta {ok: false, mensaje}"""

    status_code = 500
    mensaje = "Error interno del servidor"

    def __init__(self, mensaje: Optional[str] = None, errores: Optional[List[Any]] = None):
        self.mensaje = mensaje or self.mensaje
        self.errores = errores
        super().__init__(self.mensaje)


class ValidationError(AppError):
    status_code = 400
    mensaje = "Errores de validación"


class OutOfRange(ValidationError):
    mensaje = "Nota fuera de rango"


class Unauthorized(AppError):
    status_code = 401
    mensaje = "No autorizado"


class NotFound(AppError):
    status_code = 404
    mensaje = "Recurso no encontrado"

    def __init__(self, recurso: Optional[str] = None, mensaje: Optional[str] = None):
        self.recurso = recurso
        if mensaje is None and recurso:
            mensaje = f"{recurso} no encontrado"
        super().__init__(mensaje)


class Conflict(AppError):
    status_code = 400
    mensaje = "El valor ya está registrado"


class InternalError(AppError):
    status_code = 500
