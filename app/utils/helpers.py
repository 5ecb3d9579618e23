import math
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Dict, Iterable, List, Optional

from app.core.exceptions import OutOfRange

NOTA_MINIMA = 0.0
NOTA_MAXIMA = 10.0
CENTESIMAS = Decimal("0.01")


def validar_nota(valor: Optional[float], campo: str = "nota") -> Optional[float]:
    """Una nota ausente es válida; una presente debe ser finita y estar en [0, 10]"""
    if valor is None:
        return None
    if isinstance(valor, bool) or not isinstance(valor, (int, float)):
        raise OutOfRange(f"{campo} debe ser numérica")
    valor = float(valor)
    if not math.isfinite(valor) or not NOTA_MINIMA <= valor <= NOTA_MAXIMA:
        raise OutOfRange(f"{campo} fuera de rango")
    return valor


def calcular_promedio(valores: Iterable[Optional[float]]) -> Optional[float]:
    """
    Promedio de los valores presentes redondeado a 2 decimales.

    Los empates exactos se redondean hacia arriba (8.125 -> 8.13), sobre el
    valor binario exacto del float. Devuelve None si no hay ningún valor
    presente.
    """
    presentes = [float(v) for v in valores if v is not None and not math.isnan(v)]
    if not presentes:
        return None
    promedio = Decimal(sum(presentes) / len(presentes))
    return float(promedio.quantize(CENTESIMAS, rounding=ROUND_HALF_UP))


class ResponseFormatter:
    """Formateador de respuestas estándar {ok, mensaje?, data?}"""

    @staticmethod
    def success(data: Any = None, mensaje: Optional[str] = None) -> Dict[str, Any]:
        response: Dict[str, Any] = {"ok": True}
        if mensaje:
            response["mensaje"] = mensaje
        if data is not None:
            response["data"] = data
        return response

    @staticmethod
    def error(mensaje: str, errores: Optional[List[Any]] = None) -> Dict[str, Any]:
        response: Dict[str, Any] = {"ok": False, "mensaje": mensaje}
        if errores:
            response["errores"] = errores
        return response
