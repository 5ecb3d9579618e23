import math

import pytest

from app.core.exceptions import OutOfRange
from app.utils.helpers import ResponseFormatter, calcular_promedio, validar_nota


def test_promedio_ignora_notas_ausentes():
    assert calcular_promedio([8, None, 6]) == 7.0


def test_promedio_sin_notas_es_none():
    assert calcular_promedio([None, None, None]) is None
    assert calcular_promedio([]) is None


def test_promedio_redondea_a_dos_decimales():
    assert calcular_promedio([7, 8, 8]) == round(23 / 3, 2) == 7.67
    assert calcular_promedio([10, 9.5]) == 9.75


@pytest.mark.parametrize(
    "valores, esperado",
    [
        ([8.25, 8, None], 8.13),
        ([10, 0.25], 5.13),
        ([0.125], 0.13),
        # 2.675 no es representable: su valor binario queda por debajo del empate
        ([2.675], 2.67),
    ],
)
def test_promedio_empates_redondean_hacia_arriba(valores, esperado):
    assert calcular_promedio(valores) == esperado


def test_promedio_con_cero_no_es_ausencia():
    assert calcular_promedio([0, None, None]) == 0.0


def test_promedio_acepta_generadores():
    assert calcular_promedio(x for x in (4.0, None, 6.0)) == 5.0


@pytest.mark.parametrize("valor", [0, 5, 10, 7.25])
def test_validar_nota_en_rango(valor):
    assert validar_nota(valor) == float(valor)


def test_validar_nota_ausente():
    assert validar_nota(None) is None


@pytest.mark.parametrize("valor", [-0.1, 10.01, math.inf, math.nan, "8", True])
def test_validar_nota_fuera_de_rango(valor):
    with pytest.raises(OutOfRange):
        validar_nota(valor, "nota1")


def test_response_formatter():
    assert ResponseFormatter.success([], "Listado") == {"ok": True, "mensaje": "Listado", "data": []}
    assert ResponseFormatter.success(mensaje="Hecho") == {"ok": True, "mensaje": "Hecho"}
    assert ResponseFormatter.error("Mal") == {"ok": False, "mensaje": "Mal"}
    assert ResponseFormatter.error("Mal", [{"campo": "x"}])["errores"] == [{"campo": "x"}]
