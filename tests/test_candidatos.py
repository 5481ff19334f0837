import json
import logging

import pytest

from acta_excel.candidatos import CANDIDATES_PATH, cargar_candidatos, tabla_por_defecto


def test_cargar_candidatos_desde_lista(tabla):
    assert dict(tabla.posiciones) == {"Juan Perez": 1, "Maria Lopez": 2}
    assert tabla.max_posicion == 2


def test_max_posicion_no_depende_del_orden():
    tabla = cargar_candidatos(
        [
            {"name": "C", "position": 7},
            {"name": "A", "position": 2},
            {"name": "B", "position": 4},
        ]
    )
    assert tabla.max_posicion == 7


def test_nombre_duplicado_gana_el_ultimo(caplog):
    with caplog.at_level(logging.WARNING, logger="acta_excel.candidatos"):
        tabla = cargar_candidatos(
            [
                {"name": "Juan Perez", "position": 1},
                {"name": "Juan Perez", "position": 5},
            ]
        )
    assert tabla.posiciones["Juan Perez"] == 5
    assert tabla.max_posicion == 5
    assert "duplicado" in caplog.text


def test_posiciones_son_de_solo_lectura(tabla):
    with pytest.raises(TypeError):
        tabla.posiciones["Nuevo"] = 3


def test_cargar_candidatos_desde_archivo(tmp_path):
    ruta = tmp_path / "candidates.json"
    ruta.write_text(
        json.dumps([{"name": "Ana", "position": 3}, {"name": "Luis", "position": 1}]),
        encoding="utf-8",
    )
    tabla = cargar_candidatos(ruta)
    assert tabla.posiciones["Ana"] == 3
    assert tabla.max_posicion == 3


def test_cargar_candidatos_desde_bytes():
    tabla = cargar_candidatos(b'[{"name": "Ana", "position": 4}]')
    assert tabla.max_posicion == 4


@pytest.mark.parametrize(
    "fuente",
    [
        [],
        {"name": "Ana", "position": 1},
        [{"name": "Ana"}],
        [{"name": "Ana", "position": "uno"}],
        [{"name": "Ana", "position": 0}],
        [{"name": "Ana", "position": True}],
        [{"position": 1}],
        ["Ana"],
        b"{no es json",
    ],
)
def test_tabla_mal_formada_es_error(fuente):
    with pytest.raises(ValueError):
        cargar_candidatos(fuente)


def test_tabla_por_defecto_se_carga_una_vez():
    primera = tabla_por_defecto()
    assert tabla_por_defecto() is primera
    datos = json.loads(CANDIDATES_PATH.read_text(encoding="utf-8"))
    assert primera.max_posicion == max(item["position"] for item in datos)
