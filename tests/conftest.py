import pytest

from acta_excel.candidatos import cargar_candidatos


@pytest.fixture
def tabla():
    return cargar_candidatos(
        [
            {"name": "Juan Perez", "position": 1},
            {"name": "Maria Lopez", "position": 2},
        ]
    )


@pytest.fixture
def datos():
    return {
        "territory": "12",
        "municipio": "DC",
        "centro": "Inst",
        "colonia": "Col",
        "jrv": "2507",
    }
