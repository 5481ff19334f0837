import json
import logging
from functools import lru_cache
from pathlib import Path
from types import MappingProxyType
from typing import Dict, List, Mapping, NamedTuple

logger = logging.getLogger(__name__)

CANDIDATES_PATH = Path(__file__).with_name("candidates.json")


class TablaCandidatos(NamedTuple):
    """Tabla de referencia nombre de candidato -> posicion en la papeleta."""

    posiciones: Mapping[str, int]
    max_posicion: int


def _leer_fuente(fuente) -> List[dict]:
    """Acepta Path, str/bytes con JSON o una lista ya cargada."""
    if isinstance(fuente, Path):
        texto = fuente.read_text(encoding="utf-8-sig")
    elif isinstance(fuente, bytes):
        texto = fuente.decode("utf-8-sig")
    elif isinstance(fuente, str):
        texto = fuente
    else:
        return fuente
    try:
        return json.loads(texto)
    except json.JSONDecodeError as exc:
        raise ValueError(f"La tabla de candidatos no es un JSON valido: {exc}") from exc


def _validar_posicion(valor, indice: int) -> int:
    # bool es subclase de int; no se acepta como posicion.
    if isinstance(valor, bool) or not isinstance(valor, int):
        raise ValueError(
            f"Candidato #{indice + 1}: la posicion debe ser un entero, se recibio {valor!r}"
        )
    if valor < 1:
        raise ValueError(f"Candidato #{indice + 1}: la posicion debe ser >= 1, se recibio {valor}")
    return valor


def cargar_candidatos(fuente=None) -> TablaCandidatos:
    """
    Carga la tabla de candidatos y calcula la posicion maxima.
    Si un nombre se repite, gana la ultima entrada.
    Cualquier dato mal formado es un error de configuracion (ValueError).
    """
    datos = _leer_fuente(CANDIDATES_PATH if fuente is None else fuente)
    if not isinstance(datos, list):
        raise ValueError("La tabla de candidatos debe ser una lista de objetos.")
    if not datos:
        raise ValueError("La tabla de candidatos esta vacia.")

    posiciones: Dict[str, int] = {}
    for indice, entrada in enumerate(datos):
        if not isinstance(entrada, dict):
            raise ValueError(f"Candidato #{indice + 1}: se esperaba un objeto, se recibio {entrada!r}")
        nombre = entrada.get("name")
        if not isinstance(nombre, str):
            raise ValueError(f"Candidato #{indice + 1}: falta el nombre.")
        posicion = _validar_posicion(entrada.get("position"), indice)
        if nombre in posiciones:
            logger.warning(
                "Candidato duplicado en la tabla de referencia: %r (posicion %s reemplaza %s)",
                nombre,
                posicion,
                posiciones[nombre],
            )
        posiciones[nombre] = posicion

    tabla = TablaCandidatos(
        posiciones=MappingProxyType(posiciones),
        max_posicion=max(posiciones.values()),
    )
    logger.info(
        "Tabla de candidatos cargada: %s nombres, posicion maxima %s",
        len(posiciones),
        tabla.max_posicion,
    )
    return tabla


@lru_cache(maxsize=1)
def tabla_por_defecto() -> TablaCandidatos:
    """Tabla empaquetada; se lee una sola vez por proceso."""
    return cargar_candidatos()
