import json
import logging
import re
from io import BytesIO
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

import pandas as pd
from openpyxl import Workbook
from openpyxl.utils.dataframe import dataframe_to_rows

from .candidatos import TablaCandidatos, tabla_por_defecto

logger = logging.getLogger(__name__)

# Constantes por defecto
OUTPUT_SHEET_NAME = "Resultados"
OUTPUT_EXTENSION = ".xlsx"
NO_ENCONTRADO = "No encontrado"
MARCA_VACIA = "0"
COLUMNAS_FIJAS: List[str] = ["No. Acta", "CENTRO DE VOTACION", "COLONIA", "TERRITORIO"]
# Columna fija -> campo del formulario
CAMPOS_FIJOS: Dict[str, str] = {
    "No. Acta": "jrv",
    "CENTRO DE VOTACION": "centro",
    "COLONIA": "colonia",
    "TERRITORIO": "territory",
}
CAMPOS_NOMBRE_ARCHIVO = ("territory", "municipio", "centro", "colonia", "jrv")


def _to_bytes(json_input) -> bytes:
    """Acepta Path, bytes, str o buffer; devuelve bytes."""
    if isinstance(json_input, bytes):
        return json_input
    if isinstance(json_input, str):
        return json_input.encode("utf-8")
    if hasattr(json_input, "read"):
        contenido = json_input.read()
        if isinstance(contenido, str):
            return contenido.encode("utf-8")
        return contenido
    return Path(json_input).read_bytes()


def _rechazar_constante(nombre: str):
    raise ValueError(f"Valor no permitido en JSON: {nombre}")


def cargar_resultados(json_input) -> List[Dict[str, Any]]:
    """
    Lee el JSON completo en memoria y devuelve la lista 'resultados'.
    json_input puede ser bytes, str, Path o buffer (archivo subido).
    """
    raw_bytes = _to_bytes(json_input)
    try:
        data = json.loads(raw_bytes.decode("utf-8-sig"), parse_constant=_rechazar_constante)
    except ValueError as exc:
        raise ValueError(f"El archivo no es un JSON valido: {exc}") from exc

    if not isinstance(data, dict) or "resultados" not in data:
        raise ValueError("El JSON no contiene la lista 'resultados'.")
    resultados = data["resultados"]
    if not isinstance(resultados, list):
        raise ValueError("'resultados' debe ser una lista.")

    invalidos = [idx for idx, item in enumerate(resultados) if not isinstance(item, dict)]
    if invalidos:
        posiciones = ", ".join(str(idx + 1) for idx in invalidos)
        raise ValueError(f"Elementos de 'resultados' que no son objetos: {posiciones}")
    return resultados


def es_no_encontrado(registro: Mapping[str, Any]) -> bool:
    return registro.get("posicion") == NO_ENCONTRADO


def _clave_orden(registro: Mapping[str, Any]) -> Tuple[bool, int]:
    """(no_encontrado, posicion): los no encontrados van al final."""
    if es_no_encontrado(registro):
        return (True, 0)
    return (False, int(registro["posicion"]))


def ordenar_resultados(registros: Sequence[Mapping[str, Any]]) -> List[Dict[str, Any]]:
    """Orden estable por posicion; los no encontrados conservan su orden relativo."""
    return sorted(registros, key=_clave_orden)


def transformar(
    resultados: Sequence[Mapping[str, Any]], posiciones: Mapping[str, int]
) -> List[Dict[str, Any]]:
    """
    Asigna 'posicion' a cada resultado segun la tabla de candidatos y ordena.
    Ningun registro se descarta; los que no estan en la tabla quedan como
    NO_ENCONTRADO al final.
    """
    procesados: List[Dict[str, Any]] = []
    for item in resultados:
        candidato = item.get("candidato")
        posicion = posiciones.get(candidato) if isinstance(candidato, str) else None
        procesados.append({**item, "posicion": posicion if posicion else NO_ENCONTRADO})

    procesados = ordenar_resultados(procesados)

    no_encontrados = [item.get("candidato") for item in procesados if es_no_encontrado(item)]
    if no_encontrados:
        logger.info(
            "%s candidato(s) sin posicion: %s",
            len(no_encontrados),
            ", ".join(repr(nombre) for nombre in no_encontrados),
        )
    logger.debug("Datos procesados y ordenados: %s", procesados)
    return procesados


def columnas_salida(max_posicion: int) -> List[str]:
    """Columnas fijas seguidas de las posiciones 1..max_posicion."""
    if max_posicion < 0:
        raise ValueError(f"max_posicion no puede ser negativo: {max_posicion}")
    return COLUMNAS_FIJAS + [str(posicion) for posicion in range(1, max_posicion + 1)]


def _marcas_por_posicion(procesados: Sequence[Mapping[str, Any]]) -> Dict[int, Any]:
    marcas: Dict[int, Any] = {}
    for item in procesados:
        if es_no_encontrado(item):
            continue
        posicion = int(item["posicion"])
        if posicion in marcas:
            # Se conserva la ultima marca escrita.
            logger.warning(
                "Varias marcas para la posicion %s (%r reemplaza %r)",
                posicion,
                item.get("marcas"),
                marcas[posicion],
            )
        marcas[posicion] = item.get("marcas")
    return marcas


def construir_fila(
    procesados: Sequence[Mapping[str, Any]],
    datos: Mapping[str, str],
    max_posicion: int,
) -> Dict[str, Any]:
    """
    Construye la unica fila de salida: columnas fijas del acta y una columna
    por posicion. Las posiciones sin marca quedan en "0".
    """
    if max_posicion < 0:
        raise ValueError(f"max_posicion no puede ser negativo: {max_posicion}")
    marcas = _marcas_por_posicion(procesados)

    fila: Dict[str, Any] = {columna: datos[campo] for columna, campo in CAMPOS_FIJOS.items()}
    for posicion in range(1, max_posicion + 1):
        marca = marcas.get(posicion)
        fila[str(posicion)] = marca if marca else MARCA_VACIA

    fuera_de_rango = sorted(posicion for posicion in marcas if posicion > max_posicion)
    if fuera_de_rango:
        logger.warning("Posiciones fuera de la tabla ignoradas: %s", fuera_de_rango)
    return fila


def build_output_filename(datos: Mapping[str, str]) -> str:
    """territorio-municipio-centro-colonia-jrv, solo [A-Za-z0-9-], sin guiones repetidos."""
    base = "-".join(str(datos[campo]) for campo in CAMPOS_NOMBRE_ARCHIVO)
    base = re.sub(r"[^A-Za-z0-9-]", "", base)
    base = re.sub(r"-+", "-", base)
    return f"{base}{OUTPUT_EXTENSION}"


def exportar_excel(
    fila: Mapping[str, Any],
    columnas: Sequence[str],
    sheet_name: str = OUTPUT_SHEET_NAME,
) -> bytes:
    """
    Exporta la fila a un libro con una sola hoja: encabezados y una fila de datos.
    Devuelve los bytes del archivo; si algo falla no se entrega nada.
    """
    headers = list(columnas)
    faltantes = [columna for columna in headers if columna not in fila]
    if faltantes:
        raise ValueError(f"La fila no tiene las columnas: {', '.join(faltantes)}")
    df = pd.DataFrame([fila], columns=headers)

    wb = Workbook()
    ws_out = wb.active
    ws_out.title = sheet_name

    try:
        ws_out.append(headers)
        for row in dataframe_to_rows(df, index=False, header=False):
            ws_out.append(row)
        # Los valores se escriben tal cual; un "=" inicial no es formula.
        for cell in ws_out[2]:
            if cell.data_type == "f":
                cell.data_type = "s"
        output = BytesIO()
        wb.save(output)
    except Exception as exc:
        raise RuntimeError(f"No se pudo exportar el Excel: {exc}") from exc

    output.seek(0)
    return output.getvalue()


def process_json(
    json_input,
    datos: Mapping[str, str],
    tabla: Optional[TablaCandidatos] = None,
) -> Tuple[bytes, str, Dict[str, Any]]:
    """
    Flujo completo: lee el JSON, asigna posiciones, arma la fila y devuelve
    los bytes del Excel, el nombre del archivo y un resumen.
    """
    if tabla is None:
        tabla = tabla_por_defecto()

    resultados = cargar_resultados(json_input)
    procesados = transformar(resultados, tabla.posiciones)
    columnas = columnas_salida(tabla.max_posicion)
    fila = construir_fila(procesados, datos, tabla.max_posicion)
    output_bytes = exportar_excel(fila, columnas)
    filename = build_output_filename(datos)

    no_encontrados = sum(1 for item in procesados if es_no_encontrado(item))
    summary = {
        "resultados": len(resultados),
        "resueltos": len(procesados) - no_encontrados,
        "no_encontrados": no_encontrados,
        "columnas": len(columnas),
        "procesados": procesados,
    }
    logger.info("Excel generado: %s (%s columnas)", filename, len(columnas))
    return output_bytes, filename, summary
