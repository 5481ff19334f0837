"""Core helpers for the acta JSON to Excel converter."""

from .candidatos import TablaCandidatos, cargar_candidatos, tabla_por_defecto
from .processor import (
    COLUMNAS_FIJAS,
    NO_ENCONTRADO,
    OUTPUT_SHEET_NAME,
    build_output_filename,
    cargar_resultados,
    columnas_salida,
    construir_fila,
    exportar_excel,
    process_json,
    transformar,
)

__all__ = [
    "COLUMNAS_FIJAS",
    "NO_ENCONTRADO",
    "OUTPUT_SHEET_NAME",
    "TablaCandidatos",
    "build_output_filename",
    "cargar_candidatos",
    "cargar_resultados",
    "columnas_salida",
    "construir_fila",
    "exportar_excel",
    "process_json",
    "tabla_por_defecto",
    "transformar",
]
