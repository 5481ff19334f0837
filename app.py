import logging

import pandas as pd
import streamlit as st

from acta_excel.candidatos import tabla_por_defecto
from acta_excel.formulario import (
    CAMPOS,
    MENSAJE_ERROR_PROCESO,
    formulario_completo,
    limpiar_datos,
    validar_archivo,
    validar_formulario,
)
from acta_excel.processor import process_json

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger("acta_excel.app")

XLSX_MIME = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"

st.set_page_config(page_title="JSON a Excel", layout="centered")
st.title("JSON a Excel")

# Un error en la tabla de referencia detiene la app: sin ella no hay columnas.
tabla = tabla_por_defecto()

datos = {}
col1, col2 = st.columns(2)
for idx, (campo, (etiqueta, ejemplo)) in enumerate(CAMPOS.items()):
    columna = col1 if idx % 2 == 0 else col2
    datos[campo] = columna.text_input(etiqueta, placeholder=ejemplo, key=campo)

uploaded_json = st.file_uploader(
    "Archivo JSON",
    type=["json"],
    help="Solo archivos JSON",
)

error_archivo = ""
if uploaded_json is not None:
    error_archivo = validar_archivo(uploaded_json.name, uploaded_json.type)
    if error_archivo:
        st.error(error_archivo)
    else:
        st.caption(f"Archivo seleccionado: {uploaded_json.name}")

hay_archivo = uploaded_json is not None and not error_archivo

if st.button(
    "Procesar Archivo",
    type="primary",
    disabled=not formulario_completo(datos, hay_archivo),
):
    errores = validar_formulario(datos, hay_archivo)
    if errores:
        for mensaje in errores.values():
            st.error(mensaje)
        st.stop()

    try:
        with st.spinner("Procesando..."):
            output_bytes, filename, summary = process_json(
                uploaded_json.getvalue(),
                datos=limpiar_datos(datos),
                tabla=tabla,
            )
    except Exception:  # pragma: no cover - UI
        logger.exception("Error al procesar el archivo %s", uploaded_json.name)
        st.error(MENSAJE_ERROR_PROCESO)
        st.stop()

    st.success(
        "Listo. Resultados: {total}, Con posicion: {resueltos}, No encontrados: {faltantes}.".format(
            total=summary["resultados"],
            resueltos=summary["resueltos"],
            faltantes=summary["no_encontrados"],
        )
    )
    if summary["procesados"]:
        st.dataframe(pd.DataFrame(summary["procesados"]).astype(str), hide_index=True)
    st.download_button(
        label="Descargar Excel",
        data=output_bytes,
        file_name=filename,
        mime=XLSX_MIME,
    )
