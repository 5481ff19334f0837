from typing import Dict, Mapping, Optional, Tuple

JSON_MIME = "application/json"

# campo -> (etiqueta, ejemplo)
CAMPOS: Dict[str, Tuple[str, str]] = {
    "territory": ("Territorio", "Ejemplo: 12"),
    "municipio": ("Municipio", "Ejemplo: Distrito Central"),
    "centro": ("Centro", "Ejemplo: Instituto Central Vicente Cáceres"),
    "colonia": ("Colonia", "Ejemplo: Col. Tiloarque No. 1"),
    "jrv": ("Número de JRV", "Ejemplo: 2507"),
}

MENSAJE_SIN_ARCHIVO = "Por favor seleccione un archivo JSON"
MENSAJE_TIPO_INVALIDO = "Por favor seleccione un archivo JSON válido"
MENSAJE_ERROR_PROCESO = "Error al procesar el archivo JSON"


def _mensaje_campo(campo: str) -> str:
    if campo == "jrv":
        return "Por favor ingrese el número de JRV"
    return f"Por favor ingrese {campo}"


def limpiar_datos(datos: Mapping[str, Optional[str]]) -> Dict[str, str]:
    """Devuelve los campos del formulario sin espacios extremos."""
    return {campo: (datos.get(campo) or "").strip() for campo in CAMPOS}


def validar_archivo(nombre: Optional[str], tipo: Optional[str]) -> str:
    """Mensaje de error si el archivo seleccionado no es JSON; '' si es valido."""
    if not nombre:
        return ""
    if tipo != JSON_MIME:
        return MENSAJE_TIPO_INVALIDO
    return ""


def validar_formulario(datos: Mapping[str, Optional[str]], hay_archivo: bool) -> Dict[str, str]:
    """Errores por campo; vacio si se puede procesar."""
    errores: Dict[str, str] = {}
    for campo, valor in limpiar_datos(datos).items():
        if not valor:
            errores[campo] = _mensaje_campo(campo)
    if not hay_archivo:
        errores["file"] = MENSAJE_SIN_ARCHIVO
    return errores


def formulario_completo(datos: Mapping[str, Optional[str]], hay_archivo: bool) -> bool:
    return not validar_formulario(datos, hay_archivo)
