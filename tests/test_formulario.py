from acta_excel.formulario import (
    CAMPOS,
    MENSAJE_SIN_ARCHIVO,
    MENSAJE_TIPO_INVALIDO,
    formulario_completo,
    limpiar_datos,
    validar_archivo,
    validar_formulario,
)


def test_formulario_valido(datos):
    assert validar_formulario(datos, hay_archivo=True) == {}
    assert formulario_completo(datos, hay_archivo=True)


def test_campos_vacios_o_con_espacios():
    datos = {"territory": "  ", "municipio": "DC", "centro": "", "colonia": "Col", "jrv": " "}
    errores = validar_formulario(datos, hay_archivo=True)
    assert errores == {
        "territory": "Por favor ingrese territory",
        "centro": "Por favor ingrese centro",
        "jrv": "Por favor ingrese el número de JRV",
    }
    assert not formulario_completo(datos, hay_archivo=True)


def test_campo_faltante_cuenta_como_vacio(datos):
    del datos["colonia"]
    assert "colonia" in validar_formulario(datos, hay_archivo=True)


def test_sin_archivo(datos):
    assert validar_formulario(datos, hay_archivo=False) == {"file": MENSAJE_SIN_ARCHIVO}


def test_limpiar_datos_recorta_y_ordena():
    datos = {"jrv": " 2507 ", "territory": "12\n", "extra": "x"}
    limpios = limpiar_datos(datos)
    assert list(limpios) == list(CAMPOS)
    assert limpios["jrv"] == "2507"
    assert limpios["territory"] == "12"
    assert limpios["centro"] == ""


def test_validar_archivo():
    assert validar_archivo("acta.json", "application/json") == ""
    assert validar_archivo("acta.json", "text/plain") == MENSAJE_TIPO_INVALIDO
    assert validar_archivo(None, None) == ""
