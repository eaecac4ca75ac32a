from types import SimpleNamespace

import pytest

from trivo.core.constantes import Rol
from trivo.core.exceptions import Forbidden, NotFound
from trivo.core.permissions import POLITICAS, check_ownership, check_role, get_politica

pytestmark = pytest.mark.unit


def usuario(id, rol):
    return SimpleNamespace(id=id, rol=rol.value)


def test_alumno_no_crea_salidas():
    with pytest.raises(Forbidden):
        check_role("salidas.crear", usuario(1, Rol.ALUMNO))


def test_dueno_no_organiza_salidas():
    with pytest.raises(Forbidden):
        check_role("salidas.revisar_miembro", usuario(1, Rol.DUENO_ACADEMIA))


def test_staff_crea_academias():
    for rol in (Rol.ADMIN, Rol.PROFE, Rol.DUENO_ACADEMIA):
        check_role("academias.crear", usuario(1, rol))
    with pytest.raises(Forbidden):
        check_role("academias.crear", usuario(1, Rol.ALUMNO))


def test_rol_desconocido_no_pasa():
    with pytest.raises(Forbidden):
        check_role("academias.listar_propias", SimpleNamespace(id=1, rol="visitante"))


def test_dueno_del_recurso_pasa():
    check_ownership("academias.editar", usuario(5, Rol.DUENO_ACADEMIA), 5)


def test_admin_no_necesita_ser_dueno():
    check_ownership("academias.editar", usuario(1, Rol.ADMIN), 99)


def test_escritura_ajena_es_forbidden():
    with pytest.raises(Forbidden) as exc:
        check_ownership("academias.editar", usuario(2, Rol.DUENO_ACADEMIA), 5, mensaje="No es tuya")
    assert exc.value.message == "No es tuya"


def test_lectura_ajena_se_oculta():
    with pytest.raises(NotFound) as exc:
        check_ownership("academias.ver", usuario(2, Rol.DUENO_ACADEMIA), 5)
    assert exc.value.message == "Academia no encontrada"


def test_sin_propietario_no_pasa():
    with pytest.raises(Forbidden):
        check_ownership("pagos.revisar", usuario(2, Rol.PROFE), None)


def test_operacion_sin_politica():
    with pytest.raises(KeyError):
        get_politica("academias.inventada")


def test_todas_las_politicas_tienen_roles():
    assert all(politica.roles for politica in POLITICAS.values())
