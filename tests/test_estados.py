import pytest

from trivo.core.estados import (
    REVISION,
    SUSCRIPCION,
    EstadoRevision,
    EstadoSuscripcion,
)
from trivo.core.exceptions import InvalidTransition

pytestmark = pytest.mark.unit


def test_revision_pendiente_a_aprobado():
    assert REVISION.transicionar("pendiente", "aprobado") is True
    assert REVISION.transicionar(EstadoRevision.PENDIENTE, EstadoRevision.RECHAZADO) is True


def test_revision_repetir_estado_es_noop():
    assert REVISION.transicionar("aprobado", "aprobado") is False
    assert REVISION.transicionar("rechazado", "rechazado") is False


def test_revision_entre_terminales_falla():
    with pytest.raises(InvalidTransition) as exc:
        REVISION.transicionar("aprobado", "rechazado")
    assert exc.value.status_code == 409
    assert exc.value.details == {"estado_actual": "aprobado", "estado_solicitado": "rechazado"}


def test_revision_no_vuelve_a_pendiente():
    with pytest.raises(InvalidTransition):
        REVISION.transicionar("rechazado", "pendiente")


def test_estado_desconocido():
    with pytest.raises(InvalidTransition):
        REVISION.transicionar("pendiente", "borrado")


def test_suscripcion_trial_solo_expira_o_cancela():
    assert SUSCRIPCION.puede("trial", "trial_expirado")
    assert SUSCRIPCION.puede("trial", "cancelada")
    assert not SUSCRIPCION.puede("trial", "activa")
    assert not SUSCRIPCION.puede("trial", "pendiente")


def test_suscripcion_pago_y_reactivacion():
    assert SUSCRIPCION.puede("trial_expirado", "pendiente")
    assert SUSCRIPCION.puede("pendiente", "activa")
    assert SUSCRIPCION.puede("activa", "pausada")
    assert SUSCRIPCION.puede("pausada", "activa")
    assert SUSCRIPCION.puede("vencida", "activa")


def test_cancelada_es_terminal():
    assert SUSCRIPCION.es_terminal(EstadoSuscripcion.CANCELADA)
    assert not SUSCRIPCION.es_terminal(EstadoSuscripcion.ACTIVA)
    with pytest.raises(InvalidTransition):
        SUSCRIPCION.transicionar("cancelada", "activa")
