from datetime import datetime, timedelta, timezone
from decimal import Decimal
from types import SimpleNamespace

import pytest

from trivo.config.settings import TrialPolicy
from trivo.models.suscripcion import Suscripcion
from trivo.services.suscripciones import SubscriptionService, monto_desde_precio, sumar_meses

pytestmark = pytest.mark.unit


def servicio(**policy):
    return SubscriptionService(db=None, policy=TrialPolicy(**policy))


def test_monto_desde_precio():
    assert monto_desde_precio("$15000") == Decimal(15000)
    assert monto_desde_precio("ARS 5000 por mes") == Decimal(5000)
    assert monto_desde_precio("gratis") == Decimal(0)
    assert monto_desde_precio(None) == Decimal(0)


def test_sumar_meses_respeta_fin_de_mes():
    fecha = datetime(2025, 1, 31, tzinfo=timezone.utc)
    assert sumar_meses(fecha, 1) == datetime(2025, 2, 28, tzinfo=timezone.utc)
    assert sumar_meses(fecha, 12) == datetime(2026, 1, 31, tzinfo=timezone.utc)


def test_trial_vence_por_clases():
    sub = Suscripcion(
        esta_en_trial=True,
        clases_asistidas=1,
        trial_fecha_fin=datetime.now(timezone.utc) + timedelta(days=5),
    )
    assert servicio(max_clases_gratis=1).trial_vencido(sub)
    assert not servicio(max_clases_gratis=2).trial_vencido(sub)


def test_trial_vence_por_dias():
    sub = Suscripcion(
        esta_en_trial=True,
        clases_asistidas=0,
        # SQLite devuelve fechas sin zona horaria
        trial_fecha_fin=datetime.now(timezone.utc).replace(tzinfo=None) - timedelta(minutes=1),
    )
    assert servicio().trial_vencido(sub)


def test_expirar_trial_cambia_estado():
    sub = Suscripcion(estado="trial", esta_en_trial=True, clases_asistidas=1)
    assert servicio(max_clases_gratis=1).expirar_trial_si_corresponde(sub)
    assert sub.estado == "trial_expirado"
    assert sub.esta_en_trial is False


def test_elegibilidad_global_y_por_academia():
    usuario = SimpleNamespace(ha_usado_trial=True, academias_con_trial=[3])
    assert not servicio(tipo="global").es_elegible_para_trial(usuario, 7)
    assert servicio(tipo="por-academia").es_elegible_para_trial(usuario, 7)
    assert not servicio(tipo="por-academia").es_elegible_para_trial(usuario, 3)
    assert not servicio(habilitado=False).es_elegible_para_trial(
        SimpleNamespace(ha_usado_trial=False, academias_con_trial=[]), 7
    )
