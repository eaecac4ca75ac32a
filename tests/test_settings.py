import pytest

from trivo.config.settings import Settings

pytestmark = pytest.mark.unit


def test_configuracion_desde_entorno(monkeypatch):
    monkeypatch.setenv("trial_max_clases_gratis", "3")
    monkeypatch.setenv("TRIAL_TYPE", "por-academia")

    politica = Settings().trial_policy()
    assert politica.max_clases_gratis == 3
    assert politica.tipo == "por-academia"


def test_lee_archivo_env():
    assert Settings.model_config["env_file"] == ".env"
    assert Settings.model_config["case_sensitive"] is False
