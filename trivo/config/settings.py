from pydantic import BaseModel
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import List, Literal, Optional

class TrialPolicy(BaseModel, frozen=True):
    """Reglas del periodo de prueba que se inyectan al servicio de suscripciones"""

    tipo: Literal["global", "por-academia"] = "global"
    max_clases_gratis: int = 1
    max_dias_gratis: int = 7
    habilitado: bool = True

    # Datos de cobro recurrente
    frecuencia: int = 1
    tipo_frecuencia: str = "months"
    moneda: str = "ARS"
    monto_minimo: float = 15

class Settings(BaseSettings):
    # Database
    database_url: str

    # JWT
    secret_key: str
    algorithm: str = "HS256"
    access_token_expire_minutes: int = 60 * 24

    # Environment
    environment: str = "development"
    debug: bool = False
    log_level: str = "INFO"

    # CORS
    allowed_origins: List[str] = ["*"]

    # Redis (eventos en tiempo real de notificaciones)
    redis_url: Optional[str] = None

    # Geocoding
    nominatim_url: str = "https://nominatim.openstreetmap.org/search"
    geocoding_user_agent: str = "TrivoApp/1.0"
    geocoding_timeout: float = 10.0

    # Trial y suscripciones
    trial_type: Literal["global", "por-academia"] = "global"
    trial_max_clases_gratis: int = 1
    trial_max_dias_gratis: int = 7
    trial_enabled: bool = True
    subscription_frequency: int = 1
    subscription_frequency_type: str = "months"
    subscription_currency: str = "ARS"
    subscription_min_amount: float = 15

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    def trial_policy(self) -> TrialPolicy:
        return TrialPolicy(
            tipo=self.trial_type,
            max_clases_gratis=self.trial_max_clases_gratis,
            max_dias_gratis=self.trial_max_dias_gratis,
            habilitado=self.trial_enabled,
            frecuencia=self.subscription_frequency,
            tipo_frecuencia=self.subscription_frequency_type,
            moneda=self.subscription_currency,
            monto_minimo=self.subscription_min_amount,
        )

settings = Settings()
