from typing import Any, Optional

from fastapi import status


class TrivoError(Exception):
    """Error de dominio que se traduce a una respuesta JSON uniforme"""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "Error interno del servidor"

    def __init__(self, message: Optional[str] = None, details: Any = None):
        self.message = message or self.default_message
        self.details = details
        super().__init__(self.message)

    def to_dict(self) -> dict:
        body = {"error": self.message}
        if self.details is not None:
            body["details"] = self.details
        return body


class Unauthenticated(TrivoError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "No autorizado"


class Forbidden(TrivoError):
    status_code = status.HTTP_403_FORBIDDEN
    default_message = "Sin permisos"


class ValidationFailed(TrivoError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Faltan campos requeridos"


class NotFound(TrivoError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Recurso no encontrado"


class Conflict(TrivoError):
    status_code = status.HTTP_409_CONFLICT
    default_message = "El recurso ya existe"

    def __init__(
        self,
        message: Optional[str] = None,
        details: Any = None,
        status_code: Optional[int] = None,
    ):
        super().__init__(message, details)
        # Algunas rutas históricas responden 400 ante duplicados
        if status_code is not None:
            self.status_code = status_code


class CapacityExceeded(TrivoError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "No hay cupos disponibles"


class InvalidTransition(TrivoError):
    status_code = status.HTTP_409_CONFLICT
    default_message = "Transición de estado inválida"


class UpstreamError(TrivoError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Error en un servicio externo"
