from pydantic import AliasChoices, BaseModel, ConfigDict, Field
from typing import Any, Dict, List, Optional
from datetime import datetime

from trivo.core.constantes import TipoNotificacion


class NotificacionCreate(BaseModel):
    model_config = ConfigDict(use_enum_values=True)

    usuario_id: int
    type: TipoNotificacion
    message: str = Field(min_length=1, max_length=500)
    related_id: Optional[int] = None
    related_user_id: Optional[int] = None
    metadata: Dict[str, Any] = {}


class NotificacionUpdate(BaseModel):
    read: bool = True


class Notificacion(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    usuario_id: int
    type: str
    message: str
    read: bool
    related_id: Optional[int] = None
    related_user_id: Optional[int] = None
    # La columna se mapea como ``metadata_`` en el modelo
    metadata: Dict[str, Any] = Field(
        default_factory=dict, validation_alias=AliasChoices("metadata_", "metadata")
    )
    created_at: datetime


class NotificacionList(BaseModel):
    notificaciones: List[Notificacion]
    unreadCount: int


class MarkAllReadResponse(BaseModel):
    success: bool = True
    message: str
    count: int
