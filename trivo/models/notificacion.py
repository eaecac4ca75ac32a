from sqlalchemy import Boolean, Column, ForeignKey, Index, Integer, JSON, String
from .base import BaseModel


class Notificacion(BaseModel):
    __tablename__ = "notificaciones"
    __table_args__ = (
        Index("ix_notificaciones_usuario_read_created", "usuario_id", "read", "created_at"),
    )

    usuario_id = Column(Integer, ForeignKey("usuarios.id", ondelete="CASCADE"), nullable=False, index=True)
    type = Column(String(30), nullable=False)
    message = Column(String(500), nullable=False)
    read = Column(Boolean, nullable=False, default=False, index=True)
    related_id = Column(Integer)
    related_user_id = Column(Integer, ForeignKey("usuarios.id", ondelete="SET NULL"))
    # "metadata" está reservado por SQLAlchemy en los modelos declarativos
    metadata_ = Column("metadata", JSON, nullable=False, default=dict)
