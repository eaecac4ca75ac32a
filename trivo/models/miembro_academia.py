from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Text, UniqueConstraint, func
from sqlalchemy.orm import relationship
from .base import BaseModel


class MiembroAcademia(BaseModel):
    __tablename__ = "miembros_academia"
    __table_args__ = (
        UniqueConstraint("usuario_id", "academia_id", name="uq_miembro_academia_usuario"),
    )

    usuario_id = Column(Integer, ForeignKey("usuarios.id"), nullable=False, index=True)
    academia_id = Column(Integer, ForeignKey("academias.id"), nullable=False, index=True)
    grupo_id = Column(Integer, ForeignKey("grupos.id", ondelete="SET NULL"))
    fecha_union = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    estado = Column(String(20), nullable=False, default="activo")
    tipo_membresia = Column(String(20))
    fecha_vencimiento = Column(DateTime(timezone=True))
    notas = Column(Text)

    # Relationships
    usuario = relationship("Usuario", lazy="selectin")
    academia = relationship("Academia", back_populates="miembros")
    grupo = relationship("Grupo")
