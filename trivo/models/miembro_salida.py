from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, UniqueConstraint, func
from sqlalchemy.orm import relationship

from trivo.core.constantes import RolMiembroSalida
from .base import BaseModel


class MiembroSalida(BaseModel):
    __tablename__ = "miembros_salida"
    __table_args__ = (
        UniqueConstraint("usuario_id", "salida_id", name="uq_miembro_salida_usuario"),
    )

    usuario_id = Column(Integer, ForeignKey("usuarios.id"), nullable=False, index=True)
    salida_id = Column(Integer, ForeignKey("salidas_sociales.id"), nullable=False, index=True)
    fecha_union = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    rol = Column(String(20), nullable=False, default=RolMiembroSalida.MIEMBRO.value)
    estado = Column(String(20), nullable=False, default="pendiente", index=True)
    pago_id = Column(Integer, ForeignKey("pagos.id", ondelete="SET NULL"))

    # Relationships
    usuario = relationship("Usuario", lazy="selectin")
    salida = relationship("SalidaSocial", back_populates="miembros")
    pago = relationship("Pago", lazy="selectin")
