from sqlalchemy import CheckConstraint, Column, ForeignKey, Integer, Numeric, String
from sqlalchemy.orm import relationship
from .base import BaseModel


class Pago(BaseModel):
    __tablename__ = "pagos"
    __table_args__ = (
        CheckConstraint(
            "NOT (salida_id IS NOT NULL AND academia_id IS NOT NULL)",
            name="ck_pago_un_solo_destino",
        ),
    )

    salida_id = Column(Integer, ForeignKey("salidas_sociales.id", ondelete="SET NULL"), index=True)
    academia_id = Column(Integer, ForeignKey("academias.id", ondelete="SET NULL"), index=True)
    usuario_id = Column(Integer, ForeignKey("usuarios.id"), nullable=False, index=True)
    comprobante_url = Column(String(500))
    estado = Column(String(20), nullable=False, default="pendiente", index=True)
    amount = Column(Numeric(12, 2), nullable=False, default=0)
    tipo_pago = Column(String(20), nullable=False, default="transferencia")

    # Copia del nombre al momento del pago; no se actualiza ni se borra con el padre
    salida_nombre = Column(String(150))
    academia_nombre = Column(String(150))

    # Relationships
    usuario = relationship("Usuario", lazy="selectin")
    salida = relationship("SalidaSocial")
    academia = relationship("Academia")
