from sqlalchemy import Column, ForeignKey, Integer, JSON, String, Text
from sqlalchemy.orm import relationship
from .base import BaseModel


class SalidaSocial(BaseModel):
    __tablename__ = "salidas_sociales"

    nombre = Column(String(150), nullable=False)
    ubicacion = Column(String(255))
    deporte = Column(String(50))
    fecha = Column(String(30))
    hora = Column(String(20))
    duracion = Column(String(50))
    descripcion = Column(Text)
    localidad = Column(String(100))
    provincia = Column(String(100))
    telefono_organizador = Column(String(40))
    imagen = Column(String(500))
    location_coords = Column(JSON)
    dificultad = Column(String(20))
    precio = Column(String(50))
    cupo = Column(Integer, nullable=False)
    cbu = Column(String(50))
    alias = Column(String(100))
    creador_id = Column(Integer, ForeignKey("usuarios.id"), nullable=False, index=True)
    whatsapp_link = Column(String(500))
    sponsor_id = Column(Integer, ForeignKey("sponsors.id", ondelete="SET NULL"))
    short_id = Column(String(16), unique=True, index=True, nullable=False)

    # Relationships
    creador = relationship("Usuario", lazy="selectin")
    sponsor = relationship("Sponsor")
    miembros = relationship("MiembroSalida", back_populates="salida")
