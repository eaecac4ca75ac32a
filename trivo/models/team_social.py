from sqlalchemy import Column, ForeignKey, Integer, JSON, String, Text
from sqlalchemy.orm import relationship
from .base import BaseModel


class TeamSocial(BaseModel):
    __tablename__ = "teams_sociales"

    nombre = Column(String(150), nullable=False)
    ubicacion = Column(String(255), nullable=False)
    precio = Column(String(50), nullable=False)
    deporte = Column(String(50), nullable=False)
    fecha = Column(String(30), nullable=False)
    hora = Column(String(20), nullable=False)
    duracion = Column(String(50), nullable=False)
    localidad = Column(String(100))
    provincia = Column(String(100))
    telefono_organizador = Column(String(40))
    whatsapp_link = Column(String(500))
    descripcion = Column(Text)
    imagen = Column(String(500))
    location_coords = Column(JSON)
    creador_id = Column(Integer, ForeignKey("usuarios.id"), nullable=False, index=True)
    cupo = Column(Integer, nullable=False)
    cbu = Column(String(50))
    alias = Column(String(100))
    dificultad = Column(String(20))

    # Relationships
    creador = relationship("Usuario", lazy="selectin")
