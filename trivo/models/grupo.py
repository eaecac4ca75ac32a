from sqlalchemy import Column, ForeignKey, Integer, JSON, String, Text
from sqlalchemy.orm import relationship
from .base import BaseModel


class Grupo(BaseModel):
    __tablename__ = "grupos"

    academia_id = Column(Integer, ForeignKey("academias.id"), nullable=False, index=True)
    profesor_id = Column(Integer, ForeignKey("usuarios.id", ondelete="SET NULL"))
    nombre_grupo = Column(String(150), nullable=False)
    nivel = Column(String(50))
    ubicacion = Column(String(255))
    horario = Column(String(100))
    dias = Column(JSON, nullable=False, default=list)
    descripcion = Column(Text)
    imagen = Column(String(500))
    tipo_grupo = Column(String(100))
    tiempo_promedio = Column(String(50))
    location_coords = Column(JSON)

    # Relationships
    academia = relationship("Academia", back_populates="grupos")
    profesor = relationship("Usuario", lazy="selectin")
