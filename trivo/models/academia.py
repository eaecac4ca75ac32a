from sqlalchemy import Boolean, Column, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship
from .base import BaseModel


class Academia(BaseModel):
    __tablename__ = "academias"

    # Un usuario solo puede ser dueño de una academia
    dueno_id = Column(Integer, ForeignKey("usuarios.id"), unique=True, nullable=False)
    nombre_academia = Column(String(150), nullable=False)
    pais = Column(String(100), nullable=False)
    provincia = Column(String(100), nullable=False)
    localidad = Column(String(100), nullable=False)
    descripcion = Column(Text)
    tipo_disciplina = Column(String(20), nullable=False)
    telefono = Column(String(40))
    imagen = Column(String(500))
    clase_gratis = Column(Boolean, nullable=False)
    precio = Column(String(50))
    cbu = Column(String(50))
    alias = Column(String(100))

    # Relationships
    dueno = relationship("Usuario", back_populates="academia", lazy="selectin")
    grupos = relationship("Grupo", back_populates="academia")
    miembros = relationship("MiembroAcademia", back_populates="academia")
