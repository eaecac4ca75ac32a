from sqlalchemy import Boolean, Column, JSON, String
from sqlalchemy.orm import relationship
from .base import BaseModel


class Usuario(BaseModel):
    __tablename__ = "usuarios"

    email = Column(String(255), unique=True, index=True, nullable=False)
    password_hash = Column(String(255), nullable=False)
    firstname = Column(String(100), nullable=False)
    lastname = Column(String(100), nullable=False)
    rol = Column(String(30), nullable=False, index=True)
    telnumber = Column(String(40))
    imagen = Column(String(500))
    bio = Column(String(1000))
    instagram = Column(String(255))
    facebook = Column(String(255))
    twitter = Column(String(255))

    # Control del periodo de prueba
    ha_usado_trial = Column(Boolean, nullable=False, default=False)
    academias_con_trial = Column(JSON, nullable=False, default=list)

    # Relationships
    academia = relationship("Academia", back_populates="dueno", uselist=False)

    @property
    def nombre_completo(self) -> str:
        return f"{self.firstname} {self.lastname}"
