from sqlalchemy import Column, String
from .base import BaseModel


class Sponsor(BaseModel):
    __tablename__ = "sponsors"

    name = Column(String(50), unique=True, nullable=False)
    imagen = Column(String(500))
