from sqlalchemy import Column, Integer, String
from sqlalchemy.orm import relationship
from .base import BaseModel


class Materia(BaseModel):
    __tablename__ = "materia"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    nombre = Column(String(200), nullable=False)
    codigo = Column(String(20), unique=True, nullable=False)
    anio = Column(Integer, nullable=False)

    # Relationships
    notas = relationship("Nota", back_populates="materia", passive_deletes=True)
