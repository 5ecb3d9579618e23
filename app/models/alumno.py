from sqlalchemy import Column, Integer, String
from sqlalchemy.orm import relationship
from .base import BaseModel


class Alumno(BaseModel):
    __tablename__ = "alumno"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    nombre = Column(String(100), nullable=False)
    apellido = Column(String(100), nullable=False)
    dni = Column(String(20), unique=True, nullable=False)

    # Relationships
    notas = relationship("Nota", back_populates="alumno", passive_deletes=True)
