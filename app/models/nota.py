from sqlalchemy import Column, Float, ForeignKey, Integer, UniqueConstraint
from sqlalchemy.orm import relationship
from .base import BaseModel


class Nota(BaseModel):
    __tablename__ = "nota"
    # Una sola fila por (alumno, materia): el upsert se serializa sobre este índice
    __table_args__ = (
        UniqueConstraint("alumno_id", "materia_id", name="uq_nota_alumno_materia"),
    )

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    alumno_id = Column(Integer, ForeignKey("alumno.id", ondelete="CASCADE"), nullable=False)
    materia_id = Column(Integer, ForeignKey("materia.id", ondelete="CASCADE"), nullable=False)
    nota1 = Column(Float, nullable=True)
    nota2 = Column(Float, nullable=True)
    nota3 = Column(Float, nullable=True)

    # Relationships
    alumno = relationship("Alumno", back_populates="notas")
    materia = relationship("Materia", back_populates="notas")
