from sqlalchemy import Column, DateTime, func
from sqlalchemy.orm import declared_attr
from app.config.database import Base


class TimestampMixin:
    """Mixin para agregar campos de timestamp a los modelos"""

    @declared_attr
    def created_at(cls):
        return Column(DateTime(timezone=True), server_default=func.now())

    @declared_attr
    def updated_at(cls):
        return Column(
            DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
        )


class BaseModel(Base, TimestampMixin):
    """Modelo base con id entero y timestamps"""

    __abstract__ = True
