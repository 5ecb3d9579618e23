import logging
from enum import Enum
from typing import Any, Dict, Optional, Tuple

from sqlalchemy import and_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import NotFound
from app.models.alumno import Alumno
from app.models.materia import Materia
from app.models.nota import Nota
from app.utils.helpers import calcular_promedio, validar_nota

logger = logging.getLogger(__name__)


class ResourceKind(str, Enum):
    """Recursos que una nota puede referenciar"""

    ALUMNO = "alumno"
    MATERIA = "materia"

    @property
    def model(self):
        return _MODELOS[self]

    @property
    def not_found_message(self) -> str:
        return _MENSAJES[self]


_MODELOS = {
    ResourceKind.ALUMNO: Alumno,
    ResourceKind.MATERIA: Materia,
}

_MENSAJES = {
    ResourceKind.ALUMNO: "Alumno no encontrado",
    ResourceKind.MATERIA: "Materia no encontrada",
}


async def ensure_exists(db: AsyncSession, kind: ResourceKind, id: int) -> None:
    model = kind.model
    result = await db.execute(select(model.id).where(model.id == id))
    if result.scalar_one_or_none() is None:
        raise NotFound(model.__name__, kind.not_found_message)


def promedio_de(nota: Optional[Nota]) -> Optional[float]:
    if nota is None:
        return None
    return calcular_promedio([nota.nota1, nota.nota2, nota.nota3])


def nota_to_dict(nota: Nota) -> Dict[str, Any]:
    return {
        "id": nota.id,
        "alumno_id": nota.alumno_id,
        "materia_id": nota.materia_id,
        "nota1": nota.nota1,
        "nota2": nota.nota2,
        "nota3": nota.nota3,
        "promedio": promedio_de(nota),
    }


class CRUDNota:
    async def get_by_pair(
        self, db: AsyncSession, *, alumno_id: int, materia_id: int
    ) -> Optional[Nota]:
        result = await db.execute(
            select(Nota).where(
                Nota.alumno_id == alumno_id, Nota.materia_id == materia_id
            )
        )
        return result.scalar_one_or_none()

    async def upsert(
        self,
        db: AsyncSession,
        *,
        alumno_id: int,
        materia_id: int,
        nota1: Optional[float] = None,
        nota2: Optional[float] = None,
        nota3: Optional[float] = None,
    ) -> Tuple[Nota, bool]:
        """
        Crear o sobrescribir las notas de un alumno en una materia.

        Las tres notas se reemplazan siempre (no es un parche parcial): una nota
        omitida queda en null. Devuelve la fila y True si fue creada, False si
        fue actualizada.
        """
        valores = {
            "nota1": validar_nota(nota1, "nota1"),
            "nota2": validar_nota(nota2, "nota2"),
            "nota3": validar_nota(nota3, "nota3"),
        }

        await ensure_exists(db, ResourceKind.ALUMNO, alumno_id)
        await ensure_exists(db, ResourceKind.MATERIA, materia_id)

        existente = await self.get_by_pair(db, alumno_id=alumno_id, materia_id=materia_id)
        if existente is not None:
            return await self._sobrescribir(db, existente, valores), False

        db_obj = Nota(alumno_id=alumno_id, materia_id=materia_id, **valores)
        db.add(db_obj)
        try:
            await db.commit()
        except IntegrityError:
            # Otra petición insertó el mismo par primero: se sobrescribe su fila
            await db.rollback()
            logger.info(
                "Upsert concurrente de nota alumno=%s materia=%s, se actualiza",
                alumno_id,
                materia_id,
            )
            existente = await self.get_by_pair(db, alumno_id=alumno_id, materia_id=materia_id)
            if existente is None:
                raise
            return await self._sobrescribir(db, existente, valores), False

        await db.refresh(db_obj)
        return db_obj, True

    async def _sobrescribir(
        self, db: AsyncSession, db_obj: Nota, valores: Dict[str, Optional[float]]
    ) -> Nota:
        for field, value in valores.items():
            setattr(db_obj, field, value)
        db.add(db_obj)
        await db.commit()
        await db.refresh(db_obj)
        return db_obj

    async def promedios_por_alumno(self, db: AsyncSession, *, alumno_id: int) -> Dict[str, Any]:
        """Una entrada por materia (existan o no notas), ordenadas por nombre de materia"""
        await ensure_exists(db, ResourceKind.ALUMNO, alumno_id)

        result = await db.execute(
            select(Materia, Nota)
            .outerjoin(
                Nota,
                and_(Nota.materia_id == Materia.id, Nota.alumno_id == alumno_id),
            )
            .order_by(Materia.nombre, Materia.id)
        )

        notas = []
        for materia, nota in result.all():
            notas.append(
                {
                    "materia_id": materia.id,
                    "materia": materia.nombre,
                    "nota1": nota.nota1 if nota else None,
                    "nota2": nota.nota2 if nota else None,
                    "nota3": nota.nota3 if nota else None,
                    "promedio": promedio_de(nota),
                }
            )

        return {
            "alumno_id": alumno_id,
            "promedio_general": calcular_promedio(n["promedio"] for n in notas),
            "notas": notas,
        }

    async def promedios_por_materia(self, db: AsyncSession, *, materia_id: int) -> Dict[str, Any]:
        """Una entrada por alumno (existan o no notas), ordenadas por apellido y nombre"""
        await ensure_exists(db, ResourceKind.MATERIA, materia_id)

        result = await db.execute(
            select(Alumno, Nota)
            .outerjoin(
                Nota,
                and_(Nota.alumno_id == Alumno.id, Nota.materia_id == materia_id),
            )
            .order_by(Alumno.apellido, Alumno.nombre, Alumno.id)
        )

        alumnos = []
        for alumno, nota in result.all():
            alumnos.append(
                {
                    "alumno_id": alumno.id,
                    "nombre": alumno.nombre,
                    "apellido": alumno.apellido,
                    "nota1": nota.nota1 if nota else None,
                    "nota2": nota.nota2 if nota else None,
                    "nota3": nota.nota3 if nota else None,
                    "promedio": promedio_de(nota),
                }
            )

        return {
            "materia_id": materia_id,
            "promedio_materia": calcular_promedio(a["promedio"] for a in alumnos),
            "alumnos": alumnos,
        }


nota = CRUDNota()
