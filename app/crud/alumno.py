from app.crud.base import CRUDBase
from app.models.alumno import Alumno
from app.schemas.alumno import AlumnoCreate, AlumnoUpdate


class CRUDAlumno(CRUDBase[Alumno, AlumnoCreate, AlumnoUpdate]):
    def __init__(self):
        super().__init__(
            Alumno,
            unique_field="dni",
            not_found_message="Alumno no encontrado",
            conflict_message="DNI ya registrado",
            update_conflict_message="DNI ya en uso por otro alumno",
        )


alumno = CRUDAlumno()
