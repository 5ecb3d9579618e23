from app.crud.base import CRUDBase
from app.models.materia import Materia
from app.schemas.materia import MateriaCreate, MateriaUpdate


class CRUDMateria(CRUDBase[Materia, MateriaCreate, MateriaUpdate]):
    def __init__(self):
        super().__init__(
            Materia,
            unique_field="codigo",
            not_found_message="Materia no encontrada",
            conflict_message="Codigo ya registrado",
            update_conflict_message="Codigo ya en uso",
        )


materia = CRUDMateria()
