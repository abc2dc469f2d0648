"""Doctor records and their data-access object."""

from dataclasses import dataclass

from .base import BaseDAO, Record


@dataclass(eq=False)
class Doctor(Record):
    id: str
    name: str


class DoctorDAO(BaseDAO[Doctor, str]):
    """CRUD for the doctors table."""

    TABLE = "doctors"
    KEY_COLUMN = "id"
    COLUMNS = ("name",)
    ENTITY_NAME = "doctor"

    def _entity_to_params(self, doctor: Doctor) -> tuple:
        return (doctor.name,)

    def _row_to_entity(self, row) -> Doctor:
        """Convert a database row to a Doctor object."""
        return Doctor(id=row["id"], name=row["name"])
