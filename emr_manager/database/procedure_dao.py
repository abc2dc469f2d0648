"""Procedure records and their data-access object."""

from dataclasses import dataclass

from .base import BaseDAO, Record


@dataclass(eq=False)
class Procedure(Record):
    id: str
    name: str
    description: str
    duration: int  # minutes
    doctor_id: str


class ProcedureDAO(BaseDAO[Procedure, str]):
    """CRUD for the procedures table."""

    TABLE = "procedures"
    KEY_COLUMN = "id"
    COLUMNS = ("name", "description", "duration", "doctorId")
    ENTITY_NAME = "procedure"

    def _entity_to_params(self, procedure: Procedure) -> tuple:
        return (
            procedure.name,
            procedure.description,
            procedure.duration,
            procedure.doctor_id,
        )

    def _row_to_entity(self, row) -> Procedure:
        """Convert a database row to a Procedure object."""
        return Procedure(
            id=row["id"],
            name=row["name"],
            description=row["description"],
            duration=row["duration"],
            doctor_id=row["doctorId"],
        )
