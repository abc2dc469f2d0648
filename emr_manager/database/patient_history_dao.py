"""Patient history records and their data-access object."""

from dataclasses import dataclass
from datetime import date

from .base import BaseDAO, Record


@dataclass(eq=False)
class PatientHistory(Record):
    id: str
    patient_id: int
    procedure_id: str
    date: date
    billing: float
    doctor_id: str


class PatientHistoryDAO(BaseDAO[PatientHistory, str]):
    """CRUD for the patient_history table plus lookup by patient."""

    TABLE = "patient_history"
    KEY_COLUMN = "id"
    COLUMNS = ("patientId", "procedureId", "date", "billing", "doctorId")
    ENTITY_NAME = "patient history"

    def read_by_patient_id(self, patient_id: int) -> list[PatientHistory]:
        """Get every history record for a patient."""
        return self._fetch_all(
            f"SELECT * FROM {self.TABLE} WHERE patientId = ?",
            (patient_id,),
            "read patient histories by patient ID",
        )

    def _entity_to_params(self, history: PatientHistory) -> tuple:
        return (
            history.patient_id,
            history.procedure_id,
            history.date.isoformat(),
            history.billing,
            history.doctor_id,
        )

    def _row_to_entity(self, row) -> PatientHistory:
        """Convert a database row to a PatientHistory object."""
        return PatientHistory(
            id=row["id"],
            patient_id=row["patientId"],
            procedure_id=row["procedureId"],
            date=date.fromisoformat(row["date"]),
            billing=row["billing"],
            doctor_id=row["doctorId"],
        )
