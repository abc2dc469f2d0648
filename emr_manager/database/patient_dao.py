"""Patient records and their data-access object."""

from dataclasses import dataclass
from datetime import date

from .base import BaseDAO, Record


@dataclass(eq=False)
class Patient(Record):
    KEY_FIELD = "mrn"

    mrn: int
    fname: str
    lname: str
    dob: date
    address: str
    state: str
    city: str
    zip: int
    insurance: str
    email: str

    @property
    def full_name(self) -> str:
        return f"{self.fname} {self.lname}"


class PatientDAO(BaseDAO[Patient, int]):
    """CRUD for the patients table, keyed by MRN."""

    TABLE = "patients"
    KEY_COLUMN = "mrn"
    COLUMNS = (
        "fname", "lname", "dob", "address", "state",
        "city", "zip", "insurance", "email",
    )
    ENTITY_NAME = "patient"

    def _entity_to_params(self, patient: Patient) -> tuple:
        return (
            patient.fname,
            patient.lname,
            patient.dob.isoformat(),
            patient.address,
            patient.state,
            patient.city,
            patient.zip,
            patient.insurance,
            patient.email,
        )

    def _row_to_entity(self, row) -> Patient:
        """Convert a database row to a Patient object."""
        return Patient(
            mrn=row["mrn"],
            fname=row["fname"],
            lname=row["lname"],
            dob=date.fromisoformat(row["dob"]),
            address=row["address"],
            state=row["state"],
            city=row["city"],
            zip=row["zip"],
            insurance=row["insurance"],
            email=row["email"],
        )
