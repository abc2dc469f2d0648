"""Parse raw console input into typed records using Pydantic models."""

import dataclasses
import datetime as dt
import re
from typing import ClassVar

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from emr_manager.database import Doctor, Patient, PatientHistory, Procedure
from emr_manager.errors import InvalidInput


def normalize_date(v):
    """Convert various date formats to YYYY-MM-DD."""
    if not isinstance(v, str):
        return v
    v = v.strip()
    # Already in correct format
    if re.match(r"^\d{4}-\d{2}-\d{2}$", v):
        return v
    # MM/DD/YYYY
    match = re.match(r"^(\d{1,2})/(\d{1,2})/(\d{4})$", v)
    if match:
        m, d, y = match.groups()
        return f"{y}-{m.zfill(2)}-{d.zfill(2)}"
    # MM-DD-YYYY
    match = re.match(r"^(\d{1,2})-(\d{1,2})-(\d{4})$", v)
    if match:
        m, d, y = match.groups()
        return f"{y}-{m.zfill(2)}-{d.zfill(2)}"
    return v


class RecordForm(BaseModel):
    """Base form: strips whitespace and builds the matching record."""

    model_config = ConfigDict(str_strip_whitespace=True)

    RECORD: ClassVar[type]

    def to_record(self):
        return self.RECORD(**self.model_dump())


class DoctorForm(RecordForm):
    RECORD: ClassVar[type] = Doctor

    id: str
    name: str


class ProcedureForm(RecordForm):
    RECORD: ClassVar[type] = Procedure

    id: str
    name: str
    description: str
    duration: int
    doctor_id: str


class PatientForm(RecordForm):
    RECORD: ClassVar[type] = Patient

    mrn: int
    fname: str
    lname: str
    dob: dt.date
    address: str
    state: str
    city: str
    zip: int
    insurance: str
    email: str

    @field_validator("dob", mode="before")
    @classmethod
    def normalize_dob(cls, v):
        return normalize_date(v)

    @field_validator("state", mode="before")
    @classmethod
    def normalize_state(cls, v):
        """Upper-case two-letter abbreviations; leave full names alone."""
        if isinstance(v, str) and len(v.strip()) == 2:
            return v.strip().upper()
        return v


class PatientHistoryForm(RecordForm):
    RECORD: ClassVar[type] = PatientHistory
    model_config = ConfigDict(allow_inf_nan=False)

    id: str
    patient_id: int
    procedure_id: str
    date: dt.date
    billing: float
    doctor_id: str

    @field_validator("date", mode="before")
    @classmethod
    def normalize_visit_date(cls, v):
        return normalize_date(v)

    @field_validator("billing", mode="before")
    @classmethod
    def normalize_billing(cls, v):
        """Accept amounts written like "$1,234.50"."""
        if isinstance(v, str):
            return v.strip().lstrip("$").replace(",", "")
        return v


FORMS = {
    Doctor: DoctorForm,
    Procedure: ProcedureForm,
    Patient: PatientForm,
    PatientHistory: PatientHistoryForm,
}


def parse_record(form_cls: type[RecordForm], raw: dict):
    """Validate raw field values and return the typed record.

    Type errors are reported as InvalidInput for the first failing field.
    """
    try:
        form = form_cls.model_validate(raw)
    except ValidationError as e:
        error = e.errors()[0]
        field = str(error["loc"][0]) if error["loc"] else form_cls.__name__
        raise InvalidInput(field, f"{field}: {error['msg']}") from e
    return form.to_record()


def parse_changes(current, raw_changes: dict) -> dict:
    """Parse the supplied fields of an update against the current record.

    Returns typed values for just the keys in ``raw_changes``.
    """
    data = dataclasses.asdict(current) | raw_changes
    record = parse_record(FORMS[type(current)], data)
    return {name: getattr(record, name) for name in raw_changes}
