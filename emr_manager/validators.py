"""
Field validation for EMR records.

Every check takes a single raw value and raises :class:`InvalidInput` naming
the offending field. The ``validate_*`` functions run the checks for one
record in a fixed order and stop at the first failure. Nothing here touches
storage.
"""

import math
import re
from datetime import date, datetime

from emr_manager.database import Doctor, Patient, PatientHistory, Procedure
from emr_manager.errors import InvalidInput

MAX_ID_LENGTH = 25
MAX_DOCTOR_NAME_LENGTH = 45
MAX_PERSON_NAME_LENGTH = 100
MAX_STATE_LENGTH = 50
MIN_DURATION = 1
MAX_DURATION = 1440  # 24 hours in minutes
MIN_ZIP = 1
MAX_ZIP = 99999
EARLIEST_DOB = date(1900, 1, 1)

EMAIL_PATTERN = re.compile(r"^[A-Za-z0-9+_.-]+@[A-Za-z0-9-]+(\.[A-Za-z0-9-]+)+$")


# Generic checks

def require(value, field: str, label: str) -> None:
    if value is None or (isinstance(value, str) and not value.strip()):
        raise InvalidInput(field, f"{label} is required")


def check_max_length(value: str, max_length: int, field: str, label: str) -> None:
    if len(value) > max_length:
        raise InvalidInput(field, f"{label} must not exceed {max_length} characters")


def check_id(value: str | None, field: str, label: str) -> None:
    """Required string key of at most MAX_ID_LENGTH characters."""
    require(value, field, label)
    check_max_length(value, MAX_ID_LENGTH, field, label)


def check_whole_number(value, field: str, label: str) -> None:
    require(value, field, label)
    # bool is an int subclass but never a valid count or key
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidInput(field, f"{label} must be a whole number")


def check_positive(value, field: str, label: str) -> None:
    check_whole_number(value, field, label)
    if value <= 0:
        raise InvalidInput(field, f"{label} must be a positive number")


def check_not_future(value, field: str, label: str) -> None:
    require(value, field, label)
    # datetime is a date subclass but carries a time of day
    if isinstance(value, datetime) or not isinstance(value, date):
        raise InvalidInput(field, f"{label} must be a date")
    if value > date.today():
        raise InvalidInput(field, f"{label} cannot be in the future")


# Doctor

def validate_doctor_id(doctor_id: str | None, field: str = "id") -> None:
    check_id(doctor_id, field, "Doctor ID")


def validate_doctor_name(name: str | None) -> None:
    require(name, "name", "Doctor name")
    check_max_length(name, MAX_DOCTOR_NAME_LENGTH, "name", "Doctor name")


def validate_doctor(doctor: Doctor) -> None:
    validate_doctor_id(doctor.id)
    validate_doctor_name(doctor.name)


# Procedure

def validate_procedure_id(procedure_id: str | None, field: str = "id") -> None:
    check_id(procedure_id, field, "Procedure ID")


def validate_procedure_name(name: str | None) -> None:
    require(name, "name", "Procedure name")


def validate_procedure_description(description: str | None) -> None:
    require(description, "description", "Procedure description")


def validate_duration(duration) -> None:
    check_whole_number(duration, "duration", "Procedure duration")
    if duration < MIN_DURATION:
        raise InvalidInput(
            "duration",
            f"Procedure duration must be at least {MIN_DURATION} minute(s)",
        )
    if duration > MAX_DURATION:
        raise InvalidInput(
            "duration",
            f"Procedure duration must not exceed {MAX_DURATION} minutes (24 hours)",
        )


def validate_procedure(procedure: Procedure) -> None:
    validate_procedure_id(procedure.id)
    validate_procedure_name(procedure.name)
    validate_procedure_description(procedure.description)
    validate_duration(procedure.duration)
    validate_doctor_id(procedure.doctor_id, field="doctor_id")


# Patient

def validate_mrn(mrn, field: str = "mrn", label: str = "MRN") -> None:
    check_positive(mrn, field, label)


def validate_person_name(name: str | None, field: str, label: str) -> None:
    require(name, field, label)
    check_max_length(name, MAX_PERSON_NAME_LENGTH, field, label)


def validate_dob(dob) -> None:
    check_not_future(dob, "dob", "Date of birth")
    if dob < EARLIEST_DOB:
        raise InvalidInput("dob", f"Date of birth must not be before {EARLIEST_DOB.isoformat()}")


def validate_state(state: str | None) -> None:
    require(state, "state", "State")
    check_max_length(state, MAX_STATE_LENGTH, "state", "State")


def validate_zip(zip_code) -> None:
    check_whole_number(zip_code, "zip", "ZIP code")
    if not MIN_ZIP <= zip_code <= MAX_ZIP:
        raise InvalidInput("zip", "ZIP code must be a valid 5-digit number")


def validate_email(email: str | None) -> None:
    require(email, "email", "Email")
    if not EMAIL_PATTERN.match(email):
        raise InvalidInput("email", "Email format is invalid")


def validate_patient(patient: Patient) -> None:
    validate_mrn(patient.mrn)
    validate_person_name(patient.fname, "fname", "First name")
    validate_person_name(patient.lname, "lname", "Last name")
    validate_dob(patient.dob)
    require(patient.address, "address", "Address")
    require(patient.city, "city", "City")
    validate_state(patient.state)
    validate_zip(patient.zip)
    require(patient.insurance, "insurance", "Insurance")
    validate_email(patient.email)


# PatientHistory

def validate_history_date(value) -> None:
    check_not_future(value, "date", "Date")


def validate_billing(billing) -> None:
    require(billing, "billing", "Billing amount")
    if isinstance(billing, bool) or not isinstance(billing, (int, float)):
        raise InvalidInput("billing", "Billing amount must be a number")
    if not math.isfinite(billing):
        raise InvalidInput("billing", "Billing amount must be a finite number")
    if billing < 0:
        raise InvalidInput("billing", "Billing amount cannot be negative")


def validate_patient_history(history: PatientHistory) -> None:
    check_id(history.id, "id", "Patient history ID")
    validate_mrn(history.patient_id, field="patient_id", label="Patient ID")
    validate_procedure_id(history.procedure_id, field="procedure_id")
    validate_history_date(history.date)
    validate_billing(history.billing)
    validate_doctor_id(history.doctor_id, field="doctor_id")
