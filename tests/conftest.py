"""Shared pytest fixtures."""

from datetime import date

import pytest

from emr_manager.config import DatabaseConfig
from emr_manager.database import (
    Database,
    Doctor,
    Patient,
    PatientHistory,
    Procedure,
    init_database,
)
from emr_manager.services import (
    DoctorService,
    PatientHistoryService,
    PatientService,
    ProcedureService,
)


@pytest.fixture
def db():
    """A fresh in-memory database with the schema applied."""
    database = Database(DatabaseConfig(url="sqlite:///:memory:")).open()
    init_database(database)
    yield database
    database.close()


@pytest.fixture
def doctor_service(db):
    return DoctorService(db)


@pytest.fixture
def procedure_service(db):
    return ProcedureService(db)


@pytest.fixture
def patient_service(db):
    return PatientService(db)


@pytest.fixture
def history_service(db):
    return PatientHistoryService(db)


@pytest.fixture
def doctor():
    return Doctor(id="D1", name="Smith")


@pytest.fixture
def procedure():
    return Procedure(
        id="P1",
        name="Checkup",
        description="Routine",
        duration=30,
        doctor_id="D1",
    )


@pytest.fixture
def patient():
    return Patient(
        mrn=1001,
        fname="Test",
        lname="Fixture",
        dob=date(1990, 1, 1),
        address="1 Test Way",
        state="CA",
        city="Testville",
        zip=94102,
        insurance="Aetna",
        email="test.fixture@email.com",
    )


@pytest.fixture
def history():
    return PatientHistory(
        id="H1",
        patient_id=1001,
        procedure_id="P1",
        date=date(2024, 1, 15),
        billing=123.45,
        doctor_id="D1",
    )


@pytest.fixture
def seeded(doctor_service, procedure_service, patient_service, doctor, procedure, patient):
    """Doctor D1, Procedure P1 and Patient 1001 already stored."""
    doctor_service.create(doctor)
    procedure_service.create(procedure)
    patient_service.create(patient)
