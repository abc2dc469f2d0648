"""Seed the database with sample doctors, procedures, patients and histories."""

from datetime import date

from emr_manager.config import load_config
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


MOCK_DOCTORS = [
    Doctor(id="D-001", name="Dr. Sarah Chen"),
    Doctor(id="D-002", name="Dr. James Wilson"),
    Doctor(id="D-003", name="Dr. Maria Garcia"),
]

MOCK_PROCEDURES = [
    Procedure(
        id="PR-001",
        name="Annual Physical",
        description="Routine yearly examination",
        duration=30,
        doctor_id="D-001",
    ),
    Procedure(
        id="PR-002",
        name="MRI Scan",
        description="Magnetic resonance imaging of the lumbar spine",
        duration=60,
        doctor_id="D-002",
    ),
    Procedure(
        id="PR-003",
        name="Knee Arthroscopy",
        description="Minimally invasive knee joint surgery",
        duration=120,
        doctor_id="D-003",
    ),
]

MOCK_PATIENTS = [
    Patient(
        mrn=1001,
        fname="John",
        lname="Smith",
        dob=date(1985, 3, 15),
        address="123 Main St",
        state="CA",
        city="San Francisco",
        zip=94102,
        insurance="Blue Cross Blue Shield",
        email="john.smith@email.com",
    ),
    Patient(
        mrn=1002,
        fname="Sarah",
        lname="Johnson",
        dob=date(1992, 7, 22),
        address="456 Oak Ave",
        state="CA",
        city="Oakland",
        zip=94612,
        insurance="Aetna",
        email="sarah.j@email.com",
    ),
    Patient(
        mrn=1003,
        fname="Michael",
        lname="Chen",
        dob=date(1978, 11, 8),
        address="789 Pine Rd",
        state="CA",
        city="Berkeley",
        zip=94704,
        insurance="Kaiser",
        email="m.chen@email.com",
    ),
]

MOCK_HISTORIES = [
    PatientHistory(
        id="H-001",
        patient_id=1001,
        procedure_id="PR-001",
        date=date(2024, 1, 10),
        billing=150.00,
        doctor_id="D-001",
    ),
    PatientHistory(
        id="H-002",
        patient_id=1002,
        procedure_id="PR-002",
        date=date(2024, 2, 5),
        billing=1200.50,
        doctor_id="D-002",
    ),
    PatientHistory(
        id="H-003",
        patient_id=1001,
        procedure_id="PR-003",
        date=date(2024, 3, 20),
        billing=4875.25,
        doctor_id="D-003",
    ),
]


def seed_database(db: Database) -> dict[str, int]:
    """Insert the mock rows, skipping keys that already exist.

    Returns the number of rows created per table. Parents are seeded before
    the rows that reference them.
    """
    plan = [
        ("doctors", DoctorService(db), MOCK_DOCTORS),
        ("procedures", ProcedureService(db), MOCK_PROCEDURES),
        ("patients", PatientService(db), MOCK_PATIENTS),
        ("patient history", PatientHistoryService(db), MOCK_HISTORIES),
    ]
    created = {}
    for table, service, records in plan:
        created[table] = 0
        for record in records:
            if service.exists(record.key):
                print(f"  Skipping {table} {record.key} (already exists)")
                continue
            if service.create(record):
                created[table] += 1
        print(f"  Created {created[table]} {table}")
    return created


def main() -> None:
    with Database(load_config()) as db:
        init_database(db)
        created = seed_database(db)

    print("\nDatabase seeded successfully!")
    for table, count in created.items():
        print(f"  - {count} {table}")


if __name__ == "__main__":
    main()
