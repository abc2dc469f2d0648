"""Tests for the service layer: error taxonomy and foreign-key checks."""

import dataclasses
from datetime import date
from unittest.mock import patch

import pytest

from emr_manager.database import Doctor, PatientHistory, Procedure
from emr_manager.errors import InvalidInput, NotFound, StorageFailure


class TestDoctorService:

    def test_create_and_get(self, doctor_service, doctor):
        assert doctor_service.create(doctor) is True
        assert dataclasses.astuple(doctor_service.get("D1")) == ("D1", "Smith")

    def test_duplicate_id_is_invalid_input(self, doctor_service, doctor):
        doctor_service.create(doctor)
        with pytest.raises(InvalidInput) as excinfo:
            doctor_service.create(Doctor(id="D1", name="Other"))
        assert excinfo.value.field == "id"
        assert "already exists" in excinfo.value.reason

    def test_get_missing_is_not_found(self, doctor_service):
        with pytest.raises(NotFound) as excinfo:
            doctor_service.get("ZZZ")
        assert excinfo.value.entity_type == "Doctor"
        assert excinfo.value.key == "ZZZ"

    def test_find_missing_returns_none(self, doctor_service):
        assert doctor_service.find("ZZZ") is None

    def test_update_missing_is_not_found(self, doctor_service):
        with pytest.raises(NotFound):
            doctor_service.update(Doctor(id="ZZZ", name="Nobody"))

    def test_update_validates_before_lookup(self, doctor_service):
        with pytest.raises(InvalidInput):
            doctor_service.update(Doctor(id="ZZZ", name=""))

    def test_delete(self, doctor_service, doctor):
        doctor_service.create(doctor)
        assert doctor_service.delete("D1") is True
        assert doctor_service.exists("D1") is False

    def test_delete_missing_is_not_found(self, doctor_service):
        with pytest.raises(NotFound):
            doctor_service.delete("ZZZ")

    def test_storage_failure_propagates(self, doctor_service, doctor):
        failure = StorageFailure("Failed to create doctor: disk full")
        with patch.object(doctor_service.dao, "create", side_effect=failure):
            with pytest.raises(StorageFailure) as excinfo:
                doctor_service.create(doctor)
        assert excinfo.value is failure


class TestProcedureService:

    def test_create_with_missing_doctor_writes_nothing(self, procedure_service, procedure):
        with pytest.raises(InvalidInput) as excinfo:
            procedure_service.create(procedure)
        assert excinfo.value.field == "doctor_id"
        assert procedure_service.exists("P1") is False

    def test_create_with_existing_doctor(self, doctor_service, procedure_service, doctor, procedure):
        doctor_service.create(doctor)
        assert procedure_service.create(procedure) is True
        stored = procedure_service.get("P1")
        assert dataclasses.astuple(stored) == ("P1", "Checkup", "Routine", 30, "D1")

    def test_duplicate_id_checked_before_doctor(self, doctor_service, procedure_service, doctor, procedure):
        doctor_service.create(doctor)
        procedure_service.create(procedure)
        with pytest.raises(InvalidInput) as excinfo:
            procedure_service.create(dataclasses.replace(procedure, doctor_id="NOPE"))
        assert excinfo.value.field == "id"

    def test_update_to_missing_doctor(self, doctor_service, procedure_service, doctor, procedure):
        doctor_service.create(doctor)
        procedure_service.create(procedure)
        with pytest.raises(InvalidInput) as excinfo:
            procedure_service.update_fields("P1", {"doctor_id": "NOPE"})
        assert excinfo.value.field == "doctor_id"
        assert procedure_service.get("P1").doctor_id == "D1"


class TestPatientService:

    def test_create_and_get(self, patient_service, patient):
        patient_service.create(patient)
        assert dataclasses.astuple(patient_service.get(patient.mrn)) == dataclasses.astuple(patient)

    def test_duplicate_mrn(self, patient_service, patient):
        patient_service.create(patient)
        with pytest.raises(InvalidInput) as excinfo:
            patient_service.create(patient)
        assert excinfo.value.field == "mrn"

    def test_invalid_email_rejected(self, patient_service, patient):
        with pytest.raises(InvalidInput) as excinfo:
            patient_service.create(dataclasses.replace(patient, email="bob@"))
        assert excinfo.value.field == "email"
        assert patient_service.exists(patient.mrn) is False

    def test_update_fields_keeps_skipped_values(self, patient_service, patient):
        patient_service.create(patient)
        merged = patient_service.update_fields(patient.mrn, {"city": "Oakland", "zip": None})
        stored = patient_service.get(patient.mrn)
        assert stored.city == "Oakland"
        assert stored.zip == patient.zip
        assert dataclasses.astuple(stored) == dataclasses.astuple(merged)
        unchanged = [f.name for f in dataclasses.fields(patient) if f.name != "city"]
        for name in unchanged:
            assert getattr(stored, name) == getattr(patient, name)

    def test_update_fields_rejects_key_change(self, patient_service, patient):
        patient_service.create(patient)
        with pytest.raises(InvalidInput) as excinfo:
            patient_service.update_fields(patient.mrn, {"mrn": 2002})
        assert excinfo.value.field == "mrn"

    def test_update_fields_rejects_unknown_field(self, patient_service, patient):
        patient_service.create(patient)
        with pytest.raises(InvalidInput):
            patient_service.update_fields(patient.mrn, {"phone": "555-0101"})

    def test_update_fields_missing_patient(self, patient_service):
        with pytest.raises(NotFound):
            patient_service.update_fields(4242, {"city": "Oakland"})


class TestPatientHistoryService:

    def test_create_with_all_references(self, history_service, seeded, history):
        assert history_service.create(history) is True
        stored = history_service.get("H1")
        assert stored.billing == 123.45
        assert dataclasses.astuple(stored) == dataclasses.astuple(history)

    @pytest.mark.parametrize("field,value", [
        ("patient_id", 999),
        ("procedure_id", "NOPE"),
        ("doctor_id", "NOPE"),
    ])
    def test_missing_reference_is_invalid_input(self, history_service, seeded, history, field, value):
        with pytest.raises(InvalidInput) as excinfo:
            history_service.create(dataclasses.replace(history, **{field: value}))
        assert excinfo.value.field == field
        assert history_service.exists("H1") is False

    @pytest.mark.parametrize("billing", [float("nan"), float("inf")])
    def test_non_finite_billing_is_invalid_input(self, history_service, seeded, history, billing):
        with pytest.raises(InvalidInput) as excinfo:
            history_service.create(dataclasses.replace(history, billing=billing))
        assert excinfo.value.field == "billing"
        assert history_service.exists("H1") is False

    def test_update_checks_references(self, history_service, seeded, history):
        history_service.create(history)
        with pytest.raises(InvalidInput) as excinfo:
            history_service.update(dataclasses.replace(history, procedure_id="NOPE"))
        assert excinfo.value.field == "procedure_id"

    def test_update_missing_is_not_found(self, history_service, seeded, history):
        with pytest.raises(NotFound):
            history_service.update(history)

    def test_histories_by_patient(self, history_service, seeded, history):
        history_service.create(history)
        history_service.create(dataclasses.replace(history, id="H2"))
        histories = history_service.get_patient_histories_by_patient_id(1001)
        assert sorted(h.id for h in histories) == ["H1", "H2"]

    def test_histories_by_missing_patient(self, history_service):
        with pytest.raises(NotFound) as excinfo:
            history_service.get_patient_histories_by_patient_id(999)
        assert excinfo.value.entity_type == "Patient"

    def test_histories_by_patient_without_records(self, history_service, seeded):
        assert history_service.get_patient_histories_by_patient_id(1001) == []


class TestScenarios:

    def test_history_for_missing_patient(self, doctor_service, procedure_service, history_service):
        assert doctor_service.create(Doctor(id="D1", name="Smith")) is True
        assert procedure_service.create(Procedure(
            id="P1",
            name="Checkup",
            description="Routine",
            duration=30,
            doctor_id="D1",
        )) is True

        with pytest.raises(InvalidInput) as excinfo:
            history_service.create(PatientHistory(
                id="H1",
                patient_id=999,
                procedure_id="P1",
                date=date.today(),
                billing=50.0,
                doctor_id="D1",
            ))
        assert excinfo.value.field == "patient_id"
        assert "Patient" in excinfo.value.reason
        assert "999" in excinfo.value.reason

    def test_read_missing_doctor(self, doctor_service):
        with pytest.raises(NotFound):
            doctor_service.get("ZZZ")

    def test_error_variants_match_structurally(self, doctor_service):
        try:
            doctor_service.get("ZZZ")
        except NotFound as e:
            match e:
                case NotFound(entity_type, key):
                    assert (entity_type, key) == ("Doctor", "ZZZ")
