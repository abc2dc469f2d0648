"""
Services composing validation, foreign-key checks and the DAOs.

Each service maps outcomes onto the error taxonomy: ``InvalidInput`` for rule
violations, missing references and duplicate keys, ``NotFound`` for
operations on absent rows, and ``StorageFailure`` passed through unchanged
from the DAO layer.

The existence checks and the write that follows them are separate
statements, not one transaction.
"""

import dataclasses
import logging
from dataclasses import dataclass
from typing import Callable, Generic, TypeVar

from emr_manager.database import (
    Database,
    Doctor,
    DoctorDAO,
    Patient,
    PatientDAO,
    PatientHistory,
    PatientHistoryDAO,
    Procedure,
    ProcedureDAO,
)
from emr_manager.database.base import BaseDAO, Record
from emr_manager.errors import InvalidInput, NotFound
from emr_manager.validators import (
    validate_doctor,
    validate_patient,
    validate_patient_history,
    validate_procedure,
)

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=Record)
K = TypeVar("K")


@dataclass(frozen=True)
class Reference:
    """A foreign-key field on a record and the DAO that owns the referenced rows."""
    field: str
    dao: BaseDAO
    entity_type: str
    key_label: str = "ID"

    def describe(self, key) -> str:
        if self.key_label == "ID":
            return f"{self.entity_type} with ID '{key}'"
        return f"{self.entity_type} with {self.key_label} {key}"


class EntityService(Generic[T, K]):
    """Validated CRUD for one entity type."""

    ENTITY_TYPE = ""
    DISPLAY_NAME = ""
    KEY_LABEL = "ID"

    def __init__(
        self,
        dao: BaseDAO[T, K],
        validator: Callable[[T], None],
        references: tuple[Reference, ...] = (),
    ):
        self.dao = dao
        self.validator = validator
        self.references = references

    def create(self, entity: T) -> bool:
        self._validate(entity)
        if self.dao.exists(entity.key):
            raise self._reject(
                entity.KEY_FIELD,
                f"A {self.display_name} with {self.KEY_LABEL} '{entity.key}' already exists",
            )
        self._verify_references(entity)
        created = self.dao.create(entity)
        if created:
            logger.info("Created %s %s", self.ENTITY_TYPE, entity.key)
        return created

    def get(self, key: K) -> T:
        entity = self.dao.read(key)
        if entity is None:
            raise NotFound(self.ENTITY_TYPE, key)
        return entity

    def find(self, key: K) -> T | None:
        """Like get(), but returns None for a missing row."""
        return self.dao.read(key)

    def get_all(self) -> list[T]:
        return self.dao.read_all()

    def update(self, entity: T) -> bool:
        self._validate(entity)
        if not self.dao.exists(entity.key):
            raise NotFound(self.ENTITY_TYPE, entity.key)
        self._verify_references(entity)
        updated = self.dao.update(entity)
        if updated:
            logger.info("Updated %s %s", self.ENTITY_TYPE, entity.key)
        return updated

    def update_fields(self, key: K, changes: dict) -> T:
        """Overwrite only the supplied fields of an existing record.

        Fields mapped to None are left unchanged. Returns the merged record
        as written.
        """
        current = self.get(key)
        field_names = {f.name for f in dataclasses.fields(current)}
        supplied = {name: value for name, value in changes.items() if value is not None}
        for name, value in supplied.items():
            if name not in field_names:
                raise self._reject(name, f"Unknown {self.display_name} field '{name}'")
            if name == current.KEY_FIELD and value != key:
                raise self._reject(name, f"{self.ENTITY_TYPE} {self.KEY_LABEL} cannot be changed")
        merged = dataclasses.replace(current, **supplied)
        self.update(merged)
        return merged

    def delete(self, key: K) -> bool:
        if not self.dao.exists(key):
            raise NotFound(self.ENTITY_TYPE, key)
        deleted = self.dao.delete(key)
        if deleted:
            logger.info("Deleted %s %s", self.ENTITY_TYPE, key)
        return deleted

    def exists(self, key: K) -> bool:
        return self.dao.exists(key)

    @property
    def display_name(self) -> str:
        return self.DISPLAY_NAME or self.ENTITY_TYPE.lower()

    # Private helpers

    def _validate(self, entity: T) -> None:
        try:
            self.validator(entity)
        except InvalidInput as e:
            logger.warning("Rejected %s: %s: %s", self.ENTITY_TYPE, e.field, e.reason)
            raise

    def _verify_references(self, entity: T) -> None:
        for ref in self.references:
            value = getattr(entity, ref.field)
            if not ref.dao.exists(value):
                raise self._reject(ref.field, f"{ref.describe(value)} does not exist")

    def _reject(self, field: str, reason: str) -> InvalidInput:
        logger.warning("Rejected %s: %s: %s", self.ENTITY_TYPE, field, reason)
        return InvalidInput(field, reason)


class DoctorService(EntityService[Doctor, str]):
    ENTITY_TYPE = "Doctor"

    def __init__(self, db: Database):
        super().__init__(DoctorDAO(db), validate_doctor)


class ProcedureService(EntityService[Procedure, str]):
    ENTITY_TYPE = "Procedure"

    def __init__(self, db: Database):
        super().__init__(
            ProcedureDAO(db),
            validate_procedure,
            references=(Reference("doctor_id", DoctorDAO(db), "Doctor"),),
        )


class PatientService(EntityService[Patient, int]):
    ENTITY_TYPE = "Patient"
    KEY_LABEL = "MRN"

    def __init__(self, db: Database):
        super().__init__(PatientDAO(db), validate_patient)


class PatientHistoryService(EntityService[PatientHistory, str]):
    ENTITY_TYPE = "PatientHistory"
    DISPLAY_NAME = "patient history"

    def __init__(self, db: Database):
        self.patient_dao = PatientDAO(db)
        super().__init__(
            PatientHistoryDAO(db),
            validate_patient_history,
            references=(
                Reference("patient_id", self.patient_dao, "Patient", key_label="MRN"),
                Reference("procedure_id", ProcedureDAO(db), "Procedure"),
                Reference("doctor_id", DoctorDAO(db), "Doctor"),
            ),
        )

    def get_patient_histories_by_patient_id(self, patient_id: int) -> list[PatientHistory]:
        """All history records for a patient, who must exist."""
        if not self.patient_dao.exists(patient_id):
            raise NotFound("Patient", patient_id)
        return self.dao.read_by_patient_id(patient_id)
