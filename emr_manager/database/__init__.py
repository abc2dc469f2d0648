from .connection import Database, init_database
from .doctor_dao import Doctor, DoctorDAO
from .patient_dao import Patient, PatientDAO
from .patient_history_dao import PatientHistory, PatientHistoryDAO
from .procedure_dao import Procedure, ProcedureDAO

__all__ = [
    "Database",
    "init_database",
    "Doctor",
    "DoctorDAO",
    "Patient",
    "PatientDAO",
    "PatientHistory",
    "PatientHistoryDAO",
    "Procedure",
    "ProcedureDAO",
]
