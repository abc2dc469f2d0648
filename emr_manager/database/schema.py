"""
EMR Database Schema
Doctors, procedures, patients and the patient history join records.
"""

SCHEMA = """
-- =============================================================================
-- 1. DOCTORS
-- =============================================================================
CREATE TABLE IF NOT EXISTS doctors (
    id VARCHAR(25) PRIMARY KEY,
    name VARCHAR(45) NOT NULL
);


-- =============================================================================
-- 2. PROCEDURES - Each procedure is performed by one doctor
-- =============================================================================
CREATE TABLE IF NOT EXISTS procedures (
    id VARCHAR(25) PRIMARY KEY,
    name TEXT NOT NULL,
    description TEXT NOT NULL,
    duration INTEGER NOT NULL,  -- minutes
    doctorId VARCHAR(25) NOT NULL,

    FOREIGN KEY (doctorId) REFERENCES doctors(id)
);

CREATE INDEX IF NOT EXISTS idx_procedures_doctor ON procedures(doctorId);


-- =============================================================================
-- 3. PATIENTS - Keyed by medical record number
-- =============================================================================
CREATE TABLE IF NOT EXISTS patients (
    mrn INTEGER PRIMARY KEY,
    fname VARCHAR(100) NOT NULL,
    lname VARCHAR(100) NOT NULL,
    dob DATE NOT NULL,          -- YYYY-MM-DD
    address TEXT,
    state VARCHAR(50),
    city TEXT,
    zip INTEGER,
    insurance TEXT,
    email TEXT
);

CREATE INDEX IF NOT EXISTS idx_patients_name ON patients(lname, fname);


-- =============================================================================
-- 4. PATIENT_HISTORY - Procedure performed on a patient by a doctor
-- =============================================================================
CREATE TABLE IF NOT EXISTS patient_history (
    id VARCHAR(25) PRIMARY KEY,
    patientId INTEGER NOT NULL,
    procedureId VARCHAR(25) NOT NULL,
    date DATE NOT NULL,         -- YYYY-MM-DD
    billing DOUBLE NOT NULL DEFAULT 0.0,
    doctorId VARCHAR(25) NOT NULL,

    FOREIGN KEY (patientId) REFERENCES patients(mrn),
    FOREIGN KEY (procedureId) REFERENCES procedures(id),
    FOREIGN KEY (doctorId) REFERENCES doctors(id)
);

CREATE INDEX IF NOT EXISTS idx_history_patient ON patient_history(patientId);
CREATE INDEX IF NOT EXISTS idx_history_procedure ON patient_history(procedureId);
CREATE INDEX IF NOT EXISTS idx_history_doctor ON patient_history(doctorId);
"""
