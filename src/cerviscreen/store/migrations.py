from __future__ import annotations

from cerviscreen.store.db import Database

# Mirrors the hosted backend's tables; JSON-valued columns hold JSON text.
SCHEMA = """
CREATE TABLE IF NOT EXISTS physicians (
    id TEXT PRIMARY KEY,
    full_name TEXT NOT NULL,
    specialization TEXT NOT NULL DEFAULT '',
    license_number TEXT NOT NULL DEFAULT '',
    phone TEXT NOT NULL DEFAULT '',
    years_of_experience INTEGER NOT NULL DEFAULT 0
);

CREATE TABLE IF NOT EXISTS patients (
    id TEXT PRIMARY KEY,
    full_name TEXT NOT NULL DEFAULT '',
    email TEXT NOT NULL DEFAULT '',
    phone TEXT NOT NULL DEFAULT '',
    date_of_birth TEXT NOT NULL DEFAULT '',
    address TEXT NOT NULL DEFAULT '',
    emergency_contact TEXT NOT NULL DEFAULT '',
    emergency_phone TEXT NOT NULL DEFAULT '',
    assigned_physician_id TEXT NOT NULL DEFAULT ''
);

CREATE TABLE IF NOT EXISTS consent_records (
    id TEXT PRIMARY KEY,
    patient_id TEXT NOT NULL,
    consent_given INTEGER NOT NULL,
    eligibility_data TEXT NOT NULL DEFAULT '{}',
    created_at TEXT NOT NULL DEFAULT ''
);

CREATE TABLE IF NOT EXISTS screening_submissions (
    id TEXT PRIMARY KEY,
    patient_id TEXT NOT NULL,
    physician_id TEXT NOT NULL,
    patient_name TEXT NOT NULL DEFAULT '',
    questionnaire_answers TEXT NOT NULL DEFAULT '[]',
    image_count INTEGER NOT NULL DEFAULT 0,
    images TEXT NOT NULL DEFAULT '[]',
    status TEXT NOT NULL DEFAULT 'pending_review',
    submitted_at TEXT NOT NULL DEFAULT '',
    reviewed_at TEXT NOT NULL DEFAULT ''
);

CREATE TABLE IF NOT EXISTS clinical_decisions (
    id TEXT PRIMARY KEY,
    submission_id TEXT NOT NULL,
    physician_id TEXT NOT NULL,
    decision_type TEXT NOT NULL,
    notes TEXT NOT NULL DEFAULT '',
    urgency TEXT,
    created_at TEXT NOT NULL DEFAULT '',
    FOREIGN KEY (submission_id) REFERENCES screening_submissions(id)
);

CREATE TABLE IF NOT EXISTS notifications (
    id TEXT PRIMARY KEY,
    patient_id TEXT NOT NULL,
    physician_id TEXT NOT NULL DEFAULT '',
    submission_id TEXT NOT NULL DEFAULT '',
    title TEXT NOT NULL,
    message TEXT NOT NULL,
    notification_type TEXT NOT NULL DEFAULT 'clinical_decision',
    is_read INTEGER NOT NULL DEFAULT 0,
    created_at TEXT NOT NULL DEFAULT ''
);

CREATE INDEX IF NOT EXISTS idx_submissions_physician ON screening_submissions(physician_id);
CREATE INDEX IF NOT EXISTS idx_submissions_patient ON screening_submissions(patient_id);
CREATE INDEX IF NOT EXISTS idx_notifications_patient ON notifications(patient_id);
"""


def run_migrations(db: Database) -> None:
    """Create all tables."""
    db.executescript(SCHEMA)
