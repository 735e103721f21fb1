"""Principal identities shared by the unit tests."""

ADMIN = "admin-1"
PATIENT = "patient-1"
OTHER_PATIENT = "patient-2"
DOCTOR = "doctor-1"
OTHER_DOCTOR = "doctor-2"
