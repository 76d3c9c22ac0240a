# core/constants.py

# --- Roles ---

ROLE_FACULTY = "faculty"
ROLE_HOD = "hod"
ROLE_IQAC = "iqac"

REVIEWER_ROLES = (ROLE_HOD, ROLE_IQAC)

# --- Object storage layout ---
# All uploads are keyed by the owning user so paths are deterministic.

EVIDENCE_PATH = "evidence/{user_id}/{activity_id}/{filename}"
CERTIFICATE_PATH = "certificates/{user_id}/{activity_id}.pdf"
PROFILE_PHOTO_PATH = "profiles/{user_id}/photo"

# --- Certificates ---

CERTIFICATE_ID_PREFIX = "CERT-"
CERTIFICATE_ID_LENGTH = 8
DEFAULT_FACULTY_NAME = "Faculty Member"
