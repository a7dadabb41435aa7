# This project was developed with assistance from AI tools.
"""
Demo fixture data for the hostel admissions portal.

All fixture data is defined as Python dicts so enums can be referenced directly
and type-checked. User IDs are fixed strings so the seeded data links to the
demo accounts in the identity provider.

Simulated for demonstration purposes -- not real applicant data.
"""

import hashlib
import json
from datetime import UTC, date, datetime, timedelta

from db.enums import (
    AllocationStatus,
    ApplicationStatus,
    ForwardRecommendation,
    PaymentStatus,
    StudentStatus,
    UserRole,
    Vertical,
)

# ---------------------------------------------------------------------------
# User references (fixed ids)
# ---------------------------------------------------------------------------

SUPERINTENDENT_ID = "usr-superintendent-01"
TRUSTEE_ID = "usr-trustee-01"
ADMIN_ID = "usr-admin-01"

# Parent with a linked account (two wards)
RAMESH_SHAH_ID = "usr-parent-ramesh"
RAMESH_SHAH_MOBILE = "+91 98765 43210"

# Parent known only through an application form
PRIYA_MEHTA_MOBILE = "9123456780"

STU_ARJUN_ID = "stu-arjun-shah"
STU_ARJUN_USER_ID = "usr-student-arjun"
STU_KAVYA_ID = "stu-kavya-shah"
STU_KAVYA_USER_ID = "usr-student-kavya"
STU_NEEL_ID = "stu-neel-joshi"
STU_NEEL_USER_ID = "usr-student-neel"


# ---------------------------------------------------------------------------
# Timestamp helpers
# ---------------------------------------------------------------------------

_NOW = datetime.now(UTC)


def _days_ago(n: int) -> datetime:
    return _NOW - timedelta(days=n)


def _date_days_ago(n: int) -> date:
    return _days_ago(n).date()


# ---------------------------------------------------------------------------
# Users
# ---------------------------------------------------------------------------

USERS: list[dict] = [
    {
        "id": SUPERINTENDENT_ID,
        "role": UserRole.SUPERINTENDENT,
        "full_name": "Hemant Desai",
        "email": "superintendent@example.org",
    },
    {
        "id": TRUSTEE_ID,
        "role": UserRole.TRUSTEE,
        "full_name": "Nirmala Jain",
        "email": "trustee@example.org",
    },
    {
        "id": ADMIN_ID,
        "role": UserRole.ADMIN,
        "full_name": "Office Admin",
        "email": "admin@example.org",
    },
    {
        "id": RAMESH_SHAH_ID,
        "role": UserRole.PARENT,
        "full_name": "Ramesh Shah",
        "mobile": RAMESH_SHAH_MOBILE,
        # Arjun is linked by resident id, Kavya by her student user id
        "linked_student_ids": [STU_ARJUN_ID, STU_KAVYA_USER_ID],
    },
    {
        "id": STU_ARJUN_USER_ID,
        "role": UserRole.STUDENT,
        "full_name": "Arjun Shah",
        "mobile": "9988776655",
    },
    {
        "id": STU_KAVYA_USER_ID,
        "role": UserRole.STUDENT,
        "full_name": "Kavya Shah",
        "mobile": "9988776644",
    },
    {
        "id": STU_NEEL_USER_ID,
        "role": UserRole.STUDENT,
        "full_name": "Neel Joshi",
        "mobile": "9090909090",
    },
]


# ---------------------------------------------------------------------------
# Rooms and residents
# ---------------------------------------------------------------------------

ROOMS: list[dict] = [
    {"id": "room-bh-101", "number": "101", "block": "A", "vertical": Vertical.BOYS_HOSTEL},
    {"id": "room-bh-102", "number": "102", "block": "A", "vertical": Vertical.BOYS_HOSTEL},
    {"id": "room-ga-201", "number": "201", "block": "B", "vertical": Vertical.GIRLS_ASHRAM},
]

STUDENTS: list[dict] = [
    {
        "id": STU_ARJUN_ID,
        "user_id": STU_ARJUN_USER_ID,
        "application_id": "app-arjun-2024",
        "full_name": "Arjun Shah",
        "vertical": Vertical.BOYS_HOSTEL,
        "guardian_mobile": RAMESH_SHAH_MOBILE,
        "father_mobile": "98765-43210",
        "status": StudentStatus.ACTIVE,
        "joining_date": _date_days_ago(300),
    },
    {
        "id": STU_KAVYA_ID,
        "user_id": STU_KAVYA_USER_ID,
        "full_name": "Kavya Shah",
        "vertical": Vertical.GIRLS_ASHRAM,
        "father_mobile": "9876543210",
        "status": StudentStatus.ON_LEAVE,
        "joining_date": _date_days_ago(120),
    },
    {
        "id": STU_NEEL_ID,
        "user_id": STU_NEEL_USER_ID,
        "full_name": "Neel Joshi",
        "vertical": Vertical.BOYS_HOSTEL,
        "guardian_mobile": "9012345678",
        "status": StudentStatus.ACTIVE,
        "joining_date": _date_days_ago(45),
    },
]

ALLOCATIONS: list[dict] = [
    {
        "id": "alloc-arjun",
        "room_id": "room-bh-101",
        "student_id": STU_ARJUN_ID,
        "status": AllocationStatus.ACTIVE,
        "allocated_at": _days_ago(300),
    },
    {
        "id": "alloc-neel-old",
        "room_id": "room-bh-102",
        "student_id": STU_NEEL_ID,
        "status": AllocationStatus.VACATED,
        "allocated_at": _days_ago(45),
    },
]


# ---------------------------------------------------------------------------
# Applications
# ---------------------------------------------------------------------------
# One application per lifecycle stage so every persona has work queued.
# "forwarded" entries carry the superintendent's recommendation.

APPLICATIONS: list[dict] = [
    {
        "id": "app-rohan-mehta",
        "tracking_number": "BH-{year}-00001",
        "applicant_name": "Rohan Mehta",
        "vertical": Vertical.BOYS_HOSTEL,
        "status": ApplicationStatus.SUBMITTED,
        "payment_status": PaymentStatus.PAID,
        "father_mobile": PRIYA_MEHTA_MOBILE,
        "submitted_at": _days_ago(2),
    },
    {
        "id": "app-isha-patel",
        "tracking_number": "GA-{year}-00001",
        "applicant_name": "Isha Patel",
        "vertical": Vertical.GIRLS_ASHRAM,
        "status": ApplicationStatus.REVIEW,
        "payment_status": PaymentStatus.PAID,
        "mother_mobile": "9811122233",
        "submitted_at": _days_ago(6),
    },
    {
        "id": "app-dev-kothari",
        "tracking_number": "BH-{year}-00002",
        "applicant_name": "Dev Kothari",
        "vertical": Vertical.BOYS_HOSTEL,
        "status": ApplicationStatus.FORWARDED,
        "payment_status": PaymentStatus.PAID,
        "father_mobile": "9822233344",
        "submitted_at": _days_ago(10),
        "forwarded": {
            "recommendation": ForwardRecommendation.RECOMMEND,
            "remarks": "Documents verified; strong academic record.",
            "days_ago": 3,
        },
    },
    {
        "id": "app-meera-shah",
        "tracking_number": "GA-{year}-00002",
        "applicant_name": "Meera Shah",
        "vertical": Vertical.GIRLS_ASHRAM,
        "status": ApplicationStatus.PROVISIONALLY_APPROVED,
        "payment_status": PaymentStatus.PAID,
        # Sibling of Ramesh Shah's linked wards; matched through the form only
        "father_mobile": "+919876543210",
        "requires_interview": True,
        "submitted_at": _days_ago(14),
        "forwarded": {
            "recommendation": ForwardRecommendation.RECOMMEND,
            "remarks": "Family already resident; recommend admission.",
            "days_ago": 8,
        },
    },
    {
        "id": "app-kavya-shah",
        "tracking_number": "GA-{year}-00003",
        "applicant_name": "Kavya Shah",
        "vertical": Vertical.GIRLS_ASHRAM,
        "status": ApplicationStatus.APPROVED,
        "payment_status": PaymentStatus.PAID,
        "father_mobile": "9876543210",
        "requires_interview": False,
        "submitted_at": _days_ago(150),
        "decided_at": _days_ago(125),
        "forwarded": {
            "recommendation": ForwardRecommendation.RECOMMEND,
            "remarks": "Complete file.",
            "days_ago": 140,
        },
    },
    {
        "id": "app-tara-vyas",
        "tracking_number": "DH-{year}-00001",
        "applicant_name": "Tara Vyas",
        "vertical": Vertical.DHARAMSHALA,
        "status": ApplicationStatus.REJECTED,
        "payment_status": PaymentStatus.FAILED,
        "applicant_mobile": "9733344455",
        "submitted_at": _days_ago(30),
        "decided_at": _days_ago(20),
        "forwarded": {
            "recommendation": ForwardRecommendation.NOT_RECOMMEND,
            "remarks": "Outside eligibility criteria.",
            "days_ago": 25,
        },
    },
]


def compute_config_hash() -> str:
    """Stable hash of the fixture set, recorded in the seed summary."""
    payload = {
        "users": [u["id"] for u in USERS],
        "students": [s["id"] for s in STUDENTS],
        "rooms": [r["id"] for r in ROOMS],
        "allocations": [a["id"] for a in ALLOCATIONS],
        "applications": [a["id"] for a in APPLICATIONS],
    }
    return hashlib.sha256(json.dumps(payload, sort_keys=True).encode()).hexdigest()
