"""Fixed sample payload seeded into a freshly created MDM database."""
from datetime import datetime, timezone
from typing import List, Optional

from .models import Medication, MedicalRecord, Patient


def _utc(year: int, month: int, day: int, hour: int = 0, minute: int = 0) -> datetime:
    return datetime(year, month, day, hour, minute, tzinfo=timezone.utc)


def sample_patients(now: Optional[datetime] = None) -> List[Patient]:
    """Two demo patients, both stamped with the seeding time."""
    now = now or datetime.now(timezone.utc)
    return [
        Patient(
            id="pat123456",
            first_name="Ján",
            last_name="Novák",
            date_of_birth="1990-01-01",
            gender="M",
            insurance_number="900101/1234",
            blood_type="A+",
            status="Stable",
            allergies="Penicilín, arašidy",
            medical_notes="Pacient má chronické problémy s tlakom",
            created_at=now,
            updated_at=now,
        ),
        Patient(
            id="pat789012",
            first_name="Anna",
            last_name="Svobodová",
            date_of_birth="1985-03-15",
            gender="F",
            insurance_number="850315/5678",
            blood_type="O-",
            status="Recovering",
            allergies="",
            medical_notes="",
            created_at=now,
            updated_at=now,
        ),
    ]


def sample_medical_records() -> List[MedicalRecord]:
    """Two visits of patient `pat123456`; timestamps are the visit times."""
    acute_visit = _utc(2024, 5, 15, 9, 30)
    checkup_visit = _utc(2024, 3, 10, 14, 0)
    return [
        MedicalRecord(
            id="rec789012",
            patient_id="pat123456",
            date_of_visit=acute_visit,
            diagnosis="Akútna respiračná infekcia",
            symptoms=["kašeľ", "teploty", "bolesti hrdla"],
            treatment="Predpísané antibiotiká, odpočinok, zvýšený príjem tekutín",
            medications=[
                Medication(
                    name="Amoxicillin",
                    dosage="500mg",
                    frequency="3x denne",
                    duration="7 dní",
                ),
            ],
            doctor_name="Dr. Peter Kováč",
            notes="Pacient má alergiu na penicilín",
            follow_up_date="2024-05-22",
            created_at=acute_visit,
            updated_at=acute_visit,
        ),
        MedicalRecord(
            id="rec789013",
            patient_id="pat123456",
            date_of_visit=checkup_visit,
            diagnosis="Preventívna prehliadka",
            symptoms=[],
            treatment="Kontrola zdravotného stavu",
            medications=[],
            doctor_name="Dr. Eva Horáková",
            notes="Všetko v poriadku",
            follow_up_date="2025-03-10",
            created_at=checkup_visit,
            updated_at=checkup_visit,
        ),
    ]
