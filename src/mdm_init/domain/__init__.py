from .models import Medication, MedicalRecord, Patient

__all__ = ["Medication", "MedicalRecord", "Patient"]
