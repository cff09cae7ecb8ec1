"""Document shapes stored by the MDM patient-management service.

Attributes are snake_case in Python and camelCase in MongoDB, the field names
the API service reads back. Extra fields are kept: the collections carry no
validator and other writers may add their own.
"""
from datetime import datetime
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class _Document(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, extra="allow")

    def to_document(self) -> Dict:
        """Dictionary ready for `insert_many`, keyed by the stored field names."""
        return self.model_dump(by_alias=True)


class Medication(_Document):
    name: str = Field(..., examples=["Amoxicillin"])
    dosage: str = ""
    # e.g. "3x denne"
    frequency: str = ""
    duration: str = ""


class Patient(_Document):
    """Patient master record.

    Attributes
    ----------
    id:
        Application-assigned business key, not the MongoDB `_id`.
    insurance_number:
        Secondary lookup key (`insuranceNumber`), indexed.
    date_of_birth:
        ISO date string, e.g. "1990-01-01".
    """
    id: str = Field(..., examples=["pat123456"])
    first_name: str
    last_name: str
    date_of_birth: str
    gender: str
    insurance_number: str
    blood_type: str = ""
    status: str = ""
    allergies: str = ""
    medical_notes: str = ""
    created_at: datetime
    updated_at: datetime


class MedicalRecord(_Document):
    """Single visit of a patient.

    `patient_id` references `Patient.id` by value only; nothing checks that
    the patient exists.
    """
    id: str = Field(..., examples=["rec789012"])
    patient_id: str
    date_of_visit: datetime
    diagnosis: str = ""
    symptoms: List[str] = Field(default_factory=list)
    treatment: str = ""
    medications: List[Medication] = Field(default_factory=list)
    doctor_name: str = ""
    notes: str = ""
    follow_up_date: Optional[str] = None
    created_at: datetime
    updated_at: datetime
