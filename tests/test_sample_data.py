from datetime import datetime, timezone

from mdm_init.domain import MedicalRecord, Patient
from mdm_init.domain.sample_data import sample_medical_records, sample_patients


def test_patient_documents_use_stored_field_names():
    now = datetime(2025, 1, 1, tzinfo=timezone.utc)
    doc = sample_patients(now)[0].to_document()
    assert doc["id"] == "pat123456"
    assert doc["insuranceNumber"] == "900101/1234"
    assert doc["dateOfBirth"] == "1990-01-01"
    assert doc["medicalNotes"].startswith("Pacient")
    assert doc["createdAt"] == now and doc["updatedAt"] == now
    assert "insurance_number" not in doc


def test_records_reference_first_patient():
    patients = {p.id for p in sample_patients()}
    records = sample_medical_records()
    assert [r.id for r in records] == ["rec789012", "rec789013"]
    assert all(r.patient_id in patients for r in records)


def test_medications_keep_order_and_shape():
    doc = sample_medical_records()[0].to_document()
    assert doc["patientId"] == "pat123456"
    assert doc["symptoms"] == ["kašeľ", "teploty", "bolesti hrdla"]
    assert doc["medications"] == [{
        "name": "Amoxicillin",
        "dosage": "500mg",
        "frequency": "3x denne",
        "duration": "7 dní",
    }]
    assert doc["dateOfVisit"] == datetime(2024, 5, 15, 9, 30, tzinfo=timezone.utc)
    assert doc["followUpDate"] == "2024-05-22"


def test_models_accept_camel_case_and_extra_fields():
    record = MedicalRecord.model_validate({
        "id": "rec1",
        "patientId": "pat1",
        "dateOfVisit": "2024-01-01T10:00:00Z",
        "createdAt": "2024-01-01T10:00:00Z",
        "updatedAt": "2024-01-01T10:00:00Z",
        "room": "12B",
    })
    assert record.patient_id == "pat1"
    assert record.to_document()["room"] == "12B"
    patient = Patient(
        id="p", first_name="A", last_name="B", date_of_birth="2000-01-01",
        gender="F", insurance_number="1", created_at=datetime.now(timezone.utc),
        updated_at=datetime.now(timezone.utc))
    assert patient.to_document()["bloodType"] == ""
