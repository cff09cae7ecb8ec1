"""Collections and indexes the MDM API service relies on."""
from typing import Dict, List, Tuple

from pymongo import ASCENDING
from pymongo.errors import CollectionInvalid

PATIENTS_COLLECTION = "patients"
MEDICAL_RECORDS_COLLECTION = "medical-records"
REQUIRED_COLLECTIONS: Tuple[str, ...] = (
    PATIENTS_COLLECTION, MEDICAL_RECORDS_COLLECTION)

# single-field ascending indexes per collection
INDEXED_FIELDS: Dict[str, Tuple[str, ...]] = {
    PATIENTS_COLLECTION: ("id", "insuranceNumber"),
    MEDICAL_RECORDS_COLLECTION: ("id", "patientId"),
}
BUSINESS_KEY = "id"


def is_initialized(client, db_name: str) -> bool:
    """True when `db_name` exists and holds every required collection."""
    if db_name not in client.list_database_names():
        return False
    existing = client[db_name].list_collection_names()
    return all(name in existing for name in REQUIRED_COLLECTIONS)


def create_collections(db) -> List[str]:
    """Create the required collections, returning the names actually created.

    An existing collection is reported and left alone.
    """
    created = []
    for name in REQUIRED_COLLECTIONS:
        try:
            db.create_collection(name)
            created.append(name)
        except CollectionInvalid as e:
            print(f"Collection '{name}' not created: {e}")
    return created


def create_indexes(db, unique_ids: bool = False) -> List[str]:
    """Create the lookup indexes; `unique_ids` makes the `id` indexes unique."""
    names = []
    for collection, fields in INDEXED_FIELDS.items():
        for field in fields:
            options = {}
            if unique_ids and field == BUSINESS_KEY:
                options["unique"] = True
            names.append(db[collection].create_index(
                [(field, ASCENDING)], **options))
    return names
