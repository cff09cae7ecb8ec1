"""Idempotent bootstrap of the MDM patient-management database.

The only state check is whether both collections already exist. A database
holding just one of them is initialized again from scratch: collection
creation is attempted for both and the sample data is inserted again.
"""
from __future__ import annotations

import sys
import threading
from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, List, Optional, Tuple

from pymongo.database import Database
from pymongo.errors import BulkWriteError

from ..config import Settings
from ..domain.sample_data import sample_medical_records, sample_patients
from .connection import connect_from_settings
from .errors import InitializerError
from .schemas import (
    MEDICAL_RECORDS_COLLECTION,
    PATIENTS_COLLECTION,
    create_collections,
    create_indexes,
    is_initialized,
)


@dataclass
class InitResult:
    already_initialized: bool = False
    created_collections: List[str] = field(default_factory=list)
    indexes: List[str] = field(default_factory=list)
    patients_inserted: int = 0
    medical_records_inserted: int = 0
    seed_errors: List[str] = field(default_factory=list)


def _bulk_error_message(details: Dict) -> str:
    errors = details.get("writeErrors") or []
    if errors:
        return "; ".join(str(e.get("errmsg", e)) for e in errors)
    concerns = details.get("writeConcernErrors") or []
    if concerns:
        return "; ".join(str(e.get("errmsg", e)) for e in concerns)
    return "unknown write error"


class MdmDatabaseInitializer:
    """Creates collections and indexes and seeds sample data on one client."""

    def __init__(self, client, db_name: str, unique_ids: bool = False, now: Optional[datetime] = None):
        self.client = client
        self.db_name = db_name
        self.db: Database = client[db_name]
        self.unique_ids = unique_ids
        self.now = now

    def already_initialized(self) -> bool:
        return is_initialized(self.client, self.db_name)

    def _insert_many(self, collection: str, documents: List[Dict], kind: str) -> Tuple[int, Optional[str]]:
        try:
            result = self.db[collection].insert_many(documents)
            return len(result.inserted_ids), None
        except BulkWriteError as exc:
            # seeding is best effort: report and carry on
            print(exc.details, file=sys.stderr)
            message = _bulk_error_message(exc.details)
            print(f"Error when writing {kind} data: {message}")
            return exc.details.get("nInserted", 0), message

    def seed(self, result: InitResult) -> InitResult:
        patients = [p.to_document() for p in sample_patients(self.now)]
        result.patients_inserted, error = self._insert_many(
            PATIENTS_COLLECTION, patients, "patients")
        if error:
            result.seed_errors.append(error)

        records = [r.to_document() for r in sample_medical_records()]
        result.medical_records_inserted, error = self._insert_many(
            MEDICAL_RECORDS_COLLECTION, records, "medical records")
        if error:
            result.seed_errors.append(error)
        return result

    def run(self) -> InitResult:
        if self.already_initialized():
            print(
                f"Collections '{PATIENTS_COLLECTION}' and '{MEDICAL_RECORDS_COLLECTION}' "
                f"already exist in database '{self.db_name}'")
            return InitResult(already_initialized=True)

        result = InitResult()
        result.created_collections = create_collections(self.db)
        result.indexes = create_indexes(self.db, unique_ids=self.unique_ids)
        self.seed(result)
        print(
            f"Successfully initialized MDM database with {result.patients_inserted} patients "
            f"and {result.medical_records_inserted} medical records")
        return result


def initialize_database(settings: Settings, cancel_event: Optional[threading.Event] = None, **connect_kwargs) -> int:
    """Connect, initialize and return the process exit code.

    Exit code 1 only when the connection is given up or cancelled, or when
    strict seeding is on and a sample insert failed. Other driver errors
    propagate.
    """
    try:
        client = connect_from_settings(
            settings, cancel_event=cancel_event, **connect_kwargs)
    except InitializerError as exc:
        print(f"MDM database initialization aborted: {exc}", file=sys.stderr)
        return 1

    try:
        result = MdmDatabaseInitializer(
            client,
            settings.MDM_API_MONGODB_DATABASE,
            unique_ids=settings.MDM_API_MONGODB_UNIQUE_IDS,
        ).run()
    finally:
        client.close()

    if result.seed_errors and settings.MDM_INIT_STRICT_SEED:
        print(
            f"Sample data seeding failed: {'; '.join(result.seed_errors)}", file=sys.stderr)
        return 1
    return 0
