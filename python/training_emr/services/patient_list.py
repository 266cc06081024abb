"""
Patient List Controller for Training EMR

Loads the signed-in user's patient collection, applies the free-text filter
and column sort used by the table, and performs create / update / delete with
immediate persistence. The controller is bound to an explicit ``Session``;
it never reads the persisted session itself.
"""

from typing import Any, Dict, List, Optional, Tuple
import logging

import pandas as pd

from training_emr.data_generation.practice_data_generator import PracticeDataGenerator
from training_emr.services.errors import PatientNotFound
from training_emr.services.local_store import LocalStore
from training_emr.services.session_manager import Session

logger = logging.getLogger(__name__)

SEARCH_FIELDS = ('firstName', 'lastName', 'mrn', 'allergies', 'conditions', 'medications')
SORT_DIRECTIONS = ('asc', 'desc')

TABLE_COLUMNS = {
    'lastName': 'Last Name',
    'firstName': 'First Name',
    'mrn': 'MRN',
    'dob': 'DOB',
    'sex': 'Sex',
    'lastVisit': 'Last Visit',
    'allergies': 'Allergies',
    'conditions': 'Conditions',
    'medications': 'Medications',
}

def _search_text(patient: Dict[str, Any]) -> str:
    return " ".join(str(patient.get(field) or "") for field in SEARCH_FIELDS).lower()

def filter_patients(patients: List[Dict[str, Any]], query: str) -> List[Dict[str, Any]]:
    """
    Case-insensitive substring filter over name, MRN, allergies, conditions and medications

    Args:
        patients: Collection in display order
        query: Free text; blank returns every patient in the same order

    Returns:
        New list of matching patients, order preserved
    """
    q = (query or "").strip().lower()
    if not q:
        return list(patients)
    return [p for p in patients if q in _search_text(p)]

def sort_patients(patients: List[Dict[str, Any]], key: str, direction: str = 'asc') -> List[Dict[str, Any]]:
    """
    Stable sort on the lower-cased string form of one field

    Ties keep their input order in both directions.
    """
    if direction not in SORT_DIRECTIONS:
        raise ValueError(f"Unknown sort direction: {direction!r}")
    return sorted(patients,
                  key=lambda p: str(p.get(key) or "").lower(),
                  reverse=(direction == 'desc'))

def next_sort(current_key: str, current_dir: str, clicked_key: str) -> Tuple[str, str]:
    """Column-header toggle: the active ascending column flips to descending, anything else sorts ascending"""
    if clicked_key == current_key and current_dir == 'asc':
        return clicked_key, 'desc'
    return clicked_key, 'asc'

class PatientListController:
    """One user's ordered patient collection plus the selected chart"""

    def __init__(self, store: LocalStore, session: Session, active_id: Optional[str] = None):
        self.store = store
        self.session = session
        self.active_id = active_id
        self.patients: List[Dict[str, Any]] = []
        self.load()

    def load(self) -> List[Dict[str, Any]]:
        self.patients = self.store.get_patients(self.session.user_id)
        if self.active_id is not None and self._index(self.active_id) is None:
            self.active_id = None
        return self.patients

    def _persist(self) -> None:
        self.store.set_patients(self.session.user_id, self.patients)

    def _index(self, patient_id: str) -> Optional[int]:
        for i, patient in enumerate(self.patients):
            if patient.get('id') == patient_id:
                return i
        return None

    def get(self, patient_id: str) -> Optional[Dict[str, Any]]:
        idx = self._index(patient_id)
        return self.patients[idx] if idx is not None else None

    def mrns(self) -> List[str]:
        return [p.get('mrn', '') for p in self.patients]

    def visible(self, query: str = "", sort_key: str = 'lastName', direction: str = 'asc') -> List[Dict[str, Any]]:
        """Rows for the table: filter, then sort"""
        return sort_patients(filter_patients(self.patients, query), sort_key, direction)

    def create(self, record: Dict[str, Any]) -> Dict[str, Any]:
        """Prepend a new chart, persist, and select it"""
        self.patients.insert(0, record)
        self._persist()
        self.active_id = record['id']
        logger.info(f"Created patient {record['id']} for user {self.session.user_id}")
        return record

    def update(self, record: Dict[str, Any]) -> Dict[str, Any]:
        """Replace the chart with the same id, keeping its position"""
        idx = self._index(record['id'])
        if idx is None:
            raise PatientNotFound(record['id'])
        self.patients[idx] = record
        self._persist()
        logger.info(f"Updated patient {record['id']} for user {self.session.user_id}")
        return record

    def delete(self, patient_id: str) -> None:
        """
        Remove a chart and persist

        Callers are expected to have asked the user for confirmation.
        Clears the selection if the removed chart was selected.
        """
        idx = self._index(patient_id)
        if idx is None:
            raise PatientNotFound(patient_id)
        del self.patients[idx]
        self._persist()
        if self.active_id == patient_id:
            self.active_id = None
        logger.info(f"Deleted patient {patient_id} for user {self.session.user_id}")

    def select(self, patient_id: str) -> None:
        if self._index(patient_id) is None:
            raise PatientNotFound(patient_id)
        self.active_id = patient_id

    def clear_selection(self) -> None:
        self.active_id = None

    def active_patient(self) -> Optional[Dict[str, Any]]:
        return self.get(self.active_id) if self.active_id else None

    def add_practice_patients(self, count: int, seed: Optional[int] = None) -> List[Dict[str, Any]]:
        """Append Faker-generated practice charts to the end of the collection"""
        generated = PracticeDataGenerator(seed=seed).generate_patients(count, existing_mrns=self.mrns())
        self.patients.extend(generated)
        self._persist()
        logger.info(f"Added {len(generated)} practice patients for user {self.session.user_id}")
        return generated

    @staticmethod
    def to_dataframe(patients: List[Dict[str, Any]]) -> pd.DataFrame:
        """Table / CSV view of the given rows"""
        rows = [{label: p.get(field, "") for field, label in TABLE_COLUMNS.items()} for p in patients]
        return pd.DataFrame(rows, columns=list(TABLE_COLUMNS.values()))
