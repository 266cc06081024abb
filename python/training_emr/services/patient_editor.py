"""
Patient Editor for Training EMR

Form state for creating or editing one chart. The editor works on a private
copy of the record; nothing reaches the collection until ``submit`` passes
validation and hands the merged record to the list controller.
"""

import copy
from typing import Any, Dict, Iterable, Optional
import logging

from training_emr.services.errors import RequiredFieldMissing
from training_emr.services.patient_list import PatientListController
from training_emr.utils.helpers import now_iso
from training_emr.utils.patient_records import VITAL_FIELDS, blank_patient, normalize_patient
from training_emr.utils.validators import validate_required_fields

logger = logging.getLogger(__name__)

NEW = 'new'
EDIT = 'edit'

class PatientEditor:
    """Two entry states: ``new`` (blank template) and ``edit`` (copy of an existing chart)"""

    def __init__(self, initial: Optional[Dict[str, Any]] = None,
                 existing_mrns: Optional[Iterable[str]] = None):
        if initial is None:
            self.mode = NEW
            self.form = blank_patient(existing_mrns)
        else:
            self.mode = EDIT
            self.form = normalize_patient(initial)
        self.errors: Dict[str, str] = {}
        self.closed = False

    @classmethod
    def for_new(cls, controller: PatientListController) -> 'PatientEditor':
        return cls(existing_mrns=controller.mrns())

    @classmethod
    def for_edit(cls, record: Dict[str, Any]) -> 'PatientEditor':
        return cls(initial=record)

    @property
    def is_new(self) -> bool:
        return self.mode == NEW

    @property
    def title(self) -> str:
        return "New patient" if self.is_new else "Edit patient"

    def set_field(self, name: str, value: Any) -> None:
        if name in ('id', 'createdAt', 'updatedAt', 'vitals'):
            raise KeyError(f"{name} cannot be edited directly")
        self.form[name] = value

    def set_vital(self, name: str, value: Any) -> None:
        if name not in VITAL_FIELDS:
            raise KeyError(f"Unknown vital: {name}")
        self.form['vitals'] = {**self.form['vitals'], name: value}

    def update(self, values: Dict[str, Any]) -> None:
        """Apply a batch of form values; a ``vitals`` entry is merged field by field"""
        for name, value in values.items():
            if name == 'vitals':
                for vital, vital_value in (value or {}).items():
                    self.set_vital(vital, vital_value)
            else:
                self.set_field(name, value)

    def validate(self) -> Dict[str, str]:
        self.errors = validate_required_fields(self.form)
        return self.errors

    def submit(self, controller: PatientListController) -> Dict[str, Any]:
        """
        Validate and save through the controller

        Returns:
            The saved record (``updatedAt`` refreshed, ``id`` and ``createdAt`` preserved)

        Raises:
            RequiredFieldMissing: a required field is blank; nothing is saved
        """
        if self.validate():
            raise RequiredFieldMissing(self.errors.keys(), self.errors)

        record = {**copy.deepcopy(self.form), 'updatedAt': now_iso()}
        if self.is_new:
            controller.create(record)
        else:
            controller.update(record)

        self.form = record
        self.closed = True
        logger.debug(f"Editor saved patient {record['id']} ({self.mode})")
        return record
