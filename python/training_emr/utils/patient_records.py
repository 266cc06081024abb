"""
Patient record shape and factories.

Records are plain dicts whose JSON form is the persisted wire format:
camelCase keys, string values, and a nested ``vitals`` object.
"""

import copy
from typing import Any, Dict, Iterable, Optional

from training_emr.utils.helpers import generate_id, generate_mrn, now_iso, today_iso

VITAL_FIELDS = ("hr", "bp", "temp")

TEXT_FIELDS = (
    "firstName", "lastName", "mrn", "dob", "sex", "phone", "lastVisit",
    "allergies", "medications", "conditions", "notes",
)

SEX_OPTIONS = ["", "Female", "Male", "Intersex", "Other", "Prefer not to say"]

# (field, column header) in table order
SORTABLE_COLUMNS = [
    ("lastName", "Patient"),
    ("mrn", "MRN"),
    ("dob", "DOB"),
    ("sex", "Sex"),
    ("lastVisit", "Last Visit"),
]

def blank_patient(existing_mrns: Optional[Iterable[str]] = None) -> Dict[str, Any]:
    """Empty chart for the editor's new mode"""
    stamp = now_iso()
    return {
        "id": generate_id(),
        "createdAt": stamp,
        "updatedAt": stamp,
        "firstName": "",
        "lastName": "",
        "mrn": generate_mrn(existing_mrns),
        "dob": "",
        "sex": "",
        "phone": "",
        "lastVisit": today_iso(),
        "allergies": "",
        "medications": "",
        "conditions": "",
        "vitals": {"hr": "", "bp": "", "temp": ""},
        "notes": "",
    }

def new_patient(existing_mrns: Optional[Iterable[str]] = None, **fields: Any) -> Dict[str, Any]:
    """
    Build a complete record from a blank template and the given chart values

    ``vitals`` may be passed as a partial dict; it is merged over blank vitals.
    """
    record = blank_patient(existing_mrns)
    vitals = fields.pop("vitals", None) or {}
    record.update(fields)
    record["vitals"] = {**record["vitals"], **vitals}
    return record

def normalize_patient(record: Dict[str, Any]) -> Dict[str, Any]:
    """Copy of a stored record with any missing keys filled in"""
    result = copy.deepcopy(record)
    for field in TEXT_FIELDS:
        if result.get(field) is None:
            result[field] = ""
    vitals = result.get("vitals") or {}
    result["vitals"] = {**vitals, **{name: vitals.get(name) or "" for name in VITAL_FIELDS}}
    return result
