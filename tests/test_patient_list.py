import pytest

from training_emr.services.errors import PatientNotFound
from training_emr.services.patient_list import (
    PatientListController, filter_patients, next_sort, sort_patients, TABLE_COLUMNS
)
from training_emr.services.session_manager import Session


def ids(patients):
    return [p["id"] for p in patients]


def test_empty_filter_returns_same_order(controller):
    result = filter_patients(controller.patients, "")
    assert ids(result) == ids(controller.patients)
    assert result is not controller.patients
    assert ids(filter_patients(controller.patients, "   ")) == ids(controller.patients)


@pytest.mark.parametrize("query, expected", [
    ("lopez", ["Lopez"]),
    ("MRN-00000002", ["Nguyen"]),
    ("peanut", ["Nguyen"]),
    ("ASTHMA", ["bennett"]),
    ("albuterol", ["bennett"]),
    ("  sara ", ["bennett"]),
    ("mrn-0000000", ["Lopez", "Nguyen", "bennett"]),
    ("nothing-matches", []),
])
def test_filter_matches_searchable_fields(controller, query, expected):
    assert [p["lastName"] for p in filter_patients(controller.patients, query)] == expected


def test_filter_ignores_unsearched_fields(controller):
    controller.patients[0]["notes"] = "zebra"
    assert filter_patients(controller.patients, "zebra") == []


def test_filter_tolerates_missing_fields():
    patients = [{"id": "1", "firstName": "Only"}]
    assert filter_patients(patients, "only") == patients


def test_sort_is_case_insensitive(controller):
    result = sort_patients(controller.patients, "lastName", "asc")
    assert [p["lastName"] for p in result] == ["bennett", "Lopez", "Nguyen"]

    result = sort_patients(controller.patients, "lastName", "desc")
    assert [p["lastName"] for p in result] == ["Nguyen", "Lopez", "bennett"]


def test_sort_is_stable_for_equal_values(controller):
    for p in controller.patients:
        p["sex"] = "Female"
    original = ids(controller.patients)
    assert ids(sort_patients(controller.patients, "sex", "asc")) == original
    assert ids(sort_patients(controller.patients, "sex", "desc")) == original


def test_sort_treats_missing_as_empty():
    patients = [{"id": "a", "lastVisit": "2025-01-01"}, {"id": "b"}, {"id": "c", "lastVisit": ""}]
    assert ids(sort_patients(patients, "lastVisit", "asc")) == ["b", "c", "a"]


def test_sort_rejects_unknown_direction(controller):
    with pytest.raises(ValueError):
        sort_patients(controller.patients, "lastName", "sideways")


def test_next_sort_toggles():
    assert next_sort("lastName", "asc", "lastName") == ("lastName", "desc")
    assert next_sort("lastName", "desc", "lastName") == ("lastName", "asc")
    assert next_sort("lastName", "desc", "mrn") == ("mrn", "asc")


def test_visible_filters_then_sorts(controller):
    rows = controller.visible("mrn-", "mrn", "desc")
    assert [p["mrn"] for p in rows] == ["MRN-00000003", "MRN-00000002", "MRN-00000001"]


def test_create_prepends_persists_and_selects(controller, store, make_patient):
    record = make_patient(firstName="New")
    controller.create(record)

    assert controller.patients[0] is record
    assert ids(store.get_patients("u1"))[0] == record["id"]
    assert controller.active_id == record["id"]


def test_update_replaces_in_place(controller, store):
    original_ids = ids(controller.patients)
    record = dict(controller.patients[1], firstName="Marc")
    controller.update(record)

    assert ids(controller.patients) == original_ids
    assert store.get_patients("u1")[1]["firstName"] == "Marc"


def test_update_unknown_id(controller):
    with pytest.raises(PatientNotFound):
        controller.update({"id": "missing"})


def test_delete_removes_exactly_one(controller, store):
    before = ids(controller.patients)
    controller.delete(before[1])

    assert ids(controller.patients) == [before[0], before[2]]
    assert ids(store.get_patients("u1")) == [before[0], before[2]]


def test_delete_clears_selection_of_removed_record(controller):
    target = controller.patients[0]["id"]
    controller.select(target)
    controller.delete(target)
    assert controller.active_id is None
    assert controller.active_patient() is None


def test_delete_keeps_other_selection(controller):
    keep = controller.patients[0]["id"]
    controller.select(keep)
    controller.delete(controller.patients[2]["id"])
    assert controller.active_id == keep


def test_select_and_clear_selection(controller):
    target = controller.patients[1]["id"]
    controller.select(target)
    assert controller.active_patient()["lastName"] == "Nguyen"

    controller.clear_selection()
    assert controller.active_patient() is None

    with pytest.raises(PatientNotFound):
        controller.select("missing")


def test_delete_unknown_id(controller):
    with pytest.raises(PatientNotFound):
        controller.delete("missing")


def test_load_drops_stale_selection(store, controller):
    session = controller.session
    reloaded = PatientListController(store, session, active_id="gone")
    assert reloaded.active_id is None


def test_controller_only_sees_its_own_user(store, controller):
    other = PatientListController(store, Session(user_id="u2", name="B", email="b@x.edu"))
    assert other.patients == []


def test_add_practice_patients_appends(controller, store):
    before = ids(controller.patients)
    added = controller.add_practice_patients(4, seed=3)

    assert len(added) == 4
    assert ids(controller.patients)[:3] == before
    assert len(store.get_patients("u1")) == 7
    assert len(set(controller.mrns())) == 7


def test_to_dataframe_columns(controller):
    df = PatientListController.to_dataframe(controller.patients)
    assert list(df.columns) == list(TABLE_COLUMNS.values())
    assert df["Last Name"].tolist() == ["Lopez", "Nguyen", "bennett"]

    empty = PatientListController.to_dataframe([])
    assert empty.empty
    assert list(empty.columns) == list(TABLE_COLUMNS.values())
