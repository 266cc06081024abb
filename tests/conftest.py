import pytest

from training_emr.services.local_store import LocalStore
from training_emr.services.patient_list import PatientListController
from training_emr.services.session_manager import Session, SessionManager
from training_emr.utils.patient_records import new_patient


@pytest.fixture
def store(tmp_path):
    return LocalStore(tmp_path / "store")


@pytest.fixture
def session_manager(store):
    return SessionManager(store)


@pytest.fixture
def student(session_manager):
    return session_manager.sign_up("Alex Student", "alex@classroom.edu", "password1", "password1")


@pytest.fixture
def make_patient():
    def _make(**fields):
        fields.setdefault("firstName", "Test")
        fields.setdefault("lastName", "Patient")
        fields.setdefault("dob", "1990-01-01")
        return new_patient(**fields)
    return _make


@pytest.fixture
def controller(store, make_patient):
    session = Session(user_id="u1", name="Teacher", email="t@x.edu")
    store.set_patients("u1", [
        make_patient(firstName="Ariana", lastName="Lopez", mrn="MRN-00000001",
                     allergies="Penicillin", conditions="GAD", medications="Sertraline"),
        make_patient(firstName="Marcus", lastName="Nguyen", mrn="MRN-00000002",
                     allergies="Peanuts", conditions="T2DM", medications="Metformin"),
        make_patient(firstName="Sara", lastName="bennett", mrn="MRN-00000003",
                     allergies="None", conditions="Asthma", medications="Albuterol PRN"),
    ])
    return PatientListController(store, session)
