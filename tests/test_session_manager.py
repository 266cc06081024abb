import pytest

from training_emr.services.errors import EmailTaken, InvalidCredentials, InvalidEmail, PasswordMismatch, WeakPassword
from training_emr.services.session_manager import Session, SessionManager, hash_password, verify_password


def test_sign_up_then_sign_in_scenario(session_manager, store):
    session = session_manager.sign_up("A", "a@x.edu", "password1", "password1")
    assert session.email == "a@x.edu"
    assert session.name == "A"
    assert store.get_session() == session.to_dict()

    session_manager.sign_out()
    again = session_manager.sign_in("a@x.edu", "password1")
    assert again == session

    session_manager.sign_out()
    with pytest.raises(InvalidCredentials):
        session_manager.sign_in("a@x.edu", "wrong")
    assert store.get_session() is None


def test_sign_in_ignores_email_case_and_whitespace(session_manager, student):
    session_manager.sign_out()
    assert session_manager.sign_in("  ALEX@Classroom.EDU ", "password1") == student


def test_sign_in_unknown_email(session_manager, store):
    with pytest.raises(InvalidCredentials) as exc:
        session_manager.sign_in("nobody@x.edu", "password1")
    assert exc.value.message == "Invalid email or password."
    assert store.get_session() is None


def test_password_is_not_stored_in_plain_text(session_manager, student, store):
    user = store.get_users()[0]
    assert user["password"] != "password1"
    assert verify_password("password1", user["password"])


@pytest.mark.parametrize("password", ["", "short", "1234567"])
def test_weak_password_rejected(session_manager, store, password):
    with pytest.raises(WeakPassword) as exc:
        session_manager.sign_up("A", "a@x.edu", password, password)
    assert exc.value.message == "Password must be at least 8 characters."
    assert store.get_users() == []


def test_password_mismatch_rejected(session_manager, store):
    with pytest.raises(PasswordMismatch):
        session_manager.sign_up("A", "a@x.edu", "password1", "password2")
    assert store.get_users() == []


def test_weak_password_checked_before_mismatch(session_manager):
    with pytest.raises(WeakPassword):
        session_manager.sign_up("A", "a@x.edu", "short", "other")


def test_duplicate_email_rejected_case_insensitively(session_manager, student, store):
    users_before = store.get_users()
    with pytest.raises(EmailTaken) as exc:
        session_manager.sign_up("Other", "ALEX@classroom.edu ", "password2", "password2")
    assert exc.value.message == "An account with this email already exists."
    assert store.get_users() == users_before


@pytest.mark.parametrize("email", ["", "   ", "not-an-email", "a@b", "two words@x.edu"])
def test_sign_up_rejects_invalid_email(session_manager, store, email):
    with pytest.raises(InvalidEmail) as exc:
        session_manager.sign_up("A", email, "password1", "password1")
    assert exc.value.message == "Enter a valid email address."
    assert store.get_users() == []
    assert store.get_session() is None


def test_invalid_email_checked_before_password(session_manager):
    with pytest.raises(InvalidEmail):
        session_manager.sign_up("A", "nope", "short", "other")


def test_corrupt_users_file_survives_later_sign_up(session_manager, store):
    session_manager.sign_up("A", "a@x.edu", "password1", "password1")
    users_file = store.data_dir / "emr_users.json"
    damaged = users_file.read_text(encoding="utf-8")[:20]
    users_file.write_text(damaged, encoding="utf-8")

    session_manager.sign_up("B", "b@x.edu", "password1", "password1")

    assert [u["email"] for u in store.get_users()] == ["b@x.edu"]
    assert (store.data_dir / "emr_users.json.corrupt").read_text(encoding="utf-8") == damaged


def test_sign_up_defaults_name_and_trims_email(session_manager, store):
    session = session_manager.sign_up("   ", "  New@X.edu ", "password1", "password1")
    assert session.name == "Student"
    assert session.email == "New@X.edu"


def test_sign_up_seeds_starter_collection_for_new_user_only(session_manager, store, student):
    patients = store.get_patients(student.user_id)
    assert [p["lastName"] for p in patients] == ["Lopez", "Nguyen"]

    other = session_manager.sign_up("B", "b@x.edu", "password1", "password1")
    assert store.get_patients(other.user_id) != patients
    assert store.get_patients(student.user_id) == patients


def test_min_password_length_is_configurable(store):
    manager = SessionManager(store, min_password_length=12)
    with pytest.raises(WeakPassword) as exc:
        manager.sign_up("A", "a@x.edu", "password1", "password1")
    assert "12" in exc.value.message


def test_sign_out_clears_session(session_manager, student, store):
    assert session_manager.get_active_session() == student
    session_manager.sign_out()
    assert session_manager.get_active_session() is None
    assert store.get_session() is None


def test_malformed_persisted_session_is_discarded(session_manager, store):
    store.set_session({"name": "no id"})
    assert session_manager.get_active_session() is None
    assert store.get_session() is None


@pytest.mark.parametrize("value", ["garbage", ["u1", "A"], 42])
def test_non_object_persisted_session_is_discarded(session_manager, store, value):
    store.set_session(value)
    assert session_manager.get_active_session() is None
    assert store.get_session() is None


def test_demo_seed_is_idempotent(session_manager, store):
    assert session_manager.seed_demo_account() is True
    assert session_manager.seed_demo_account() is False

    users = store.get_users()
    assert [u["email"] for u in users] == ["demo@classroom.edu"]
    assert len(store.get_patients(users[0]["id"])) == 3

    session = session_manager.sign_in("demo@classroom.edu", "demo1234")
    assert session.name == "Demo Instructor"


def test_demo_seed_skips_existing_email_in_other_case(session_manager, store):
    session_manager.sign_up("Someone", "DEMO@classroom.edu", "password1", "password1")
    assert session_manager.seed_demo_account() is False
    assert len(store.get_users()) == 1


def test_session_json_shape():
    session = Session(user_id="u1", name="A", email="a@x.edu")
    assert session.to_dict() == {"userId": "u1", "name": "A", "email": "a@x.edu"}
    assert Session.from_dict(session.to_dict()) == session


def test_verify_password_rejects_unrecognised_hash():
    assert verify_password("password1", "cGFzc3dvcmQx") is False
    assert verify_password("password1", hash_password("password1")) is True
