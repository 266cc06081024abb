from training_emr.services.local_store import LocalStore, SESSION_KEY, USERS_KEY, patients_key


def test_absent_keys_return_defaults(store):
    assert store.get("missing") is None
    assert store.get("missing", []) == []
    assert store.get_users() == []
    assert store.get_session() is None
    assert store.get_patients("nobody") == []


def test_default_is_copied(store):
    default = {"items": []}
    value = store.get("missing", default)
    value["items"].append(1)
    assert default == {"items": []}


def test_nested_values_round_trip(store):
    patient = {
        "id": "abc",
        "firstName": "Ariana",
        "vitals": {"hr": "74", "bp": "118/78", "temp": "98.6"},
        "notes": "A1C 7.2 → reinforce diet",
    }
    store.set_patients("u1", [patient])

    reopened = LocalStore(store.data_dir)
    assert reopened.get_patients("u1") == [patient]


def test_directory_created_on_first_write(tmp_path):
    store = LocalStore(tmp_path / "nested" / "dir")
    assert store.keys() == []
    store.set("k", 1)
    assert (tmp_path / "nested" / "dir" / "k.json").exists()


def test_last_write_wins(store):
    store.set("k", "first")
    store.set("k", "second")
    assert store.get("k") == "second"


def test_remove_is_idempotent(store):
    store.set_session({"userId": "u1", "name": "A", "email": "a@x.edu"})
    store.clear_session()
    store.clear_session()
    assert store.get_session() is None


def test_keys_lists_stored_entries(store):
    store.set_users([])
    store.set_session({"userId": "u1", "name": "A", "email": "a@x.edu"})
    store.set_patients("u1", [])
    assert store.keys() == sorted([USERS_KEY, SESSION_KEY, patients_key("u1")])


def test_unsafe_key_characters_stay_inside_data_dir(store):
    store.set("patients:../evil", [1])
    assert store.get("patients:../evil") == [1]
    assert all(path.parent == store.data_dir for path in store.data_dir.iterdir())
    assert store.keys() == ["patients:../evil"]


def test_similar_keys_do_not_share_a_file(store):
    store.set("a:b", "colon")
    store.set("a_b", "underscore")

    assert store.get("a:b") == "colon"
    assert store.get("a_b") == "underscore"
    assert store.keys() == ["a:b", "a_b"]


def test_corrupt_entry_falls_back_to_default(store):
    store.set_users([{"id": "1"}])
    (store.data_dir / f"{USERS_KEY}.json").write_text("{not json", encoding="utf-8")
    assert store.get_users() == []


def test_corrupt_entry_is_kept_after_next_write(store):
    users_file = store.data_dir / f"{USERS_KEY}.json"
    store.set_users([{"id": "1", "email": "a@x.edu"}])
    users_file.write_text('[{"id": "1", "email": "a@x', encoding="utf-8")

    assert store.get_users() == []
    store.set_users([{"id": "2", "email": "b@x.edu"}])

    kept = store.data_dir / f"{USERS_KEY}.json.corrupt"
    assert kept.read_text(encoding="utf-8") == '[{"id": "1", "email": "a@x'
    assert store.get_users() == [{"id": "2", "email": "b@x.edu"}]
    assert store.keys() == [USERS_KEY]


def test_repeated_corruption_keeps_every_copy(store):
    users_file = store.data_dir / f"{USERS_KEY}.json"
    store.set_users([])
    for text in ("first{", "second{"):
        users_file.write_text(text, encoding="utf-8")
        assert store.get_users() == []

    assert (store.data_dir / f"{USERS_KEY}.json.corrupt").read_text(encoding="utf-8") == "first{"
    assert (store.data_dir / f"{USERS_KEY}.json.corrupt.1").read_text(encoding="utf-8") == "second{"


def test_collections_are_isolated_per_user(store):
    store.set_patients("u1", [{"id": "a"}])
    store.set_patients("u2", [{"id": "b"}])
    assert store.get_patients("u1") == [{"id": "a"}]
    assert store.get_patients("u2") == [{"id": "b"}]
