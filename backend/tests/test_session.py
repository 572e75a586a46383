import json

from app.client.session import Session


def test_hydrate_missing_file(tmp_path):
    session = Session.load(str(tmp_path / "session.json"))

    assert session.is_authenticated is False
    assert session.user is None


def test_set_credentials_persists(tmp_path):
    path = tmp_path / "session.json"
    session = Session.load(str(path))
    session.set_credentials("tok-123", "u-1", name="Ada", email="ada@example.com")

    restored = Session.load(str(path))
    assert restored.is_authenticated
    assert restored.token == "tok-123"
    assert restored.user.id == "u-1"
    assert restored.user.email == "ada@example.com"


def test_corrupt_file_means_signed_out(tmp_path):
    path = tmp_path / "session.json"
    path.write_text("{not json", encoding="utf-8")

    assert Session.load(str(path)).is_authenticated is False


def test_bad_user_shape_means_signed_out(tmp_path):
    path = tmp_path / "session.json"
    path.write_text(json.dumps({"token": "t", "user": {"name": "no id"}}), encoding="utf-8")

    assert Session.load(str(path)).is_authenticated is False


def test_logout_clears_storage_and_runs_hooks(tmp_path):
    path = tmp_path / "session.json"
    session = Session.load(str(path))
    session.set_credentials("tok-123", "u-1")
    calls = []
    session.on_logout(lambda: calls.append("reset"))

    session.logout()

    assert not path.exists()
    assert session.token is None and session.user is None
    assert calls == ["reset"]
    assert Session.load(str(path)).is_authenticated is False
