"""
Tests for the persisted operator session.
"""

import json

from estate_recon.console.session import ConsoleSession

LOGIN = {
    "token": "abc123",
    "username": "mandor",
    "role": "SUPERVISOR",
    "menus": [
        {"name": "reconciliation", "permissions": ["view"]},
        {"name": "receipts", "permissions": ["view", "edit"]},
    ],
    "estateId": 7,
}


def test_new_session_is_signed_out(tmp_path):
    session = ConsoleSession(tmp_path / "session.json")

    assert not session.is_authenticated
    assert session.token is None
    assert session.auth_headers() == {}


def test_update_signs_in(tmp_path):
    session = ConsoleSession(tmp_path / "session.json")

    session.update(LOGIN)

    assert session.is_authenticated
    assert session.auth_headers() == {"Authorization": "Bearer abc123"}
    assert session.state.estate_id == 7


def test_permissions_follow_menus(tmp_path):
    session = ConsoleSession(tmp_path / "session.json")
    session.update(LOGIN)

    assert session.has_permission("receipts", "edit")
    assert not session.has_permission("reconciliation", "edit")
    assert not session.has_permission("payroll", "view")


def test_save_then_load(tmp_path):
    path = tmp_path / "nested" / "session.json"
    session = ConsoleSession(path)
    session.update(LOGIN)

    session.save()
    restored = ConsoleSession(path).load()

    assert json.loads(path.read_text())["estateId"] == 7
    assert restored.state == session.state


def test_load_without_file_stays_signed_out(tmp_path):
    session = ConsoleSession(tmp_path / "missing.json").load()
    assert not session.is_authenticated


def test_corrupt_file_is_ignored(tmp_path):
    path = tmp_path / "session.json"
    path.write_text("{not json")

    session = ConsoleSession(path).load()

    assert not session.is_authenticated


def test_clear_signs_out_and_removes_file(tmp_path):
    path = tmp_path / "session.json"
    session = ConsoleSession(path)
    session.update(LOGIN)
    session.save()

    session.clear()

    assert not session.is_authenticated
    assert not path.exists()
    session.clear()
