# Released under MIT License.
# Copyright (c) 2025 The mjsync developers

import pytest

from mjsync_lib.core.config import CFG
from mjsync_lib.core.error import CredentialsError
from mjsync_lib.properties.credentials import Credentials


def test_load_strips_whitespace(tmp_path):
    user_file = tmp_path / "userid.txt"
    token_file = tmp_path / "sessiontoken.txt"
    user_file.write_text("  user-123\n")
    token_file.write_text("\teyJtoken\n\n")

    credentials = Credentials.load(user_file, token_file)

    assert credentials.user_id == "user-123"
    assert credentials.session_token == "eyJtoken"


def test_load_uses_configured_files_in_cwd(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    (tmp_path / CFG.credentials.user_id_file).write_text("user")
    (tmp_path / CFG.credentials.session_token_file).write_text("token")

    assert Credentials.load() == Credentials("user", "token")


def test_load_missing_user_id_raises_801(tmp_path):
    token_file = tmp_path / "sessiontoken.txt"
    token_file.write_text("token")

    with pytest.raises(CredentialsError, match="user ID") as exc_info:
        Credentials.load(tmp_path / "missing.txt", token_file)

    assert exc_info.value.code == CFG.codes.user_id_read


def test_load_missing_session_token_raises_802(tmp_path):
    user_file = tmp_path / "userid.txt"
    user_file.write_text("user")

    with pytest.raises(CredentialsError, match="session token") as exc_info:
        Credentials.load(user_file, tmp_path / "missing.txt")

    assert exc_info.value.code == CFG.codes.session_token_read


def test_load_empty_value_raises(tmp_path):
    user_file = tmp_path / "userid.txt"
    token_file = tmp_path / "sessiontoken.txt"
    user_file.write_text("   \n")
    token_file.write_text("token")

    with pytest.raises(CredentialsError, match="empty"):
        Credentials.load(user_file, token_file)


def test_save_then_load(tmp_path):
    user_file = tmp_path / "userid.txt"
    token_file = tmp_path / "sessiontoken.txt"

    Credentials("user", "token").save(user_file, token_file)

    assert user_file.read_text() == "user"
    assert token_file.read_text() == "token"


def test_save_into_missing_directory_raises(tmp_path):
    with pytest.raises(CredentialsError, match="Could not save"):
        Credentials("user", "token").save(
            tmp_path / "missing" / "userid.txt", tmp_path / "sessiontoken.txt"
        )
