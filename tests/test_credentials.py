import json
from pathlib import Path
from typing import Any, Dict

import pytest

from guard_google.credentials import (
    ADMIN_DIRECTORY_GROUP_READONLY_SCOPE,
    DelegatedCredential,
    load_delegated_credential,
    read_service_account_file,
)
from guard_google.errors import CredentialFileUnreadableError, MalformedServiceAccountKeyError


def test_from_service_account_info_sets_subject_and_scope(sa_info: Dict[str, Any]) -> None:
    cred = DelegatedCredential.from_service_account_info(sa_info, "admin@example.com")

    assert cred.subject == "admin@example.com"
    assert cred.scopes == (ADMIN_DIRECTORY_GROUP_READONLY_SCOPE,)
    assert cred.credentials.scopes == [ADMIN_DIRECTORY_GROUP_READONLY_SCOPE]


def test_read_service_account_file_returns_raw_bytes(tmp_path: Path) -> None:
    path = tmp_path / "key.json"
    path.write_bytes(b'{"client_id":"x"}\n')

    assert read_service_account_file(str(path)) == b'{"client_id":"x"}\n'


def test_read_service_account_file_directory_is_unreadable(tmp_path: Path) -> None:
    with pytest.raises(CredentialFileUnreadableError) as excinfo:
        read_service_account_file(str(tmp_path))

    assert excinfo.value.details == {"path": str(tmp_path)}


def test_load_delegated_credential_rejects_bad_private_key(
    tmp_path: Path, sa_info: Dict[str, Any]
) -> None:
    sa_info["private_key"] = "not a pem"
    path = tmp_path / "key.json"
    path.write_text(json.dumps(sa_info), encoding="utf-8")

    with pytest.raises(MalformedServiceAccountKeyError) as excinfo:
        load_delegated_credential(str(path), "admin@example.com")

    assert excinfo.value.__cause__ is excinfo.value.cause


@pytest.mark.parametrize("private_key", [123, None, ["pem"], {"pem": "x"}])
def test_load_delegated_credential_rejects_non_string_private_key(
    tmp_path: Path, sa_info: Dict[str, Any], private_key: Any
) -> None:
    sa_info["private_key"] = private_key
    path = tmp_path / "key.json"
    path.write_text(json.dumps(sa_info), encoding="utf-8")

    with pytest.raises(MalformedServiceAccountKeyError):
        load_delegated_credential(str(path), "admin@example.com")


def test_load_delegated_credential_rejects_undecodable_bytes(tmp_path: Path) -> None:
    path = tmp_path / "key.json"
    path.write_bytes(b"\xff\xfe\xfd")

    with pytest.raises(MalformedServiceAccountKeyError):
        load_delegated_credential(str(path), "admin@example.com")
