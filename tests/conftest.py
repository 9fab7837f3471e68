"""
pytest 설정:

로컬에 설치된 다른 버전의 guard_google 패키지가 먼저 import 되지 않도록 repo root 를 sys.path 최상단에 고정한다.
서비스 계정 키 fixture 는 테스트마다 RSA 키를 새로 만들어 사용한다.
"""

from __future__ import annotations

import json
import os
import sys
from pathlib import Path
from typing import Any, Dict

import pytest
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import rsa


def pytest_configure() -> None:
    repo_root = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
    if repo_root not in sys.path:
        sys.path.insert(0, repo_root)


@pytest.fixture(scope="session")
def private_key_pem() -> str:
    key = rsa.generate_private_key(public_exponent=65537, key_size=2048)
    return key.private_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PrivateFormat.PKCS8,
        encryption_algorithm=serialization.NoEncryption(),
    ).decode("ascii")


@pytest.fixture
def sa_info(private_key_pem: str) -> Dict[str, Any]:
    return {
        "type": "service_account",
        "project_id": "guard-test",
        "private_key_id": "abc123",
        "private_key": private_key_pem,
        "client_email": "guard@guard-test.iam.gserviceaccount.com",
        "client_id": "1234567890",
        "token_uri": "https://oauth2.googleapis.com/token",
    }


@pytest.fixture
def sa_json_file(tmp_path: Path, sa_info: Dict[str, Any]) -> Path:
    path = tmp_path / "key.json"
    path.write_text(json.dumps(sa_info), encoding="utf-8")
    return path


@pytest.fixture(autouse=True)
def _clear_google_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("GOOGLE_CLIENT_ID", raising=False)
    monkeypatch.delenv("GOOGLE_CLIENT_SECRET", raising=False)
