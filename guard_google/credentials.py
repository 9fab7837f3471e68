"""
credentials
-----------

서비스 계정 키로부터 도메인 전체 위임(domain-wide delegation) 자격증명을 만든다.
실제 서명/토큰 처리는 google-auth 에 맡기고, 여기서는 대리할 관리자(subject)와 scope 만 고정한다.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Mapping, Sequence, Tuple

from google.oauth2 import service_account

from .errors import CredentialFileUnreadableError, MalformedServiceAccountKeyError
from .logging_utils import get_logger


logger = get_logger(__name__)

# Admin SDK Directory API 의 그룹 읽기 전용 scope
ADMIN_DIRECTORY_GROUP_READONLY_SCOPE = (
    "https://www.googleapis.com/auth/admin.directory.group.readonly"
)


@dataclass(frozen=True)
class DelegatedCredential:
    credentials: service_account.Credentials
    subject: str
    scopes: Tuple[str, ...]

    @property
    def service_account_email(self) -> str:
        return self.credentials.service_account_email

    @classmethod
    def from_service_account_info(
        cls,
        info: Mapping[str, Any],
        subject: str,
        scopes: Sequence[str] = (ADMIN_DIRECTORY_GROUP_READONLY_SCOPE,),
    ) -> "DelegatedCredential":
        """
        서비스 계정 JSON(dict)으로 위임 자격증명을 만든다.
        키 형식이 잘못되면 google-auth 가 ValueError 를 던진다.
        """
        base = service_account.Credentials.from_service_account_info(
            info, scopes=list(scopes)
        )
        # Directory API 는 관리자 권한이 있는 사용자만 호출할 수 있으므로
        # 서비스 계정이 해당 관리자를 대리해야 한다.
        return cls(
            credentials=base.with_subject(subject),
            subject=subject,
            scopes=tuple(scopes),
        )


def read_service_account_file(path: str) -> bytes:
    """
    서비스 계정 JSON 파일의 원본 바이트를 읽는다. 호출할 때마다 새로 읽는다.
    """
    try:
        with open(path, "rb") as f:
            return f.read()
    except OSError as exc:
        raise CredentialFileUnreadableError(path, exc) from exc


def load_delegated_credential(path: str, subject: str) -> DelegatedCredential:
    raw = read_service_account_file(path)
    try:
        info = json.loads(raw)
        if not isinstance(info, dict):
            raise ValueError("service account json must be an object")
        credential = DelegatedCredential.from_service_account_info(info, subject)
    except (ValueError, TypeError, KeyError) as exc:
        raise MalformedServiceAccountKeyError(path, exc) from exc

    logger.debug(
        "위임 자격증명 생성: service_account=%s subject=%s",
        credential.service_account_email,
        subject,
    )
    return credential
