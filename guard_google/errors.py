"""
errors
------

Google 인증 어댑터에서 사용하는 예외 계층.
호출자(시작 코드 등)가 치명적 오류로 취급할지 결정하므로, 여기서는 값으로만 전달한다.
"""

from __future__ import annotations

from typing import Any, Dict, Optional


class GuardGoogleError(Exception):
    """
    guard_google 공통 베이스 예외.

    Attributes:
        details: 경로, 플래그 이름 등 구조화된 부가 정보
        cause: 원인이 된 원래 예외 (있다면)
    """

    def __init__(
        self,
        message: str,
        *,
        details: Optional[Dict[str, Any]] = None,
        cause: Optional[BaseException] = None,
    ) -> None:
        super().__init__(message)
        self.details = details or {}
        self.cause = cause


class MissingRequiredFieldError(GuardGoogleError):
    """필수 설정 값이 비어 있을 때 (validate 에서 필드마다 하나씩)."""

    def __init__(self, flag: str, message: Optional[str] = None) -> None:
        super().__init__(message or f"{flag} must be non-empty", details={"flag": flag})
        self.flag = flag


class CredentialFileUnreadableError(GuardGoogleError):
    """서비스 계정 JSON 파일을 읽을 수 없을 때."""

    def __init__(self, path: str, cause: BaseException) -> None:
        super().__init__(
            f"failed to load service account json file {path}: {cause}",
            details={"path": path},
            cause=cause,
        )
        self.path = path


class MalformedServiceAccountKeyError(GuardGoogleError):
    """서비스 계정 키 내용으로 위임 자격증명을 만들 수 없을 때."""

    def __init__(self, path: str, cause: BaseException) -> None:
        super().__init__(
            f"failed to create JWT config from service account json file {path}: {cause}",
            details={"path": path},
            cause=cause,
        )
        self.path = path


class InvalidDeploymentError(GuardGoogleError):
    """패치 대상 Deployment 가 전제 조건(컨테이너 1개 이상 등)을 만족하지 않을 때."""
