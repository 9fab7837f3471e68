"""
guard_google
------------

guard 인증 webhook 의 Google 아이덴티티 프로바이더 어댑터.
서비스 계정 키 / 위임 관리자 이메일 / OAuth2 클라이언트 정보를 검증된 설정으로 만들고,
webhook Deployment 가 해당 자격증명을 사용할 수 있도록 패치한다.
"""

from .config import GoogleOptions, load_env_files
from .credentials import ADMIN_DIRECTORY_GROUP_READONLY_SCOPE, DelegatedCredential
from .deployment import apply
from .errors import (
    CredentialFileUnreadableError,
    GuardGoogleError,
    InvalidDeploymentError,
    MalformedServiceAccountKeyError,
    MissingRequiredFieldError,
)

__all__ = [
    "GoogleOptions",
    "load_env_files",
    "DelegatedCredential",
    "ADMIN_DIRECTORY_GROUP_READONLY_SCOPE",
    "apply",
    "GuardGoogleError",
    "MissingRequiredFieldError",
    "CredentialFileUnreadableError",
    "MalformedServiceAccountKeyError",
    "InvalidDeploymentError",
]
