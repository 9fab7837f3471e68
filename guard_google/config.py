"""
config
------

Google 프로바이더 설정(GoogleOptions)의 생애주기를 담당한다.

    생성(from_env) → 플래그 바인딩(add_flags) → 검증(validate) → 활성화(configure)

validate 와 configure 는 서로의 선행 성공을 강제하지 않는다.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Callable, List, Optional, TypeVar

import click
from dotenv import load_dotenv

from .credentials import DelegatedCredential, load_delegated_credential
from .errors import MissingRequiredFieldError
from .logging_utils import get_logger


logger = get_logger(__name__)

ENV_FILES_DEFAULT_ORDER = [".env", ".env.google"]

FLAG_SA_JSON_FILE = "google.sa-json-file"
FLAG_ADMIN_EMAIL = "google.admin-email"
FLAG_CLIENT_ID = "google.client-id"
FLAG_CLIENT_SECRET = "google.client-secret"

ENV_CLIENT_ID = "GOOGLE_CLIENT_ID"
ENV_CLIENT_SECRET = "GOOGLE_CLIENT_SECRET"

F = TypeVar("F", bound=Callable[..., object])


def load_env_files(base_dir: str = ".",
                   files: Optional[List[str]] = None) -> None:
    """
    주어진 디렉토리에서 .env 계열 파일을 순서대로 로드한다.
    후순위 파일이 같은 키를 덮어쓴다.
    """
    order = files or ENV_FILES_DEFAULT_ORDER
    for name in order:
        path = os.path.join(base_dir, name)
        if os.path.exists(path):
            logger.debug("env 파일 로드: %s", path)
            load_dotenv(path, override=True)


@dataclass
class GoogleOptions:
    sa_json_file: str = ""
    admin_email: str = ""
    client_id: str = ""
    client_secret: str = ""

    # configure() 가 성공했을 때만 채워진다.
    credential: Optional[DelegatedCredential] = field(
        default=None, init=False, repr=False, compare=False
    )

    @classmethod
    def from_env(cls) -> "GoogleOptions":
        # https://developers.google.com/identity/protocols/OAuth2InstalledApp
        return cls(
            client_id=os.getenv(ENV_CLIENT_ID, ""),
            client_secret=os.getenv(ENV_CLIENT_SECRET, ""),
        )

    @property
    def is_configured(self) -> bool:
        return self.credential is not None

    def add_flags(self, command: F) -> F:
        """
        click 커맨드/그룹에 google.* 옵션 4개를 등록한다.

        기본값은 현재 필드 값이고, 파싱된 값은 이 객체의 필드에 다시 기록된다.
        """
        specs = [
            (FLAG_SA_JSON_FILE, "sa_json_file", "Path to Google service account json file"),
            (FLAG_ADMIN_EMAIL, "admin_email", "Email of G Suite administrator"),
            (FLAG_CLIENT_ID, "client_id", "OAuth2 application client ID to use"),
            (FLAG_CLIENT_SECRET, "client_secret", "OAuth2 application client secret to use"),
        ]
        decorators = [
            click.option(
                f"--{flag}",
                attr,
                type=str,
                default=getattr(self, attr),
                help=help_text,
                expose_value=False,
                callback=self._bind(attr),
            )
            for flag, attr, help_text in specs
        ]
        # 아직 함수인 경우 쌓인 옵션이 역순으로 등록된다.
        if not isinstance(command, click.Command):
            decorators.reverse()
        for decorator in decorators:
            command = decorator(command)
        return command

    def _bind(self, attr: str) -> Callable[[click.Context, click.Parameter, Optional[str]], Optional[str]]:
        def callback(ctx: click.Context, param: click.Parameter, value: Optional[str]) -> Optional[str]:
            setattr(self, attr, value or "")
            return value

        return callback

    def validate(self) -> List[MissingRequiredFieldError]:
        """
        비어 있는 필수 필드마다 에러를 하나씩 모아 반환한다. (fail-fast 하지 않음)
        """
        errs: List[MissingRequiredFieldError] = []
        if not self.sa_json_file:
            errs.append(MissingRequiredFieldError(FLAG_SA_JSON_FILE))
        if not self.admin_email:
            errs.append(MissingRequiredFieldError(FLAG_ADMIN_EMAIL))
        if not self.client_secret:
            errs.append(MissingRequiredFieldError(FLAG_CLIENT_SECRET, "client secret must be non-empty"))
        if not self.client_id:
            errs.append(MissingRequiredFieldError(FLAG_CLIENT_ID, "client-id must be non-empty"))
        return errs

    def configure(self) -> None:
        """
        서비스 계정 키로 위임 자격증명을 만든다. sa_json_file 이 비어 있으면 아무것도 하지 않는다.

        Raises:
            CredentialFileUnreadableError: 키 파일을 읽을 수 없을 때
            MalformedServiceAccountKeyError: 키 내용이 서비스 계정 형식이 아닐 때
        """
        if not self.sa_json_file:
            logger.debug("google.sa-json-file 이 비어 있어 위임 설정을 건너뜁니다.")
            return

        # admin_email 이 비어 있어도 그대로 subject 로 사용한다. (실패는 사용하는 쪽에서)
        # ref: https://developers.google.com/admin-sdk/directory/v1/guides/delegation
        self.credential = load_delegated_credential(self.sa_json_file, self.admin_email)
        logger.info("Google 위임 자격증명을 설정했습니다: subject=%s", self.admin_email)
