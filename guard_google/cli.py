import os
import sys
from typing import Optional

import click
from click.core import ParameterSource

from .config import ENV_CLIENT_ID, ENV_CLIENT_SECRET, GoogleOptions, load_env_files
from .errors import GuardGoogleError
from .installer import render_installer
from .logging_utils import setup_logging, get_logger


logger = get_logger(__name__)


def _reseed_from_env(ctx: click.Context, opts: GoogleOptions) -> None:
    """
    -C 디렉토리의 .env 를 읽은 뒤, 플래그로 지정되지 않은 클라이언트 정보를 다시 채운다.
    """
    for attr, env_name in (("client_id", ENV_CLIENT_ID), ("client_secret", ENV_CLIENT_SECRET)):
        if ctx.get_parameter_source(attr) not in (None, ParameterSource.DEFAULT):
            continue
        value = os.getenv(env_name)
        if value:
            setattr(opts, attr, value)


def build_cli(options: Optional[GoogleOptions] = None) -> click.Group:
    """
    google.* 플래그가 options 에 바인딩된 CLI 그룹을 만든다.
    플래그 기본값은 options 의 현재 값(환경변수 등)이다.
    """
    opts = options if options is not None else GoogleOptions.from_env()

    @click.group()
    @click.option(
        "-C",
        "--chdir",
        "chdir",
        type=click.Path(file_okay=False, dir_okay=True, exists=True),
        default=".",
        help=".env 파일을 읽을 작업 디렉토리 (기본: 현재 디렉토리)",
    )
    @click.option(
        "-v",
        "--verbose",
        count=True,
        help="로그 레벨을 DEBUG로 올립니다. (-vv 는 외부 라이브러리 로그까지)",
    )
    @click.pass_context
    def main(ctx: click.Context, chdir: str, verbose: int) -> None:
        """guard webhook 용 Google 인증 프로바이더 설정 CLI"""
        setup_logging(verbose)
        load_env_files(chdir)
        _reseed_from_env(ctx, opts)
        ctx.ensure_object(dict)
        ctx.obj["chdir"] = chdir
        ctx.obj["options"] = opts

    main = opts.add_flags(main)

    @main.command()
    @click.pass_context
    def check(ctx: click.Context) -> None:
        """
        필수 설정을 검증하고, 서비스 계정 키로 위임 자격증명을 만들어 본다.
        """
        options: GoogleOptions = ctx.obj["options"]

        errs = options.validate()
        for err in errs:
            click.echo(f"[ERROR] {err}", err=True)
        if errs:
            sys.exit(1)

        try:
            options.configure()
        except GuardGoogleError as e:
            click.echo(f"[ERROR] 자격증명 설정 실패: {e}", err=True)
            sys.exit(1)

        click.echo(
            f"OK: {options.credential.service_account_email} -> {options.credential.subject}"
        )

    @main.command()
    @click.option("--namespace", "namespace", default="kube-system", show_default=True,
                  help="webhook 을 배포할 네임스페이스")
    @click.option("--image", "image", required=True, help="guard 컨테이너 이미지")
    @click.pass_context
    def installer(ctx: click.Context, namespace: str, image: str) -> None:
        """
        Google 서비스 계정 Secret 과 패치된 Deployment 를 YAML 로 출력
        """
        options: GoogleOptions = ctx.obj["options"]
        try:
            manifest = render_installer(options, namespace=namespace, image=image)
        except GuardGoogleError as e:
            logger.debug("installer 생성 실패", exc_info=True)
            click.echo(f"[ERROR] installer 생성 실패: {e}", err=True)
            sys.exit(1)

        click.echo(manifest, nl=False)

    return main


def run() -> None:
    """콘솔 스크립트 진입점"""
    build_cli()()
