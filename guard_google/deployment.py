"""
deployment
----------

webhook Deployment 에 Google 서비스 계정 키를 연결하는 패치를 만든다.

- 키를 담은 Secret(guard-google-auth) 생성
- 첫 번째 컨테이너에 Volume/VolumeMount, 클라이언트 시크릿 env, google.* 인자 추가

입력 Deployment 는 변경하지 않고, 패치된 복사본을 돌려준다.
"""

from __future__ import annotations

import base64
import copy
from typing import Any, Dict, List, Tuple

from kubernetes import client

from .config import FLAG_ADMIN_EMAIL, FLAG_CLIENT_ID, FLAG_SA_JSON_FILE, GoogleOptions
from .credentials import read_service_account_file
from .errors import InvalidDeploymentError
from .logging_utils import get_logger


logger = get_logger(__name__)

AUTH_SECRET_NAME = "guard-google-auth"
SA_JSON_KEY = "sa.json"
MOUNT_PATH = "/etc/guard/auth/google"
MOUNTED_SA_JSON_FILE = f"{MOUNT_PATH}/{SA_JSON_KEY}"
SECRET_DEFAULT_MODE = 0o555

# 미리 만들어져 있어야 하는 OAuth2 클라이언트 시크릿 (여기서 생성하지 않음)
OIDC_SECRET_NAME = "google-oidc-credentials"
OIDC_SECRET_KEY = "client-secret"
CLIENT_SECRET_ENV = "GOOGLE_CLIENT_SECRET"


def build_auth_secret(deployment: client.V1Deployment, sa: bytes) -> client.V1Secret:
    meta = deployment.metadata or client.V1ObjectMeta()
    return client.V1Secret(
        api_version="v1",
        kind="Secret",
        metadata=client.V1ObjectMeta(
            name=AUTH_SECRET_NAME,
            namespace=meta.namespace,
            labels=dict(meta.labels) if meta.labels else None,
        ),
        # Secret.data 는 base64 인코딩된 문자열
        data={SA_JSON_KEY: base64.b64encode(sa).decode("ascii")},
    )


def build_args(options: GoogleOptions) -> List[str]:
    """
    비어 있지 않은 필드에 대해서만, 고정된 순서로 인자를 만든다.
    sa-json-file 은 원래 경로가 아니라 컨테이너 안의 마운트 경로를 가리킨다.
    """
    args: List[str] = []
    if options.client_id:
        args.append(f"--{FLAG_CLIENT_ID}={options.client_id}")
    if options.sa_json_file:
        args.append(f"--{FLAG_SA_JSON_FILE}={MOUNTED_SA_JSON_FILE}")
    if options.admin_email:
        args.append(f"--{FLAG_ADMIN_EMAIL}={options.admin_email}")
    return args


def _first_container(deployment: client.V1Deployment) -> client.V1Container:
    spec = deployment.spec
    pod_spec = spec.template.spec if spec and spec.template else None
    if pod_spec is None or not pod_spec.containers:
        name = deployment.metadata.name if deployment.metadata else None
        raise InvalidDeploymentError(
            f"deployment {name or '(unnamed)'} must have at least one container",
            details={"deployment": name},
        )
    return pod_spec.containers[0]


def apply(
    options: GoogleOptions, deployment: client.V1Deployment
) -> Tuple[List[Any], client.V1Deployment]:
    """
    Deployment 패치를 수행한다.

    Returns:
        extra_objs: 함께 적용해야 할 추가 오브젝트 (Secret 1개)
        patched: 패치된 Deployment 복사본

    Raises:
        CredentialFileUnreadableError: 키 파일을 읽을 수 없을 때
        InvalidDeploymentError: 컨테이너가 하나도 없을 때
    """
    sa = read_service_account_file(options.sa_json_file)

    patched = copy.deepcopy(deployment)
    container = _first_container(patched)
    pod_spec = patched.spec.template.spec

    extra_objs: List[Any] = []
    auth_secret = build_auth_secret(patched, sa)
    extra_objs.append(auth_secret)

    # Secret 을 Deployment 에 마운트
    secret_name = auth_secret.metadata.name
    container.volume_mounts = list(container.volume_mounts or []) + [
        client.V1VolumeMount(name=secret_name, mount_path=MOUNT_PATH),
    ]
    pod_spec.volumes = list(pod_spec.volumes or []) + [
        client.V1Volume(
            name=secret_name,
            secret=client.V1SecretVolumeSource(
                secret_name=secret_name,
                default_mode=SECRET_DEFAULT_MODE,
            ),
        ),
    ]

    container.env = list(container.env or []) + [
        client.V1EnvVar(
            name=CLIENT_SECRET_ENV,
            value_from=client.V1EnvVarSource(
                secret_key_ref=client.V1SecretKeySelector(
                    name=OIDC_SECRET_NAME,
                    key=OIDC_SECRET_KEY,
                ),
            ),
        ),
    ]

    container.args = list(container.args or []) + build_args(options)

    logger.info(
        "Deployment 패치 완료: %s/%s (secret=%s)",
        patched.metadata.namespace if patched.metadata else None,
        patched.metadata.name if patched.metadata else None,
        secret_name,
    )
    return extra_objs, patched


def to_manifests(objs: List[Any]) -> List[Dict[str, Any]]:
    """
    kubernetes 모델 오브젝트를 apply 용 plain dict 로 변환한다.
    """
    api = client.ApiClient()
    return [api.sanitize_for_serialization(obj) for obj in objs]
