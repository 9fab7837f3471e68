"""
installer
---------

guard webhook Deployment 를 만들고 Google 패치를 적용해 YAML 로 출력한다.
"""

from __future__ import annotations

from typing import Dict, Optional

import yaml
from kubernetes import client

from . import deployment as google_deployment
from .config import GoogleOptions
from .logging_utils import get_logger


logger = get_logger(__name__)

DEFAULT_NAME = "guard"


def build_deployment(
    namespace: str,
    image: str,
    name: str = DEFAULT_NAME,
    labels: Optional[Dict[str, str]] = None,
) -> client.V1Deployment:
    """
    컨테이너 하나짜리 최소 webhook Deployment.
    """
    labels = labels or {"app": name}
    return client.V1Deployment(
        api_version="apps/v1",
        kind="Deployment",
        metadata=client.V1ObjectMeta(name=name, namespace=namespace, labels=labels),
        spec=client.V1DeploymentSpec(
            replicas=1,
            selector=client.V1LabelSelector(match_labels=labels),
            template=client.V1PodTemplateSpec(
                metadata=client.V1ObjectMeta(labels=labels),
                spec=client.V1PodSpec(
                    containers=[
                        client.V1Container(
                            name=name,
                            image=image,
                            args=["run"],
                        ),
                    ],
                ),
            ),
        ),
    )


def render_installer(options: GoogleOptions, namespace: str, image: str) -> str:
    """
    추가 오브젝트(Secret) → Deployment 순서의 multi-document YAML 을 만든다.
    """
    base = build_deployment(namespace=namespace, image=image)
    extra_objs, patched = google_deployment.apply(options, base)
    logger.debug("추가 오브젝트 %d 개", len(extra_objs))

    docs = google_deployment.to_manifests(extra_objs + [patched])
    return yaml.safe_dump_all(docs, default_flow_style=False, sort_keys=False)
