from pathlib import Path

import yaml

from guard_google.config import GoogleOptions
from guard_google.installer import build_deployment, render_installer


def test_build_deployment_has_single_container() -> None:
    dep = build_deployment(namespace="ns", image="appscode/guard:test")

    assert dep.metadata.name == "guard"
    assert dep.metadata.namespace == "ns"
    containers = dep.spec.template.spec.containers
    assert len(containers) == 1
    assert containers[0].image == "appscode/guard:test"
    assert containers[0].args == ["run"]


def test_render_installer_emits_secret_then_deployment(tmp_path: Path) -> None:
    key = tmp_path / "key.json"
    key.write_bytes(b'{"client_id":"x"}')
    opts = GoogleOptions(
        sa_json_file=str(key),
        admin_email="admin@example.com",
        client_id="cid",
        client_secret="csecret",
    )

    docs = list(yaml.safe_load_all(render_installer(opts, namespace="ns", image="guard:1")))

    assert [d["kind"] for d in docs] == ["Secret", "Deployment"]
    assert docs[0]["metadata"]["namespace"] == "ns"
    assert docs[0]["metadata"]["labels"] == {"app": "guard"}
    args = docs[1]["spec"]["template"]["spec"]["containers"][0]["args"]
    assert args[-3:] == [
        "--google.client-id=cid",
        "--google.sa-json-file=/etc/guard/auth/google/sa.json",
        "--google.admin-email=admin@example.com",
    ]
    # 클라이언트 시크릿 값 자체는 매니페스트에 들어가지 않는다.
    assert "csecret" not in yaml.safe_dump_all(docs)
