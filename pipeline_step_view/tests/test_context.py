import argparse
import os

from pipeline_step_view.client import SnapshotClient
from pipeline_step_view.context import (
    build_client,
    load_documents,
    load_objects,
    normalize_objects,
)
from pipeline_step_view.model import load_json

FIXTURES = os.path.join(os.path.dirname(__file__), "fixtures")


def make_args(**kwargs):
    defaults = {"namespace": "jx", "pod": None, "pipelinerun": [], "snapshots": None}
    defaults.update(kwargs)
    return argparse.Namespace(**defaults)


def test_yaml_and_json_documents_load_the_same_object():
    [from_json] = load_documents(os.path.join(FIXTURES, "build_pipelinerun.json"))
    [from_yaml] = load_documents(os.path.join(FIXTURES, "build_pipelinerun.yaml"))

    assert from_yaml["metadata"] == from_json["metadata"]
    assert from_yaml["kind"] == "PipelineRun"


def test_normalize_objects_unwraps_lists():
    pod = {"kind": "Pod", "metadata": {"name": "a"}}
    assert normalize_objects(None) == []
    assert normalize_objects(pod) == [pod]
    assert normalize_objects([pod, "junk"]) == [pod]
    assert normalize_objects({"kind": "List", "items": [pod]}) == [pod]
    assert normalize_objects({"kind": "List", "items": [pod, "junk", None]}) == [pod]
    assert normalize_objects({"kind": "List", "items": None}) == []
    assert normalize_objects("junk") == []


def test_build_client_from_files():
    args = make_args(
        pod=os.path.join(FIXTURES, "build_pod.json"),
        pipelinerun=[os.path.join(FIXTURES, "build_pipelinerun.json")],
    )
    client = build_client(args)

    assert len(client) == 2
    pod = client.get_resource_by_name(
        "v1", "Pod", "myorg-myrepo-pr-12-build-abcde-pod", "jx"
    )
    assert pod == load_json(os.path.join(FIXTURES, "build_pod.json"))


def test_build_client_from_snapshot_directory():
    client = build_client(make_args(snapshots=FIXTURES))

    assert client.get_resource_by_name(
        "tekton.dev/v1beta1", "PipelineRun", "myorg-myrepo-pr-12-abcde", "jx"
    )
    assert client.get_resource_by_name(
        "v1", "Pod", "myorg-myrepo-pr-12-build-abcde-pod", "jx"
    )


class TestSnapshotClient:
    def test_objects_without_namespace_use_client_namespace(self):
        client = SnapshotClient(
            [{"apiVersion": "v1", "kind": "Pod", "metadata": {"name": "p"}}],
            namespace="jx",
        )
        assert client.get_resource_by_name("v1", "Pod", "p", "jx") is not None
        assert client.get_resource_by_name("v1", "Pod", "p", "default") is None

    def test_objects_without_name_are_ignored(self):
        client = SnapshotClient([{"kind": "Pod", "metadata": {}}, {}])
        assert len(client) == 0

    def test_lookup_is_by_kind_and_api_version(self):
        client = SnapshotClient(
            [{"apiVersion": "v1", "kind": "Pod", "metadata": {"name": "p"}}]
        )
        assert client.get_resource_by_name("v1", "PipelineRun", "p", "") is None
        assert client.get_resource_by_name("v2", "Pod", "p", "") is None

    def test_objects_with_null_or_invalid_metadata_are_ignored(self):
        client = SnapshotClient(
            [
                {"apiVersion": "v1", "kind": "Pod", "metadata": None},
                {"apiVersion": "v1", "kind": "Pod", "metadata": "junk"},
                "junk",
            ]
        )
        assert len(client) == 0


MULTI_DOCUMENT_YAML = """\
apiVersion: v1
kind: Pod
metadata:
  name: build-pod
  namespace: jx
  labels:
    tekton.dev/pipelineRun: build-run
spec:
  containers:
    - name: step-build
      image: golang:1.15
---
apiVersion: tekton.dev/v1beta1
kind: PipelineRun
metadata:
  name: build-run
  namespace: jx
spec:
  pipelineSpec:
    tasks:
      - name: build
        taskSpec:
          steps:
            - name: build
              script: make build
---
"""


def test_multi_document_yaml_loads_every_object(tmp_path):
    dump = tmp_path / "dump.yaml"
    dump.write_text(MULTI_DOCUMENT_YAML, encoding="utf-8")

    objects = load_objects(str(dump))
    assert [o["kind"] for o in objects] == ["Pod", "PipelineRun"]

    client = build_client(make_args(snapshots=str(tmp_path)))
    assert client.get_resource_by_name("v1", "Pod", "build-pod", "jx")
    assert client.get_resource_by_name(
        "tekton.dev/v1beta1", "PipelineRun", "build-run", "jx"
    )
