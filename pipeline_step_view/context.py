import os
from typing import Any

import yaml

from pipeline_step_view.client import SnapshotClient
from pipeline_step_view.model import load_json

SNAPSHOT_EXTENSIONS = (".json", ".yaml", ".yml")


def load_documents(path: str) -> list[Any]:
    """
    Read every document in a JSON file or a (possibly multi-document) YAML file.
    """
    if path.endswith((".yaml", ".yml")):
        with open(path, encoding="utf-8") as f:
            return list(yaml.safe_load_all(f))
    return [load_json(path)]


def normalize_objects(doc: Any) -> list[dict[str, Any]]:
    """
    Flatten a loaded document into a list of objects.
    Accepts a single object, a plain list, or a `kind: List` wrapper.
    """
    if not doc:
        return []
    if isinstance(doc, list):
        return [o for o in doc if isinstance(o, dict)]
    if not isinstance(doc, dict):
        return []
    if doc.get("kind") == "List":
        return [o for o in doc.get("items") or [] if isinstance(o, dict)]
    return [doc]


def load_objects(path: str) -> list[dict[str, Any]]:
    return [obj for doc in load_documents(path) for obj in normalize_objects(doc)]


def build_client(args) -> SnapshotClient:
    client = SnapshotClient(namespace=getattr(args, "namespace", ""))

    # ----------------------------
    # Pod
    # ----------------------------
    if getattr(args, "pod", None):
        for obj in load_objects(args.pod):
            client.register(obj)

    # ----------------------------
    # PipelineRun(s)
    # ----------------------------
    for path in getattr(args, "pipelinerun", None) or []:
        for obj in load_objects(path):
            client.register(obj)

    # ----------------------------
    # Snapshot directory
    # ----------------------------
    snapshots = getattr(args, "snapshots", None)
    if snapshots:
        for f in sorted(os.listdir(snapshots)):
            if f.endswith(SNAPSHOT_EXTENSIONS):
                for obj in load_objects(os.path.join(snapshots, f)):
                    client.register(obj)

    return client
