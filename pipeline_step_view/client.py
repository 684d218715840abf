from typing import Any, Protocol

from pipeline_step_view.model import get_object_name, get_object_namespace


class ResourceFetchError(Exception):
    """
    Raised when a resource lookup fails (as opposed to the resource being absent).
    """


class ResourceClient(Protocol):
    def get_resource_by_name(
        self, api_version: str, kind: str, name: str, namespace: str
    ) -> dict[str, Any] | None: ...


class SnapshotClient:
    """
    In-memory resource store built from point-in-time object dumps.
    """

    def __init__(
        self, objects: list[dict[str, Any]] | None = None, namespace: str = ""
    ):
        # objects without metadata.namespace are stored under this namespace
        self.namespace = namespace
        self.objects: dict[tuple[str, str, str, str], dict[str, Any]] = {}
        for obj in objects or []:
            self.register(obj)

    def register(self, obj: dict[str, Any]) -> None:
        if not isinstance(obj, dict):
            return

        name = get_object_name(obj)
        if not name:
            return

        key = (
            obj.get("apiVersion", ""),
            obj.get("kind", ""),
            get_object_namespace(obj) or self.namespace,
            name,
        )
        self.objects[key] = obj

    def get_resource_by_name(
        self, api_version: str, kind: str, name: str, namespace: str
    ) -> dict[str, Any] | None:
        return self.objects.get((api_version, kind, namespace, name))

    def __len__(self) -> int:
        return len(self.objects)
