import json
from dataclasses import dataclass, field
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

POD_API_VERSION = "v1"
PIPELINE_RUN_API_VERSION = "tekton.dev/v1beta1"
PIPELINE_RUN_LABEL = "tekton.dev/pipelineRun"


class ConversionError(ValueError):
    """
    Raised when a raw Kubernetes object cannot be converted to a snapshot.
    """


# ----------------------------
# Parsing utilities
# ----------------------------


def load_json(path: str) -> dict[str, Any]:
    with open(path, encoding="utf-8") as f:
        return json.load(f)


def get_metadata(obj: dict[str, Any]) -> dict[str, Any]:
    metadata = obj.get("metadata")
    return metadata if isinstance(metadata, dict) else {}


def get_object_name(obj: dict[str, Any]) -> str:
    return get_metadata(obj).get("name") or ""


def get_object_namespace(obj: dict[str, Any]) -> str:
    return get_metadata(obj).get("namespace") or ""


# ----------------------------
# Snapshot types
# ----------------------------


class Snapshot(BaseModel):
    """
    Base for read-only views of Kubernetes objects.

    Fields use the camelCase API names as aliases; explicit nulls fall back to
    the field default.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    @model_validator(mode="before")
    @classmethod
    def drop_nulls(cls, data: Any) -> Any:
        if isinstance(data, dict):
            return {k: v for k, v in data.items() if v is not None}
        return data


class KeyRef(Snapshot):
    name: str = ""
    key: str = ""


class EnvVarSource(Snapshot):
    config_map_key_ref: KeyRef | None = Field(None, alias="configMapKeyRef")
    secret_key_ref: KeyRef | None = Field(None, alias="secretKeyRef")


class EnvVar(Snapshot):
    name: str = ""
    value: str = ""
    value_from: EnvVarSource | None = Field(None, alias="valueFrom")


class VolumeMount(Snapshot):
    name: str = ""
    mount_path: str = Field("", alias="mountPath")
    sub_path: str = Field("", alias="subPath")


class ContainerSpec(Snapshot):
    name: str = ""
    image: str = ""
    working_dir: str = Field("", alias="workingDir")
    command: list[str] = Field(default_factory=list)
    args: list[str] = Field(default_factory=list)
    env: list[EnvVar] = Field(default_factory=list)
    volume_mounts: list[VolumeMount] = Field(default_factory=list, alias="volumeMounts")


class ObjectMeta(Snapshot):
    name: str = ""
    namespace: str = ""
    labels: dict[str, str] = Field(default_factory=dict)


class PodSpec(Snapshot):
    containers: list[ContainerSpec] = Field(default_factory=list)


class PodSnapshot(Snapshot):
    """
    Point-in-time view of a Pod, reduced to what the step view needs.
    """

    metadata: ObjectMeta = Field(default_factory=ObjectMeta)
    spec: PodSpec = Field(default_factory=PodSpec)

    @property
    def name(self) -> str:
        return self.metadata.name

    @property
    def namespace(self) -> str:
        return self.metadata.namespace

    @property
    def labels(self) -> dict[str, str]:
        return self.metadata.labels

    @property
    def containers(self) -> list[ContainerSpec]:
        return self.spec.containers

    def __str__(self) -> str:
        """The pod name, as shown in user-facing messages."""
        return self.name


class PlanStep(Snapshot):
    name: str = ""
    script: str = ""


class TaskSpec(Snapshot):
    steps: list[PlanStep] = Field(default_factory=list)


class PipelineTask(Snapshot):
    name: str = ""
    task_spec: TaskSpec | None = Field(None, alias="taskSpec")


class PipelineSpec(Snapshot):
    tasks: list[PipelineTask] = Field(default_factory=list)


class PipelineRunSpec(Snapshot):
    pipeline_spec: PipelineSpec | None = Field(None, alias="pipelineSpec")


class ExecutionPlanSnapshot(Snapshot):
    """
    PipelineRun whose embedded pipelineSpec lists the tasks in declaration
    order. A PipelineRun that references a Pipeline by name has no tasks.
    """

    metadata: ObjectMeta = Field(default_factory=ObjectMeta)
    spec: PipelineRunSpec = Field(default_factory=PipelineRunSpec)

    @property
    def name(self) -> str:
        return self.metadata.name

    @property
    def tasks(self) -> list[PipelineTask]:
        if self.spec.pipeline_spec is None:
            return []
        return self.spec.pipeline_spec.tasks


@dataclass(frozen=True)
class ResolvedStep:
    index: int
    name: str
    image: str
    working_dir: str
    effective_command: str
    volume_mounts: list[VolumeMount] = field(default_factory=list)
    env_vars: list[EnvVar] = field(default_factory=list)


# ----------------------------
# Structural conversion
# ----------------------------

_MODELS: dict[str, type[Snapshot]] = {
    "Pod": PodSnapshot,
    "PipelineRun": ExecutionPlanSnapshot,
}


def to_structured(obj: Any, kind: str):
    """
    Convert an untyped resource into its snapshot type.

    Raises ConversionError when the object does not have the expected shape.
    """
    model = _MODELS.get(kind)
    if model is None:
        raise ConversionError(f"no structured type for kind {kind!r}")
    try:
        return model.model_validate(obj)
    except ValidationError as e:
        raise ConversionError(f"invalid {kind}: {e}") from e
