from dataclasses import dataclass

MIN_PATH_SEGMENTS = 3


@dataclass(frozen=True)
class StepPath:
    pipeline_name: str
    pod_name: str
    step_name: str


def parse_step_path(path: str) -> StepPath | None:
    """
    Split a request path into its pipeline, pod and step segments.

    Returns None when the path has fewer than three segments. The pipeline
    name is empty for paths such as "/pod/step".
    """
    if path.endswith("/"):
        path = path[:-1]
    segments = path.split("/")
    if len(segments) < MIN_PATH_SEGMENTS:
        return None
    pipeline_name, pod_name, step_name = segments[-3:]
    return StepPath(pipeline_name, pod_name, step_name)
