from pipeline_step_view.model import (
    ContainerSpec,
    ExecutionPlanSnapshot,
    PodSnapshot,
    ResolvedStep,
)

STEP_CONTAINER_PREFIX = "step-"


def find_container(
    pod: PodSnapshot, step_name: str
) -> tuple[int, ContainerSpec] | None:
    for index, container in enumerate(pod.containers):
        if container.name == step_name:
            return index, container
    return None


def step_matches_container(step_name: str, container_name: str) -> bool:
    """
    Tekton names the container of step "X" either "X" or "step-X".
    """
    return (
        step_name == container_name
        or STEP_CONTAINER_PREFIX + step_name == container_name
    )


def find_step_script(plan: ExecutionPlanSnapshot | None, container_name: str) -> str:
    """
    Find the script the execution plan defines for a container.

    Within a task the first step matching the container name is the only one
    considered, even if its script is empty. Across tasks the last task whose
    matching step has a non-empty script wins.
    """
    if plan is None:
        return ""

    script = ""
    for task in plan.tasks:
        if task.task_spec is None:
            continue
        for step in task.task_spec.steps:
            if step_matches_container(step.name, container_name):
                if step.script:
                    script = step.script
                break
    return script


def to_command_line(container: ContainerSpec) -> str:
    return " ".join(container.command + container.args)


def resolve_step(
    pod: PodSnapshot,
    step_name: str,
    plan: ExecutionPlanSnapshot | None = None,
) -> ResolvedStep | None:
    """
    Resolve the effective configuration of a step, or None if the pod has no
    container with that name.
    """
    found = find_container(pod, step_name)
    if found is None:
        return None
    index, container = found

    command = find_step_script(plan, container.name) or to_command_line(container)

    return ResolvedStep(
        index=index,
        name=container.name,
        image=container.image,
        working_dir=container.working_dir,
        effective_command=command,
        volume_mounts=list(container.volume_mounts),
        env_vars=list(container.env),
    )
