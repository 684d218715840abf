import logging

from pipeline_step_view.client import ResourceClient, ResourceFetchError
from pipeline_step_view.links import (
    ROOT_BREADCRUMB,
    get_pipeline_containers_link,
    get_pipeline_link,
    get_pipelines_link,
    get_pod_link,
    to_breadcrumb_markdown,
    to_markdown_link,
)
from pipeline_step_view.model import (
    PIPELINE_RUN_API_VERSION,
    PIPELINE_RUN_LABEL,
    POD_API_VERSION,
    ConversionError,
    ExecutionPlanSnapshot,
    PodSnapshot,
    ResolvedStep,
    to_structured,
)
from pipeline_step_view.paths import parse_step_path
from pipeline_step_view.renderers import (
    env_var_section,
    sort_sections,
    volume_mount_section,
)
from pipeline_step_view.resolver import resolve_step
from pipeline_step_view.view import (
    WIDTH_FULL,
    WIDTH_HALF,
    Card,
    FlexItem,
    FlexLayout,
    MarkdownText,
    Summary,
    SummarySection,
    Text,
    View,
)

INVALID_PATH_MESSAGE = "not enough values in the path"


def build_breadcrumbs(
    pipeline_name: str, pod_name: str, step_name: str, ns: str
) -> str:
    crumbs = [
        ROOT_BREADCRUMB,
        to_markdown_link("Pipelines", get_pipelines_link()),
    ]
    if pipeline_name:
        crumbs.append(to_markdown_link("Pipeline", get_pipeline_link(pipeline_name)))
    crumbs.append(to_markdown_link("Pod", get_pod_link(ns, pod_name)))
    if pipeline_name:
        crumbs.append(
            to_markdown_link(
                "Steps", get_pipeline_containers_link(ns, pipeline_name, pod_name)
            )
        )
    crumbs.append(step_name)
    return to_breadcrumb_markdown(*crumbs)


def to_step_view(header: View, step: ResolvedStep) -> FlexLayout:
    container_summary = Summary(
        "Container",
        [
            SummarySection("Name", Text(step.name)),
            SummarySection("Image", MarkdownText(step.image)),
            SummarySection("Working Dir", Text(step.working_dir)),
            SummarySection(
                "Command", MarkdownText("```\n" + step.effective_command + "\n```")
            ),
        ],
    )
    volumes_summary = Summary(
        "Volume Mounts",
        sort_sections([volume_mount_section(v) for v in step.volume_mounts]),
    )
    env_summary = Summary(
        "Environment Variables",
        sort_sections([env_var_section(e) for e in step.env_vars]),
    )

    layout = FlexLayout()
    layout.add_section(
        FlexItem(WIDTH_FULL, header),
        FlexItem(WIDTH_HALF, container_summary),
        FlexItem(WIDTH_HALF, volumes_summary),
        FlexItem(WIDTH_FULL, env_summary),
    )
    return layout


class ViewAssembler:
    """
    Builds the view of a single pipeline step container.

    Request paths end in ``<pipeline>/<pod>/<step>``. The Pod is looked up in
    ``namespace``; its ``tekton.dev/pipelineRun`` label, when present, is used
    to find the PipelineRun whose step scripts override the raw container
    command.
    """

    def __init__(
        self,
        client: ResourceClient,
        namespace: str,
        logger: logging.Logger | None = None,
    ):
        self.client = client
        self.namespace = namespace
        self.logger = logger or logging.getLogger(__name__)

    def build(self, path: str) -> View:
        step_path = parse_step_path(path)
        if step_path is None:
            return Text(INVALID_PATH_MESSAGE)

        name = step_path.pod_name
        step = step_path.step_name
        ns = self.namespace

        self.logger.debug("querying for Pod %s in namespace %s", name, ns)

        # fetch errors are not handled here
        u = self.client.get_resource_by_name(POD_API_VERSION, "Pod", name, ns)
        if u is None:
            return Text(f"Error: Pod {name} not found in namespace {ns}")

        try:
            pod: PodSnapshot = to_structured(u, "Pod")
        except ConversionError as e:
            self.logger.info("failed to convert Pod %s: %s", name, e)
            return Text(f"Error: failed to load Pod {name} not found in namespace {ns}")

        header = MarkdownText(
            build_breadcrumbs(step_path.pipeline_name, name, step, ns)
        )

        plan = self.fetch_execution_plan(pod)

        resolved = resolve_step(pod, step, plan)
        if resolved is None:
            notes_card = Card(
                body=MarkdownText(f"Pod {pod} does not have a container called {step}")
            )
            layout = FlexLayout()
            layout.add_section(
                FlexItem(WIDTH_FULL, header),
                FlexItem(WIDTH_FULL, notes_card),
            )
            return layout

        return to_step_view(header, resolved)

    def fetch_execution_plan(self, pod: PodSnapshot) -> ExecutionPlanSnapshot | None:
        """
        Look up the PipelineRun that created the pod. Returns None when the pod
        has no PipelineRun label or the PipelineRun cannot be loaded.
        """
        pr_name = pod.labels.get(PIPELINE_RUN_LABEL, "")
        if not pr_name:
            return None

        try:
            u = self.client.get_resource_by_name(
                PIPELINE_RUN_API_VERSION, "PipelineRun", pr_name, self.namespace
            )
        except ResourceFetchError as e:
            self.logger.debug("ignoring PipelineRun %s: %s", pr_name, e)
            return None
        if u is None:
            self.logger.debug(
                "PipelineRun %s not found in namespace %s", pr_name, self.namespace
            )
            return None

        try:
            return to_structured(u, "PipelineRun")
        except ConversionError as e:
            self.logger.debug("ignoring PipelineRun %s: %s", pr_name, e)
            return None
