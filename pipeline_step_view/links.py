from urllib.parse import quote

# ----------------------------
# Dashboard link layout
# ----------------------------

PLUGIN_PATH = "/jx"
PIPELINES_PATH = f"{PLUGIN_PATH}/pipelines"
BREADCRUMB_SEPARATOR = " / "


def to_markdown_link(text: str, url: str) -> str:
    return f"[{text}]({url})"


ROOT_BREADCRUMB = to_markdown_link("Jenkins X", PLUGIN_PATH)


def to_breadcrumb_markdown(*crumbs: str) -> str:
    return BREADCRUMB_SEPARATOR.join(crumbs)


def get_pipelines_link() -> str:
    return PIPELINES_PATH


def get_pipeline_link(pipeline_name: str) -> str:
    return f"{PIPELINES_PATH}/{quote(pipeline_name, safe='')}"


def get_pipeline_containers_link(ns: str, pipeline_name: str, pod_name: str) -> str:
    return (
        f"{PIPELINES_PATH}/{quote(pipeline_name, safe='')}/"
        f"{quote(pod_name, safe='')}?namespace={quote(ns, safe='')}"
    )


def get_pod_link(ns: str, pod_name: str) -> str:
    return (
        f"/overview/namespace/{quote(ns, safe='')}"
        f"/workloads/pods/{quote(pod_name, safe='')}"
    )
