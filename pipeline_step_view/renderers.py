from pipeline_step_view.model import EnvVar, VolumeMount
from pipeline_step_view.view import MarkdownText, SummarySection


def env_var_section(env: EnvVar) -> SummarySection:
    value = env.value
    source = env.value_from
    if value == "" and source is not None:
        if source.config_map_key_ref is not None:
            ref = source.config_map_key_ref
            value = f"from ConfigMap {ref.name} {ref.key}"
        # checked second so a Secret reference overwrites a ConfigMap one
        if source.secret_key_ref is not None:
            ref = source.secret_key_ref
            value = f"from Secret {ref.name} {ref.key}"
    return SummarySection(header=env.name, content=MarkdownText(value))


def volume_mount_section(mount: VolumeMount) -> SummarySection:
    # subPath is appended as-is, without a separator
    mount_path = mount.mount_path
    if mount.sub_path:
        mount_path += mount.sub_path
    return SummarySection(header=mount.name, content=MarkdownText(mount_path))


def sort_sections(sections: list[SummarySection]) -> list[SummarySection]:
    return sorted(sections, key=lambda s: s.header)
