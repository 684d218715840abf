import json

import yaml

from pipeline_step_view.view import (
    Card,
    FlexLayout,
    MarkdownText,
    Summary,
    Text,
    View,
)

INDENT = "  "

# ----------------------------
# Text backend
# ----------------------------


def _indent(text: str, depth: int) -> list[str]:
    return [f"{INDENT * depth}{line}" for line in text.splitlines() or [""]]


def render_text(view: View | None, depth: int = 0) -> list[str]:
    """
    Translate a view tree into indented plain-text lines.
    """
    if view is None:
        return []

    if isinstance(view, (Text, MarkdownText)):
        return _indent(view.value, depth)

    if isinstance(view, Card):
        lines = _indent(f"[{view.title}]", depth) if view.title else []
        return lines + render_text(view.body, depth)

    if isinstance(view, Summary):
        lines = _indent(f"{view.title}:", depth)
        for section in view.sections:
            body = render_text(section.content, depth + 2)
            if len(body) == 1:
                lines += _indent(f"{section.header}: {body[0].strip()}", depth + 1)
            else:
                lines += _indent(f"{section.header}:", depth + 1) + body
        return lines

    if isinstance(view, FlexLayout):
        lines = _indent(view.title, depth) if view.title else []
        for i, item in enumerate(view.items()):
            if i:
                lines.append("")
            lines += render_text(item.view, depth)
        return lines

    raise ValueError(f"Unsupported view kind: {view.kind}")


# ----------------------------
# Output formatting
# ----------------------------


def output_view(view: View, fmt: str = "text") -> None:
    if fmt == "json":
        print(json.dumps(view.to_dict(), indent=2))
        return

    if fmt == "yaml":
        print(yaml.safe_dump(view.to_dict(), sort_keys=False))
        return

    print("\n".join(render_text(view)))
