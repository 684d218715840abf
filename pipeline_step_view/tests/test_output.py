import json
import os

import yaml

from pipeline_step_view.cli import main
from pipeline_step_view.output import output_view, render_text
from pipeline_step_view.view import (
    WIDTH_FULL,
    Card,
    FlexItem,
    FlexLayout,
    MarkdownText,
    Summary,
    SummarySection,
    Text,
)

FIXTURES = os.path.join(os.path.dirname(__file__), "fixtures")
POD_PATH = os.path.join(FIXTURES, "build_pod.json")
PR_PATH = os.path.join(FIXTURES, "build_pipelinerun.yaml")
STEP_PATH = "PR-12/myorg-myrepo-pr-12-build-abcde-pod/step-build"


def test_render_text_summary_and_card():
    layout = FlexLayout()
    layout.add_section(
        FlexItem(WIDTH_FULL, MarkdownText("header")),
        FlexItem(
            WIDTH_FULL,
            Summary(
                "Container",
                [
                    SummarySection("Name", Text("step-build")),
                    SummarySection("Command", MarkdownText("```\nmake\n```")),
                ],
            ),
        ),
        FlexItem(WIDTH_FULL, Card(title="Notes", body=Text("nothing here"))),
    )

    assert render_text(layout) == [
        "header",
        "",
        "Container:",
        "  Name: step-build",
        "  Command:",
        "    ```",
        "    make",
        "    ```",
        "",
        "[Notes]",
        "nothing here",
    ]


def test_output_json_and_yaml(capsys):
    view = Summary("Volume Mounts", [SummarySection("data", MarkdownText("/varx"))])

    output_view(view, "json")
    assert json.loads(capsys.readouterr().out) == view.to_dict()

    output_view(view, "yaml")
    assert yaml.safe_load(capsys.readouterr().out) == view.to_dict()


class TestCli:
    def test_text_output(self, capsys):
        code = main(["--path", STEP_PATH, "--pod", POD_PATH, "--pipelinerun", PR_PATH])
        out = capsys.readouterr().out

        assert code == 0
        assert "Environment Variables:" in out
        assert "make build" in out
        assert "/tekton/scripts/script-1-abcde" not in out

    def test_json_output(self, capsys):
        code = main(["--path", STEP_PATH, "--pod", POD_PATH, "--format", "json"])
        data = json.loads(capsys.readouterr().out)

        assert code == 0
        assert data["kind"] == "flexlayout"
        assert [i["width"] for i in data["sections"][0]] == [24, 12, 12, 24]

    def test_soft_failure_exits_zero(self, capsys):
        code = main(["--path", "a/b", "--pod", POD_PATH])
        assert code == 0
        assert capsys.readouterr().out.strip() == "not enough values in the path"

    def test_other_namespace_reports_missing_pod(self, capsys):
        code = main(["--path", STEP_PATH, "--pod", POD_PATH, "--namespace", "prod"])
        assert code == 0
        assert "not found in namespace prod" in capsys.readouterr().out

    def test_multi_document_snapshot_directory(self, tmp_path, capsys):
        (tmp_path / "dump.yaml").write_text(
            "kind: Pod\n"
            "apiVersion: v1\n"
            "metadata: {name: build-pod, labels: {tekton.dev/pipelineRun: run}}\n"
            "spec: {containers: [{name: step-build, command: [make]}]}\n"
            "---\n"
            "kind: PipelineRun\n"
            "apiVersion: tekton.dev/v1beta1\n"
            "metadata: {name: run}\n"
            "spec:\n"
            "  pipelineSpec:\n"
            "    tasks: [{taskSpec: {steps: [{name: build, script: echo built}]}}]\n",
            encoding="utf-8",
        )

        code = main(
            ["--path", "p/build-pod/step-build", "--snapshots", str(tmp_path)]
        )

        assert code == 0
        assert "echo built" in capsys.readouterr().out
