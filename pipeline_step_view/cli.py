import argparse
import logging
import sys

from pipeline_step_view.assembler import ViewAssembler
from pipeline_step_view.client import ResourceFetchError
from pipeline_step_view.context import build_client
from pipeline_step_view.output import output_view

DEFAULT_NAMESPACE = "jx"


def main(argv=None):
    parser = argparse.ArgumentParser(
        description="Show the effective configuration of a pipeline step container"
    )

    parser.add_argument(
        "--path", required=True, help="Request path ending in <pipeline>/<pod>/<step>"
    )
    parser.add_argument("--namespace", default=DEFAULT_NAMESPACE)

    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument("--pod", help="Path to Pod JSON/YAML")
    source.add_argument("--snapshots", help="Directory of JSON/YAML object dumps")
    parser.add_argument(
        "--pipelinerun",
        action="append",
        default=[],
        help="Path to PipelineRun JSON/YAML (repeatable)",
    )

    parser.add_argument(
        "--format",
        choices=["text", "json", "yaml"],
        default="text",
        help="Output format (text, json, yaml)",
    )
    parser.add_argument("--verbose", action="store_true")

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    client = build_client(args)
    logging.getLogger(__name__).debug("loaded %d objects", len(client))

    assembler = ViewAssembler(client, args.namespace)
    try:
        view = assembler.build(args.path)
    except ResourceFetchError as e:
        print(f"[ERROR] {e}", file=sys.stderr)
        return 1

    output_view(view, args.format)
    return 0


if __name__ == "__main__":
    sys.exit(main())
