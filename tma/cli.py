"""Command-line entry point for tma.

Usage::

    tma init MyApp
    tma create Profile --feature
    tma -C path/to/MyApp create Network --core
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from pydantic import ValidationError

from tma import __version__
from tma.config import Config
from tma.models import ModuleKind, ModuleSpec, ScaffoldError
from tma.scaffolder import ModuleGenerator, ProjectGenerator
from tma.utils import print_error, print_success, print_summary_table


def build_parser() -> argparse.ArgumentParser:
    """Create the ``tma`` argument parser with its subcommands."""
    parser = argparse.ArgumentParser(
        prog="tma",
        description="A Tuist TMA project helper.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  tma init MyApp\n"
            "  tma create Profile --feature\n"
            "  tma -C MyApp create Network --core\n"
        ),
    )
    parser.add_argument(
        "--root", "-C",
        default=None,
        help="Project root (default: $TMA_PROJECT_ROOT or the current directory)",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    subparsers = parser.add_subparsers(dest="command", required=True)

    init_parser = subparsers.add_parser(
        "init", help="Initialize a new TMA + Tuist project"
    )
    init_parser.add_argument("name", help="The name of the new project")

    create_parser = subparsers.add_parser(
        "create", help="Create a new TMA module (feature/core)"
    )
    create_parser.add_argument("module_name", help="The name of the module to create")
    kind_group = create_parser.add_mutually_exclusive_group(required=True)
    kind_group.add_argument(
        "--feature", "-f",
        dest="kind",
        action="store_const",
        const=ModuleKind.FEATURE,
        help="Create a feature module",
    )
    kind_group.add_argument(
        "--core", "-c",
        dest="kind",
        action="store_const",
        const=ModuleKind.CORE,
        help="Create a core module",
    )

    return parser


def resolve_config(root: str | None) -> Config:
    """Build the run configuration with an absolute project root."""
    config = Config.from_env()
    project_root = Path(root) if root else config.project_root
    return config.model_copy(update={"project_root": project_root.resolve()})


def run_init(config: Config, name: str) -> None:
    generator = ProjectGenerator(config)
    project_path = generator.generate(generator.spec_for(name))
    print_success(f"Created TMA project: {name}")
    print_summary_table(
        {
            "Project": str(project_path),
            "Next step": f"cd {name} && tma create <Name> --feature",
        },
        title="tma init",
    )


def run_create(config: Config, name: str, kind: ModuleKind) -> None:
    spec = ModuleSpec(name=name, kind=kind)
    report = ModuleGenerator(config).generate(spec)
    print_success(f"Module {name} created!")
    print_summary_table(
        {
            "Module": str(report.path),
            "Kind": spec.kind.value,
            "Files": str(len(report.files)),
            config.manifests.workspace_file: report.workspace.value,
            config.manifests.app_project_file: report.app_project.value,
        },
        title="tma create",
    )


def main(argv: list[str] | None = None) -> int:
    """CLI entry point.  Returns the process exit code."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        config = resolve_config(args.root)
        if args.command == "init":
            run_init(config, args.name)
        else:
            run_create(config, args.module_name, args.kind)
    except ValidationError as exc:
        print_error(_validation_message(exc))
        return 1
    except ScaffoldError as exc:
        print_error(str(exc))
        return 1
    except OSError as exc:
        print_error(f"{exc.strerror or exc} ({exc.filename})" if exc.filename else str(exc))
        return 1

    return 0


def _validation_message(exc: ValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return str(exc)
    msg = errors[0].get("msg", str(exc))
    return msg.removeprefix("Value error, ")


if __name__ == "__main__":
    sys.exit(main())
