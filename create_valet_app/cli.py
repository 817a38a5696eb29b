"""create-valet-app command-line entry point.

Usage::

    create-valet-app my-app
    create-valet-app my-app --template js --no-router
    python -m create_valet_app.cli my-app --minimal --path-alias app
"""

from __future__ import annotations

import argparse
import asyncio
import os
import sys
from pathlib import Path

from pydantic import ValidationError

from create_valet_app import __version__
from create_valet_app.config import DEFAULT_ALIAS_TOKEN, GenerationConfig, Settings, TemplateKind
from create_valet_app.scaffolder import GenerationError, GenerationResult, ProjectGenerator
from create_valet_app.utils import (
    console,
    create_progress,
    print_error,
    print_success,
    print_summary_table,
    print_warning,
)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="create-valet-app",
        description="Scaffold a Valet + React + Vite app",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  create-valet-app my-app\n"
            "  create-valet-app my-app --template js --no-router\n"
            "  create-valet-app my-app --minimal --path-alias app\n"
        ),
    )
    parser.add_argument("dir", help="Target directory (must be empty or absent)")
    parser.add_argument(
        "--template",
        choices=[k.value for k in TemplateKind],
        default=TemplateKind.TS.value,
        help="Template to use (default: ts)",
    )
    parser.add_argument(
        "--router",
        action=argparse.BooleanOptionalAction,
        default=True,
        help="Include React Router (default: --router)",
    )
    parser.add_argument(
        "--zustand",
        action=argparse.BooleanOptionalAction,
        default=True,
        help="Include Zustand store (default: --zustand)",
    )
    parser.add_argument(
        "--minimal",
        action="store_true",
        help="Single page; trims extras (only with --router)",
    )
    parser.add_argument(
        "--path-alias",
        default=DEFAULT_ALIAS_TOKEN,
        metavar="TOKEN",
        help="Import alias for src (default: @)",
    )
    parser.add_argument(
        "--mcp",
        action=argparse.BooleanOptionalAction,
        default=True,
        help="Generate AGENTS.md guidance (default: --mcp)",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def config_from_args(args: argparse.Namespace) -> GenerationConfig:
    return GenerationConfig(
        template=TemplateKind(args.template),
        router=args.router,
        store=args.zustand,
        minimal=args.minimal,
        alias_token=args.path_alias,
        include_docs=args.mcp,
    )


def print_next_steps(result: GenerationResult) -> None:
    console.print()
    print_success(f"Success! Created a Valet app at {result.project_root}")
    console.print()
    console.print("[bold]Next steps:[/bold]")
    rel = os.path.relpath(result.project_root, Path.cwd())
    console.print(f"   [dim]cd[/dim] [cyan]{rel}[/cyan]")
    console.print("   [dim]npm install[/dim]")
    console.print("   [dim]npm run dev[/dim]")
    console.print()


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for ``create-valet-app``."""
    args = build_parser().parse_args(argv)

    try:
        config = config_from_args(args)
        settings = Settings.from_env()
    except ValidationError as exc:
        print_error(f"Error: invalid options: {exc}")
        sys.exit(1)

    generator = ProjectGenerator(config, settings=settings)
    try:
        with create_progress() as progress:
            task = progress.add_task("Scaffolding project", total=1)
            result = asyncio.run(generator.generate(args.dir))
            progress.update(task, completed=1)
    except GenerationError as exc:
        print_error(f"Error: {exc}")
        sys.exit(1)

    for warning in result.warnings:
        print_warning(f"Warning: {warning}")

    print_summary_table(
        {
            "Package": result.package_name,
            "Template": config.template.value,
            "Shape": result.shape.value,
            "Zustand": "enabled" if config.store else "disabled",
            "Path alias": config.alias_token,
            "@archway/valet": result.valet_range,
            "AGENTS.md": "yes" if result.has_docs else "no",
        },
        title="create-valet-app",
    )
    print_next_steps(result)


if __name__ == "__main__":
    main()
