# Copyright (c) 2026 Frame Contributors. All Rights Reserved.

"""
Frame command line.

    frame-context load
    frame-context resolve <source> <path>
    frame-context curate --request "..."
    frame-context build-maps [--incremental] [--no-fallback-summaries]
    frame-context bundle --request "..." [--run-dir outputs]
    frame-context add-metadata --source-dir ./sources/x/data [--write]
    frame-context clean-maps
    frame-context serve [--host 127.0.0.1] [--port 8200]

JSON results go to stdout, logs to stderr. Failures print a fenced error
block and exit with status 1.
"""

from __future__ import annotations

import argparse
import json
import sys
import traceback
from pathlib import Path
from typing import Any, List, Optional

from frame_context.bundle.assembler import BundleAssembler, BundleOptions
from frame_context.catalog.loader import describe_catalog, load_catalog
from frame_context.catalog.models import DocType, FileRef
from frame_context.catalog.resolver import ReferenceResolver
from frame_context.core.config import FrameSettings, get_settings, reset_settings
from frame_context.core.errors import FrameError
from frame_context.core.logging import setup_logging
from frame_context.curation.curator import CuratorLimits, curate
from frame_context.maps.builder import MapBuilderOptions, RecordsMapBuilder, clean_maps_dir
from frame_context.metadata.enricher import EnrichOptions, enrich_directory


def format_code_block(text: str) -> str:
    return f"```\n{text}\n```"


def format_cli_message(label: str, message: str) -> str:
    return f"{label}:\n{format_code_block(message)}"


def format_cli_error(error: BaseException, label: str = "Error", verbose: bool = False) -> str:
    if verbose or not isinstance(error, (FrameError, FileNotFoundError)):
        text = "".join(traceback.format_exception(type(error), error, error.__traceback__)).rstrip()
    else:
        text = str(error)
    return format_cli_message(label, text)


def _print_json(payload: Any) -> None:
    print(json.dumps(payload, ensure_ascii=False, indent=2))


def _project_root(args: argparse.Namespace, settings: FrameSettings) -> Path:
    return Path(args.project_root).resolve() if args.project_root else settings.project_root_path


def _limits(args: argparse.Namespace, settings: FrameSettings) -> CuratorLimits:
    return CuratorLimits(
        max_skills=args.max_skills if args.max_skills is not None else settings.MAX_SKILLS,
        max_tools=args.max_tools if args.max_tools is not None else settings.MAX_TOOLS,
        max_records=args.max_records if args.max_records is not None else settings.MAX_RECORDS,
    )


# ── Commands ────────────────────────────────────────────────

def cmd_load(args: argparse.Namespace, settings: FrameSettings) -> None:
    catalog = load_catalog(_project_root(args, settings))
    print(f"Loaded {len(catalog)} entities from sources:")
    for line in describe_catalog(catalog):
        print(f"  {line}")


def cmd_resolve(args: argparse.Namespace, settings: FrameSettings) -> None:
    resolver = ReferenceResolver(_project_root(args, settings))
    print(resolver.resolve(FileRef(source=args.source, path=args.path)))


def cmd_curate(args: argparse.Namespace, settings: FrameSettings) -> None:
    catalog = load_catalog(_project_root(args, settings))
    result = curate(args.request, catalog, _limits(args, settings))
    _print_json(result.to_dict())


def cmd_build_maps(args: argparse.Namespace, settings: FrameSettings) -> None:
    builder = RecordsMapBuilder(
        _project_root(args, settings),
        options=MapBuilderOptions(
            include_fallback_summaries=not args.no_fallback_summaries and settings.INCLUDE_FALLBACK_SUMMARIES,
            output_ref_source=args.output_ref_source or settings.OUTPUT_REF_SOURCE,
            incremental=args.incremental,
            fallback_summary_chars=settings.FALLBACK_SUMMARY_CHARS,
        ),
        maps_dir=settings.MAPS_DIR,
    )
    _print_json(builder.build().model_dump(mode="json"))


def cmd_bundle(args: argparse.Namespace, settings: FrameSettings) -> None:
    assembler = BundleAssembler(_project_root(args, settings), maps_dir=settings.MAPS_DIR)
    bundle = assembler.build(BundleOptions(
        request=args.request,
        run_dir=args.run_dir,
        output_ref_source=args.output_ref_source or settings.OUTPUT_REF_SOURCE,
        include_fallback_summaries=settings.INCLUDE_FALLBACK_SUMMARIES,
        incremental=args.incremental,
        fallback_summary_chars=settings.FALLBACK_SUMMARY_CHARS,
        limits=_limits(args, settings),
    ))
    _print_json(bundle.model_dump(mode="json"))


def cmd_add_metadata(args: argparse.Namespace, settings: FrameSettings) -> None:
    changes = enrich_directory(args.source_dir, EnrichOptions(
        type=args.type,
        doc_type=DocType(args.doc_type) if args.doc_type else None,
        max_tags=args.max_tags,
        id_prefix=args.id_prefix,
        overwrite=args.overwrite,
        write=args.write,
    ))
    if not changes:
        print("No Markdown files found.")
        return
    print(f"Found {len(changes)} Markdown files.")
    for change in changes:
        print(f"{'Updated' if change.changed else 'No changes'}: {change.path}")
    if not args.write:
        print("Dry run complete. Re-run with --write to apply changes.")


def cmd_clean_maps(args: argparse.Namespace, settings: FrameSettings) -> None:
    removed = clean_maps_dir(_project_root(args, settings), settings.MAPS_DIR)
    print(f"Removed {removed} entries from {settings.MAPS_DIR}/")


def cmd_serve(args: argparse.Namespace, settings: FrameSettings) -> None:
    import os

    import uvicorn

    os.environ["FRAME_PROJECT_ROOT"] = str(_project_root(args, settings))
    # The app reads the root through get_settings(); drop the cached copy
    reset_settings()
    uvicorn.run("frame_context.main:app", host=args.host, port=args.port, log_config=None)


COMMANDS = {
    "load": cmd_load,
    "resolve": cmd_resolve,
    "curate": cmd_curate,
    "build-maps": cmd_build_maps,
    "bundle": cmd_bundle,
    "add-metadata": cmd_add_metadata,
    "clean-maps": cmd_clean_maps,
    "serve": cmd_serve,
}


def _add_limit_args(p: argparse.ArgumentParser) -> None:
    p.add_argument("--max-skills", type=int, default=None)
    p.add_argument("--max-tools", type=int, default=None)
    p.add_argument("--max-records", type=int, default=None)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="frame-context")
    parser.add_argument("--project-root", default=None, help="Defaults to FRAME_PROJECT_ROOT or .")
    parser.add_argument("--verbose", action="store_true", help="Show tracebacks on error")
    sub = parser.add_subparsers(dest="cmd", required=True)

    sub.add_parser("load", help="Validate the catalog and list entities")

    resolve_p = sub.add_parser("resolve", help="Print the absolute path of a reference")
    resolve_p.add_argument("source")
    resolve_p.add_argument("path")

    curate_p = sub.add_parser("curate", help="Score and select entities for a request")
    curate_p.add_argument("--request", required=True)
    _add_limit_args(curate_p)

    maps_p = sub.add_parser("build-maps", help="Generate records_tree.txt and records_map.md")
    maps_p.add_argument("--incremental", action="store_true")
    maps_p.add_argument("--no-fallback-summaries", action="store_true")
    maps_p.add_argument("--output-ref-source", default=None)

    bundle_p = sub.add_parser("bundle", help="Build a context bundle for a request")
    bundle_p.add_argument("--request", required=True)
    bundle_p.add_argument("--run-dir", default=None)
    bundle_p.add_argument("--output-ref-source", default=None)
    bundle_p.add_argument("--incremental", action="store_true")
    _add_limit_args(bundle_p)

    meta_p = sub.add_parser("add-metadata", help="Fill missing frontmatter (dry run unless --write)")
    meta_p.add_argument("--source-dir", required=True)
    meta_p.add_argument("--type", default="data", choices=["skill", "tool", "profile", "data"])
    meta_p.add_argument("--doc-type", default=None, choices=[d.value for d in DocType])
    meta_p.add_argument("--max-tags", type=int, default=5)
    meta_p.add_argument("--id-prefix", default=None)
    meta_p.add_argument("--overwrite", action="store_true")
    meta_p.add_argument("--write", action="store_true")

    sub.add_parser("clean-maps", help="Delete everything in the maps directory")

    serve_p = sub.add_parser("serve", help="Run the HTTP API")
    serve_p.add_argument("--host", default="127.0.0.1")
    serve_p.add_argument("--port", type=int, default=8200)
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    settings = get_settings()
    setup_logging(settings.LOG_LEVEL, settings.LOG_FORMAT)

    try:
        COMMANDS[args.cmd](args, settings)
    except (FrameError, FileNotFoundError) as e:
        print(format_cli_error(e, verbose=args.verbose), file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
