"""
CLI Phase 1: Gather user requirements.

Parses command-line arguments and returns UserConfig dataclass.
No side effects - just parsing and conversion.
"""

from __future__ import annotations

import argparse
from pathlib import Path
from typing import Dict, List, Optional

from .cli_config import LIST_KINDS, RenderStage, TransformStage, UserConfig
from .logging_utils import VERBOSITY_NORMAL, VERBOSITY_QUIET


def _parse_params(items: Optional[List[str]]) -> Dict[str, str]:
    """
    Parse ``key=value`` items into a dictionary.

    Example: ["job-title=Data Engineer", "location=Lisbon"]
    """
    params: Dict[str, str] = {}
    for item in items or []:
        if "=" not in item:
            raise ValueError(f"--param expects key=value, got {item!r}")
        key, value = item.split("=", 1)
        key = key.strip()
        if not key:
            raise ValueError(f"--param expects key=value, got {item!r}")
        params[key] = value.strip()
    return params


def gather_user_requirements(argv: Optional[List[str]] = None) -> UserConfig:
    """
    Phase 1: Parse command-line arguments and return user configuration.

    No side effects - just parsing and conversion to UserConfig.
    """
    parser = argparse.ArgumentParser(
        description="Render resume documents with themes and run AI text transforms.",
        epilog="""
Examples:
  Render a resume to HTML with a theme:
    cvrender --data resume.json --render html --theme ivy-league --output out/resume.html

  Render the cover letter to Word:
    cvrender --data resume.json --render docx --mode cover

  Check a document:
    cvrender --data resume.json --verify

  Suggest skills for a job title:
    cvrender --transform suggest-skills --param job-title="Data Engineer"

  List available themes:
    cvrender --list themes
""",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument("--data", help="Document JSON file (enveloped or bare).")
    parser.add_argument("--render", metavar="FORMAT", help="Render the document with a registered renderer (html, docx, text).")
    parser.add_argument("--output", help="Output path for the rendered file or the transform result.")
    parser.add_argument("--theme", help="Theme id (see --list themes).")
    parser.add_argument("--mode", choices=["resume", "cover"], default="resume", help="Render the resume or the cover letter.")

    parser.add_argument("--transform", metavar="OPERATION", help="Run an AI text transform (see --list transforms).")
    parser.add_argument("--param", action="append", metavar="KEY=VALUE", help="Transform parameter; may be repeated.")
    parser.add_argument("--model", help="Model name for the AI provider.")
    parser.add_argument("--provider", choices=["openai", "openrouter"], default="openai", help="AI provider.")

    parser.add_argument("--list", dest="list_kind", choices=LIST_KINDS, help="List registered components and exit.")
    parser.add_argument("--verify", action="store_true", help="Report structural problems in the document.")

    parser.add_argument("--strict", action="store_true", help="Treat verification warnings as failure (non-zero exit code).")
    parser.add_argument("--debug", action="store_true", help="Verbose logs + stack traces on failure.")
    parser.add_argument("--verbose", action="store_true", help="Log progress messages.")
    parser.add_argument("--log-file", help="Optional path to a log file. If set, all output is also written there.")

    args = parser.parse_args(argv)

    if not any([args.list_kind, args.render, args.transform, args.verify]):
        raise ValueError("Must specify at least one of --render, --transform, --verify or --list")

    if (args.render or args.verify) and not args.data:
        raise ValueError("--render and --verify require --data")

    if args.render and args.transform:
        raise ValueError("Cannot combine --render and --transform in one run")

    render_stage = None
    if args.render:
        render_stage = RenderStage(
            format=args.render,
            output=Path(args.output) if args.output else None,
            theme=args.theme,
            mode=args.mode,
        )

    transform_stage = None
    if args.transform:
        transform_stage = TransformStage(
            operation=args.transform,
            params=_parse_params(args.param),
            model=args.model,
            provider=args.provider,
            output=Path(args.output) if args.output else None,
        )
    elif args.param:
        raise ValueError("--param is only valid with --transform")

    return UserConfig(
        data=Path(args.data) if args.data else None,
        render=render_stage,
        transform=transform_stage,
        list_kind=args.list_kind,
        verify=args.verify,
        strict=args.strict,
        debug=args.debug,
        verbosity=VERBOSITY_NORMAL if args.verbose else VERBOSITY_QUIET,
        log_file=args.log_file,
    )
