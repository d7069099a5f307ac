"""Command-line interface for jsxi18n."""

from __future__ import annotations

import argparse
import json
import sys
import time
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from jsxi18n.errors import LexError, ParseError
from jsxi18n.estree import FLAVORS


@dataclass(frozen=True, slots=True)
class CliOptions:
    """Parsed CLI options."""

    input_file: Path
    output_file: Path | None
    estree: bool
    flavor: str
    retain_lines: bool
    base_dir: Path | None
    quiet: bool
    watch: bool
    debug: bool


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser (separate function for testability)."""
    p = argparse.ArgumentParser(
        prog="jsxi18n",
        description="Lower <$_> and <$i18nDoNotTranslate> JSX tags into i18n calls",
    )
    p.add_argument("input", help="Input .jsx file (or ESTree .json with --estree)")
    p.add_argument("-o", "--output", help="Output file (default: stdout)")
    p.add_argument(
        "--config",
        metavar="FILE",
        help="Config file (default: auto-discover jsxi18n.toml)",
    )
    p.add_argument("--estree", action="store_true", help="Input is an ESTree JSON syntax tree")
    p.add_argument(
        "--flavor",
        choices=FLAVORS,
        default=None,
        help="Node vocabulary for --estree output (default: babel)",
    )
    p.add_argument(
        "--retain-lines",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Keep replaced code on its original lines (default: on)",
    )
    p.add_argument(
        "--base-dir",
        metavar="DIR",
        help="Directory that file names in warnings are relative to (default: cwd)",
    )
    p.add_argument("-q", "--quiet", action="store_true", help="Suppress warnings")
    p.add_argument("--watch", action="store_true", help="Watch for changes and re-transform")
    p.add_argument("--debug", action="store_true", help="Dump the JSX tree to stderr")
    return p


def load_config(config_path: Path | None, input_dir: Path) -> dict[str, Any]:
    """Load a TOML config file, returning an empty dict on missing/absent file."""
    path = config_path if config_path is not None else input_dir / "jsxi18n.toml"

    if not path.is_file():
        return {}

    with open(path, "rb") as f:
        return tomllib.load(f)


def resolve_options(args: argparse.Namespace) -> CliOptions:
    """Merge config file and CLI args into CliOptions.

    Precedence: config file < CLI flags.
    """
    input_file = Path(args.input)
    input_dir = input_file.parent
    if not input_dir.parts:
        input_dir = Path(".")

    config_path = Path(args.config) if args.config else None
    try:
        config = load_config(config_path, input_dir)
    except tomllib.TOMLDecodeError as exc:
        raise argparse.ArgumentTypeError(f"invalid config file: {exc}") from exc

    cfg_output = config.get("output")
    cfg_output = cfg_output if isinstance(cfg_output, dict) else {}
    cfg_diag = config.get("diagnostics")
    cfg_diag = cfg_diag if isinstance(cfg_diag, dict) else {}

    # Line retention: config < CLI
    retain_lines = True
    cfg_retain = cfg_output.get("retain_lines")
    if cfg_retain is not None:
        if not isinstance(cfg_retain, bool):
            raise argparse.ArgumentTypeError("output.retain_lines must be true or false")
        retain_lines = cfg_retain
    if args.retain_lines is not None:
        retain_lines = args.retain_lines

    # ESTree flavor: config < CLI
    flavor = "babel"
    cfg_flavor = cfg_output.get("flavor")
    if cfg_flavor is not None:
        if cfg_flavor not in FLAVORS:
            raise argparse.ArgumentTypeError(
                f"output.flavor must be one of {', '.join(FLAVORS)}, got {cfg_flavor!r}"
            )
        flavor = cfg_flavor
    if args.flavor is not None:
        flavor = args.flavor

    # Warning paths: config < CLI
    base_dir: Path | None = None
    cfg_base = cfg_diag.get("base_dir")
    if isinstance(cfg_base, str):
        base_dir = Path(cfg_base)
    if args.base_dir:
        base_dir = Path(args.base_dir)

    quiet = bool(cfg_diag.get("quiet", False)) or args.quiet

    output_file = Path(args.output) if args.output else None

    return CliOptions(
        input_file=input_file,
        output_file=output_file,
        estree=args.estree,
        flavor=flavor,
        retain_lines=retain_lines,
        base_dir=base_dir,
        quiet=quiet,
        watch=args.watch,
        debug=args.debug,
    )


def transform_file(options: CliOptions) -> str:
    """Read and transform one file, returning the output text."""
    from jsxi18n.debug import dump_ast
    from jsxi18n.diagnostics import Reporter, null_sink, stderr_sink
    from jsxi18n.estree import transform_tree
    from jsxi18n.native import transform_program
    from jsxi18n.parser import parse

    text = options.input_file.read_text(encoding="utf-8")
    base_dir = str(options.base_dir) if options.base_dir is not None else None
    reporter = Reporter(null_sink if options.quiet else stderr_sink, str(options.input_file), base_dir)

    if options.estree:
        tree = json.loads(text)
        result = transform_tree(tree, reporter, flavor=options.flavor)
        return json.dumps(result, indent=2, ensure_ascii=False) + "\n"

    program = parse(text, str(options.input_file))
    if options.debug:
        dump_ast(program)
    return transform_program(program, text, reporter, retain_lines=options.retain_lines)


def _write_output(options: CliOptions, output: str) -> None:
    if options.output_file:
        options.output_file.write_text(output, encoding="utf-8")
    else:
        sys.stdout.write(output)
        sys.stdout.flush()


def watch_loop(options: CliOptions) -> None:
    """Poll input file for changes, re-transform on each modification."""
    last_mtime = 0.0
    print(f"Watching {options.input_file} for changes...", file=sys.stderr)
    try:
        while True:
            try:
                mtime = options.input_file.stat().st_mtime
            except OSError:
                time.sleep(0.5)
                continue
            if mtime != last_mtime:
                last_mtime = mtime
                try:
                    _write_output(options, transform_file(options))
                    print(f"Transformed {options.input_file}", file=sys.stderr)
                except (LexError, ParseError) as exc:
                    print(str(exc), file=sys.stderr)
                except json.JSONDecodeError as exc:
                    print(f"error: invalid JSON: {exc}", file=sys.stderr)
            time.sleep(0.5)
    except KeyboardInterrupt:
        pass


def main(argv: list[str] | None = None) -> int:
    """CLI entry point. Returns exit code (0/1/2). Does not call sys.exit()."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        options = resolve_options(args)
    except argparse.ArgumentTypeError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    if options.watch:
        watch_loop(options)
        return 0

    try:
        output = transform_file(options)
    except (LexError, ParseError) as exc:
        print(str(exc), file=sys.stderr)
        return 1
    except json.JSONDecodeError as exc:
        print(f"error: invalid JSON: {exc}", file=sys.stderr)
        return 1
    except OSError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    _write_output(options, output)
    return 0
