# SPDX-License-Identifier: AGPL-3.0-only
import argparse
import json
import logging
import sys
from pathlib import Path

from .checks import CHECKS
from .config import Config
from .engine import A11yEngine
from .html_adapter import parse_html_file
from .tree import render_node
from .types import IMPACTS


SNIPPET_LENGTH = 80


def _load_config(args):
    if getattr(args, "config", None):
        return Config.load(Path(args.config))
    path = Config.discover()
    return Config.load(path) if path is not None else Config.default()


def _collect_files(paths, patterns):
    files = []
    seen = set()
    for raw in paths:
        path = Path(raw)
        if path.is_dir():
            candidates = sorted({p for pattern in patterns for p in path.glob(pattern) if p.is_file()})
        elif path.exists():
            candidates = [path]
        else:
            raise FileNotFoundError(f"No such file or directory: {raw}")
        for candidate in candidates:
            key = candidate.resolve()
            if key not in seen:
                seen.add(key)
                files.append(candidate)
    return files


def check_file(path, engine):
    roots = parse_html_file(path)
    if not roots:
        return None
    return engine.check(roots)


def _emit_file_result(path, result):
    for v in result.violations:
        snippet = render_node(v.element, max_length=SNIPPET_LENGTH) if v.element is not None else ""
        sys.stdout.write(f"{path}:{v.path}: {v.impact} {v.id} {v.description} {snippet}\n")


def run_check(args, config=None):
    """Check files and return the process exit code (1 when a violation reaches fail-on)."""
    config = config or _load_config(args)
    options = config.engine_options()
    if args.disable:
        options = options.disable(*args.disable)
    fail_on = args.fail_on or config.get_fail_on()
    engine = A11yEngine(options)

    files = _collect_files(args.files or config.get_check_paths(), config.get_include_patterns())
    failed = False
    file_payloads = []
    total = 0
    for path in files:
        result = check_file(path, engine)
        if result is None:
            continue
        total += len(result.violations)
        if result.at_least(fail_on):
            failed = True
        if args.json:
            file_payloads.append({"path": str(path), **result.to_dict()})
        else:
            _emit_file_result(path, result)

    if args.json:
        payload = {
            "schema": "ariacheck.check_result.v1",
            "ok": not failed,
            "fail_on": fail_on,
            "file_count": len(files),
            "violation_count": total,
            "files": file_payloads,
        }
        sys.stdout.write(json.dumps(payload, ensure_ascii=True) + "\n")
    else:
        status = "error" if failed else "ok"
        sys.stdout.write(f"[{status}] {len(files)} file(s) checked, {total} violation(s)\n")
    return 1 if failed else 0


def cmd_check(args):
    return run_check(args)


def cmd_rules(args):
    if args.json:
        payload = {
            "schema": "ariacheck.rules.v1",
            "checks": [
                {
                    "name": d.name,
                    "summary": d.summary,
                    "emits": [{"id": code, "impact": impact} for code, impact in d.emits],
                }
                for d in CHECKS
            ],
        }
        sys.stdout.write(json.dumps(payload, ensure_ascii=True) + "\n")
        return 0
    for d in CHECKS:
        sys.stdout.write(f"{d.name}: {d.summary}\n")
        for code, impact in d.emits:
            sys.stdout.write(f"  {code} ({impact})\n")
    return 0


def _build_parser():
    parser = argparse.ArgumentParser(prog="ariacheck")
    parser.add_argument("--json", action="store_true")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    p_check = sub.add_parser("check", help="Check HTML files for accessibility violations")
    p_check.add_argument("files", nargs="*",
                         help="HTML files or directories (default: [files] paths from the config)")
    p_check.add_argument("--config", help="Path to ariacheck.toml or pyproject.toml")
    p_check.add_argument("--fail-on", choices=IMPACTS,
                         help="Exit non-zero when a violation of this impact or higher is found")
    p_check.add_argument("--disable", action="append", default=[],
                         help="Disable a check or violation id (repeatable)")
    p_check.set_defaults(func=cmd_check)

    p_rules = sub.add_parser("rules", help="List checks and the violation ids they emit")
    p_rules.set_defaults(func=cmd_rules)

    from . import watcher as watcher_module

    p_watch = sub.add_parser("watch", help="Watch a directory and re-check changed files")
    p_watch.add_argument("path", nargs="?", default=".", help="Directory to watch (default: current)")
    p_watch.add_argument("--config", help="Path to ariacheck.toml or pyproject.toml")
    p_watch.add_argument("--fail-on", choices=IMPACTS)
    p_watch.add_argument("--disable", action="append", default=[])
    p_watch.set_defaults(func=watcher_module.cmd_watch)

    return parser


def main(argv=None):
    parser = _build_parser()
    args = parser.parse_args(argv)
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")
    try:
        code = args.func(args)
    except Exception as exc:
        if args.json:
            err = {
                "schema": "ariacheck.error.v1",
                "ok": False,
                "code": "CLI_ERROR",
                "message": str(exc),
            }
            sys.stdout.write(json.dumps(err, ensure_ascii=True) + "\n")
        else:
            sys.stderr.write(f"[error] {exc}\n")
        return 3
    return code or 0


if __name__ == "__main__":
    raise SystemExit(main())
