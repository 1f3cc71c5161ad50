"""Command line entry point: resolve identifiers to their source files."""

import argparse
import logging
from pathlib import Path
from typing import Any

from classloader.class_loader import ClassLoader
from classloader.deep_merge import deep_merge
from classloader.exceptions import ConfigurationError
from classloader.load_config import load_config
from classloader.resolution_report import ResolutionReport


def _pairs(values: list[str], option: str) -> list[tuple[str, str]]:
    """Split KEY=VALUE arguments."""
    pairs = []
    for value in values:
        key, sep, target = value.partition("=")
        if not sep or not key or not target:
            msg = f"{option} expects KEY=VALUE, got '{value}'"
            raise SystemExit(msg)
        pairs.append((key, target))
    return pairs


def build_overrides(args: argparse.Namespace) -> dict[str, Any]:
    """Translate command line options into configuration overrides."""
    overrides: dict[str, Any] = {}
    if args.root:
        overrides["root_path"] = str(args.root)
    if args.ext:
        overrides["accepted_extensions"] = args.ext
    if args.convention_first:
        overrides["strategy_order"] = ["convention", "namespace", "filesystem"]
    if args.cache or args.cache_file:
        overrides["caching"] = {"enabled": True}
        if args.cache_file:
            overrides["caching"]["cache_file"] = str(args.cache_file)

    namespaces: dict[str, list[str]] = {}
    for prefix, directory in _pairs(args.namespace, "--namespace"):
        namespaces.setdefault(prefix, []).append(directory)
    if namespaces:
        overrides["namespaces"] = namespaces
    classes = dict(_pairs(args.class_, "--class"))
    if classes:
        overrides["classes"] = classes
    return overrides


def run(args: argparse.Namespace) -> int:
    """Resolve every identifier; 0 if all were found, 1 otherwise."""
    try:
        config = deep_merge(load_config(args.config), build_overrides(args))
        loader = ClassLoader(config)
    except ConfigurationError as exc:
        raise SystemExit(str(exc)) from exc

    report = ResolutionReport()
    missing = 0
    with loader:
        for identifier in args.identifiers:
            result = loader.resolve(identifier)
            report.add_result(result)
            if result.found:
                print(f"{identifier} -> {result.path} ({result.strategy})")
            else:
                missing += 1
                print(f"{identifier}: not found")

    if args.report:
        report.generate_report(args.report)
        print(f"Report written to {args.report}")
    return 1 if missing else 0


def main(argv: list[str] | None = None) -> int:
    """Parse arguments and run the resolver."""
    ap = argparse.ArgumentParser(
        description="Resolve namespaced class names to the files that define them.",
    )
    ap.add_argument("identifiers", nargs="+", help="Identifiers to resolve")
    ap.add_argument("--config", help="Path to a YAML configuration file")
    ap.add_argument("--root", type=Path, help="Root directory for filesystem search")
    ap.add_argument(
        "--ext",
        action="append",
        help="Accepted extension, in priority order (repeatable)",
    )
    ap.add_argument(
        "--namespace",
        action="append",
        default=[],
        metavar="PREFIX=DIR",
        help="Register a namespace directory (repeatable)",
    )
    ap.add_argument(
        "--class",
        dest="class_",
        action="append",
        default=[],
        metavar="ID=FILE",
        help="Register an identifier to file mapping (repeatable)",
    )
    ap.add_argument(
        "--cache",
        action="store_true",
        help="Load and persist the resolution cache",
    )
    ap.add_argument("--cache-file", type=Path, help="Cache file location")
    ap.add_argument(
        "--convention-first",
        action="store_true",
        help="Try the convention path before registered namespaces",
    )
    ap.add_argument("--report", type=Path, help="Write a JSON resolution report")
    ap.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    args = ap.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    return run(args)


if __name__ == "__main__":
    raise SystemExit(main())
