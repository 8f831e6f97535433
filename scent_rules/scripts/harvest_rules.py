#!/usr/bin/env python3
"""CLI entrypoint for the Scent Work rulebook harvester."""
from __future__ import annotations

import argparse
import logging
from pathlib import Path

from scent_rules.rule_harvester import accuracy, pipeline, renderer, store
from scent_rules.rule_harvester.accuracy import CaseResult
from scent_rules.rule_harvester.pages import InputNotFoundError

DEFAULT_ROOT = Path(__file__).resolve().parents[2]
DEFAULT_INDEX = DEFAULT_ROOT / "scent_rules" / "_index"


class HarvesterPaths:
    def __init__(self, root: Path, index_dir: Path | None = None) -> None:
        self.root = root
        if root == DEFAULT_ROOT:
            default_index = DEFAULT_INDEX
        else:
            default_index = root / "scent_rules" / "_index"
        self.index_dir = (index_dir or default_index).resolve()
        self.rules_path = self.index_dir / "parsed-rules.json"
        self.overrides_path = self.index_dir / "authoritative-measurements.json"
        self.summary_path = self.index_dir / "SUMMARY.md"


logger = logging.getLogger("scent_rules.rule_harvester.cli")


def configure_logging(verbose: bool = False) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="[%(levelname)s] %(message)s",
    )


def resolve_root(path: str | None) -> Path:
    if path:
        return Path(path).expanduser().resolve()
    return DEFAULT_ROOT


def resolve_path(value: str | None, default: Path) -> Path:
    if value:
        return Path(value).expanduser().resolve()
    return default


def command_parse(args: argparse.Namespace) -> None:
    paths = HarvesterPaths(resolve_root(args.root))
    source = Path(args.source).expanduser().resolve()
    overrides_path: Path | None = resolve_path(args.overrides, paths.overrides_path)
    if not args.overrides and not paths.overrides_path.exists():
        overrides_path = None
    output_path = resolve_path(args.output, paths.rules_path)
    logger.info("Parsing %s", source)
    try:
        rules, meta = pipeline.harvest(
            source,
            overrides_path,
            min_pdf_chars=args.min_pdf_chars,
            pdf_backends=parse_backend_list(args.pdf_backends),
        )
    except InputNotFoundError as exc:
        raise SystemExit(str(exc)) from exc
    for warning in meta.get("warnings", []):
        logger.debug("Page source warning: %s", warning)
    if not rules:
        raise SystemExit(f"No rules extracted from {source} (backend: {meta.get('backend')})")
    store.save_rules(output_path, rules)
    logger.info(
        "Wrote %d rules to %s (%d authoritative)",
        len(rules),
        output_path,
        meta.get("overridden", 0),
    )


def command_render(args: argparse.Namespace) -> None:
    paths = HarvesterPaths(resolve_root(args.root))
    rules_path = resolve_path(args.rules, paths.rules_path)
    output_path = resolve_path(args.output, paths.summary_path)
    if not rules_path.exists():
        raise SystemExit(f"Rules file not found: {rules_path}. Run 'parse' first.")
    content = renderer.render_summary(store.load_rules(rules_path), output_path)
    logger.info("Summary written to %s (%d characters)", output_path, len(content))


def command_check(args: argparse.Namespace) -> None:
    paths = HarvesterPaths(resolve_root(args.root))
    rules_path = resolve_path(args.rules, paths.rules_path)
    cases_path = Path(args.cases).expanduser().resolve()
    for required in (rules_path, cases_path):
        if not required.exists():
            raise SystemExit(f"File not found: {required}")
    results = accuracy.check_cases(store.load_rules(rules_path), accuracy.load_cases(cases_path))
    print_results_table(results)
    failed = [result for result in results if not result.passed]
    if failed:
        raise SystemExit(f"{len(failed)} of {len(results)} cases failed")


def print_results_table(results: list[CaseResult]) -> None:
    print("Case".ljust(30), "Class".ljust(24), "Result")
    print("-" * 70)
    for result in results:
        label = f"{result.element} {result.level}"
        print(result.case_id.ljust(30), label.ljust(24), "pass" if result.passed else "FAIL")
        for error in result.errors:
            print("".ljust(30), f"- {error}")
    passed = sum(1 for result in results if result.passed)
    print(f"\nPassed: {passed}/{len(results)}")


def parse_backend_list(value: str | None) -> list[str] | None:
    if not value:
        return None
    parts = [entry.strip() for entry in value.split(",") if entry.strip()]
    return parts or None


def build_parser() -> argparse.ArgumentParser:
    parser_obj = argparse.ArgumentParser(description="Harvest Scent Work rules")
    parser_obj.add_argument("--root", help="Repository root (defaults to script location)")
    parser_obj.add_argument("--verbose", action="store_true", help="Enable debug logging")
    subparsers = parser_obj.add_subparsers(dest="command")

    parse_parser = subparsers.add_parser("parse", help="Parse a rulebook into rule records")
    parse_parser.add_argument("--source", required=True, help="Rulebook PDF or text file")
    parse_parser.add_argument("--overrides", help="Authoritative measurements JSON")
    parse_parser.add_argument("--output", help="Where to write the rules JSON")
    parse_parser.add_argument(
        "--pdf-backends",
        help="Comma-separated PDF extraction backend order (overrides RULES_PDF_BACKENDS)",
    )
    parse_parser.add_argument(
        "--min-pdf-chars",
        type=int,
        help="Minimum characters required from a PDF (overrides RULES_MIN_PDF_CHARS)",
    )
    parse_parser.set_defaults(func=command_parse)

    render_parser = subparsers.add_parser("render", help="Render Markdown summary")
    render_parser.add_argument("--rules", help="Rules JSON to render")
    render_parser.add_argument("--output", help="Where to write the summary")
    render_parser.set_defaults(func=command_render)

    check_parser = subparsers.add_parser("check", help="Compare measurements to expected cases")
    check_parser.add_argument("--cases", required=True, help="Expected cases JSON")
    check_parser.add_argument("--rules", help="Rules JSON to check")
    check_parser.set_defaults(func=command_check)

    return parser_obj


def main(argv: list[str] | None = None) -> None:
    parser_obj = build_parser()
    args = parser_obj.parse_args(argv)
    if not getattr(args, "command", None):
        parser_obj.print_help()
        return
    configure_logging(args.verbose)
    args.func(args)


if __name__ == "__main__":
    main()
