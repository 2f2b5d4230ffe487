"""CLI commands for running and inspecting exclusion reconciliation."""

import argparse
import json
import sys

from .config.runtime import load_settings
from .domain.classifier import SiteClassifier
from .errors import ConfigurationError, ExclusionSyncError
from .observability import configure_logging, metrics_snapshot
from .wiring import build_reconciliation_service

EXIT_OK = 0
EXIT_FAILED = 1
EXIT_CONFIG = 2


def run_command(args: argparse.Namespace) -> int:
    settings = load_settings()
    configure_logging(settings.log_level)
    campaign_ids = args.campaign_id or settings.campaign_id_list or None
    dry_run = args.dry_run or settings.dry_run

    svc = build_reconciliation_service(settings)
    try:
        summary = svc.run(campaign_ids, dry_run=dry_run)
    except ExclusionSyncError as e:
        print(f"Error: run aborted: {e.message}", file=sys.stderr)
        return EXIT_FAILED

    if args.json:
        data = summary.model_dump(mode="json")
        data["metrics"] = metrics_snapshot()
        print(json.dumps(data, indent=2, ensure_ascii=False))
    else:
        for outcome in summary.outcomes:
            line = f"{outcome.campaign_id}: {outcome.status.value} (blocked {len(outcome.blocked)}, added {len(outcome.added)})"
            if outcome.error is not None:
                line += f"; {outcome.error.kind}: {outcome.error.message}"
            print(line)
        print(summary.message)
    return EXIT_FAILED if summary.failed else EXIT_OK


def check_config_command(args: argparse.Namespace) -> int:
    settings = load_settings()
    print(json.dumps(settings.masked(), indent=2, ensure_ascii=False))
    return EXIT_OK


def classify_command(args: argparse.Namespace) -> int:
    classifier = SiteClassifier()
    for site in args.sites:
        print(f"{site}\t{classifier.reason(site, args.blacklist, args.whitelist)}")
    return EXIT_OK


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Reconcile campaign placement exclusions with spreadsheet word lists")
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    run_parser = subparsers.add_parser("run", help="Run one reconciliation pass")
    run_parser.add_argument("--dry-run", action="store_true", help="Compute updates without sending them")
    run_parser.add_argument(
        "--campaign-id",
        type=int,
        action="append",
        default=None,
        help="Restrict the run to this campaign (repeatable; default: CAMPAIGN_IDS or all active)",
    )
    run_parser.add_argument("--json", action="store_true", help="Print the run summary as JSON")
    run_parser.set_defaults(func=run_command)

    check_parser = subparsers.add_parser("check-config", help="Validate and print effective settings")
    check_parser.set_defaults(func=check_config_command)

    classify_parser = subparsers.add_parser("classify", help="Show how sites would be classified (offline)")
    classify_parser.add_argument("sites", nargs="+", help="Placements to classify")
    classify_parser.add_argument("--blacklist", nargs="*", default=[], help="Blacklist substrings")
    classify_parser.add_argument("--whitelist", nargs="*", default=[], help="Whitelisted placements")
    classify_parser.set_defaults(func=classify_command)
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if not getattr(args, "func", None):
        parser.print_help()
        return EXIT_OK
    try:
        return args.func(args)
    except ConfigurationError as e:
        print(f"Error: {e.message}", file=sys.stderr)
        return EXIT_CONFIG


if __name__ == "__main__":
    sys.exit(main())
