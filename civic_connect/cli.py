"""Command line interface for CivicConnect.

Operates on the JSON snapshot file named by CIVIC_SNAPSHOT_PATH (or
--snapshot). CIVIC_* variables may also come from a .env file. Scheduled
advances live only for the duration of one command, so "simulate" and
"run" are the commands that move reports along on their own; "advance"
moves one report by hand.

Usage:
    civic-connect submit --title "Pothole on Oak St" --category infrastructure \\
        --description "A large pothole has formed near the school crossing."
    civic-connect list --status submitted
    civic-connect advance <report-id>
    civic-connect simulate --rounds 3 --stagger 0.5
    civic-connect stats
"""

from __future__ import annotations

import argparse
import asyncio
import dataclasses
import sys
from collections.abc import Sequence
from pathlib import Path

from dotenv import load_dotenv

from civic_connect.application.services.report_lifecycle_service import (
    AdvanceDelayPolicy,
    AdvanceOutcome,
)
from civic_connect.application.services.report_query_service import ReportFilter
from civic_connect.application.services.report_submission_service import (
    ReportSubmissionResult,
)
from civic_connect.bootstrap.app import CivicConnectApp, create_app
from civic_connect.bootstrap.logging import configure_structlog
from civic_connect.config.civic_config import CivicConnectConfig
from civic_connect.domain.errors.registration import RegistrationError
from civic_connect.domain.errors.report import ReportValidationError
from civic_connect.domain.models.report import Report
from civic_connect.domain.services.labels import (
    format_category,
    format_priority,
    format_status,
    format_time_ago,
)
from civic_connect.infrastructure.observability.correlation import (
    generate_correlation_id,
    set_correlation_id,
)
from civic_connect.workers.advance_worker import run_advance_worker

EXIT_OK = 0
EXIT_FAILURE = 1

_SETTINGS_FLAGS = (
    "high_contrast",
    "large_text",
    "screen_reader",
    "email_notifications",
    "sms_notifications",
)


def _positive_float(value: str) -> float:
    """argparse type for a strictly positive number of seconds."""
    try:
        number = float(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not a number: {value!r}") from None
    if number <= 0:
        raise argparse.ArgumentTypeError(f"must be positive, got {value}")
    return number


def _positive_int(value: str) -> int:
    """argparse type for a strictly positive count."""
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not an integer: {value!r}") from None
    if number <= 0:
        raise argparse.ArgumentTypeError(f"must be positive, got {value}")
    return number


def _add_report_field_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--title", default="")
    parser.add_argument("--category", default="")
    parser.add_argument("--description", default="")
    parser.add_argument("--location", default="")
    parser.add_argument("--priority", default="medium")
    parser.add_argument(
        "--private",
        action="store_true",
        help="Hide the report from other citizens",
    )
    parser.add_argument(
        "--anonymous",
        action="store_true",
        help="Do not show the submitter on the report",
    )
    parser.add_argument(
        "--evidence",
        action="append",
        default=[],
        help="Evidence file name (repeatable)",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="civic-connect",
        description="Report civic issues and track them to resolution.",
    )
    parser.add_argument(
        "--snapshot",
        type=Path,
        default=None,
        help="Snapshot file (default: CIVIC_SNAPSHOT_PATH or ~/.civic_connect/snapshot.json)",
    )
    parser.add_argument(
        "--offline",
        action="store_true",
        help="Record submissions as made while offline",
    )
    commands = parser.add_subparsers(dest="command", required=True)

    submit = commands.add_parser("submit", help="Submit a new report")
    _add_report_field_arguments(submit)

    listing = commands.add_parser("list", help="List reports, newest first")
    listing.add_argument("--search", default="", help="Match title or id")
    listing.add_argument("--status", default="")
    listing.add_argument("--category", default="")

    show = commands.add_parser("show", help="Show a report and its timeline")
    show.add_argument("report_id")

    advance = commands.add_parser("advance", help="Advance a report one step")
    advance.add_argument("report_id")

    simulate = commands.add_parser(
        "simulate", help="Run staggered advance rounds for pending reports"
    )
    simulate.add_argument("--rounds", type=_positive_int, default=1)
    simulate.add_argument(
        "--stagger",
        type=_positive_float,
        default=None,
        help="Seconds between advances (default: CIVIC_ADVANCE_STAGGER_SECONDS)",
    )

    commands.add_parser("run", help="Run the advance worker until interrupted")

    commands.add_parser("stats", help="Show dashboard counts")

    draft = commands.add_parser("draft", help="Manage drafts")
    draft_commands = draft.add_subparsers(dest="draft_command", required=True)
    draft_save = draft_commands.add_parser("save", help="Save fields as a draft")
    _add_report_field_arguments(draft_save)
    draft_commands.add_parser("list", help="List drafts")
    draft_submit = draft_commands.add_parser("submit", help="Submit a draft")
    draft_submit.add_argument("draft_id")
    draft_delete = draft_commands.add_parser("delete", help="Delete a draft")
    draft_delete.add_argument("draft_id")

    register = commands.add_parser("register", help="Register as a citizen")
    register.add_argument("--name", default="")
    register.add_argument("--email", default="")
    register.add_argument("--phone", default=None)
    register.add_argument("--location", default=None)

    commands.add_parser("logout", help="Log out and wipe all local data")

    settings = commands.add_parser("settings", help="Show or change settings")
    settings.add_argument("--language", default=None)
    for name in _SETTINGS_FLAGS:
        settings.add_argument(
            f"--{name.replace('_', '-')}",
            dest=name,
            action=argparse.BooleanOptionalAction,
            default=None,
        )

    return parser


def _report_fields(args: argparse.Namespace) -> dict[str, object]:
    return {
        "title": args.title,
        "category": args.category,
        "description": args.description,
        "location": args.location,
        "priority": args.priority,
        "isPublic": not args.private,
        "isAnonymous": args.anonymous,
        "evidence": tuple(args.evidence),
    }


def _print_report_line(app: CivicConnectApp, report: Report) -> None:
    age = format_time_ago(report.submitted_at, app.time_authority.now())
    print(
        f"{report.id}  {format_status(report.status.value):<12}  "
        f"{format_category(report.category):<16}  {report.title}  ({age})"
    )


def _print_report(report: Report) -> None:
    print(f"ID:          {report.id}")
    print(f"Title:       {report.title}")
    print(f"Category:    {format_category(report.category)}")
    print(f"Priority:    {format_priority(report.priority.value)}")
    print(f"Status:      {format_status(report.status.value)}")
    print(f"Assigned to: {report.assigned_to or '-'}")
    if report.location:
        print(f"Location:    {report.location}")
    print("Timeline:")
    for entry in report.timeline:
        print(
            f"  {entry.timestamp.isoformat()}  "
            f"{format_status(entry.status.value):<12}  {entry.description}"
        )


def _print_submission(result: ReportSubmissionResult) -> int:
    try:
        report = result.unwrap()
    except ReportValidationError as e:
        for error in e.errors:
            print(f"error: {error}", file=sys.stderr)
        return EXIT_FAILURE
    print(f"Report submitted: {report.id}")
    print(f"Assigned to: {report.assigned_to}")
    return EXIT_OK


async def _cmd_submit(app: CivicConnectApp, args: argparse.Namespace) -> int:
    return _print_submission(await app.submission.submit(_report_fields(args)))


async def _cmd_list(app: CivicConnectApp, args: argparse.Namespace) -> int:
    reports = await app.queries.search(
        ReportFilter(text=args.search, status=args.status, category=args.category)
    )
    if not reports:
        print("No reports found")
    for report in reports:
        _print_report_line(app, report)
    return EXIT_OK


async def _cmd_show(app: CivicConnectApp, args: argparse.Namespace) -> int:
    report = await app.queries.find(args.report_id)
    if report is None:
        print(f"error: Report not found: {args.report_id}", file=sys.stderr)
        return EXIT_FAILURE
    _print_report(report)
    return EXIT_OK


async def _cmd_advance(app: CivicConnectApp, args: argparse.Namespace) -> int:
    result = await app.lifecycle.advance(args.report_id)
    if result.outcome is AdvanceOutcome.NOT_FOUND:
        print(f"error: {result.error}", file=sys.stderr)
        return EXIT_FAILURE
    if result.advanced and result.report is not None:
        print(f"Report {args.report_id} is now {format_status(result.report.status.value)}")
    else:
        print(f"Report {args.report_id} is already resolved")
    return EXIT_OK


async def _cmd_simulate(app: CivicConnectApp, args: argparse.Namespace) -> int:
    stagger = args.stagger if args.stagger is not None else app.config.advance_stagger_seconds
    policy = AdvanceDelayPolicy(stagger_seconds=stagger)

    for round_number in range(1, args.rounds + 1):
        job_ids = await app.lifecycle.schedule_advances(policy)
        if not job_ids:
            print("No pending reports")
            break
        print(f"Round {round_number}: {len(job_ids)} advance(s) scheduled")
        for _ in job_ids:
            await asyncio.sleep(stagger)
            for result in await app.lifecycle.process_due_advances():
                if result.advanced and result.report is not None:
                    print(
                        f"  {result.report_id} -> "
                        f"{format_status(result.report.status.value)}"
                    )
        # Pick up anything the sleeps undershot
        while app.scheduler.get_pending_count():
            await asyncio.sleep(app.config.worker_poll_seconds)
            await app.lifecycle.process_due_advances()
    return EXIT_OK


async def _cmd_run(app: CivicConnectApp, args: argparse.Namespace) -> int:
    print("Advance worker running, press Ctrl+C to stop")
    await run_advance_worker(app.worker)
    return EXIT_OK


async def _cmd_stats(app: CivicConnectApp, args: argparse.Namespace) -> int:
    summary = await app.queries.dashboard_summary()
    print(f"Total reports:   {summary.total}")
    print(f"Resolved:        {summary.resolved}")
    print(f"Pending:         {summary.pending}")
    print(f"Drafts:          {summary.draft_count}")
    print(f"Resolution rate: {summary.resolution_rate:.0%}")
    if summary.by_category:
        print("By category:")
        for category, count in sorted(summary.by_category.items()):
            print(f"  {format_category(category):<16} {count}")
    recent = await app.queries.recent_activity()
    if recent:
        print("Recent activity:")
        for report in recent:
            _print_report_line(app, report)
    return EXIT_OK


async def _cmd_draft(app: CivicConnectApp, args: argparse.Namespace) -> int:
    if args.draft_command == "save":
        draft = await app.submission.save_draft(_report_fields(args))
        print(f"Draft saved: {draft.id}")
        return EXIT_OK

    if args.draft_command == "list":
        drafts = await app.queries.drafts()
        if not drafts:
            print("No drafts")
        for draft in drafts:
            print(f"{draft.id}  {draft.title or '(untitled)'}")
        return EXIT_OK

    if args.draft_command == "submit":
        return _print_submission(await app.submission.submit_draft(args.draft_id))

    if await app.submission.delete_draft(args.draft_id):
        print(f"Draft deleted: {args.draft_id}")
        return EXIT_OK
    print(f"error: Draft not found: {args.draft_id}", file=sys.stderr)
    return EXIT_FAILURE


async def _cmd_register(app: CivicConnectApp, args: argparse.Namespace) -> int:
    try:
        user = await app.session.register(
            name=args.name,
            email=args.email,
            phone=args.phone,
            location=args.location,
        )
    except RegistrationError as e:
        for error in e.errors:
            print(f"error: {error}", file=sys.stderr)
        return EXIT_FAILURE
    print(f"Welcome, {user.name} ({user.id})")
    return EXIT_OK


async def _cmd_logout(app: CivicConnectApp, args: argparse.Namespace) -> int:
    await app.session.logout()
    print("Logged out, local data cleared")
    return EXIT_OK


async def _cmd_settings(app: CivicConnectApp, args: argparse.Namespace) -> int:
    changes: dict[str, object] = {
        name: getattr(args, name)
        for name in _SETTINGS_FLAGS
        if getattr(args, name) is not None
    }
    if args.language is not None:
        changes["language"] = args.language
    settings = (
        await app.session.update_settings(**changes) if changes else app.session.settings
    )
    for field in dataclasses.fields(settings):
        print(f"{field.name}: {getattr(settings, field.name)}")
    return EXIT_OK


_COMMANDS = {
    "submit": _cmd_submit,
    "list": _cmd_list,
    "show": _cmd_show,
    "advance": _cmd_advance,
    "simulate": _cmd_simulate,
    "run": _cmd_run,
    "stats": _cmd_stats,
    "draft": _cmd_draft,
    "register": _cmd_register,
    "logout": _cmd_logout,
    "settings": _cmd_settings,
}


def load_config(args: argparse.Namespace) -> CivicConnectConfig:
    """Environment config with command line overrides applied.

    Only "run" keeps the start-up advance round; every other command
    drives advances explicitly.
    """
    config = CivicConnectConfig.from_environment()
    overrides: dict[str, object] = {}
    if args.snapshot is not None:
        overrides["snapshot_path"] = args.snapshot
    if args.command != "run":
        overrides["simulate_on_start"] = False
    return dataclasses.replace(config, **overrides)


async def run_command(app: CivicConnectApp, args: argparse.Namespace) -> int:
    """Start the app, run one command, shut down."""
    set_correlation_id(generate_correlation_id())
    await app.start()
    if args.offline:
        app.session.set_online(False)
    try:
        return await _COMMANDS[args.command](app, args)
    finally:
        await app.shutdown()


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    load_dotenv()
    config = load_config(args)
    configure_structlog(config.environment, log_file=sys.stderr, cache_loggers=False)
    app = create_app(config)
    return asyncio.run(run_command(app, args))


if __name__ == "__main__":
    sys.exit(main())
