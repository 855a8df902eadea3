"""Command line entry point: hours, report, comment and init commands."""

from __future__ import annotations

import logging
from pathlib import Path

import click

from taskledger.analytics.hours import compute_hours
from taskledger.core.jira_client import TrackerAPI
from taskledger.core.service import OUTCOME_FAILED, TrackerService, load_summaries_file
from taskledger.core.settings import Settings, load_settings
from taskledger.core.worklog import (
    DateRangeError,
    WorkLogError,
    date_range_label,
    load_work_log,
    select_dates,
    today_in_timezone,
    write_initial_work_log,
)
from taskledger.output.browser import open_in_browser, save_html
from taskledger.output.clipboard import ClipboardError, copy_html_to_clipboard
from taskledger.report import classify, render_html, render_text_report

logger = logging.getLogger(__name__)

_date_options = [
    click.option("--start-date", default=None, help="Start date (YYYY-MM-DD)."),
    click.option("--end-date", default=None, help="End date (YYYY-MM-DD)."),
]


def date_options(func):
    for option in reversed(_date_options):
        func = option(func)
    return func


def _load_range(ctx: click.Context, start_date: str | None, end_date: str | None):
    path = ctx.obj["file"]
    try:
        work_log = load_work_log(path)
        dates = select_dates(work_log, start_date, end_date)
    except (WorkLogError, DateRangeError) as exc:
        raise click.ClickException(str(exc)) from exc
    return work_log, dates


def _tracker(settings: Settings) -> TrackerService:
    return TrackerService(TrackerAPI(settings.jira_server, settings.jira_token))


@click.group()
@click.option(
    "--file",
    "file_path",
    type=click.Path(dir_okay=False),
    default=None,
    help="Path to the YAML work log file (default: worklog.yml).",
)
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False),
    default=None,
    help="Optional YAML settings file.",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose/debug logging.")
@click.pass_context
def cli(ctx: click.Context, file_path: str | None, config_path: str | None, verbose: bool) -> None:
    """Summarize a YAML work log into hours, status reports and ticket comments.

    \b
    Examples:
        taskledger init                         # Write a sample worklog.yml
        taskledger hours --start-date 2024-08-01 --end-date 2024-08-07
        taskledger report --html-file report.html --open-html
        taskledger comment --dry-run
    """
    ctx.ensure_object(dict)

    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        )
    else:
        logging.basicConfig(
            level=logging.INFO,
            format="%(levelname)s: %(message)s",
        )

    settings = load_settings(config_path, refresh=True)
    ctx.obj["settings"] = settings
    ctx.obj["file"] = file_path or settings.worklog_path


@cli.command(name="hours")
@date_options
@click.option("--by-day", is_flag=True, help="Also print the hours for each logged day.")
@click.pass_context
def hours_cmd(ctx: click.Context, start_date: str | None, end_date: str | None, by_day: bool) -> None:
    """Total the hours worked over a date or date range."""
    work_log, dates = _load_range(ctx, start_date, end_date)
    summary = compute_hours(work_log, dates)
    if by_day:
        for row in summary.per_day.itertuples(index=False):
            click.echo(f"{row.date}: {row.hours:.2f}")
    click.echo(summary.headline())


@cli.command(name="report")
@date_options
@click.option("--copy-html", is_flag=True, help="Copy the report as formatted HTML to the clipboard.")
@click.option("--html-file", type=click.Path(dir_okay=False), default=None, help="Save the report as HTML.")
@click.option("--show-html", is_flag=True, help="Print the HTML content to the terminal.")
@click.option("--open-html", is_flag=True, help="Open the saved HTML file in the default browser.")
@click.option("--fetch-summaries", is_flag=True, help="Look up ticket summaries from the tracker.")
@click.option(
    "--jira-summaries",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    help="JSON file mapping ticket IDs to summaries.",
)
@click.pass_context
def report_cmd(
    ctx: click.Context,
    start_date: str | None,
    end_date: str | None,
    copy_html: bool,
    html_file: str | None,
    show_html: bool,
    open_html: bool,
    fetch_summaries: bool,
    jira_summaries: str | None,
) -> None:
    """Print a work report for a date or date range."""
    work_log, dates = _load_range(ctx, start_date, end_date)
    label = date_range_label(dates)
    result = classify(work_log, dates)
    click.echo(render_text_report(result, label), nl=False)

    if not (copy_html or html_file or show_html or open_html):
        return

    settings: Settings = ctx.obj["settings"]
    summaries: dict[str, str] = {}
    if jira_summaries:
        try:
            summaries.update(load_summaries_file(jira_summaries))
        except ValueError as exc:
            raise click.ClickException(str(exc)) from exc
    if fetch_summaries:
        if settings.jira_token:
            service = _tracker(settings)
            missing = [tid for tid in service.collect_ticket_ids(result) if tid not in summaries]
            summaries.update(service.resolve_summaries(missing))
        else:
            logger.warning("No tracker token configured; skipping summary lookup")

    content = render_html(result, label, summaries, base_url=settings.jira_server)

    if html_file:
        try:
            save_html(content, html_file)
        except OSError as exc:
            logger.error("Failed to save HTML to %s: %s", html_file, exc)
        else:
            click.echo(f"\n✅ HTML report saved to: {html_file}")
            if open_html:
                if open_in_browser(html_file):
                    click.echo("🌐 Opened HTML report in default browser")
                else:
                    click.echo("⚠️  Failed to open HTML file in browser")
    elif open_html:
        click.echo("\n💡 To use --open-html, you must also specify --html-file")

    if show_html:
        click.echo("\n=== HTML OUTPUT ===")
        click.echo(content)
        click.echo("=== END HTML OUTPUT ===")

    if copy_html:
        try:
            copy_html_to_clipboard(content)
        except ClipboardError as exc:
            click.echo(f"\n⚠️  Failed to copy to clipboard: {exc}")
            click.echo("💡 Try using --html-file to save to a file instead, or --show-html to display the HTML")
        else:
            click.echo("\n✅ HTML report copied to clipboard!")


@cli.command(name="comment")
@date_options
@click.option("--dry-run", is_flag=True, help="Print the comments instead of posting them.")
@click.pass_context
def comment_cmd(ctx: click.Context, start_date: str | None, end_date: str | None, dry_run: bool) -> None:
    """Post a status comment on every ticket referenced in the range."""
    work_log, dates = _load_range(ctx, start_date, end_date)
    label = date_range_label(dates)
    result = classify(work_log, dates)
    settings: Settings = ctx.obj["settings"]

    if not dry_run and not settings.jira_token:
        raise click.ClickException("a tracker token is required (set JIRA_PAT or use --dry-run)")

    if dry_run:
        service = TrackerService(api=None)
    else:
        service = _tracker(settings)
    outcomes = service.post_status_comments(result, label, dry_run=dry_run)
    if not outcomes:
        click.echo("No tickets to comment on.")
        return
    for outcome in outcomes:
        if dry_run:
            click.echo(f"--- {outcome.ticket_id} ---")
            click.echo(outcome.body)
        else:
            line = f"{outcome.ticket_id}: {outcome.status}"
            if outcome.detail:
                line += f" ({outcome.detail})"
            click.echo(line)
    if any(o.status == OUTCOME_FAILED for o in outcomes):
        ctx.exit(1)


@cli.command(name="init")
@click.option("--force", is_flag=True, help="Overwrite an existing work log file.")
@click.pass_context
def init_cmd(ctx: click.Context, force: bool) -> None:
    """Write a sample work log covering yesterday and today."""
    settings: Settings = ctx.obj["settings"]
    today = today_in_timezone(settings.timezone)
    try:
        path = write_initial_work_log(Path(ctx.obj["file"]), today, force=force)
    except WorkLogError as exc:
        raise click.ClickException(str(exc)) from exc
    click.echo(f"✅ Sample work log written to: {path}")


def main() -> None:
    cli()  # pylint: disable=no-value-for-parameter


if __name__ == "__main__":
    main()
