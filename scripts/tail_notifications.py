#!/usr/bin/env python3
"""
View recent notifications from the notification log.

Shows what the rendering engine reported during recent previews, optionally
filtered by severity.
"""

import json
from typing import Optional

import typer

from adocview.settings import get_settings
from adocview.utils.notification_log import get_recent_notifications
from adocview.utils.timestamp import format_timestamp

app = typer.Typer(
    add_completion=False,
    help="View recent preview notifications",
)


@app.command()
def main(
    n: int = typer.Option(10, "--num", "-n", help="Number of recent notifications to show"),
    severity: Optional[str] = typer.Option(
        None, "--severity", "-s", help="Filter by severity (info or error)"
    ),
    compact: bool = typer.Option(
        False, "--compact", "-c", help="Print one notification per line (raw JSON)"
    ),
    relative: bool = typer.Option(False, "--relative", "-r", help="Show relative timestamps"),
):
    """
    Show the last n notifications.

    Examples:\n

        $ python scripts/tail_notifications.py               # Last 10 notifications

        $ python scripts/tail_notifications.py -s error      # Last 10 errors

        $ python scripts/tail_notifications.py -n 20 -c      # Compact output
    """
    records = get_recent_notifications(n=n, severity=severity)

    if not records:
        typer.secho("No notifications found", fg=typer.colors.YELLOW, err=True)
        raise typer.Exit(code=1)

    if compact:
        for record in records:
            typer.echo(json.dumps(record))
        return

    typer.secho(f"{len(records)} notification(s) from {get_settings().notification_log}", bold=True)
    for record in records:
        color = typer.colors.RED if record.get("severity") == "error" else typer.colors.CYAN
        when = format_timestamp(record.get("timestamp", ""), relative=relative)
        typer.secho(f"\n[{when}] {record.get('title', '')}", fg=color, bold=record.get("important", False))
        typer.echo(record.get("body", "").rstrip("\n"))


if __name__ == "__main__":
    app()
