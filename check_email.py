#!/usr/bin/env python3
"""
check_email.py — command line front-end for the Kickbox verification API

Commands
- verify      single address (syntax pre-check with email-validator first)
- batch       upload a CSV of "email","name" rows, prints the job id
- status      batch job status, optionally polling until completion
- balance     remaining credits
- disposable  disposable-domain check

Environment (.env)
  KICKBOX_API_KEY=...
  KICKBOX_BASE_URL=...   (optional)
  KICKBOX_TIMEOUT=...    (optional, seconds)

Usage
  python check_email.py verify EMAIL [--skip-syntax]
  python check_email.py batch emails.csv [--callback URL] [--filename NAME]
  python check_email.py status JOB_ID [--watch] [--interval SECONDS]
"""

from __future__ import annotations

import logging
import time
from pathlib import Path
from typing import List, Optional, Tuple

import click
from email_validator import EmailNotValidError, validate_email

from kickbox import CheckJobStatusResponse, Client, KickboxError
from kickbox.config import Settings

# --------------------------
# Utilities
# --------------------------


def normalize_email(email: str) -> Tuple[bool, Optional[str], Optional[str], List[str]]:
    """Validate syntax only; return (valid, normalized, domain, notes)."""
    notes: List[str] = []
    try:
        v = validate_email(email, check_deliverability=False)
        return True, v.normalized, v.domain, notes
    except EmailNotValidError as e:
        notes.append(f"Syntax error: {e}")
        return False, None, None, notes


def _client(ctx: click.Context) -> Client:
    if ctx.obj is None:
        try:
            ctx.obj = Settings.from_env().client()
        except ValueError as e:
            raise click.ClickException(str(e))
        ctx.call_on_close(ctx.obj.close)
    return ctx.obj


def _syntax_check(email: str) -> None:
    ok, normalized, _, notes = normalize_email(email)
    if not ok:
        raise click.ClickException("; ".join(notes))
    if normalized and normalized != email:
        print(f"↪︎ Normalized:      {normalized}")


def print_job_status(job: CheckJobStatusResponse) -> None:
    print(f"🆔 Job:             {job.id}")
    if job.name:
        print(f"🏷  Name:            {job.name}")
    print(f"📊 Status:          {job.status or '-'}")
    if job.is_processing():
        p = job.progress
        print(
            f"   Progress:        {p.total} done, {p.unprocessed} left "
            f"(deliverable={p.deliverable}, undeliverable={p.undeliverable}, "
            f"risky={p.risky}, unknown={p.unknown})"
        )
    if job.is_completed():
        s = job.stats
        print(
            f"   Stats:           {s.addresses} addresses "
            f"(deliverable={s.deliverable}, undeliverable={s.undeliverable}, "
            f"risky={s.risky}, unknown={s.unknown}, sendex={s.sendex:.2f})"
        )
        if job.download_url:
            print(f"⬇️  Download:        {job.download_url}")
    if job.error_detail:
        print(f"   error: {job.error_detail}")


# --------------------------
# CLI
# --------------------------


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.option(
    "-v", "--verbose", is_flag=True, help="Log HTTP calls (API key is never logged)."
)
def main(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@main.command()
@click.argument("email")
@click.option(
    "--skip-syntax", is_flag=True, help="Send the address even if it looks malformed."
)
@click.pass_context
def verify(ctx: click.Context, email: str, skip_syntax: bool) -> None:
    """Verify a single EMAIL address."""
    if not skip_syntax:
        _syntax_check(email)

    try:
        r = _client(ctx).verify(email)
    except KickboxError as e:
        raise click.ClickException(str(e))

    err = r.error()
    if err is not None:
        raise click.ClickException(f"Kickbox: {err}")

    flags = [
        name
        for name, on in (
            ("role", r.role),
            ("free", r.free),
            ("disposable", r.disposable),
            ("accept-all", r.accept_all),
        )
        if on
    ]

    print("\n================ Email Check =================")
    print(f"📧 Email:           {r.email or email}")
    print(f"📮 Result:          {r.result or '-'}")
    if r.reason:
        print(f"   Reason:          {r.reason}")
    print(f"🎯 Sendex:          {r.sendex:.2f}")
    if flags:
        print(f"🚩 Flags:           {', '.join(flags)}")
    if r.did_you_mean:
        print(f"💡 Did you mean:    {r.did_you_mean}")
    print("============================================")
    icon = "✅" if r.is_valid() else "🚫"
    print(f"{icon} Verdict: {'DELIVERABLE' if r.is_valid() else 'DO NOT SEND'}\n")


@main.command()
@click.argument(
    "csv_file", type=click.Path(exists=True, dir_okay=False, path_type=Path)
)
@click.option("--callback", default="", help="URL notified when the job ends.")
@click.option("--filename", default=None, help="Job name (defaults to the CSV name).")
@click.pass_context
def batch(
    ctx: click.Context, csv_file: Path, callback: str, filename: Optional[str]
) -> None:
    """Upload CSV_FILE ("email","name" rows) for batch verification."""
    try:
        r = _client(ctx).verify_multiple(
            callback,
            filename if filename is not None else csv_file.name,
            csv_file.read_bytes(),
        )
    except KickboxError as e:
        raise click.ClickException(str(e))

    err = r.error()
    if err is not None:
        raise click.ClickException(f"Kickbox: {err}")
    print(f"🆔 Job submitted:   {r.id}")


@main.command()
@click.argument("job_id", type=int)
@click.option("--watch", is_flag=True, help="Poll until the job is no longer running.")
@click.option("--interval", default=5.0, show_default=True, help="Poll delay (s)")
@click.pass_context
def status(ctx: click.Context, job_id: int, watch: bool, interval: float) -> None:
    """Show the status of batch job JOB_ID."""
    client = _client(ctx)
    while True:
        try:
            job = client.check_job_status(job_id)
        except KickboxError as e:
            raise click.ClickException(str(e))

        # job status has no error(); a failed lookup still carries the envelope
        if not job.success and job.message:
            raise click.ClickException(f"Kickbox: {job.message}")

        print_job_status(job)
        if not watch or not (job.is_starting() or job.is_processing()):
            return
        time.sleep(interval)


@main.command()
@click.pass_context
def balance(ctx: click.Context) -> None:
    """Show the remaining verification credits."""
    try:
        r = _client(ctx).credit_balance()
    except KickboxError as e:
        raise click.ClickException(str(e))

    err = r.error()
    if err is not None:
        raise click.ClickException(f"Kickbox: {err}")
    print(f"💳 Balance:         {r.balance}")


@main.command()
@click.argument("email")
@click.pass_context
def disposable(ctx: click.Context, email: str) -> None:
    """Check whether EMAIL belongs to a disposable-address provider."""
    try:
        r = _client(ctx).disposable(email)
    except KickboxError as e:
        raise click.ClickException(str(e))
    print(f"🗑  Disposable:      {'yes' if r.disposable else 'no'}")


if __name__ == "__main__":
    main()
