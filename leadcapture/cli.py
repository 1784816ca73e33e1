"""
CLI for the LeadCapture form
============================

Terminal front end for the lead-capture workflow.

Commands:
    leadcapture join                Fill in and submit the form interactively
    leadcapture industries          List the industry options
    leadcapture config              Show the active (non-secret) configuration
"""

import asyncio
import logging
import sys
from typing import Optional

import click

from leadcapture import __version__, config
from leadcapture.api import SupabaseConfirmationSender, SupabaseLeadRepository
from leadcapture.guard import SubmissionGuard
from leadcapture.models import Industry, Notification, NotificationKind, SubmissionStatus, industry_options
from leadcapture.store import LeadStore
from leadcapture.workflow import SubmissionWorkflow

FIELD_PROMPTS = {
    "name": "Your name",
    "email": "Your email",
    "industry": "Your industry",
}


class ClickNotifier:
    """Shows notifications as colored terminal lines."""

    def notify(self, notification: Notification) -> None:
        if notification.kind == NotificationKind.DESTRUCTIVE:
            click.secho(f"❌ {notification.title}: {notification.description}", fg="red", err=True)
        else:
            click.secho(f"✅ {notification.title} {notification.description}", fg="green")


def build_workflow(notifier) -> SubmissionWorkflow:
    """Wire the workflow to Supabase with settings from the environment."""
    config.validate_config()
    return SubmissionWorkflow(
        guard=SubmissionGuard(),
        sender=SupabaseConfirmationSender(),
        repository=SupabaseLeadRepository(),
        store=LeadStore(),
        notifier=notifier,
    )


def _prompt_field(field: str, default: Optional[str] = None) -> str:
    if field == "industry":
        return click.prompt(
            FIELD_PROMPTS[field],
            type=click.Choice([industry.value for industry in Industry]),
            default=default or None,
            show_choices=True,
        )
    return click.prompt(FIELD_PROMPTS[field], default=default or None)


def _show_success_screen(workflow: SubmissionWorkflow) -> None:
    click.echo()
    click.echo("=" * 60)
    click.secho("Welcome aboard! 🎉", bold=True)
    click.echo("Thanks for joining! We'll be in touch soon with updates.")
    click.echo(f"You're #{workflow.session_position} in this session")
    click.echo("=" * 60)
    click.echo()


async def _run_session(workflow: SubmissionWorkflow, prefill: dict, once: bool) -> int:
    workflow.mount()

    pending = [field for field in FIELD_PROMPTS if not prefill.get(field)]
    for field, value in prefill.items():
        if value:
            workflow.handle_input_change(field, value)

    while True:
        for field in pending:
            workflow.handle_input_change(field, _prompt_field(field, getattr(workflow.form, field)))

        status = await workflow.submit()

        if status == SubmissionStatus.SUCCEEDED:
            _show_success_screen(workflow)
            if once or not click.confirm("Submit another lead?", default=False):
                return 0
            workflow.reset_form()
            pending = list(FIELD_PROMPTS)
            continue

        if status == SubmissionStatus.INVALID:
            for error in workflow.validation_errors:
                click.secho(f"  {FIELD_PROMPTS[error.field]}: {error.message}", fg="yellow", err=True)
            pending = [field for field in FIELD_PROMPTS if workflow.get_field_error(field)]
            continue

        if status == SubmissionStatus.REJECTED:
            click.echo("Please wait a moment before submitting again.")

        if once or not click.confirm("Try again?", default=True):
            return 1
        pending = []


@click.group()
@click.version_option(version=__version__)
@click.option(
    "--log-level",
    default=config.LOG_LEVEL,
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    help="Logging level (default from LOG_LEVEL)",
)
def main(log_level: str):
    """
    LeadCapture - join the early-access list from your terminal

    Examples:
        leadcapture join
        leadcapture join --name Ana --email ana@example.com --industry technology --once
        leadcapture industries
    """
    logging.basicConfig(
        level=getattr(logging, log_level.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


@main.command()
@click.option("--name", default=None, help="Prefill your name")
@click.option("--email", default=None, help="Prefill your email")
@click.option(
    "--industry",
    default=None,
    type=click.Choice([industry.value for industry in Industry]),
    help="Prefill your industry",
)
@click.option("--once", is_flag=True, help="Exit after one attempt instead of offering another")
def join(name: Optional[str], email: Optional[str], industry: Optional[str], once: bool):
    """
    Fill in the lead form and submit it.

    A confirmation email is sent first; the lead is stored only after the
    email went out. Fields given as options are not prompted for.
    """
    try:
        workflow = build_workflow(ClickNotifier())
    except ValueError as e:
        click.echo(f"❌ {e}", err=True)
        sys.exit(1)

    exit_code = asyncio.run(
        _run_session(workflow, {"name": name, "email": email, "industry": industry}, once)
    )
    sys.exit(exit_code)


@main.command()
def industries():
    """List the industries offered by the form."""
    for option in industry_options():
        click.echo(f"{option['value']:<15} {option['label']}")


@main.command(name="config")
def show_config():
    """Show the active configuration (secrets are never printed)."""
    config.print_config_summary()
    missing = config.missing_settings()
    if missing:
        click.secho(f"⚠️  Missing settings: {', '.join(missing)}", fg="yellow")


if __name__ == "__main__":
    main()
