"""CLI commands for signing in and account management."""

from __future__ import annotations

import click

from storefront.application.checkout_step import INTEGRATION_MESSAGE, TRY_AGAIN_MESSAGE
from storefront.application.login import LoginHandler, LogoutHandler, WhoAmIHandler
from storefront.application.register_account import (
    ConfirmAccountHandler,
    RegisterAccountHandler,
)
from storefront.application.reset_password import (
    RequestPasswordResetHandler,
    ResetPasswordHandler,
)
from storefront.domain.exceptions import GatewayError, StorefrontException, TransportError
from storefront.domain.model.identity import SessionContext
from storefront.infrastructure.bootstrap import account_gateway, session_store


def current_context() -> SessionContext:
    """Resolve who is signed in from the stored token."""
    try:
        return WhoAmIHandler(account_gateway(), session_store()).handle()
    except TransportError as exc:
        raise click.ClickException(TRY_AGAIN_MESSAGE) from exc
    except GatewayError as exc:
        raise click.ClickException(INTEGRATION_MESSAGE) from exc


@click.command("login")
@click.option("--email", required=True, help="Account email.")
@click.password_option("--password", confirmation_prompt=False, help="Account password.")
def account_login(email: str, password: str) -> None:
    """Sign in and remember the session token."""
    handler = LoginHandler(account_gateway(), session_store())

    try:
        user = handler.handle(email, password)
    except StorefrontException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Signed in as {user.email}")


@click.command("logout")
def account_logout() -> None:
    """Forget the session token."""
    LogoutHandler(session_store()).handle()
    click.echo("Signed out.")


@click.command("whoami")
def account_whoami() -> None:
    """Show who is signed in."""
    context = current_context()
    if context.identity is None:
        click.echo("Not signed in.")
        return
    click.echo(context.identity.email)


@click.command("register")
@click.option("--email", required=True)
@click.option("--first-name", required=True)
@click.option("--last-name", required=True)
@click.password_option("--password", help="Password for the new account.")
def account_register(email: str, first_name: str, last_name: str, password: str) -> None:
    """Register a new account; a confirmation email follows."""
    handler = RegisterAccountHandler(account_gateway())

    try:
        handler.handle(email, password, first_name, last_name)
    except StorefrontException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Check {email} for a confirmation link.")


@click.command("confirm")
@click.option("--email", required=True)
@click.option("--token", required=True, help="Token from the confirmation link.")
def account_confirm(email: str, token: str) -> None:
    """Confirm a newly registered account."""
    handler = ConfirmAccountHandler(account_gateway())

    try:
        handler.handle(email, token)
    except StorefrontException as exc:
        raise click.ClickException(str(exc))

    click.echo("Account confirmed. You can sign in now.")


@click.command("reset-request")
@click.option("--email", required=True)
def account_reset_request(email: str) -> None:
    """Email a password reset link."""
    handler = RequestPasswordResetHandler(account_gateway())

    try:
        handler.handle(email)
    except StorefrontException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"If {email} has an account, a reset link is on its way.")


@click.command("reset-password")
@click.option("--email", required=True)
@click.option("--token", required=True, help="Token from the reset link.")
@click.option("--password", prompt=True, hide_input=True)
@click.option("--confirmation", prompt="Repeat password", hide_input=True)
def account_reset_password(email: str, token: str, password: str, confirmation: str) -> None:
    """Set a new password from a reset link and sign in."""
    handler = ResetPasswordHandler(account_gateway(), session_store())

    try:
        handler.handle(email, token, password, confirmation)
    except StorefrontException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Password changed. Signed in as {email}")
