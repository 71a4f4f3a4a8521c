"""CLI commands for the signed-in profile."""

from __future__ import annotations

import click

from storefront.application.update_profile import ShowProfileHandler, UpdateProfileHandler
from storefront.domain.exceptions import ProfileUpdateError, StorefrontException
from storefront.domain.model.profile import PasswordChange, ProfileChangeSet
from storefront.domain.model.value_objects import AddressInput
from storefront.infrastructure.bootstrap import account_gateway
from storefront.infrastructure.cli.account_commands import current_context


@click.command("show")
def profile_show() -> None:
    """Show the signed-in profile."""
    handler = ShowProfileHandler(account_gateway())

    try:
        dto = handler.handle(current_context())
    except StorefrontException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Email: {dto.email}")
    click.echo(f"Name:  {dto.first_name} {dto.last_name}".rstrip())
    address = dto.default_shipping_address
    if address is None:
        click.echo("Default shipping address: none")
        return
    click.echo(
        f"Default shipping address: {address.street1}, {address.city}, "
        f"{address.region} {address.postal_code}, {address.country}"
    )


@click.command("update")
@click.option("--current-password", prompt=True, hide_input=True)
@click.option("--first-name", default=None)
@click.option("--last-name", default=None)
@click.option("--address-name", default="", help="Recipient; defaults to the account name.")
@click.option("--street", default=None)
@click.option("--street2", default="")
@click.option("--city", default="")
@click.option("--state", "region", default="")
@click.option("--zip", "postal_code", default="")
@click.option("--country", default="US", show_default=True)
@click.option("--new-password", default=None)
@click.option("--confirm-password", default=None)
def profile_update(
    current_password: str,
    first_name: str | None,
    last_name: str | None,
    address_name: str,
    street: str | None,
    street2: str,
    city: str,
    region: str,
    postal_code: str,
    country: str,
    new_password: str | None,
    confirm_password: str | None,
) -> None:
    """Change name, default shipping address and/or password.

    The current password is always required.
    """
    try:
        password = (
            PasswordChange(new_password or "", confirm_password or "")
            if new_password is not None or confirm_password is not None
            else None
        )
        address = (
            AddressInput(
                full_name=address_name,
                street1=street,
                street2=street2,
                city=city,
                region=region,
                postal_code=postal_code,
                country=country,
            )
            if street is not None
            else None
        )
        changes = ProfileChangeSet(
            current_password=current_password,
            first_name=first_name,
            last_name=last_name,
            shipping_address=address,
            password=password,
        )
        result = UpdateProfileHandler(account_gateway()).handle(current_context(), changes)
    except ProfileUpdateError as exc:
        applied = ", ".join(exc.applied) or "nothing"
        raise click.ClickException(f"{exc.step}: {exc.message} (already saved: {applied})")
    except StorefrontException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Profile updated: {', '.join(result.applied)}")
