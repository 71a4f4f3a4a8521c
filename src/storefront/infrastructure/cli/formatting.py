"""Shared terminal output for checkout commands."""

from __future__ import annotations

import click

from storefront.application.dto import AddressDTO, CheckoutDTO, PricingDTO


def echo_pricing(pricing: PricingDTO) -> None:
    click.echo(f"  {'Subtotal':<20} {pricing.subtotal:>12}")
    click.echo(f"  {'Tax':<20} {pricing.tax:>12}")
    click.echo(f"  {'-'*33}")
    click.echo(f"  {'Total':<20} {pricing.total:>12}")


def _format_address(address: AddressDTO) -> str:
    street = address.street1 + (f", {address.street2}" if address.street2 else "")
    return (
        f"{address.first_name} {address.last_name}".strip()
        + f", {street}, {address.city}, {address.region} {address.postal_code}, {address.country}"
    )


def echo_checkout(dto: CheckoutDTO) -> None:
    """Shared formatting for displaying a checkout session."""
    click.echo(f"Checkout {dto.key}  (state={dto.state}, payment={dto.payment_state})")
    if dto.order_id:
        click.echo(f"Order:    {dto.order_id}")
    if dto.email:
        click.echo(f"Email:    {dto.email}")
    if dto.shipping_address:
        click.echo(f"Ship to:  {_format_address(dto.shipping_address)}")
    if dto.billing_address:
        click.echo(f"Bill to:  {_format_address(dto.billing_address)}")
    if dto.delivery_method_id:
        click.echo(f"Delivery: {dto.delivery_method_id}")
    click.echo()

    click.echo(f"  {'Product':<24} {'Qty':>8}")
    click.echo(f"  {'-'*33}")
    for line in dto.lines:
        click.echo(f"  {line.product_name:<24} {line.quantity:>8}")
    click.echo(f"  {'-'*33}")
    echo_pricing(dto.pricing)

    if dto.error:
        click.echo()
        label = "!!" if dto.error.persistent else "Last error"
        click.echo(f"{label} ({dto.error.step}): {dto.error.message}")
