"""CLI commands for the product on sale."""

from __future__ import annotations

import click

from storefront.application.show_product import ShowProductHandler
from storefront.domain.exceptions import StorefrontException
from storefront.infrastructure.bootstrap import checkout_gateway, content_gateway
from storefront.infrastructure.cli.formatting import echo_pricing
from storefront.infrastructure.config import get_settings


@click.command("show")
def product_show() -> None:
    """Show the product, its price and estimated totals."""
    settings = get_settings()
    handler = ShowProductHandler(
        checkout_gateway(),
        content_gateway(),
        settings.variant_id,
        settings.quantity,
    )

    try:
        dto = handler.handle()
    except StorefrontException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"{dto.name}  ({dto.base_price} x {dto.quantity})")
    if dto.description:
        click.echo()
        click.echo(dto.description)
    if dto.image_url:
        click.echo()
        click.echo(f"Image: {dto.image_url}")
    click.echo()
    echo_pricing(dto.pricing)
