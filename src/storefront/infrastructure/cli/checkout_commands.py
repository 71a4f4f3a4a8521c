"""CLI commands for the CheckoutSession aggregate.

Each command runs one checkout step against the session stored under
``--key``. ``pay`` chains transaction, processing and completion the
way the payment form does.
"""

from __future__ import annotations

import json

import click

from storefront.application.complete_checkout import CompleteCheckoutHandler
from storefront.application.create_checkout import CreateCheckoutHandler
from storefront.application.dto import TransactionDTO
from storefront.application.initialize_payment_gateway import (
    InitializePaymentGatewayHandler,
)
from storefront.application.initialize_transaction import InitializeTransactionHandler
from storefront.application.process_transaction import ProcessTransactionHandler
from storefront.application.set_billing_details import SetBillingDetailsHandler
from storefront.application.set_delivery_method import (
    ListDeliveryMethodsHandler,
    SetDeliveryMethodHandler,
)
from storefront.application.set_shipping_address import SetShippingAddressHandler
from storefront.application.show_checkout import (
    AbandonCheckoutHandler,
    ShowCheckoutHandler,
)
from storefront.domain.exceptions import GatewayError, StorefrontException
from storefront.domain.model.value_objects import AddressInput, BillingInput
from storefront.infrastructure.bootstrap import checkout_gateway, checkout_repository
from storefront.infrastructure.cli.account_commands import current_context
from storefront.infrastructure.cli.formatting import echo_checkout
from storefront.infrastructure.config import get_settings

key_option = click.option("--key", required=True, help="Checkout session key.")


def _address_options(func):
    for option in reversed(
        [
            click.option("--street", required=True, help="Street address."),
            click.option("--street2", default="", help="Apartment, suite, etc."),
            click.option("--city", required=True),
            click.option("--state", "region", required=True, help="State code, e.g. CA."),
            click.option("--zip", "postal_code", required=True, help="5-digit ZIP code."),
            click.option("--country", default="US", show_default=True),
        ]
    ):
        func = option(func)
    return func


def _step_failed(key: str, exc: StorefrontException) -> click.ClickException:
    """Prefer the message recorded on the session for remote failures."""
    if isinstance(exc, GatewayError):
        session = checkout_repository().get(key)
        if session is not None and session.last_error is not None:
            return click.ClickException(session.last_error.message)
    return click.ClickException(str(exc))


@click.command("create")
def checkout_create() -> None:
    """Start a checkout for the product on sale."""
    settings = get_settings()
    handler = CreateCheckoutHandler(
        checkout_repo=checkout_repository(),
        checkout_gateway=checkout_gateway(),
        variant_id=settings.variant_id,
        quantity=settings.quantity,
    )

    try:
        dto = handler.handle()
    except StorefrontException as exc:
        raise click.ClickException(str(exc))

    echo_checkout(dto)


@click.command("show")
@key_option
def checkout_show(key: str) -> None:
    """Show a checkout session."""
    handler = ShowCheckoutHandler(checkout_repository())

    try:
        dto = handler.handle(key)
    except StorefrontException as exc:
        raise click.ClickException(str(exc))

    echo_checkout(dto)


@click.command("address")
@key_option
@click.option("--name", "full_name", required=True, help="Full name of the recipient.")
@_address_options
def checkout_address(
    key: str,
    full_name: str,
    street: str,
    street2: str,
    city: str,
    region: str,
    postal_code: str,
    country: str,
) -> None:
    """Set the shipping address; prices are recalculated with tax."""
    handler = SetShippingAddressHandler(checkout_repository(), checkout_gateway())
    address = AddressInput(
        full_name=full_name,
        street1=street,
        street2=street2,
        city=city,
        region=region,
        postal_code=postal_code,
        country=country,
    )

    try:
        dto = handler.handle(key, address)
    except StorefrontException as exc:
        raise _step_failed(key, exc)

    echo_checkout(dto)


@click.command("delivery-methods")
@key_option
def checkout_delivery_methods(key: str) -> None:
    """List the delivery methods available for the shipping address."""
    handler = ListDeliveryMethodsHandler(checkout_repository(), checkout_gateway())

    try:
        methods = handler.handle(key)
    except StorefrontException as exc:
        raise click.ClickException(str(exc))

    if not methods:
        click.echo("No delivery methods available.")
        return
    click.echo(f"  {'ID':<36} {'Name':<24} {'Price':>10}")
    click.echo(f"  {'-'*72}")
    for method in methods:
        click.echo(f"  {method.id:<36} {method.name:<24} {method.price:>10}")


@click.command("delivery")
@key_option
@click.option("--method", "method_id", required=True, help="Delivery method ID.")
def checkout_delivery(key: str, method_id: str) -> None:
    """Choose a delivery method."""
    handler = SetDeliveryMethodHandler(checkout_repository(), checkout_gateway())

    try:
        dto = handler.handle(key, method_id)
    except StorefrontException as exc:
        raise _step_failed(key, exc)

    echo_checkout(dto)


@click.command("billing")
@key_option
@click.option("--first-name", required=True)
@click.option("--last-name", required=True)
@_address_options
def checkout_billing(
    key: str,
    first_name: str,
    last_name: str,
    street: str,
    street2: str,
    city: str,
    region: str,
    postal_code: str,
    country: str,
) -> None:
    """Attach your email and the billing address (sign-in required)."""
    handler = SetBillingDetailsHandler(checkout_repository(), checkout_gateway())
    billing = BillingInput(
        first_name=first_name,
        last_name=last_name,
        street1=street,
        street2=street2,
        city=city,
        region=region,
        postal_code=postal_code,
        country=country,
    )

    try:
        dto = handler.handle(key, current_context(), billing)
    except StorefrontException as exc:
        raise _step_failed(key, exc)

    echo_checkout(dto)


@click.command("gateway")
@key_option
def checkout_gateway_command(key: str) -> None:
    """Initialize the payment gateway for the amount due."""
    handler = InitializePaymentGatewayHandler(checkout_repository(), checkout_gateway())

    try:
        dto = handler.handle(key, current_context())
    except StorefrontException as exc:
        raise _step_failed(key, exc)

    click.echo(f"Payment gateway {dto.gateway_id} ready for {dto.amount}")
    if dto.data:
        click.echo(json.dumps(dto.data, indent=2, default=str))


def _echo_transaction(dto: TransactionDTO) -> None:
    click.echo(f"Transaction {dto.transaction_id}  (state={dto.state}, event={dto.event_type})")
    if dto.action_required:
        click.echo("The payment processor needs you to confirm this payment.")
        if dto.data:
            click.echo(json.dumps(dto.data, indent=2, default=str))
        click.echo("Run 'checkout process' once you have done so.")


@click.command("process")
@key_option
def checkout_process(key: str) -> None:
    """Process an initialized transaction (e.g. after 3-D Secure)."""
    handler = ProcessTransactionHandler(checkout_repository(), checkout_gateway())

    try:
        dto = handler.handle(key, current_context())
    except StorefrontException as exc:
        raise _step_failed(key, exc)

    _echo_transaction(dto)


@click.command("complete")
@key_option
def checkout_complete(key: str) -> None:
    """Place the order for a processed checkout."""
    handler = CompleteCheckoutHandler(checkout_repository(), checkout_gateway())

    try:
        dto = handler.handle(key, current_context())
    except StorefrontException as exc:
        raise _step_failed(key, exc)

    echo_checkout(dto)


@click.command("pay")
@key_option
@click.option(
    "--payment-method",
    required=True,
    help="Payment method reference from the payment processor, e.g. pm_card_visa.",
)
def checkout_pay(key: str, payment_method: str) -> None:
    """Pay and place the order: transaction, processing, completion."""
    repo = checkout_repository()
    gateway = checkout_gateway()
    context = current_context()

    try:
        transaction = InitializeTransactionHandler(repo, gateway).handle(
            key, context, payment_method
        )
        if not transaction.action_required:
            transaction = ProcessTransactionHandler(repo, gateway).handle(key, context)
        if transaction.action_required:
            _echo_transaction(transaction)
            return
        dto = CompleteCheckoutHandler(repo, gateway).handle(key, context)
    except StorefrontException as exc:
        raise _step_failed(key, exc)

    echo_checkout(dto)


@click.command("abandon")
@key_option
def checkout_abandon(key: str) -> None:
    """Forget a checkout session."""
    handler = AbandonCheckoutHandler(checkout_repository())

    try:
        handler.handle(key)
    except StorefrontException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Checkout {key} abandoned.")
