import click

from storefront.infrastructure.cli.account_commands import (
    account_confirm,
    account_login,
    account_logout,
    account_register,
    account_reset_password,
    account_reset_request,
    account_whoami,
)
from storefront.infrastructure.cli.checkout_commands import (
    checkout_abandon,
    checkout_address,
    checkout_billing,
    checkout_complete,
    checkout_create,
    checkout_delivery,
    checkout_delivery_methods,
    checkout_gateway_command,
    checkout_pay,
    checkout_process,
    checkout_show,
)
from storefront.infrastructure.cli.product_commands import product_show
from storefront.infrastructure.cli.profile_commands import profile_show, profile_update
from storefront.infrastructure.config import configure_logging, get_settings


@click.group()
def cli() -> None:
    """Storefront: single-product checkout against a Saleor backend"""
    configure_logging(get_settings())


@cli.group()
def account() -> None:
    """Sign in, sign out and manage the account."""


@cli.group()
def product() -> None:
    """Show the product on sale."""


@cli.group()
def checkout() -> None:
    """Run a checkout step by step."""


@cli.group()
def profile() -> None:
    """Show or update the signed-in profile."""


# Register subcommands
account.add_command(account_confirm)
account.add_command(account_login)
account.add_command(account_logout)
account.add_command(account_register)
account.add_command(account_reset_password)
account.add_command(account_reset_request)
account.add_command(account_whoami)
product.add_command(product_show)
checkout.add_command(checkout_abandon)
checkout.add_command(checkout_address)
checkout.add_command(checkout_billing)
checkout.add_command(checkout_complete)
checkout.add_command(checkout_create)
checkout.add_command(checkout_delivery)
checkout.add_command(checkout_delivery_methods)
checkout.add_command(checkout_gateway_command)
checkout.add_command(checkout_pay)
checkout.add_command(checkout_process)
checkout.add_command(checkout_show)
profile.add_command(profile_show)
profile.add_command(profile_update)
