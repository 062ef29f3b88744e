"""Shared table rendering for CLI commands."""

from __future__ import annotations

from collections.abc import Iterable

import click

from ims.domain.model.product import Product, render_header


def echo_products(products: Iterable[Product]) -> None:
    products = list(products)
    with_warranty = any(p.is_electronic for p in products)
    header = render_header(with_warranty)
    click.echo(header)
    click.echo("-" * len(header))
    for p in products:
        click.echo(p.render_row())
