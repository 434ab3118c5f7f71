"""
Browse the catalog from a terminal.

Usage:
  catalog-browser list [--search TEXT] [--category NAME ...] [--brand NAME ...]
                       [--min-price N] [--max-price N] [--page N] [--page-size N] [--json]
  catalog-browser show PRODUCT_ID [--json]
  catalog-browser facets [--json]

Sources follow the same environment configuration as the server
(SUPABASE_URL, CATALOG_API_BASE, FEATURE_FLAGS=mock_api, ...).
"""
from __future__ import annotations

import argparse
import asyncio
from collections.abc import Sequence

from rich.console import Console
from rich.table import Table

from catalog_browser.conf.config import Settings, get_settings
from catalog_browser.core.logging import setup_logging
from catalog_browser.core.models import FacetOptions, Product, ProductQuery, ResultEnvelope
from catalog_browser.services.catalog.runtime import CatalogRuntime
from catalog_browser.services.exceptions import CatalogUnavailableError, ProductNotFoundError


def _price(value: str) -> float:
    try:
        price = float(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid price: {value!r}") from None
    if not price >= 0:
        raise argparse.ArgumentTypeError(f"price must be a non-negative number, got {value!r}")
    return price


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="catalog-browser", description=__doc__.split("\n")[1])
    parser.add_argument("-v", "--verbose", action="store_true", help="log source selection and fallbacks")
    sub = parser.add_subparsers(dest="command", required=True)

    list_cmd = sub.add_parser("list", help="list products")
    list_cmd.add_argument("--search", default="")
    list_cmd.add_argument("--category", action="append", dest="categories", default=[])
    list_cmd.add_argument("--brand", action="append", dest="brands", default=[])
    list_cmd.add_argument("--min-price", type=_price, dest="price_min")
    list_cmd.add_argument("--max-price", type=_price, dest="price_max")
    list_cmd.add_argument("--page", type=int, default=1)
    list_cmd.add_argument("--page-size", type=int, dest="page_size")
    list_cmd.add_argument("--json", action="store_true")

    show_cmd = sub.add_parser("show", help="show one product")
    show_cmd.add_argument("product_id")
    show_cmd.add_argument("--json", action="store_true")

    facets_cmd = sub.add_parser("facets", help="show filter values")
    facets_cmd.add_argument("--json", action="store_true")
    return parser


def render_envelope(console: Console, envelope: ResultEnvelope) -> None:
    table = Table(title=f"Products - page {envelope.page}/{envelope.pages} ({envelope.total} total)")
    table.add_column("ID", style="dim")
    table.add_column("Name")
    table.add_column("Brand")
    table.add_column("Category")
    table.add_column("Price", justify="right")
    table.add_column("Rating", justify="right")
    table.add_column("Stock", justify="right")
    for product in envelope.results:
        table.add_row(
            product.id,
            product.name,
            product.brand,
            product.category,
            f"{product.price:.2f}",
            f"{product.rating:.1f}",
            str(product.stock),
        )
    console.print(table)


def render_product(console: Console, product: Product) -> None:
    table = Table(title=product.name, show_header=False)
    table.add_column("Field", style="bold")
    table.add_column("Value")
    for field in ("id", "brand", "category", "price", "rating", "stock", "image", "description"):
        table.add_row(field, str(getattr(product, field)))
    for key, value in product.attributes.items():
        table.add_row(key, str(value))
    console.print(table)


def render_facets(console: Console, facets: FacetOptions) -> None:
    console.print(f"[bold]Categories:[/bold] {', '.join(facets.categories)}")
    console.print(f"[bold]Brands:[/bold] {', '.join(facets.brands)}")
    console.print(f"[bold]Price:[/bold] {facets.price.min:.2f} - {facets.price.max:.2f}")


async def run_command(args: argparse.Namespace, settings: Settings, console: Console) -> int:
    async with CatalogRuntime(settings) as runtime:
        resolver = runtime.resolver

        if args.command == "list":
            query = ProductQuery(
                search=args.search,
                categories=args.categories,
                brands=args.brands,
                price_min=args.price_min,
                price_max=args.price_max,
                page=args.page,
                page_size=args.page_size or settings.DEFAULT_PAGE_SIZE,
            )
            envelope = await resolver.list_products(query)
            if args.json:
                console.print_json(data=envelope.to_wire())
            else:
                render_envelope(console, envelope)
            return 0

        if args.command == "show":
            try:
                product = await resolver.get_product(args.product_id)
            except ProductNotFoundError as e:
                console.print(f"[red]{e}[/red]")
                return 1
            if args.json:
                console.print_json(data=product.model_dump())
            else:
                render_product(console, product)
            return 0

        facets = await resolver.get_facets()
        if args.json:
            console.print_json(data=facets.model_dump())
        else:
            render_facets(console, facets)
        return 0


def main(
    argv: Sequence[str] | None = None,
    *,
    settings: Settings | None = None,
    console: Console | None = None,
) -> int:
    args = build_parser().parse_args(argv)
    settings = settings or get_settings()
    console = console or Console()

    setup_logging(level=settings.LOG_LEVEL if args.verbose else "WARNING", json_format=settings.LOG_JSON)

    try:
        return asyncio.run(run_command(args, settings, console))
    except CatalogUnavailableError as e:
        console.print(f"[red]{e}[/red]")
        return 2


if __name__ == "__main__":
    raise SystemExit(main())
