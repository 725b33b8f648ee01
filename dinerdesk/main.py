"""Entry point for the dinerdesk Textual apps."""

from __future__ import annotations

import argparse
import logging

from dinerdesk.admin_app import DinerDeskApp
from dinerdesk.config import resolve_db_path, setup_logging
from dinerdesk.persistence import SlotStore
from dinerdesk.public_app import PublicMenuApp
from dinerdesk.state import Controller


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="dinerdesk", description="Restaurant menu, orders and kitchen tickets.")
    parser.add_argument("--db", default=None, help="SQLite file for menu, gallery and kitchen tickets.")
    parser.add_argument(
        "--public",
        metavar="URL",
        default=None,
        help="Open the read-only guest menu for a table link, e.g. 'http://host/menu.html?table=4'.",
    )
    parser.add_argument("--debug", action="store_true", help="Verbose debug log.")
    return parser


def main(argv: list[str] | None = None) -> None:
    """Run the admin app, or the guest menu when --public is given."""
    args = build_parser().parse_args(argv)
    setup_logging(logging.DEBUG if args.debug else logging.INFO)

    controller = Controller(SlotStore(args.db or resolve_db_path()))
    if args.public:
        state = controller.state
        PublicMenuApp(state.catalog, state.gallery, args.public).run()
        return
    DinerDeskApp(controller).run()


if __name__ == "__main__":
    main()
