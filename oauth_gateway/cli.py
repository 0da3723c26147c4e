# oauth_gateway/cli.py (async version)

"""
Administration commands.

Usage:
  python -m oauth_gateway.cli create-client --name "Partner" --request-limit 1000 \
    --redirect https://partner.example/callback
  python -m oauth_gateway.cli seed
"""

import argparse
import asyncio
import logging
from typing import List, Optional

from oauth_gateway.adapters.outbound.persistence.database import get_db_context
from oauth_gateway.adapters.outbound.persistence.repositories.client_repository import client_repository
from oauth_gateway.adapters.outbound.persistence.seeds import run_all_seeds

logger = logging.getLogger(__name__)


async def create_client(name: str, request_limit: Optional[int], redirect_uris: List[str]) -> dict:
    async with get_db_context() as db:
        return await client_repository.create_with_credentials(
            db, name=name, request_limit=request_limit, redirect_uris=redirect_uris
        )


async def seed() -> None:
    async with get_db_context() as db:
        await run_all_seeds(db)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="oauth_gateway.cli", description="OAuth gateway administration")
    commands = parser.add_subparsers(dest="command", required=True)

    create = commands.add_parser("create-client", help="Register a client and print its credentials")
    create.add_argument("--name", required=True, help="Display name of the client")
    create.add_argument("--request-limit", type=int, default=None, help="Requests allowed per window")
    create.add_argument("--redirect", action="append", default=[], dest="redirect_uris",
                        help="Redirect URI to register (repeatable)")

    commands.add_parser("seed", help="Create the default scopes")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=logging.INFO)

    if args.command == "create-client":
        credentials = asyncio.run(create_client(args.name, args.request_limit, args.redirect_uris))
        # The secret cannot be recovered later; only its hash is stored
        print(f"client_id={credentials['client_id']}")
        print(f"client_secret={credentials['client_secret']}")
    elif args.command == "seed":
        asyncio.run(seed())
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
