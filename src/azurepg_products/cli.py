# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.
"""
Command line entry point.

Commands:
    connection-string  print a connection string built from PGHOST, PGDATABASE, PGUSER, PGPASSWORD
    token              print an Entra access token for Azure Database for PostgreSQL
    serve              run the HTTP server
    ping               open a token-backed connection and ping the database
    tables             list the tables in the public schema
"""

import argparse
import logging
import sys

import psycopg2
from azure.core.exceptions import AzureError
from dotenv import load_dotenv

from azurepg_products.app import create_app
from azurepg_products.config import PostgresSettings
from azurepg_products.connection import EntraConnectionProvider
from azurepg_products.core import get_entra_token, render_connection_string
from azurepg_products.errors import ProductsBaseError
from azurepg_products.products import list_tables, ping

logger = logging.getLogger(__name__)


def cmd_connection_string(args: argparse.Namespace, settings: PostgresSettings) -> None:
    print(render_connection_string(settings, settings.password))


def cmd_token(args: argparse.Namespace, settings: PostgresSettings) -> None:
    print(get_entra_token(None).token)


def cmd_serve(args: argparse.Namespace, settings: PostgresSettings) -> None:
    app = create_app(EntraConnectionProvider(settings))
    print(f"Listening on {args.host}:{args.port}")
    app.run(host=args.host, port=args.port)


def cmd_ping(args: argparse.Namespace, settings: PostgresSettings) -> None:
    with EntraConnectionProvider(settings).connect() as conn:
        ping(conn)
    print("Connection successful!")


def cmd_tables(args: argparse.Namespace, settings: PostgresSettings) -> None:
    with EntraConnectionProvider(settings).connect() as conn:
        for table_name in list_tables(conn):
            print(table_name)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="azurepg-products",
        description="Products demo backed by Azure Database for PostgreSQL with Entra ID authentication",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="enable debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("connection-string", help="print the connection string").set_defaults(
        func=cmd_connection_string
    )
    subparsers.add_parser("token", help="print an Entra access token").set_defaults(func=cmd_token)

    serve = subparsers.add_parser("serve", help="run the web server")
    serve.add_argument("--host", default="0.0.0.0", help="listen address (default: 0.0.0.0)")
    serve.add_argument("--port", type=int, default=8080, help="listen port (default: 8080)")
    serve.set_defaults(func=cmd_serve)

    subparsers.add_parser("ping", help="ping the database").set_defaults(func=cmd_ping)
    subparsers.add_parser("tables", help="list the tables in the database").set_defaults(func=cmd_tables)
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )

    # Load environment variables from .env file
    load_dotenv()
    settings = PostgresSettings.from_env()

    try:
        args.func(args, settings)
    except (ProductsBaseError, AzureError, psycopg2.Error) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    return 0
