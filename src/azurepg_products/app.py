# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.
"""
HTTP front end for the products database.

Routes:
    GET /healthz  current server time, RFC 3339
    GET /         one random product as JSON
    GET /image    not implemented
"""

import logging
from datetime import datetime

import psycopg2
from azure.core.exceptions import AzureError
from flask import Flask, Response, request

from azurepg_products.connection import EntraConnectionProvider
from azurepg_products.errors import ProductsBaseError
from azurepg_products.products import fetch_random_product

logger = logging.getLogger(__name__)

# Routes answer every method, not only GET.
METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE"]


def _text(message: str, status: int) -> Response:
    return Response(message + "\n", status=status, mimetype="text/plain")


def create_app(provider: EntraConnectionProvider) -> Flask:
    """Builds the Flask application around a single connection provider."""
    app = Flask(__name__)

    @app.before_request
    def log_request():
        logger.info(
            "httpLog remoteAddr=%s method=%s url=%s",
            request.remote_addr,
            request.method,
            request.url,
        )

    @app.route("/healthz", methods=METHODS)
    def healthz():
        return _text(datetime.now().astimezone().isoformat(timespec="seconds"), 200)

    # Unmatched paths fall through to the product route.
    @app.route("/", defaults={"path": ""}, methods=METHODS)
    @app.route("/<path:path>", methods=METHODS)
    def random_product(path: str):
        try:
            with provider.connect() as conn:
                try:
                    product = fetch_random_product(conn)
                except (psycopg2.Error, ProductsBaseError):
                    logger.exception("Error fetching product")
                    return _text("Error fetching product", 500)
        except (psycopg2.Error, AzureError, ProductsBaseError):
            logger.exception("Database connection error")
            return _text("Database connection error", 500)

        try:
            body = product.to_json()
        except (TypeError, ValueError):
            logger.exception("Error encoding JSON")
            return _text("Error encoding JSON", 500)
        return Response(body, status=200, mimetype="application/json")

    @app.route("/image", methods=METHODS)
    def image():
        return _text("Not implemented", 501)

    return app
