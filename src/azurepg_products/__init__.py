# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.
"""
Products demo for Azure Database for PostgreSQL with Azure Entra ID authentication.

The database password is a short-lived Entra access token. EntraConnectionProvider
caches the token and refreshes it when it is missing or close to expiry.

Example usage:
    from azurepg_products import EntraConnectionProvider, PostgresSettings

    provider = EntraConnectionProvider(PostgresSettings.from_env())
    with provider.connect() as conn:
        ...
"""

from .config import PostgresSettings
from .connection import EntraConnectionProvider
from .errors import (
    ConfigurationError,
    CredentialValueError,
    InvalidProductError,
    ProductNotFoundError,
    ProductsBaseError,
)

__all__ = [
    "ConfigurationError",
    "CredentialValueError",
    "EntraConnectionProvider",
    "InvalidProductError",
    "PostgresSettings",
    "ProductNotFoundError",
    "ProductsBaseError",
]
