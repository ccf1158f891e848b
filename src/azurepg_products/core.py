# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.
import logging
import time

from azure.core.credentials import AccessToken, TokenCredential
from azure.identity import DefaultAzureCredential
from psycopg2.extensions import make_dsn

from azurepg_products.config import DEFAULT_PORT, ENV_VARS, PostgresSettings
from azurepg_products.errors import ConfigurationError

logger = logging.getLogger(__name__)
AZURE_DB_FOR_POSTGRES_SCOPE = "https://ossrdbms-aad.database.windows.net/.default"
TOKEN_REFRESH_MARGIN = 5 * 60


def get_entra_token(credential: TokenCredential | None, scope: str = AZURE_DB_FOR_POSTGRES_SCOPE) -> AccessToken:
    """Acquires an Entra access token for Azure PostgreSQL.

    Parameters:
        credential (TokenCredential or None): Credential object used to obtain the token.
            If None, the default Azure credentials are used.
        scope (str): The scope for the token request.

    Returns:
        AccessToken: The token and its expiry, to be used as the database password.
    """
    logger.info("Acquiring Entra token for postgres password")

    credential = credential or DefaultAzureCredential()
    return credential.get_token(scope)


def token_needs_refresh(token: AccessToken | None, now: float | None = None) -> bool:
    """Returns True when ``token`` is missing or expires within the refresh margin."""
    if token is None:
        return True
    now = time.time() if now is None else now
    return token.expires_on - now < TOKEN_REFRESH_MARGIN


def render_connection_string(settings: PostgresSettings, password: str) -> str:
    """Renders a libpq connection string for ``settings`` with ``password``.

    Raises:
        ConfigurationError: For the first empty field, checked in the order
            host, database, user, password, sslmode.
    """
    params = {
        "host": settings.host,
        "database": settings.database,
        "user": settings.user,
        "password": password,
        "sslmode": settings.sslmode,
    }
    for field, value in params.items():
        if not value:
            raise ConfigurationError(field, ENV_VARS[field])

    return make_dsn(
        host=params["host"],
        port=DEFAULT_PORT,
        dbname=params["database"],
        user=params["user"],
        password=params["password"],
        sslmode=params["sslmode"],
    )
