# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.
import logging
import threading
from collections.abc import Iterator
from contextlib import closing, contextmanager

import psycopg2
from azure.core.credentials import AccessToken, TokenCredential
from azure.identity import DefaultAzureCredential
from psycopg2.extensions import connection

from azurepg_products.config import PostgresSettings
from azurepg_products.core import (
    AZURE_DB_FOR_POSTGRES_SCOPE,
    get_entra_token,
    render_connection_string,
    token_needs_refresh,
)
from azurepg_products.errors import CredentialValueError

logger = logging.getLogger(__name__)


class EntraConnectionProvider:
    """Builds connection strings that use a cached Entra token as the password.

    One provider is meant to live as long as the process. The cached token is
    refreshed when it is missing or expires within five minutes, so that a
    connection opened right after rendering does not race the expiry during
    authentication. A lock covers the check, the refresh and the read of the
    token, so concurrent callers share a single refresh.

    Parameters:
        settings (PostgresSettings): host, database and user to connect with.
        credential (TokenCredential or None): Credential used for token acquisition.
            If None, a DefaultAzureCredential is created on first use.

    Raises:
        CredentialValueError: If the provided credential is not a valid TokenCredential.
    """

    def __init__(self, settings: PostgresSettings, credential: TokenCredential | None = None):
        if credential is not None and not isinstance(credential, TokenCredential):
            raise CredentialValueError("credential must be a TokenCredential")
        self.settings = settings
        self._credential = credential
        self._token: AccessToken | None = None
        self._lock = threading.Lock()

    def _refresh_if_needed(self) -> AccessToken:
        # Caller holds self._lock.
        if token_needs_refresh(self._token):
            if self._credential is None:
                self._credential = DefaultAzureCredential()
            self._token = get_entra_token(self._credential, AZURE_DB_FOR_POSTGRES_SCOPE)
        else:
            logger.debug("Reusing cached Entra token")
        return self._token

    def token(self) -> AccessToken:
        """Returns a token valid for at least the refresh margin."""
        with self._lock:
            return self._refresh_if_needed()

    def get_connection_string(self) -> str:
        """Returns a connection string with a fresh enough token as the password.

        Raises:
            ConfigurationError: If host, database or user is empty, or the
                credential returned an empty token.
        """
        self.settings.require("host", "database", "user")
        with self._lock:
            token = self._refresh_if_needed()
            return render_connection_string(self.settings, token.token)

    @contextmanager
    def connect(self) -> Iterator[connection]:
        """Opens a connection and closes it when the block exits."""
        with closing(psycopg2.connect(self.get_connection_string())) as conn:
            yield conn
