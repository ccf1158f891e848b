# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.
"""Connection settings for the products database."""

import os
from collections.abc import Mapping
from dataclasses import dataclass

from azurepg_products.errors import ConfigurationError

DEFAULT_SSLMODE = "require"
DEFAULT_PORT = 5432

# Field name -> environment variable, in the order fields are validated.
ENV_VARS = {
    "host": "PGHOST",
    "database": "PGDATABASE",
    "user": "PGUSER",
    "password": "PGPASSWORD",
    "sslmode": "PGSSLMODE",
}


@dataclass(frozen=True)
class PostgresSettings:
    """Connection settings read once at startup.

    ``password`` is only used when connecting without Entra authentication.
    """

    host: str = ""
    database: str = ""
    user: str = ""
    password: str = ""
    sslmode: str = DEFAULT_SSLMODE

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "PostgresSettings":
        environ = os.environ if environ is None else environ
        return cls(
            host=environ.get("PGHOST", ""),
            database=environ.get("PGDATABASE", ""),
            user=environ.get("PGUSER", ""),
            password=environ.get("PGPASSWORD", ""),
        )

    def require(self, *fields: str) -> None:
        """Raise ConfigurationError for the first empty field of ``fields``."""
        for field in fields:
            if not getattr(self, field):
                raise ConfigurationError(field, ENV_VARS[field])
