# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""
Common utility functions and test credentials for the products service tests.
"""

import time
from datetime import datetime, timezone

from azure.core.credentials import AccessToken, TokenCredential
from azure.core.exceptions import ClientAuthenticationError

from azurepg_products.config import PostgresSettings

TEST_SETTINGS = PostgresSettings(host="db.example.com", database="shop", user="admin")


class TestTokenCredential(TokenCredential):
    """Test token credential that hands out tokens expiring ``expires_in`` seconds from now."""

    __test__ = False

    def __init__(self, token: str = "abc123", expires_in: int = 3600, delay: float = 0.0):
        self._token = token
        self._expires_in = expires_in
        self._delay = delay
        self._call_count = 0
        self.scopes = []

    def get_token(self, *scopes, **kwargs) -> AccessToken:
        """Return a fake access token."""
        self._call_count += 1
        self.scopes.append(scopes)
        if self._delay:
            time.sleep(self._delay)
        return AccessToken(self._token, int(time.time()) + self._expires_in)

    def get_call_count(self) -> int:
        """Return the number of times get_token was called."""
        return self._call_count


class FailingTokenCredential(TokenCredential):
    """Test token credential whose token requests always fail."""

    def __init__(self):
        self.error = ClientAuthenticationError("authentication failed")

    def get_token(self, *scopes, **kwargs) -> AccessToken:
        raise self.error


def make_product_row(**overrides):
    """Return a row shaped like the random product query result."""
    row = {
        "id": 7,
        "product_type_id": 2,
        "supplier_id": 3,
        "sku": "SKU-007",
        "name": "Flux Capacitor",
        "price": 19.99,
        "description": "Makes time travel possible",
        "image": "",
        "digital": False,
        "unit_description": None,
        "package_dimensions": "10x10x10",
        "weight_in_pounds": "2.5",
        "reorder_amount": 5,
        "status": "active",
        "requires_shipping": True,
        "warehouse_location": None,
        "created_at": datetime(2024, 1, 2, 3, 4, 5, tzinfo=timezone.utc),
        "updated_at": datetime(2024, 2, 3, 4, 5, 6, tzinfo=timezone.utc),
    }
    row.update(overrides)
    return tuple(row.values())
