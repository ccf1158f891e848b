# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.


class ProductsBaseError(Exception):
    """Base class for all custom exceptions in the project."""

    pass


class ConfigurationError(ProductsBaseError):
    """Raised when a required connection setting resolves empty."""

    def __init__(self, field: str, env_var: str):
        super().__init__(f"missing environment variable {env_var}")
        self.field = field
        self.env_var = env_var


class CredentialValueError(ProductsBaseError):
    """Raised when token credential is invalid."""

    pass


class ProductNotFoundError(ProductsBaseError):
    """Raised when the products table yields no row."""

    pass


class InvalidProductError(ProductsBaseError):
    """Raised when a product row has NULL in a required column."""

    pass
