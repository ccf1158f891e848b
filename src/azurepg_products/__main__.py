# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.
import sys

from azurepg_products.cli import main

if __name__ == "__main__":
    sys.exit(main())
