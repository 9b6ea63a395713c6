"""
Calculator Catalog

Every calculator is declared with the @calculator decorator in one of the
category modules below; importing this package registers all of them in
the shared registry, in catalog order.
"""

from calculateshub.catalog import (  # noqa: F401
    financial,
    business,
    ecommerce,
    mathematics,
    conversions,
    miscellaneous,
)
from calculateshub.catalog.registry import CalculatorRegistry, calculator, registry

__all__ = ["CalculatorRegistry", "calculator", "registry"]
