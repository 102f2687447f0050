"""Logic kind resolvers.

Each module in this package defines resolvers using the @register_logic
decorator. Logic kinds are organized by category:

- text: STATIC, VARIABLE, BOUND_NAME
- datetime: DATE
- currency: CURRENCY_ENG, CURRENCY_CHI, CURRENCY_NUM

Import this module to register all logic kinds with the registry.
"""

from template_resolver.registry import get_registry

# Import all logic modules to trigger registration (noqa: F401 for side-effect imports)
from template_resolver.logic import (  # noqa: F401
    currency,
    datetime,
    text,
)

__all__ = ["get_registry"]
