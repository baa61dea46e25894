"""Object facade over the Quickbase field REST API."""
from qb_field.attributes import FieldAttribute
from qb_field.client import QuickBase, is_api_client
from qb_field.config import load_config, resolve_defaults
from qb_field.exceptions import QuickbaseError
from qb_field.field import QBField
from qb_field.version import VERSION

__all__ = [
    "VERSION",
    "FieldAttribute",
    "QBField",
    "QuickBase",
    "QuickbaseError",
    "is_api_client",
    "load_config",
    "resolve_defaults",
]
