"""
Request schemas, field binding and schema registry.
"""

from .registry import SchemaRegistry
from .request_schema import PAYLOAD_ERROR_KEY, BindingResult, FieldBinder, RequestSchema

__all__ = [
    "RequestSchema",
    "FieldBinder",
    "BindingResult",
    "SchemaRegistry",
    "PAYLOAD_ERROR_KEY",
]
