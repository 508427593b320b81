"""Utility modules for the response cache."""

from .graphql import OperationDefinition, parse_operations, select_operation

__all__ = [
    "OperationDefinition",
    "parse_operations",
    "select_operation",
]
