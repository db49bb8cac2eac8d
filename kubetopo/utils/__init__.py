"""Utility functions for kubetopo."""

from kubetopo.utils.descriptions import get_node_description
from kubetopo.utils.messages import MessageLookup, lookup_message
from kubetopo.utils.selection import add_or_remove, toggle_filter_value

__all__ = [
    # Descriptions
    "get_node_description",
    # Messages
    "MessageLookup",
    "lookup_message",
    # Selection
    "add_or_remove",
    "toggle_filter_value",
]
