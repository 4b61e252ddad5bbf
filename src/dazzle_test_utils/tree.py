"""
Instance tree walker.

Walks the renderer's private instance tree depth-first and returns the
public instances (component objects and DOM nodes) that satisfy a
predicate, in document order. Instances without a public instance
(function components, forward refs) contribute no entry, but their
rendered children are visited in place.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from enum import StrEnum
from typing import Any

from dazzle_test_utils.dom import Node
from dazzle_test_utils.errors import InvalidRootError
from dazzle_test_utils.runtime.instances import RenderedInstance, get_internal_instance

logger = logging.getLogger(__name__)

Predicate = Callable[[Any], bool]


class RootCategory(StrEnum):
    """What a value passed as a traversal root turned out to be."""

    INSTANCE = "instance"
    NULL_LIKE = "null_like"
    ARRAY = "array"
    DOM_NODE = "dom_node"
    PRIMITIVE = "primitive"
    OBJECT = "object"
    OTHER = "other"


def _is_null_like(value: Any) -> bool:
    # None, False, '' and 0 -- but not empty containers
    if value is None or value is False:
        return True
    return isinstance(value, (str, int, float)) and not value


def classify_root(value: Any) -> RootCategory:
    """Resolve the category of a would-be root once, up front."""
    if _is_null_like(value):
        return RootCategory.NULL_LIKE
    internal = get_internal_instance(value)
    if internal is not None and internal.is_composite:
        return RootCategory.INSTANCE
    if isinstance(value, (list, tuple)):
        return RootCategory.ARRAY
    if isinstance(value, Node):
        return RootCategory.DOM_NODE
    if isinstance(value, (str, int, float, bool)):
        return RootCategory.PRIMITIVE
    if isinstance(value, dict) or getattr(value, "__dict__", None):
        return RootCategory.OBJECT
    return RootCategory.OTHER


def describe_received(value: Any) -> str:
    """Human-readable description of an invalid root for error messages."""
    category = classify_root(value)
    if category == RootCategory.ARRAY:
        return "an array"
    if category == RootCategory.DOM_NODE:
        return "a DOM node"
    if category == RootCategory.OBJECT:
        keys = value.keys() if isinstance(value, dict) else vars(value).keys()
        return "object with keys {" + ", ".join(str(key) for key in keys) + "}"
    return str(value)


def validate_root(root: Any, method: str) -> RootCategory:
    """
    Check that root is a mounted class component instance.

    Null-like values (None, False, '', 0) are let through; callers treat them
    as an empty tree.

    Raises:
        InvalidRootError: For arrays, DOM nodes, primitives, plain objects, ...
    """
    category = classify_root(root)
    if category in (RootCategory.INSTANCE, RootCategory.NULL_LIKE):
        return category
    raise InvalidRootError(method, describe_received(root))


def find_all_in_rendered_tree(root: Any, predicate: Predicate) -> list[Any]:
    """
    Return every public instance under root (inclusive) matching predicate.

    Args:
        root: Mounted class component instance
        predicate: Called with each component object or DOM node

    Returns:
        Matches in document order; empty for null-like roots
    """
    category = validate_root(root, "find_all_in_rendered_tree")
    if category == RootCategory.NULL_LIKE:
        return []
    results = _walk(get_internal_instance(root), predicate)
    logger.debug("find_all_in_rendered_tree matched %d instances", len(results))
    return results


def _walk(start: RenderedInstance, predicate: Predicate) -> list[Any]:
    results = []
    stack = [start]
    while stack:
        instance = stack.pop()
        public = instance.public_instance
        if public is not None and predicate(public):
            results.append(public)
        stack.extend(reversed(instance.rendered_children()))
    return results
