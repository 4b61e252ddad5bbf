"""
Instance queries built on the tree walker.

Three predicate families, each with a "scry" form (zero or more matches)
and a "find" form (exactly one match):

- by component type: exact identity of the class used to author the node
- by DOM tag: case-insensitive tag name
- by CSS class: every required class token present on the element

Usage:
    app = render_into_document(create_element(App))
    buttons = scry_rendered_dom_components_with_tag(app, "button")
    header = find_rendered_dom_component_with_class(app, "header main")
    dialog = find_rendered_component_with_type(app, Dialog)
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from typing import Any

from dazzle_test_utils.dom import Element, is_dom_element
from dazzle_test_utils.errors import MultiplicityError
from dazzle_test_utils.runtime.component import Component, is_component_class
from dazzle_test_utils.runtime.elements import is_valid_element, type_display_name
from dazzle_test_utils.runtime.instances import get_internal_instance
from dazzle_test_utils.tree import Predicate, find_all_in_rendered_tree, validate_root

_WHITESPACE = re.compile(r"\s+")

ClassSpec = str | Iterable[str]


# =============================================================================
# Classification
# =============================================================================


def is_dom_component(value: Any) -> bool:
    """True for DOM elements (nodes with a tag name), False for everything else."""
    return is_dom_element(value)


def is_composite_component(value: Any) -> bool:
    return isinstance(value, Component)


def is_composite_component_with_type(value: Any, component_type: Any) -> bool:
    """True if value is a component object authored with exactly component_type."""
    if not is_composite_component(value):
        return False
    internal = get_internal_instance(value)
    if internal is not None:
        return internal.element_type is component_type
    return type(value) is component_type


def is_element(value: Any) -> bool:
    return is_valid_element(value)


def is_element_of_type(value: Any, element_type: Any) -> bool:
    if not is_element(value):
        return False
    if isinstance(element_type, str):
        return value.type == element_type
    return value.type is element_type


def is_dom_component_element(value: Any) -> bool:
    return is_element(value) and isinstance(value.type, str)


def is_composite_component_element(value: Any) -> bool:
    return is_element(value) and is_component_class(value.type)


# =============================================================================
# Predicates
# =============================================================================


def parse_class_names(class_spec: ClassSpec) -> frozenset[str]:
    """
    Required class tokens from a class specification.

    Accepts a whitespace-separated string (``"x y"``) or an iterable of such
    strings (``["x", "y z"]``); any whitespace run separates tokens.
    """
    if isinstance(class_spec, str):
        entries: Iterable[str] = [class_spec]
    elif isinstance(class_spec, Iterable):
        entries = class_spec
    else:
        raise TypeError(
            f"Class names must be a string or a list of strings, got {type(class_spec).__name__}"
        )
    tokens: set[str] = set()
    for entry in entries:
        if not isinstance(entry, str):
            raise TypeError(f"Class names must be strings, got {type(entry).__name__}")
        tokens.update(token for token in _WHITESPACE.split(entry) if token)
    return frozenset(tokens)


def with_type(component_type: Any) -> Predicate:
    def predicate(value: Any) -> bool:
        return is_composite_component_with_type(value, component_type)

    return predicate


def with_tag(tag_name: str) -> Predicate:
    wanted = tag_name.lower()

    def predicate(value: Any) -> bool:
        return is_dom_component(value) and value.local_name == wanted

    return predicate


def with_class(class_spec: ClassSpec) -> Predicate:
    required = parse_class_names(class_spec)

    def predicate(value: Any) -> bool:
        return is_dom_component(value) and required.issubset(value.class_list)

    return predicate


def _describe_class_spec(class_spec: ClassSpec) -> str:
    if isinstance(class_spec, str):
        return class_spec
    return ",".join(class_spec)


def _exactly_one(matches: list[Any], method: str, criteria: str) -> Any:
    if len(matches) != 1:
        raise MultiplicityError(method, len(matches), criteria)
    return matches[0]


# =============================================================================
# Scry / Find
# =============================================================================


def scry_rendered_components_with_type(root: Any, component_type: Any) -> list[Any]:
    """All component objects under root authored with exactly component_type."""
    validate_root(root, "scry_rendered_components_with_type")
    return find_all_in_rendered_tree(root, with_type(component_type))


def find_rendered_component_with_type(root: Any, component_type: Any) -> Any:
    """
    The single component object under root authored with component_type.

    Raises:
        MultiplicityError: If there are zero or several matches
    """
    validate_root(root, "find_rendered_component_with_type")
    matches = scry_rendered_components_with_type(root, component_type)
    return _exactly_one(
        matches,
        "find_rendered_component_with_type",
        f"componentType:{type_display_name(component_type)}",
    )


def scry_rendered_dom_components_with_tag(root: Any, tag_name: str) -> list[Element]:
    """All DOM elements under root whose tag name matches (case-insensitive)."""
    validate_root(root, "scry_rendered_dom_components_with_tag")
    return find_all_in_rendered_tree(root, with_tag(tag_name))


def find_rendered_dom_component_with_tag(root: Any, tag_name: str) -> Element:
    validate_root(root, "find_rendered_dom_component_with_tag")
    matches = scry_rendered_dom_components_with_tag(root, tag_name)
    return _exactly_one(matches, "find_rendered_dom_component_with_tag", f"tag:{tag_name}")


def scry_rendered_dom_components_with_class(root: Any, class_spec: ClassSpec) -> list[Element]:
    """
    All DOM elements under root carrying every class in class_spec.

    Args:
        root: Mounted class component instance
        class_spec: ``"x y"`` or ``["x", "y"]``; order and duplicates are ignored
    """
    validate_root(root, "scry_rendered_dom_components_with_class")
    return find_all_in_rendered_tree(root, with_class(class_spec))


def find_rendered_dom_component_with_class(root: Any, class_spec: ClassSpec) -> Element:
    validate_root(root, "find_rendered_dom_component_with_class")
    if isinstance(class_spec, Iterable) and not isinstance(class_spec, str):
        # read twice below: once to match, once for the error message
        class_spec = list(class_spec)
    matches = scry_rendered_dom_components_with_class(root, class_spec)
    return _exactly_one(
        matches,
        "find_rendered_dom_component_with_class",
        f"class:{_describe_class_spec(class_spec)}",
    )
