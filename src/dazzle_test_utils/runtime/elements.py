"""
Element descriptions.

An element is an immutable description of what to render: a tag string, a
component class, a function component, or a forward ref, together with its
props and children. Elements are never mounted themselves; the reconciler
builds instances from them.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

# Values that render nothing
_EMPTY = (None, True, False)


@dataclass(frozen=True, eq=False)
class ForwardRef:
    """
    Wrapper produced by forward_ref().

    The wrapper itself owns no instance: it renders whatever ``render`` returns,
    so searching a tree for the wrapper yields nothing.
    """

    render: Callable[[dict[str, Any], Any], Any]

    @property
    def display_name(self) -> str:
        name = getattr(self.render, "__name__", "") or "anonymous"
        return f"ForwardRef({name})"


def forward_ref(render: Callable[[dict[str, Any], Any], Any]) -> ForwardRef:
    """Wrap a ``render(props, ref)`` function so the ref is forwarded to it."""
    return ForwardRef(render=render)


@dataclass(frozen=True, eq=False)
class RenderElement:
    """
    Description of one node to render.

    Example:
        RenderElement(type="div", props={"class_name": "card", "children": [...]})
    """

    type: Any
    props: dict[str, Any] = field(default_factory=dict)
    key: str | None = None
    ref: Any = None
    # Component whose render() produced this element (for string refs)
    owner: Any = None

    def __repr__(self) -> str:
        return f"<RenderElement {type_display_name(self.type)} key={self.key!r}>"

    @property
    def children(self) -> list[Any]:
        return flatten_children(self.props.get("children"))


def type_display_name(element_type: Any) -> str:
    if isinstance(element_type, str):
        return element_type
    if isinstance(element_type, ForwardRef):
        return element_type.display_name
    return getattr(element_type, "__name__", repr(element_type))


def flatten_children(children: Any) -> list[Any]:
    """Flatten nested lists/tuples of children, keeping empty slots in place."""
    if children is None:
        return []
    if not isinstance(children, (list, tuple)):
        children = [children]
    flat: list[Any] = []
    for child in children:
        if isinstance(child, (list, tuple)):
            flat.extend(flatten_children(child))
        else:
            flat.append(child)
    return flat


def _owner() -> Any:
    # Imported lazily: the reconciler tracks which component is rendering
    from dazzle_test_utils.runtime.reconciler import current_owner

    return current_owner()


def create_element(
    type: Any,
    props: dict[str, Any] | None = None,
    *children: Any,
    key: Any = None,
    ref: Any = None,
) -> RenderElement:
    """
    Create an element description.

    Args:
        type: Tag name, Component subclass, function component or ForwardRef
        props: Element props (``class_name``, ``on_click``, component props, ...)
        *children: Child elements, strings or numbers; lists are flattened
        key: Reconciliation key among siblings
        ref: String ref (collected on the owning component) or callable

    Returns:
        Frozen RenderElement
    """
    if type is None or type == "":
        raise TypeError("create_element() requires a tag name or component type")
    merged = dict(props or {})
    if "key" in merged:
        key = merged.pop("key")
    if "ref" in merged:
        ref = merged.pop("ref")
    if children:
        merged["children"] = children[0] if len(children) == 1 else list(children)
    default_props = getattr(type, "default_props", None)
    if isinstance(default_props, dict):
        for name, value in default_props.items():
            merged.setdefault(name, value)
    return RenderElement(
        type=type,
        props=merged,
        key=None if key is None else str(key),
        ref=ref,
        owner=_owner(),
    )


def is_valid_element(value: Any) -> bool:
    return isinstance(value, RenderElement)


def is_empty(value: Any) -> bool:
    return any(value is empty for empty in _EMPTY)

