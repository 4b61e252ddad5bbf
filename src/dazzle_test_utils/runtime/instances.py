"""
Private instance tree.

Every mounted element becomes a RenderedInstance. The ``kind`` discriminant
is fixed at mount time and is the only thing callers branch on:

- COMPOSITE: backed by a component class, function component or forward ref.
  Owns no DOM node; resolves to DOM nodes through its rendered children.
- HOST: backed by a DOM element.
- TEXT: backed by a DOM text node.

Public instances (component objects and DOM nodes) link back to their
internal instance through a private attribute; see get_internal_instance().
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import TYPE_CHECKING, Any

from dazzle_test_utils.runtime.elements import type_display_name

if TYPE_CHECKING:
    from dazzle_test_utils.dom import Element, Node

INTERNAL_KEY = "_render_internals"


class InstanceKind(StrEnum):
    COMPOSITE = "composite"
    HOST = "host"
    TEXT = "text"


@dataclass(eq=False)
class RenderRoot:
    """Bookkeeping for one container passed to render()."""

    container: Element
    child: RenderedInstance | None = None


@dataclass(eq=False)
class RenderedInstance:
    """One node of the private render tree."""

    kind: InstanceKind
    element_type: Any
    props: dict[str, Any] = field(default_factory=dict)
    key: str | None = None
    # Position among siblings used for reconciliation (explicit or implicit key)
    slot: str = ""
    ref: Any = None
    owner: Any = None
    parent: RenderedInstance | None = None
    children: list[RenderedInstance] = field(default_factory=list)
    # Component object, DOM node, or None (function components, forward refs)
    public_instance: Any = None
    # DOM node for HOST and TEXT instances
    node: Node | None = None
    root: RenderRoot | None = None
    mounted: bool = True

    def __repr__(self) -> str:
        return f"<RenderedInstance {self.kind.value} {type_display_name(self.element_type)}>"

    @property
    def is_composite(self) -> bool:
        return self.kind == InstanceKind.COMPOSITE

    @property
    def is_host(self) -> bool:
        return self.kind == InstanceKind.HOST

    def rendered_children(self) -> list[RenderedInstance]:
        """Immediate rendered children in structural left-to-right order."""
        return list(self.children)

    def dom_nodes(self) -> list[Node]:
        """Top-level DOM nodes this instance contributes to its host parent."""
        if self.node is not None:
            return [self.node]
        nodes: list[Node] = []
        for child in self.children:
            nodes.extend(child.dom_nodes())
        return nodes

    def dom_node(self) -> Node | None:
        """This instance's DOM node, or its nearest rendered host descendant's."""
        if self.node is not None:
            return self.node
        for child in self.children:
            node = child.dom_node()
            if node is not None:
                return node
        return None

    def top(self) -> RenderedInstance:
        instance = self
        while instance.parent is not None:
            instance = instance.parent
        return instance

    def host_parent(self) -> RenderedInstance | None:
        """Nearest HOST ancestor, or None when the DOM parent is the root container."""
        instance = self.parent
        while instance is not None and not instance.is_host:
            instance = instance.parent
        return instance

    def host_path(self) -> list[RenderedInstance]:
        """HOST instances from this instance (inclusive) up to the root."""
        path = []
        instance: RenderedInstance | None = self
        while instance is not None:
            if instance.is_host:
                path.append(instance)
            instance = instance.parent
        return path


def get_internal_instance(value: Any) -> RenderedInstance | None:
    """Return the internal instance linked to a public instance, if any."""
    internal = getattr(value, "__dict__", {}).get(INTERNAL_KEY)
    if isinstance(internal, RenderedInstance) and internal.mounted:
        return internal
    return None


def link(public: Any, instance: RenderedInstance) -> None:
    setattr(public, INTERNAL_KEY, instance)


def unlink(public: Any) -> None:
    if INTERNAL_KEY in getattr(public, "__dict__", {}):
        delattr(public, INTERNAL_KEY)
