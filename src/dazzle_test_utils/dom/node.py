"""
Minimal in-memory DOM.

Provides just enough of the DOM for component rendering and event
simulation: a node tree with tag names, attributes and text content, plus
EventTarget with the standard capture / target / bubble dispatch path.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable, Iterator
from enum import IntEnum
from typing import Any

from dazzle_test_utils.dom.events import Event, EventPhase

logger = logging.getLogger(__name__)

_WHITESPACE = re.compile(r"\s+")

Listener = Callable[[Event], Any]


class DOMError(Exception):
    """Raised for invalid DOM operations (hierarchy errors, re-dispatch)."""

    pass


class NodeType(IntEnum):
    ELEMENT_NODE = 1
    TEXT_NODE = 3
    DOCUMENT_NODE = 9


class EventTarget:
    """Listener registry plus the DOM dispatch algorithm."""

    def __init__(self) -> None:
        # (type, capture) -> listeners in registration order
        self._listeners: dict[tuple[str, bool], list[Listener]] = {}

    def add_event_listener(self, type: str, listener: Listener, capture: bool = False) -> None:
        listeners = self._listeners.setdefault((type, capture), [])
        if listener not in listeners:
            listeners.append(listener)

    def remove_event_listener(self, type: str, listener: Listener, capture: bool = False) -> None:
        listeners = self._listeners.get((type, capture))
        if listeners and listener in listeners:
            listeners.remove(listener)

    def get_parent(self) -> EventTarget | None:
        """Next target on the propagation path."""
        return None

    def dispatch_event(self, event: Event) -> bool:
        """
        Dispatch an event through the capture, target and bubble phases.

        Listeners run synchronously on the caller's stack. Exceptions raised by
        a listener propagate to the caller.

        Returns:
            False if a listener cancelled the event, True otherwise
        """
        if event._dispatching:
            raise DOMError(f"Event {event.type!r} is already being dispatched")

        path: list[EventTarget] = []
        parent = self.get_parent()
        while parent is not None:
            path.append(parent)
            parent = parent.get_parent()

        logger.debug("Dispatching %r on %r (path length %d)", event.type, self, len(path))

        event._dispatching = True
        event.target = self
        try:
            for target in reversed(path):
                if event.propagation_stopped:
                    break
                event.event_phase = EventPhase.CAPTURING_PHASE
                target._invoke(event, capture=True)

            if not event.propagation_stopped:
                event.event_phase = EventPhase.AT_TARGET
                self._invoke(event, capture=True)
                if not event.propagation_stopped:
                    self._invoke(event, capture=False)

            if event.bubbles:
                for target in path:
                    if event.propagation_stopped:
                        break
                    event.event_phase = EventPhase.BUBBLING_PHASE
                    target._invoke(event, capture=False)
        finally:
            event._dispatching = False
            event.event_phase = EventPhase.NONE
            event.current_target = None

        return not event.default_prevented

    def _invoke(self, event: Event, capture: bool) -> None:
        listeners = self._listeners.get((event.type, capture))
        if not listeners:
            return
        event.current_target = self
        # Listeners added during dispatch do not run for this event
        for listener in list(listeners):
            listener(event)
            if event.immediate_propagation_stopped:
                break


class Node(EventTarget):
    """Base node: tree structure and text content."""

    node_type: NodeType

    def __init__(self, owner_document: Document | None = None) -> None:
        super().__init__()
        self.owner_document = owner_document
        self.parent_node: Node | None = None
        self.child_nodes: list[Node] = []

    def get_parent(self) -> Node | None:
        return self.parent_node

    @property
    def first_child(self) -> Node | None:
        return self.child_nodes[0] if self.child_nodes else None

    @property
    def next_sibling(self) -> Node | None:
        if self.parent_node is None:
            return None
        siblings = self.parent_node.child_nodes
        index = siblings.index(self) + 1
        return siblings[index] if index < len(siblings) else None

    @property
    def text_content(self) -> str:
        return "".join(child.text_content for child in self.child_nodes)

    @text_content.setter
    def text_content(self, value: str) -> None:
        for child in list(self.child_nodes):
            self.remove_child(child)
        if value:
            doc = self.owner_document
            self.append_child(Text(str(value), owner_document=doc))

    def contains(self, other: Node | None) -> bool:
        node = other
        while node is not None:
            if node is self:
                return True
            node = node.parent_node
        return False

    def append_child(self, child: Node) -> Node:
        return self.insert_before(child, None)

    def insert_before(self, child: Node, reference: Node | None) -> Node:
        """Insert child before reference (or at the end), moving it if attached."""
        if child.contains(self):
            raise DOMError("The new child element contains the parent")
        if reference is not None and reference.parent_node is not self:
            raise DOMError("The reference node is not a child of this node")
        if child is reference:
            return child
        if child.parent_node is not None:
            child.parent_node.remove_child(child)
        if reference is None:
            self.child_nodes.append(child)
        else:
            self.child_nodes.insert(self.child_nodes.index(reference), child)
        child.parent_node = self
        return child

    def remove_child(self, child: Node) -> Node:
        if child.parent_node is not self:
            raise DOMError("The node to be removed is not a child of this node")
        self.child_nodes.remove(child)
        child.parent_node = None
        return child

    def iter_descendants(self) -> Iterator[Node]:
        """Depth-first pre-order walk of descendants (document order)."""
        for child in self.child_nodes:
            yield child
            yield from child.iter_descendants()


class Text(Node):
    node_type = NodeType.TEXT_NODE

    def __init__(self, data: str = "", owner_document: Document | None = None) -> None:
        super().__init__(owner_document)
        self.data = data

    def __repr__(self) -> str:
        return f"<Text {self.data!r}>"

    @property
    def text_content(self) -> str:
        return self.data

    @text_content.setter
    def text_content(self, value: str) -> None:
        self.data = str(value)


class Element(Node):
    """
    Element node.

    Besides attributes, elements accept arbitrary Python attributes as DOM
    properties (``input.value = "giraffe"``), like their browser counterparts.
    """

    node_type = NodeType.ELEMENT_NODE

    def __init__(self, tag_name: str, owner_document: Document | None = None) -> None:
        if not tag_name:
            raise DOMError("Element tag name must not be empty")
        super().__init__(owner_document)
        self.tag_name = tag_name.upper()
        self.attributes: dict[str, str] = {}

    def __repr__(self) -> str:
        attrs = "".join(f' {k}="{v}"' for k, v in self.attributes.items())
        return f"<{self.local_name}{attrs}>"

    @property
    def local_name(self) -> str:
        return self.tag_name.lower()

    @property
    def node_name(self) -> str:
        return self.tag_name

    @property
    def children(self) -> list[Element]:
        return [child for child in self.child_nodes if isinstance(child, Element)]

    def get_attribute(self, name: str) -> str | None:
        return self.attributes.get(name.lower())

    def set_attribute(self, name: str, value: Any) -> None:
        self.attributes[name.lower()] = str(value)

    def remove_attribute(self, name: str) -> None:
        self.attributes.pop(name.lower(), None)

    def has_attribute(self, name: str) -> bool:
        return name.lower() in self.attributes

    @property
    def id(self) -> str:
        return self.attributes.get("id", "")

    @id.setter
    def id(self, value: str) -> None:
        self.set_attribute("id", value)

    @property
    def class_name(self) -> str:
        return self.attributes.get("class", "")

    @class_name.setter
    def class_name(self, value: str) -> None:
        self.set_attribute("class", value)

    @property
    def class_list(self) -> list[str]:
        """Class attribute split on any whitespace run."""
        return [token for token in _WHITESPACE.split(self.class_name) if token]

    def get_elements_by_tag_name(self, tag: str) -> list[Element]:
        wanted = tag.upper()
        return [
            node
            for node in self.iter_descendants()
            if isinstance(node, Element) and (wanted == "*" or node.tag_name == wanted)
        ]


class Document(Node):
    node_type = NodeType.DOCUMENT_NODE

    def __init__(self) -> None:
        super().__init__(owner_document=None)

    def __repr__(self) -> str:
        return "<#document>"

    def create_element(self, tag_name: str) -> Element:
        return Element(tag_name, owner_document=self)

    def create_text_node(self, data: str) -> Text:
        return Text(data, owner_document=self)

    @property
    def document_element(self) -> Element | None:
        for child in self.child_nodes:
            if isinstance(child, Element):
                return child
        return None

    def _find_root_child(self, tag: str) -> Element | None:
        root = self.document_element
        if root is None:
            return None
        for child in root.children:
            if child.tag_name == tag:
                return child
        return None

    @property
    def head(self) -> Element | None:
        return self._find_root_child("HEAD")

    @property
    def body(self) -> Element | None:
        return self._find_root_child("BODY")


def create_document() -> Document:
    """Create an empty HTML document: ``<html><head></head><body></body></html>``."""
    doc = Document()
    html = doc.create_element("html")
    html.append_child(doc.create_element("head"))
    html.append_child(doc.create_element("body"))
    doc.append_child(html)
    return doc


def is_dom_node(value: Any) -> bool:
    return isinstance(value, Node)


def is_dom_element(value: Any) -> bool:
    return isinstance(value, Element)
