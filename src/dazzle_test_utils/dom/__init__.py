"""
Minimal DOM used as the rendering host.

This package exports the node tree and the event interfaces.
"""

from dazzle_test_utils.dom.events import (
    DISPATCH_MANAGED_FIELDS,
    AnimationEvent,
    ClipboardEvent,
    CompositionEvent,
    DragEvent,
    Event,
    EventPhase,
    FocusEvent,
    InputEvent,
    KeyboardEvent,
    MouseEvent,
    PointerEvent,
    TouchEvent,
    TransitionEvent,
    UIEvent,
    WheelEvent,
)
from dazzle_test_utils.dom.node import (
    Document,
    DOMError,
    Element,
    EventTarget,
    Node,
    NodeType,
    Text,
    create_document,
    is_dom_element,
    is_dom_node,
)

__all__ = [
    # Nodes
    "Node",
    "NodeType",
    "Element",
    "Text",
    "Document",
    "EventTarget",
    "DOMError",
    "create_document",
    "is_dom_node",
    "is_dom_element",
    # Events
    "Event",
    "EventPhase",
    "DISPATCH_MANAGED_FIELDS",
    "UIEvent",
    "FocusEvent",
    "MouseEvent",
    "DragEvent",
    "PointerEvent",
    "WheelEvent",
    "KeyboardEvent",
    "InputEvent",
    "CompositionEvent",
    "TouchEvent",
    "AnimationEvent",
    "TransitionEvent",
    "ClipboardEvent",
]
