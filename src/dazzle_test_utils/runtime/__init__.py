"""
Reference component renderer.

This package provides:
- Elements: create_element(), forward_ref()
- Components: the Component base class with state and lifecycle hooks
- Rendering: render(), unmount_component_at_node(), render_into_document()
- The private instance tree consumed by the tree walker
- The synthetic event layer fed by native DOM events
"""

from dazzle_test_utils.runtime.component import Component
from dazzle_test_utils.runtime.dom_renderer import (
    find_dom_node,
    render,
    render_into_document,
    unmount_component_at_node,
)
from dazzle_test_utils.runtime.elements import (
    ForwardRef,
    RenderElement,
    create_element,
    forward_ref,
    is_valid_element,
)
from dazzle_test_utils.runtime.instances import (
    InstanceKind,
    RenderedInstance,
    get_internal_instance,
)
from dazzle_test_utils.runtime.synthetic_events import SyntheticEvent

__all__ = [
    # Elements
    "RenderElement",
    "ForwardRef",
    "create_element",
    "forward_ref",
    "is_valid_element",
    # Components
    "Component",
    # Rendering
    "render",
    "render_into_document",
    "unmount_component_at_node",
    "find_dom_node",
    # Instance tree
    "InstanceKind",
    "RenderedInstance",
    "get_internal_instance",
    # Events
    "SyntheticEvent",
]
