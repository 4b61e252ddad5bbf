"""
DAZZLE Test Utilities.

Discovery and stimulus helpers for testing component trees rendered by the
DNR component renderer.

This package provides:
- Queries: find component objects and DOM nodes in a rendered tree by
  component type, tag name or CSS classes (scry_* for 0..N, find_* for 1)
- Simulate: dispatch native-shaped DOM events so the renderer's synthetic
  event layer runs exactly as for real input
- runtime: the reference renderer (create_element, Component, render)
- dom: the minimal DOM the renderer targets

Usage:
    from dazzle_test_utils import (
        Simulate,
        create_element,
        find_rendered_dom_component_with_tag,
        render_into_document,
    )

    app = render_into_document(create_element(SignupForm))
    email = find_rendered_dom_component_with_tag(app, "input")
    email.value = "ada@example.com"
    Simulate.change(email)
    assert app.state["email"] == "ada@example.com"
"""

__version__ = "0.3.0"

from dazzle_test_utils.errors import (
    InvalidRootError,
    MisuseError,
    MultiplicityError,
    TestUtilsError,
)
from dazzle_test_utils.event_types import (
    SIMULATED_EVENTS,
    EventCategory,
    EventSpec,
    get_event_spec,
)
from dazzle_test_utils.queries import (
    find_rendered_component_with_type,
    find_rendered_dom_component_with_class,
    find_rendered_dom_component_with_tag,
    is_composite_component,
    is_composite_component_element,
    is_composite_component_with_type,
    is_dom_component,
    is_dom_component_element,
    is_element,
    is_element_of_type,
    scry_rendered_components_with_type,
    scry_rendered_dom_components_with_class,
    scry_rendered_dom_components_with_tag,
)
from dazzle_test_utils.runtime import (
    Component,
    create_element,
    find_dom_node,
    forward_ref,
    render,
    render_into_document,
    unmount_component_at_node,
)
from dazzle_test_utils.simulate import Simulate, simulate
from dazzle_test_utils.tree import find_all_in_rendered_tree

__all__ = [
    "__version__",
    # Traversal and queries
    "find_all_in_rendered_tree",
    "scry_rendered_components_with_type",
    "find_rendered_component_with_type",
    "scry_rendered_dom_components_with_tag",
    "find_rendered_dom_component_with_tag",
    "scry_rendered_dom_components_with_class",
    "find_rendered_dom_component_with_class",
    # Classification
    "is_dom_component",
    "is_composite_component",
    "is_composite_component_with_type",
    "is_element",
    "is_element_of_type",
    "is_dom_component_element",
    "is_composite_component_element",
    # Simulation
    "Simulate",
    "simulate",
    "SIMULATED_EVENTS",
    "EventSpec",
    "EventCategory",
    "get_event_spec",
    # Rendering
    "Component",
    "create_element",
    "forward_ref",
    "render",
    "render_into_document",
    "unmount_component_at_node",
    "find_dom_node",
    # Errors
    "TestUtilsError",
    "InvalidRootError",
    "MultiplicityError",
    "MisuseError",
]
