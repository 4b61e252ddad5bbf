"""
Renderer entry points: render into a container, unmount, resolve DOM nodes.

Usage:
    container = create_document().create_element("div")
    instance = render(create_element(App, {"title": "Hello"}), container)
    ...
    unmount_component_at_node(container)
"""

from __future__ import annotations

import logging
from typing import Any

from dazzle_test_utils.dom import Element, Node, create_document
from dazzle_test_utils.runtime import reconciler
from dazzle_test_utils.runtime.elements import RenderElement
from dazzle_test_utils.runtime.instances import RenderRoot, get_internal_instance
from dazzle_test_utils.runtime.synthetic_events import listen_to_all_supported_events

logger = logging.getLogger(__name__)

_ROOT_KEY = "_render_root"
_ROOT_SLOT = "root"


def _get_root(container: Element) -> RenderRoot | None:
    return getattr(container, "__dict__", {}).get(_ROOT_KEY)


def render(element: RenderElement, container: Element) -> Any:
    """
    Render an element into a container, updating any previous render.

    Args:
        element: Element description to render
        container: DOM element that will hold the rendered nodes

    Returns:
        Public instance of the root: the component object for class
        components, the DOM node for host elements, None for function
        components and forward refs
    """
    if not isinstance(element, RenderElement):
        raise TypeError(
            "render(): expected an element created by create_element(), "
            f"got {type(element).__name__}"
        )
    if not isinstance(container, Element):
        raise TypeError("render(): target container is not a DOM element")

    root = _get_root(container)
    if root is None:
        root = RenderRoot(container=container)
        setattr(container, _ROOT_KEY, root)
        listen_to_all_supported_events(root)

    with reconciler.batch():
        current = root.child
        if current is not None and (
            reconciler.same_type(current, element) and current.key == element.key
        ):
            reconciler.update(current, element)
        else:
            if current is not None:
                reconciler.unmount(current)
                root.child = None
            root.child = reconciler.mount(element, None, _ROOT_SLOT, root=root)
        reconciler.sync_dom(root.child)

    logger.debug("Rendered %r into %r", element, container)
    return root.child.public_instance


def unmount_component_at_node(container: Element) -> bool:
    """Unmount whatever was rendered into container. Returns False if nothing was."""
    root = _get_root(container)
    if root is None or root.child is None:
        return False
    reconciler.unmount(root.child)
    root.child = None
    return True


def find_dom_node(component_or_node: Any) -> Node | None:
    """Resolve a public instance to its DOM node (DOM nodes resolve to themselves)."""
    if component_or_node is None:
        return None
    if isinstance(component_or_node, Node):
        return component_or_node
    instance = get_internal_instance(component_or_node)
    if instance is None:
        raise TypeError(
            f"find_dom_node(): argument appears to not be a mounted component "
            f"(got {type(component_or_node).__name__})"
        )
    return instance.dom_node()


def render_into_document(element: RenderElement) -> Any:
    """
    Render into a detached ``div`` of a fresh document.

    The container is not attached to the document body; events still
    propagate to it because it is the root of the rendered subtree.
    """
    container = create_document().create_element("div")
    return render(element, container)
