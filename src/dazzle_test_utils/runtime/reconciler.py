"""
Mount, update and unmount of the private instance tree.

Children are matched by (slot, type): the slot is the explicit key when one
is given, otherwise the position among the parent's children (empty
positions included). Matching instances are updated in place and keep their
DOM nodes; everything else is mounted fresh. After each change the DOM
children of the affected host are re-ordered to follow structural order, so
the DOM always reads in the same order as the instance tree.

Lifecycle callbacks (did_mount, did_update, set_state callbacks) are queued
during a batch and flushed once the DOM is in place.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from typing import Any

from dazzle_test_utils.dom import Document, Element, Node, create_document
from dazzle_test_utils.event_types import SIMULATED_EVENTS
from dazzle_test_utils.runtime.component import Component, is_component_class
from dazzle_test_utils.runtime.elements import (
    ForwardRef,
    RenderElement,
    flatten_children,
    is_empty,
    type_display_name,
)
from dazzle_test_utils.runtime.instances import (
    InstanceKind,
    RenderedInstance,
    RenderRoot,
    link,
    unlink,
)

logger = logging.getLogger(__name__)

# Props handled by the synthetic event layer rather than written to the DOM
EVENT_HANDLER_PROPS = frozenset(
    name
    for spec in SIMULATED_EVENTS.values()
    for name in (spec.prop_name, spec.capture_prop_name)
)

# Props written as DOM properties rather than attributes
_PROPERTY_PROPS = frozenset({"value", "checked", "selected", "default_value", "default_checked"})

_ATTRIBUTE_ALIASES = {"class_name": "class", "html_for": "for"}

_MISSING = object()

_owner_stack: list[Component] = []
_pending: list[list[Callable[[], Any]]] = []


def current_owner() -> Component | None:
    """Class component whose render() is currently running."""
    return _owner_stack[-1] if _owner_stack else None


# =============================================================================
# Batching
# =============================================================================


@contextmanager
def batch() -> Iterator[None]:
    """
    Queue lifecycle callbacks until the outermost batch exits.

    Nested batches (a set_state from a ref callback, say) join the outer queue, so
    every callback runs once the whole DOM update is in place.
    """
    if _pending:
        yield
        return
    _pending.append([])
    try:
        yield
    finally:
        callbacks = _pending.pop()
    for callback in callbacks:
        callback()


def _enqueue(callback: Callable[[], Any]) -> None:
    if _pending:
        _pending[-1].append(callback)
    else:
        callback()


# =============================================================================
# Rendering
# =============================================================================


def _slot_for(item: Any, index: int) -> str:
    if isinstance(item, RenderElement) and item.key is not None:
        return f"k:{item.key}"
    return f"i:{index}"


def _child_slots(items: list[Any]) -> list[tuple[Any, str]]:
    """Pair each non-empty item with its slot; a repeated key falls back to position."""
    slotted: list[tuple[Any, str]] = []
    seen: set[str] = set()
    for index, item in enumerate(items):
        if is_empty(item):
            continue
        slot = _slot_for(item, index)
        if slot in seen:
            logger.warning(
                "Encountered two children with the same key %r; matching the later one by position",
                item.key,
            )
            slot = f"i:{index}"
        seen.add(slot)
        slotted.append((item, slot))
    return slotted


def _is_text(item: Any) -> bool:
    return isinstance(item, (str, int, float)) and not isinstance(item, bool)


def same_type(instance: RenderedInstance, item: Any) -> bool:
    if instance.kind == InstanceKind.TEXT:
        return _is_text(item)
    if not isinstance(item, RenderElement):
        return False
    if isinstance(item.type, str):
        return instance.element_type == item.type
    return instance.element_type is item.type


def _render_composite(instance: RenderedInstance) -> list[Any]:
    """Call the component's render function and return its raw output as a list."""
    element_type = instance.element_type
    if isinstance(element_type, ForwardRef):
        output = element_type.render(instance.props, instance.ref)
    elif instance.public_instance is not None:
        _owner_stack.append(instance.public_instance)
        try:
            output = instance.public_instance.render()
        finally:
            _owner_stack.pop()
    else:
        output = element_type(instance.props)
    return flatten_children(output)


def _document_of(instance: RenderedInstance) -> Document:
    root = instance.top().root
    if root is not None and root.container.owner_document is not None:
        return root.container.owner_document
    return create_document()


def mount(
    item: Any,
    parent: RenderedInstance | None,
    slot: str,
    root: RenderRoot | None = None,
) -> RenderedInstance:
    """Build the instance (and DOM) subtree for one renderable item."""
    if _is_text(item):
        instance = RenderedInstance(
            kind=InstanceKind.TEXT, element_type=None, slot=slot, parent=parent, root=root
        )
        instance.node = _document_of(instance).create_text_node(str(item))
        instance.public_instance = instance.node
        link(instance.node, instance)
        return instance

    if not isinstance(item, RenderElement):
        raise TypeError(
            f"Objects are not valid as a render child (found: {type(item).__name__}). "
            "Use create_element(), a string or a number."
        )

    element_type = item.type
    kind = InstanceKind.HOST if isinstance(element_type, str) else InstanceKind.COMPOSITE
    instance = RenderedInstance(
        kind=kind,
        element_type=element_type,
        props=item.props,
        key=item.key,
        slot=slot,
        ref=item.ref,
        owner=item.owner,
        parent=parent,
        root=root,
    )

    if kind == InstanceKind.HOST:
        node = _document_of(instance).create_element(element_type)
        instance.node = node
        instance.public_instance = node
        link(node, instance)
        _apply_props(node, {}, item.props)
        instance.children = _mount_children(instance, item.children)
        _sync_host_children(node, instance.children)
        _attach_ref(instance)
        logger.debug("Mounted host <%s>", element_type)
        return instance

    if is_component_class(element_type):
        component = element_type(item.props)
        component.props = item.props
        instance.public_instance = component
        link(component, instance)
        instance.children = _mount_children(instance, _render_composite(instance))
        _attach_ref(instance)
        _enqueue(component.component_did_mount)
    elif isinstance(element_type, ForwardRef) or callable(element_type):
        instance.children = _mount_children(instance, _render_composite(instance))
    else:
        raise TypeError(f"Element type is invalid: {element_type!r}")

    logger.debug("Mounted composite %s", type_display_name(element_type))
    return instance


def _mount_children(instance: RenderedInstance, items: list[Any]) -> list[RenderedInstance]:
    return [mount(item, instance, slot) for item, slot in _child_slots(items)]


def update(instance: RenderedInstance, item: Any) -> None:
    """Apply a new element (or text) of the same type to a mounted instance."""
    if instance.kind == InstanceKind.TEXT:
        text = str(item)
        if instance.node.data != text:
            instance.node.data = text
        return

    prev_props = instance.props
    instance.props = item.props
    instance.owner = item.owner
    if item.ref is not instance.ref and item.ref != instance.ref:
        _detach_ref(instance)
        instance.ref = item.ref
        _attach_ref(instance)

    if instance.kind == InstanceKind.HOST:
        _apply_props(instance.node, prev_props, item.props)
        reconcile_children(instance, item.children)
        return

    component = instance.public_instance
    if component is None:
        reconcile_children(instance, _render_composite(instance))
        return

    prev_state = component.state
    component.props = item.props
    reconcile_children(instance, _render_composite(instance))
    _enqueue(lambda: component.component_did_update(prev_props, prev_state))


def update_component(
    instance: RenderedInstance,
    next_state: dict[str, Any],
    callback: Callable[[], Any] | None = None,
) -> None:
    """Re-render a class component with new state (set_state / force_update)."""
    component = instance.public_instance
    prev_props, prev_state = component.props, component.state
    with batch():
        component.state = next_state
        reconcile_children(instance, _render_composite(instance))
        sync_dom(instance)
        _enqueue(lambda: component.component_did_update(prev_props, prev_state))
        if callback is not None:
            _enqueue(callback)


def reconcile_children(instance: RenderedInstance, items: list[Any]) -> None:
    """Match new child items against existing children by slot and type."""
    existing: dict[str, RenderedInstance] = {}
    displaced: list[RenderedInstance] = []
    for child in instance.children:
        if child.slot in existing:
            displaced.append(child)
        else:
            existing[child.slot] = child

    children: list[RenderedInstance] = []
    for item, slot in _child_slots(items):
        current = existing.pop(slot, None)
        if current is not None and same_type(current, item):
            update(current, item)
            children.append(current)
            continue
        if current is not None:
            unmount(current)
        children.append(mount(item, instance, slot))
    for leftover in [*existing.values(), *displaced]:
        unmount(leftover)
    instance.children = children
    if instance.is_host:
        _sync_host_children(instance.node, children)


def unmount(instance: RenderedInstance) -> None:
    """Tear down a subtree and detach its DOM nodes."""
    for node in instance.dom_nodes():
        if node.parent_node is not None:
            node.parent_node.remove_child(node)
    _teardown(instance)


def _teardown(instance: RenderedInstance) -> None:
    if isinstance(instance.public_instance, Component):
        instance.public_instance.component_will_unmount()
    for child in instance.children:
        _teardown(child)
    _detach_ref(instance)
    if instance.public_instance is not None:
        unlink(instance.public_instance)
    instance.mounted = False
    logger.debug("Unmounted %r", instance)


# =============================================================================
# DOM
# =============================================================================


def _sync_host_children(parent: Node, children: list[RenderedInstance]) -> None:
    nodes = [node for child in children for node in child.dom_nodes()]
    _order_nodes(parent, nodes)


def _order_nodes(parent: Node, nodes: list[Node]) -> None:
    """
    Make ``nodes`` the trailing children of ``parent``, in order.

    Children that come before them and are not in ``nodes`` (foreign content
    already in a container) are left in place.
    """
    reference: Node | None = None
    for node in reversed(nodes):
        if node.parent_node is not parent or node.next_sibling is not reference:
            parent.insert_before(node, reference)
        reference = node


def sync_dom(instance: RenderedInstance) -> None:
    """Re-order the DOM children of the host (or container) that holds this instance."""
    host = instance.host_parent()
    if host is not None:
        _sync_host_children(host.node, host.children)
        return
    root = instance.top().root
    if root is not None and root.child is not None:
        _order_nodes(root.container, root.child.dom_nodes())


def _dom_name(prop: str) -> str:
    if prop in _ATTRIBUTE_ALIASES:
        return _ATTRIBUTE_ALIASES[prop]
    return prop.replace("_", "-")


def _style_text(style: dict[str, Any]) -> str:
    return "; ".join(f"{name.replace('_', '-')}: {value}" for name, value in style.items())


def _apply_props(node: Element, prev: dict[str, Any], props: dict[str, Any]) -> None:
    for name in prev:
        if name not in props and name != "children" and name not in EVENT_HANDLER_PROPS:
            if name in _PROPERTY_PROPS:
                setattr(node, name.removeprefix("default_"), None)
            else:
                node.remove_attribute(_dom_name(name))
    for name, value in props.items():
        if name == "children" or name in EVENT_HANDLER_PROPS:
            continue
        if prev.get(name, _MISSING) is value:
            continue
        if name in _PROPERTY_PROPS:
            setattr(node, name.removeprefix("default_"), value)
        elif name == "style" and isinstance(value, dict):
            node.set_attribute("style", _style_text(value))
        elif value is None or value is False:
            node.remove_attribute(_dom_name(name))
        elif value is True:
            node.set_attribute(_dom_name(name), "")
        else:
            node.set_attribute(_dom_name(name), value)


# =============================================================================
# Refs
# =============================================================================


def _attach_ref(instance: RenderedInstance) -> None:
    ref = instance.ref
    if ref is None or isinstance(instance.element_type, ForwardRef):
        return
    if isinstance(ref, str):
        if instance.owner is None:
            raise RuntimeError(
                f"String ref '{ref}' can only be used inside a class component's render()"
            )
        instance.owner.refs[ref] = instance.public_instance
    elif callable(ref):
        ref(instance.public_instance)


def _detach_ref(instance: RenderedInstance) -> None:
    ref = instance.ref
    if ref is None or isinstance(instance.element_type, ForwardRef):
        return
    if isinstance(ref, str):
        if instance.owner is not None and instance.owner.refs.get(ref) is instance.public_instance:
            del instance.owner.refs[ref]
    elif callable(ref):
        ref(None)
