"""
Event simulation.

Builds a native-shaped DOM event for a logical event name and dispatches it
on a DOM node through the regular capture / target / bubble path, so the
renderer's synthetic event layer handles it exactly like real input.
Dispatch is synchronous: listeners (and any re-renders they trigger) have
finished by the time simulate() returns.

Usage:
    input_node = find_rendered_dom_component_with_tag(app, "input")
    input_node.value = "giraffe"
    Simulate.change(input_node)
    Simulate.key_down(input_node, key="Enter", key_code=13)
    Simulate.click(button, {"client_x": 100})
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from enum import StrEnum
from typing import Any

from dazzle_test_utils.config import get_config
from dazzle_test_utils.dom import DISPATCH_MANAGED_FIELDS, Event, Node, is_dom_node
from dazzle_test_utils.errors import MisuseError
from dazzle_test_utils.event_types import (
    SIMULATED_EVENTS,
    EventSpec,
    get_event_spec,
)
from dazzle_test_utils.runtime.component import Component
from dazzle_test_utils.runtime.elements import is_valid_element

logger = logging.getLogger(__name__)

# Init fields passed to the event constructor rather than set afterwards
_CONSTRUCTOR_FIELDS = ("bubbles", "cancelable", "composed")

# Fields simulate() never lets an override replace
_RESERVED_FIELDS = DISPATCH_MANAGED_FIELDS | {"type"}

_NOT_A_NODE = (
    "Simulate expected a DOM node as the first argument but received {received}. "
    "Pass the DOM node you wish to simulate the event on instead."
)


class SimulateTarget(StrEnum):
    """What the first argument to simulate() turned out to be."""

    DOM_NODE = "dom_node"
    ELEMENT = "element"
    COMPONENT_INSTANCE = "component_instance"
    OTHER = "other"


def classify_target(value: Any) -> SimulateTarget:
    if is_dom_node(value):
        return SimulateTarget.DOM_NODE
    if is_valid_element(value):
        return SimulateTarget.ELEMENT
    if isinstance(value, Component):
        return SimulateTarget.COMPONENT_INSTANCE
    return SimulateTarget.OTHER


def _ensure_dom_node(value: Any) -> Node:
    target = classify_target(value)
    if target == SimulateTarget.DOM_NODE:
        return value
    if target == SimulateTarget.ELEMENT:
        received = "an element"
    elif target == SimulateTarget.COMPONENT_INSTANCE:
        received = "a component instance"
    else:
        received = f"{type(value).__name__} {value!r}"
    raise MisuseError(_NOT_A_NODE.format(received=received))


def build_native_event(spec: EventSpec, overrides: dict[str, Any] | None = None) -> Event:
    """
    Construct the native event for spec with caller overrides applied on top.

    Overrides of dispatch-managed fields (``target``, ``current_target``,
    ``event_phase``) and of ``type`` are ignored with a warning, or rejected
    when ``DAZZLE_TESTUTILS_STRICT_OVERRIDES`` is set.
    """
    overrides = dict(overrides or {})
    init = {"bubbles": spec.bubbles, "cancelable": spec.cancelable}
    for name in _CONSTRUCTOR_FIELDS:
        if name in overrides:
            init[name] = overrides.pop(name)

    event = spec.interface(spec.native_type, **init)

    for name, value in overrides.items():
        if name in _RESERVED_FIELDS:
            if get_config().strict_overrides:
                raise MisuseError(
                    f"Simulate.{spec.attribute_name}(): '{name}' is set by dispatch "
                    "and cannot be overridden"
                )
            logger.warning(
                "Ignoring override of dispatch-managed field %r for %s", name, spec.name
            )
            continue
        setattr(event, name, value)
    return event


def simulate(
    event_name: str,
    node: Any,
    event_data: dict[str, Any] | None = None,
    **overrides: Any,
) -> bool:
    """
    Simulate one event on a DOM node.

    Args:
        event_name: Logical name, camelCase (``keyDown``) or snake_case (``key_down``)
        node: DOM node to dispatch on
        event_data: Event property overrides as a dict
        **overrides: Event property overrides as keywords (win over event_data)

    Returns:
        False if a listener cancelled the event, True otherwise

    Raises:
        MisuseError: If node is an element description, a component or anything
            else that is not a DOM node
        ValueError: If the event name is not supported
    """
    spec = get_event_spec(event_name)
    if spec is None:
        raise ValueError(f"Unknown event '{event_name}'; see dazzle-test-utils events")
    dom_node = _ensure_dom_node(node)
    event = build_native_event(spec, {**(event_data or {}), **overrides})
    logger.debug("Simulating %s (%s) on %r", spec.name, spec.native_type, dom_node)
    return dom_node.dispatch_event(event)


class SimulateNamespace:
    """
    One function per supported event, under both naming styles.

    ``Simulate.key_down(node)`` and ``Simulate.keyDown(node)`` are the same call.
    """

    def __init__(self) -> None:
        for spec in SIMULATED_EVENTS.values():
            function = self._make(spec)
            setattr(self, spec.attribute_name, function)
            if spec.name != spec.attribute_name:
                setattr(self, spec.name, function)

    def __repr__(self) -> str:
        return f"<Simulate: {len(SIMULATED_EVENTS)} events>"

    def __getattr__(self, name: str) -> Callable[..., bool]:
        # Only reached for names that are not supported events
        raise AttributeError(f"Simulate has no event '{name}'; see dazzle-test-utils events")

    @staticmethod
    def _make(spec: EventSpec) -> Callable[..., bool]:
        def simulate_event(
            node: Any, event_data: dict[str, Any] | None = None, **overrides: Any
        ) -> bool:
            return simulate(spec.name, node, event_data, **overrides)

        simulate_event.__name__ = spec.attribute_name
        simulate_event.__qualname__ = f"Simulate.{spec.attribute_name}"
        simulate_event.__doc__ = (
            f"Simulate a '{spec.native_type}' {spec.category.value} event on a DOM node."
        )
        return simulate_event

    def event_names(self) -> list[str]:
        """Logical (camelCase) names of every supported event."""
        return sorted(SIMULATED_EVENTS)


Simulate = SimulateNamespace()
