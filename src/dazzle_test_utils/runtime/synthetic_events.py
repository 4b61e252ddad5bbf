"""
Synthetic event layer.

The renderer never attaches listeners to individual nodes. Instead each
container gets two native listeners per supported event type. The
capture-phase listener wraps the native event in a SyntheticEvent and calls
``on_<name>_capture`` props from the root down to the target. The
bubble-phase listener runs after native listeners on the target and its
ancestors, and calls ``on_<name>`` props from the target up to the root.
Events whose native form does not bubble only reach the target's own
``on_<name>`` handler, during the capture pass.
"""

from __future__ import annotations

import logging
from typing import Any

from dazzle_test_utils.dom import Element, Event, Node
from dazzle_test_utils.event_types import SIMULATED_EVENTS, EventSpec, spec_for_native_type
from dazzle_test_utils.runtime.instances import (
    RenderedInstance,
    RenderRoot,
    get_internal_instance,
)

logger = logging.getLogger(__name__)

_LISTENING_MARKER = "_render_listening"
_SYNTHETIC_KEY = "_synthetic_events"


class SyntheticEvent:
    """
    Framework-level wrapper around a native event.

    Unknown attributes are read from the native event, so handlers can use
    ``event.client_x`` or ``event.key`` directly.
    """

    def __init__(self, spec: EventSpec, native_event: Event) -> None:
        self.spec = spec
        self.native_event = native_event
        self.type = native_event.type
        self.target = native_event.target
        self.current_target: Node | None = None
        self._propagation_stopped = False
        self._persistent = False

    def __repr__(self) -> str:
        return f"<SyntheticEvent {self.spec.name} type={self.type!r}>"

    def __getattr__(self, name: str) -> Any:
        # Only called for attributes not set on the wrapper itself
        if name.startswith("_"):
            raise AttributeError(name)
        return getattr(self.native_event, name)

    @property
    def default_prevented(self) -> bool:
        return self.native_event.default_prevented

    def prevent_default(self) -> None:
        self.native_event.prevent_default()

    def stop_propagation(self) -> None:
        self._propagation_stopped = True
        self.native_event.stop_propagation()

    def is_propagation_stopped(self) -> bool:
        return self._propagation_stopped

    def persist(self) -> None:
        """Kept for API compatibility: synthetic events are never pooled."""
        self._persistent = True

    def is_persistent(self) -> bool:
        return self._persistent


def listen_to_all_supported_events(root: RenderRoot) -> None:
    """
    Attach the delegated listeners for every supported native type to the root container.

    Each type gets a capture-phase listener, which runs ``on_<name>_capture``
    props, and a bubble-phase listener, which runs ``on_<name>`` props once the
    native event has passed the target and its ancestors inside the container.
    """
    container = root.container
    if getattr(container, _LISTENING_MARKER, False):
        return

    def capture_listener(native_event: Event) -> None:
        dispatch_capture_phase(root, native_event)

    def bubble_listener(native_event: Event) -> None:
        dispatch_bubble_phase(root, native_event)

    for spec in SIMULATED_EVENTS.values():
        container.add_event_listener(spec.native_type, capture_listener, capture=True)
        container.add_event_listener(spec.native_type, bubble_listener)
    setattr(container, _LISTENING_MARKER, True)
    logger.debug("Listening for %d event types on %r", len(SIMULATED_EVENTS), container)


def _closest_instance(node: Any) -> RenderedInstance | None:
    while node is not None:
        instance = get_internal_instance(node)
        if instance is not None:
            return instance
        node = getattr(node, "parent_node", None)
    return None


def _resolve(
    root: RenderRoot, native_event: Event
) -> tuple[SyntheticEvent, list[RenderedInstance]] | None:
    """Synthetic event and host path for a native event targeted inside root, if any."""
    spec = spec_for_native_type(native_event.type)
    if spec is None:
        return None
    target_instance = _closest_instance(native_event.target)
    if target_instance is None or target_instance.top() is not root.child:
        # Target belongs to another root (or none)
        return None
    path = target_instance.host_path()
    if not path:
        return None

    # One synthetic event per root for the whole native dispatch
    by_root = native_event.__dict__.setdefault(_SYNTHETIC_KEY, {})
    synthetic = by_root.get(root)
    if synthetic is None:
        synthetic = by_root[root] = SyntheticEvent(spec, native_event)
    return synthetic, path


def dispatch_capture_phase(root: RenderRoot, native_event: Event) -> None:
    """
    Run ``on_<name>_capture`` props from the root down to the target.

    Native events that do not bubble never reach the bubble-phase listener, so
    the target's own ``on_<name>`` prop runs here instead.
    """
    resolved = _resolve(root, native_event)
    if resolved is None:
        return
    synthetic, path = resolved
    spec = synthetic.spec
    logger.debug("Synthetic %s capture over %d host instances", spec.name, len(path))

    for instance in reversed(path):
        _invoke(instance, spec.capture_prop_name, synthetic)
        if synthetic.is_propagation_stopped():
            return

    if not native_event.bubbles:
        _invoke(path[0], spec.prop_name, synthetic)


def dispatch_bubble_phase(root: RenderRoot, native_event: Event) -> None:
    """Run ``on_<name>`` props from the target up to the root."""
    if not native_event.bubbles:
        return
    resolved = _resolve(root, native_event)
    if resolved is None:
        return
    synthetic, path = resolved
    if synthetic.is_propagation_stopped():
        return
    logger.debug("Synthetic %s bubble over %d host instances", synthetic.spec.name, len(path))

    for instance in path:
        _invoke(instance, synthetic.spec.prop_name, synthetic)
        if synthetic.is_propagation_stopped():
            return


def _invoke(instance: RenderedInstance, prop_name: str, synthetic: SyntheticEvent) -> None:
    handler = instance.props.get(prop_name)
    if handler is None:
        return
    if not callable(handler):
        raise TypeError(
            f"Expected `{prop_name}` listener to be a function, "
            f"instead got a value of `{type(handler).__name__}` type."
        )
    node = instance.node
    synthetic.current_target = node if isinstance(node, Element) else None
    handler(synthetic)
