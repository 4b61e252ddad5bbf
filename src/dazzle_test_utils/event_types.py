"""
Static table of simulatable events.

Maps each logical event name (``click``, ``keyDown``, ``mouseEnter``, ...) to
the native event type string, the event interface family, and the default
``bubbles`` / ``cancelable`` flags a browser would use. The table is built once
at import time and exposed read-only.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from enum import StrEnum
from types import MappingProxyType

from pydantic import BaseModel, ConfigDict, Field

from dazzle_test_utils.dom import events as dom_events

_CAMEL_BOUNDARY = re.compile(r"(?<!^)(?=[A-Z])")


def to_snake_case(name: str) -> str:
    """``keyDown`` -> ``key_down``; snake_case input is returned unchanged."""
    return _CAMEL_BOUNDARY.sub("_", name).lower()


# =============================================================================
# Categories
# =============================================================================


class EventCategory(StrEnum):
    """Native event interface family."""

    MOUSE = "mouse"
    DRAG = "drag"
    POINTER = "pointer"
    KEYBOARD = "keyboard"
    FOCUS = "focus"
    INPUT = "input"
    COMPOSITION = "composition"
    CLIPBOARD = "clipboard"
    UI = "ui"
    TOUCH = "touch"
    WHEEL = "wheel"
    ANIMATION = "animation"
    TRANSITION = "transition"
    GENERIC = "generic"


# Constructor used to build a native event of each category
EVENT_INTERFACES: Mapping[EventCategory, type[dom_events.Event]] = MappingProxyType(
    {
        EventCategory.MOUSE: dom_events.MouseEvent,
        EventCategory.DRAG: dom_events.DragEvent,
        EventCategory.POINTER: dom_events.PointerEvent,
        EventCategory.KEYBOARD: dom_events.KeyboardEvent,
        EventCategory.FOCUS: dom_events.FocusEvent,
        EventCategory.INPUT: dom_events.InputEvent,
        EventCategory.COMPOSITION: dom_events.CompositionEvent,
        EventCategory.CLIPBOARD: dom_events.ClipboardEvent,
        EventCategory.UI: dom_events.UIEvent,
        EventCategory.TOUCH: dom_events.TouchEvent,
        EventCategory.WHEEL: dom_events.WheelEvent,
        EventCategory.ANIMATION: dom_events.AnimationEvent,
        EventCategory.TRANSITION: dom_events.TransitionEvent,
        EventCategory.GENERIC: dom_events.Event,
    }
)

# (bubbles, cancelable) for most events of a category
_CATEGORY_DEFAULTS: dict[EventCategory, tuple[bool, bool]] = {
    EventCategory.MOUSE: (True, True),
    EventCategory.DRAG: (True, True),
    EventCategory.POINTER: (True, True),
    EventCategory.KEYBOARD: (True, True),
    EventCategory.FOCUS: (False, False),
    EventCategory.INPUT: (True, False),
    EventCategory.COMPOSITION: (True, True),
    EventCategory.CLIPBOARD: (True, True),
    EventCategory.UI: (False, False),
    EventCategory.TOUCH: (True, True),
    EventCategory.WHEEL: (True, True),
    EventCategory.ANIMATION: (True, False),
    EventCategory.TRANSITION: (True, True),
    EventCategory.GENERIC: (False, False),
}


# =============================================================================
# Event Spec
# =============================================================================


class EventSpec(BaseModel):
    """
    Shape of one simulatable event.

    Example:
        EventSpec(name="keyDown", native_type="keydown", category="keyboard",
                  bubbles=True, cancelable=True)
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(description="Logical camelCase event name")
    native_type: str = Field(description="Case-sensitive native event type string")
    category: EventCategory = Field(description="Native event interface family")
    bubbles: bool = Field(description="Default bubbles flag")
    cancelable: bool = Field(description="Default cancelable flag")

    @property
    def attribute_name(self) -> str:
        """Name of the Simulate attribute (``key_down``)."""
        return to_snake_case(self.name)

    @property
    def prop_name(self) -> str:
        """Component prop that receives the synthetic event (``on_key_down``)."""
        return f"on_{self.attribute_name}"

    @property
    def capture_prop_name(self) -> str:
        return f"{self.prop_name}_capture"

    @property
    def interface(self) -> type[dom_events.Event]:
        return EVENT_INTERFACES[self.category]


# name, native type, category, optional (bubbles, cancelable) override
_M = EventCategory
_EVENT_TABLE: list[tuple[str, str, EventCategory, tuple[bool, bool] | None]] = [
    ("abort", "abort", _M.GENERIC, None),
    ("animationEnd", "animationend", _M.ANIMATION, None),
    ("animationIteration", "animationiteration", _M.ANIMATION, None),
    ("animationStart", "animationstart", _M.ANIMATION, None),
    ("auxClick", "auxclick", _M.MOUSE, None),
    ("beforeInput", "beforeinput", _M.INPUT, (True, True)),
    ("blur", "blur", _M.FOCUS, None),
    ("canPlay", "canplay", _M.GENERIC, None),
    ("canPlayThrough", "canplaythrough", _M.GENERIC, None),
    ("cancel", "cancel", _M.GENERIC, (False, True)),
    ("change", "change", _M.GENERIC, (True, False)),
    ("click", "click", _M.MOUSE, None),
    ("close", "close", _M.GENERIC, None),
    ("compositionEnd", "compositionend", _M.COMPOSITION, None),
    ("compositionStart", "compositionstart", _M.COMPOSITION, None),
    ("compositionUpdate", "compositionupdate", _M.COMPOSITION, None),
    ("contextMenu", "contextmenu", _M.MOUSE, None),
    ("copy", "copy", _M.CLIPBOARD, None),
    ("cut", "cut", _M.CLIPBOARD, None),
    ("doubleClick", "dblclick", _M.MOUSE, None),
    ("drag", "drag", _M.DRAG, None),
    ("dragEnd", "dragend", _M.DRAG, (True, False)),
    ("dragEnter", "dragenter", _M.DRAG, None),
    ("dragExit", "dragexit", _M.DRAG, (True, False)),
    ("dragLeave", "dragleave", _M.DRAG, (True, False)),
    ("dragOver", "dragover", _M.DRAG, None),
    ("dragStart", "dragstart", _M.DRAG, None),
    ("drop", "drop", _M.DRAG, None),
    ("durationChange", "durationchange", _M.GENERIC, None),
    ("emptied", "emptied", _M.GENERIC, None),
    ("encrypted", "encrypted", _M.GENERIC, None),
    ("ended", "ended", _M.GENERIC, None),
    ("error", "error", _M.UI, None),
    ("focus", "focus", _M.FOCUS, None),
    ("gotPointerCapture", "gotpointercapture", _M.POINTER, (True, False)),
    ("input", "input", _M.INPUT, None),
    ("invalid", "invalid", _M.GENERIC, (False, True)),
    ("keyDown", "keydown", _M.KEYBOARD, None),
    ("keyPress", "keypress", _M.KEYBOARD, None),
    ("keyUp", "keyup", _M.KEYBOARD, None),
    ("load", "load", _M.UI, None),
    ("loadStart", "loadstart", _M.GENERIC, None),
    ("loadedData", "loadeddata", _M.GENERIC, None),
    ("loadedMetadata", "loadedmetadata", _M.GENERIC, None),
    ("lostPointerCapture", "lostpointercapture", _M.POINTER, (True, False)),
    ("mouseDown", "mousedown", _M.MOUSE, None),
    ("mouseEnter", "mouseenter", _M.MOUSE, (False, False)),
    ("mouseLeave", "mouseleave", _M.MOUSE, (False, False)),
    ("mouseMove", "mousemove", _M.MOUSE, None),
    ("mouseOut", "mouseout", _M.MOUSE, None),
    ("mouseOver", "mouseover", _M.MOUSE, None),
    ("mouseUp", "mouseup", _M.MOUSE, None),
    ("paste", "paste", _M.CLIPBOARD, None),
    ("pause", "pause", _M.GENERIC, None),
    ("play", "play", _M.GENERIC, None),
    ("playing", "playing", _M.GENERIC, None),
    ("pointerCancel", "pointercancel", _M.POINTER, (True, False)),
    ("pointerDown", "pointerdown", _M.POINTER, None),
    ("pointerEnter", "pointerenter", _M.POINTER, (False, False)),
    ("pointerLeave", "pointerleave", _M.POINTER, (False, False)),
    ("pointerMove", "pointermove", _M.POINTER, None),
    ("pointerOut", "pointerout", _M.POINTER, None),
    ("pointerOver", "pointerover", _M.POINTER, None),
    ("pointerUp", "pointerup", _M.POINTER, None),
    ("progress", "progress", _M.GENERIC, None),
    ("rateChange", "ratechange", _M.GENERIC, None),
    ("reset", "reset", _M.GENERIC, (True, True)),
    ("scroll", "scroll", _M.UI, None),
    ("seeked", "seeked", _M.GENERIC, None),
    ("seeking", "seeking", _M.GENERIC, None),
    ("select", "select", _M.UI, (True, False)),
    ("stalled", "stalled", _M.GENERIC, None),
    ("submit", "submit", _M.GENERIC, (True, True)),
    ("suspend", "suspend", _M.GENERIC, None),
    ("timeUpdate", "timeupdate", _M.GENERIC, None),
    ("toggle", "toggle", _M.GENERIC, None),
    ("touchCancel", "touchcancel", _M.TOUCH, (True, False)),
    ("touchEnd", "touchend", _M.TOUCH, None),
    ("touchMove", "touchmove", _M.TOUCH, None),
    ("touchStart", "touchstart", _M.TOUCH, None),
    ("transitionEnd", "transitionend", _M.TRANSITION, None),
    ("volumeChange", "volumechange", _M.GENERIC, None),
    ("waiting", "waiting", _M.GENERIC, None),
    ("wheel", "wheel", _M.WHEEL, None),
]


def _build_table() -> Mapping[str, EventSpec]:
    table: dict[str, EventSpec] = {}
    for name, native_type, category, flags in _EVENT_TABLE:
        bubbles, cancelable = flags or _CATEGORY_DEFAULTS[category]
        table[name] = EventSpec(
            name=name,
            native_type=native_type,
            category=category,
            bubbles=bubbles,
            cancelable=cancelable,
        )
    return MappingProxyType(table)


SIMULATED_EVENTS: Mapping[str, EventSpec] = _build_table()

_BY_ATTRIBUTE: Mapping[str, EventSpec] = MappingProxyType(
    {spec.attribute_name: spec for spec in SIMULATED_EVENTS.values()}
)
_BY_NATIVE_TYPE: Mapping[str, EventSpec] = MappingProxyType(
    {spec.native_type: spec for spec in SIMULATED_EVENTS.values()}
)


def get_event_spec(name: str) -> EventSpec | None:
    """Look up an event by camelCase (``keyDown``) or snake_case (``key_down``) name."""
    return SIMULATED_EVENTS.get(name) or _BY_ATTRIBUTE.get(name)


def spec_for_native_type(native_type: str) -> EventSpec | None:
    """Look up an event by its native type string (``dblclick``)."""
    return _BY_NATIVE_TYPE.get(native_type)


def list_event_specs(category: EventCategory | str | None = None) -> list[EventSpec]:
    """All event specs sorted by name, optionally filtered by category."""
    specs = sorted(SIMULATED_EVENTS.values(), key=lambda spec: spec.name)
    if category is None:
        return specs
    wanted = EventCategory(category)
    return [spec for spec in specs if spec.category == wanted]
