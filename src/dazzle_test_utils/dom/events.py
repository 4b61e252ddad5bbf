"""
DOM event interfaces.

Each interface takes the native type string plus keyword-only init fields,
mirroring the browser constructors (``new MouseEvent("click", {...})``).
Instances are ordinary mutable objects: callers may set additional
attributes after construction.
"""

from __future__ import annotations

import time
from enum import IntEnum
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from dazzle_test_utils.dom.node import EventTarget


class EventPhase(IntEnum):
    """Propagation phase of an event currently being dispatched."""

    NONE = 0
    CAPTURING_PHASE = 1
    AT_TARGET = 2
    BUBBLING_PHASE = 3


# Fields owned by the dispatch algorithm; they cannot be supplied up front.
DISPATCH_MANAGED_FIELDS = frozenset({"target", "current_target", "event_phase"})


class Event:
    """Base DOM event."""

    def __init__(
        self,
        type: str,
        *,
        bubbles: bool = False,
        cancelable: bool = False,
        composed: bool = False,
    ) -> None:
        self.type = type
        self.bubbles = bubbles
        self.cancelable = cancelable
        self.composed = composed
        self.default_prevented = False
        self.is_trusted = False
        self.time_stamp = time.monotonic() * 1000.0
        self.target: EventTarget | None = None
        self.current_target: EventTarget | None = None
        self.event_phase = EventPhase.NONE
        self._stop_propagation = False
        self._stop_immediate = False
        self._dispatching = False

    def __repr__(self) -> str:
        return f"<{type(self).__name__} type={self.type!r} phase={self.event_phase.name}>"

    def prevent_default(self) -> None:
        """Cancel the default action; a no-op for non-cancelable events."""
        if self.cancelable:
            self.default_prevented = True

    def stop_propagation(self) -> None:
        self._stop_propagation = True

    def stop_immediate_propagation(self) -> None:
        self._stop_propagation = True
        self._stop_immediate = True

    @property
    def propagation_stopped(self) -> bool:
        return self._stop_propagation

    @property
    def immediate_propagation_stopped(self) -> bool:
        return self._stop_immediate


class UIEvent(Event):
    def __init__(self, type: str, *, view: Any = None, detail: int = 0, **init: Any) -> None:
        super().__init__(type, **init)
        self.view = view
        self.detail = detail


class FocusEvent(UIEvent):
    def __init__(self, type: str, *, related_target: Any = None, **init: Any) -> None:
        super().__init__(type, **init)
        self.related_target = related_target


class _ModifierMixin:
    """Keyboard modifier flags shared by mouse, keyboard and touch events."""

    def _init_modifiers(
        self,
        ctrl_key: bool = False,
        shift_key: bool = False,
        alt_key: bool = False,
        meta_key: bool = False,
    ) -> None:
        self.ctrl_key = ctrl_key
        self.shift_key = shift_key
        self.alt_key = alt_key
        self.meta_key = meta_key

    def get_modifier_state(self, key: str) -> bool:
        return {
            "Control": self.ctrl_key,
            "Shift": self.shift_key,
            "Alt": self.alt_key,
            "Meta": self.meta_key,
        }.get(key, False)


class MouseEvent(_ModifierMixin, UIEvent):
    def __init__(
        self,
        type: str,
        *,
        screen_x: float = 0,
        screen_y: float = 0,
        client_x: float = 0,
        client_y: float = 0,
        page_x: float | None = None,
        page_y: float | None = None,
        button: int = 0,
        buttons: int = 0,
        related_target: Any = None,
        ctrl_key: bool = False,
        shift_key: bool = False,
        alt_key: bool = False,
        meta_key: bool = False,
        **init: Any,
    ) -> None:
        super().__init__(type, **init)
        self.screen_x = screen_x
        self.screen_y = screen_y
        self.client_x = client_x
        self.client_y = client_y
        self.page_x = client_x if page_x is None else page_x
        self.page_y = client_y if page_y is None else page_y
        self.button = button
        self.buttons = buttons
        self.related_target = related_target
        self._init_modifiers(ctrl_key, shift_key, alt_key, meta_key)


class DragEvent(MouseEvent):
    def __init__(self, type: str, *, data_transfer: Any = None, **init: Any) -> None:
        super().__init__(type, **init)
        self.data_transfer = data_transfer


class PointerEvent(MouseEvent):
    def __init__(
        self,
        type: str,
        *,
        pointer_id: int = 0,
        width: float = 1,
        height: float = 1,
        pressure: float = 0,
        pointer_type: str = "",
        is_primary: bool = False,
        **init: Any,
    ) -> None:
        super().__init__(type, **init)
        self.pointer_id = pointer_id
        self.width = width
        self.height = height
        self.pressure = pressure
        self.pointer_type = pointer_type
        self.is_primary = is_primary


class WheelEvent(MouseEvent):
    DOM_DELTA_PIXEL = 0
    DOM_DELTA_LINE = 1
    DOM_DELTA_PAGE = 2

    def __init__(
        self,
        type: str,
        *,
        delta_x: float = 0,
        delta_y: float = 0,
        delta_z: float = 0,
        delta_mode: int = 0,
        **init: Any,
    ) -> None:
        super().__init__(type, **init)
        self.delta_x = delta_x
        self.delta_y = delta_y
        self.delta_z = delta_z
        self.delta_mode = delta_mode


class KeyboardEvent(_ModifierMixin, UIEvent):
    def __init__(
        self,
        type: str,
        *,
        key: str = "",
        code: str = "",
        location: int = 0,
        repeat: bool = False,
        is_composing: bool = False,
        char_code: int = 0,
        key_code: int = 0,
        which: int | None = None,
        ctrl_key: bool = False,
        shift_key: bool = False,
        alt_key: bool = False,
        meta_key: bool = False,
        **init: Any,
    ) -> None:
        super().__init__(type, **init)
        self.key = key
        self.code = code
        self.location = location
        self.repeat = repeat
        self.is_composing = is_composing
        self.char_code = char_code
        self.key_code = key_code
        self.which = (key_code or char_code) if which is None else which
        self._init_modifiers(ctrl_key, shift_key, alt_key, meta_key)


class InputEvent(UIEvent):
    def __init__(
        self,
        type: str,
        *,
        data: str | None = None,
        input_type: str = "",
        is_composing: bool = False,
        **init: Any,
    ) -> None:
        super().__init__(type, **init)
        self.data = data
        self.input_type = input_type
        self.is_composing = is_composing


class CompositionEvent(UIEvent):
    def __init__(self, type: str, *, data: str = "", **init: Any) -> None:
        super().__init__(type, **init)
        self.data = data


class TouchEvent(_ModifierMixin, UIEvent):
    def __init__(
        self,
        type: str,
        *,
        touches: list[Any] | None = None,
        target_touches: list[Any] | None = None,
        changed_touches: list[Any] | None = None,
        ctrl_key: bool = False,
        shift_key: bool = False,
        alt_key: bool = False,
        meta_key: bool = False,
        **init: Any,
    ) -> None:
        super().__init__(type, **init)
        self.touches = list(touches or [])
        self.target_touches = list(target_touches or [])
        self.changed_touches = list(changed_touches or [])
        self._init_modifiers(ctrl_key, shift_key, alt_key, meta_key)


class AnimationEvent(Event):
    def __init__(
        self,
        type: str,
        *,
        animation_name: str = "",
        elapsed_time: float = 0.0,
        pseudo_element: str = "",
        **init: Any,
    ) -> None:
        super().__init__(type, **init)
        self.animation_name = animation_name
        self.elapsed_time = elapsed_time
        self.pseudo_element = pseudo_element


class TransitionEvent(Event):
    def __init__(
        self,
        type: str,
        *,
        property_name: str = "",
        elapsed_time: float = 0.0,
        pseudo_element: str = "",
        **init: Any,
    ) -> None:
        super().__init__(type, **init)
        self.property_name = property_name
        self.elapsed_time = elapsed_time
        self.pseudo_element = pseudo_element


class ClipboardEvent(Event):
    def __init__(self, type: str, *, clipboard_data: Any = None, **init: Any) -> None:
        super().__init__(type, **init)
        self.clipboard_data = clipboard_data
