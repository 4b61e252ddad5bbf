"""
Class component base.

Example:
    class Counter(Component):
        def __init__(self, props):
            super().__init__(props)
            self.state = {"count": 0}

        def render(self):
            return create_element(
                "button",
                {"on_click": lambda e: self.set_state({"count": self.state["count"] + 1})},
                str(self.state["count"]),
            )
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from dazzle_test_utils.runtime.instances import get_internal_instance

StateUpdate = dict[str, Any] | Callable[[dict[str, Any], dict[str, Any]], dict[str, Any] | None]


class Component:
    """Base class for stateful components."""

    default_props: dict[str, Any] | None = None

    def __init__(self, props: dict[str, Any] | None = None) -> None:
        self.props: dict[str, Any] = props or {}
        self.state: dict[str, Any] = {}
        self.refs: dict[str, Any] = {}

    def __repr__(self) -> str:
        return f"<{type(self).__name__} component>"

    def render(self) -> Any:
        raise NotImplementedError(f"{type(self).__name__}.render() is not implemented")

    # Lifecycle hooks; overridden as needed

    def component_did_mount(self) -> None:
        pass

    def component_did_update(self, prev_props: dict[str, Any], prev_state: dict[str, Any]) -> None:
        pass

    def component_will_unmount(self) -> None:
        pass

    @property
    def is_mounted(self) -> bool:
        return get_internal_instance(self) is not None

    def set_state(
        self,
        update: StateUpdate | None = None,
        callback: Callable[[], Any] | None = None,
    ) -> None:
        """
        Merge a state update and re-render synchronously.

        Args:
            update: Partial state dict, or ``updater(state, props)`` returning one
            callback: Called with no arguments once the update has been applied
        """
        from dazzle_test_utils.runtime import reconciler

        instance = get_internal_instance(self)
        if instance is None:
            raise RuntimeError(
                f"{type(self).__name__}.set_state() called on an unmounted component"
            )
        partial = update(self.state, self.props) if callable(update) else update
        next_state = {**self.state, **(partial or {})}
        reconciler.update_component(instance, next_state, callback)

    def force_update(self, callback: Callable[[], Any] | None = None) -> None:
        from dazzle_test_utils.runtime import reconciler

        instance = get_internal_instance(self)
        if instance is None:
            raise RuntimeError(
                f"{type(self).__name__}.force_update() called on an unmounted component"
            )
        reconciler.update_component(instance, self.state, callback)


def is_component_class(value: Any) -> bool:
    return isinstance(value, type) and issubclass(value, Component)
