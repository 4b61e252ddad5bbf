"""Tests for Simulate and the synthetic event layer it drives."""

import logging

import pytest

from dazzle_test_utils import (
    SIMULATED_EVENTS,
    Component,
    MisuseError,
    Simulate,
    create_element,
    find_dom_node,
    find_rendered_dom_component_with_tag,
    render,
    render_into_document,
    simulate,
)
from dazzle_test_utils.dom import KeyboardEvent, create_document
from dazzle_test_utils.runtime import SyntheticEvent


class SomeComponent(Component):
    def render(self):
        return create_element(
            "div",
            {"on_click": self.props.get("handle_click")},
            create_element(
                "input", {"ref": "input", "on_change": self.props.get("handle_change")}
            ),
        )


@pytest.fixture
def nested(container):
    """outer div > inner span, both with click / mouse_enter handlers that log."""
    log = []

    def handler(label):
        def on_event(event):
            log.append((label, event))

        return on_event

    outer = render(
        create_element(
            "div",
            {
                "on_click": handler("outer"),
                "on_click_capture": handler("outer-capture"),
                "on_mouse_enter": handler("outer-enter"),
            },
            create_element(
                "span",
                {"on_click": handler("inner"), "on_mouse_enter": handler("inner-enter")},
            ),
        ),
        container,
    )
    return outer, outer.first_child, log


class TestSimulateChange:
    """Test change events reaching handlers."""

    def test_change_on_input(self, container) -> None:
        calls = []
        element = create_element("input", {"type": "text", "on_change": calls.append})
        node = render(element, container)
        node.value = "giraffe"

        Simulate.change(node)

        assert len(calls) == 1
        event = calls[0]
        assert isinstance(event, SyntheticEvent)
        assert event.type == "change"
        assert event.target is node
        assert event.target.value == "giraffe"

    def test_change_inside_component(self, container) -> None:
        calls = []
        instance = render(create_element(SomeComponent, {"handle_change": calls.append}), container)
        node = instance.refs["input"]
        node.value = "zebra"

        Simulate.change(node)

        assert len(calls) == 1
        assert calls[0].target is node

    def test_updates_state_through_handler(self) -> None:
        class Form(Component):
            def __init__(self, props):
                super().__init__(props)
                self.state = {"value": ""}

            def render(self):
                return create_element(
                    "form",
                    None,
                    create_element(
                        "input",
                        {"on_change": lambda e: self.set_state({"value": e.target.value})},
                    ),
                    create_element("output", None, self.state["value"]),
                )

        form = render_into_document(create_element(Form))
        node = find_rendered_dom_component_with_tag(form, "input")
        node.value = "giraffe"

        Simulate.change(node)

        assert form.state["value"] == "giraffe"
        assert find_rendered_dom_component_with_tag(form, "output").text_content == "giraffe"


class TestSimulateMisuse:
    """Test that Simulate refuses anything but a DOM node."""

    def test_element_description(self) -> None:
        calls = []
        element = create_element(SomeComponent, {"handle_click": calls.append})

        with pytest.raises(MisuseError, match="received an element"):
            Simulate.click(element)
        assert calls == []

    def test_component_instance(self, container) -> None:
        calls = []
        instance = render(create_element(SomeComponent, {"handle_click": calls.append}), container)

        with pytest.raises(MisuseError, match="received a component instance"):
            Simulate.click(instance)
        assert calls == []

    def test_message_asks_for_dom_node(self) -> None:
        with pytest.raises(MisuseError) as exc_info:
            Simulate.click(create_element("div"))
        assert exc_info.value.message == (
            "Simulate expected a DOM node as the first argument but received an element. "
            "Pass the DOM node you wish to simulate the event on instead."
        )

    def test_other_value(self) -> None:
        with pytest.raises(MisuseError, match="received str 'div'"):
            Simulate.click("div")

    def test_misuse_is_a_type_error(self) -> None:
        with pytest.raises(TypeError):
            Simulate.click(None)

    def test_unknown_event(self, container) -> None:
        node = render(create_element("div"), container)
        with pytest.raises(ValueError, match="Unknown event 'explode'"):
            simulate("explode", node)

    def test_non_callable_handler(self, container) -> None:
        node = render(create_element("button", {"on_click": "submit()"}), container)
        with pytest.raises(TypeError, match="`on_click` listener to be a function"):
            Simulate.click(node)


class TestSimulateOverrides:
    """Test event data applied on top of the native event."""

    def test_event_data_dict(self, container) -> None:
        seen = []

        class Clicker(Component):
            def render(self):
                return create_element("div", {"on_click": lambda e: seen.append(e.client_x)})

        instance = render(create_element(Clicker), container)
        Simulate.click(find_dom_node(instance), {"client_x": 100})

        assert seen == [100]

    def test_keyword_overrides(self, container) -> None:
        seen = []
        node = render(create_element("input", {"on_key_down": seen.append}), container)

        Simulate.key_down(node, key="Enter", key_code=13)

        assert seen[0].key == "Enter"
        assert seen[0].key_code == 13

    def test_event_type_is_native_type(self, container) -> None:
        seen = []
        node = render(create_element("div", {"on_key_down": seen.append}), container)

        Simulate.keyDown(node)

        event = seen[0]
        assert event.type == "keydown"
        assert event.native_event.type == "keydown"
        assert isinstance(event.native_event, KeyboardEvent)

    def test_dispatch_managed_fields_are_ignored(
        self, container, clean_config, monkeypatch, caplog
    ) -> None:
        monkeypatch.delenv("DAZZLE_TESTUTILS_STRICT_OVERRIDES", raising=False)
        seen = []
        node = render(create_element("div", {"on_click": seen.append}), container)

        with caplog.at_level(logging.WARNING, logger="dazzle_test_utils.simulate"):
            Simulate.click(node, {"target": "elsewhere", "type": "dblclick"})

        assert seen[0].target is node
        assert seen[0].type == "click"
        assert "dispatch-managed field 'target'" in caplog.text

    def test_strict_overrides(self, container, clean_config, monkeypatch) -> None:
        monkeypatch.setenv("DAZZLE_TESTUTILS_STRICT_OVERRIDES", "1")
        node = render(create_element("div"), container)

        with pytest.raises(MisuseError, match="'target' is set by dispatch"):
            Simulate.click(node, target=None)


class TestPropagation:
    """Test the synthetic capture and bubble phases."""

    def test_bubbles_to_ancestor_handlers(self, nested) -> None:
        _, inner, log = nested

        Simulate.click(inner)

        assert [label for label, _ in log] == ["outer-capture", "inner", "outer"]

    def test_current_target_follows_handler(self, nested) -> None:
        outer, inner, log = nested
        targets = {}

        Simulate.click(inner)

        for label, event in log:
            targets.setdefault(label, event.target)
        assert targets["outer"] is inner
        assert log[-1][1].current_target is outer

    def test_stop_propagation(self, container) -> None:
        calls = []
        outer = render(
            create_element(
                "div",
                {"on_click": lambda e: calls.append("outer")},
                create_element("span", {"on_click": lambda e: e.stop_propagation()}),
            ),
            container,
        )

        Simulate.click(outer.first_child)

        assert calls == []

    def test_non_bubbling_event_reaches_target_only(self, nested) -> None:
        _, inner, log = nested

        Simulate.mouse_enter(inner)

        assert [label for label, _ in log] == ["inner-enter"]

    def test_bubbles_override(self, nested) -> None:
        _, inner, log = nested

        Simulate.click(inner, bubbles=False)

        assert [label for label, _ in log] == ["outer-capture", "inner"]

    def test_prevent_default_result(self, container) -> None:
        node = render(create_element("a", {"on_click": lambda e: e.prevent_default()}), container)

        assert Simulate.click(node) is False
        assert Simulate.mouse_down(node) is True

    def test_node_outside_any_render(self) -> None:
        node = create_document().create_element("div")
        assert Simulate.click(node) is True

    def test_native_target_listener_runs_before_bubble_handlers(self, container) -> None:
        log = []

        def on_click(event):
            log.append("synthetic-bubble")
            event.stop_propagation()

        node = render(
            create_element(
                "button",
                {
                    "on_click": on_click,
                    "on_click_capture": lambda e: log.append("synthetic-capture"),
                },
            ),
            container,
        )
        node.add_event_listener("click", lambda e: log.append("native-target"))
        container.parent_node.add_event_listener("click", lambda e: log.append("native-body"))

        Simulate.click(node)

        assert log == ["synthetic-capture", "native-target", "synthetic-bubble"]

    def test_native_stop_propagation_skips_bubble_handlers(self, container) -> None:
        log = []
        node = render(
            create_element(
                "button",
                {
                    "on_click": lambda e: log.append("synthetic-bubble"),
                    "on_click_capture": lambda e: log.append("synthetic-capture"),
                },
            ),
            container,
        )
        node.add_event_listener("click", lambda e: e.stop_propagation())

        Simulate.click(node)

        assert log == ["synthetic-capture"]

    def test_one_synthetic_event_per_dispatch(self, nested) -> None:
        _, inner, log = nested

        Simulate.click(inner)

        events = {id(event) for _, event in log}
        assert len(events) == 1


class TestSimulateNamespace:
    """Test the generated per-event functions."""

    def test_every_event_has_a_function(self) -> None:
        for spec in SIMULATED_EVENTS.values():
            assert callable(getattr(Simulate, spec.attribute_name))
            assert getattr(Simulate, spec.name) is getattr(Simulate, spec.attribute_name)

    def test_function_metadata(self) -> None:
        assert Simulate.double_click.__name__ == "double_click"
        assert "'dblclick'" in Simulate.double_click.__doc__

    def test_event_names(self) -> None:
        assert Simulate.event_names() == sorted(SIMULATED_EVENTS)
        assert "keyDown" in Simulate.event_names()

    def test_dir_lists_supported_names(self) -> None:
        names = dir(Simulate)
        assert "key_down" in names
        assert "keyDown" in names
        assert "mouse_enter" in names

    def test_unknown_attribute(self) -> None:
        with pytest.raises(AttributeError, match="no event 'explode'"):
            Simulate.explode
