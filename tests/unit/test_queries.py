"""Tests for scry / find queries and classification helpers."""

import pytest

from dazzle_test_utils import (
    Component,
    MultiplicityError,
    create_element,
    find_dom_node,
    find_rendered_component_with_type,
    find_rendered_dom_component_with_class,
    find_rendered_dom_component_with_tag,
    forward_ref,
    is_composite_component,
    is_composite_component_element,
    is_composite_component_with_type,
    is_dom_component,
    is_dom_component_element,
    is_element,
    is_element_of_type,
    render,
    render_into_document,
    scry_rendered_components_with_type,
    scry_rendered_dom_components_with_class,
    scry_rendered_dom_components_with_tag,
)
from dazzle_test_utils.queries import parse_class_names


class Child(Component):
    def render(self):
        return None


class Button(Component):
    def render(self):
        return create_element("button", None, self.props.get("children", "Gedalia"))


class Box(Component):
    """Renders whatever element is passed as the ``content`` prop inside a div."""

    def render(self):
        return create_element("div", None, self.props.get("content"))


def _box(content):
    return render_into_document(create_element(Box, {"content": content}))


class TestQueryByType:
    """Test component type queries."""

    def test_finds_child_component(self) -> None:
        class Wrapper(Component):
            def render(self):
                return create_element("div", None, create_element(Child))

        rendered = render_into_document(create_element(Wrapper))
        found = scry_rendered_components_with_type(rendered, Child)
        assert len(found) == 1
        assert isinstance(found[0], Child)

    def test_forward_ref_is_not_found_but_its_target_is(self, container) -> None:
        def render_button(props, ref):
            return create_element(Button)

        ForwardRefComponent = forward_ref(render_button)

        class Wrapper(Component):
            def render(self):
                return create_element(ForwardRefComponent)

        rendered = render(create_element(Wrapper), container)

        assert is_composite_component_with_type(rendered, Wrapper)
        assert scry_rendered_components_with_type(rendered, ForwardRefComponent) == []
        assert len(scry_rendered_components_with_type(rendered, Button)) == 1

        dom_button = find_rendered_dom_component_with_tag(rendered, "button")
        assert is_dom_component(dom_button)
        assert dom_button.text_content == "Gedalia"

        host = container.owner_document.body.children[0]
        assert host.tag_name.lower() == "div"
        assert host.children[0].tag_name.lower() == "button"

    def test_function_hoc_is_not_found(self) -> None:
        def reverse(passed):
            def reversed_component(props):
                rest = {k: v for k, v in props.items() if k != "children"}
                return create_element(passed, rest, props["children"][::-1])

            return reversed_component

        ReversedButton = reverse(Button)

        class Wrapper(Component):
            def render(self):
                return create_element(ReversedButton, None, "Gedalia")

        rendered = render_into_document(create_element(Wrapper))

        assert scry_rendered_components_with_type(rendered, ReversedButton) == []
        assert scry_rendered_components_with_type(rendered, reverse) == []
        assert len(scry_rendered_components_with_type(rendered, Button)) == 1
        button = find_rendered_dom_component_with_tag(rendered, "button")
        assert button.text_content == "ailadeG"

    def test_stateful_hoc_is_found(self) -> None:
        def loading(wrapped):
            class Loading(Component):
                def render(self):
                    if not self.props.get("children"):
                        return create_element("div", {"class_name": "loader"})
                    return create_element(wrapped, dict(self.props))

            return Loading

        LoadingButton = loading(Button)
        rendered = render_into_document(create_element(LoadingButton, None, "Gedalia"))

        assert scry_rendered_components_with_type(rendered, LoadingButton) == [rendered]
        assert len(scry_rendered_components_with_type(rendered, Button)) == 1
        assert find_dom_node(rendered).text_content == "Gedalia"

    def test_subclass_does_not_match_base(self) -> None:
        class FancyChild(Child):
            pass

        class Wrapper(Component):
            def render(self):
                return create_element("div", None, create_element(FancyChild))

        rendered = render_into_document(create_element(Wrapper))

        assert scry_rendered_components_with_type(rendered, Child) == []
        found = find_rendered_component_with_type(rendered, FancyChild)
        assert is_composite_component_with_type(found, FancyChild)
        assert not is_composite_component_with_type(found, Child)

    def test_find_by_type_multiplicity(self) -> None:
        rendered = _box([create_element(Child), create_element(Child)])
        with pytest.raises(MultiplicityError) as exc_info:
            find_rendered_component_with_type(rendered, Child)
        assert exc_info.value.count == 2
        assert "componentType:Child" in exc_info.value.message


class TestQueryByTag:
    """Test DOM tag queries."""

    def test_stateless_components_are_searched(self) -> None:
        def Function(props):
            return create_element("div", None, create_element("hr"))

        class SomeComponent(Component):
            def render(self):
                return create_element(
                    "div", None, create_element(Function), create_element("hr")
                )

        rendered = render_into_document(create_element(SomeComponent))
        assert len(scry_rendered_dom_components_with_tag(rendered, "hr")) == 2

    def test_tag_match_is_case_insensitive(self) -> None:
        rendered = _box(create_element("span"))
        assert len(scry_rendered_dom_components_with_tag(rendered, "SPAN")) == 1

    def test_root_host_node_is_included(self) -> None:
        rendered = _box(None)
        assert find_rendered_dom_component_with_tag(rendered, "div") is find_dom_node(rendered)

    def test_find_more_than_one(self) -> None:
        rendered = _box([create_element("span"), create_element("span")])
        with pytest.raises(MultiplicityError) as exc_info:
            find_rendered_dom_component_with_tag(rendered, "span")
        message = exc_info.value.message
        assert message.startswith("find_rendered_dom_component_with_tag(...)")
        assert "more than one instance (found: 2) for tag:span" in message

    def test_find_none(self) -> None:
        rendered = _box(None)
        with pytest.raises(MultiplicityError, match=r"no instances \(found: 0\) for tag:p"):
            find_rendered_dom_component_with_tag(rendered, "p")

    @pytest.mark.parametrize(
        "tag", ["button", "form", "iframe", "img", "input", "option", "select", "textarea"]
    )
    def test_injected_dom_components(self, tag: str) -> None:
        node = render_into_document(create_element(tag))
        assert node.tag_name == tag.upper()
        assert is_dom_component(node)

    def test_full_page(self) -> None:
        class Root(Component):
            def render(self):
                return create_element(
                    "html",
                    {"ref": "html"},
                    create_element(
                        "head", {"ref": "head"}, create_element("title", None, "test title")
                    ),
                    create_element("body", {"ref": "body"}, "hello, world"),
                )

        root = render_into_document(create_element(Root))
        assert root.refs["html"].tag_name == "HTML"
        assert root.refs["head"].tag_name == "HEAD"
        assert root.refs["body"].tag_name == "BODY"
        assert root.refs["body"].text_content == "hello, world"
        assert find_rendered_dom_component_with_tag(root, "title").text_content == "test title"


class TestQueryByClass:
    """Test CSS class queries."""

    def test_text_components_are_skipped(self) -> None:
        greeting = create_element("div", None, "Hello ", create_element("span", None, "Jim"))
        rendered = _box(greeting)
        assert scry_rendered_dom_components_with_class(rendered, "NonExistentClass") == []

    def test_class_with_newline(self) -> None:
        rendered = _box(create_element("span", {"class_name": "x\ny"}))
        assert len(scry_rendered_dom_components_with_class(rendered, "x")) == 1

    def test_multiple_classes(self) -> None:
        rendered = _box(create_element("span", {"class_name": "x y z"}))
        assert len(scry_rendered_dom_components_with_class(rendered, "x y")) == 1
        assert len(scry_rendered_dom_components_with_class(rendered, ["x", "y"])) == 1
        assert len(scry_rendered_dom_components_with_class(rendered, ["z", "x", "x"])) == 1
        assert scry_rendered_dom_components_with_class(rendered, "x a") == []
        assert scry_rendered_dom_components_with_class(rendered, ["x", "a"]) == []
        assert scry_rendered_dom_components_with_class(rendered, ["x a"]) == []

    def test_empty_spec_matches_every_element(self) -> None:
        rendered = _box([create_element("span"), create_element("em")])
        assert len(scry_rendered_dom_components_with_class(rendered, "")) == 3

    def test_find_by_class(self) -> None:
        rendered = _box([create_element("p", {"class_name": "lead"}), create_element("p")])
        found = find_rendered_dom_component_with_class(rendered, "lead")
        assert found.tag_name == "P"

    def test_find_by_class_list_criteria(self) -> None:
        rendered = _box(None)
        with pytest.raises(MultiplicityError, match="class:x,y"):
            find_rendered_dom_component_with_class(rendered, ["x", "y"])

    def test_parse_class_names(self) -> None:
        assert parse_class_names(" a\tb  a ") == frozenset({"a", "b"})
        assert parse_class_names(["a b", "c"]) == frozenset({"a", "b", "c"})

    def test_parse_class_names_rejects_other_values(self) -> None:
        with pytest.raises(TypeError):
            parse_class_names(5)
        with pytest.raises(TypeError):
            parse_class_names(["a", 5])


class TestClassification:
    """Test component and element predicates."""

    def test_dom_component(self) -> None:
        node = render_into_document(create_element("div"))
        assert is_dom_component(node)
        assert not is_dom_component(create_element("div"))
        assert not is_dom_component(node.owner_document.create_text_node("x"))
        assert not is_dom_component(None)

    def test_composite_component(self) -> None:
        instance = render_into_document(create_element(Child))
        assert is_composite_component(instance)
        assert is_composite_component_with_type(instance, Child)
        assert not is_composite_component_with_type(instance, Button)
        assert not is_composite_component_with_type(create_element(Child), Child)

    def test_elements(self) -> None:
        assert is_element(create_element("div"))
        assert not is_element({"type": "div"})
        assert is_element_of_type(create_element(Child), Child)
        assert not is_element_of_type(create_element(Child), Button)
        assert is_dom_component_element(create_element("div"))
        assert not is_dom_component_element(create_element(Child))
        assert is_composite_component_element(create_element(Child))
        assert not is_composite_component_element(create_element("div"))
