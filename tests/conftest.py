"""Shared pytest fixtures for the test utilities."""

from collections.abc import Iterator

import pytest

from dazzle_test_utils.config import reset_config
from dazzle_test_utils.dom import Document, Element, create_document
from dazzle_test_utils.runtime import unmount_component_at_node


@pytest.fixture
def document() -> Document:
    """Return a fresh empty HTML document."""
    return create_document()


@pytest.fixture
def container(document: Document) -> Iterator[Element]:
    """Return a div attached to the document body; unmounted after the test."""
    div = document.create_element("div")
    document.body.append_child(div)
    yield div
    unmount_component_at_node(div)


@pytest.fixture
def clean_config() -> Iterator[None]:
    """Re-read DAZZLE_TESTUTILS_* settings before and after the test."""
    reset_config()
    yield
    reset_config()
