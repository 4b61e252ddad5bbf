"""
Error types for the DAZZLE test utilities.

All errors are programmer-error guards raised synchronously at the point of
misuse. Nothing here is retried or recovered internally.
"""

from __future__ import annotations


class TestUtilsError(Exception):
    """Base exception for all test utility errors."""

    __test__ = False  # not a pytest test class

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class InvalidRootError(TestUtilsError, TypeError):
    """
    Raised when a traversal or query root is not a rendered component instance.

    Examples:
    - A list of instances instead of a single root
    - A DOM node instead of the component that rendered it
    - Raw data (numbers, strings, dicts)
    """

    def __init__(self, method: str, received: str):
        self.method = method
        self.received = received
        super().__init__(
            f"{method}(...): the first argument must be a rendered class component "
            f"instance. Instead received: {received}."
        )


class MultiplicityError(TestUtilsError):
    """Raised when a find_* query does not match exactly one instance."""

    def __init__(self, method: str, count: int, criteria: str):
        self.method = method
        self.count = count
        self.criteria = criteria
        found = "no instances" if count == 0 else "more than one instance"
        super().__init__(
            f"{method}(...): did not find exactly one match, found {found} "
            f"(found: {count}) for {criteria}."
        )


class MisuseError(TestUtilsError, TypeError):
    """
    Raised when Simulate is handed something other than a DOM node.

    Examples:
    - An element description returned by create_element()
    - A mounted component instance
    """

    pass
