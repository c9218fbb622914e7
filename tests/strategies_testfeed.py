# topmark:header:start
#
#   project      : TestFeed
#   file         : strategies_testfeed.py
#   file_relpath : tests/strategies_testfeed.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Hypothesis strategies for generating well-nested test trees and their event streams."""

from __future__ import annotations

import itertools
from collections.abc import Iterator
from dataclasses import dataclass
from typing import Union

from hypothesis import strategies as st

from testfeed.events.model import (
    DetailsType,
    ErrorInfo,
    Event,
    TestDetails,
    TestFail,
    TestPass,
    TestStart,
)


@dataclass(frozen=True)
class Leaf:
    """A test case that either passes or fails."""

    passed: bool


@dataclass(frozen=True)
class Suite:
    """A container of suites and test cases."""

    children: tuple[Node, ...]


Node = Union[Leaf, Suite]

s_leaf: st.SearchStrategy[Node] = st.builds(Leaf, passed=st.booleans())

s_node: st.SearchStrategy[Node] = st.recursive(
    s_leaf,
    lambda children: st.lists(children, max_size=4).map(lambda nodes: Suite(tuple(nodes))),
    max_leaves=20,
)

s_forest: st.SearchStrategy[list[Node]] = st.lists(s_node, max_size=4)


def has_leaf(node: Node) -> bool:
    """Return True if ``node`` is a leaf or contains one."""
    if isinstance(node, Leaf):
        return True
    return any(has_leaf(child) for child in node.children)


@dataclass(frozen=True)
class RenderedTree:
    """Event stream of a generated forest plus the facts a report must reflect.

    Attributes:
        events (list[Event]): Start/pass/fail events in emission order.
        printable_suites (frozenset[str]): Suites with at least one leaf below them.
        failure_paths (list[tuple[str, ...]]): Root-to-leaf names of failing leaves, in order.
        leaf_count (int): Number of test cases in the forest.
    """

    events: list[Event]
    printable_suites: frozenset[str]
    failure_paths: list[tuple[str, ...]]
    leaf_count: int


def render_forest(forest: list[Node]) -> RenderedTree:
    """Turn a generated forest into events with unique names."""
    counter: Iterator[int] = itertools.count()
    events: list[Event] = []
    printable: set[str] = set()
    failures: list[tuple[str, ...]] = []

    def walk(node: Node, path: tuple[str, ...]) -> None:
        nesting = len(path)
        if isinstance(node, Suite):
            name = f"suite-{next(counter)}"
            events.append(TestStart(name=name, nesting=nesting))
            if has_leaf(node):
                printable.add(name)
            for child in node.children:
                walk(child, (*path, name))
            events.append(
                TestPass(name=name, nesting=nesting, details=TestDetails(type=DetailsType.SUITE))
            )
            return

        name = f"test-{next(counter)}"
        events.append(TestStart(name=name, nesting=nesting))
        if node.passed:
            events.append(TestPass(name=name, nesting=nesting))
        else:
            failures.append((*path, name))
            events.append(
                TestFail(
                    name=name,
                    nesting=nesting,
                    details=TestDetails(error=ErrorInfo(message=f"{name} failed")),
                )
            )

    for root in forest:
        walk(root, ())

    leaf_count = sum(1 for event in events if isinstance(event, TestStart) and event.name.startswith("test-"))
    return RenderedTree(events, frozenset(printable), failures, leaf_count)
