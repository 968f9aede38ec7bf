"""Base node class for the stache element tree."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Node:
    """Base class for all element tree nodes.

    All nodes track their 1-based source line for error reporting.
    Nodes are immutable so one compiled tree can serve concurrent renders.

    """

    lineno: int
