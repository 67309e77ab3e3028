"""Nesting limit and path tracking for document walks.

Merge, copy and flatten walk arbitrarily nested documents. The walks keep
no fixed-size buffer, but a document nested hundreds of levels deep is
malformed input and would otherwise end in RecursionError. DepthGuard turns
that into a catchable DepthLimitExceededError whose diagnostic names the
document and the key path where the limit tripped:

    error[NESTING_DEPTH_EXCEEDED]: Document nesting exceeds maximum depth (5)
      --> menu.json: ui/menu/sub/deeper/still/too_deep

The guard's path doubles as the flattener's segment stack.

Thread-safe: uses explicit state, no thread-local storage. One guard per walk.
Python 3.13+.
"""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass, field

from loctree.constants import KEY_SEPARATOR, MAX_DEPTH
from loctree.diagnostics import MalformedDocumentError
from loctree.diagnostics.templates import ErrorTemplate

__all__ = ["DepthGuard", "DepthLimitExceededError", "depth_clamp"]

logger = logging.getLogger(__name__)


class DepthLimitExceededError(MalformedDocumentError):
    """Raised when a document nests deeper than the configured maximum."""


@dataclass(slots=True)
class DepthGuard:
    """Segment stack with a depth cap.

    Usage:
        guard = DepthGuard(max_depth=50, label="menu.json")
        for key, value in node.items():
            with guard.descend(key):
                walk(value)

    A bare ``with guard:`` enters an unnamed level.

    Mutability Note:
        Intentionally mutable (not frozen=True). A segment is pushed on
        __enter__ and popped on __exit__.

    Attributes:
        max_depth: Maximum number of nested levels (default: MAX_DEPTH)
        label: Document name attached to the diagnostic
    """

    max_depth: int = MAX_DEPTH
    label: str = "<document>"
    _segments: list[str] = field(default_factory=list, init=False, repr=False)
    _pending: str = field(default="", init=False, repr=False)

    def __post_init__(self) -> None:
        """Clamp max_depth against Python recursion limit."""
        self.max_depth = depth_clamp(self.max_depth)

    def descend(self, segment: object) -> DepthGuard:
        """Name the level entered by the next ``with``.

        Object keys are used as-is; array positions are passed as ints and
        recorded as ``[i]``.
        """
        self._pending = f"[{segment}]" if isinstance(segment, int) else str(segment)
        return self

    def __enter__(self) -> DepthGuard:
        """Push the pending segment.

        The limit is checked BEFORE pushing: __exit__ does not run when
        __enter__ raises, so pushing first would leave a stale segment.
        """
        segment, self._pending = self._pending, ""
        self.check(segment)
        self._segments.append(segment)
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: object,
    ) -> None:
        """Pop the segment entered last."""
        self._segments.pop()

    @property
    def current_depth(self) -> int:
        """Number of levels currently entered."""
        return len(self._segments)

    @property
    def path(self) -> tuple[str, ...]:
        """Segments entered so far, outermost first (unnamed levels included)."""
        return tuple(self._segments)

    def location(self, segment: str = "") -> str:
        """Label plus the named segments, for diagnostics."""
        named = [s for s in self._segments if s]
        if segment:
            named.append(segment)
        if not named:
            return self.label
        return f"{self.label}: {KEY_SEPARATOR.join(named)}"

    def check(self, segment: str = "") -> None:
        """Raise if one more level would pass max_depth.

        Raises:
            DepthLimitExceededError: If depth limit reached
        """
        if len(self._segments) >= self.max_depth:
            raise DepthLimitExceededError(
                ErrorTemplate.nesting_depth_exceeded(self.max_depth, self.location(segment))
            )


def depth_clamp(requested_depth: int, reserve_frames: int = 50) -> int:
    """Clamp requested depth against Python recursion limit.

    Each document level costs a couple of interpreter frames (the walk
    function plus the ``with`` block), so the cap must stay below
    sys.getrecursionlimit() by a margin.

    Example:
        >>> import sys
        >>> sys.setrecursionlimit(200)
        >>> depth_clamp(100)
        100
        >>> depth_clamp(500)
        150
    """
    max_safe_depth = sys.getrecursionlimit() - reserve_frames
    if requested_depth > max_safe_depth:
        logger.warning(
            "Requested depth %d exceeds Python recursion limit (%d); clamping to %d",
            requested_depth,
            sys.getrecursionlimit(),
            max_safe_depth,
        )
        return max_safe_depth
    return requested_depth
