"""Ordering utilities for sibling sets.

A sibling set is every task list of one project, or every task of one task
list. Positions are 1-based and, between service calls, always form the
contiguous run ``1..N``. The helpers here only rearrange the ``position``
attribute of objects handed in by the caller; fetching and persisting the
siblings is the caller's job.
"""

from collections.abc import Iterable, Sequence
from typing import Optional, Protocol, TypeVar


class Positioned(Protocol):
    """Anything with a mutable integer ``position``."""

    position: int


P = TypeVar("P", bound=Positioned)


def shift_for_insertion(siblings: Iterable[P], position: int) -> list[P]:
    """
    Open a one-slot gap at ``position``.

    Every sibling at or after ``position`` moves down by one. The upper bound
    is not checked: inserting past ``N + 1`` leaves a gap, so callers clamp
    the target with :func:`clamp_position` first.

    Args:
        siblings: Items competing for positions in the same parent.
        position: 1-based slot the caller is about to fill.

    Returns:
        The siblings whose position changed.
    """
    if position < 1:
        raise ValueError(f"Position must be >= 1, got {position}")

    shifted = []
    for sibling in siblings:
        if sibling.position >= position:
            sibling.position += 1
            shifted.append(sibling)
    return shifted


def normalize_positions(siblings: Iterable[P]) -> list[P]:
    """
    Renumber siblings to ``1..N`` keeping their relative order.

    The sort is stable, so siblings sharing a position keep the order in
    which they were given.

    Returns:
        The siblings sorted by their new position.
    """
    ordered = sorted(siblings, key=lambda sibling: sibling.position)
    for index, sibling in enumerate(ordered, start=1):
        sibling.position = index
    return ordered


def append_position(max_position: Optional[int]) -> int:
    """Default position for a new sibling: after the current last one."""
    return (max_position or 0) + 1


def next_position(siblings: Sequence[Positioned]) -> int:
    """Same as :func:`append_position` for an in-memory sibling list."""
    if not siblings:
        return 1
    return append_position(max(sibling.position for sibling in siblings))


def clamp_position(position: int, sibling_count: int) -> int:
    """Clamp a requested slot into ``[1, sibling_count + 1]``."""
    return max(1, min(position, sibling_count + 1))


def place_in_siblings(siblings: Sequence[P], position: int) -> int:
    """
    Make room for one item among ``siblings`` and return the slot it takes.

    ``siblings`` must not contain the item being placed. They are compacted
    to ``1..N`` first, the requested slot is clamped to ``[1, N + 1]``, and
    the siblings from that slot onwards are shifted down. Assigning the
    returned slot to the item yields a contiguous ``1..N + 1``.
    """
    normalize_positions(siblings)
    slot = clamp_position(position, len(siblings))
    shift_for_insertion(siblings, slot)
    return slot
