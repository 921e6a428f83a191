"""Location and breadcrumb trail values."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import ClassVar, Iterable, Optional


@dataclass(frozen=True)
class Location:
    """
    Coordinates of a folder in the remote store.

    Location(None, None) is the root of the record's linked folder.
    """

    drive_id: Optional[str] = None
    item_id: Optional[str] = None

    ROOT: ClassVar["Location"]

    @property
    def is_root(self) -> bool:
        return self.drive_id is None and self.item_id is None

    @property
    def is_resolved(self) -> bool:
        """True when both coordinates are known (required by mutations)."""
        return bool(self.drive_id) and bool(self.item_id)


Location.ROOT = Location()


@dataclass(frozen=True)
class Breadcrumb:
    """One entry of the trail, root -> current."""

    label: str
    index: int
    is_last: bool
    item_id: Optional[str] = None
    drive_id: Optional[str] = None

    @property
    def location(self) -> Location:
        return Location(self.drive_id, self.item_id)

    @property
    def has_coordinates(self) -> bool:
        return bool(self.item_id) and bool(self.drive_id)


Trail = tuple[Breadcrumb, ...]


def build_trail(crumbs: Iterable[Breadcrumb]) -> Trail:
    """Renumber crumbs and recompute is_last so only the final one is set."""
    items = list(crumbs)
    last = len(items) - 1
    return tuple(
        replace(crumb, index=i, is_last=(i == last)) for i, crumb in enumerate(items)
    )


def append_crumb(trail: Trail, label: str, drive_id: Optional[str], item_id: Optional[str]) -> Trail:
    """Return a new trail with a crumb for (drive_id, item_id) appended."""
    crumb = Breadcrumb(label=label, index=len(trail), is_last=True, item_id=item_id, drive_id=drive_id)
    return build_trail([*trail, crumb])


def truncate_trail(trail: Trail, index: int) -> Trail:
    """Return trail[0..index] (inclusive) with is_last recomputed."""
    if index < 0 or index >= len(trail):
        raise IndexError(f"breadcrumb index {index} out of range (trail length {len(trail)})")
    return build_trail(trail[: index + 1])


def trail_location(trail: Trail) -> Location:
    """The Location the trail points at; ROOT for an empty trail."""
    if not trail:
        return Location.ROOT
    return trail[-1].location
