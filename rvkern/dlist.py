"""Intrusive circular doubly linked list."""

from __future__ import annotations

from typing import Any, Iterator


class ListEntry:
    """A link in a circular list; a lone entry is an empty list head.

    ``owner`` is the object the link is embedded in.
    """

    __slots__ = ("owner", "prev", "next")

    def __init__(self, owner: Any = None) -> None:
        self.owner = owner
        self.prev: ListEntry = self
        self.next: ListEntry = self

    def __repr__(self) -> str:
        return f"ListEntry(owner={self.owner!r})"

    @staticmethod
    def _link(elm: ListEntry, prev: ListEntry, nxt: ListEntry) -> None:
        prev.next = elm
        nxt.prev = elm
        elm.next = nxt
        elm.prev = prev

    def add(self, elm: ListEntry) -> None:
        """Insert ``elm`` right after this entry."""
        self.add_after(elm)

    def add_before(self, elm: ListEntry) -> None:
        """Insert ``elm`` right before this entry."""
        self._link(elm, self.prev, self)

    def add_after(self, elm: ListEntry) -> None:
        """Insert ``elm`` right after this entry."""
        self._link(elm, self, self.next)

    def delete(self) -> None:
        """Unlink this entry; its own links are left as they were."""
        self.prev.next = self.next
        self.next.prev = self.prev

    def delete_init(self) -> None:
        """Unlink this entry and make it an empty list of its own."""
        self.delete()
        self.prev = self.next = self

    def empty(self) -> bool:
        """Whether this head has no other entries."""
        return self.next is self

    def __iter__(self) -> Iterator[ListEntry]:
        """Yield the entries after this head, in order; the yielded one may be unlinked."""
        entry = self.next
        while entry is not self:
            following = entry.next
            yield entry
            entry = following