from __future__ import annotations

import typing as t


class _Node:
    __slots__ = ("key", "prev", "next")

    def __init__(self, key: t.Optional[str]) -> None:
        self.key = key
        self.prev: "_Node" = self
        self.next: "_Node" = self


class AccessOrderTracker:
    """Recency order over cache keys, least recently used first.

    A dict maps each key to its node in a circular doubly linked list with a
    sentinel, so touch, remove and evict_oldest are all O(1).
    """

    def __init__(self) -> None:
        self._head = _Node(None)
        self._nodes: t.Dict[str, _Node] = {}

    def __len__(self) -> int:
        return len(self._nodes)

    def __contains__(self, key: object) -> bool:
        return key in self._nodes

    def __iter__(self) -> t.Iterator[str]:
        node = self._head.next
        while node is not self._head:
            yield t.cast(str, node.key)
            node = node.next

    def touch(self, key: str) -> None:
        """Mark key as most recently used, inserting it if unknown."""
        node = self._nodes.get(key)
        if node is None:
            node = _Node(key)
            self._nodes[key] = node
        else:
            self._unlink(node)
        # append before the sentinel (tail = most recent)
        tail = self._head.prev
        node.prev = tail
        node.next = self._head
        tail.next = node
        self._head.prev = node

    def remove(self, key: str) -> bool:
        node = self._nodes.pop(key, None)
        if node is None:
            return False
        self._unlink(node)
        return True

    def evict_oldest(self) -> t.Optional[str]:
        node = self._head.next
        if node is self._head:
            return None
        key = t.cast(str, node.key)
        del self._nodes[key]
        self._unlink(node)
        return key

    def clear(self) -> None:
        self._head.prev = self._head.next = self._head
        self._nodes.clear()

    @staticmethod
    def _unlink(node: _Node) -> None:
        node.prev.next = node.next
        node.next.prev = node.prev
        node.prev = node.next = node
