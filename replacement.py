"""
Page replacement policies.

When a page fault occurs and every frame is occupied, the memory manager asks
its replacer for a victim page. Two policies are available:

    FIFO: evicts the page that was loaded first, ignoring later accesses.
    LRU:  evicts the page whose last access is the oldest.
"""

from abc import ABC, abstractmethod
from collections import OrderedDict, deque
from typing import Deque, List, Optional

from errors import ConfigError


class ReplacementPolicy:
    """
    Names of the available page replacement algorithms.

    FIFO: First-In-First-Out - replaces the oldest page in memory
    LRU:  Least Recently Used - replaces the page not used for longest time
    """
    FIFO = "FIFO"
    LRU = "LRU"

    ALL = (FIFO, LRU)


class Replacer(ABC):
    """
    Abstract base class for a page replacement algorithm.
    Tracks the resident page numbers that are candidates for eviction.
    """

    name = ""

    @abstractmethod
    def on_load(self, page_no: int) -> None:
        """Register a page that has just been loaded into a frame."""

    @abstractmethod
    def on_access(self, page_no: int) -> None:
        """Record a successful access to a resident page."""

    @abstractmethod
    def select_victim(self) -> Optional[int]:
        """
        Choose a resident page to evict and stop tracking it.

        Returns:
            The victim page number, or None if no page is resident.
        """

    @abstractmethod
    def order(self) -> List[int]:
        """Resident pages in the policy's internal order (for display)."""

    @abstractmethod
    def __len__(self) -> int:
        """Number of resident pages tracked."""

    @abstractmethod
    def __contains__(self, page_no: int) -> bool:
        """True if the page is tracked as resident."""


class FIFOReplacer(Replacer):
    """
    First-In-First-Out replacer.
    Keeps resident pages in load order, oldest at the head of the queue.
    """

    name = ReplacementPolicy.FIFO

    def __init__(self):
        self._queue: Deque[int] = deque()

    def on_load(self, page_no: int) -> None:
        self._queue.append(page_no)

    def on_access(self, page_no: int) -> None:
        # Re-accessing a page does not change its position in FIFO
        pass

    def select_victim(self) -> Optional[int]:
        if not self._queue:
            return None
        return self._queue.popleft()

    def order(self) -> List[int]:
        """Oldest load first."""
        return list(self._queue)

    def __len__(self) -> int:
        return len(self._queue)

    def __contains__(self, page_no: int) -> bool:
        return page_no in self._queue


class LRUReplacer(Replacer):
    """
    Least Recently Used replacer.

    The OrderedDict is used as an ordered set of page numbers with the most
    recently used page at the front. move_to_end() and popitem() are both O(1),
    so touching a page and evicting the tail never scan the list.
    """

    name = ReplacementPolicy.LRU

    def __init__(self):
        self._pages: "OrderedDict[int, None]" = OrderedDict()

    def on_load(self, page_no: int) -> None:
        self._pages[page_no] = None
        self._pages.move_to_end(page_no, last=False)  # MRU at the front

    def on_access(self, page_no: int) -> None:
        if page_no in self._pages:
            self._pages.move_to_end(page_no, last=False)

    def select_victim(self) -> Optional[int]:
        if not self._pages:
            return None
        victim, _ = self._pages.popitem(last=True)  # Evict from the back (LRU)
        return victim

    def order(self) -> List[int]:
        """Most recently used first."""
        return list(self._pages)

    def __len__(self) -> int:
        return len(self._pages)

    def __contains__(self, page_no: int) -> bool:
        return page_no in self._pages


_REPLACERS = {
    ReplacementPolicy.FIFO: FIFOReplacer,
    ReplacementPolicy.LRU: LRUReplacer,
}


def make_replacer(policy: str) -> Replacer:
    """
    Build a fresh replacer for the given policy name.

    Raises:
        ConfigError: If the policy is not FIFO or LRU
    """
    try:
        return _REPLACERS[policy]()
    except (KeyError, TypeError):
        raise ConfigError(f"Unknown replacement policy: {policy!r}") from None
