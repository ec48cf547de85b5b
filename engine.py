"""
Virtual memory simulation engine: segmentation on top of demand paging.

A logical address is given as (segment index, offset). The segment table
turns it into a flat logical address, the page table maps the logical page to
a physical frame, and a page fault loads the page into a free frame or
evicts a victim chosen by the replacement policy (FIFO or LRU).
"""

from dataclasses import dataclass, replace
from typing import Dict, Iterator, List, Optional, Sequence, Tuple

import config
from errors import ConfigError, InvalidSegmentError, OffsetOutOfBoundsError
from replacement import ReplacementPolicy, Replacer, make_replacer


# =============================================================================
# DATA STRUCTURES
# =============================================================================

@dataclass(frozen=True)
class Segment:
    """
    A named, fixed-size region of the logical address space.

    Attributes:
        name (str): Display name (e.g. Code, Data, Stack)
        base (int): Starting logical address of the segment
        limit (int): Size of the segment; valid offsets are [0, limit)
    """
    name: str
    base: int
    limit: int


@dataclass
class PageTableEntry:
    """
    Represents a single entry in the Page Table.

    Attributes:
        page_no (int): The logical page number this entry represents
        frame_no (Optional[int]): Physical frame number, None if not in memory
        valid (bool): True if page is currently loaded in a frame
    """
    page_no: int
    frame_no: Optional[int] = None
    valid: bool = False


@dataclass
class Frame:
    """
    Represents a physical memory frame.

    Attributes:
        frame_no (int): The frame's index in physical memory
        page_no (Optional[int]): The logical page stored here, None if free
    """
    frame_no: int
    page_no: Optional[int] = None

    @property
    def occupied(self) -> bool:
        return self.page_no is not None


@dataclass(frozen=True)
class AccessResult:
    """
    Outcome of a single translated memory access.

    Attributes:
        segment (int): Segment index that was accessed
        segment_name (str): Name of that segment
        offset (int): Offset within the segment
        logical_address (int): base + offset
        page (int): Logical page number
        page_offset (int): Offset within the page/frame
        frame (int): Frame holding the page after the access
        physical_address (int): frame * page_size + page_offset
        faulted (bool): True if the access caused a page fault
        evicted_page (Optional[int]): Page evicted to make room, if any
    """
    segment: int
    segment_name: str
    offset: int
    logical_address: int
    page: int
    page_offset: int
    frame: int
    physical_address: int
    faulted: bool
    evicted_page: Optional[int] = None


# =============================================================================
# SEGMENT TABLE
# =============================================================================

class SegmentTable:
    """
    Static partition of the logical address space into equal segments.

    Each segment gets memory_size // len(segment_names) bytes. When the
    division leaves a remainder, the trailing bytes belong to no segment and
    cannot be addressed.
    """

    def __init__(self, memory_size: int, segment_names: Sequence[str]):
        if not segment_names:
            raise ConfigError("At least one segment name is required")
        limit = memory_size // len(segment_names)
        if limit <= 0:
            raise ConfigError(
                f"Memory size {memory_size} is too small for {len(segment_names)} segments"
            )
        self._segments: Tuple[Segment, ...] = tuple(
            Segment(name, index * limit, limit) for index, name in enumerate(segment_names)
        )

    def __len__(self) -> int:
        return len(self._segments)

    def __getitem__(self, index: int) -> Segment:
        return self._segments[index]

    def __iter__(self) -> Iterator[Segment]:
        return iter(self._segments)

    def resolve(self, segment_index: int, offset: int) -> int:
        """
        Translate a segment:offset pair into a flat logical address.

        Args:
            segment_index (int): Index of the segment
            offset (int): Offset within the segment

        Returns:
            int: The logical address base + offset

        Raises:
            InvalidSegmentError: If the segment index is not defined
            OffsetOutOfBoundsError: If offset is outside [0, limit)
        """
        if segment_index < 0 or segment_index >= len(self._segments):
            raise InvalidSegmentError(f"Invalid segment index: {segment_index}")

        seg = self._segments[segment_index]
        if offset < 0 or offset >= seg.limit:
            raise OffsetOutOfBoundsError(
                f"Segmentation Fault: offset {offset} out of bounds for "
                f"segment {seg.name} (limit {seg.limit})"
            )
        return seg.base + offset

    def rows(self) -> List[Dict[str, object]]:
        return [
            {"index": i, "name": s.name, "base": s.base, "limit": s.limit}
            for i, s in enumerate(self._segments)
        ]


# =============================================================================
# STATISTICS
# =============================================================================

class StatsCollector:
    """Counts memory accesses and page faults."""

    def __init__(self):
        self.accesses = 0
        self.page_faults = 0

    def record(self, access_occurred: bool, fault_occurred: bool):
        """
        Count one event.

        Raises:
            ValueError: If a fault is reported without an access
        """
        if fault_occurred and not access_occurred:
            raise ValueError("A page fault can only occur during an access")
        if access_occurred:
            self.accesses += 1
        if fault_occurred:
            self.page_faults += 1

    @property
    def hits(self) -> int:
        return self.accesses - self.page_faults

    @property
    def fault_rate(self) -> Optional[float]:
        """Percentage of accesses that faulted, None before the first access."""
        if self.accesses == 0:
            return None
        return 100.0 * self.page_faults / self.accesses

    def as_dict(self) -> Dict[str, Optional[float]]:
        return {
            "accesses": self.accesses,
            "page_faults": self.page_faults,
            "hits": self.hits,
            "fault_rate": self.fault_rate,
        }


# =============================================================================
# MEMORY MANAGER - Core Simulation Engine
# =============================================================================

class MemoryManager:
    """
    Core simulation engine: address translation and demand paging.

    The manager owns the segment table, page table, frame table, replacement
    state and statistics. Nothing is shared with callers; listings return
    fresh rows.

    Attributes:
        event_log (List[str]): Log of all memory events, oldest first
    """

    def __init__(
        self,
        memory_size: int,
        page_size: int,
        segment_names: Sequence[str],
        policy: str = ReplacementPolicy.FIFO,
        physical_memory_size: Optional[int] = None,
    ):
        """
        Initialize the Memory Manager with given memory configuration.

        Args:
            memory_size (int): Size of the logical address space in bytes
            page_size (int): Size of each page/frame in bytes
            segment_names (Sequence[str]): Names of the segments, in order
            policy (str): 'FIFO' or 'LRU'
            physical_memory_size (Optional[int]): Size of physical memory in
                bytes; defaults to memory_size (one frame per page)

        Raises:
            ConfigError: If the configuration cannot produce at least one
                page, one frame and one non-empty segment
        """
        if physical_memory_size is None:
            physical_memory_size = memory_size

        if page_size <= 0:
            raise ConfigError("Page size must be positive")
        if memory_size <= 0 or memory_size // page_size == 0:
            raise ConfigError(
                f"Memory size {memory_size} must hold at least one page of {page_size} bytes"
            )
        if memory_size % page_size != 0:
            raise ConfigError(
                f"Memory size {memory_size} is not a multiple of page size {page_size}"
            )
        if physical_memory_size // page_size <= 0:
            raise ConfigError(
                f"Physical memory {physical_memory_size} must hold at least one frame"
            )

        self._replacer: Replacer = make_replacer(policy)
        self._segments = SegmentTable(memory_size, segment_names)

        self._memory_size = memory_size
        self._page_size = page_size
        self._total_pages = memory_size // page_size
        # Remainder bytes of physical memory do not form a frame
        self._total_frames = physical_memory_size // page_size

        self._page_table: List[PageTableEntry] = [
            PageTableEntry(p) for p in range(self._total_pages)
        ]
        self._frames: List[Frame] = [Frame(f) for f in range(self._total_frames)]
        self._stats = StatsCollector()

        self.event_log: List[str] = []
        self.event_log.append(
            f"Manager created: {self._total_pages} pages, {self._total_frames} frames, "
            f"{len(self._segments)} segments, policy={policy}"
        )

    @classmethod
    def from_defaults(cls, **overrides) -> "MemoryManager":
        """Build a manager from config.py defaults, overriding any argument."""
        params = {
            "memory_size": config.DEFAULT_MEMORY_SIZE,
            "page_size": config.DEFAULT_PAGE_SIZE,
            "segment_names": list(config.DEFAULT_SEGMENT_NAMES),
            "policy": config.DEFAULT_POLICY,
        }
        params.update(overrides)
        return cls(**params)

    # =========================================================================
    # PROPERTIES
    # =========================================================================

    @property
    def memory_size(self) -> int:
        return self._memory_size

    @property
    def page_size(self) -> int:
        return self._page_size

    @property
    def total_pages(self) -> int:
        return self._total_pages

    @property
    def total_frames(self) -> int:
        return self._total_frames

    @property
    def policy(self) -> str:
        return self._replacer.name

    @property
    def segments(self) -> SegmentTable:
        return self._segments

    @property
    def page_table(self) -> Tuple[PageTableEntry, ...]:
        return tuple(replace(pte) for pte in self._page_table)

    @property
    def frames(self) -> Tuple[Frame, ...]:
        return tuple(replace(f) for f in self._frames)

    # =========================================================================
    # ADDRESS TRANSLATION
    # =========================================================================

    def translate(self, segment_index: int, offset: int) -> Tuple[int, int]:
        """
        Preview a segment:offset translation without touching memory.

        Returns:
            Tuple[int, int]: (page_number, page_offset)

        Raises:
            InvalidSegmentError, OffsetOutOfBoundsError
        """
        logical = self._segments.resolve(segment_index, offset)
        return logical // self._page_size, logical % self._page_size

    def access(self, segment_index: int, offset: int) -> AccessResult:
        """
        Access a logical address, handling hits, faults and replacement.

        Steps:
        1. Resolve segment bounds; a rejected access leaves counters and
           tables untouched and only appends a "Rejected" line to event_log
        2. Split the logical address into page number and page offset
        3. On a miss, count a fault and load the page
        4. Tell the replacer about the access (LRU recency)
        5. Compute the physical address from the page's frame

        Args:
            segment_index (int): Index of the segment
            offset (int): Offset within the segment

        Returns:
            AccessResult: Addresses, frame and fault flag for this access

        Raises:
            InvalidSegmentError: If the segment index is not defined
            OffsetOutOfBoundsError: If offset is outside the segment
        """
        try:
            logical = self._segments.resolve(segment_index, offset)
        except (InvalidSegmentError, OffsetOutOfBoundsError) as e:
            self.event_log.append(f"Rejected: {e}")
            raise

        page_no = logical // self._page_size
        page_offset = logical % self._page_size

        pte = self._page_table[page_no]
        faulted = not pte.valid
        self._stats.record(access_occurred=True, fault_occurred=faulted)

        evicted = None
        if faulted:
            self.event_log.append(f"Fault: Page {page_no} not in memory")
            evicted = self._handle_fault(page_no)
        else:
            self.event_log.append(f"Hit: Page {page_no} in Frame {pte.frame_no}")

        # The access itself is the recency signal, fault or not
        self._replacer.on_access(page_no)

        frame_no = pte.frame_no
        physical = frame_no * self._page_size + page_offset
        self.event_log.append(
            f"Access: seg {segment_index} offset {offset} -> logical {logical} "
            f"-> physical {physical}"
        )

        return AccessResult(
            segment=segment_index,
            segment_name=self._segments[segment_index].name,
            offset=offset,
            logical_address=logical,
            page=page_no,
            page_offset=page_offset,
            frame=frame_no,
            physical_address=physical,
            faulted=faulted,
            evicted_page=evicted,
        )

    # =========================================================================
    # PAGE FAULT HANDLING
    # =========================================================================

    def _handle_fault(self, page_no: int) -> Optional[int]:
        """
        Load an invalid page into a frame (internal helper).

        Uses the lowest-numbered free frame; if none is free, evicts the
        replacer's victim and reuses its frame.

        Returns:
            Optional[int]: The evicted page number, or None if a free frame
            was available
        """
        free_frame = next((f for f in self._frames if not f.occupied), None)

        evicted_page = None
        if free_frame is not None:
            frame = free_frame
        else:
            evicted_page = self._replacer.select_victim()
            assert evicted_page is not None, "Full frame table with no resident pages"

            old_pte = self._page_table[evicted_page]
            frame = self._frames[old_pte.frame_no]
            self.event_log.append(f"Evicting: Page {evicted_page} from Frame {frame.frame_no}")

            old_pte.valid = False
            old_pte.frame_no = None
            frame.page_no = None

        pte = self._page_table[page_no]
        pte.frame_no = frame.frame_no
        pte.valid = True
        frame.page_no = page_no

        self._replacer.on_load(page_no)

        suffix = " (replaced)" if evicted_page is not None else ""
        self.event_log.append(f"Loaded: Page {page_no} -> Frame {frame.frame_no}{suffix}")
        return evicted_page

    # =========================================================================
    # LISTINGS & STATISTICS
    # =========================================================================

    def list_segments(self) -> List[Dict[str, object]]:
        return self._segments.rows()

    def list_page_table(self) -> List[Dict[str, object]]:
        return [
            {"page": pte.page_no, "frame": pte.frame_no if pte.valid else None, "valid": pte.valid}
            for pte in self._page_table
        ]

    def list_frames(self) -> List[Dict[str, Optional[int]]]:
        return [{"frame": f.frame_no, "page": f.page_no} for f in self._frames]

    def replacement_order(self) -> List[int]:
        """Resident pages in eviction-relevant order (FIFO: oldest first, LRU: MRU first)."""
        return self._replacer.order()

    def stats(self) -> Dict[str, Optional[float]]:
        """
        Return simulation statistics.

        Returns:
            Dict[str, Optional[float]]: accesses, page_faults, hits and
            fault_rate (percentage, None before the first access)
        """
        return self._stats.as_dict()
