"""Tests for the FIFO and LRU replacers.

A replacer only tracks resident page numbers; the memory manager tells it
when a page is loaded or accessed and asks it for a victim when every frame
is occupied.
"""

import pytest

from errors import ConfigError
from replacement import FIFOReplacer, LRUReplacer, ReplacementPolicy, Replacer, make_replacer


# -- FIFO Policy --------------------------------------------------------------


class TestFIFOReplacer:
    """FIFO evicts the page that was loaded first."""

    def test_selects_oldest_page(self) -> None:
        fifo = FIFOReplacer()
        for page in (1, 2, 3):
            fifo.on_load(page)
        assert fifo.select_victim() == 1
        assert fifo.order() == [2, 3]

    def test_access_does_not_change_order(self) -> None:
        fifo = FIFOReplacer()
        fifo.on_load(1)
        fifo.on_load(2)
        fifo.on_access(1)
        assert fifo.select_victim() == 1

    def test_empty_has_no_victim(self) -> None:
        assert FIFOReplacer().select_victim() is None

    def test_len_and_contains(self) -> None:
        fifo = FIFOReplacer()
        fifo.on_load(7)
        assert len(fifo) == 1
        assert 7 in fifo
        fifo.select_victim()
        assert 7 not in fifo


# -- LRU Policy ---------------------------------------------------------------


class TestLRUReplacer:
    """LRU evicts the page whose last access is the oldest."""

    def test_selects_least_recently_loaded(self) -> None:
        lru = LRUReplacer()
        for page in (1, 2, 3):
            lru.on_load(page)
        assert lru.order() == [3, 2, 1]
        assert lru.select_victim() == 1

    def test_access_moves_to_front(self) -> None:
        lru = LRUReplacer()
        for page in (1, 2, 3):
            lru.on_load(page)
        lru.on_access(1)
        assert lru.order() == [1, 3, 2]
        assert lru.select_victim() == 2

    def test_access_to_unknown_page_is_ignored(self) -> None:
        lru = LRUReplacer()
        lru.on_load(1)
        lru.on_access(9)
        assert lru.order() == [1]

    def test_empty_has_no_victim(self) -> None:
        assert LRUReplacer().select_victim() is None


# -- Factory ------------------------------------------------------------------


class TestMakeReplacer:

    @pytest.mark.parametrize(
        "name, cls",
        [(ReplacementPolicy.FIFO, FIFOReplacer), (ReplacementPolicy.LRU, LRUReplacer)],
    )
    def test_known_policies(self, name, cls) -> None:
        replacer = make_replacer(name)
        assert isinstance(replacer, cls)
        assert replacer.name == name

    def test_size_and_membership_are_part_of_the_interface(self) -> None:
        assert "__len__" in Replacer.__abstractmethods__
        assert "__contains__" in Replacer.__abstractmethods__

    def test_instances_are_independent(self) -> None:
        a = make_replacer("FIFO")
        b = make_replacer("FIFO")
        a.on_load(1)
        assert len(b) == 0

    @pytest.mark.parametrize("name", ["OPT", "fifo", "", None])
    def test_unknown_policy(self, name) -> None:
        with pytest.raises(ConfigError):
            make_replacer(name)
