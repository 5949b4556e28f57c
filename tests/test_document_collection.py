"""Tests for folder navigation state."""

from __future__ import annotations

from pathlib import Path

import pytest

from iView.domain.document import DocumentCollection, RasterDocument


@pytest.fixture
def collection() -> DocumentCollection:
    return DocumentCollection.from_paths([Path("a.png"), Path("b.png"), Path("c.png")])


@pytest.fixture
def loaded(pixels_factory):
    return RasterDocument(pixels_factory(2, 2))


def test_starts_on_first_path(collection: DocumentCollection):
    assert collection.current_index == 0
    assert collection.current_path() == Path("a.png")
    assert len(collection) == 3


def test_empty_collection_has_no_index():
    collection = DocumentCollection()
    assert collection.is_empty()
    assert collection.current_index is None
    assert collection.current_path() is None
    assert collection.next() is None
    assert collection.previous() is None


def test_next_and_previous_stop_at_boundaries(collection: DocumentCollection):
    assert collection.previous() is None
    assert collection.next() == 1
    assert collection.next() == 2
    assert collection.next() is None
    assert collection.current_index == 2


def test_index_change_drops_loaded_document(collection: DocumentCollection, loaded):
    collection.set_current_document(loaded)
    collection.next()
    assert collection.current_document is None


def test_failed_navigation_keeps_document(collection: DocumentCollection, loaded):
    collection.set_current_document(loaded)
    assert collection.previous() is None
    assert collection.goto(10) is False
    assert collection.current_document is loaded


def test_goto_same_index_keeps_document(collection: DocumentCollection, loaded):
    collection.set_current_document(loaded)
    assert collection.goto(0) is True
    assert collection.current_document is loaded
    assert collection.goto(2) is True
    assert collection.current_document is None


def test_add_path_to_empty_sets_index():
    collection = DocumentCollection()
    collection.add_path(Path("x.png"))
    assert collection.current_index == 0


def test_remove_current_keeps_shifted_item(collection: DocumentCollection, loaded):
    collection.goto(1)
    collection.set_current_document(loaded)
    assert collection.remove_at(1) == Path("b.png")
    assert collection.current_index == 1
    assert collection.current_path() == Path("c.png")
    assert collection.current_document is None


def test_remove_current_last_moves_to_new_last(collection: DocumentCollection):
    collection.goto(2)
    collection.remove_at(2)
    assert collection.current_index == 1


def test_remove_before_current_shifts_index(collection: DocumentCollection, loaded):
    collection.goto(2)
    collection.set_current_document(loaded)
    collection.remove_at(0)
    assert collection.current_index == 1
    assert collection.current_path() == Path("c.png")
    assert collection.current_document is loaded


def test_remove_only_item_clears_index():
    collection = DocumentCollection.from_paths([Path("a.png")])
    collection.remove_at(0)
    assert collection.current_index is None
    assert collection.remove_at(0) is None


def test_index_of(collection: DocumentCollection):
    assert collection.index_of(Path("c.png")) == 2
    assert collection.index_of(Path("z.png")) is None
