"""Unit tests for the persisted checksum store."""
import json
import os

import pytest

from calendar_mirror.errors import StateError
from calendar_mirror.sync.state import StateStore


def test_missing_file_loads_empty(tmp_path):
    assert StateStore(tmp_path / 'missing.json').load() == {}


def test_corrupt_file_loads_empty(tmp_path):
    path = tmp_path / 'state.json'
    path.write_bytes(b'\x80\x04not json')
    assert StateStore(path).load() == {}


def test_non_map_document_loads_empty(tmp_path):
    path = tmp_path / 'state.json'
    path.write_text('["e1", "abc"]', encoding='utf-8')
    assert StateStore(path).load() == {}


def test_save_then_load(tmp_path):
    store = StateStore(tmp_path / 'state.json')
    store.save({'e1': 'abc', 'e2': 'def'})

    assert store.load() == {'e1': 'abc', 'e2': 'def'}
    assert json.loads(store.path.read_text(encoding='utf-8')) == {'e1': 'abc', 'e2': 'def'}


def test_save_leaves_no_temp_files(tmp_path):
    store = StateStore(tmp_path / 'state.json')
    store.save({'e1': 'abc'})
    store.save({'e1': 'xyz'})

    assert os.listdir(tmp_path) == ['state.json']
    assert store.load() == {'e1': 'xyz'}


def test_save_creates_parent_directory(tmp_path):
    store = StateStore(tmp_path / 'nested' / 'state.json')
    store.save({})
    assert store.load() == {}


def test_unwritable_location_raises(tmp_path):
    blocker = tmp_path / 'blocker'
    blocker.write_text('file, not a directory', encoding='utf-8')
    store = StateStore(blocker / 'state.json')

    with pytest.raises(StateError):
        store.save({'e1': 'abc'})
