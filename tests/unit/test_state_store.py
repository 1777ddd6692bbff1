"""Unit tests for the file-backed state store."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', '..'))

import json
import logging

import pytest

from confload.errors import PersistenceError
from confload.models import MeetingCredentials
from confload.state_store import FileStateStore


def make_store(tmp_path):
    state_dir = tmp_path / 'state'
    return FileStateStore(str(state_dir / 'credentials.json'), str(state_dir / 'counter.txt'))


def test_credentials_round_trip(tmp_path):
    store = make_store(tmp_path)
    store.save_credentials(MeetingCredentials(meeting_id='123', meeting_code='abc'))

    credentials, found = store.load_credentials()

    assert found is True
    assert credentials == MeetingCredentials(meeting_id='123', meeting_code='abc')


def test_credentials_survive_new_store(tmp_path):
    """Test a fresh store instance reads what an earlier one wrote."""
    make_store(tmp_path).save_credentials(MeetingCredentials(meeting_id='42', meeting_code='pw'))

    credentials, found = make_store(tmp_path).load_credentials()

    assert found is True
    assert credentials.meeting_id == '42'


def test_credentials_file_format(tmp_path):
    store = make_store(tmp_path)
    store.save_credentials(MeetingCredentials(meeting_id='123', meeting_code='abc'))

    with open(store.credentials_path) as f:
        assert json.load(f) == {'meetingID': '123', 'meetingCode': 'abc'}


def test_missing_credentials(tmp_path):
    assert make_store(tmp_path).load_credentials() == (None, False)


def test_incomplete_credentials_not_found(tmp_path):
    store = make_store(tmp_path)
    os.makedirs(os.path.dirname(store.credentials_path))
    with open(store.credentials_path, 'w') as f:
        json.dump({'meetingID': '123', 'meetingCode': ''}, f)

    assert store.load_credentials() == (None, False)


@pytest.mark.parametrize('record', [
    {'meetingID': None, 'meetingCode': None},
    {'meetingID': 123, 'meetingCode': 'abc'},
    {'meetingID': '123', 'meetingCode': ['abc']},
])
def test_null_or_non_text_credentials_not_found(tmp_path, record):
    """Test null or non-string fields never load as a usable meeting."""
    store = make_store(tmp_path)
    os.makedirs(os.path.dirname(store.credentials_path))
    with open(store.credentials_path, 'w') as f:
        json.dump(record, f)

    assert store.load_credentials() == (None, False)


def test_malformed_credentials_raise(tmp_path):
    store = make_store(tmp_path)
    os.makedirs(os.path.dirname(store.credentials_path))
    with open(store.credentials_path, 'w') as f:
        f.write('{not json')

    with pytest.raises(PersistenceError):
        store.load_credentials()


def test_save_empty_credentials_rejected(tmp_path):
    with pytest.raises(ValueError):
        make_store(tmp_path).save_credentials(MeetingCredentials(meeting_id='', meeting_code='x'))


def test_save_logs_values(tmp_path, caplog):
    """Test every save writes the persisted values to the log."""
    caplog.set_level(logging.INFO, logger='confload')
    store = make_store(tmp_path)

    store.save_credentials(MeetingCredentials(meeting_id='777', meeting_code='pw'))
    store.save_counter(5)

    assert 'meetingID=777' in caplog.text
    assert 'Saved instance counter: 5' in caplog.text


def test_counter_defaults_to_zero(tmp_path):
    assert make_store(tmp_path).load_counter() == 0


def test_counter_round_trip(tmp_path):
    store = make_store(tmp_path)
    store.save_counter(12)

    assert store.load_counter() == 12
    with open(store.counter_path) as f:
        assert f.read() == '12'


@pytest.mark.parametrize('content', ['abc', '-4', '3.5'])
def test_corrupt_counter_raises(tmp_path, content):
    store = make_store(tmp_path)
    os.makedirs(os.path.dirname(store.counter_path))
    with open(store.counter_path, 'w') as f:
        f.write(content)

    with pytest.raises(PersistenceError):
        store.load_counter()


def test_empty_counter_file_raises(tmp_path):
    """Test an existing but empty counter is corrupt, not zero."""
    store = make_store(tmp_path)
    os.makedirs(os.path.dirname(store.counter_path))
    with open(store.counter_path, 'w') as f:
        f.write('')

    with pytest.raises(PersistenceError):
        store.load_counter()


def test_failed_counter_write_keeps_previous_value(tmp_path, monkeypatch):
    """Test an interrupted save leaves the old counter and no temp files."""
    store = make_store(tmp_path)
    store.save_counter(7)

    def broken_replace(src, dst):
        raise OSError('No space left on device')

    monkeypatch.setattr(os, 'replace', broken_replace)
    with pytest.raises(PersistenceError):
        store.save_counter(8)
    monkeypatch.undo()

    assert store.load_counter() == 7
    assert os.listdir(os.path.dirname(store.counter_path)) == ['counter.txt']


def test_counter_with_trailing_newline(tmp_path):
    store = make_store(tmp_path)
    os.makedirs(os.path.dirname(store.counter_path))
    with open(store.counter_path, 'w') as f:
        f.write('8\n')

    assert store.load_counter() == 8


@pytest.mark.parametrize('value', [-1, 2.0, True])
def test_save_invalid_counter_rejected(tmp_path, value):
    with pytest.raises(ValueError):
        make_store(tmp_path).save_counter(value)


def test_unwritable_location_raises(tmp_path):
    """Test a write into a path blocked by a regular file surfaces an error."""
    blocker = tmp_path / 'blocker'
    blocker.write_text('not a directory')
    store = FileStateStore(str(blocker / 'credentials.json'), str(blocker / 'counter.txt'))

    with pytest.raises(PersistenceError):
        store.save_counter(1)


def test_from_config(tmp_path):
    store = FileStateStore.from_config({
        'state_dir': str(tmp_path),
        'credentials_file': 'creds.json',
        'counter_file': 'count.txt',
    })

    assert store.credentials_path == os.path.join(str(tmp_path), 'creds.json')
    assert store.counter_path == os.path.join(str(tmp_path), 'count.txt')
