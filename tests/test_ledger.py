"""Tests for the JSON notification ledger."""

import json
import os
from unittest.mock import patch

import pytest

from jobalert.ledger import LedgerError, LedgerReadError, LedgerWriteError, NotificationLedger


@pytest.fixture
def ledger_path(tmp_path):
    return tmp_path / "data" / "sent-links.json"


class TestLoad:
    def test_missing_file_is_empty(self, ledger_path):
        ledger = NotificationLedger(ledger_path)
        assert ledger.load() == set()
        assert not ledger_path.exists()

    def test_reads_json_array(self, ledger_path):
        ledger_path.parent.mkdir(parents=True)
        ledger_path.write_text(json.dumps(["a", "b"]), encoding="utf-8")
        assert NotificationLedger(ledger_path).load() == {"a", "b"}

    @pytest.mark.parametrize("content", ["{not json", '{"a": 1}', "[1, 2]", '"a"'])
    def test_malformed_raises(self, ledger_path, content):
        ledger_path.parent.mkdir(parents=True)
        ledger_path.write_text(content, encoding="utf-8")
        with pytest.raises(LedgerReadError):
            NotificationLedger(ledger_path).load()

    def test_unreadable_raises(self, tmp_path):
        # A directory in place of the file cannot be opened for reading
        path = tmp_path / "ledger.json"
        path.mkdir()
        with pytest.raises(LedgerError):
            NotificationLedger(path).load()

    def test_invalid_utf8_raises_read_error(self, ledger_path):
        ledger_path.parent.mkdir(parents=True)
        ledger_path.write_bytes(b'["https://a\xff"]')
        with pytest.raises(LedgerReadError, match="UTF-8"):
            NotificationLedger(ledger_path).load()


class TestContains:
    def test_contains_loads_lazily(self, ledger_path):
        ledger_path.parent.mkdir(parents=True)
        ledger_path.write_text('["https://example.com/job/1"]', encoding="utf-8")
        ledger = NotificationLedger(ledger_path)

        assert ledger.contains("https://example.com/job/1")
        assert not ledger.contains("https://example.com/job/2")

    def test_contains_sees_appended(self, ledger_path):
        ledger = NotificationLedger(ledger_path)
        ledger.append(["x"])
        assert ledger.contains("x")


class TestAppend:
    def test_creates_file_and_parent(self, ledger_path):
        NotificationLedger(ledger_path).append(["b", "a"])
        assert json.loads(ledger_path.read_text(encoding="utf-8")) == ["a", "b"]

    def test_round_trip_superset(self, ledger_path):
        ledger = NotificationLedger(ledger_path)
        ledger.append(["a", "b"])
        before = NotificationLedger(ledger_path).load()

        ledger.append(["b", "c", "c"])
        after = NotificationLedger(ledger_path).load()

        assert before <= after
        assert after == {"a", "b", "c"}

    def test_merges_with_file_written_elsewhere(self, ledger_path):
        ledger = NotificationLedger(ledger_path)
        ledger.load()
        NotificationLedger(ledger_path).append(["other"])

        ledger.append(["mine"])

        assert NotificationLedger(ledger_path).load() == {"other", "mine"}

    def test_stored_sorted_and_indented(self, ledger_path):
        NotificationLedger(ledger_path).append(["z", "m", "a"])
        text = ledger_path.read_text(encoding="utf-8")
        assert text == '[\n  "a",\n  "m",\n  "z"\n]\n'

    def test_no_temporary_files_left(self, ledger_path):
        NotificationLedger(ledger_path).append(["a"])
        assert os.listdir(ledger_path.parent) == ["sent-links.json"]

    @pytest.mark.skipif(os.name != "posix", reason="directory fsync is POSIX only")
    def test_fsyncs_file_and_directory(self, ledger_path):
        with patch("jobalert.ledger.store.os.fsync", wraps=os.fsync) as fsync:
            NotificationLedger(ledger_path).append(["a"])
        assert fsync.call_count == 2

    def test_failed_replace_keeps_previous_ledger(self, ledger_path):
        ledger = NotificationLedger(ledger_path)
        ledger.append(["a"])

        with patch("jobalert.ledger.store.os.replace", side_effect=OSError("disk full")):
            with pytest.raises(LedgerWriteError, match="disk full"):
                ledger.append(["b"])

        assert json.loads(ledger_path.read_text(encoding="utf-8")) == ["a"]
        assert os.listdir(ledger_path.parent) == ["sent-links.json"]

    def test_append_raises_on_malformed_existing(self, ledger_path):
        ledger_path.parent.mkdir(parents=True)
        ledger_path.write_text("garbage", encoding="utf-8")
        with pytest.raises(LedgerReadError):
            NotificationLedger(ledger_path).append(["a"])
        assert ledger_path.read_text(encoding="utf-8") == "garbage"
