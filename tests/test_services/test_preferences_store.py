"""Tests for the preference stores."""

import json
from pathlib import Path
from unittest.mock import patch

import pytest

from life_calendar.domain.ports import PreferenceStore
from life_calendar.services.preferences_store import (
    BIRTH_DATE_KEY,
    LIFESPAN_KEY,
    InMemoryPreferenceStore,
    JsonPreferenceStore,
)


@pytest.fixture
def store_path(tmp_path):
    return tmp_path / "prefs" / "preferences.json"


class TestInMemoryPreferenceStore:
    def test_satisfies_port(self):
        assert isinstance(InMemoryPreferenceStore(), PreferenceStore)

    def test_set_get_remove(self):
        store = InMemoryPreferenceStore()

        store.set(BIRTH_DATE_KEY, "1990-05-15")
        assert store.get(BIRTH_DATE_KEY) == "1990-05-15"

        store.remove(BIRTH_DATE_KEY)
        assert store.get(BIRTH_DATE_KEY) is None

    def test_remove_missing_key(self):
        store = InMemoryPreferenceStore()
        store.remove(LIFESPAN_KEY)
        assert store.get(LIFESPAN_KEY) is None


class TestJsonPreferenceStore:
    def test_satisfies_port(self, store_path):
        assert isinstance(JsonPreferenceStore(store_path), PreferenceStore)

    def test_missing_file_is_unset(self, store_path):
        store = JsonPreferenceStore(store_path)

        assert store.get(BIRTH_DATE_KEY) is None
        assert not store_path.exists()

    def test_set_creates_file(self, store_path):
        store = JsonPreferenceStore(store_path)

        store.set(BIRTH_DATE_KEY, "1990-05-15")
        store.set(LIFESPAN_KEY, "85")

        data = json.loads(store_path.read_text(encoding="utf-8"))
        assert data == {BIRTH_DATE_KEY: "1990-05-15", LIFESPAN_KEY: "85"}

    def test_values_survive_new_instance(self, store_path):
        JsonPreferenceStore(store_path).set(LIFESPAN_KEY, "90")

        assert JsonPreferenceStore(store_path).get(LIFESPAN_KEY) == "90"

    def test_remove(self, store_path):
        store = JsonPreferenceStore(store_path)
        store.set(BIRTH_DATE_KEY, "1990-05-15")
        store.set(LIFESPAN_KEY, "85")

        store.remove(BIRTH_DATE_KEY)

        assert store.get(BIRTH_DATE_KEY) is None
        assert store.get(LIFESPAN_KEY) == "85"

    def test_corrupt_file_reads_as_unset(self, store_path):
        store_path.parent.mkdir(parents=True)
        store_path.write_text("{not json", encoding="utf-8")

        assert JsonPreferenceStore(store_path).get(BIRTH_DATE_KEY) is None

    def test_non_object_file_reads_as_unset(self, store_path):
        store_path.parent.mkdir(parents=True)
        store_path.write_text("[1, 2, 3]", encoding="utf-8")

        assert JsonPreferenceStore(store_path).get(BIRTH_DATE_KEY) is None

    def test_write_failure_is_swallowed(self, tmp_path, caplog):
        # A regular file where the parent directory should be
        blocker = tmp_path / "blocker"
        blocker.write_text("", encoding="utf-8")
        store = JsonPreferenceStore(blocker / "preferences.json")

        store.set(BIRTH_DATE_KEY, "1990-05-15")
        store.remove(BIRTH_DATE_KEY)

        assert store.get(BIRTH_DATE_KEY) is None
        assert "Failed to save preference" in caplog.text

    def test_corrupt_file_set_is_swallowed(self, store_path):
        store_path.parent.mkdir(parents=True)
        store_path.write_text("{not json", encoding="utf-8")
        store = JsonPreferenceStore(store_path)

        store.set(LIFESPAN_KEY, "80")

        assert store_path.read_text(encoding="utf-8") == "{not json"

    @pytest.mark.parametrize(
        "payload",
        [b'{"life-calendar-dob": "\xff\xfe"}', b"\xff\xfe garbage"],
    )
    def test_undecodable_file_reads_as_unset(self, store_path, payload, caplog):
        store_path.parent.mkdir(parents=True)
        store_path.write_bytes(payload)
        store = JsonPreferenceStore(store_path)

        assert store.get(BIRTH_DATE_KEY) is None
        store.set(LIFESPAN_KEY, "80")
        store.remove(BIRTH_DATE_KEY)

        assert store_path.read_bytes() == payload
        assert "Failed to read preferences" in caplog.text
        assert "Failed to save preference" in caplog.text

    def test_unreadable_path_is_swallowed(self, store_path):
        store = JsonPreferenceStore(store_path)

        with patch.object(Path, "exists", side_effect=PermissionError("denied")):
            assert store.get(BIRTH_DATE_KEY) is None
            store.set(BIRTH_DATE_KEY, "1990-05-15")
            store.remove(BIRTH_DATE_KEY)

        assert not store_path.exists()
