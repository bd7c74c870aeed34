"""Tests for the bounded spec store."""

import json
from datetime import datetime

import pytest

from specflow.generation import generate_spec
from specflow.identity import SequentialIdentitySource
from specflow.models import BacklogItem, ItemType, Spec
from specflow.protocols import SpecRepository
from specflow.storage import JsonSpecStore


@pytest.fixture
def identity():
    return SequentialIdentitySource()


@pytest.fixture
def store(tmp_path, identity):
    """Create a JsonSpecStore in a temporary directory."""
    return JsonSpecStore(tmp_path / ".specflow" / "specs.json", identity=identity)


def make_spec(identity, goal="Add dark mode"):
    return generate_spec(goal, "admins", identity=identity)


class TestJsonSpecStore:
    """Test JsonSpecStore."""

    def test_satisfies_protocol(self, store):
        """Test that the store implements SpecRepository."""
        assert isinstance(store, SpecRepository)

    def test_empty_when_missing(self, store):
        """Test that a missing file is an empty store."""
        assert store.list_specs() == []

    def test_save_prepends(self, store, identity):
        """Test that the newest spec comes first."""
        first = make_spec(identity, "First goal")
        second = make_spec(identity, "Second goal")

        store.save(first)
        result = store.save(second)

        assert [s.id for s in result] == [second.id, first.id]
        assert [s.id for s in store.list_specs()] == [second.id, first.id]

    def test_sixth_save_evicts_oldest(self, store, identity):
        """Test the five spec bound."""
        specs = [make_spec(identity, f"Goal {n}") for n in range(6)]
        for spec in specs:
            store.save(spec)

        stored = store.list_specs()
        assert len(stored) == 5
        assert stored[0].id == specs[5].id
        assert specs[0].id not in [s.id for s in stored]

    def test_custom_bound(self, tmp_path, identity):
        """Test a configured bound."""
        store = JsonSpecStore(tmp_path / "specs.json", max_specs=2, identity=identity)
        for n in range(3):
            store.save(make_spec(identity, f"Goal {n}"))
        assert len(store.list_specs()) == 2

    def test_save_fills_missing_id_and_timestamp(self, store):
        """Test that a spec without identity gets one on save."""
        spec = Spec(goal="Add dark mode", target_users="admins")
        saved = store.save(spec)[0]

        assert saved.id == "id-0001"
        assert saved.created_at == datetime(2024, 1, 1, 9, 0, 0)

    def test_round_trip(self, store, identity):
        """Test that a stored spec reads back equal."""
        spec = make_spec(identity)
        store.save(spec)
        assert store.get(spec.id) == spec

    def test_get_unknown(self, store):
        """Test lookup of an unknown ID."""
        assert store.get("missing") is None

    def test_update_merges_fields(self, store, identity):
        """Test a shallow field update."""
        spec = make_spec(identity)
        store.save(spec)

        new_stories = [BacklogItem(id="s-new", type=ItemType.STORY, title="Only story")]
        store.update(spec.id, stories=new_stories)

        updated = store.get(spec.id)
        assert [s.id for s in updated.stories] == ["s-new"]
        assert updated.tasks == spec.tasks
        assert updated.goal == spec.goal

    def test_update_unknown_is_noop(self, store, identity):
        """Test that updating an unknown ID changes nothing."""
        spec = make_spec(identity)
        store.save(spec)

        result = store.update("missing", goal="Changed")

        assert result == [spec]
        assert store.get(spec.id).goal == "Add dark mode"

    def test_delete(self, store, identity):
        """Test removing a spec."""
        first = make_spec(identity)
        second = make_spec(identity)
        store.save(first)
        store.save(second)

        result = store.delete(first.id)

        assert [s.id for s in result] == [second.id]
        assert store.get(first.id) is None

    def test_corrupt_file_is_empty(self, store, capsys):
        """Test that unreadable data degrades to an empty store."""
        store.specs_file.parent.mkdir(parents=True)
        store.specs_file.write_text("{not json")

        assert store.list_specs() == []
        assert "Warning" in capsys.readouterr().out

    def test_non_list_data_is_empty(self, store):
        """Test that a JSON object instead of a list is ignored."""
        store.specs_file.parent.mkdir(parents=True)
        store.specs_file.write_text(json.dumps({"specs": []}))
        assert store.list_specs() == []

    def test_shared_file(self, tmp_path, identity):
        """Test that two stores over one file agree."""
        path = tmp_path / "specs.json"
        spec = make_spec(identity)
        JsonSpecStore(path, identity=identity).save(spec)
        assert JsonSpecStore(path).get(spec.id) == spec
