"""Record Store — tests for id/order allocation, copy isolation, and mutations.

Tests cover:
    - create assigns increasing unique ids and orders, applies defaults
    - ids are never reused after deletion
    - get_all is sorted by order across every kind of mutation
    - get_by_id / update / delete coerce string ids and return None when missing
    - update_order renumbers listed ids and skips unknown ones
    - returned records are copies (mutating them never touches the store)
    - updated_at refreshes on every mutation and never precedes created_at
"""

from datetime import timedelta

from taskboard.core.domain_types import Priority
from taskboard.core.record_store import TaskRecordStore, coerce_task_id
from taskboard.core.task_record import TaskInput, TaskPatch, TaskRecord


# ─── create ──────────────────────────────────────────────────────

def test_create_on_empty_store_starts_at_id_and_order_one(store):
    record = store.create(TaskInput(title="Write tests"))
    assert record.id == 1
    assert record.order == 1


def test_create_applies_documented_defaults(store, clock):
    record = store.create(TaskInput(title="Only a title"))
    assert record.description == ""
    assert record.priority is Priority.MEDIUM
    assert record.completed is False
    assert record.assignee == ""
    assert record.project_id is None
    assert record.created_at == clock.current
    assert record.updated_at == record.created_at


def test_create_normalizes_unknown_priority_to_medium(store):
    record = store.create(TaskInput(title="T", priority="urgent"))
    assert record.priority is Priority.MEDIUM


def test_create_keeps_given_fields(store):
    record = store.create(TaskInput(
        title="Ship it", description="Release 1.0", priority="high",
        assignee="Sarah Chen", project_id=4,
    ))
    assert record.title == "Ship it"
    assert record.description == "Release 1.0"
    assert record.priority is Priority.HIGH
    assert record.assignee == "Sarah Chen"
    assert record.project_id == 4


def test_create_keeps_project_id_zero(store):
    record = store.create(TaskInput(title="Inbox", project_id=0))
    assert record.project_id == 0
    assert store.get_by_id(record.id).project_id == 0


def test_create_accepts_missing_title_permissively(store):
    record = store.create(TaskInput(title=""))
    assert record.title == ""
    assert store.get_by_id(record.id) is not None


def test_sequence_of_creates_yields_strictly_increasing_ids(store):
    ids = [store.create(TaskInput(title=f"T{i}")).id for i in range(10)]
    assert ids == sorted(ids)
    assert len(set(ids)) == len(ids)
    assert all(b > a for a, b in zip(ids, ids[1:]))


def test_create_uses_max_existing_id_and_order_from_seed():
    seeded = TaskRecordStore([
        TaskRecord(id=7, title="a", order=2),
        TaskRecord(id=3, title="b", order=9),
    ])
    record = seeded.create(TaskInput(title="c"))
    assert record.id == 8
    assert record.order == 10


def test_ids_are_not_reused_after_deleting_max(three_task_store):
    three_task_store.delete(3)
    record = three_task_store.create(TaskInput(title="Fourth"))
    assert record.id == 4


# ─── get_all / get_by_id ─────────────────────────────────────────

def test_get_all_on_empty_store_is_empty(store):
    assert store.get_all() == []


def test_get_all_sorted_by_order_not_storage_position():
    seeded = TaskRecordStore([
        TaskRecord(id=1, title="c", order=3),
        TaskRecord(id=2, title="a", order=1),
        TaskRecord(id=3, title="b", order=2),
    ])
    assert [r.title for r in seeded.get_all()] == ["a", "b", "c"]


def test_get_all_stays_sorted_across_mixed_mutations(three_task_store):
    store = three_task_store
    store.create(TaskInput(title="Fourth"))
    store.update(1, TaskPatch.of(order=10))
    store.delete(2)
    store.update_order([4, 3])
    orders = [r.order for r in store.get_all()]
    assert orders == sorted(orders)


def test_get_by_id_accepts_string_id(three_task_store):
    assert three_task_store.get_by_id("2").title == "Second"
    assert three_task_store.get_by_id(" 3 ").title == "Third"


def test_get_by_id_missing_returns_none(three_task_store):
    assert three_task_store.get_by_id(99) is None
    assert three_task_store.get_by_id("not-a-number") is None
    assert three_task_store.get_by_id(None) is None


def test_create_then_get_by_id_round_trip(store, clock):
    created = store.create(TaskInput(
        title="Round trip", description="d", priority="low",
        assignee="Alex Rivera", project_id=2,
    ))
    fetched = store.get_by_id(created.id)
    assert fetched == created
    assert fetched.title == "Round trip"
    assert fetched.priority is Priority.LOW
    assert fetched.created_at == clock.current


# ─── copy isolation ──────────────────────────────────────────────

def test_mutating_returned_record_does_not_affect_store(three_task_store):
    record = three_task_store.get_by_id(1)
    record.title = "Hacked"
    record.completed = True
    record.order = 99
    fresh = three_task_store.get_by_id(1)
    assert fresh.title == "First"
    assert fresh.completed is False
    assert [r.id for r in three_task_store.get_all()] == [1, 2, 3]


def test_mutating_get_all_result_does_not_affect_store(three_task_store):
    listing = three_task_store.get_all()
    listing[0].title = "Changed"
    listing.clear()
    assert len(three_task_store.get_all()) == 3
    assert three_task_store.get_all()[0].title == "First"


def test_seed_records_are_copied_in():
    original = TaskRecord(id=1, title="Seed", order=1)
    seeded = TaskRecordStore([original])
    original.title = "Mutated after seeding"
    assert seeded.get_by_id(1).title == "Seed"


def test_create_result_is_a_copy(store):
    record = store.create(TaskInput(title="Mine"))
    record.title = "Not yours"
    assert store.get_by_id(record.id).title == "Mine"


# ─── update ──────────────────────────────────────────────────────

def test_update_merges_patch_and_refreshes_updated_at(three_task_store, clock):
    before = three_task_store.get_by_id(2)
    clock.advance(60)
    outcome = three_task_store.update("2", TaskPatch.of(title="Renamed", priority="high"))
    assert outcome.current.title == "Renamed"
    assert outcome.current.priority is Priority.HIGH
    assert outcome.current.description == before.description
    assert outcome.current.updated_at == clock.current
    assert outcome.current.created_at == before.created_at
    assert three_task_store.get_by_id(2).title == "Renamed"


def test_update_reports_previous_state(three_task_store):
    outcome = three_task_store.update(1, TaskPatch.of(completed=True))
    assert outcome.previous.completed is False
    assert outcome.current.completed is True


def test_update_missing_returns_none(three_task_store):
    assert three_task_store.update(42, TaskPatch.of(title="x")) is None


def test_update_ignores_identity_and_timestamps(three_task_store):
    outcome = three_task_store.update(1, TaskPatch.of(id=50, created_at=None, title="Kept id"))
    assert outcome.current.id == 1
    assert three_task_store.get_by_id(50) is None


def test_update_can_clear_project_id():
    seeded = TaskRecordStore([TaskRecord(id=1, title="t", project_id=3, order=1)])
    outcome = seeded.update(1, TaskPatch.of(project_id=None))
    assert outcome.current.project_id is None


def test_update_with_null_order_keeps_order_and_sorting(three_task_store):
    outcome = three_task_store.update(1, TaskPatch.of(order=None))
    assert outcome.current.order == 1
    assert [r.id for r in three_task_store.get_all()] == [1, 2, 3]


def test_update_with_null_title_keeps_title(three_task_store):
    outcome = three_task_store.update(2, TaskPatch.of(title=None))
    assert outcome.current.title == "Second"
    assert three_task_store.get_by_id(2).title == "Second"


def test_update_with_null_completed_keeps_completed(three_task_store):
    three_task_store.update(3, TaskPatch.of(completed=True))
    outcome = three_task_store.update(3, TaskPatch.of(completed=None, title="Still done"))
    assert outcome.current.completed is True
    assert outcome.current.title == "Still done"


def test_patch_built_directly_with_null_order_is_ignored(three_task_store):
    patch = TaskPatch(order=None, fields_set=frozenset({"order"}))
    outcome = three_task_store.update(1, patch)
    assert outcome.current.order == 1
    orders = [r.order for r in three_task_store.get_all()]
    assert orders == sorted(orders)


def test_updated_at_never_precedes_created_at(three_task_store, clock):
    clock.current = clock.current - timedelta(days=1)
    outcome = three_task_store.update(3, TaskPatch.of(title="Clock went backwards"))
    assert outcome.current.updated_at >= outcome.current.created_at


# ─── delete ──────────────────────────────────────────────────────

def test_delete_returns_removed_copy_then_not_found(three_task_store):
    removed = three_task_store.delete(2)
    assert removed.title == "Second"
    assert three_task_store.get_by_id(2) is None
    assert three_task_store.delete(2) is None


def test_delete_does_not_renumber_others(three_task_store):
    three_task_store.delete(1)
    remaining = three_task_store.get_all()
    assert [(r.id, r.order) for r in remaining] == [(2, 2), (3, 3)]


# ─── update_order ────────────────────────────────────────────────

def test_update_order_assigns_positions(three_task_store):
    assert three_task_store.update_order([3, 1, 2]) is True
    assert three_task_store.get_by_id(3).order == 1
    assert three_task_store.get_by_id(1).order == 2
    assert three_task_store.get_by_id(2).order == 3
    assert [r.id for r in three_task_store.get_all()] == [3, 1, 2]


def test_update_order_skips_unknown_ids(three_task_store):
    assert three_task_store.update_order([99, 2, "bogus"]) is True
    assert three_task_store.get_by_id(2).order == 2
    assert three_task_store.get_by_id(1).order == 1


def test_update_order_refreshes_updated_at(three_task_store, clock):
    clock.advance(30)
    three_task_store.update_order(["1"])
    assert three_task_store.get_by_id(1).updated_at == clock.current
    assert three_task_store.get_by_id(2).updated_at < clock.current


# ─── clear / stats / helpers ─────────────────────────────────────

def test_clear_discards_records_but_keeps_id_sequence(three_task_store):
    three_task_store.clear()
    assert len(three_task_store) == 0
    assert three_task_store.create(TaskInput(title="After clear")).id == 4


def test_get_stats_counts_completed(three_task_store):
    three_task_store.update(1, TaskPatch.of(completed=True))
    stats = three_task_store.get_stats()
    assert (stats.total, stats.completed, stats.active) == (3, 1, 2)
    assert stats.completion_rate == 33


def test_coerce_task_id_variants():
    assert coerce_task_id(5) == 5
    assert coerce_task_id("5") == 5
    assert coerce_task_id(5.0) == 5
    assert coerce_task_id(True) is None
    assert coerce_task_id([5]) is None


def test_coerce_task_id_parses_leading_integer():
    assert coerce_task_id("3.7") == 3
    assert coerce_task_id("3abc") == 3
    assert coerce_task_id(" 12 tasks") == 12
    assert coerce_task_id(5.5) == 5
    assert coerce_task_id("abc") is None
    assert coerce_task_id("") is None


def test_get_by_id_with_trailing_garbage_finds_record(three_task_store):
    assert three_task_store.get_by_id("2abc").title == "Second"
