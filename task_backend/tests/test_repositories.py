import pytest

from src.api.db import SQLiteRepository
from src.api.models import coalesce
from src.api.repositories import InMemoryRepository
from src.api.schemas import TaskCreate, TaskUpdate


@pytest.fixture(params=["memory", "sqlite"])
def repository(request, tmp_path):
    if request.param == "memory":
        yield InMemoryRepository()
        return
    repo = SQLiteRepository(str(tmp_path / "data" / "tasks.db"))
    yield repo
    repo.close()


class TestRepositories:
    def test_create_assigns_id_and_timestamp(self, repository):
        task = repository.create(TaskCreate(title="Write report", color="purple"))
        assert task["id"]
        assert task["created_at"].tzinfo is not None
        assert task["completed"] is False
        assert repository.get(task["id"]) == task

    def test_list_all_newest_first(self, repository):
        ids = [repository.create(TaskCreate(title=t, color="c"))["id"] for t in ("A", "B", "C")]
        assert [t["id"] for t in repository.list_all()] == list(reversed(ids))

    def test_update_writes_full_record(self, repository):
        task = repository.create(TaskCreate(title="Old", color="red"))
        updated = repository.update(task["id"], {"title": "New", "color": "red", "completed": True})
        assert updated is not None
        assert updated["title"] == "New"
        assert updated["completed"] is True
        assert updated["created_at"] == task["created_at"]
        assert repository.get(task["id"]) == updated

    def test_update_missing_returns_none(self, repository):
        assert repository.update("missing", {"title": "x", "color": "y", "completed": False}) is None
        assert repository.list_all() == []

    def test_delete(self, repository):
        task = repository.create(TaskCreate(title="Gone", color="grey"))
        assert repository.delete(task["id"]) is True
        assert repository.get(task["id"]) is None
        assert repository.delete(task["id"]) is False

    def test_get_returns_copy(self):
        repo = InMemoryRepository()
        task = repo.create(TaskCreate(title="Copy", color="blue"))
        fetched = repo.get(task["id"])
        fetched["title"] = "Mutated"
        assert repo.get(task["id"])["title"] == "Copy"


class TestSQLitePersistence:
    def test_data_survives_reopen(self, tmp_path):
        path = str(tmp_path / "tasks.db")
        repo = SQLiteRepository(path)
        task = repo.create(TaskCreate(title="Persist", color="teal", completed=True))
        repo.close()

        reopened = SQLiteRepository(path)
        try:
            assert reopened.list_all() == [task]
        finally:
            reopened.close()


class TestCoalesce:
    existing = {
        "id": "abc",
        "title": "Title",
        "color": "blue",
        "completed": False,
        "created_at": None,
    }

    def test_only_supplied_fields_change(self):
        merged = coalesce(self.existing, {"completed": True})
        assert merged == {"title": "Title", "color": "blue", "completed": True}

    def test_empty_changes_keep_everything(self):
        assert coalesce(self.existing, {}) == {"title": "Title", "color": "blue", "completed": False}

    def test_false_is_a_supplied_value(self):
        done = dict(self.existing, completed=True)
        assert coalesce(done, {"completed": False})["completed"] is False

    def test_update_schema_reports_only_sent_fields(self):
        payload = TaskUpdate.model_validate({"color": "red"})
        assert payload.changes() == {"color": "red"}
        merged = coalesce(self.existing, payload.changes())
        assert merged == {"title": "Title", "color": "red", "completed": False}
