"""Tests for the persistence service against an in-memory database."""

import asyncio
import uuid
from unittest.mock import AsyncMock, patch

import pytest

from app.db.models import Conversation, ProjectFile
from app.db.query_builder import EmptyUpdateError
from app.db.repository import BaseRepository, ProjectRepository


async def _count(database, model, **filters):
    async with database.session_scope() as session:
        return await BaseRepository(model).count(session, filters)


class TestProjects:
    """Project CRUD and ownership."""

    @pytest.mark.asyncio
    async def test_create_project_defaults(self, persistence):
        project = await persistence.create_project("alice", "Todo App")

        assert isinstance(project.id, uuid.UUID)
        assert project.user_id == "alice"
        assert project.description == ""
        assert project.template_used is None
        assert project.status == "active"
        assert project.created_at is not None
        assert project.updated_at is not None

    @pytest.mark.asyncio
    async def test_get_project_is_owner_scoped(self, persistence):
        project = await persistence.create_project("alice", "Mine")

        assert (await persistence.get_project(project.id, "alice")).name == "Mine"
        assert await persistence.get_project(project.id, "bob") is None
        assert await persistence.get_project(uuid.uuid4(), "alice") is None

    @pytest.mark.asyncio
    async def test_list_only_own_active_projects_newest_first(self, persistence):
        first = await persistence.create_project("alice", "First")
        await asyncio.sleep(0.001)
        second = await persistence.create_project("alice", "Second")
        await persistence.create_project("bob", "Other")
        deleted = await persistence.create_project("alice", "Gone")
        await persistence.delete_project(deleted.id, "alice")

        projects = await persistence.get_projects("alice")

        assert [p["id"] for p in projects] == [second.id, first.id]

    @pytest.mark.asyncio
    async def test_list_includes_counts(self, persistence):
        project = await persistence.create_project("alice", "Stats")
        await persistence.save_project_file(project.id, "alice", "a.js", "a.js", "1")
        await persistence.save_project_file(project.id, "alice", "b.js", "b.js", "2")
        await persistence.save_conversation(project.id, "alice", "hi", "code")
        empty = await persistence.create_project("alice", "Empty")

        projects = {p["id"]: p for p in await persistence.get_projects("alice")}

        assert projects[project.id]["file_count"] == 2
        assert projects[project.id]["conversation_count"] == 1
        assert projects[project.id]["last_conversation"] is not None
        assert projects[empty.id]["file_count"] == 0
        assert projects[empty.id]["conversation_count"] == 0
        assert projects[empty.id]["last_conversation"] is None

    @pytest.mark.asyncio
    async def test_update_project_fields(self, persistence):
        project = await persistence.create_project("alice", "Old", "desc")
        await asyncio.sleep(0.001)

        updated = await persistence.update_project(project.id, "alice", {"name": "New", "settings": {"theme": "dark"}})

        assert updated.name == "New"
        assert updated.description == "desc"
        assert updated.settings == {"theme": "dark"}
        assert updated.updated_at > project.updated_at

    @pytest.mark.asyncio
    async def test_update_other_users_project_returns_none(self, persistence):
        project = await persistence.create_project("alice", "Mine")

        assert await persistence.update_project(project.id, "bob", {"name": "Stolen"}) is None
        assert (await persistence.get_project(project.id, "alice")).name == "Mine"

    @pytest.mark.asyncio
    async def test_update_with_no_changes_raises_before_storage(self, persistence):
        persistence.database = AsyncMock()

        with pytest.raises(EmptyUpdateError):
            await persistence.update_project(uuid.uuid4(), "alice", {})

        persistence.database.session_scope.assert_not_called()

    @pytest.mark.asyncio
    async def test_soft_delete_keeps_children(self, persistence, database):
        project = await persistence.create_project("alice", "Doomed")
        await persistence.save_project_file(project.id, "alice", "a.js", "a.js", "x")
        await persistence.save_conversation(project.id, "alice", "hi", "code")

        deleted = await persistence.delete_project(project.id, "alice")

        assert deleted.status == "deleted"
        assert await persistence.get_project(project.id, "alice") is None
        assert await persistence.get_project_files(project.id, "alice") == []
        assert await persistence.get_conversations(project.id, "alice") == []
        assert await _count(database, ProjectFile) == 1
        assert await _count(database, Conversation) == 1

    @pytest.mark.asyncio
    async def test_delete_other_users_project_returns_none(self, persistence):
        project = await persistence.create_project("alice", "Mine")

        assert await persistence.delete_project(project.id, "bob") is None
        assert await persistence.get_project(project.id, "alice") is not None

    @pytest.mark.asyncio
    async def test_project_detail(self, persistence):
        project = await persistence.create_project("alice", "Detail")
        await persistence.save_project_file(project.id, "alice", "src/App.tsx", "App.tsx", "x")
        await persistence.save_conversation(project.id, "alice", "hi", "code")

        detail = await persistence.get_project_detail(project.id, "alice")

        assert detail.project.id == project.id
        assert [f.file_path for f in detail.files] == ["src/App.tsx"]
        assert [c.message for c in detail.conversations] == ["hi"]
        assert await persistence.get_project_detail(project.id, "bob") is None


class TestProjectFiles:
    """File upsert, reads and deletes."""

    @pytest.mark.asyncio
    async def test_save_computes_size_in_bytes(self, persistence):
        project = await persistence.create_project("alice", "Files")

        saved = await persistence.save_project_file(project.id, "alice", "a.txt", "a.txt", "héllo")

        assert saved.size_bytes == 6
        assert saved.file_type == "text"

    @pytest.mark.asyncio
    async def test_save_same_path_overwrites(self, persistence, database):
        project = await persistence.create_project("alice", "Files")
        first = await persistence.save_project_file(project.id, "alice", "src/App.tsx", "App.tsx", "v1", "typescript")

        second = await persistence.save_project_file(project.id, "alice", "src/App.tsx", "App.tsx", "version two", "typescript")

        assert second.id == first.id
        assert second.content == "version two"
        assert second.size_bytes == len("version two")
        assert await _count(database, ProjectFile) == 1

    @pytest.mark.asyncio
    async def test_save_bumps_project_updated_at(self, persistence):
        project = await persistence.create_project("alice", "Files")
        await asyncio.sleep(0.001)

        await persistence.save_project_file(project.id, "alice", "a.js", "a.js", "x")

        refreshed = await persistence.get_project(project.id, "alice")
        assert refreshed.updated_at > project.updated_at

    @pytest.mark.asyncio
    async def test_save_to_foreign_project_returns_none(self, persistence, database):
        project = await persistence.create_project("alice", "Files")

        assert await persistence.save_project_file(project.id, "bob", "a.js", "a.js", "x") is None
        assert await _count(database, ProjectFile) == 0

    @pytest.mark.asyncio
    async def test_files_ordered_by_path(self, persistence):
        project = await persistence.create_project("alice", "Files")
        for path in ("src/b.ts", "package.json", "src/a.ts"):
            await persistence.save_project_file(project.id, "alice", path, path.rsplit("/", 1)[-1], "x")

        files = await persistence.get_project_files(project.id, "alice")

        assert [f.file_path for f in files] == ["package.json", "src/a.ts", "src/b.ts"]

    @pytest.mark.asyncio
    async def test_foreign_user_lists_no_files(self, persistence):
        project = await persistence.create_project("alice", "Files")
        await persistence.save_project_file(project.id, "alice", "a.js", "a.js", "x")

        assert await persistence.get_project_files(project.id, "bob") == []
        assert len(await persistence.get_project_files(project.id, "alice")) == 1

    @pytest.mark.asyncio
    async def test_get_file_owner_scoped(self, persistence):
        project = await persistence.create_project("alice", "Files")
        await persistence.save_project_file(project.id, "alice", "a.js", "a.js", "x")

        assert (await persistence.get_project_file(project.id, "a.js", "alice")).content == "x"
        assert await persistence.get_project_file(project.id, "a.js", "bob") is None
        assert await persistence.get_project_file(project.id, "missing.js", "alice") is None

    @pytest.mark.asyncio
    async def test_delete_file(self, persistence):
        project = await persistence.create_project("alice", "Files")
        await persistence.save_project_file(project.id, "alice", "a.js", "a.js", "x")

        assert await persistence.delete_project_file(project.id, "a.js", "bob") is None
        deleted = await persistence.delete_project_file(project.id, "a.js", "alice")

        assert deleted.file_path == "a.js"
        assert await persistence.get_project_file(project.id, "a.js", "alice") is None
        assert await persistence.delete_project_file(project.id, "a.js", "alice") is None


class TestConversations:
    """Conversation history."""

    @pytest.mark.asyncio
    async def test_history_is_chronological(self, persistence):
        project = await persistence.create_project("alice", "Chat")
        for i in range(3):
            await persistence.save_conversation(project.id, "alice", f"m{i}", f"r{i}")
            await asyncio.sleep(0.001)

        conversations = await persistence.get_conversations(project.id, "alice")

        assert [c.message for c in conversations] == ["m0", "m1", "m2"]

    @pytest.mark.asyncio
    async def test_limit_keeps_latest(self, persistence):
        project = await persistence.create_project("alice", "Chat")
        for i in range(5):
            await persistence.save_conversation(project.id, "alice", f"m{i}", f"r{i}")
            await asyncio.sleep(0.001)

        conversations = await persistence.get_conversations(project.id, "alice", limit=2)

        assert [c.message for c in conversations] == ["m3", "m4"]

    @pytest.mark.asyncio
    async def test_save_records_model_and_tokens(self, persistence):
        project = await persistence.create_project("alice", "Chat")

        conversation = await persistence.save_conversation(
            project.id, "alice", "hi", "code", ai_model="claude-test", tokens_used=42
        )

        assert conversation.ai_model == "claude-test"
        assert conversation.tokens_used == 42

    @pytest.mark.asyncio
    async def test_save_bumps_project_updated_at(self, persistence):
        project = await persistence.create_project("alice", "Chat")
        await asyncio.sleep(0.001)

        await persistence.save_conversation(project.id, "alice", "hi", "code")

        refreshed = await persistence.get_project(project.id, "alice")
        assert refreshed.updated_at > project.updated_at

    @pytest.mark.asyncio
    async def test_foreign_user_sees_nothing(self, persistence, database):
        project = await persistence.create_project("alice", "Chat")
        await persistence.save_conversation(project.id, "alice", "hi", "code")

        assert await persistence.get_conversations(project.id, "bob") == []
        assert await persistence.save_conversation(project.id, "bob", "hi", "code") is None
        assert await _count(database, Conversation) == 1

    @pytest.mark.asyncio
    async def test_failed_bump_rolls_back_conversation(self, persistence, database):
        """The child insert and the parent bump commit together."""
        project = await persistence.create_project("alice", "Chat")

        with patch.object(ProjectRepository, "touch", AsyncMock(side_effect=RuntimeError("boom"))):
            with pytest.raises(RuntimeError):
                await persistence.save_conversation(project.id, "alice", "hi", "code")

        assert await _count(database, Conversation) == 0

    @pytest.mark.asyncio
    async def test_failed_bump_rolls_back_file(self, persistence, database):
        project = await persistence.create_project("alice", "Files")

        with patch.object(ProjectRepository, "touch", AsyncMock(side_effect=RuntimeError("boom"))):
            with pytest.raises(RuntimeError):
                await persistence.save_project_file(project.id, "alice", "a.js", "a.js", "x")

        assert await _count(database, ProjectFile) == 0


class TestHealth:
    """Database health reporting."""

    @pytest.mark.asyncio
    async def test_health_check_healthy(self, persistence):
        health = await persistence.health_check()

        assert health["status"] == "healthy"
        assert health["version"]
        assert "pool" in health

    @pytest.mark.asyncio
    async def test_health_check_never_raises(self, database):
        with patch.object(database, "engine") as engine:
            engine.connect.side_effect = ConnectionError("refused")
            engine.pool.checkedin.return_value = 0

            health = await database.health_check()

        assert health["status"] == "unhealthy"
        assert health["error"] == "Database connection failed"


class TestEndToEnd:
    """Create a project, add a file, chat, read it all back."""

    @pytest.mark.asyncio
    async def test_project_lifecycle(self, persistence):
        project = await persistence.create_project("alice", "Todo App", "A simple todo list")
        await persistence.save_project_file(project.id, "alice", "src/App.tsx", "App.tsx", "export default App;", "typescript")
        await persistence.save_conversation(project.id, "alice", "Add a button", "<button/>", tokens_used=30)

        listed = await persistence.get_projects("alice")
        assert len(listed) == 1
        assert listed[0]["file_count"] == 1
        assert listed[0]["conversation_count"] == 1

        await persistence.update_project(project.id, "alice", {"description": "Todos"})
        detail = await persistence.get_project_detail(project.id, "alice")
        assert detail.project.description == "Todos"
        assert detail.files[0].size_bytes == len("export default App;")
        assert detail.conversations[0].tokens_used == 30

        await persistence.delete_project(project.id, "alice")
        assert await persistence.get_projects("alice") == []

    @pytest.mark.asyncio
    async def test_file_then_conversation_scenario(self, persistence):
        project = await persistence.create_project("alice", "Scenario")

        listed = await persistence.get_projects("alice")
        assert len(listed) == 1
        assert listed[0]["file_count"] == 0

        saved = await persistence.save_project_file(project.id, "alice", "a.txt", "a.txt", "hi")
        files = await persistence.get_project_files(project.id, "alice")
        assert len(files) == 1
        assert files[0].size_bytes == 2

        await persistence.save_conversation(project.id, "alice", "hello", "hi there")
        conversations = await persistence.get_conversations(project.id, "alice", 50)
        assert len(conversations) == 1
        assert conversations[0].message == "hello"
        assert conversations[0].response == "hi there"

        refreshed = await persistence.get_project(project.id, "alice")
        assert refreshed.updated_at >= saved.updated_at
