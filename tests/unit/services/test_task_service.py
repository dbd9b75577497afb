"""Unit tests for TaskService."""

from datetime import datetime, timedelta
from unittest.mock import AsyncMock
from uuid import UUID, uuid4

import pytest

from core.exceptions import TaskNotFoundError, ValidationError
from domain.entities.task import Task, TaskFilters, TaskPriority, TaskStatus
from domain.services.task_service import TaskService
from tests.unit.conftest import FakeUnitOfWork


@pytest.fixture
def mock_notification_service() -> AsyncMock:
    """A mock NotificationService with a notify() method."""
    mock = AsyncMock()
    mock.notify = AsyncMock()
    return mock


@pytest.fixture
def service(uow: FakeUnitOfWork, mock_notification_service: AsyncMock) -> TaskService:
    return TaskService(lambda: uow, notification_service=mock_notification_service)


@pytest.fixture
def own_task(user_id: UUID) -> Task:
    return Task(title="Quarterly report", created_by=user_id, assigned_to=user_id)


# --- list_tasks ---


class TestListTasks:
    async def test_no_has_filter_skips_presence_lookups(
        self, service: TaskService, uow: FakeUnitOfWork, user_id: UUID
    ):
        uow.tasks.list_visible.return_value = []
        filters = TaskFilters(status=TaskStatus.PENDING)

        await service.list_tasks(user_id, filters)

        uow.comments.get_task_ids.assert_not_awaited()
        uow.attachments.get_task_ids.assert_not_awaited()
        uow.tasks.list_visible.assert_awaited_once_with(user_id, filters, None)

    async def test_has_both_intersects_sets(
        self, service: TaskService, uow: FakeUnitOfWork, user_id: UUID
    ):
        a, b, c = uuid4(), uuid4(), uuid4()
        uow.comments.get_task_ids.return_value = {a, b}
        uow.attachments.get_task_ids.return_value = {b, c}
        uow.tasks.list_visible.return_value = []
        filters = TaskFilters(has=frozenset({"comments", "attachments"}))

        await service.list_tasks(user_id, filters)

        uow.tasks.list_visible.assert_awaited_once_with(user_id, filters, {b})

    async def test_empty_intersection_short_circuits(
        self, service: TaskService, uow: FakeUnitOfWork, user_id: UUID
    ):
        uow.comments.get_task_ids.return_value = {uuid4()}
        uow.attachments.get_task_ids.return_value = {uuid4()}

        result = await service.list_tasks(
            user_id, TaskFilters(has=frozenset({"comments", "attachments"}))
        )

        assert result == []
        uow.tasks.list_visible.assert_not_awaited()

    async def test_no_comments_anywhere_returns_empty(
        self, service: TaskService, uow: FakeUnitOfWork, user_id: UUID
    ):
        uow.comments.get_task_ids.return_value = set()

        assert await service.list_tasks(user_id, TaskFilters(has=frozenset({"comments"}))) == []
        uow.tasks.list_visible.assert_not_awaited()


# --- get_task ---


class TestGetTask:
    async def test_returns_visible_task(
        self, service: TaskService, uow: FakeUnitOfWork, user_id: UUID, own_task: Task
    ):
        uow.tasks.get.return_value = own_task
        assert await service.get_task(own_task.id, user_id) is own_task

    async def test_invisible_task_is_not_found(
        self, service: TaskService, uow: FakeUnitOfWork, own_task: Task
    ):
        uow.tasks.get.return_value = own_task

        with pytest.raises(TaskNotFoundError) as exc_info:
            await service.get_task(own_task.id, uuid4())
        assert exc_info.value.status_code == 404

    async def test_missing_task_is_not_found(
        self, service: TaskService, uow: FakeUnitOfWork, user_id: UUID
    ):
        uow.tasks.get.return_value = None
        with pytest.raises(TaskNotFoundError):
            await service.get_task(uuid4(), user_id)


# --- create ---


class TestCreate:
    async def test_defaults_to_self_assigned_pending(
        self,
        service: TaskService,
        uow: FakeUnitOfWork,
        user_id: UUID,
        mock_notification_service: AsyncMock,
    ):
        uow.tasks.create.side_effect = lambda t: t

        task = await service.create(user_id, title="Write minutes")

        assert task.created_by == user_id
        assert task.assigned_to == user_id
        assert task.status == TaskStatus.PENDING
        assert task.priority == TaskPriority.MEDIUM
        assert uow.committed is True
        mock_notification_service.notify.assert_awaited_once()

    async def test_notifies_other_assignee(
        self,
        service: TaskService,
        uow: FakeUnitOfWork,
        user_id: UUID,
        actor_id: UUID,
        mock_notification_service: AsyncMock,
    ):
        uow.tasks.create.side_effect = lambda t: t

        await service.create(user_id, title="Review budget", assigned_to=actor_id)

        kwargs = mock_notification_service.notify.await_args.kwargs
        assert kwargs["actor_id"] == user_id
        assert kwargs["recipient_id"] == actor_id
        assert kwargs["title"] == "New task assigned"


# --- update ---


class TestUpdate:
    async def test_applies_only_given_fields(
        self, service: TaskService, uow: FakeUnitOfWork, user_id: UUID, own_task: Task
    ):
        own_task.description = "keep me"
        uow.tasks.get.return_value = own_task
        uow.tasks.update.side_effect = lambda t: t

        updated = await service.update(own_task.id, user_id, {"status": "completed"})

        assert updated.status == TaskStatus.COMPLETED
        assert updated.description == "keep me"
        assert updated.rating is None
        assert uow.committed is True

    async def test_explicit_none_clears_field(
        self, service: TaskService, uow: FakeUnitOfWork, user_id: UUID, own_task: Task
    ):
        own_task.due_date = datetime.utcnow()
        uow.tasks.get.return_value = own_task
        uow.tasks.update.side_effect = lambda t: t

        updated = await service.update(own_task.id, user_id, {"due_date": None})

        assert updated.due_date is None

    async def test_rejects_unpatchable_fields(
        self, service: TaskService, uow: FakeUnitOfWork, user_id: UUID
    ):
        with pytest.raises(ValidationError):
            await service.update(uuid4(), user_id, {"created_by": str(uuid4())})
        uow.tasks.get.assert_not_awaited()

    async def test_stranger_gets_not_found(
        self, service: TaskService, uow: FakeUnitOfWork, own_task: Task
    ):
        uow.tasks.get.return_value = own_task

        with pytest.raises(TaskNotFoundError):
            await service.update(own_task.id, uuid4(), {"title": "hijack"})
        uow.tasks.update.assert_not_awaited()

    async def test_reassignment_notifies_new_assignee(
        self,
        service: TaskService,
        uow: FakeUnitOfWork,
        user_id: UUID,
        actor_id: UUID,
        own_task: Task,
        mock_notification_service: AsyncMock,
    ):
        uow.tasks.get.return_value = own_task
        uow.tasks.update.side_effect = lambda t: t

        await service.update(own_task.id, user_id, {"assigned_to": actor_id})

        assert mock_notification_service.notify.await_args.kwargs["recipient_id"] == actor_id

    async def test_unchanged_assignee_does_not_notify(
        self,
        service: TaskService,
        uow: FakeUnitOfWork,
        user_id: UUID,
        own_task: Task,
        mock_notification_service: AsyncMock,
    ):
        uow.tasks.get.return_value = own_task
        uow.tasks.update.side_effect = lambda t: t

        await service.update(own_task.id, user_id, {"priority": "urgent"})

        mock_notification_service.notify.assert_not_awaited()

    async def test_clearing_assignee_keeps_none_and_does_not_notify(
        self,
        service: TaskService,
        uow: FakeUnitOfWork,
        user_id: UUID,
        own_task: Task,
        mock_notification_service: AsyncMock,
    ):
        uow.tasks.get.return_value = own_task
        uow.tasks.update.side_effect = lambda t: t

        updated = await service.update(own_task.id, user_id, {"assigned_to": None})

        assert updated.assigned_to is None
        mock_notification_service.notify.assert_not_awaited()


# --- delete ---


class TestDelete:
    async def test_deletes_visible_task(
        self, service: TaskService, uow: FakeUnitOfWork, user_id: UUID, own_task: Task
    ):
        uow.tasks.get.return_value = own_task
        uow.tasks.delete.return_value = True

        assert await service.delete(own_task.id, user_id) is True
        uow.tasks.delete.assert_awaited_once_with(own_task.id)
        assert uow.committed is True

    async def test_stranger_cannot_delete(
        self, service: TaskService, uow: FakeUnitOfWork, own_task: Task
    ):
        uow.tasks.get.return_value = own_task

        with pytest.raises(TaskNotFoundError):
            await service.delete(own_task.id, uuid4())
        uow.tasks.delete.assert_not_awaited()


# --- dashboard_stats ---


class TestDashboardStats:
    async def test_counts(
        self, service: TaskService, uow: FakeUnitOfWork, user_id: UUID, actor_id: UUID
    ):
        now = datetime.utcnow()
        tasks = [
            # overdue, open
            Task(
                title="late",
                created_by=user_id,
                assigned_to=user_id,
                due_date=now - timedelta(days=1),
            ),
            # due soon, assigned to me by someone else
            Task(
                title="soon",
                created_by=actor_id,
                assigned_to=user_id,
                status=TaskStatus.IN_PROGRESS,
                due_date=now + timedelta(days=2),
            ),
            # overdue but completed: neither overdue nor due soon
            Task(
                title="done",
                created_by=user_id,
                assigned_to=actor_id,
                status=TaskStatus.COMPLETED,
                due_date=now - timedelta(days=3),
            ),
            # far in the future
            Task(
                title="later",
                created_by=user_id,
                assigned_to=user_id,
                due_date=now + timedelta(days=30),
            ),
        ]
        uow.tasks.list_visible.return_value = tasks
        uow.comments.count_for_tasks.return_value = 4
        uow.attachments.count_for_tasks.return_value = 2

        stats = await service.dashboard_stats(user_id)

        assert stats.total == 4
        assert stats.overdue == 1
        assert stats.due_soon == 1
        assert stats.assigned_to_me == 3
        assert stats.created_by_me == 3
        assert stats.by_status["pending"] == 2
        assert stats.by_status["in_progress"] == 1
        assert stats.by_status["completed"] == 1
        assert stats.by_status["cancelled"] == 0
        assert stats.comments_count == 4
        assert stats.attachments_count == 2

    async def test_empty(self, service: TaskService, uow: FakeUnitOfWork, user_id: UUID):
        uow.tasks.list_visible.return_value = []
        uow.comments.count_for_tasks.return_value = 0
        uow.attachments.count_for_tasks.return_value = 0

        stats = await service.dashboard_stats(user_id)

        assert stats.total == 0
        assert set(stats.by_status) == {s.value for s in TaskStatus}
