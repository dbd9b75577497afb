"""Integration tests for task comments and attachments."""

from uuid import uuid4

import pytest
from httpx import AsyncClient

from tests.integration.conftest import CurrentUserSwitch, FakeStorage


async def _task(client: AsyncClient) -> str:
    response = await client.post("/api/tasks", json={"title": "Contract review"})
    return response.json()["task"]["id"]


async def _upload(
    client: AsyncClient, task_id: str, name: str = "contract.pdf", data: bytes = b"%PDF"
):
    return await client.post(
        f"/api/tasks/{task_id}/attachments",
        files={"file": (name, data, "application/pdf")},
    )


class TestAttachmentsAPI:
    @pytest.mark.asyncio
    async def test_upload_and_list(
        self, client: AsyncClient, users: CurrentUserSwitch, storage: FakeStorage
    ) -> None:
        alice = users.login_as("alice")
        task_id = await _task(client)

        response = await _upload(client, task_id)

        assert response.status_code == 201
        attachment = response.json()["attachment"]
        assert attachment["task_id"] == task_id
        assert attachment["uploader_id"] == str(alice.id)
        assert attachment["file_name"] == "contract.pdf"
        assert attachment["mime_type"] == "application/pdf"
        assert attachment["size_bytes"] == 4
        assert attachment["storage_path"].startswith(f"tasks/{task_id}/")
        assert attachment["storage_path"].endswith(".pdf")
        assert attachment["url"].startswith("https://storage.test/object/sign/")
        assert "expires=3600" in attachment["url"]
        assert storage.objects[attachment["storage_path"]] == b"%PDF"

        listed = (await client.get(f"/api/tasks/{task_id}/attachments")).json()["attachments"]
        assert [a["id"] for a in listed] == [attachment["id"]]
        assert listed[0]["url"] is not None

    @pytest.mark.asyncio
    async def test_list_newest_first(self, client: AsyncClient, users: CurrentUserSwitch) -> None:
        users.login_as("alice")
        task_id = await _task(client)
        first = (await _upload(client, task_id, "a.pdf")).json()["attachment"]
        second = (await _upload(client, task_id, "b.pdf")).json()["attachment"]

        listed = (await client.get(f"/api/tasks/{task_id}/attachments")).json()["attachments"]

        assert [a["id"] for a in listed] == [second["id"], first["id"]]

    @pytest.mark.asyncio
    async def test_signing_failure_still_lists(
        self, client: AsyncClient, users: CurrentUserSwitch, storage: FakeStorage
    ) -> None:
        users.login_as("alice")
        task_id = await _task(client)
        await _upload(client, task_id)
        storage.fail_signing = True

        response = await client.get(f"/api/tasks/{task_id}/attachments")

        assert response.status_code == 200
        assert response.json()["attachments"][0]["url"] is None

    @pytest.mark.asyncio
    async def test_missing_file(self, client: AsyncClient, users: CurrentUserSwitch) -> None:
        users.login_as("alice")
        task_id = await _task(client)

        response = await client.post(f"/api/tasks/{task_id}/attachments", data={"other": "x"})

        assert response.status_code == 400
        assert response.json()["error"] == "Missing file"

    @pytest.mark.asyncio
    async def test_empty_file(self, client: AsyncClient, users: CurrentUserSwitch) -> None:
        users.login_as("alice")
        task_id = await _task(client)

        response = await _upload(client, task_id, data=b"")

        assert response.status_code == 400
        assert response.json()["error"] == "Empty file"

    @pytest.mark.asyncio
    async def test_file_too_large(
        self, client: AsyncClient, users: CurrentUserSwitch, storage: FakeStorage
    ) -> None:
        users.login_as("alice")
        task_id = await _task(client)

        response = await _upload(client, task_id, data=b"x" * (10 * 1024 * 1024 + 1))

        assert response.status_code == 400
        assert response.json()["error"] == "File too large (max 10MB)"
        assert storage.objects == {}

    @pytest.mark.asyncio
    async def test_storage_not_configured(
        self, client: AsyncClient, users: CurrentUserSwitch, storage: FakeStorage
    ) -> None:
        users.login_as("alice")
        task_id = await _task(client)
        storage.is_configured = False

        response = await _upload(client, task_id)

        assert response.status_code == 500
        assert response.json()["error_code"] == "BACKEND_NOT_CONFIGURED"

    @pytest.mark.asyncio
    async def test_invisible_task(self, client: AsyncClient, users: CurrentUserSwitch) -> None:
        users.login_as("alice")
        task_id = await _task(client)

        users.login_as("mallory")
        assert (await _upload(client, task_id)).status_code == 404
        assert (await client.get(f"/api/tasks/{task_id}/attachments")).status_code == 404


class TestCommentsAPI:
    @pytest.mark.asyncio
    async def test_thread_oldest_first_with_author(
        self, client: AsyncClient, users: CurrentUserSwitch
    ) -> None:
        bob = users.login_as("bob")
        await client.get("/api/auth")
        users.login_as("alice")
        task = await client.post(
            "/api/tasks", json={"title": "Shared task", "assigned_to": str(bob.id)}
        )
        task_id = task.json()["task"]["id"]
        await client.post(f"/api/tasks/{task_id}/comments", json={"content": "First"})

        users.login_as("bob")
        created = await client.post(f"/api/tasks/{task_id}/comments", json={"content": "Second"})
        assert created.status_code == 201
        assert created.json()["comment"]["author"]["email"] == "bob@example.com"

        comments = (await client.get(f"/api/tasks/{task_id}/comments")).json()["comments"]

        assert [c["content"] for c in comments] == ["First", "Second"]
        assert comments[0]["author"]["full_name"] == "Alice"
        assert comments[0]["author"]["role"] == "can_bo"
        assert comments[1]["author_id"] == str(bob.id)

    @pytest.mark.asyncio
    async def test_comment_with_attachment(
        self, client: AsyncClient, users: CurrentUserSwitch
    ) -> None:
        users.login_as("alice")
        task_id = await _task(client)
        attachment = (await _upload(client, task_id)).json()["attachment"]

        response = await client.post(
            f"/api/tasks/{task_id}/comments",
            json={"content": "See attached", "attachment_id": attachment["id"]},
        )

        assert response.status_code == 201
        comment = response.json()["comment"]
        assert comment["attachment_id"] == attachment["id"]
        assert comment["attachment"]["url"] is not None

        listed = (await client.get(f"/api/tasks/{task_id}/comments")).json()["comments"]
        assert listed[0]["attachment"]["file_name"] == "contract.pdf"

    @pytest.mark.asyncio
    async def test_attachment_from_other_task_rejected(
        self, client: AsyncClient, users: CurrentUserSwitch
    ) -> None:
        users.login_as("alice")
        first = await _task(client)
        second = await _task(client)
        attachment = (await _upload(client, first)).json()["attachment"]

        response = await client.post(
            f"/api/tasks/{second}/comments",
            json={"content": "Wrong file", "attachment_id": attachment["id"]},
        )

        assert response.status_code == 404
        assert response.json()["error_code"] == "ATTACHMENT_NOT_FOUND"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("content", ["", "x" * 2001])
    async def test_content_length(
        self, client: AsyncClient, users: CurrentUserSwitch, content: str
    ) -> None:
        users.login_as("alice")
        task_id = await _task(client)

        response = await client.post(f"/api/tasks/{task_id}/comments", json={"content": content})

        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_unknown_task(self, client: AsyncClient, users: CurrentUserSwitch) -> None:
        users.login_as("alice")

        response = await client.post(f"/api/tasks/{uuid4()}/comments", json={"content": "Hi"})

        assert response.status_code == 404
