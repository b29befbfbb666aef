"""Shared fixtures: settings, the FastAPI test client and sample payloads."""

from collections.abc import AsyncGenerator

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from hookrelay.config import Settings
from hookrelay.main import create_app


@pytest.fixture
def anyio_backend() -> str:
    """Run async tests on asyncio, the backend the suite is written for."""
    return "asyncio"


@pytest.fixture
def settings() -> Settings:
    """Settings with a fixed test secret, ignoring any local ``.env``."""
    return Settings(github_webhook_secret="test-secret", _env_file=None)  # type: ignore[call-arg]


@pytest.fixture
def app(settings: Settings) -> FastAPI:
    return create_app(settings)


@pytest.fixture
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    """Yield an httpx AsyncClient bound to the application under test."""
    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
def sender() -> dict:
    return {"login": "octocat", "id": 1, "type": "User"}


@pytest.fixture
def repository() -> dict:
    return {
        "id": 12345,
        "name": "hello-world",
        "full_name": "octocat/hello-world",
        "owner": {"login": "octocat"},
        "default_branch": "main",
    }


@pytest.fixture
def issue(sender: dict) -> dict:
    return {
        "number": 42,
        "title": "Something is broken",
        "state": "open",
        "body": "Steps to reproduce...",
        "user": sender,
        "html_url": "https://github.com/octocat/hello-world/issues/42",
    }


@pytest.fixture
def ping_payload(repository: dict, sender: dict) -> dict:
    return {
        "zen": "Keep it logically awesome.",
        "hook_id": 987,
        "hook": {"type": "Repository", "active": True},
        "repository": repository,
        "sender": sender,
    }


@pytest.fixture
def issues_payload(issue: dict, repository: dict, sender: dict) -> dict:
    return {
        "action": "opened",
        "issue": issue,
        "repository": repository,
        "sender": sender,
    }


@pytest.fixture
def issue_comment_payload(issue: dict, repository: dict, sender: dict) -> dict:
    return {
        "action": "created",
        "issue": issue,
        "comment": {
            "id": 555,
            "body": "Looks good to me",
            "user": sender,
            "html_url": "https://github.com/octocat/hello-world/issues/42#issuecomment-555",
        },
        "repository": repository,
        "sender": sender,
    }


@pytest.fixture
def pull_request_payload(repository: dict, sender: dict) -> dict:
    return {
        "action": "opened",
        "number": 7,
        "pull_request": {
            "number": 7,
            "title": "Add feature",
            "state": "open",
            "user": sender,
            "draft": False,
            "merged": False,
            "head": {"ref": "feature", "sha": "a" * 40},
            "base": {"ref": "main", "sha": "b" * 40},
        },
        "repository": repository,
        "sender": sender,
    }


@pytest.fixture
def push_payload(repository: dict, sender: dict) -> dict:
    commit = {
        "id": "c" * 40,
        "message": "Fix typo",
        "timestamp": "2026-02-07T12:00:00Z",
        "added": ["docs/new.md"],
        "modified": ["README.md"],
        "removed": [],
        "author": {"name": "Octo Cat", "email": "octocat@example.com"},
    }
    return {
        "ref": "refs/heads/main",
        "before": "0" * 40,
        "after": "c" * 40,
        "created": False,
        "deleted": False,
        "forced": False,
        "base_ref": None,
        "compare": "https://github.com/octocat/hello-world/compare/000000...cccccc",
        "commits": [commit],
        "head_commit": commit,
        "repository": repository,
        "sender": sender,
    }
