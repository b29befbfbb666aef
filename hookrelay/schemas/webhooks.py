"""Pydantic models for GitHub webhook payloads.

Only the fields the receiver logs or routes on are modelled; any other keys
GitHub sends are ignored during validation.

Reference: https://docs.github.com/en/webhooks/webhook-events-and-payloads
"""

from enum import Enum
from typing import ClassVar

from pydantic import BaseModel, Field, field_validator


class Action(str, Enum):
    """Action verbs carried by issue, comment and pull request events."""

    CREATED = "created"
    EDITED = "edited"
    DELETED = "deleted"
    OPENED = "opened"
    CLOSED = "closed"
    REOPENED = "reopened"
    # GitHub sends "synchronize" when new commits are pushed to a PR head.
    SYNCHRONIZED = "synchronize"


class User(BaseModel):
    """A GitHub account (user, organization or bot)."""

    login: str
    id: int
    type: str | None = None


class RepositoryOwner(BaseModel):
    """Owner of the repository (user or organization)."""

    login: str | None = None
    name: str | None = None


class Repository(BaseModel):
    """Repository metadata from the webhook payload."""

    id: int
    name: str
    full_name: str
    owner: RepositoryOwner
    default_branch: str = "main"


class Issue(BaseModel):
    """The issue an issues or issue_comment event refers to."""

    number: int
    title: str
    state: str | None = None
    body: str | None = None
    user: User
    html_url: str | None = None


class Comment(BaseModel):
    """A comment left on an issue or pull request."""

    id: int
    body: str
    user: User
    html_url: str | None = None


class PullRequestRef(BaseModel):
    """Head or base of a pull request."""

    ref: str
    sha: str


class PullRequest(BaseModel):
    """The pull request a pull_request event refers to."""

    number: int
    title: str
    state: str | None = None
    user: User
    draft: bool = False
    merged: bool | None = None
    head: PullRequestRef
    base: PullRequestRef
    html_url: str | None = None


class CommitAuthor(BaseModel):
    """Author information from a Git commit."""

    name: str
    email: str


class Commit(BaseModel):
    """A single commit within a GitHub push event."""

    id: str
    message: str
    timestamp: str
    url: str | None = None
    added: list[str] = Field(default_factory=list)
    modified: list[str] = Field(default_factory=list)
    removed: list[str] = Field(default_factory=list)
    author: CommitAuthor


class ActionPayload(BaseModel):
    """Base for payloads carrying an ``action`` restricted per event type."""

    allowed_actions: ClassVar[frozenset[Action]] = frozenset(Action)

    action: Action

    @field_validator("action")
    @classmethod
    def _action_allowed(cls, value: Action) -> Action:
        if value not in cls.allowed_actions:
            raise ValueError(f"action {value.value!r} is not valid for this event")
        return value


class PingPayload(BaseModel):
    """Payload of the ``ping`` event sent when a webhook is created."""

    zen: str | None = None
    hook_id: int | None = None
    repository: Repository | None = None
    sender: User | None = None


class IssuesPayload(ActionPayload):
    """Payload of the ``issues`` event."""

    allowed_actions: ClassVar[frozenset[Action]] = frozenset(
        {Action.OPENED, Action.EDITED, Action.DELETED, Action.CLOSED, Action.REOPENED}
    )

    sender: User
    issue: Issue
    repository: Repository


class IssueCommentPayload(ActionPayload):
    """Payload of the ``issue_comment`` event."""

    allowed_actions: ClassVar[frozenset[Action]] = frozenset(
        {Action.CREATED, Action.EDITED, Action.DELETED}
    )

    sender: User
    issue: Issue
    comment: Comment
    repository: Repository


class PullRequestPayload(ActionPayload):
    """Payload of the ``pull_request`` event."""

    allowed_actions: ClassVar[frozenset[Action]] = frozenset(
        {
            Action.OPENED,
            Action.EDITED,
            Action.CLOSED,
            Action.REOPENED,
            Action.SYNCHRONIZED,
        }
    )

    number: int
    sender: User
    pull_request: PullRequest
    repository: Repository


class PushPayload(BaseModel):
    """GitHub push webhook event payload. Push events carry no action.

    Reference: https://docs.github.com/en/webhooks/webhook-events-and-payloads#push
    """

    ref: str
    before: str
    after: str
    repository: Repository
    sender: User | None = None
    commits: list[Commit] = Field(default_factory=list)
    head_commit: Commit | None = None
    base_ref: str | None = None
    compare: str | None = None
    created: bool = False
    deleted: bool = False
    forced: bool = False


class WebhookAck(BaseModel):
    """Response body returned for a handled webhook delivery."""

    status: str = "ok"
    event: str
