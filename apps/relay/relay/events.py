"""Schema-tolerant models for inbound GitHub webhook payloads.

Only the fields the relay reads are declared. Every field has an empty
default so partial payloads validate. Explicit ``null`` values are treated
the same as missing keys, and a field of the wrong type falls back to its
default instead of failing the whole payload.
"""

from __future__ import annotations

from typing import Any

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    ValidationInfo,
    ValidatorFunctionWrapHandler,
    field_validator,
    model_validator,
)


class _Payload(BaseModel):
    model_config = ConfigDict(extra="ignore")

    @model_validator(mode="before")
    @classmethod
    def _drop_nulls(cls, data: Any) -> Any:
        if isinstance(data, dict):
            return {key: value for key, value in data.items() if value is not None}
        return data

    @field_validator("*", mode="wrap")
    @classmethod
    def _default_on_error(
        cls, value: Any, handler: ValidatorFunctionWrapHandler, info: ValidationInfo
    ) -> Any:
        try:
            return handler(value)
        except ValidationError:
            return cls.model_fields[info.field_name].get_default(call_default_factory=True)


class GitHubUser(_Payload):
    login: str = ""


class Repository(_Payload):
    full_name: str = ""


class Review(_Payload):
    body: str = ""
    html_url: str = ""


class Comment(_Payload):
    body: str = ""
    html_url: str = ""


class Item(_Payload):
    """A pull request or an issue."""

    number: int = 0
    title: str = ""
    body: str = ""
    html_url: str = ""
    user: GitHubUser = Field(default_factory=GitHubUser)
    assignees: list[GitHubUser] = Field(default_factory=list)

    @property
    def assignee_logins(self) -> list[str]:
        return [assignee.login for assignee in self.assignees]


class WebhookEvent(_Payload):
    """A ``pull_request``, ``pull_request_review`` or ``issue_comment`` delivery."""

    action: str = ""
    pull_request: Item | None = None
    issue: Item | None = None
    assignee: GitHubUser = Field(default_factory=GitHubUser)
    assignees: list[GitHubUser] = Field(default_factory=list)
    sender: GitHubUser = Field(default_factory=GitHubUser)
    review: Review = Field(default_factory=Review)
    comment: Comment = Field(default_factory=Comment)
    repository: Repository = Field(default_factory=Repository)

    @property
    def item(self) -> Item:
        """The pull request if present, otherwise the issue."""
        if self.pull_request is not None:
            return self.pull_request
        if self.issue is not None:
            return self.issue
        return Item()
