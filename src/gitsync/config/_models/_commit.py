"""Commit message configuration model."""

from typing import ClassVar

from pydantic import BaseModel, ConfigDict


class CommitConfig(BaseModel):
    """Commit message section.

    Messages may contain a ``{timestamp}`` placeholder, rendered with
    ``timestamp_format`` (pendulum formatting tokens).

    Attributes:
        sync_message: Message for safe-sync commits.
        mirror_message: Message for force-mirror commits.
        timestamp_format: Format of the ``{timestamp}`` placeholder.
    """

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True, extra="ignore")

    sync_message: str = "feat(auto): sync files at {timestamp}"
    mirror_message: str = "refactor(force): mirror local state at {timestamp}"
    timestamp_format: str = "YYYY-MM-DD HH:mm"
