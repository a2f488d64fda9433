"""Repository setup configuration model."""

from typing import ClassVar

from pydantic import BaseModel, ConfigDict, Field


class RepositoryConfig(BaseModel):
    """Repository setup section.

    Attributes:
        initial_branch: Branch name given to a freshly initialized repository.
        mark_safe_directory: Register the project as a global safe.directory.
    """

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True, extra="ignore")

    initial_branch: str = Field(default="main", min_length=1)
    mark_safe_directory: bool = True
