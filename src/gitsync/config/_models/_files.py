"""Tracked metadata file configuration model."""

from typing import ClassVar

from pydantic import BaseModel, ConfigDict, Field


class FilesConfig(BaseModel):
    """Metadata files section.

    Paths are relative to the repository root.

    Attributes:
        ignore_file: Ignore list that "ignore permanently" appends to.
        lfs_attributes_file: Attributes file updated by ``git lfs track``.
    """

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True, extra="ignore")

    ignore_file: str = Field(default=".gitignore", min_length=1)
    lfs_attributes_file: str = Field(default=".gitattributes", min_length=1)
