"""Remote configuration model."""

from typing import ClassVar

from pydantic import BaseModel, ConfigDict, Field


class RemoteConfig(BaseModel):
    """Remote configuration section.

    Attributes:
        name: Name of the git remote to synchronize with.
        url: URL to set on the remote. Empty leaves an existing remote as is.
        branch: Branch that is pulled from and pushed to.
    """

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True, extra="ignore")

    name: str = Field(default="origin", min_length=1)
    url: str = ""
    branch: str = Field(default="main", min_length=1)
