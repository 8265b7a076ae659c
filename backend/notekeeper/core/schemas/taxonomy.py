from __future__ import annotations

from pydantic import Field

from notekeeper.core.models.base import AppBaseModel


class TagCount(AppBaseModel):
    name: str
    count: int = Field(ge=1)


class NoteTaxonomy(AppBaseModel):
    """Tag projection of a user's workspace.

    - tags: every visible tag with the number of live notes carrying it
    """

    tags: list[TagCount] = Field(default_factory=list)

    def as_dict(self) -> dict[str, int]:
        return {t.name: t.count for t in self.tags}
