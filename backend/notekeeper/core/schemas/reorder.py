from __future__ import annotations

from typing import Literal

from notekeeper.core.models.base import AppBaseModel


class ReorderRequest(AppBaseModel):
    """Move ``source_id`` directly before or after ``target_id``."""

    source_id: str
    target_id: str
    position: Literal["before", "after"] = "after"
