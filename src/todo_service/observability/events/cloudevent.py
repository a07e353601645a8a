"""CloudEvents v1.0 envelope."""
from __future__ import annotations

import json
import uuid
from dataclasses import dataclass, field
from typing import Any

__all__ = ["CloudEvent"]


@dataclass(frozen=True)
class CloudEvent:
    """Required attributes: id, source, specversion, type, datacontenttype, time.

    ``type`` follows ``<domain>.<entity>.<action>.v<version>``.
    """

    type: str
    time: str
    data: dict[str, Any]
    source: str = "/todo-service"
    subject: str | None = None
    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    specversion: str = "1.0"
    datacontenttype: str = "application/json"

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "id": self.id,
            "source": self.source,
            "specversion": self.specversion,
            "type": self.type,
            "datacontenttype": self.datacontenttype,
            "time": self.time,
            "data": self.data,
        }
        if self.subject is not None:
            payload["subject"] = self.subject
        return payload

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), default=str)
