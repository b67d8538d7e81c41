from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional, Union

from ..common.payload import pick, require_mapping


@dataclass(frozen=True)
class AuthoredRecord:
    """Any stored record that remembers which user created it."""

    created_by: Optional[Union[int, str]]
    id: Optional[Union[int, str]] = None

    @classmethod
    def from_dict(cls, data: Any) -> "AuthoredRecord":
        data = require_mapping(data, "Record")
        return cls(id=pick(data, "id", "_id"), created_by=pick(data, "created_by", "author_id"))
