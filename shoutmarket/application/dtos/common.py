"""Shared DTO plumbing: camelCase wire format and pagination envelopes"""

import math
from typing import Any, Dict, Optional

from pydantic import BaseModel
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Snake-case attributes in Python, camelCase keys on the wire"""

    class Config:
        alias_generator = to_camel
        populate_by_name = True

    def dump(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True, mode="json")


def pagination(page: int, limit: int, returned: int, total: Optional[int] = None) -> Dict[str, Any]:
    """``hasNext`` is a full-page heuristic unless a total is known"""
    data: Dict[str, Any] = {
        "page": page,
        "limit": limit,
        "hasNext": page * limit < total if total is not None else returned == limit,
        "hasPrev": page > 1,
    }
    if total is not None:
        data["total"] = total
        data["totalPages"] = math.ceil(total / limit) if limit else 0
    return data
