# obsportal/models/schemas.py
from typing import Any, Optional

from pydantic import BaseModel


class ApiResult(BaseModel):
    """Uniform shape of every backend call, successful or not."""
    ok: bool
    status: int
    data: Any = None

    @property
    def detail(self) -> Optional[Any]:
        if isinstance(self.data, dict):
            return self.data.get("detail")
        return None


class Option(BaseModel):
    # ids and names change type between backend versions
    id: Any = None
    name: Any = None


class Teacher(Option):
    email: Any = None
