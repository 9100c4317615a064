# obsportal/models/__init__.py

from .schemas import ApiResult, Option, Teacher

__all__ = [
    "ApiResult",
    "Option",
    "Teacher",
]
