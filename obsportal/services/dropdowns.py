# obsportal/services/dropdowns.py
from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from typing import List

from pydantic import BaseModel

from obsportal.core.logger import get_logger
from obsportal.models.schemas import Option, Teacher
from obsportal.services.adapters import get_departments, get_focus_areas, get_teachers
from obsportal.services.api_client import ApiClient

logger = get_logger("dropdowns")


class DataCache(BaseModel):
    teachers: List[Teacher] = []
    departments: List[Option] = []
    focus: List[Option] = []

    @property
    def missing_required(self) -> bool:
        return not self.departments or not self.focus


# Overwritten wholesale on every new-observation page load
DATA_CACHE = DataCache()


def preload_dropdowns(client: ApiClient) -> DataCache:
    """
    Fetch the three dropdown lists side by side.
    A fetch that blows up contributes an empty list; the others still land.
    """
    global DATA_CACHE

    loaders = {
        "teachers": get_teachers,
        "departments": get_departments,
        "focus": get_focus_areas,
    }
    results = {}
    with ThreadPoolExecutor(max_workers=len(loaders)) as pool:
        futures = {key: pool.submit(fn, client) for key, fn in loaders.items()}
        for key, future in futures.items():
            try:
                results[key] = future.result()
            except Exception as e:
                logger.error("Prefetch of %s failed: %s", key, e)
                results[key] = []

    DATA_CACHE = DataCache(**results)
    return DATA_CACHE
