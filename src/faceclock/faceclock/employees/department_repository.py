from __future__ import annotations

from typing import Iterable, Protocol


class DepartmentRepository(Protocol):
    def get_names(self, dept_ids: Iterable[int]) -> dict[int, str]:
        """Known ``dept_id -> dept_name``; unknown ids are simply absent."""
        raise NotImplementedError
