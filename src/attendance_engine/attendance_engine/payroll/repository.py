from __future__ import annotations

from typing import Iterable, Optional, Protocol

from .model import PayProfile


class PayProfileRepository(Protocol):
    def get_for_employee(self, employee_id: str) -> Optional[PayProfile]:
        raise NotImplementedError


class InMemoryPayProfileRepository(PayProfileRepository):
    def __init__(self, profiles: Iterable[PayProfile] = ()):
        self._by_employee = {p.employee_id: p for p in profiles}

    def get_for_employee(self, employee_id: str) -> Optional[PayProfile]:
        return self._by_employee.get(employee_id)
