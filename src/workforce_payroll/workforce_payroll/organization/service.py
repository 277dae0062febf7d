from __future__ import annotations

from decimal import Decimal
from typing import Optional

from ..common.validators import require_period, require_selection
from ..core.exceptions import ValidationError
from .model import Group
from .repository import OrganizationRepository
from .salary_history import resolve_display, with_salary, without_salary


class GroupSalaryService:
    """Use cases around a group's salary history."""

    def __init__(self, organization: OrganizationRepository):
        self._organization = organization

    def _require_group(self, group_id: str) -> Group:
        group = self._organization.get_group(require_selection(group_id, "group"))
        if not group:
            raise ValidationError("Group does not exist")
        return group

    def current_salary(self, group_id: str, month: str) -> Optional[Decimal]:
        """Salary shown in listings: last known rate at or before ``month``."""
        group = self._require_group(group_id)
        return resolve_display(group.salary_history, require_period(month))

    def set_salary(self, group_id: str, month: str, amount) -> Group:
        group = with_salary(self._require_group(group_id), month, amount)
        return self._organization.save_group(group)

    def remove_salary(self, group_id: str, month: str) -> Group:
        group = without_salary(self._require_group(group_id), require_period(month))
        return self._organization.save_group(group)
