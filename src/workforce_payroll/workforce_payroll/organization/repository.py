from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Employee, Group, Section


class OrganizationRepository(Protocol):
    """Read side of sections, groups and employees.

    Note (DIP): services depend on this interface, not on a concrete database.
    """

    def get_sections(self) -> Sequence[Section]:
        raise NotImplementedError

    def get_section(self, section_id: str) -> Optional[Section]:
        raise NotImplementedError

    def get_groups(self) -> Sequence[Group]:
        raise NotImplementedError

    def get_group(self, group_id: str) -> Optional[Group]:
        raise NotImplementedError

    def save_group(self, group: Group) -> Group:
        """Upsert the group together with its whole salary history."""

        raise NotImplementedError

    def get_employees(self) -> Sequence[Employee]:
        raise NotImplementedError

    def get_employees_by_section(self, section_id: str) -> Sequence[Employee]:
        raise NotImplementedError
