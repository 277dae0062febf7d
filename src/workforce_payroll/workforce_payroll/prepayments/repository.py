from __future__ import annotations

from typing import Protocol, Sequence

from .model import Prepayment


class PrepaymentRepository(Protocol):
    def get_prepayments(self) -> Sequence[Prepayment]:
        raise NotImplementedError

    def save_prepayment(self, prepayment: Prepayment) -> Prepayment:
        raise NotImplementedError

    def delete_prepayment(self, prepayment_id: str) -> bool:
        raise NotImplementedError
