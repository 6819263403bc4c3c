from __future__ import annotations

from enum import Enum


class ProductionStatus(str, Enum):
    RECORDED = "recorded"
    VERIFIED = "verified"
    REJECTED = "rejected"

    @property
    def is_terminal(self) -> bool:
        return self is not ProductionStatus.RECORDED
