from __future__ import annotations

from enum import Enum


class CattleStatus(str, Enum):
    ACTIVE = "active"
    PREGNANT = "pregnant"
    DRY = "dry"
    SICK = "sick"
    SOLD = "sold"
    DECEASED = "deceased"
    QUARANTINE = "quarantine"
