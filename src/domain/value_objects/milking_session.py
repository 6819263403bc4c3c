from __future__ import annotations

from enum import Enum


class MilkingSession(str, Enum):
    MORNING = "morning"
    EVENING = "evening"
