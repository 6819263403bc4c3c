from __future__ import annotations

from src.application.errors import IneligibleOperation
from src.domain.models.production import Production, Recorded


def require_recorded(production: Production, action: str) -> Recorded:
    """Return the recorded variant or refuse the action on a terminal record."""
    state = production.state
    if not isinstance(state, Recorded):
        raise IneligibleOperation(
            f"Cannot {action} production record with status: {production.status.value}",
            details={"production_id": str(production.id), "status": production.status.value},
        )
    return state
