from dataclasses import dataclass, field
from typing import Any, Dict


@dataclass(slots=True)
class PendingTimer:
    """Delayed action counted down on each tick; fires ``timer_expired`` once."""

    kind: str
    remaining: float
    group: str = "default"
    payload: Dict[str, Any] = field(default_factory=dict)
