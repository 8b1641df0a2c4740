from ..schemas.entities import STATUS_APPROVED, STATUS_CANCELLED, STATUS_PENDING, STATUS_REJECTED

# Pending is the only non-terminal status.
TRANSITIONS: dict[str, set[str]] = {
    STATUS_PENDING: {STATUS_APPROVED, STATUS_REJECTED, STATUS_CANCELLED},
    STATUS_APPROVED: set(),
    STATUS_REJECTED: set(),
    STATUS_CANCELLED: set(),
}


def can_transition(current: str, target: str) -> bool:
    return target in TRANSITIONS.get(current, set())


def is_terminal(status: str) -> bool:
    return not TRANSITIONS.get(status)
