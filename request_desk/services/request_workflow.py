from __future__ import annotations

from datetime import datetime
import logging

from ..core.errors import AuthorizationError, InvalidTransitionError, NotFoundError, ValidationError
from ..core.request_rules import can_transition
from ..core.security import require_admin
from ..core.store import Store
from ..schemas.entities import (
    STATUS_APPROVED,
    STATUS_CANCELLED,
    STATUS_PENDING,
    STATUS_REJECTED,
    Account,
    Request,
    RequestItem,
    normalize_email,
)

logger = logging.getLogger(__name__)

ACTION_LABELS = {
    STATUS_APPROVED: "approved",
    STATUS_REJECTED: "rejected",
    STATUS_CANCELLED: "cancelled",
}


def clean_items(items: list[dict] | None) -> list[RequestItem]:
    """Drop fully blank rows; reject half-filled ones."""
    cleaned: list[RequestItem] = []
    for raw in items or []:
        name = str(raw.get("name") or "").strip()
        qty = raw.get("qty")
        if not name and not qty:
            continue
        if not name:
            raise ValidationError("Please complete all item fields or remove empty rows")
        if qty is None or isinstance(qty, bool) or not isinstance(qty, int):
            raise ValidationError("Please complete all item fields or remove empty rows")
        if qty < 1:
            raise ValidationError("Quantity must be at least 1")
        cleaned.append(RequestItem(name=name, qty=qty))
    if not cleaned:
        raise ValidationError("Please add at least one item with name and quantity")
    return cleaned


class RequestWorkflow:
    """Supply/equipment requests: Pending, then exactly one terminal status."""

    def __init__(self, store: Store, now=datetime.now):
        self.store = store
        self._now = now

    def submit(self, actor: Account, type: str, items: list[dict]) -> Request:
        if actor is None:
            raise AuthorizationError("Please log in to submit a request")
        type = (type or "").strip()
        if not type:
            raise ValidationError("Request type is required")
        cleaned = clean_items(items)

        now = self._now()
        with self.store.transaction() as db:
            request = Request(
                id=self._next_id(db.requests, now),
                type=type,
                items=cleaned,
                status=STATUS_PENDING,
                date=now.date(),
                employee_email=actor.email,
            )
            db.requests.append(request)
        logger.info("request submitted (id=%s, type=%s, email=%s)", request.id, type, actor.email)
        return request

    def cancel(self, request_id: int, actor: Account) -> Request:
        return self._transition(request_id, actor, STATUS_CANCELLED)

    def approve(self, request_id: int, actor: Account) -> Request:
        return self._transition(request_id, actor, STATUS_APPROVED)

    def reject(self, request_id: int, actor: Account) -> Request:
        return self._transition(request_id, actor, STATUS_REJECTED)

    def get(self, request_id: int, actor: Account) -> Request:
        request = self.store.snapshot.find_request(request_id)
        if not request:
            raise NotFoundError("Request not found")
        if request.employee_email != actor.email and not actor.is_admin:
            raise AuthorizationError("You can only view your own requests")
        return request

    def list_mine(self, email: str) -> list[Request]:
        email = normalize_email(email)
        return [r for r in self.store.snapshot.requests if r.employee_email == email]

    def list_all(self, actor: Account) -> list[Request]:
        require_admin(actor)
        return list(self.store.snapshot.requests)

    def _transition(self, request_id: int, actor: Account, target: str) -> Request:
        if target == STATUS_CANCELLED:
            if actor is None:
                raise AuthorizationError("Please log in to cancel a request")
        else:
            require_admin(actor)

        with self.store.transaction() as db:
            request = db.find_request(request_id)
            if not request:
                raise NotFoundError("Request not found")
            if target == STATUS_CANCELLED and request.employee_email != actor.email:
                raise AuthorizationError("Only the requester can cancel this request")
            if not can_transition(request.status, target):
                raise InvalidTransitionError(
                    f"Only pending requests can be {ACTION_LABELS[target]} (current status: {request.status})"
                )
            request.status = target
        logger.info("request %s (id=%s, by=%s)", ACTION_LABELS[target], request_id, actor.email)
        return request

    @staticmethod
    def _next_id(requests: list[Request], now: datetime) -> int:
        # Millisecond timestamp, bumped past the newest id so ids stay unique and ordered.
        candidate = int(now.timestamp() * 1000)
        latest = max((r.id for r in requests), default=0)
        return max(candidate, latest + 1)
