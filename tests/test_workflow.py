from datetime import date, datetime

import pytest

from request_desk.core.errors import (
    AuthorizationError,
    InvalidTransitionError,
    NotFoundError,
    ValidationError,
)
from request_desk.core.request_rules import can_transition, is_terminal
from request_desk.services.request_workflow import RequestWorkflow

LAPTOPS = [{"name": "Laptop", "qty": 2}]


def test_submit_then_approve_once(desk, admin, user):
    request = desk.workflow.submit(user, "Equipment", LAPTOPS)

    assert request.status == "Pending"
    assert request.date == date.today()
    assert request.employee_email == "user@example.com"
    assert [(i.name, i.qty) for i in request.items] == [("Laptop", 2)]

    approved = desk.workflow.approve(request.id, admin)
    assert approved.status == "Approved"

    with pytest.raises(InvalidTransitionError):
        desk.workflow.approve(request.id, admin)
    assert desk.store.snapshot.find_request(request.id).status == "Approved"


@pytest.mark.parametrize("first", ["approve", "reject"])
@pytest.mark.parametrize("second", ["approve", "reject"])
def test_terminal_status_is_final_for_admin_actions(desk, admin, user, first, second):
    request = desk.workflow.submit(user, "Supplies", LAPTOPS)
    done = getattr(desk.workflow, first)(request.id, admin)

    with pytest.raises(InvalidTransitionError):
        getattr(desk.workflow, second)(request.id, admin)
    with pytest.raises(InvalidTransitionError):
        desk.workflow.cancel(request.id, user)
    assert desk.store.snapshot.find_request(request.id).status == done.status


def test_cancel_by_owner_only(desk, admin, user, other_user):
    request = desk.workflow.submit(user, "Supplies", LAPTOPS)

    with pytest.raises(AuthorizationError):
        desk.workflow.cancel(request.id, other_user)
    with pytest.raises(AuthorizationError):
        desk.workflow.cancel(request.id, admin)

    cancelled = desk.workflow.cancel(request.id, user)
    assert cancelled.status == "Cancelled"

    with pytest.raises(InvalidTransitionError):
        desk.workflow.approve(request.id, admin)
    assert desk.store.snapshot.find_request(request.id).status == "Cancelled"


def test_non_admin_cannot_approve_or_reject(desk, user):
    request = desk.workflow.submit(user, "Supplies", LAPTOPS)
    with pytest.raises(AuthorizationError):
        desk.workflow.approve(request.id, user)
    with pytest.raises(AuthorizationError):
        desk.workflow.reject(request.id, user)
    assert desk.store.snapshot.find_request(request.id).status == "Pending"


def test_unknown_request(desk, admin, user):
    with pytest.raises(NotFoundError):
        desk.workflow.approve(123, admin)
    with pytest.raises(NotFoundError):
        desk.workflow.cancel(123, user)


@pytest.mark.parametrize(
    "items",
    [
        [],
        [{"name": "", "qty": None}],
        [{"name": "Laptop", "qty": 0}],
        [{"name": "Laptop", "qty": -1}],
        [{"name": "", "qty": 3}],
        [{"name": "Laptop", "qty": 1}, {"name": "Mouse", "qty": None}],
    ],
)
def test_submit_rejects_bad_items(desk, user, items):
    with pytest.raises(ValidationError):
        desk.workflow.submit(user, "Equipment", items)
    assert desk.store.snapshot.requests == []


def test_submit_skips_blank_rows(desk, user):
    request = desk.workflow.submit(
        user, "Equipment", [{"name": "Laptop", "qty": 1}, {"name": "  ", "qty": None}]
    )
    assert [i.name for i in request.items] == ["Laptop"]


def test_submit_requires_type(desk, user):
    with pytest.raises(ValidationError):
        desk.workflow.submit(user, " ", LAPTOPS)


def test_ids_unique_within_same_millisecond(desk, user):
    frozen = datetime(2024, 3, 4, 10, 30, 0)
    workflow = RequestWorkflow(desk.store, now=lambda: frozen)

    first = workflow.submit(user, "Equipment", LAPTOPS)
    second = workflow.submit(user, "Equipment", LAPTOPS)

    assert first.id == int(frozen.timestamp() * 1000)
    assert second.id == first.id + 1
    assert first.date == date(2024, 3, 4)


def test_listing_is_scoped(desk, admin, user, other_user):
    mine = desk.workflow.submit(user, "Equipment", LAPTOPS)
    theirs = desk.workflow.submit(other_user, "Supplies", LAPTOPS)

    assert [r.id for r in desk.workflow.list_mine(user.email)] == [mine.id]
    assert [r.id for r in desk.workflow.list_all(admin)] == [mine.id, theirs.id]
    with pytest.raises(AuthorizationError):
        desk.workflow.list_all(user)


def test_get_visible_to_owner_and_admin(desk, admin, user, other_user):
    request = desk.workflow.submit(user, "Equipment", LAPTOPS)
    assert desk.workflow.get(request.id, user).id == request.id
    assert desk.workflow.get(request.id, admin).id == request.id
    with pytest.raises(AuthorizationError):
        desk.workflow.get(request.id, other_user)


def test_transition_rules():
    assert can_transition("Pending", "Approved")
    assert can_transition("Pending", "Cancelled")
    assert not can_transition("Approved", "Rejected")
    assert not can_transition("Cancelled", "Pending")
    assert not is_terminal("Pending")
    assert all(is_terminal(s) for s in ("Approved", "Rejected", "Cancelled"))
