from datetime import date, datetime, timedelta

import pytest

from models import db
from models.approvals import RequestStatus
from models.bonus import BonusRequest
from models.leave import LeaveRequest
from models.overtime import OvertimeRequest
from models.rbac import Capability, Principal, Role
from workflow import (
    ApprovalWorkflow, AlreadyDecided, DuplicateRequest, Forbidden, InvalidDecision,
    InvalidState, NotFound, Unauthenticated, parse_decision
)


def leave_workflow():
    return ApprovalWorkflow(db.session, LeaveRequest, Capability.LEAVE)


def overtime_workflow():
    return ApprovalWorkflow(
        db.session, OvertimeRequest, Capability.OVERTIME,
        cancellable=True, duplicate_message="Overtime request already exists for this date",
    )


def leave_payload(**overrides):
    payload = {
        'leave_type': 'ANNUAL',
        'start_date': date(2024, 1, 10),
        'end_date': date(2024, 1, 12),
        'reason': 'travel',
    }
    payload.update(overrides)
    return payload


@pytest.fixture
def erin(employee):
    return employee.to_principal()


@pytest.fixture
def mona(manager):
    return manager.to_principal()


@pytest.fixture
def pete(project_manager):
    return project_manager.to_principal()


def test_submit_starts_pending_without_reviewer(erin):
    leave = leave_workflow().submit(erin, **leave_payload())

    assert leave.id is not None
    assert leave.status == RequestStatus.PENDING.value
    assert leave.requester_id == erin.id
    assert leave.reviewer_id is None
    assert leave.reviewed_at is None


def test_submit_requires_principal():
    with pytest.raises(Unauthenticated):
        leave_workflow().submit(None, **leave_payload())


def test_submit_checks_authoring_capability(app, erin, mona, make_user):
    beneficiary = make_user()
    workflow = ApprovalWorkflow(db.session, BonusRequest, Capability.BONUS, owner_column='user_id')
    payload = dict(user_id=beneficiary.id, amount=500.0, bonus_type='SPOT', reason='launch', period=date(2024, 3, 1))

    with pytest.raises(Forbidden):
        workflow.submit(erin, **payload)

    bonus = workflow.submit(mona, **payload)
    assert bonus.requester_id == mona.id
    assert workflow.list_mine(beneficiary.to_principal()) == [bonus]
    assert workflow.list_mine(mona) == []


def test_decide_sets_reviewer_and_timestamp(erin, mona):
    workflow = leave_workflow()
    leave = workflow.submit(erin, **leave_payload())

    decided = workflow.decide(mona, leave.id, 'APPROVED')

    assert decided.status == 'APPROVED'
    assert decided.reviewer_id == mona.id
    assert isinstance(decided.reviewed_at, datetime)


def test_project_manager_can_decide(erin, pete):
    workflow = leave_workflow()
    leave = workflow.submit(erin, **leave_payload())

    assert workflow.decide(pete, leave.id, 'rejected').status == 'REJECTED'


def test_second_decision_is_rejected_and_state_kept(erin, mona, pete):
    workflow = leave_workflow()
    leave = workflow.submit(erin, **leave_payload())
    workflow.decide(mona, leave.id, 'APPROVED')

    with pytest.raises(AlreadyDecided):
        workflow.decide(pete, leave.id, 'REJECTED')
    with pytest.raises(AlreadyDecided):
        workflow.decide(mona, leave.id, 'APPROVED')

    db.session.expire_all()
    stored = db.session.get(LeaveRequest, leave.id)
    assert stored.status == 'APPROVED'
    assert stored.reviewer_id == mona.id


def test_employee_cannot_decide_or_see_queue(erin):
    workflow = leave_workflow()
    leave = workflow.submit(erin, **leave_payload())

    with pytest.raises(Forbidden):
        workflow.decide(erin, leave.id, 'APPROVED')
    with pytest.raises(Forbidden):
        workflow.list_pending(erin)

    operator = Principal(id=erin.id, role=Role.OPERATOR)
    with pytest.raises(Forbidden):
        workflow.list_pending(operator)


def test_invalid_decision(erin, mona):
    workflow = leave_workflow()
    leave = workflow.submit(erin, **leave_payload())

    with pytest.raises(InvalidDecision):
        workflow.decide(mona, leave.id, 'MAYBE')
    with pytest.raises(InvalidDecision):
        workflow.decide(mona, leave.id, 'PENDING')
    with pytest.raises(InvalidDecision):
        workflow.decide(mona, leave.id, None)

    assert db.session.get(LeaveRequest, leave.id).status == 'PENDING'


def test_decide_unknown_request(mona):
    with pytest.raises(NotFound):
        leave_workflow().decide(mona, 9999, 'APPROVED')


def test_parse_decision():
    assert parse_decision(' approved ') is RequestStatus.APPROVED
    assert parse_decision('REJECTED') is RequestStatus.REJECTED
    with pytest.raises(InvalidDecision):
        parse_decision('MAYBE')


def _backdate(entity, created_at):
    entity.created_at = created_at
    db.session.commit()


def test_list_pending_is_oldest_first_and_pending_only(erin, mona, make_user):
    workflow = leave_workflow()
    other = make_user(name="Olly Other").to_principal()
    base = datetime(2024, 1, 1, 9, 0, 0)

    # ids ascend while created_at descends, so ordering must follow created_at
    t3 = workflow.submit(erin, **leave_payload(reason='third'))
    t2 = workflow.submit(other, **leave_payload(reason='second'))
    t1 = workflow.submit(erin, **leave_payload(reason='first'))
    decided = workflow.submit(other, **leave_payload(reason='decided'))
    _backdate(t1, base)
    _backdate(t2, base + timedelta(minutes=1))
    _backdate(t3, base + timedelta(minutes=2))
    _backdate(decided, base - timedelta(days=1))
    workflow.decide(mona, decided.id, 'REJECTED')

    pending = workflow.list_pending(mona)

    assert [p.id for p in pending] == [t1.id, t2.id, t3.id]
    assert all(p.status == 'PENDING' for p in pending)
    assert pending[0].to_dict(include_requester=True)['requester']['name'] == "Erin Employee"


def test_list_mine_is_own_requests_newest_first(erin, mona, make_user):
    workflow = leave_workflow()
    other = make_user().to_principal()
    base = datetime(2024, 2, 1, 9, 0, 0)

    older = workflow.submit(erin, **leave_payload(reason='older'))
    workflow.submit(other, **leave_payload(reason='not mine'))
    newer = workflow.submit(erin, **leave_payload(reason='newer'))
    _backdate(older, base)
    _backdate(newer, base + timedelta(hours=1))
    workflow.decide(mona, older.id, 'APPROVED')

    mine = workflow.list_mine(erin)

    assert [m.id for m in mine] == [newer.id, older.id]
    assert {m.requester_id for m in mine} == {erin.id}


def test_list_all_is_manager_only(erin, mona, pete):
    workflow = leave_workflow()
    workflow.submit(erin, **leave_payload())

    assert len(workflow.list_all(mona)) == 1
    with pytest.raises(Forbidden):
        workflow.list_all(pete)


def test_overtime_duplicate_date_rejected(erin):
    workflow = overtime_workflow()
    workflow.submit(erin, date=date(2024, 5, 1), hours=2.0, reason='release')

    with pytest.raises(DuplicateRequest):
        workflow.submit(erin, date=date(2024, 5, 1), hours=3.0, reason='again')

    assert len(workflow.list_mine(erin)) == 1


def test_overtime_same_date_different_requesters(erin, make_user):
    workflow = overtime_workflow()
    other = make_user().to_principal()

    workflow.submit(erin, date=date(2024, 5, 1), hours=2.0, reason='release')
    workflow.submit(other, date=date(2024, 5, 1), hours=2.0, reason='release')


def test_overtime_remarks_recorded_on_decision(erin, mona):
    workflow = overtime_workflow()
    request_ = workflow.submit(erin, date=date(2024, 5, 2), hours=1.5, reason='hotfix')

    decided = workflow.decide(mona, request_.id, 'REJECTED', remarks='not pre-approved')

    assert decided.remarks == 'not pre-approved'


def test_cancel_pending_overtime(erin):
    workflow = overtime_workflow()
    request_ = workflow.submit(erin, date=date(2024, 5, 3), hours=1.0, reason='deploy')
    request_id = request_.id

    workflow.cancel(erin, request_id)

    assert db.session.get(OvertimeRequest, request_id) is None
    # the date is free again once the pending request is gone
    workflow.submit(erin, date=date(2024, 5, 3), hours=1.0, reason='deploy')


def test_cancel_rules(erin, mona, make_user):
    workflow = overtime_workflow()
    request_ = workflow.submit(erin, date=date(2024, 5, 4), hours=1.0, reason='deploy')

    with pytest.raises(Forbidden):
        workflow.cancel(make_user().to_principal(), request_.id)
    with pytest.raises(NotFound):
        workflow.cancel(erin, 9999)

    workflow.decide(mona, request_.id, 'APPROVED')
    with pytest.raises(InvalidState):
        workflow.cancel(erin, request_.id)
    assert db.session.get(OvertimeRequest, request_.id) is not None


def test_cancel_not_supported_for_leave(erin):
    workflow = leave_workflow()
    leave = workflow.submit(erin, **leave_payload())

    with pytest.raises(Forbidden):
        workflow.cancel(erin, leave.id)
