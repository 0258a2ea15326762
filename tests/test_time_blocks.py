from datetime import datetime, timedelta, timezone

import pytest
from sqlmodel import select

from conftest import add_event, add_task
from errors import NotFoundError, ValidationError
from models import TimeBlock
from services.tasks import delete_task
from services.time_blocks import create_time_block, delete_time_block, get_time_blocks


def at(hour, minute=0):
    return datetime(2024, 1, 15, hour, minute)


def test_create_time_block_for_task(db, user):
    task = add_task(db, user)
    block = create_time_block(
        db, user.id, "Focus Time Block", at(9), at(10, 30), task_id=task.id, color="#FF5733"
    )

    assert block.id is not None
    assert block.user_id == user.id
    assert block.task_id == task.id
    assert block.event_id is None
    assert block.start_time == at(9)
    assert block.end_time == at(10, 30)
    assert block.color == "#FF5733"
    assert isinstance(block.created_at, datetime)

    stored = db.exec(select(TimeBlock).where(TimeBlock.id == block.id)).one()
    assert stored.title == "Focus Time Block"


def test_create_time_block_for_event(db, user):
    event = add_event(db, user)
    block = create_time_block(db, user.id, "Prep", at(16), at(17), event_id=event.id)
    assert block.event_id == event.id
    assert block.task_id is None
    assert block.color is None


def test_aware_datetimes_are_stored_as_utc(db, user):
    plus_two = timezone(timedelta(hours=2))
    block = create_time_block(
        db,
        user.id,
        "Abroad",
        datetime(2024, 1, 15, 11, 0, tzinfo=plus_two),
        datetime(2024, 1, 15, 12, 0, tzinfo=plus_two),
    )
    assert block.start_time == at(9)
    assert block.end_time == at(10)


def test_unknown_user_is_rejected(db):
    with pytest.raises(NotFoundError, match="(?i)user with id 99999 not found"):
        create_time_block(db, 99999, "Nope", at(9), at(10))


def test_unknown_task_is_rejected(db, user):
    with pytest.raises(NotFoundError, match="(?i)task not found"):
        create_time_block(db, user.id, "Nope", at(9), at(10), task_id=99999)


def test_task_of_another_user_is_rejected(db, user, other_user):
    foreign = add_task(db, other_user)
    with pytest.raises(NotFoundError, match="(?i)task not found"):
        create_time_block(db, user.id, "Nope", at(9), at(10), task_id=foreign.id)


def test_unknown_event_is_rejected(db, user):
    with pytest.raises(NotFoundError, match="(?i)event not found"):
        create_time_block(db, user.id, "Nope", at(9), at(10), event_id=99999)


def test_linking_both_task_and_event_is_rejected(db, user):
    task = add_task(db, user)
    event = add_event(db, user)
    with pytest.raises(ValidationError, match="not both"):
        create_time_block(db, user.id, "Both", at(9), at(10), task_id=task.id, event_id=event.id)


def test_end_before_start_is_rejected(db, user):
    with pytest.raises(ValidationError, match="(?i)end time must be after start time"):
        create_time_block(db, user.id, "Backwards", at(10), at(9))


def test_zero_length_block_is_rejected(db, user):
    with pytest.raises(ValidationError, match="(?i)end time must be after start time"):
        create_time_block(db, user.id, "Empty", at(10), at(10))


def test_adjacent_blocks_do_not_conflict(db, user):
    create_time_block(db, user.id, "A", at(10), at(12))
    create_time_block(db, user.id, "B", at(12), at(14))
    create_time_block(db, user.id, "Before", at(8), at(10))

    assert len(get_time_blocks(db, user.id)) == 3


@pytest.mark.parametrize(
    "start, end",
    [
        (at(11), at(13)),  # straddles the A/B boundary
        (at(9), at(10, 30)),  # tail into A
        (at(13), at(15)),  # head into B
        (at(10, 30), at(11)),  # inside A
        (at(9), at(15)),  # covers both
        (at(10), at(12)),  # identical to A
    ],
)
def test_overlapping_block_is_rejected(db, user, start, end):
    create_time_block(db, user.id, "A", at(10), at(12))
    create_time_block(db, user.id, "B", at(12), at(14))

    with pytest.raises(ValidationError, match="(?i)conflicts with existing time blocks"):
        create_time_block(db, user.id, "C", start, end)

    assert len(get_time_blocks(db, user.id)) == 2


def test_other_users_never_conflict(db, user, other_user):
    create_time_block(db, user.id, "Mine", at(10), at(12))
    theirs = create_time_block(db, other_user.id, "Theirs", at(10), at(12))
    assert theirs.user_id == other_user.id


def test_get_time_blocks_filters_by_range_and_orders(db, user, other_user):
    create_time_block(db, user.id, "Late", at(15), at(16))
    create_time_block(db, user.id, "Early", at(8), at(9))
    create_time_block(db, user.id, "Spills over", at(16, 30), at(18))
    create_time_block(db, other_user.id, "Not mine", at(8), at(9))

    blocks = get_time_blocks(db, user.id, start_date=at(7), end_date=at(17))
    assert [b.title for b in blocks] == ["Early", "Late"]


def test_delete_time_block_is_scoped_to_owner(db, user, other_user):
    block = create_time_block(db, user.id, "Mine", at(10), at(11))
    assert delete_time_block(db, other_user.id, block.id) is False
    assert delete_time_block(db, user.id, block.id) is True
    assert get_time_blocks(db, user.id) == []


def test_blocks_cascade_when_task_is_deleted(db, user):
    task = add_task(db, user)
    create_time_block(db, user.id, "Linked", at(10), at(11), task_id=task.id)
    create_time_block(db, user.id, "Free", at(12), at(13))

    delete_task(db, user.id, task.id)
    db.expire_all()

    assert [b.title for b in get_time_blocks(db, user.id)] == ["Free"]
