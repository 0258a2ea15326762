"""
Per-user, per-day productivity counters.

Every write goes through record_daily(), which adds to the day's row in one
atomic statement so two requests finishing at once cannot lose an increment
or create a second row for the same day.
"""
import logging
from datetime import date
from typing import Iterable

from sqlalchemy.dialects import postgresql, sqlite
from sqlmodel import Session, select

from models import ProductivityStats, utcnow

logger = logging.getLogger(__name__)

COUNTERS = (
    "tasks_completed",
    "tasks_created",
    "total_focus_time",
    "pomodoro_sessions",
    "events_attended",
)

_UPSERT_DIALECTS = {
    "sqlite": sqlite.insert,
    "postgresql": postgresql.insert,
}


def today() -> date:
    return utcnow().date()


def record_daily(db: Session, user_id: int, day: date, **deltas: int) -> None:
    """Add deltas to the (user, day) stats row, creating it when missing.

    Does not commit; the caller's transaction decides.
    """
    unknown = set(deltas) - set(COUNTERS)
    if unknown:
        raise ValueError(f"Unknown stats counters: {sorted(unknown)}")
    if not deltas:
        return

    insert = _UPSERT_DIALECTS.get(db.get_bind().dialect.name)
    if insert is None:
        _record_daily_locked(db, user_id, day, deltas)
    else:
        table = ProductivityStats.__table__
        values = {name: deltas.get(name, 0) for name in COUNTERS}
        statement = (
            insert(table)
            .values(user_id=user_id, date=day, created_at=utcnow(), **values)
            .on_conflict_do_update(
                index_elements=[table.c.user_id, table.c.date],
                set_={name: table.c[name] + delta for name, delta in deltas.items()},
            )
        )
        db.flush()
        db.exec(statement)
        # Rows already loaded in this session are stale after a core-level write.
        db.expire_all()
    logger.info("Stats for user %s on %s: %s", user_id, day.isoformat(), deltas)


def _record_daily_locked(db: Session, user_id: int, day: date, deltas: dict) -> None:
    statement = (
        select(ProductivityStats)
        .where(ProductivityStats.user_id == user_id, ProductivityStats.date == day)
        .with_for_update()
    )
    row = db.exec(statement).one_or_none()
    if row is None:
        db.add(ProductivityStats(user_id=user_id, date=day, **deltas))
    else:
        for name, delta in deltas.items():
            setattr(row, name, getattr(ProductivityStats, name) + delta)
        db.add(row)
    db.flush()


def get_productivity_stats(
    db: Session, user_id: int, start_date: date, end_date: date
) -> list[ProductivityStats]:
    statement = (
        select(ProductivityStats)
        .where(
            ProductivityStats.user_id == user_id,
            ProductivityStats.date >= start_date,
            ProductivityStats.date <= end_date,
        )
        .order_by(ProductivityStats.date)
    )
    return list(db.exec(statement).all())


def summarize(rows: Iterable[ProductivityStats]) -> dict:
    """Totals across a run of daily rows."""
    totals = {name: 0 for name in COUNTERS}
    days = 0
    for row in rows:
        days += 1
        for name in COUNTERS:
            totals[name] += getattr(row, name)
    totals["days"] = days
    return totals
