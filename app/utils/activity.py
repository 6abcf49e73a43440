"""Activity logging utilities."""

from __future__ import annotations

from flask import current_app
from sqlalchemy.exc import SQLAlchemyError

from app.models import ActivityLog, db


def log_activity(activity: str) -> None:
    """Record an activity in the audit trail and the application log.

    Failures to write the audit row are logged and rolled back; they never
    undo the mutation that was already committed.
    """
    current_app.logger.info(activity)
    db.session.add(ActivityLog(activity=activity))
    try:
        db.session.commit()
    except SQLAlchemyError:
        db.session.rollback()
        current_app.logger.exception("Failed to record activity: %s", activity)
