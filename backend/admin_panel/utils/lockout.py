"""Failed-login counting and temporary account lock"""
from datetime import datetime, timedelta
from typing import Optional

from sqlalchemy import and_, case, or_, update
from sqlalchemy.orm import Session

from admin_panel.config import settings
from admin_panel.models.admin import Admin
from admin_panel.utils.time import utcnow


def is_account_locked(admin: Admin, now: Optional[datetime] = None) -> bool:
    """True iff a lock is set and has not yet expired"""
    now = now or utcnow()
    return admin.lock_until is not None and admin.lock_until > now


def increment_login_attempts(db: Session, admin: Admin) -> None:
    """Record one failed login for ``admin`` and lock the account at the threshold.

    The counter is bumped by a single conditional UPDATE so that concurrent
    failures for the same account cannot under-count. A lock is applied when
    the new count reaches ``MAX_LOGIN_ATTEMPTS`` and no lock is active. The
    counter itself is only cleared by :func:`reset_login_attempts`, so after an
    expired lock the next failure locks the account again.

    Commits, then refreshes ``admin`` from the database.
    """
    now = utcnow()
    new_lock = now + timedelta(minutes=settings.LOCK_TIME_MINUTES)
    no_active_lock = or_(Admin.lock_until.is_(None), Admin.lock_until <= now)

    db.execute(
        update(Admin)
        .where(Admin.id == admin.id)
        .values(
            login_attempts=Admin.login_attempts + 1,
            lock_until=case(
                (and_(Admin.login_attempts + 1 >= settings.MAX_LOGIN_ATTEMPTS, no_active_lock), new_lock),
                else_=Admin.lock_until,
            ),
        )
        .execution_options(synchronize_session=False)
    )
    db.commit()
    db.refresh(admin)


def reset_login_attempts(db: Session, admin: Admin) -> None:
    """Zero the failed-login counter and clear any lock. Commits."""
    admin.login_attempts = 0
    admin.lock_until = None
    db.commit()
