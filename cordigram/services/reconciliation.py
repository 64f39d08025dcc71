from __future__ import annotations

import logging

from sqlalchemy import func
from sqlalchemy.orm import Session

from ..core.celery_app import celery_app
from ..core.db import SessionLocal
from ..models.company import Company
from ..models.profile import Profile

logger = logging.getLogger(__name__)


def reconcile_member_counts(db: Session) -> int:
    """
    Recompute every company's member_count from the profiles that currently
    reference it as workplace.

    Workplace changes bump counters without a cross-row lock, so a failed or
    interleaved update can leave a count off by one. Returns the number of
    companies whose count was corrected.
    """
    actual = dict(
        db.query(Profile.workplace_company_id, func.count(Profile.id))
        .filter(Profile.workplace_company_id.isnot(None))
        .group_by(Profile.workplace_company_id)
        .all()
    )

    corrected = 0
    for company in db.query(Company).all():
        expected = actual.get(company.id, 0)
        if company.member_count != expected:
            logger.info(
                "Correcting member count %s -> %s",
                company.member_count,
                expected,
                extra={"company_id": str(company.id), "step": "reconcile"},
            )
            company.member_count = expected
            corrected += 1

    db.commit()
    return corrected


@celery_app.task(name="cordigram.services.reconciliation.reconcile_member_counts")
def reconcile_member_counts_task() -> int:
    """Periodic wrapper around reconcile_member_counts (see celery beat schedule)."""
    db: Session = SessionLocal()
    try:
        corrected = reconcile_member_counts(db)
        logger.info(
            "Member count reconciliation finished",
            extra={"step": "reconcile", "corrected": corrected},
        )
        return corrected
    except Exception:
        db.rollback()
        logger.exception(
            "Error during reconcile_member_counts",
            extra={"step": "reconcile"},
        )
        raise
    finally:
        db.close()
