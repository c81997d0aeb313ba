from __future__ import annotations

import logging
from collections.abc import Iterable

from sqlalchemy.orm import Session

from helpcenter.core.db import transactional
from helpcenter.models.tables import Step, Tutorial
from helpcenter.repositories import StepRepository, TutorialRepository
from helpcenter.schemas.content import StepDescriptor

log = logging.getLogger(__name__)


def _new_step(tutorial: Tutorial, descriptor: StepDescriptor) -> Step:
    # Fields are copied as given; a missing order is stored as NULL, not the list position.
    return Step(
        title=descriptor.title,
        order=descriptor.order,
        content=descriptor.content,
        tutorial_id=tutorial.id,
    )


def replace_steps(db: Session, *, tutorial_id: int, descriptors: Iterable[StepDescriptor]) -> list[Step]:
    """Replace the whole step list of a tutorial.

    Deletes every existing step, then inserts one step per descriptor in the
    given order, all in a single transaction. The tutorial row is locked for
    the duration (`SELECT ... FOR UPDATE`), so concurrent replacements of the
    same tutorial apply one after the other. On SQLite the lock is a no-op.

    If anything fails the transaction is rolled back and the previous steps
    are left untouched. An empty `descriptors` leaves the tutorial with no steps.

    Raises `NotFoundError` if the tutorial does not exist.
    """
    tutorials = TutorialRepository(db)
    steps = StepRepository(db)

    created: list[Step] = []
    with transactional(db):
        tutorial = tutorials.for_update(tutorial_id)
        removed = steps.delete_for_tutorial(tutorial.id)

        for descriptor in descriptors:
            created.append(steps.add(_new_step(tutorial, descriptor)))

    log.info("Replaced steps of tutorial %s: removed=%s inserted=%s", tutorial_id, removed, len(created))
    return created
