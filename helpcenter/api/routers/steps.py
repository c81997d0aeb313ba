from __future__ import annotations

from fastapi import APIRouter, Body, Depends, Response
from sqlalchemy.orm import Session

from helpcenter.api.deps import get_db
from helpcenter.content.fetch import STEP_TREE
from helpcenter.content.steps import replace_steps
from helpcenter.core.db import transactional
from helpcenter.models.tables import Step
from helpcenter.repositories import StepRepository, TutorialRepository
from helpcenter.schemas.content import StepDescriptor, StepIn, StepOut, StepPatch, StepTree

router = APIRouter(tags=["Step"])


@router.get(
    "/tutorials/{tutorial_id}/steps",
    response_model=list[StepTree],
    summary="List steps of a tutorial",
)
def list_steps(tutorial_id: int, db: Session = Depends(get_db)) -> list[StepTree]:
    """Steps ordered by `order` ascending (steps without an order last), then by creation."""
    tutorial = TutorialRepository(db).get(tutorial_id)
    steps = StepRepository(db).find_all(Step.tutorial_id == tutorial.id, options=STEP_TREE)
    return [StepTree.model_validate(s) for s in steps]


@router.post(
    "/tutorials/{tutorial_id}/steps",
    response_model=StepOut,
    summary="Store new step for a tutorial",
)
def create_step(tutorial_id: int, payload: StepIn, db: Session = Depends(get_db)) -> StepOut:
    with transactional(db):
        # Parent row lock: concurrent identical creates under one parent see each other.
        tutorial = TutorialRepository(db).for_update(tutorial_id)
        step = StepRepository(db).first_or_create(
            title=payload.title,
            order=payload.order,
            content=payload.content,
            tutorial_id=tutorial.id,
        )
    return StepOut.model_validate(step)


@router.post(
    "/tutorials/{tutorial_id}/steps-many",
    response_model=list[StepOut],
    summary="Replace all steps of a tutorial",
)
def store_many_steps(
    tutorial_id: int,
    payload: list[StepDescriptor] = Body(...),
    db: Session = Depends(get_db),
) -> list[StepOut]:
    """Deletes every existing step of the tutorial and stores the given ones, in order.

    `order` values are stored as sent; they are not derived from array position.
    An empty array removes all steps.
    """
    steps = replace_steps(db, tutorial_id=tutorial_id, descriptors=payload)
    return [StepOut.model_validate(s) for s in steps]


@router.get("/steps/{step_id}", response_model=StepTree, summary="Get specific step")
def get_step(step_id: int, db: Session = Depends(get_db)) -> StepTree:
    step = StepRepository(db).get(step_id, *STEP_TREE)
    return StepTree.model_validate(step)


@router.patch("/steps/{step_id}", response_model=StepOut, summary="Update existing step")
def update_step(step_id: int, payload: StepPatch, db: Session = Depends(get_db)) -> StepOut:
    """Only non-empty fields overwrite; omitted, null or empty fields keep their stored value."""
    steps = StepRepository(db)
    with transactional(db):
        step = steps.get(step_id)
        steps.update(step, payload.model_dump())
    return StepOut.model_validate(step)


@router.delete("/steps/{step_id}", status_code=204, response_class=Response, summary="Delete step")
def delete_step(step_id: int, db: Session = Depends(get_db)) -> Response:
    steps = StepRepository(db)
    with transactional(db):
        steps.delete(steps.get(step_id))
    return Response(status_code=204)
