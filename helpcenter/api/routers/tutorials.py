from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session

from helpcenter.api.deps import get_db
from helpcenter.content.fetch import TUTORIAL_TREE
from helpcenter.core.db import transactional
from helpcenter.models.tables import Tutorial
from helpcenter.repositories import ProjectRepository, TutorialRepository
from helpcenter.schemas.content import TutorialIn, TutorialOut, TutorialTree

log = logging.getLogger(__name__)

router = APIRouter(tags=["Tutorial"])


@router.get(
    "/projects/{project_id}/tutorials",
    response_model=list[TutorialTree],
    summary="List tutorials of a project",
)
def list_tutorials(project_id: int, db: Session = Depends(get_db)) -> list[TutorialTree]:
    project = ProjectRepository(db).get(project_id)
    tutorials = TutorialRepository(db).find_all(Tutorial.project_id == project.id, options=TUTORIAL_TREE)
    return [TutorialTree.model_validate(t) for t in tutorials]


@router.post(
    "/projects/{project_id}/tutorials",
    response_model=TutorialOut,
    summary="Store new tutorial for a project",
)
def create_tutorial(project_id: int, payload: TutorialIn, db: Session = Depends(get_db)) -> TutorialOut:
    with transactional(db):
        # Parent row lock: concurrent identical creates under one parent see each other.
        project = ProjectRepository(db).for_update(project_id)
        tutorial = TutorialRepository(db).first_or_create(name=payload.name, project_id=project.id)
    return TutorialOut.model_validate(tutorial)


@router.get("/tutorials/{tutorial_id}", response_model=TutorialTree, summary="Get specific tutorial")
def get_tutorial(tutorial_id: int, db: Session = Depends(get_db)) -> TutorialTree:
    tutorial = TutorialRepository(db).get(tutorial_id, *TUTORIAL_TREE)
    return TutorialTree.model_validate(tutorial)


@router.put("/tutorials/{tutorial_id}", response_model=TutorialOut, summary="Update existing tutorial")
def update_tutorial(tutorial_id: int, payload: TutorialIn, db: Session = Depends(get_db)) -> TutorialOut:
    tutorials = TutorialRepository(db)
    with transactional(db):
        tutorial = tutorials.get(tutorial_id)
        tutorials.update(tutorial, {"name": payload.name}, skip_blank=False)
    return TutorialOut.model_validate(tutorial)


@router.delete("/tutorials/{tutorial_id}", status_code=204, response_class=Response, summary="Delete tutorial")
def delete_tutorial(tutorial_id: int, db: Session = Depends(get_db)) -> Response:
    """Also deletes the tutorial's steps."""
    tutorials = TutorialRepository(db)
    with transactional(db):
        tutorials.delete(tutorials.get(tutorial_id))
    log.info("Deleted tutorial %s with its steps", tutorial_id)
    return Response(status_code=204)
