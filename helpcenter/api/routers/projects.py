from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session

from helpcenter.api.deps import get_db
from helpcenter.content.fetch import PROJECT_TREE
from helpcenter.core.db import transactional
from helpcenter.repositories import ProjectRepository
from helpcenter.schemas.content import ProjectIn, ProjectOut, ProjectTree

log = logging.getLogger(__name__)

router = APIRouter(tags=["Project"])


@router.get("/projects", response_model=list[ProjectTree], summary="List projects")
def list_projects(db: Session = Depends(get_db)) -> list[ProjectTree]:
    """Every project with its tutorials (and their steps) and its articles."""
    projects = ProjectRepository(db).find_all(options=PROJECT_TREE)
    return [ProjectTree.model_validate(p) for p in projects]


@router.post("/projects", response_model=ProjectOut, summary="Store new project")
def create_project(payload: ProjectIn, db: Session = Depends(get_db)) -> ProjectOut:
    """Returns the existing project when one with the same name is already stored."""
    with transactional(db):
        project = ProjectRepository(db).first_or_create(name=payload.name)
    return ProjectOut.model_validate(project)


@router.get("/projects/{project_id}", response_model=ProjectTree, summary="Get specific project")
def get_project(project_id: int, db: Session = Depends(get_db)) -> ProjectTree:
    project = ProjectRepository(db).get(project_id, *PROJECT_TREE)
    return ProjectTree.model_validate(project)


@router.put("/projects/{project_id}", response_model=ProjectOut, summary="Update existing project")
def update_project(project_id: int, payload: ProjectIn, db: Session = Depends(get_db)) -> ProjectOut:
    projects = ProjectRepository(db)
    with transactional(db):
        project = projects.get(project_id)
        projects.update(project, {"name": payload.name}, skip_blank=False)
    return ProjectOut.model_validate(project)


@router.delete("/projects/{project_id}", status_code=204, response_class=Response, summary="Delete project")
def delete_project(project_id: int, db: Session = Depends(get_db)) -> Response:
    """Also deletes the project's tutorials, their steps, and its articles."""
    projects = ProjectRepository(db)
    with transactional(db):
        projects.delete(projects.get(project_id))
    log.info("Deleted project %s with its tutorials and articles", project_id)
    return Response(status_code=204)
