from __future__ import annotations

import json
from typing import Any

from sqlalchemy import select

from helpcenter.models.tables import Article, Project, Step, Tutorial
from helpcenter.repositories.base import Repository


def content_key(content: Any) -> str:
    """Canonical JSON text of a document. Type-strict: `true`, `1` and `1.0` all differ."""
    return json.dumps(content, sort_keys=True, ensure_ascii=False, separators=(",", ":"))


class ProjectRepository(Repository[Project]):
    model = Project
    entity = "Project"

    def first_or_create(self, *, name: str) -> Project:
        existing = self.db.scalars(
            select(Project).where(Project.name == name).order_by(Project.id).limit(1)
        ).first()
        if existing:
            return existing
        return self.add(Project(name=name))


class TutorialRepository(Repository[Tutorial]):
    model = Tutorial
    entity = "Tutorial"

    def first_or_create(self, *, name: str, project_id: int) -> Tutorial:
        existing = self.db.scalars(
            select(Tutorial)
            .where(Tutorial.name == name, Tutorial.project_id == project_id)
            .order_by(Tutorial.id)
            .limit(1)
        ).first()
        if existing:
            return existing
        return self.add(Tutorial(name=name, project_id=project_id))


class ArticleRepository(Repository[Article]):
    model = Article
    entity = "Article"

    def first_or_create(self, *, title: str, content: Any, project_id: int) -> Article:
        # JSON columns have no portable equality operator; compare documents here.
        key = content_key(content)
        candidates = self.db.scalars(
            select(Article)
            .where(Article.title == title, Article.project_id == project_id)
            .order_by(Article.id)
        ).all()
        for article in candidates:
            if content_key(article.content) == key:
                return article
        return self.add(Article(title=title, content=content, project_id=project_id))


class StepRepository(Repository[Step]):
    model = Step
    entity = "Step"

    def _ordering(self) -> tuple:
        return (Step.order.asc().nulls_last(), Step.id.asc())

    def first_or_create(self, *, title: str | None, order: int | None, content: Any, tutorial_id: int) -> Step:
        stmt = select(Step).where(Step.tutorial_id == tutorial_id).order_by(Step.id)
        stmt = stmt.where(Step.title.is_(None) if title is None else Step.title == title)
        stmt = stmt.where(Step.order.is_(None) if order is None else Step.order == order)
        key = content_key(content)
        for step in self.db.scalars(stmt).all():
            if content_key(step.content) == key:
                return step
        return self.add(Step(title=title, order=order, content=content, tutorial_id=tutorial_id))

    def delete_for_tutorial(self, tutorial_id: int) -> int:
        """Delete every step of a tutorial. Returns the number of rows removed."""
        steps = self.find_all(Step.tutorial_id == tutorial_id)
        for step in steps:
            self.db.delete(step)
        self.db.flush()
        return len(steps)
