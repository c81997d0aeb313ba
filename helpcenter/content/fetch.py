from __future__ import annotations

from sqlalchemy.orm import selectinload

from helpcenter.models.tables import Article, Project, Step, Tutorial

# Eager-load specifications, one per response shape. Serialization must never
# fall back to lazy loading, so every nested collection a schema renders is named here.
# Nested collection order comes from the relationship definitions.

PROJECT_TREE = (
    selectinload(Project.tutorials).selectinload(Tutorial.steps),
    selectinload(Project.articles),
)

TUTORIAL_TREE = (
    selectinload(Tutorial.project),
    selectinload(Tutorial.steps),
)

STEP_TREE = (selectinload(Step.tutorial).selectinload(Tutorial.project),)

ARTICLE_TREE = (selectinload(Article.project),)
