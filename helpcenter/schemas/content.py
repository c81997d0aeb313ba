from __future__ import annotations

from datetime import datetime
from typing import Annotated, Any

from pydantic import BaseModel, ConfigDict, Field

from helpcenter.models.tables import NAME_MAX_LENGTH

# Rich-text document: a list of block nodes such as
# [{"type": "heading-one", "children": [{"text": "Title"}]}]. Stored verbatim.
Content = Annotated[
    Any,
    Field(
        description="Structured document (block nodes with `type` and nested `children`)",
        examples=[[{"type": "heading-one", "children": [{"text": "Welcome"}]}]],
    ),
]

Name = Annotated[str, Field(min_length=1, max_length=NAME_MAX_LENGTH)]
OptionalTitle = Annotated[str, Field(max_length=NAME_MAX_LENGTH)] | None
# Stored in a 32-bit INTEGER column.
Order = Annotated[int, Field(ge=-(2**31), le=2**31 - 1)]


# ---------------------------------------------------------------------------
# Requests
# ---------------------------------------------------------------------------


class ProjectIn(BaseModel):
    name: Name


class TutorialIn(BaseModel):
    name: Name


class ArticleIn(BaseModel):
    title: Name
    content: Content = None


class ArticlePatch(BaseModel):
    title: OptionalTitle = None
    content: Content = None


class StepIn(BaseModel):
    title: Name
    order: Order | None = None
    content: Content = None


class StepDescriptor(BaseModel):
    """One element of a steps-many body. Every field may be omitted."""

    title: OptionalTitle = None
    order: Order | None = None
    content: Content = None


class StepPatch(BaseModel):
    title: OptionalTitle = None
    order: Order | None = None
    content: Content = None


# ---------------------------------------------------------------------------
# Responses
# ---------------------------------------------------------------------------


class _Record(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    created_at: datetime
    updated_at: datetime


class ProjectOut(_Record):
    name: str


class TutorialOut(_Record):
    name: str
    project_id: int


class ArticleOut(_Record):
    title: str
    content: Content = None
    project_id: int


class StepOut(_Record):
    title: str | None = None
    order: int | None = None
    content: Content = None
    tutorial_id: int


class TutorialWithSteps(TutorialOut):
    steps: list[StepOut]


class ProjectTree(ProjectOut):
    tutorials: list[TutorialWithSteps]
    articles: list[ArticleOut]


class TutorialTree(TutorialWithSteps):
    project: ProjectOut


class TutorialWithProject(TutorialOut):
    project: ProjectOut


class StepTree(StepOut):
    tutorial: TutorialWithProject


class ArticleTree(ArticleOut):
    project: ProjectOut
