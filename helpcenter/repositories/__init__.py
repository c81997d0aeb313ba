from helpcenter.repositories.base import Repository, is_blank
from helpcenter.repositories.content import (
    ArticleRepository,
    ProjectRepository,
    StepRepository,
    TutorialRepository,
)

__all__ = [
    "ArticleRepository",
    "ProjectRepository",
    "Repository",
    "StepRepository",
    "TutorialRepository",
    "is_blank",
]
