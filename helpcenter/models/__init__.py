from helpcenter.models.base import Base
from helpcenter.models.tables import Article, Project, Step, Tutorial

__all__ = ["Article", "Base", "Project", "Step", "Tutorial"]
