from __future__ import annotations

from typing import Any

from sqlalchemy import ForeignKey, Index, Integer, String
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.types import JSON

# Use JSONB on Postgres, fallback to JSON for SQLite/test environments.
JSONType = JSON(none_as_null=True).with_variant(JSONB(none_as_null=True), "postgresql")

from helpcenter.models.base import Base, TimestampMixin

NAME_MAX_LENGTH = 255


class Project(TimestampMixin, Base):
    __tablename__ = "projects"
    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(NAME_MAX_LENGTH), nullable=False, index=True)

    tutorials: Mapped[list["Tutorial"]] = relationship(
        back_populates="project",
        order_by="Tutorial.id",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    articles: Mapped[list["Article"]] = relationship(
        back_populates="project",
        order_by="Article.id",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )


class Tutorial(TimestampMixin, Base):
    __tablename__ = "tutorials"
    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(NAME_MAX_LENGTH), nullable=False)
    project_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("projects.id", ondelete="CASCADE"), nullable=False, index=True
    )

    project: Mapped[Project] = relationship(back_populates="tutorials")
    # Display sequence: `order` ascending, unordered steps last, insertion order on ties.
    steps: Mapped[list["Step"]] = relationship(
        back_populates="tutorial",
        order_by=lambda: (Step.order.asc().nulls_last(), Step.id.asc()),
        cascade="all, delete-orphan",
        passive_deletes=True,
    )


class Article(TimestampMixin, Base):
    __tablename__ = "articles"
    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(String(NAME_MAX_LENGTH), nullable=False)
    content: Mapped[Any | None] = mapped_column(JSONType, nullable=True)
    project_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("projects.id", ondelete="CASCADE"), nullable=False, index=True
    )

    project: Mapped[Project] = relationship(back_populates="articles")


class Step(TimestampMixin, Base):
    __tablename__ = "steps"
    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[str | None] = mapped_column(String(NAME_MAX_LENGTH), nullable=True)
    # No uniqueness on (tutorial_id, order).
    order: Mapped[int | None] = mapped_column(Integer, nullable=True)
    content: Mapped[Any | None] = mapped_column(JSONType, nullable=True)
    tutorial_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("tutorials.id", ondelete="CASCADE"), nullable=False, index=True
    )

    tutorial: Mapped[Tutorial] = relationship(back_populates="steps")

    __table_args__ = (Index("ix_steps_tutorial_order", "tutorial_id", "order"),)
