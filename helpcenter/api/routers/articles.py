from __future__ import annotations

from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session

from helpcenter.api.deps import get_db
from helpcenter.content.fetch import ARTICLE_TREE
from helpcenter.core.db import transactional
from helpcenter.models.tables import Article
from helpcenter.repositories import ArticleRepository, ProjectRepository
from helpcenter.schemas.content import ArticleIn, ArticleOut, ArticlePatch, ArticleTree

router = APIRouter(tags=["Article"])


@router.get(
    "/projects/{project_id}/articles",
    response_model=list[ArticleTree],
    summary="List articles of a project",
)
def list_articles(project_id: int, db: Session = Depends(get_db)) -> list[ArticleTree]:
    project = ProjectRepository(db).get(project_id)
    articles = ArticleRepository(db).find_all(Article.project_id == project.id, options=ARTICLE_TREE)
    return [ArticleTree.model_validate(a) for a in articles]


@router.post(
    "/projects/{project_id}/articles",
    response_model=ArticleOut,
    summary="Store new article for a project",
)
def create_article(project_id: int, payload: ArticleIn, db: Session = Depends(get_db)) -> ArticleOut:
    with transactional(db):
        # Parent row lock: concurrent identical creates under one parent see each other.
        project = ProjectRepository(db).for_update(project_id)
        article = ArticleRepository(db).first_or_create(
            title=payload.title,
            content=payload.content,
            project_id=project.id,
        )
    return ArticleOut.model_validate(article)


@router.get("/articles/{article_id}", response_model=ArticleTree, summary="Get specific article")
def get_article(article_id: int, db: Session = Depends(get_db)) -> ArticleTree:
    article = ArticleRepository(db).get(article_id, *ARTICLE_TREE)
    return ArticleTree.model_validate(article)


@router.patch("/articles/{article_id}", response_model=ArticleOut, summary="Update existing article")
def update_article(article_id: int, payload: ArticlePatch, db: Session = Depends(get_db)) -> ArticleOut:
    articles = ArticleRepository(db)
    with transactional(db):
        article = articles.get(article_id)
        articles.update(article, payload.model_dump())
    return ArticleOut.model_validate(article)


@router.delete("/articles/{article_id}", status_code=204, response_class=Response, summary="Delete article")
def delete_article(article_id: int, db: Session = Depends(get_db)) -> Response:
    articles = ArticleRepository(db)
    with transactional(db):
        articles.delete(articles.get(article_id))
    return Response(status_code=204)
