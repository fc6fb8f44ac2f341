import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException

from dailyposts import dependencies as deps
from dailyposts.schemas.blog import (
    Author,
    AuthorPosts,
    Category,
    CategoryPosts,
    Tag,
    TagPosts,
)
from dailyposts.services.posts_service import PostsService
from dailyposts.services.taxonomy_service import TaxonomyService

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/categories", response_model=List[Category])
def list_categories(service: TaxonomyService = Depends(deps.get_taxonomy_service)):
    try:
        return service.list_categories()
    except Exception as e:
        logger.error(f"Unexpected error listing categories: {e}")
        raise HTTPException(status_code=500, detail="Failed to retrieve categories")


@router.get("/categories/{slug}", response_model=CategoryPosts)
def get_category(
    slug: str,
    service: TaxonomyService = Depends(deps.get_taxonomy_service),
    posts: PostsService = Depends(deps.get_posts_service),
):
    try:
        category = service.get_category(slug)
        if not category:
            raise HTTPException(status_code=404, detail="Category not found")
        return CategoryPosts(category=category, posts=posts.posts_by_category(slug))
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Unexpected error retrieving category {slug}: {e}")
        raise HTTPException(status_code=500, detail="Failed to retrieve category")


@router.get("/tags", response_model=List[Tag])
def list_tags(service: TaxonomyService = Depends(deps.get_taxonomy_service)):
    try:
        return service.list_tags()
    except Exception as e:
        logger.error(f"Unexpected error listing tags: {e}")
        raise HTTPException(status_code=500, detail="Failed to retrieve tags")


@router.get("/tags/{slug}", response_model=TagPosts)
def get_tag(
    slug: str,
    service: TaxonomyService = Depends(deps.get_taxonomy_service),
    posts: PostsService = Depends(deps.get_posts_service),
):
    try:
        tag = service.get_tag(slug)
        if not tag:
            raise HTTPException(status_code=404, detail="Tag not found")
        return TagPosts(tag=tag, posts=posts.posts_by_tag(slug))
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Unexpected error retrieving tag {slug}: {e}")
        raise HTTPException(status_code=500, detail="Failed to retrieve tag")


@router.get("/authors", response_model=List[Author])
def list_authors(service: TaxonomyService = Depends(deps.get_taxonomy_service)):
    try:
        return service.list_authors()
    except Exception as e:
        logger.error(f"Unexpected error listing authors: {e}")
        raise HTTPException(status_code=500, detail="Failed to retrieve authors")


@router.get("/authors/{slug}", response_model=AuthorPosts)
def get_author(
    slug: str,
    service: TaxonomyService = Depends(deps.get_taxonomy_service),
    posts: PostsService = Depends(deps.get_posts_service),
):
    try:
        author = service.get_author(slug)
        if not author:
            raise HTTPException(status_code=404, detail="Author not found")
        return AuthorPosts(author=author, posts=posts.posts_by_author(slug))
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Unexpected error retrieving author {slug}: {e}")
        raise HTTPException(status_code=500, detail="Failed to retrieve author")
