from fastapi import Depends

from dailyposts.repos.posts_repo import FilesystemPostsRepo
from dailyposts.security import get_settings
from dailyposts.services.feed_service import FeedService
from dailyposts.services.lint_service import PostLinter
from dailyposts.services.posts_service import PostsService
from dailyposts.services.taxonomy_service import TaxonomyService


def get_posts_repo(current_settings=Depends(get_settings)):
    return FilesystemPostsRepo(current_settings.posts_dir)


def get_posts_service(
    repo=Depends(get_posts_repo),
    current_settings=Depends(get_settings),
):
    return PostsService(repo=repo, words_per_minute=current_settings.WORDS_PER_MINUTE)


def get_taxonomy_service(
    posts_service=Depends(get_posts_service),
    current_settings=Depends(get_settings),
):
    return TaxonomyService(
        posts_service,
        categories_dir=current_settings.categories_dir,
        authors_dir=current_settings.authors_dir,
    )


def get_feed_service(
    posts_service=Depends(get_posts_service),
    current_settings=Depends(get_settings),
):
    return FeedService(posts_service, current_settings)


def get_linter():
    return PostLinter()
