import datetime
import logging
from typing import Callable, List, Optional

from pydantic import ValidationError

from dailyposts.exceptions import ContentError
from dailyposts.schemas.blog import PostDetail, PostSummary
from dailyposts.services.content_parser import RawDocument, parse_document
from dailyposts.services.markdown_renderer import MarkdownRenderer
from dailyposts.services.slugs import name_to_slug, tag_to_slug
from dailyposts.utils import (
    calculate_reading_time,
    convert_date_to_string,
    parse_timestamp,
)

logger = logging.getLogger(__name__)

_OLDEST = datetime.datetime.min.replace(tzinfo=datetime.timezone.utc)


class PostsService:
    def __init__(
        self,
        repo,
        renderer: MarkdownRenderer | None = None,
        words_per_minute: int = 200,
    ):
        self.repo = repo
        self.renderer = renderer or MarkdownRenderer()
        self.words_per_minute = words_per_minute

    def list_posts(self) -> List[PostSummary]:
        return self._parse_all(include_content=False)

    def list_post_details(self) -> List[PostDetail]:
        """Every post with its body and rendered HTML, newest first."""
        return self._parse_all(include_content=True)

    def get_post(self, slug: str) -> Optional[PostDetail]:
        for doc in self.repo.get_documents(slug):
            post_data = parse_post_data(
                doc, include_content=True, words_per_minute=self.words_per_minute
            )
            if post_data and post_data["slug"] == slug:
                return self._build(doc, post_data, include_content=True)
        return None

    def posts_by_category(self, slug: str) -> List[PostSummary]:
        return self._filter(
            lambda p: p.category is not None and p.category.slug == slug
        )

    def posts_by_tag(self, tag_slug: str) -> List[PostSummary]:
        return self._filter(lambda p: any(tag_to_slug(t) == tag_slug for t in p.tags))

    def posts_by_author(self, slug: str) -> List[PostSummary]:
        return self._filter(lambda p: p.author is not None and p.author.slug == slug)

    def featured_posts(self) -> List[PostSummary]:
        return self._filter(lambda p: p.featured)

    def _filter(self, predicate: Callable[[PostSummary], bool]) -> List[PostSummary]:
        return [post for post in self.list_posts() if predicate(post)]

    def _parse_all(self, include_content: bool) -> list:
        posts = []
        for doc in self.repo.list_documents():
            post_data = parse_post_data(
                doc,
                include_content=include_content,
                words_per_minute=self.words_per_minute,
            )
            if not post_data:
                continue
            post = self._build(doc, post_data, include_content)
            if post is not None:
                posts.append(post)
        posts.sort(key=published_sort_key, reverse=True)
        return posts

    def _build(self, doc: RawDocument, post_data: dict, include_content: bool):
        """Validate one post. A document with bad metadata is logged and skipped."""
        try:
            if include_content:
                return PostDetail(
                    **post_data, html=self.renderer.render(post_data["content"])
                )
            return PostSummary(**post_data)
        except ValidationError as e:
            logger.warning(f"Skipping post {doc.id} with invalid metadata: {e}")
            return None


def parse_post_data(
    doc: RawDocument, include_content: bool = False, *, words_per_minute: int = 200
) -> Optional[dict]:
    """Parse frontmatter and return standardized post data"""
    try:
        parsed = parse_document(doc.text)
    except ContentError as e:
        logger.warning(f"Failed to parse post {doc.id}: {e}")
        return None

    metadata = parsed.metadata
    if not metadata and not parsed.content.strip():
        logger.warning(f"No markdown content found for post {doc.id}")
        return None

    title = derive_title(metadata, doc)
    slug = derive_slug(metadata, doc, title)

    date = convert_date_to_string(metadata.get("date"))
    published_at = convert_date_to_string(metadata.get("publishedAt")) or date
    updated_at = convert_date_to_string(metadata.get("updatedAt")) or published_at

    post_data = {
        "id": doc.id,
        "slug": slug,
        "title": title,
        "excerpt": _as_string(metadata.get("excerpt") or metadata.get("summary")),
        "category": normalize_ref(metadata.get("category")),
        "author": normalize_ref(metadata.get("author")),
        "date": _as_string(date),
        "publishedAt": _as_string(published_at),
        "updatedAt": _as_string(updated_at),
        "readingTime": _as_string(metadata.get("readingTime"))
        or calculate_reading_time(parsed.content, words_per_minute),
        "tags": normalize_tags(metadata.get("tags")),
        "featured": _as_flag(metadata.get("featured")),
    }

    if include_content:
        post_data["content"] = parsed.content

    return post_data


def derive_title(metadata: dict, doc: RawDocument) -> str:
    if metadata.get("title"):
        return str(metadata["title"])
    clean_slug = doc.path.stem.replace("-", " ").replace("_", " ")
    return clean_slug.title()


def derive_slug(metadata: dict, doc: RawDocument, title: str) -> str:
    """
    File stem for the first post of a file; later posts of an aggregated file
    are keyed by their title so each keeps a stable, distinct slug.
    """
    if metadata.get("slug"):
        return str(metadata["slug"])
    if doc.index == 0:
        return doc.path.stem
    return tag_to_slug(title) or f"{doc.path.stem}-{doc.index}"


def normalize_ref(value) -> Optional[dict]:
    """Normalize `category` / `author` into a {name, slug} pair."""
    if not value:
        return None
    if isinstance(value, str):
        return {"name": value, "slug": name_to_slug(value)}
    if isinstance(value, dict) and value.get("name"):
        name = str(value["name"])
        return {"name": name, "slug": str(value.get("slug") or name_to_slug(name))}
    return None


def normalize_tags(value) -> List[str]:
    if not value:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, (list, tuple, set)):
        return [str(item) for item in value if item]
    return [str(value)]


def published_sort_key(post) -> datetime.datetime:
    value = post.get("publishedAt") if isinstance(post, dict) else post.publishedAt
    if not value:
        return _OLDEST
    try:
        return parse_timestamp(value)
    except ValueError:
        return _OLDEST


def _as_string(value) -> Optional[str]:
    return None if value is None else str(value)


def _as_flag(value) -> bool:
    """YAML booleans pass through; quoted strings count only when they say true."""
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        return value.strip().lower() in ("true", "yes", "on")
    return False
