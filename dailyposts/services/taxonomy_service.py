import logging
from collections import Counter
from pathlib import Path
from typing import Dict, Iterable, List, Optional

from dailyposts.exceptions import ContentError
from dailyposts.schemas.blog import Author, Category, PostSummary, Tag
from dailyposts.services.content_parser import ContentParser, parse_document
from dailyposts.services.slugs import slug_to_tag, tag_to_slug

logger = logging.getLogger(__name__)

ICON_MAP = {
    "kubernetes": "Layers",
    "terraform": "Server",
    "docker": "Database",
    "ci-cd": "Workflow",
    "cloud": "Cloud",
    "git": "GitBranch",
    "security": "Lock",
    "cli": "Terminal",
    "code": "Code",
}

COLOR_MAP = {
    "kubernetes": "bg-blue-500/10 text-blue-500",
    "terraform": "bg-purple-500/10 text-purple-500",
    "docker": "bg-cyan-500/10 text-cyan-500",
    "ci-cd": "bg-green-500/10 text-green-500",
    "cloud": "bg-orange-500/10 text-orange-500",
    "git": "bg-red-500/10 text-red-500",
    "security": "bg-yellow-500/10 text-yellow-500",
    "cli": "bg-indigo-500/10 text-indigo-500",
    "code": "bg-pink-500/10 text-pink-500",
}


def collect_tags(posts: Iterable[PostSummary]) -> List[Tag]:
    """
    Tags keyed by slug so `Docker` and `docker` count together; the first
    casing seen is the display name.
    """
    names: Dict[str, str] = {}
    counts: Counter = Counter()
    for post in posts:
        for tag in post.tags:
            slug = tag_to_slug(tag)
            if not slug:
                continue
            names.setdefault(slug, tag)
            counts[slug] += 1

    tags = [Tag(name=names[slug], slug=slug, count=counts[slug]) for slug in names]
    return sorted(tags, key=lambda t: t.count, reverse=True)


def collect_categories(
    posts: Iterable[PostSummary], descriptors: Dict[str, dict] | None = None
) -> List[Category]:
    descriptors = descriptors or {}
    counts: Counter = Counter()
    names: Dict[str, str] = {}
    for post in posts:
        if post.category:
            counts[post.category.slug] += 1
            names.setdefault(post.category.slug, post.category.name)

    categories = []
    for slug in {**names, **descriptors}:
        data = descriptors.get(slug, {})
        categories.append(
            Category(
                name=data.get("name") or names.get(slug) or slug_to_tag(slug),
                slug=slug,
                description=data.get("description"),
                longDescription=data.get("longDescription"),
                icon=data.get("icon") or ICON_MAP.get(slug),
                color=data.get("color") or COLOR_MAP.get(slug),
                count=counts.get(slug, 0),
            )
        )
    return sorted(categories, key=lambda c: (-c.count, c.name))


def collect_authors(
    posts: Iterable[PostSummary], descriptors: Dict[str, dict] | None = None
) -> List[Author]:
    descriptors = descriptors or {}
    counts: Counter = Counter()
    names: Dict[str, str] = {}
    for post in posts:
        if post.author:
            counts[post.author.slug] += 1
            names.setdefault(post.author.slug, post.author.name)

    authors = []
    for slug in {**names, **descriptors}:
        data = descriptors.get(slug, {})
        authors.append(
            Author(
                name=data.get("name") or names.get(slug) or slug_to_tag(slug),
                slug=slug,
                bio=data.get("bio"),
                avatar=data.get("avatar"),
                postCount=counts.get(slug, 0),
            )
        )
    return sorted(authors, key=lambda a: a.name)


def load_descriptors(directory: Path, parser: ContentParser | None = None) -> Dict[str, dict]:
    """Front matter of every `<slug>.md` in a descriptor directory, by slug."""
    directory = Path(directory)
    if not directory.is_dir():
        return {}

    parser = parser or ContentParser()
    descriptors = {}
    for path in sorted(directory.glob("*.md")):
        try:
            descriptors[path.stem] = parse_document(parser.get_markdown_content(path)).metadata
        except ContentError as e:
            logger.warning(f"Skipping descriptor {path}: {e}")
    return descriptors


class TaxonomyService:
    def __init__(self, posts_service, categories_dir: Path, authors_dir: Path):
        self.posts_service = posts_service
        self.categories_dir = Path(categories_dir)
        self.authors_dir = Path(authors_dir)

    def list_tags(self) -> List[Tag]:
        return collect_tags(self.posts_service.list_posts())

    def get_tag(self, slug: str) -> Optional[Tag]:
        return next((t for t in self.list_tags() if t.slug == slug), None)

    def list_categories(self) -> List[Category]:
        return collect_categories(
            self.posts_service.list_posts(), load_descriptors(self.categories_dir)
        )

    def get_category(self, slug: str) -> Optional[Category]:
        return next((c for c in self.list_categories() if c.slug == slug), None)

    def list_authors(self) -> List[Author]:
        return collect_authors(
            self.posts_service.list_posts(), load_descriptors(self.authors_dir)
        )

    def get_author(self, slug: str) -> Optional[Author]:
        return next((a for a in self.list_authors() if a.slug == slug), None)
