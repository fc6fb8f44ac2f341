import datetime
import logging
from email.utils import format_datetime
from pathlib import Path
from typing import Iterable, Optional
from xml.etree.ElementTree import Element, SubElement, register_namespace, tostring

from dailyposts.schemas.blog import PostDetail
from dailyposts.services.posts_service import published_sort_key
from dailyposts.utils import parse_timestamp

logger = logging.getLogger(__name__)

ATOM_NS = "http://www.w3.org/2005/Atom"
CONTENT_NS = "http://purl.org/rss/1.0/modules/content/"

register_namespace("atom", ATOM_NS)
register_namespace("content", CONTENT_NS)


def build_feed(
    posts: Iterable[PostDetail],
    *,
    site_url: str,
    title: str,
    description: str,
    limit: int = 50,
    now: Optional[datetime.datetime] = None,
) -> str:
    """Serialize the newest posts as an RSS 2.0 document."""
    now = now or datetime.datetime.now(datetime.timezone.utc)
    site_url = site_url.rstrip("/")

    rss = Element("rss", attrib={"version": "2.0"})
    channel = SubElement(rss, "channel")
    SubElement(channel, "title").text = title
    SubElement(channel, "link").text = site_url
    SubElement(channel, "description").text = description
    SubElement(channel, "language").text = "en"
    SubElement(channel, "lastBuildDate").text = _rfc822(now)
    SubElement(
        channel,
        f"{{{ATOM_NS}}}link",
        attrib={
            "href": f"{site_url}/feed.xml",
            "rel": "self",
            "type": "application/rss+xml",
        },
    )

    newest = sorted(posts, key=published_sort_key, reverse=True)[:limit]
    for post in newest:
        url = f"{site_url}/posts/{post.slug}"
        item = SubElement(channel, "item")
        SubElement(item, "title").text = post.title
        SubElement(item, "link").text = url
        SubElement(item, "description").text = post.excerpt or ""
        SubElement(item, "pubDate").text = _rfc822(_post_date(post) or now)
        SubElement(item, "guid", attrib={"isPermaLink": "true"}).text = url
        if post.category:
            SubElement(item, "category").text = post.category.name
        if post.author:
            SubElement(item, "author").text = post.author.name
        for tag in post.tags:
            SubElement(item, "category").text = tag
        encoded = SubElement(item, f"{{{CONTENT_NS}}}encoded")
        encoded.text = post.html or post.excerpt or ""

    logger.debug(f"Built feed with {len(newest)} items")
    return '<?xml version="1.0" encoding="UTF-8"?>\n' + tostring(rss, encoding="unicode")


def write_feed(path: Path, xml: str) -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(xml, encoding="utf-8")
    logger.info(f"RSS feed generated at {path}")
    return path


class FeedService:
    def __init__(self, posts_service, settings):
        self.posts_service = posts_service
        self.settings = settings

    def render(self, now: Optional[datetime.datetime] = None) -> str:
        return build_feed(
            self.posts_service.list_post_details(),
            site_url=self.settings.SITE_URL,
            title=self.settings.SITE_TITLE,
            description=self.settings.SITE_DESCRIPTION,
            limit=self.settings.FEED_LIMIT,
            now=now,
        )


def _post_date(post: PostDetail) -> Optional[datetime.datetime]:
    value = post.publishedAt or post.date
    if not value:
        return None
    try:
        return parse_timestamp(value)
    except ValueError:
        logger.warning(f"Post {post.slug} has an unparseable date {value!r}")
        return None


def _rfc822(value: datetime.datetime) -> str:
    if value.tzinfo is None:
        value = value.replace(tzinfo=datetime.timezone.utc)
    return format_datetime(value.astimezone(datetime.timezone.utc), usegmt=True)
