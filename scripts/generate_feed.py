import logging
import sys

from dailyposts.repos.posts_repo import FilesystemPostsRepo
from dailyposts.services.feed_service import FeedService, write_feed
from dailyposts.services.posts_service import PostsService
from dailyposts.settings import settings

logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper()),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

if __name__ == "__main__":
    try:
        posts_service = PostsService(
            FilesystemPostsRepo(settings.posts_dir),
            words_per_minute=settings.WORDS_PER_MINUTE,
        )
        xml = FeedService(posts_service, settings).render()
        write_feed(settings.FEED_OUTPUT, xml)
    except Exception as e:
        logger.error(f"Error generating RSS feed: {e}", exc_info=True)
        sys.exit(1)
