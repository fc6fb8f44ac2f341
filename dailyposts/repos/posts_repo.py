import logging
from pathlib import Path
from typing import List

from dailyposts.services.content_parser import ContentParser, RawDocument

logger = logging.getLogger(__name__)


class FilesystemPostsRepo:
    def __init__(self, posts_dir: Path, parser: ContentParser | None = None):
        self.posts_dir = Path(posts_dir)
        self.parser = parser or ContentParser()

    def list_post_files(self) -> List[Path]:
        if not self.posts_dir.is_dir():
            logger.warning(f"Posts directory {self.posts_dir} does not exist")
            return []
        return sorted(p for p in self.posts_dir.glob("*.md") if p.is_file())

    def list_documents(self) -> List[RawDocument]:
        docs = []
        for path in self.list_post_files():
            docs.extend(self.parser.get_documents(path))
        return docs

    def get_documents(self, slug: str) -> List[RawDocument]:
        """
        Documents that may hold the post `slug`: the file named after it when it
        exists, otherwise every document (multi-post files carry extra slugs).
        """
        path = self.posts_dir / f"{slug}.md"
        if path.is_file() and path.parent == self.posts_dir:
            docs = self.parser.get_documents(path)
            if docs:
                return docs
        return self.list_documents()
