import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import List

import frontmatter
import yaml

from dailyposts.exceptions import FrontMatterError

logger = logging.getLogger(__name__)

# Aggregated files join several posts with markers like <|RELATED_DOC_SEP-magic-1a2b|>
DOC_SEPARATOR = re.compile(r"<\|RELATED_DOC_SEP[^|]*\|>")
SEPARATOR_FRAGMENT = "RELATED_DOC_SEP"

_FRONT_MATTER_START = re.compile(r"\A---[ \t]*\r?\n")
_YAML_HANDLER = frontmatter.YAMLHandler()


@dataclass(frozen=True)
class RawDocument:
    path: Path
    index: int
    text: str
    total: int = 1

    @property
    def id(self) -> str:
        if self.total == 1:
            return str(self.path)
        return f"{self.path}#{self.index}"


def split_documents(raw: str) -> List[str]:
    """Split an aggregated file into its individual post sources."""
    parts = [part.strip() for part in DOC_SEPARATOR.split(raw)]
    return [part for part in parts if part]


def has_front_matter(text: str) -> bool:
    return bool(_FRONT_MATTER_START.match(text))


def parse_document(text: str) -> frontmatter.Post:
    """Parse one post source; raise FrontMatterError if the metadata is unusable."""
    try:
        post = frontmatter.loads(text)
    except yaml.YAMLError as e:
        raise FrontMatterError(f"front matter is not valid YAML: {e}") from e
    except ValueError as e:
        # e.g. an unquoted date YAML cannot build, like 2024-13-01
        raise FrontMatterError(f"front matter could not be read: {e}") from e

    # frontmatter silently drops a block that is not a mapping
    if not post.metadata and has_front_matter(text):
        try:
            block, _ = _YAML_HANDLER.split(text.strip())
        except ValueError:
            block = ""
        if yaml.safe_load(block) is not None:
            raise FrontMatterError("front matter must be a mapping")
    return post


class ContentParser:
    def __init__(self, encoding: str = "utf-8-sig"):
        self.encoding = encoding

    def get_markdown_content(self, path: Path) -> str:
        """Read the raw markdown of a content file (empty string if unreadable)."""
        try:
            return Path(path).read_text(encoding=self.encoding)
        except UnicodeDecodeError:
            logger.warning(f"{path} is not valid {self.encoding}, decoding lossily")
            return Path(path).read_bytes().decode(self.encoding, errors="ignore")
        except OSError as e:
            logger.error(f"Error reading {path}: {e}")
            return ""

    def get_documents(self, path: Path) -> List[RawDocument]:
        """Read a content file and return one RawDocument per post it holds."""
        raw = self.get_markdown_content(path)
        parts = split_documents(raw)
        return [
            RawDocument(path=Path(path), index=i, text=part, total=len(parts))
            for i, part in enumerate(parts)
        ]
