import logging
import re
from collections import Counter, defaultdict
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, List, Optional
from urllib.parse import urlparse

from dailyposts.exceptions import ContentError
from dailyposts.schemas.lint import LintIssue, LintReport
from dailyposts.services.content_parser import (
    DOC_SEPARATOR,
    SEPARATOR_FRAGMENT,
    ContentParser,
    has_front_matter,
    parse_document,
)
from dailyposts.services.markdown_renderer import (
    SUPPORTED_LANGUAGES,
    MarkdownRenderer,
)
from dailyposts.services.slugs import is_kebab_case, name_to_slug
from dailyposts.utils import parse_timestamp

logger = logging.getLogger(__name__)

REQUIRED_KEYS = ("title", "category", "date", "author", "tags")
TIMESTAMP_KEYS = ("date", "publishedAt", "updatedAt")

_LINK_URL = re.compile(r"\[[^\]]*\]\(\s*(https?://[^)\s]*)")


@dataclass
class LintedDocument:
    path: str
    index: Optional[int]
    metadata: dict = field(default_factory=dict)

    @property
    def location(self) -> str:
        return self.path if self.index is None else f"{self.path}#{self.index}"


class PostLinter:
    """
    Content checks for post files. Every problem becomes a LintIssue; nothing
    here raises for bad content.
    """

    def __init__(
        self,
        parser: ContentParser | None = None,
        renderer: MarkdownRenderer | None = None,
        allowed_languages: Iterable[str] = SUPPORTED_LANGUAGES,
        strict: bool = False,
    ):
        self.parser = parser or ContentParser()
        self.renderer = renderer or MarkdownRenderer()
        self.allowed_languages = frozenset(lang.lower() for lang in allowed_languages)
        self.strict = strict

    def lint_paths(self, paths: Iterable[Path]) -> LintReport:
        report = LintReport()
        documents: List[LintedDocument] = []
        for path in expand_paths(paths):
            text = self.parser.get_markdown_content(path)
            issues, docs = self.lint_text(text, str(path))
            report.files += 1
            report.documents += len(docs)
            report.issues.extend(issues)
            documents.extend(docs)

        report.issues.extend(self.lint_corpus(documents))
        logger.info(
            f"Linted {report.files} files ({report.documents} posts): "
            f"{report.error_count} errors, {report.warning_count} warnings"
        )
        return report

    def lint_text(self, text: str, path: str):
        """Lint one file's contents. Returns (issues, parsed documents)."""
        issues: List[LintIssue] = []
        documents: List[LintedDocument] = []

        stem = Path(path).stem
        if not is_kebab_case(stem):
            issues.append(
                _issue(
                    "filename-slug",
                    path,
                    None,
                    f"file name '{stem}' is not kebab-case",
                    severity="warning",
                )
            )

        fragments = [part.strip() for part in DOC_SEPARATOR.split(text)]
        multi = len(fragments) > 1
        fragments = [part for part in fragments if part]
        if not fragments:
            issues.append(_issue("empty-body", path, None, "file is empty"))
            return issues, documents

        for i, fragment in enumerate(fragments):
            index = i if multi else None
            if SEPARATOR_FRAGMENT in fragment:
                issues.append(
                    _issue("split", path, index, "malformed separator left in text")
                )
            if not has_front_matter(fragment):
                rule = "split" if multi else "front-matter"
                issues.append(_issue(rule, path, index, "missing front-matter block"))
                continue

            try:
                post = parse_document(fragment)
            except ContentError as e:
                issues.append(_issue("front-matter", path, index, str(e)))
                continue

            documents.append(
                LintedDocument(path=path, index=index, metadata=post.metadata)
            )
            issues.extend(self.check_metadata(post.metadata, path, index))
            issues.extend(self.check_body(post.content, path, index))

        return issues, documents

    def check_metadata(
        self, metadata: dict, path: str, index: Optional[int]
    ) -> List[LintIssue]:
        issues = []

        missing = [key for key in REQUIRED_KEYS if metadata.get(key) in (None, "", [])]
        if missing:
            issues.append(
                _issue("required-keys", path, index, f"missing keys: {', '.join(missing)}")
            )

        for key in ("category", "author"):
            value = metadata.get(key)
            if value is None:
                continue
            if not isinstance(value, dict) or not value.get("name") or not value.get("slug"):
                issues.append(
                    _issue(f"{key}-shape", path, index, f"{key} needs a name and a slug")
                )

        category = metadata.get("category")
        if isinstance(category, dict) and category.get("name") and category.get("slug"):
            expected = name_to_slug(str(category["name"]))
            if category["slug"] != expected:
                issues.append(
                    _issue(
                        "category-slug",
                        path,
                        index,
                        f"category slug '{category['slug']}' should be '{expected}'",
                    )
                )

        tags = metadata.get("tags")
        if tags is not None and (
            not isinstance(tags, list) or not all(isinstance(t, str) for t in tags)
        ):
            issues.append(_issue("tags-type", path, index, "tags must be a list of strings"))

        issues.extend(self.check_timestamps(metadata, path, index))
        return issues

    def check_timestamps(
        self, metadata: dict, path: str, index: Optional[int]
    ) -> List[LintIssue]:
        issues = []
        parsed = {}
        for key in TIMESTAMP_KEYS:
            if metadata.get(key) is None:
                continue
            try:
                parsed[key] = parse_timestamp(metadata[key])
            except ValueError:
                issues.append(
                    _issue(
                        "timestamps",
                        path,
                        index,
                        f"{key} is not ISO-8601: {metadata[key]!r}",
                    )
                )

        if "publishedAt" in parsed and "updatedAt" in parsed:
            if parsed["updatedAt"] < parsed["publishedAt"]:
                issues.append(
                    _issue("timestamps", path, index, "updatedAt is before publishedAt")
                )
        return issues

    def check_body(self, body: str, path: str, index: Optional[int]) -> List[LintIssue]:
        if not body.strip():
            return [_issue("empty-body", path, index, "post has no body")]

        issues = []
        severity = "error" if self.strict else "warning"
        for block in self.renderer.extract_code_blocks(body):
            if not block.language:
                message = f"code block at body line {block.line} has no language"
            elif block.language not in self.allowed_languages:
                message = (
                    f"code block at body line {block.line} uses unknown language "
                    f"'{block.language}'"
                )
            else:
                continue
            issues.append(
                _issue("code-language", path, index, message, severity=severity)
            )

        urls = _LINK_URL.findall(body)
        for url in urls:
            if not is_valid_url(url):
                issues.append(_issue("invalid-url", path, index, f"invalid link: {url}"))
        for url, count in Counter(urls).items():
            if count > 1:
                issues.append(
                    _issue(
                        "duplicate-url",
                        path,
                        index,
                        f"link repeated {count} times: {url}",
                        severity="warning",
                    )
                )
        return issues

    def lint_corpus(self, documents: Iterable[LintedDocument]) -> List[LintIssue]:
        """Rules that need every post at once."""
        by_title = defaultdict(list)
        for doc in documents:
            title = doc.metadata.get("title")
            if isinstance(title, str) and title.strip():
                by_title[title.strip()].append(doc)

        issues = []
        for title, docs in by_title.items():
            if len(docs) < 2:
                continue
            for doc in docs:
                others = ", ".join(d.location for d in docs if d is not doc)
                issues.append(
                    _issue(
                        "duplicate-title",
                        doc.path,
                        doc.index,
                        f"title '{title}' also used by {others}",
                    )
                )
        return issues


def is_valid_url(url: str) -> bool:
    try:
        parsed = urlparse(url)
        host = parsed.hostname
    except ValueError:
        return False
    return parsed.scheme in ("http", "https") and bool(host)


def expand_paths(paths: Iterable[Path]) -> List[Path]:
    """Files as given, directories expanded to the markdown files they hold."""
    files = []
    for path in paths:
        path = Path(path)
        if path.is_dir():
            files.extend(sorted(p for p in path.rglob("*.md") if p.is_file()))
        else:
            files.append(path)
    return files


def _issue(
    rule: str,
    path: str,
    index: Optional[int],
    message: str,
    severity: str = "error",
) -> LintIssue:
    return LintIssue(
        rule=rule, severity=severity, path=path, index=index, message=message
    )
