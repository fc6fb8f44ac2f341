import re

_WHITESPACE = re.compile(r"\s+")
_NON_SLUG = re.compile(r"[^\w-]+", re.ASCII)
_NON_HEADING = re.compile(r"[^\w\s-]", re.ASCII)
_REPEATED_HYPHENS = re.compile(r"-{2,}")
_NON_ALNUM_RUN = re.compile(r"[^a-z0-9]+")


def tag_to_slug(tag: str) -> str:
    """Lowercase, hyphenated, URL-safe form of a tag."""
    slug = _WHITESPACE.sub("-", tag.lower())
    slug = _NON_SLUG.sub("", slug)
    slug = _REPEATED_HYPHENS.sub("-", slug)
    return slug.strip("-")


def slug_to_tag(slug: str) -> str:
    return " ".join(word[:1].upper() + word[1:] for word in slug.split("-"))


def name_to_slug(name: str) -> str:
    """Slug for a category or author name: `CI/CD` -> `ci-cd`."""
    return _NON_ALNUM_RUN.sub("-", name.lower()).strip("-")


def heading_id(text: str, depth: int) -> str:
    """
    Anchor id for a rendered heading. The level prefix keeps ids unique when
    the same text appears at different depths.
    """
    base = _NON_HEADING.sub("", text.lower().strip())
    base = _WHITESPACE.sub("-", base)
    base = _REPEATED_HYPHENS.sub("-", base).strip("-")
    return f"h{depth}-{base}"


def is_kebab_case(value: str) -> bool:
    return bool(re.fullmatch(r"[a-z0-9]+(?:-[a-z0-9]+)*", value))
