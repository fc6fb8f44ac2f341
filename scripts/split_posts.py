import argparse
import logging
import sys
from pathlib import Path

from dailyposts.services.content_parser import ContentParser
from dailyposts.services.posts_service import parse_post_data
from dailyposts.services.slugs import is_kebab_case
from dailyposts.settings import settings

logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper()),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


def split_file(path: Path, out_dir: Path, parser: ContentParser) -> int:
    """Write each post of an aggregated file to `<out_dir>/<slug>.md`."""
    written = 0
    for doc in parser.get_documents(path):
        post_data = parse_post_data(doc)
        if not post_data:
            logger.warning(f"Skipping unparseable document {doc.id}")
            continue
        slug = post_data["slug"]
        if not is_kebab_case(slug):
            logger.warning(f"Skipping {doc.id}: slug {slug!r} is not a plain file name")
            continue
        target = out_dir / f"{slug}.md"
        if target.resolve().parent != Path(out_dir).resolve():
            logger.warning(f"Skipping {doc.id}: {target} is outside {out_dir}")
            continue
        if target.exists():
            logger.warning(f"{target} already exists, not overwriting")
            continue
        target.write_text(doc.text + "\n", encoding="utf-8")
        written += 1
    return written


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(
        description="Split aggregated post files into one file per post."
    )
    parser.add_argument("files", nargs="+", type=Path)
    parser.add_argument("--out", type=Path, default=settings.posts_dir)
    args = parser.parse_args(argv)

    args.out.mkdir(parents=True, exist_ok=True)
    content_parser = ContentParser()
    total = sum(split_file(path, args.out, content_parser) for path in args.files)
    logger.info(f"Wrote {total} posts to {args.out}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
