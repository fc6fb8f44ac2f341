import argparse
import logging
import sys

from dailyposts.services.lint_service import PostLinter
from dailyposts.settings import settings

logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper()),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Lint Markdown posts.")
    parser.add_argument(
        "paths",
        nargs="*",
        help="files or directories to lint (default: the posts directory)",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help="treat untagged or unknown code block languages as errors",
    )
    args = parser.parse_args(argv)

    report = PostLinter(strict=args.strict).lint_paths(
        args.paths or [settings.posts_dir]
    )
    for issue in report.issues:
        print(issue.format())
    print(
        f"{report.files} files, {report.documents} posts, "
        f"{report.error_count} errors, {report.warning_count} warnings"
    )
    return 0 if report.ok else 1


if __name__ == "__main__":
    sys.exit(main())
