import logging

from fastapi import APIRouter, Depends, HTTPException

from dailyposts import dependencies as deps
from dailyposts.schemas.lint import LintReport
from dailyposts.security import get_settings
from dailyposts.services.lint_service import PostLinter

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/lint", response_model=LintReport)
def lint_posts(
    strict: bool = False,
    linter: PostLinter = Depends(deps.get_linter),
    current_settings=Depends(get_settings),
):
    """Lint every post under the configured posts directory."""
    linter.strict = strict
    try:
        return linter.lint_paths([current_settings.posts_dir])
    except Exception as e:
        logger.error(f"Unexpected error linting posts: {e}")
        raise HTTPException(status_code=500, detail="Failed to lint posts")
