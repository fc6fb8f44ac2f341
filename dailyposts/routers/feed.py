import logging

from fastapi import APIRouter, Depends, HTTPException, Response

from dailyposts import dependencies as deps
from dailyposts.services.feed_service import FeedService

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/feed.xml")
def get_feed(service: FeedService = Depends(deps.get_feed_service)):
    try:
        xml = service.render()
    except Exception as e:
        logger.error(f"Failed to build feed: {e}")
        raise HTTPException(status_code=500, detail="Failed to build feed")
    return Response(content=xml, media_type="application/rss+xml")
