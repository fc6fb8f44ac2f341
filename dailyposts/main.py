import logging

from fastapi import Depends, FastAPI

from dailyposts.routers import feed, lint, posts, taxonomy
from dailyposts.security import get_api_key
from dailyposts.settings import settings

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper()),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="DevOps Daily Posts API",
    description="Posts, categories, tags and feed built from Markdown content",
)

app.include_router(posts.router)
app.include_router(taxonomy.router)
app.include_router(feed.router)
app.include_router(lint.router, dependencies=[Depends(get_api_key)])


@app.get("/")
async def root():
    return {"message": "DevOps Daily Posts API is running"}
