from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


def choose_env_file() -> str:
    return ".env.local" if Path(".env.local").exists() else ".env"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=choose_env_file(),
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",  # tolerate unrelated env vars
    )

    # Content tree
    CONTENT_DIR: str = "content"
    POSTS_SUBDIR: str = "posts"
    CATEGORIES_SUBDIR: str = "categories"
    AUTHORS_SUBDIR: str = "authors"

    # Site
    SITE_URL: str = "https://devops-daily.com"
    SITE_TITLE: str = "DevOps Daily"
    SITE_DESCRIPTION: str = "The latest DevOps news, tutorials, and guides"

    # Feed
    FEED_LIMIT: int = 50
    FEED_OUTPUT: str = "public/feed.xml"

    # Reading time fallback when front matter has none
    WORDS_PER_MINUTE: int = 200

    # Logging
    LOG_LEVEL: str = "INFO"

    # Our own API Key
    DAILYPOSTS_API_KEY: str = ""

    @property
    def posts_dir(self) -> Path:
        return Path(self.CONTENT_DIR) / self.POSTS_SUBDIR

    @property
    def categories_dir(self) -> Path:
        return Path(self.CONTENT_DIR) / self.CATEGORIES_SUBDIR

    @property
    def authors_dir(self) -> Path:
        return Path(self.CONTENT_DIR) / self.AUTHORS_SUBDIR


# Global settings instance (evaluated at import, but reads env on construction)
settings = Settings()
