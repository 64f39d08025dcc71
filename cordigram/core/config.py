from pydantic_settings import BaseSettings
from pydantic import AnyUrl
from functools import lru_cache


class Settings(BaseSettings):
    # core
    ENV: str = "dev"
    API_PREFIX: str = "/api"

    # database & redis
    DATABASE_URL: AnyUrl
    # Keep this as a plain string so redis:// URLs are always accepted
    REDIS_URL: str

    # auth / security
    API_AUTH_KEY: str | None = None
    FRONTEND_ORIGIN: str | None = None
    # Explicit debug-only switch for wide-open CORS in non-prod envs
    CORS_ALLOW_ALL_ORIGINS: bool = False

    # profiles
    DEFAULT_AVATAR_URL: str = (
        "https://res.cloudinary.com/doicocgeo/image/upload/"
        "v1765850274/user-avatar-default_gfx5bs.jpg"
    )

    # search / suggestion paging
    SEARCH_DEFAULT_LIMIT: int = 8
    SEARCH_MAX_LIMIT: int = 25

    # company member-count reconciliation (celery beat, UTC hour)
    MEMBER_COUNT_RECONCILE_ENABLED: bool = True
    MEMBER_COUNT_RECONCILE_HOUR: int = 3

    class Config:
        env_file = ".env"
        case_sensitive = True


@lru_cache
def get_settings() -> Settings:
    return Settings()
