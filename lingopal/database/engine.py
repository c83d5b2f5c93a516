from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine

from lingopal.config.settings import get_settings


settings = get_settings()


def create_app_engine() -> AsyncEngine:
    """Create the async engine for a direct Postgres or Supabase pooler URL.

    - Direct connection: standard pool with pre-ping.
    - Supabase pooler (``.pooler.`` / ``.supabase.`` hosts): small pool and no
      prepared statements, since transaction poolers do not support them.
    """
    database_url = settings.DATABASE_URL

    using_pooler = ".supabase." in database_url or ".pooler." in database_url

    if using_pooler:
        pool_size = 3
        max_overflow = 2
        pool_recycle = 1800
        connect_args = {"connect_timeout": 10, "prepare_threshold": None}
    else:
        pool_size = 10
        max_overflow = 10
        pool_recycle = 3600
        connect_args = {"connect_timeout": 10}

    return create_async_engine(
        database_url,
        echo=settings.DEBUG,
        pool_size=pool_size,
        max_overflow=max_overflow,
        pool_recycle=pool_recycle,
        pool_pre_ping=True,
        pool_use_lifo=True,
        connect_args=connect_args,
    )


engine: AsyncEngine = create_app_engine()
