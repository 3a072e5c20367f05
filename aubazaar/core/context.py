"""
Application context - everything a request handler needs that outlives a request.
Built once in create_app and stored on app.state; no module-level engines or clients.
"""

from dataclasses import dataclass

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from aubazaar.cache.redis_client import Cache
from aubazaar.config import Settings
from aubazaar.db.session import build_engine, build_session_maker
from aubazaar.services.media import MediaStore


@dataclass
class AppContext:
    settings: Settings
    engine: AsyncEngine
    session_maker: async_sessionmaker[AsyncSession]
    media: MediaStore
    cache: Cache

    @classmethod
    def build(cls, settings: Settings) -> "AppContext":
        engine = build_engine(settings)
        return cls(
            settings=settings,
            engine=engine,
            session_maker=build_session_maker(engine),
            media=MediaStore(
                settings.upload_dir,
                url_path=settings.uploads_url_path,
                max_bytes=settings.max_upload_bytes,
            ),
            cache=Cache(settings.redis_url, default_ttl=settings.cache_ttl_seconds),
        )

    async def aclose(self) -> None:
        await self.cache.close()
        await self.engine.dispose()
