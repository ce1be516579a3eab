from typing import Optional

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel.ext.asyncio.session import AsyncSession

from config import ApplicationConfig
from src.adapter.services.disk_photo_storage import DiskPhotoStorage
from src.adapter.services.smtp_mailer import SmtpMailer
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.api.utils.identity import resolve_actor
from src.app.services.mailer import IMailer
from src.app.services.photo_storage import IPhotoStorage
from src.app.services.unit_of_work import UnitOfWork
from src.domain.actor import Actor

engine = create_async_engine(ApplicationConfig.DB_URI, echo=False, future=True)

AsyncSessionLocal = sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
)


async def get_unit_of_work():
    async with AsyncSessionLocal() as session:
        yield SqlAlchemyUnitOfWork(session)


def get_mailer() -> IMailer:
    return SmtpMailer.from_config(ApplicationConfig)


def get_photo_storage() -> IPhotoStorage:
    return DiskPhotoStorage(ApplicationConfig.STORAGE_PATH)


async def get_actor(
    request: Request, uow: UnitOfWork = Depends(get_unit_of_work)
) -> Optional[Actor]:
    """
    Dependency resolving the acting user from bearer token or session cookie.

    Installed on every router, so it runs once per request; the result is
    also kept on ``request.state.actor``.

    Returns:
        Actor, or None for anonymous requests

    Raises:
        ClientError: 401 for bad bearer credentials outside public routes
    """
    actor = await resolve_actor(request, uow)
    request.state.actor = actor
    return actor
