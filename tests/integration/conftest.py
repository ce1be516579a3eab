import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

from config import ApplicationConfig
from src.adapter.services.disk_photo_storage import DiskPhotoStorage
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.api.utils.rate_limit import limiter
from src.app.services.password_hasher import hash_password
from src.depends import get_mailer, get_photo_storage, get_unit_of_work
from src.domain.actor import Actor
from src.domain.entities import User
from tests.fixtures.mailer import RecordingMailer
from tests.utils.api_client import PASSWORD


@pytest.fixture(autouse=True)
def fast_hashing(monkeypatch):
    monkeypatch.setattr(ApplicationConfig, "BCRYPT_ROUNDS", 4)


@pytest.fixture(autouse=True)
def reset_rate_limits():
    limiter.reset()
    yield
    limiter.reset()


@pytest_asyncio.fixture
async def engine():
    engine = create_async_engine("sqlite+aiosqlite:///./test.db")
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.drop_all)
    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(engine):
    Session = sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with Session() as session:
        yield session


@pytest.fixture
def mailer():
    return RecordingMailer()


@pytest.fixture
def photo_storage(tmp_path):
    return DiskPhotoStorage(str(tmp_path))


@pytest_asyncio.fixture
async def client(db_session, mailer, photo_storage):
    from src.api.app import create_app

    app = create_app(ApplicationConfig)

    async def override_get_unit_of_work():
        yield SqlAlchemyUnitOfWork(db_session)

    app.dependency_overrides[get_unit_of_work] = override_get_unit_of_work
    app.dependency_overrides[get_mailer] = lambda: mailer
    app.dependency_overrides[get_photo_storage] = lambda: photo_storage

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest_asyncio.fixture
async def admin_user(db_session):
    """Admins cannot sign up; they are seeded directly. Returns a detached snapshot."""
    user = User(
        email="admin@exzly.dev",
        username="admin",
        password_hash=hash_password(PASSWORD),
        is_admin=True,
        full_name="Site Admin",
    )
    db_session.add(user)
    await db_session.commit()
    return Actor.from_user(user)
