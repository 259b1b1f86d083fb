import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession
from src.adapter.repositories import SqlAlchemyUserRepository
from src.depends import build_engine, get_session
from src.domain.base import utc_now
from src.domain.client import Client
from src.domain.user import User


@pytest_asyncio.fixture(scope="function")
async def engine(tmp_path):
    """Create a fresh SQLite database file per test, foreign keys enforced"""
    engine = build_engine(f"sqlite+aiosqlite:///{tmp_path / 'invoices_test.db'}")

    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(engine):
    """Create a new database session for each test"""
    Session = sessionmaker(engine, class_=AsyncSession, expire_on_commit=False, autoflush=False)
    async with Session() as session:
        yield session


@pytest_asyncio.fixture
async def owner(db_session):
    user = User(
        id="owner_1",
        email="ana@example.com",
        company_name="Estudio Ana",
        invoice_prefix="INV",
        invoice_counter=7,
        default_currency="USD",
        created_at=utc_now(),
        updated_at=utc_now(),
    )
    user = await SqlAlchemyUserRepository(db_session).create(user)
    await db_session.commit()
    return user


@pytest_asyncio.fixture
async def billed_client(db_session, owner):
    client = Client(
        id="client_1",
        user_id=owner.id,
        name="Acme Corp",
        email="billing@acme.test",
        created_at=utc_now(),
        updated_at=utc_now(),
    )
    db_session.add(client)
    await db_session.commit()
    return client


@pytest_asyncio.fixture
async def client(db_session):
    """Create test client with database session override"""
    from src.api.app import create_app
    from config import ApplicationConfig

    app = create_app(ApplicationConfig)

    # Override the session dependency to use test session
    async def override_get_session():
        yield db_session

    app.dependency_overrides[get_session] = override_get_session

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
