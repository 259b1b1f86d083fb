from sqlalchemy import event
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel.ext.asyncio.session import AsyncSession
from config import ApplicationConfig
from src.adapter.services.pdf_service import ReportLabPdfService


def build_engine(db_uri: str):
    """Create the async engine; SQLite connections get foreign keys enforced"""
    engine = create_async_engine(db_uri, echo=False, future=True)

    if engine.dialect.name == "sqlite":
        @event.listens_for(engine.sync_engine, "connect")
        def _enable_foreign_keys(dbapi_connection, connection_record):
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

    return engine


engine = build_engine(ApplicationConfig.DB_URI)

AsyncSessionLocal = sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
)


async def get_session() -> AsyncSession:
    async with AsyncSessionLocal() as session:
        yield session


def get_pdf_service() -> ReportLabPdfService:
    return ReportLabPdfService(
        locale=ApplicationConfig.PDF_LOCALE,
        logo_root=ApplicationConfig.UPLOAD_ROOT,
    )
