import pytest
from datetime import date
from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock

from src.domain.base import utc_now
from src.domain.client import Client
from src.domain.invoice import Invoice, InvoiceStatus
from src.domain.invoice_item import InvoiceItem
from src.domain.user import User


@pytest.fixture
def mock_uow():
    """Mock unit of work"""
    uow = MagicMock()
    uow.commit = AsyncMock()
    uow.rollback = AsyncMock()
    return uow


@pytest.fixture
def owner():
    return User(
        id="user_1",
        email="ana@example.com",
        company_name="Estudio Ana",
        invoice_prefix="INV",
        invoice_counter=7,
        default_currency="USD",
        created_at=utc_now(),
        updated_at=utc_now(),
    )


@pytest.fixture
def client_entity():
    return Client(
        id="client_1",
        user_id="user_1",
        name="Acme Corp",
        email="billing@acme.test",
        created_at=utc_now(),
        updated_at=utc_now(),
    )


@pytest.fixture
def stored_invoice():
    """Invoice as it would come back from the store: 2x50 + 1x30-5, 16% tax, 10 off"""
    return Invoice(
        id="invoice_1",
        user_id="user_1",
        client_id="client_1",
        invoice_number="INV-003",
        status=InvoiceStatus.DRAFT,
        issue_date=date(2024, 3, 1),
        due_date=date(2024, 3, 31),
        currency="USD",
        subtotal=Decimal("125"),
        tax_rate=Decimal("16"),
        tax_amount=Decimal("20"),
        discount_amount=Decimal("10"),
        total=Decimal("135"),
        notes="Thanks",
        terms="Net 30",
        created_at=utc_now(),
        updated_at=utc_now(),
    )


@pytest.fixture
def stored_items():
    return [
        InvoiceItem(
            id="item_b",
            invoice_id="invoice_1",
            description="Hosting",
            quantity=Decimal("1"),
            unit_price=Decimal("30"),
            discount=Decimal("5"),
            subtotal=Decimal("25"),
            order=1,
        ),
        InvoiceItem(
            id="item_a",
            invoice_id="invoice_1",
            description="Design work",
            quantity=Decimal("2"),
            unit_price=Decimal("50"),
            discount=Decimal("0"),
            subtotal=Decimal("100"),
            order=0,
        ),
    ]
