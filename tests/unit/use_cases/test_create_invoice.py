"""Unit tests for CreateInvoice use case

Tests cover:
- Counter-driven numbering under the owner row lock
- Explicit invoice numbers and currency defaults
- Validation and ownership errors
- Rollback when any write fails
"""

import pytest
from datetime import date
from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock

from src.app.use_cases.invoices.create_invoice import CreateInvoice
from src.domain.base import utc_now
from src.app.use_cases.invoices.dtos import InvoiceCommandDTO, InvoiceItemInputDTO


@pytest.fixture
def mock_user_repo(owner):
    repo = MagicMock()
    repo.get_by_id = AsyncMock(return_value=owner)

    async def increment(user):
        user.invoice_counter += 1
        return user.invoice_counter

    repo.increment_invoice_counter = AsyncMock(side_effect=increment)
    return repo


@pytest.fixture
def mock_client_repo(client_entity):
    repo = MagicMock()
    repo.get_by_id = AsyncMock(return_value=client_entity)
    return repo


@pytest.fixture
def mock_invoice_repo():
    repo = MagicMock()

    async def create(invoice):
        invoice.id = "invoice_new"
        invoice.created_at = utc_now()
        invoice.updated_at = utc_now()
        return invoice

    repo.create = AsyncMock(side_effect=create)
    return repo


@pytest.fixture
def mock_item_repo():
    repo = MagicMock()
    repo.create_many = AsyncMock(side_effect=lambda items: items)
    return repo


@pytest.fixture
def use_case(mock_uow, mock_user_repo, mock_client_repo, mock_invoice_repo, mock_item_repo):
    return CreateInvoice(
        uow=mock_uow,
        user_repo=mock_user_repo,
        client_repo=mock_client_repo,
        invoice_repo=mock_invoice_repo,
        item_repo=mock_item_repo,
    )


@pytest.fixture
def command():
    return InvoiceCommandDTO(
        client_id="client_1",
        issue_date=date(2024, 3, 1),
        due_date=date(2024, 3, 31),
        tax_rate=Decimal("16"),
        discount_amount=Decimal("10"),
        items=[
            InvoiceItemInputDTO(description="Design work", quantity=Decimal("2"), unit_price=Decimal("50")),
            InvoiceItemInputDTO(
                description="Hosting", quantity=Decimal("1"), unit_price=Decimal("30"), discount=Decimal("5")
            ),
        ],
    )


@pytest.mark.asyncio
class TestCreateInvoiceSuccess:
    async def test_number_from_counter(
        self, use_case, command, owner, mock_user_repo, mock_item_repo, mock_uow
    ):
        """
        Given: Owner with prefix INV and counter 7
        When: An invoice is created without an explicit number
        Then: It is numbered INV-007 and the counter becomes 8
        """
        # Act
        result = await use_case.execute("user_1", command)

        # Assert
        assert result.is_ok()
        response = result.value
        assert response.invoice_number == "INV-007"
        assert response.status == "DRAFT"
        assert response.total == Decimal("135")
        assert response.currency == "USD"
        assert response.client.name == "Acme Corp"
        assert [item.order for item in response.items] == [0, 1]
        assert owner.invoice_counter == 8

        mock_user_repo.get_by_id.assert_called_once_with("user_1", for_update=True)
        mock_user_repo.increment_invoice_counter.assert_called_once_with(owner)
        mock_item_repo.create_many.assert_called_once()
        mock_uow.commit.assert_called_once()
        mock_uow.rollback.assert_not_called()

    async def test_counter_advanced_before_invoice_insert(
        self, use_case, command, owner, mock_invoice_repo
    ):
        counters_at_insert = []

        async def create(invoice):
            counters_at_insert.append(owner.invoice_counter)
            invoice.id = "invoice_new"
            invoice.created_at = utc_now()
            invoice.updated_at = utc_now()
            return invoice

        mock_invoice_repo.create = AsyncMock(side_effect=create)

        result = await use_case.execute("user_1", command)

        assert result.is_ok()
        assert counters_at_insert == [8]
        assert result.value.invoice_number == "INV-007"

    async def test_items_tagged_with_invoice_id(self, use_case, command, mock_item_repo):
        await use_case.execute("user_1", command)

        items = mock_item_repo.create_many.call_args.args[0]
        assert {item.invoice_id for item in items} == {"invoice_new"}

    async def test_explicit_number_still_advances_counter(
        self, use_case, command, owner, mock_user_repo
    ):
        command.invoice_number = "CUSTOM-1"

        result = await use_case.execute("user_1", command)

        assert result.is_ok()
        assert result.value.invoice_number == "CUSTOM-1"
        mock_user_repo.increment_invoice_counter.assert_called_once()

    async def test_currency_defaults_to_owner_currency(self, use_case, command, owner):
        owner.default_currency = "MXN"

        result = await use_case.execute("user_1", command)

        assert result.value.currency == "MXN"


@pytest.mark.asyncio
class TestCreateInvoiceErrors:
    async def test_validation_error_touches_nothing(
        self, use_case, command, mock_user_repo, mock_invoice_repo, mock_uow
    ):
        command.items = []

        result = await use_case.execute("user_1", command)

        assert result.is_err()
        assert result.error.code == "VALIDATION_ERROR"
        assert result.error.field == "items"
        mock_user_repo.get_by_id.assert_not_called()
        mock_invoice_repo.create.assert_not_called()
        mock_uow.commit.assert_not_called()

    async def test_client_of_another_owner(
        self, use_case, command, mock_client_repo, mock_invoice_repo, mock_user_repo, mock_uow
    ):
        mock_client_repo.get_by_id = AsyncMock(return_value=None)

        result = await use_case.execute("user_1", command)

        assert result.is_err()
        assert result.error.code == "CLIENT_NOT_FOUND"
        mock_invoice_repo.create.assert_not_called()
        mock_user_repo.increment_invoice_counter.assert_not_called()
        mock_uow.rollback.assert_called_once()
        mock_uow.commit.assert_not_called()

    async def test_unknown_owner(self, use_case, command, mock_user_repo, mock_uow):
        mock_user_repo.get_by_id = AsyncMock(return_value=None)

        result = await use_case.execute("ghost", command)

        assert result.is_err()
        assert result.error.code == "USER_NOT_FOUND"
        mock_user_repo.increment_invoice_counter.assert_not_called()
        mock_uow.rollback.assert_called_once()

    async def test_item_insert_failure_rolls_back(
        self, use_case, command, mock_item_repo, mock_user_repo, mock_uow
    ):
        """
        Given: The item insert fails after the invoice row was written
        Then: The transaction, counter advance included, is rolled back
        """
        mock_item_repo.create_many = AsyncMock(side_effect=Exception("disk full"))

        result = await use_case.execute("user_1", command)

        assert result.is_err()
        assert result.error.code == "PERSISTENCE_ERROR"
        assert "disk full" in result.error.reason
        mock_user_repo.increment_invoice_counter.assert_called_once()
        mock_uow.rollback.assert_called_once()
        mock_uow.commit.assert_not_called()

    async def test_commit_failure_rolls_back(self, use_case, command, mock_uow):
        mock_uow.commit = AsyncMock(side_effect=Exception("serialization failure"))

        result = await use_case.execute("user_1", command)

        assert result.is_err()
        assert result.error.code == "PERSISTENCE_ERROR"
        mock_uow.rollback.assert_called_once()
