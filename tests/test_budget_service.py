import uuid
from decimal import Decimal
from unittest.mock import AsyncMock

import pytest
from sqlalchemy.exc import OperationalError

from budgetbook.exceptions import NotFoundError, StorageError
from budgetbook.repositories import UserRepository


class TestCreateBudget:
    async def test_new_budget_starts_at_zero(self, register, make_budget, budget_service):
        owner = await register()
        budget = await make_budget(owner, "Trip", "Summer in Crete")

        response = budget_service.describe(budget)
        assert isinstance(budget.id, uuid.UUID)
        assert response.name == "Trip"
        assert response.description == "Summer in Crete"
        assert response.balance == Decimal("0.00")
        assert response.created_at is not None

    async def test_list_is_scoped_to_owner(self, register, make_budget, budget_service):
        alice = await register("alice@example.com")
        bob = await register("bob@example.com")
        await make_budget(alice, "Food")
        await make_budget(alice, "Rent")
        await make_budget(bob, "Car")

        names = sorted(b.name for b in await budget_service.list_budgets(alice))
        assert names == ["Food", "Rent"]
        assert [b.name for b in await budget_service.list_budgets(bob)] == ["Car"]


class TestOwnershipGuard:
    async def test_owner_resolves_budget(self, register, make_budget, budget_service):
        owner = await register()
        budget = await make_budget(owner)

        assert await budget_service.resolve_owned_budget(owner, budget.id) is budget
        assert await budget_service.resolve_owned_budget(owner, str(budget.id)) is budget

    async def test_foreign_budget_looks_like_missing_budget(self, register, make_budget, budget_service):
        alice = await register("alice@example.com")
        bob = await register("bob@example.com")
        budget = await make_budget(alice)

        with pytest.raises(NotFoundError) as foreign:
            await budget_service.resolve_owned_budget(bob, budget.id)
        with pytest.raises(NotFoundError) as missing:
            await budget_service.resolve_owned_budget(bob, uuid.uuid4())

        assert type(foreign.value) is type(missing.value)
        assert foreign.value.messages == missing.value.messages
        assert foreign.value.status_code == 404

    async def test_malformed_id_is_not_found(self, register, budget_service):
        owner = await register()

        with pytest.raises(NotFoundError):
            await budget_service.resolve_owned_budget(owner, "not-a-uuid")


class TestDashboardSummary:
    async def test_totals_across_budgets(self, register, make_budget, append, budget_service):
        owner = await register()
        holiday = await make_budget(owner, "Holiday")
        car = await make_budget(owner, "Car")
        await append(holiday, "1000.00", "income")
        await append(holiday, "150.75", "expense")
        await append(car, "200.00", "income")
        await append(car, "300.00", "expense")

        summary = await budget_service.summarize(owner)

        assert summary.budget_count == 2
        assert summary.total_income == Decimal("1200.00")
        assert summary.total_expense == Decimal("450.75")
        assert summary.total_balance == Decimal("749.25")
        assert {b.name: b.balance for b in summary.budgets} == {
            "Holiday": Decimal("849.25"),
            "Car": Decimal("-100.00"),
        }

    async def test_empty_dashboard(self, register, budget_service):
        summary = await budget_service.summarize(await register())

        assert summary.budget_count == 0
        assert summary.total_balance == Decimal("0.00")
        assert summary.budgets == []


class TestStorageFailures:
    async def test_database_error_surfaces_as_opaque_storage_error(self, register, budget_service, monkeypatch):
        owner = await register()
        failure = OperationalError("SELECT budgets", {}, Exception("database is locked"))
        monkeypatch.setattr(budget_service._budget_repo, "list_for_owner", AsyncMock(side_effect=failure))

        with pytest.raises(StorageError) as exc_info:
            await budget_service.list_budgets(owner)

        assert exc_info.value.status_code == 500
        assert exc_info.value.messages == ["Internal server error."]
        assert "locked" not in str(exc_info.value)
        assert isinstance(exc_info.value.__cause__, OperationalError)

    async def test_session_is_usable_after_storage_error(
        self, session, register, make_budget, budget_service, monkeypatch
    ):
        owner = await register()
        owner_id = owner.id
        monkeypatch.setattr(
            budget_service._budget_repo,
            "list_for_owner",
            AsyncMock(side_effect=OperationalError("SELECT budgets", {}, Exception("gone"))),
        )
        with pytest.raises(StorageError):
            await budget_service.list_budgets(owner)
        monkeypatch.undo()

        # the rollback expired everything loaded before it
        owner = await UserRepository(session).get_by_id(owner_id)
        await make_budget(owner, "After failure")
        assert [b.name for b in await budget_service.list_budgets(owner)] == ["After failure"]
