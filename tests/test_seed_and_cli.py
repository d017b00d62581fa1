import random
from decimal import Decimal

import pytest
from click.testing import CliRunner
from sqlalchemy import func, select

from budgetbook.cli import cli
from budgetbook.core.config import get_settings
from budgetbook.models import Budget, Transaction, TransactionType, User
from budgetbook.models.seed import BUDGETS_SEED_DATA, DEMO_EMAIL, DEMO_PASSWORD, run_seeding
from budgetbook.schemas import LoginRequest


class TestSeeding:
    async def test_seed_creates_demo_data(self, session, user_service, budget_service):
        assert await run_seeding(session, random.Random(7)) is True

        user = (await session.scalars(select(User).where(User.email == DEMO_EMAIL))).one()
        budgets = await budget_service.list_budgets(user)

        assert sorted(b.name for b in budgets) == sorted(name for name, _ in BUDGETS_SEED_DATA)
        for budget in budgets:
            assert len(budget.transactions) == 5
            for tx in budget.transactions:
                assert tx.amount >= Decimal("0")
                assert tx.amount == tx.amount.quantize(Decimal("0.01"))
                low = Decimal("500.00") if tx.type is TransactionType.INCOME else Decimal("20.00")
                assert tx.amount >= low

        await user_service.authenticate(LoginRequest.build(email=DEMO_EMAIL, password=DEMO_PASSWORD))

    async def test_seed_is_idempotent(self, session):
        await run_seeding(session, random.Random(1))
        assert await run_seeding(session, random.Random(2)) is False

        assert await session.scalar(select(func.count()).select_from(Budget)) == 3
        assert await session.scalar(select(func.count()).select_from(Transaction)) == 15


@pytest.fixture
def cli_env(tmp_path, monkeypatch):
    monkeypatch.setenv("BUDGETBOOK_DATABASE_URL", f"sqlite+aiosqlite:///{tmp_path / 'cli.db'}")
    get_settings.cache_clear()
    yield CliRunner()
    get_settings.cache_clear()


class TestCli:
    def test_init_db_then_seed_twice(self, cli_env):
        result = cli_env.invoke(cli, ["init-db"])
        assert result.exit_code == 0, result.output

        result = cli_env.invoke(cli, ["seed"])
        assert result.exit_code == 0, result.output
        assert "Demo data loaded." in result.output

        result = cli_env.invoke(cli, ["seed"])
        assert "already present" in result.output

    def test_reset_db_force_reloads_fixtures(self, cli_env):
        cli_env.invoke(cli, ["seed"])

        result = cli_env.invoke(cli, ["reset-db", "--force"])
        assert result.exit_code == 0, result.output

        result = cli_env.invoke(cli, ["seed"])
        assert "already present" in result.output

    def test_reset_db_without_fixtures_leaves_empty_schema(self, cli_env):
        cli_env.invoke(cli, ["seed"])

        result = cli_env.invoke(cli, ["reset-db", "--force", "--no-fixtures"])
        assert result.exit_code == 0, result.output

        result = cli_env.invoke(cli, ["seed"])
        assert "Demo data loaded." in result.output

    def test_reset_db_asks_for_confirmation(self, cli_env):
        result = cli_env.invoke(cli, ["reset-db"], input="n\n")

        assert result.exit_code == 1
        assert "Database reset complete." not in result.output
