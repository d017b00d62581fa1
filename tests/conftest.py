"""
Shared fixtures: a fresh in-memory database per test and the services wired
on top of one session, the way a request handler would wire them.
"""

import pytest
import pytest_asyncio

from budgetbook.core.security import AccessGuard, TokenService
from budgetbook.db.session import build_engine, build_sessionmaker, create_schema
from budgetbook.repositories import BudgetRepository, TransactionRepository, UserRepository
from budgetbook.schemas import BudgetRequest, TransactionRequest, UserRequest
from budgetbook.services import BudgetService, LedgerService, UserService

SECRET = "test-secret-key"


@pytest_asyncio.fixture
async def engine():
    engine = build_engine("sqlite+aiosqlite://")
    await create_schema(engine)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def session(engine):
    async with build_sessionmaker(engine)() as session:
        yield session


@pytest.fixture
def tokens():
    return TokenService(SECRET, max_age_seconds=3600)


@pytest.fixture
def user_service(session, tokens):
    return UserService(session, UserRepository(session), tokens)


@pytest.fixture
def budget_service(session):
    return BudgetService(session, BudgetRepository(session))


@pytest.fixture
def ledger_service(session, budget_service):
    return LedgerService(session, TransactionRepository(session), budget_service)


@pytest.fixture
def guard(session, tokens):
    return AccessGuard(UserRepository(session), tokens)


@pytest.fixture
def register(user_service, session):
    """Registers a user and returns the ORM entity."""

    async def _register(email="a@example.com", password="secret1"):
        created = await user_service.register_user(UserRequest.build(email=email, password=password))
        return await UserRepository(session).get_by_id(created.id)

    return _register


@pytest.fixture
def make_budget(budget_service):
    async def _make_budget(owner, name="Trip", description=None):
        return await budget_service.create_budget(owner, BudgetRequest.build(name=name, description=description))

    return _make_budget


@pytest.fixture
def append(ledger_service):
    async def _append(budget, amount, kind, comment="entry"):
        data = TransactionRequest.build(amount=amount, type=kind, comment=comment)
        return await ledger_service.append_transaction(budget, data)

    return _append
