import random
from datetime import timedelta
from decimal import Decimal

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from budgetbook.core.logging import get_logger
from budgetbook.core.security.password import hash_password

from .base import utcnow
from .budget import Budget, Transaction, TransactionType
from .definitions import User

logger = get_logger(__name__)

# --- STATIC DATA DEFINITIONS ---

DEMO_EMAIL = "test@example.com"
DEMO_PASSWORD = "password123"

# Structure: (budget name, description)
BUDGETS_SEED_DATA: list[tuple[str, str]] = [
    ("Holiday savings", "Money for the dream holiday in Greece"),
    ("Emergency fund", "Reserve for unexpected expenses"),
    ("New car", "Savings to replace the old car"),
]

COMMENT_TEMPLATES: dict[TransactionType, list[str]] = {
    TransactionType.INCOME: [
        "Salary",
        "Annual bonus",
        "Tax refund",
        "Sold unused items",
        "Holiday allowance",
        "Freelance web project",
        "Share dividend",
        "Medical refund",
    ],
    TransactionType.EXPENSE: [
        "Groceries",
        "Fuel",
        "Utility bills",
        "Phone plan",
        "Car insurance",
        "Doctor visit",
        "Restaurant dinner",
        "Books",
        "Cinema with family",
        "Flat renovation",
        "Birthday present",
        "Streaming subscription",
    ],
}

# Amount ranges in cents, inclusive.
AMOUNT_RANGES: dict[TransactionType, tuple[int, int]] = {
    TransactionType.INCOME: (50_000, 500_000),
    TransactionType.EXPENSE: (2_000, 150_000),
}

TRANSACTIONS_PER_BUDGET = 5

# --- SEEDING FUNCTIONS ---


def build_demo_budget(owner: User, name: str, description: str, rng: random.Random) -> Budget:
    """
    Builds one back-dated budget with random transactions. Entries are created
    in chronological order so their ids follow their timestamps.
    """
    now = utcnow()
    budget = Budget(
        name=name,
        description=description,
        owner_id=owner.id,
        created_at=now - timedelta(days=rng.randint(30, 180)),
        transactions=[],
    )

    ages = sorted((rng.randint(1, 90) for _ in range(TRANSACTIONS_PER_BUDGET)), reverse=True)
    for days_ago in ages:
        kind = rng.choice(list(TransactionType))
        low, high = AMOUNT_RANGES[kind]
        budget.add_transaction(
            Transaction(
                amount=Decimal(rng.randint(low, high)) / 100,
                type=kind,
                comment=rng.choice(COMMENT_TEMPLATES[kind]),
                created_at=now - timedelta(days=days_ago),
            )
        )
    return budget


async def initialize_demo_user(session: AsyncSession) -> User | None:
    """Creates the demo account unless it already exists. Returns None when skipped."""
    existing = (await session.scalars(select(User).where(User.email == DEMO_EMAIL))).one_or_none()
    if existing:
        logger.info("seed_skipped", email=DEMO_EMAIL, reason="already exists")
        return None

    user = User(email=DEMO_EMAIL, password_hash=hash_password(DEMO_PASSWORD), is_active=True, roles=[])
    session.add(user)
    await session.flush()
    logger.info("seed_user_created", email=DEMO_EMAIL)
    return user


async def run_seeding(session: AsyncSession, rng: random.Random | None = None) -> bool:
    """
    The main entry point to load the demo fixtures. Idempotent: a second run
    leaves the database untouched. Returns True when data was written.
    """
    rng = rng or random.Random()

    user = await initialize_demo_user(session)
    if user is None:
        return False

    for name, description in BUDGETS_SEED_DATA:
        session.add(build_demo_budget(user, name, description, rng))
        logger.info("seed_budget_created", name=name)

    await session.commit()
    return True
