import os
import tempfile
from datetime import date
from decimal import Decimal
from pathlib import Path

# Set environment variables BEFORE any imports that might use settings
_test_db_dir = tempfile.mkdtemp()
os.environ["DATABASE_URL"] = f"sqlite:///{os.path.join(_test_db_dir, 'test_circulation.db')}"
os.environ["SMTP_HOST"] = ""

import pytest
from alembic import command
from alembic.config import Config
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker

from circulation.core.config import Settings
from circulation.domain.checkout_policy import build_policy_registry
from circulation.domain.enums import MembershipTier
from circulation.domain.late_fee import build_fee_registry
from circulation.main import app
from circulation.services.facade import CirculationFacade
from circulation.services.report import default_report_dispatcher
from circulation.services.search import default_search_dispatcher
import circulation.services.item as item_service
import circulation.services.member as member_service

ROOT = Path(__file__).resolve().parents[1]

# Fixed "today" for facade and report tests
TODAY = date(2026, 3, 2)


class RecordingNotifier:
    """Captures notifications instead of sending them."""

    def __init__(self):
        self.checkouts = []
        self.returns = []

    def notify_checkout(self, member, item) -> None:
        self.checkouts.append((member.email, item.code, item.due_date))

    def notify_return(self, member, item, fee: Decimal) -> None:
        self.returns.append((member.email, item.code, fee))


@pytest.fixture(scope="function")
def db_session():
    """Create a fresh database for each test and run migrations."""
    temp_db_dir = tempfile.mkdtemp()
    test_db_path = os.path.join(temp_db_dir, "test.db")
    test_db_url = f"sqlite:///{test_db_path}"

    test_engine = create_engine(
        test_db_url,
        connect_args={"check_same_thread": False},
    )

    # Enable WAL mode to reduce locking issues
    @event.listens_for(test_engine, "connect")
    def set_sqlite_pragma(dbapi_conn, connection_record):
        cursor = dbapi_conn.cursor()
        cursor.execute("PRAGMA journal_mode=WAL")
        cursor.close()

    TestingSessionLocal = sessionmaker(
        autocommit=False, autoflush=False, bind=test_engine
    )

    alembic_cfg = Config(str(ROOT / "alembic.ini"))
    alembic_cfg.set_main_option("script_location", str(ROOT / "alembic"))
    alembic_cfg.set_main_option("sqlalchemy.url", test_db_url)
    command.upgrade(alembic_cfg, "head")

    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        test_engine.dispose()

        for suffix in ["", "-wal", "-shm"]:
            path = f"{test_db_path}{suffix}"
            if os.path.exists(path):
                os.remove(path)
        if os.path.exists(temp_db_dir):
            os.rmdir(temp_db_dir)


@pytest.fixture(scope="function")
def db(db_session):
    """Alias for db_session to match test naming conventions."""
    return db_session


@pytest.fixture(scope="function")
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture(scope="function")
def client(db_session, notifier):
    """Create a test client with database and notifier dependency overrides."""

    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    from circulation.api.deps import get_db, get_notifier

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_notifier] = lambda: notifier

    yield TestClient(app)

    app.dependency_overrides.clear()


@pytest.fixture(scope="function")
def settings() -> Settings:
    return Settings()


@pytest.fixture(scope="function")
def facade(db, notifier, settings) -> CirculationFacade:
    """Facade wired with the default tier table and a clock fixed at TODAY."""
    return CirculationFacade(
        db,
        policies=build_policy_registry(settings),
        fees=build_fee_registry(settings),
        searches=default_search_dispatcher(),
        reports=default_report_dispatcher(clock=lambda: TODAY),
        notifier=notifier,
        clock=lambda: TODAY,
    )


@pytest.fixture(scope="function")
def make_item(db):
    """Factory for catalog items."""
    counter = {"n": 0}

    def _make(code=None, title="Clean Architecture", author="Robert Martin", **kwargs):
        counter["n"] += 1
        return item_service.create_item(
            db,
            code=code or f"978-0-000-0000{counter['n']}",
            title=title,
            author=author,
            **kwargs,
        )

    return _make


@pytest.fixture(scope="function")
def make_member(db):
    """Factory for members."""

    def _make(email="reader@example.com", name="Test Reader", tier=MembershipTier.REGULAR):
        return member_service.register_member(db, email=email, name=name, tier=tier)

    return _make


@pytest.fixture(scope="function")
def check_out(db):
    """Put an item in the checked-out state directly, bypassing the facade."""

    def _check_out(item, member, due_date: date):
        item = item_service.mark_checked_out(db, item, member, due_date)
        member_service.increment_count(db, member)
        return item

    return _check_out


@pytest.fixture(scope="function")
def item(make_item):
    return make_item(code="978-0-321-49805-2")


@pytest.fixture(scope="function")
def regular_member(make_member):
    return make_member(email="regular@example.com", name="Regular Reader")


@pytest.fixture(scope="function")
def premium_member(make_member):
    return make_member(
        email="premium@example.com", name="Premium Reader", tier=MembershipTier.PREMIUM
    )


@pytest.fixture(scope="function")
def student_member(make_member):
    return make_member(
        email="student@example.com", name="Student Reader", tier=MembershipTier.STUDENT
    )
