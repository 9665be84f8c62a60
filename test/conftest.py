"""
Test Configuration and Fixtures

This module provides:
- Environment setup that forces the in-memory store backend
- A TestClient per test with a fresh container (no state leaks between tests)
- Catalog, account and token fixtures

Architecture:
- Unit tests (test/**/unit/): construct use cases / repos directly, mock where needed
- Integration tests (test/**/integration/): drive the FastAPI app through TestClient
"""

# =============================================================================
# CRITICAL: Environment setup MUST happen before any other imports
# Settings are read once at import time (src.platform.config.core_setting)
# =============================================================================
import os
from pathlib import Path

from test.util_constant import TEST_SECRET_KEY


def _early_setup_test_environment() -> None:
    os.environ['STORE_BACKEND'] = 'memory'
    os.environ['SECRET_KEY'] = TEST_SECRET_KEY
    os.environ['STORE_CALL_TIMEOUT_SECONDS'] = '5'
    os.environ.setdefault('DEBUG', 'true')

    test_log_dir = Path(__file__).parent / 'test_log'
    test_log_dir.mkdir(exist_ok=True)
    os.environ['TEST_LOG_DIR'] = str(test_log_dir)


_early_setup_test_environment()

from collections.abc import Generator  # noqa: E402
from datetime import time  # noqa: E402

from dependency_injector import providers  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
import pytest  # noqa: E402

from src.main import app  # noqa: E402
from src.platform.constant.route_constant import AUTHEN_SIGNUP  # noqa: E402
from src.platform.config.di import container  # noqa: E402
from src.service.dining.domain.entity.restaurant_entity import Restaurant  # noqa: E402
from src.service.dining.domain.entity.user_entity import UserEntity, UserRole  # noqa: E402
from src.service.dining.domain.value_object.entity_id import new_entity_id  # noqa: E402
from src.service.dining.driven_adapter.repo.in_memory_data_store import (  # noqa: E402
    InMemoryDataStore,
)
from src.service.dining.driven_adapter.security.bcrypt_password_hasher import (  # noqa: E402
    BcryptPasswordHasher,
)
from test.util_constant import (  # noqa: E402
    ANOTHER_USER_EMAIL,
    DEFAULT_PASSWORD,
    TEST_ADMIN_EMAIL,
    TEST_USER_EMAIL,
)
from test.shared.utils import build_restaurant  # noqa: E402


# Low work factor keeps bcrypt from dominating test time
container.password_hasher.override(providers.Singleton(BcryptPasswordHasher, rounds=4))


@pytest.fixture
def client() -> Generator[TestClient, None, None]:
    container.reset_singletons()
    with TestClient(app) as test_client:
        yield test_client
    container.reset_singletons()


@pytest.fixture
def memory_store(client: TestClient) -> InMemoryDataStore:
    return container.memory_store()


@pytest.fixture
def restaurant(memory_store: InMemoryDataStore) -> Restaurant:
    seeded = build_restaurant()
    memory_store.seed_restaurants([seeded])
    return seeded


@pytest.fixture
def japanese_restaurant(memory_store: InMemoryDataStore) -> Restaurant:
    seeded = build_restaurant(
        name='Sushi Masa', category='japanese', open_time=time(11, 30), close_time=time(21, 30)
    )
    memory_store.seed_restaurants([seeded])
    return seeded


def _sign_up(client: TestClient, email: str) -> str:
    response = client.post(
        AUTHEN_SIGNUP,
        json={'email': email, 'password': DEFAULT_PASSWORD, 'username': email.split('@')[0]},
    )
    assert response.status_code == 201, response.text
    return response.json()['token']


@pytest.fixture
def user_token(client: TestClient) -> str:
    return _sign_up(client, TEST_USER_EMAIL)


@pytest.fixture
def another_user_token(client: TestClient) -> str:
    return _sign_up(client, ANOTHER_USER_EMAIL)


@pytest.fixture
def admin_token(memory_store: InMemoryDataStore) -> str:
    # Admins cannot sign up through the API; place one straight into the store
    admin = UserEntity(
        id=new_entity_id(), email=TEST_ADMIN_EMAIL, username='admin', role=UserRole.ADMIN
    )
    admin.set_password(DEFAULT_PASSWORD, container.password_hasher())
    memory_store.users_by_email[admin.email] = admin
    return container.jwt_auth().create_jwt_token(admin)

