import sys
from pathlib import Path

# Ensure the application package root is on sys.path so importing application
# modules (e.g. `infrastructure.notifications`) works during pytest collection.
# Pytest may import `conftest` before the project root is on sys.path depending
# on invocation; add it explicitly here before importing application modules.
project_root = str(Path(__file__).resolve().parents[1])
if project_root not in sys.path:
    sys.path.insert(0, project_root)

import pytest  # noqa: E402
from infrastructure.services.providers import (  # noqa: E402
    get_notification_service,
    get_settings,
)


@pytest.fixture(autouse=True)
def clear_provider_caches():
    """Reset application-scoped providers between tests."""
    yield
    get_notification_service.cache_clear()
    get_settings.cache_clear()
