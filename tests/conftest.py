import os
from pathlib import Path

import pytest


def pytest_addoption(parser):
    parser.addoption(
        "--env",
        action="store",
        default="test",
        help="Config environment to run tests on",
    )


def pytest_sessionstart(session):
    """Pytest hook to run before collecting tests.

    Initialize the ordering domain and push its domain_context, so the active
    domain can be referred to elsewhere as `current_domain`.
    """
    os.environ["PROTEAN_ENV"] = session.config.option.env

    from ordering.domain import ordering

    ordering.init()
    ordering.domain_context().push()


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their directory location."""
    for item in items:
        test_path = str(Path(item.fspath))

        if "/domain/" in test_path:
            item.add_marker(pytest.mark.domain)
        elif "/application/" in test_path:
            item.add_marker(pytest.mark.application)
        elif "/bdd/" in test_path:
            item.add_marker(pytest.mark.bdd)
        elif "/integration/" in test_path:
            item.add_marker(pytest.mark.integration)


@pytest.fixture(autouse=True)
def run_around_tests():
    """Fixture to automatically cleanup infrastructure after every test"""
    yield

    from protean import current_domain

    # Clear all databases
    for _, provider in current_domain.providers.items():
        provider._data_reset()

    # Drain event stores
    current_domain.event_store.store._data_reset()
