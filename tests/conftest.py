"""
Shared fixtures for the querysync test suite.
"""

import pytest

from querysync import (
    ApplicationConfig, DataProvider, Environment, Repository, RepositoryConfig, set_config
)


class StubProvider(DataProvider):
    """Provider whose operations are replaced per test with mocks"""
    pass


@pytest.fixture(autouse=True)
def testing_config():
    """Every test starts from the TESTING configuration"""
    config = ApplicationConfig.for_environment(Environment.TESTING)
    set_config(config)
    yield config
    set_config(None)


@pytest.fixture
def provider():
    return StubProvider()


@pytest.fixture
def repository(provider):
    return Repository(RepositoryConfig(name="resource", data_provider=provider))

