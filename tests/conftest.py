import pytest

from launch_router.settings import ResolverConfig


@pytest.fixture
def config() -> ResolverConfig:
    return ResolverConfig(endpoint_url="https://config.example.test/")
