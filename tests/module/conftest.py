"""Fixtures for module tests using WireMock testcontainers."""

from collections.abc import Generator

import pytest
from testcontainers.core import testcontainers_config
from wiremock.client import Mappings
from wiremock.constants import Config
from wiremock.testing.testcontainer import WireMockContainer


@pytest.fixture(scope="session", autouse=True)
def _disable_ryuk() -> None:
    """Disable the extra cleanup instance, we use contexts to clean containers."""
    testcontainers_config.ryuk_disabled = True


@pytest.fixture(scope="session")
def wiremock_server() -> Generator[WireMockContainer, None, None]:
    """Start WireMock container using wiremock's testcontainer support."""
    with WireMockContainer(secure=False) as wm:
        Config.base_url = wm.get_url("__admin")
        yield wm
        print(wm.get_logs())


@pytest.fixture(scope="session")
def wiremock_url(wiremock_server: WireMockContainer) -> str:
    """URL of WireMock as reachable from the test process."""
    host = wiremock_server.get_container_host_ip()
    port = wiremock_server.get_exposed_port(8080)
    return f"http://{host}:{port}"


@pytest.fixture(autouse=True)
def _reset_mappings(wiremock_server: WireMockContainer) -> None:
    """Start each test without stubs or recorded requests."""
    Mappings.delete_all_mappings()
