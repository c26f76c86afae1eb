from typing import Any, List, Tuple

import pytest

from vehicle_data.config import VehicleDataConfig


class FakeFetch:
    """Stands in for http_client.fetch_json; replays queued (status, text, payload) answers."""

    def __init__(self, responses: List[Any]):
        self.responses = list(responses)
        self.calls: List[Tuple[str, dict, dict]] = []

    async def __call__(self, url, params=None, headers=None, timeout_sec=15.0):
        self.calls.append((url, dict(params or {}), dict(headers or {})))
        nxt = self.responses.pop(0)
        if isinstance(nxt, BaseException):
            raise nxt
        return nxt


def ok(payload):
    return 200, "", payload


@pytest.fixture
def config():
    return VehicleDataConfig(
        registry_base="https://registry.test/api/vehicles",
        backend_base="https://backend.test/api",
        years_base="https://years.test/api/0.3",
        api_key="secret-key-1234",
    )
