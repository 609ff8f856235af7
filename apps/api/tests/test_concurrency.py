"""Blocking provider calls must not serialize concurrent requests."""

from __future__ import annotations

import asyncio
import os
import time
import unittest

import httpx

from app.adapters.auth import MockIdentityProvider
from app.core.config import get_settings
from app.main import create_app
from app.routes.dependencies import get_category_service, get_identity_provider
from app.schemas.auth import IdentityUser

_DELAY_SECONDS = 0.4
_CONCURRENT_REQUESTS = 4


class _SlowCategoryService:
    def list_categories(self) -> list:
        time.sleep(_DELAY_SECONDS)
        return []


class _SlowIdentityProvider(MockIdentityProvider):
    def verify_token(self, token: str) -> IdentityUser:
        time.sleep(_DELAY_SECONDS)
        return super().verify_token(token)


class ConcurrentBlockingCallTests(unittest.IsolatedAsyncioTestCase):
    def setUp(self) -> None:
        self._old_backend = os.environ.get("GALILEA_BACKEND")
        os.environ["GALILEA_BACKEND"] = "memory"
        get_settings.cache_clear()

    def tearDown(self) -> None:
        if self._old_backend is None:
            os.environ.pop("GALILEA_BACKEND", None)
        else:
            os.environ["GALILEA_BACKEND"] = self._old_backend
        get_settings.cache_clear()

    async def _timed_requests(self, app, paths_and_headers: list[tuple[str, dict[str, str]]]) -> tuple[float, list]:
        transport = httpx.ASGITransport(app=app)
        async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as client:
            started = time.perf_counter()
            responses = await asyncio.gather(
                *(client.get(path, headers=headers) for path, headers in paths_and_headers)
            )
            return time.perf_counter() - started, responses

    async def test_slow_service_calls_run_in_parallel(self) -> None:
        app = create_app()
        app.dependency_overrides[get_category_service] = _SlowCategoryService

        elapsed, responses = await self._timed_requests(
            app,
            [("/api/v1/categories", {}) for _ in range(_CONCURRENT_REQUESTS)],
        )

        self.assertEqual([response.status_code for response in responses], [200] * _CONCURRENT_REQUESTS)
        self.assertLess(elapsed, _DELAY_SECONDS * _CONCURRENT_REQUESTS * 0.6)

    async def test_slow_token_verification_runs_in_parallel(self) -> None:
        app = create_app()
        store = app.state.store
        for index in range(_CONCURRENT_REQUESTS):
            store.insert("admin_profiles", {"user_id": f"user-{index}", "role": "editor"})
        app.dependency_overrides[get_identity_provider] = lambda: _SlowIdentityProvider(store)

        elapsed, responses = await self._timed_requests(
            app,
            [
                ("/api/v1/auth/me", {"Authorization": f"Bearer test:user-{index}"})
                for index in range(_CONCURRENT_REQUESTS)
            ],
        )

        self.assertEqual([response.status_code for response in responses], [200] * _CONCURRENT_REQUESTS)
        self.assertLess(elapsed, _DELAY_SECONDS * _CONCURRENT_REQUESTS * 0.6)


if __name__ == "__main__":
    unittest.main()
