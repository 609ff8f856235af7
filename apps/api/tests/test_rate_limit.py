"""Fixed-window rate limiter tests."""

from __future__ import annotations

import threading
import unittest

from app.core.logging_safety import safe_rate_limit_key
from app.core.rate_limit import RateLimiter, RateLimitPolicy
from app.errors import ConfigurationError


class RateLimitPolicyTests(unittest.TestCase):
    def test_non_positive_values_are_rejected(self) -> None:
        with self.assertRaises(ConfigurationError):
            RateLimitPolicy(limit=0, window_seconds=60)
        with self.assertRaises(ConfigurationError):
            RateLimitPolicy(limit=10, window_seconds=0)
        with self.assertRaises(ConfigurationError):
            RateLimitPolicy(limit=-1, window_seconds=60)

    def test_defaults(self) -> None:
        policy = RateLimitPolicy()
        self.assertEqual((policy.limit, policy.window_seconds), (100, 60))

    def test_non_positive_cleanup_interval_is_rejected(self) -> None:
        with self.assertRaises(ConfigurationError):
            RateLimiter(cleanup_interval_seconds=0)


class RateLimiterTests(unittest.TestCase):
    def setUp(self) -> None:
        self.limiter = RateLimiter(RateLimitPolicy(limit=3, window_seconds=60))

    def test_admits_exactly_limit_requests_per_window(self) -> None:
        for now in (0, 10, 20):
            self.assertIsNone(self.limiter.check("ip:1.2.3.4", now=now))

        denial = self.limiter.check("ip:1.2.3.4", now=30)

        self.assertIsNotNone(denial)
        self.assertEqual(denial.limit, 3)
        self.assertEqual(denial.window_seconds, 60)
        self.assertEqual(denial.retry_after_seconds, 30)
        self.assertEqual(denial.reset_at, 60)

    def test_first_request_opens_window_with_count_one(self) -> None:
        self.limiter.check("ip:a", now=5)

        entry = self.limiter.get_entry("ip:a")
        self.assertEqual(entry.count, 1)
        self.assertEqual(entry.window_reset_at, 65)

    def test_window_resets_after_expiry(self) -> None:
        for now in (0, 10, 20):
            self.limiter.check("ip:a", now=now)
        self.assertIsNotNone(self.limiter.check("ip:a", now=30))

        self.assertIsNone(self.limiter.check("ip:a", now=61))
        entry = self.limiter.get_entry("ip:a")
        self.assertEqual(entry.count, 1)
        self.assertEqual(entry.window_reset_at, 121)

    def test_window_is_still_open_at_reset_instant(self) -> None:
        for now in (0, 1, 2):
            self.limiter.check("ip:a", now=now)

        denial = self.limiter.check("ip:a", now=60)

        self.assertIsNotNone(denial)
        self.assertEqual(denial.retry_after_seconds, 0)

    def test_rejected_requests_keep_counting_without_moving_reset(self) -> None:
        for now in (0, 1, 2, 3, 4):
            self.limiter.check("ip:a", now=now)

        entry = self.limiter.get_entry("ip:a")
        self.assertEqual(entry.count, 5)
        self.assertEqual(entry.window_reset_at, 60)

    def test_retry_after_rounds_up(self) -> None:
        for now in (0.0, 0.1, 0.2):
            self.limiter.check("ip:a", now=now)

        denial = self.limiter.check("ip:a", now=30.5)

        self.assertEqual(denial.retry_after_seconds, 30)

    def test_keys_are_independent(self) -> None:
        for now in range(4):
            self.limiter.check("api_key:a", now=now)
        self.assertIsNotNone(self.limiter.check("api_key:a", now=5))

        self.assertIsNone(self.limiter.check("api_key:b", now=5))
        self.assertEqual(self.limiter.get_entry("api_key:b").count, 1)

    def test_per_call_policy_overrides_default(self) -> None:
        strict = RateLimitPolicy(limit=1, window_seconds=10)

        self.assertIsNone(self.limiter.check("ip:a", now=0, policy=strict))
        denial = self.limiter.check("ip:a", now=1, policy=strict)

        self.assertIsNotNone(denial)
        self.assertEqual(denial.limit, 1)
        self.assertEqual(denial.retry_after_seconds, 9)

    def test_sweep_removes_expired_idle_keys(self) -> None:
        limiter = RateLimiter(RateLimitPolicy(limit=5, window_seconds=60), cleanup_interval_seconds=300)
        for index in range(50):
            limiter.check(f"ip:10.0.0.{index}", now=index)
        self.assertEqual(limiter.tracked_keys, 50)

        limiter.check("ip:late", now=400)

        self.assertEqual(limiter.tracked_keys, 1)
        self.assertIsNone(limiter.get_entry("ip:10.0.0.0"))

    def test_sweep_waits_for_cleanup_interval(self) -> None:
        limiter = RateLimiter(RateLimitPolicy(limit=5, window_seconds=10), cleanup_interval_seconds=300)
        limiter.check("ip:a", now=0)

        limiter.check("ip:b", now=200)

        self.assertEqual(limiter.tracked_keys, 2)

    def test_sweep_keeps_live_windows(self) -> None:
        limiter = RateLimiter(RateLimitPolicy(limit=5, window_seconds=600), cleanup_interval_seconds=300)
        limiter.check("ip:a", now=0)

        limiter.check("ip:b", now=301)

        self.assertEqual(limiter.tracked_keys, 2)

    def test_concurrent_checks_never_admit_more_than_limit(self) -> None:
        limiter = RateLimiter(RateLimitPolicy(limit=25, window_seconds=60))
        admitted: list[bool] = []
        lock = threading.Lock()

        def worker() -> None:
            for _ in range(10):
                result = limiter.check("ip:shared", now=1.0) is None
                with lock:
                    admitted.append(result)

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        self.assertEqual(sum(admitted), 25)
        self.assertEqual(limiter.get_entry("ip:shared").count, 80)


class SafeRateLimitKeyTests(unittest.TestCase):
    def test_hashes_value_but_keeps_scope_and_kind(self) -> None:
        masked = safe_rate_limit_key("email|api_key:secret-key")

        self.assertTrue(masked.startswith("email|api_key:"))
        self.assertNotIn("secret-key", masked)

    def test_unscoped_key(self) -> None:
        masked = safe_rate_limit_key("ip:1.2.3.4")

        self.assertTrue(masked.startswith("ip:"))
        self.assertNotIn("1.2.3.4", masked)


if __name__ == "__main__":
    unittest.main()
