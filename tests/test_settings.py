import os
import unittest
from unittest.mock import patch

from pydantic import ValidationError

from app.config.settings import Settings


class TestPortfolioSettings(unittest.TestCase):
    def test_defaults_need_no_env(self):
        with patch.dict(os.environ, {}, clear=True):
            settings = Settings.from_env()

        self.assertEqual(settings.UPBIT_BASE_URL, "https://api.upbit.com")
        self.assertEqual(settings.UPBIT_TIMEOUT_SEC, 5.0)
        self.assertEqual(settings.PORTFOLIO_BASE_CURRENCY, "KRW")
        self.assertEqual(settings.PORTFOLIO_PORT, 8000)

    def test_env_overrides_are_normalized(self):
        env = {
            "UPBIT_BASE_URL": "https://proxy.example.test/",
            "UPBIT_TIMEOUT_SEC": "2.5",
            "PORTFOLIO_BASE_CURRENCY": " usdt ",
            "PORTFOLIO_PORT": "9100",
        }
        with patch.dict(os.environ, env, clear=True):
            settings = Settings.from_env()

        self.assertEqual(settings.UPBIT_BASE_URL, "https://proxy.example.test")
        self.assertEqual(settings.UPBIT_TIMEOUT_SEC, 2.5)
        self.assertEqual(settings.PORTFOLIO_BASE_CURRENCY, "USDT")
        self.assertEqual(settings.PORTFOLIO_PORT, 9100)

    def test_non_positive_timeout_fails_validation(self):
        with patch.dict(os.environ, {"UPBIT_TIMEOUT_SEC": "0"}, clear=True):
            with self.assertRaises(ValidationError):
                Settings.from_env()

    def test_blank_base_currency_fails_validation(self):
        with patch.dict(os.environ, {"PORTFOLIO_BASE_CURRENCY": "  "}, clear=True):
            with self.assertRaises(ValidationError):
                Settings.from_env()


if __name__ == "__main__":
    unittest.main()
