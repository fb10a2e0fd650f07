"""Unit tests for accounts.core.config: settings validation."""

import unittest

from pydantic import SecretStr, ValidationError

from accounts.core.config import DEFAULT_JWT_SECRET, Settings


def _settings(**kwargs: object) -> Settings:
    return Settings(_env_file=None, **kwargs)


class TestDefaults(unittest.TestCase):
    """Defaults are usable for local development."""

    def test_defaults(self) -> None:
        settings = _settings(APP_ENV="dev", JWT_SECRET=SecretStr(DEFAULT_JWT_SECRET))
        self.assertEqual(settings.JWT_ALGORITHM, "HS256")
        self.assertEqual(settings.JWT_EXPIRE_MINUTES, 60)
        self.assertEqual(settings.BCRYPT_ROUNDS, 10)


class TestJwtSettings(unittest.TestCase):
    """Signing secret and expiry are validated at load."""

    def test_empty_secret_rejected(self) -> None:
        with self.assertRaises(ValidationError):
            _settings(JWT_SECRET=SecretStr("   "))

    def test_placeholder_secret_rejected_in_prod(self) -> None:
        with self.assertRaises(ValidationError):
            _settings(APP_ENV="prod", JWT_SECRET=SecretStr(DEFAULT_JWT_SECRET))

    def test_custom_secret_accepted_in_prod(self) -> None:
        settings = _settings(
            APP_ENV="prod", JWT_SECRET=SecretStr("a-real-production-secret-value-0001")
        )
        self.assertEqual(settings.APP_ENV, "prod")

    def test_expire_minutes_bounds(self) -> None:
        for value in (0, 10081):
            with self.assertRaises(ValidationError):
                _settings(JWT_EXPIRE_MINUTES=value)
        self.assertEqual(_settings(JWT_EXPIRE_MINUTES=1).JWT_EXPIRE_MINUTES, 1)

    def test_algorithm_stripped(self) -> None:
        self.assertEqual(_settings(JWT_ALGORITHM=" HS512 ").JWT_ALGORITHM, "HS512")


class TestOtherSettings(unittest.TestCase):
    """Database URL and bcrypt cost validation."""

    def test_bcrypt_rounds_bounds(self) -> None:
        for value in (3, 32):
            with self.assertRaises(ValidationError):
                _settings(BCRYPT_ROUNDS=value)

    def test_database_url_scheme(self) -> None:
        with self.assertRaises(ValidationError):
            _settings(DATABASE_URL="mysql://root@localhost/accounts")
        self.assertEqual(
            _settings(DATABASE_URL=" sqlite:///accounts.db ").DATABASE_URL,
            "sqlite:///accounts.db",
        )


if __name__ == "__main__":
    unittest.main()
