#!/usr/bin/env python3
"""
Shared configuration utility for TableTalk.

Provides flexible .env file discovery plus typed access to the Slack,
OpenAI and server settings used by the bot, the API and the CLI.
"""

import os
from pathlib import Path
from dotenv import load_dotenv
from typing import Optional


ENV_FILENAME = ".env.tabletalk"
TRUE_VALUES = ("true", "1", "yes", "on")


class ConfigManager:
    """
    Centralized configuration management for TableTalk.

    Features:
    - Flexible .env file discovery (current dir + up to 2 parent dirs)
    - Slack and OpenAI credential lookup with actionable errors
    - Type-safe helpers for optional tuning values
    """

    def __init__(self):
        self._env_loaded = False
        self._env_path: Optional[Path] = None
        self.load_environment()

    def load_environment(self) -> bool:
        """
        Load the first .env.tabletalk found in the working directory, its
        parent or its grandparent.

        Returns:
            bool: True if a file was loaded
        """
        if self._env_loaded:
            return True

        cwd = Path.cwd()
        for directory in (cwd, *list(cwd.parents)[:2]):
            env_file = directory / ENV_FILENAME
            if env_file.is_file():
                load_dotenv(env_file, override=True)
                self._env_path = env_file
                self._env_loaded = True
                return True

        return False

    def get_slack_bot_token(self) -> str:
        """
        Get the Slack bot token from environment.

        Returns:
            str: The bot token (xoxb-...)

        Raises:
            ValueError: If the token is not set
        """
        token = os.getenv("SLACK_BOT_TOKEN", "").strip()
        if not token:
            raise ValueError(
                "SLACK_BOT_TOKEN environment variable not set. "
                "Get your bot token from https://api.slack.com/apps -> Your App -> "
                "OAuth & Permissions -> Bot User OAuth Token"
            )
        return token

    def get_slack_signing_secret(self) -> Optional[str]:
        """
        Get the Slack signing secret used to verify incoming requests.

        Returns:
            Optional[str]: The secret, or None when request verification is disabled
        """
        secret = os.getenv("SLACK_SIGNING_SECRET", "").strip()
        return secret or None

    def get_openai_api_key(self) -> str:
        """
        Get OpenAI API key from environment.

        Returns:
            str: The API key

        Raises:
            ValueError: If API key is not found
        """
        api_key = os.getenv("OPENAI_API_KEY", "").strip()
        if not api_key:
            raise ValueError(
                "OpenAI API key not found. Please set 'OPENAI_API_KEY' in .env.tabletalk"
            )
        return api_key

    def get_openai_model(self) -> str:
        """Model used for natural-language table building."""
        return self.get_env_string("OPENAI_MODEL", "gpt-4o-mini")

    def get_openai_temperature(self) -> float:
        """Sampling temperature for table building."""
        return self.get_env_float("OPENAI_TEMPERATURE", 0.3)

    def get_openai_max_retries(self) -> int:
        """Attempts made against the OpenAI API before giving up."""
        return self.get_env_int("OPENAI_MAX_RETRIES", 3)

    def get_server_address(self) -> tuple:
        """
        Get host and port for the Flask server.

        Returns:
            tuple: (host, port)
        """
        return (
            self.get_env_string("TABLETALK_HOST", "0.0.0.0"),
            self.get_env_int("TABLETALK_PORT", 5001),
        )

    def print_config_summary(self) -> None:
        """Print a summary of current configuration for debugging."""
        host, port = self.get_server_address()
        print("\n=== Configuration Summary ===")
        print(f"Environment file: {self._env_path or 'Not found'}")
        print(f"Environment loaded: {self._env_loaded}")
        print(f"Server: {host}:{port}")
        print(f"OpenAI model: {self.get_openai_model()}")
        print(f"OpenAI temperature: {self.get_openai_temperature()}")

        # Don't print the actual secrets
        for label, key in (
            ("OpenAI API key", "OPENAI_API_KEY"),
            ("Slack bot token", "SLACK_BOT_TOKEN"),
            ("Slack signing secret", "SLACK_SIGNING_SECRET"),
        ):
            value = os.getenv(key, "")
            if value:
                print(f"{label}: {mask_secret(value)}")
            else:
                print(f"{label}: Not set")
        print("==============================\n")

    def get_env_string(self, key: str, default: str = None) -> str:
        """Raw environment value, or default when unset."""
        return os.getenv(key, default)

    def get_env_int(self, key: str, default: int) -> int:
        """Integer environment value; unset or unparsable values give default."""
        return self._get_number(key, default, int)

    def get_env_float(self, key: str, default: float) -> float:
        """Float environment value; unset or unparsable values give default."""
        return self._get_number(key, default, float)

    def get_env_bool(self, key: str, default: bool) -> bool:
        """True for 'true', '1', 'yes' or 'on' (any case); default when unset."""
        value = os.getenv(key)
        if value is None:
            return default
        return value.strip().lower() in TRUE_VALUES

    @staticmethod
    def _get_number(key: str, default, cast):
        raw = os.getenv(key)
        if raw is None:
            return default
        try:
            return cast(raw)
        except ValueError:
            print(f"Warning: {key}={raw!r} is not a valid {cast.__name__}, using {default}")
            return default


def mask_secret(value: str, visible: int = 4) -> str:
    """Mask all but the last few characters of a secret."""
    if len(value) <= visible:
        return '*' * len(value)
    return f"{'*' * (len(value) - visible)}{value[-visible:]}"


config = ConfigManager()


def get_slack_bot_token() -> str:
    return config.get_slack_bot_token()


def get_slack_signing_secret() -> Optional[str]:
    return config.get_slack_signing_secret()


def get_env_string(key: str, default: str = None) -> str:
    return config.get_env_string(key, default)


if __name__ == "__main__":
    config.print_config_summary()
