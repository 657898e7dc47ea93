"""
settings.py

Application configuration for tfizz.

Features:
- Centralized application configuration using Pydantic settings
- Location and request parameters of the external token service
- Constants for application-wide use

Usage:
Import appsettings for application configuration values.
"""

from typing import Final
from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from rich.console import Console

# Console instance for rich output
console: Final[Console] = Console()

# The token service rejects non-browser clients with a 403
CHROME_USER_AGENT: Final[str] = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/132.0.0.0 Safari/537.36"
)


class App(BaseSettings):
    """
    Application settings model.

    Settings can be overridden through environment variables with TFIZZ_ prefix.

    Attributes:
        beQuiet: Suppress detailed logging output
        token_api_url: Base URL of the external token service
        token_api_path: Path of the token endpoint on that service
        user_agent: User-Agent header sent to the token service
        request_timeout: HTTP timeout in seconds
        output_limit: Default number of results printed per command (0 = all)
    """

    beQuiet: bool = False

    token_api_url: str = "https://pie-healthy-swift.glitch.me"
    token_api_path: str = "/word"
    user_agent: str = CHROME_USER_AGENT

    # API request timeout in seconds
    request_timeout: float = 30

    output_limit: int = 0

    model_config = SettingsConfigDict(
        env_prefix="TFIZZ_",  # Environment variables with this prefix override settings
        case_sensitive=False,  # Allow case-insensitive environment variables
        extra="allow",  # Allow additional attributes not defined in the model
    )

    @field_validator("output_limit")
    @classmethod
    def output_limit_check(cls, value: int) -> int:
        if value < 0:
            raise ValueError("output_limit must be zero or positive")
        return value

    def token_endpoint(self) -> str:
        """
        Full URL of the external token endpoint.

        Returns:
            str: base URL joined with the endpoint path
        """
        return self.token_api_url.rstrip("/") + "/" + self.token_api_path.lstrip("/")


# Create the application settings instance
appsettings: Final[App] = App()
