"""Configuration management for contributor-stats."""

import os
from dataclasses import dataclass

from dotenv import load_dotenv


@dataclass
class Config:
    """Application configuration."""

    github_token: str | None
    github_api_url: str = "https://api.github.com"

    # Pagination
    default_per_page: int = 100
    page_delay: float = 0.01  # fixed pause between page requests, in seconds

    # Endpoint family: per-repository listings (False) or the Search API (True)
    use_search: bool = False

    # Rate limits (requests per hour)
    rest_rate_limit: int = 5000
    rest_rate_limit_unauth: int = 60

    # Timeouts
    request_timeout: float = 30.0

    @classmethod
    def from_env(cls) -> "Config":
        """Load configuration from environment variables."""
        # override=False ensures environment variables take precedence over .env
        load_dotenv(override=False)

        # Support both CONTRIBUTOR_STATS_TOKEN (preferred) and GITHUB_TOKEN (fallback)
        token = os.getenv("CONTRIBUTOR_STATS_TOKEN") or os.getenv("GITHUB_TOKEN")

        return cls(
            github_token=token,
            github_api_url=os.getenv("GITHUB_API_URL", "https://api.github.com"),
            use_search=os.getenv("CONTRIBUTOR_STATS_SEARCH", "").lower() in ("1", "true", "yes"),
        )

    @property
    def is_authenticated(self) -> bool:
        """Check if a GitHub token is configured."""
        return bool(self.github_token)

    @property
    def effective_rate_limit(self) -> int:
        """Get the effective rate limit based on authentication status."""
        return self.rest_rate_limit if self.is_authenticated else self.rest_rate_limit_unauth


# Global config instance
_config: Config | None = None


def get_config() -> Config:
    """Get or create the global configuration instance."""
    global _config
    if _config is None:
        _config = Config.from_env()
    return _config


def set_config(config: Config | None) -> None:
    """Set the global configuration instance (useful for testing)."""
    global _config
    _config = config
