from __future__ import annotations

from .models.upstream import Intent


class NewsFeedError(Exception):
    """Base class for errors surfaced to API callers."""


class ConfigurationError(NewsFeedError):
    """Raised when a required setting is absent; fatal for every request."""

    def __init__(self, setting: str) -> None:
        self.setting = setting
        super().__init__(f"Missing {setting} in environment")


class UpstreamError(NewsFeedError):
    """Raised when an intent-level upstream call fails and no fallback applies."""

    def __init__(
        self, status_code: int, detail: str, intent: Intent = Intent.HEADLINES
    ) -> None:
        self.status_code = status_code
        self.detail = detail
        self.intent = intent
        super().__init__(f"{intent.value} failed with {status_code}: {detail}")
