"""Client for the Slack Web API (users, user groups, stars, team), incoming
webhooks, and data classes for real-time events."""

__version__ = "0.1.0"

__all__ = ["__version__"]