"""DevConnector API - user accounts, profiles and posts."""

__version__ = "0.1.0"
