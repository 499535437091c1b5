"""Configuration helpers for farmledger."""

from farmledger.config.logging import configure_logging, get_logger

__all__ = ["configure_logging", "get_logger"]
