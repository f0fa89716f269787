"""Runtime configuration."""

from customer_tagging.config.settings import TaggingSettings  # noqa: F401
