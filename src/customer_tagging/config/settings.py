"""
Tagging rule configuration.

Defaults encode the restaurant business rules; only the runtime environment and
log level are picked up from environment variables.
"""

from dataclasses import dataclass
import os
from typing import Tuple


@dataclass(frozen=True)
class TaggingSettings:
    """Thresholds used by the classifiers, summary and personalization."""

    # Environment
    environment: str = "dev"
    log_level: str = "INFO"

    # Spend classification (descending-rank percentiles)
    ltv_percentile: float = 90
    aov_percentile: float = 80
    mid_spender_aov_ratio: float = 0.6

    # Activity classification
    visit_frequency_percentile: float = 80
    new_customer_gap_ratio: float = 0.5
    active_gap_ratio: float = 1.5
    churn_gap_ratio: float = 2.0
    inactive_after_days: int = 90

    # Behavior tagging
    combo_min_orders: int = 3
    weekend_share: float = 0.7
    category_loyalty_share: float = 0.6
    family_min_guests: float = 3
    lunch_hours: Tuple[int, int] = (11, 15)
    dinner_hours: Tuple[int, int] = (18, 22)
    time_slot_share: float = 0.7
    price_sensitive_below: float = 200
    premium_above: float = 800

    # Restaurant summary
    active_window_days: int = 30
    top_ltv_share: float = 0.1
    top_behavior_tags: int = 5

    @classmethod
    def from_environment(cls) -> "TaggingSettings":
        """Load settings from environment variables."""
        env = os.environ.get("ENVIRONMENT", "dev")

        # Production overrides
        if env == "prod":
            return cls(
                environment="prod",
                log_level=os.environ.get("LOG_LEVEL", "WARNING").upper(),
            )

        return cls(environment=env, log_level=os.environ.get("LOG_LEVEL", "INFO").upper())
