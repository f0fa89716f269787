"""
Customer tagging service.

Runs the spend, activity and behavior classifiers over a customer population
and compares the result with each customer's stored tags. Thresholds are
recomputed from the population on every call; nothing carries across runs.
"""

from __future__ import annotations

import math
from collections import Counter
from dataclasses import dataclass, field
from datetime import timedelta
from typing import Iterable, List, Sequence

from customer_tagging.config.settings import TaggingSettings
from customer_tagging.models.customer import ActivityTag, BehaviorTag, Customer, SpendTag
from customer_tagging.models.tagging import (
    PopulationThresholds,
    RestaurantCustomerSummary,
    TagCalculationInput,
    TagCalculationResult,
    TagShare,
    TagSnapshot,
)
from customer_tagging.services.classifiers import classify_activity, classify_spend, tag_behavior
from customer_tagging.utils.clock import Clock, ensure_aware, utc_now
from customer_tagging.utils.logging_config import get_logger
from customer_tagging.utils.stats import mean, percentage, top_percentile

logger = get_logger(__name__)


@dataclass
class CustomerTaggingService:
    """Tag aggregator and restaurant summary."""

    settings: TaggingSettings = field(default_factory=TaggingSettings)
    clock: Clock = utc_now

    def compute_thresholds(self, customers: Sequence[Customer]) -> PopulationThresholds:
        """Descending-rank percentiles over the current population."""
        return PopulationThresholds(
            ltv_90th=top_percentile((c.total_spend for c in customers), self.settings.ltv_percentile),
            aov_80th=top_percentile((c.average_order_value for c in customers), self.settings.aov_percentile),
            visit_freq_80th=top_percentile(
                (c.total_visits for c in customers), self.settings.visit_frequency_percentile
            ),
        )

    def calculate_customer_tags(
        self, customers: Sequence[Customer], restaurant_avg_visit_gap: float
    ) -> List[TagCalculationResult]:
        """Compute new tags for every customer, preserving input order."""
        now = ensure_aware(self.clock())
        thresholds = self.compute_thresholds(customers)

        results: List[TagCalculationResult] = []
        for customer in customers:
            old_tags = TagSnapshot.of(customer)
            new_tags = TagSnapshot(
                spend_tag=classify_spend(
                    customer, thresholds.ltv_90th, thresholds.aov_80th, self.settings
                ),
                activity_tag=classify_activity(
                    customer, restaurant_avg_visit_gap, thresholds.visit_freq_80th, now, self.settings
                ),
                behavior_tags=tag_behavior(customer, self.settings),
            )
            results.append(
                TagCalculationResult(
                    customer_id=customer.id,
                    old_tags=old_tags,
                    new_tags=new_tags,
                    changes_detected=(
                        old_tags.spend_tag != new_tags.spend_tag
                        or old_tags.activity_tag != new_tags.activity_tag
                        or old_tags.behavior_tags != new_tags.behavior_tags
                    ),
                )
            )

        logger.info(
            "Customer tags calculated",
            extra={
                "customers": len(customers),
                "changed": sum(1 for r in results if r.changes_detected),
                "ltv_90th": thresholds.ltv_90th,
                "aov_80th": thresholds.aov_80th,
                "visit_freq_80th": thresholds.visit_freq_80th,
            },
        )
        return results

    def calculate(self, payload: TagCalculationInput) -> List[TagCalculationResult]:
        """Convenience wrapper taking the bundled input model."""
        return self.calculate_customer_tags(payload.customers, payload.restaurant_avg_visit_gap)

    def calculate_restaurant_summary(
        self, customers: Sequence[Customer], restaurant_id: str
    ) -> RestaurantCustomerSummary:
        """Aggregate stored tags into distributions and headline rates."""
        now = ensure_aware(self.clock())
        total = len(customers)
        active_since = now - timedelta(days=self.settings.active_window_days)

        spend_counts = Counter(c.spend_tag for c in customers)
        activity_counts = Counter(c.activity_tag for c in customers)
        behavior_counts = Counter(tag for c in customers for tag in c.behavior_tags)

        # Stable sorts keep input order among equal spend and declaration order among equal counts.
        by_ltv = sorted(customers, key=lambda c: c.total_spend, reverse=True)
        top_ltv_count = math.ceil(total * self.settings.top_ltv_share)
        common_tags = sorted(
            (tag for tag in BehaviorTag if behavior_counts[tag]),
            key=lambda tag: behavior_counts[tag],
            reverse=True,
        )[: self.settings.top_behavior_tags]

        summary = RestaurantCustomerSummary(
            restaurant_id=restaurant_id,
            total_customers=total,
            churn_rate=percentage(activity_counts[ActivityTag.CHURN_RISK], total),
            active_rate=percentage(sum(1 for c in customers if c.last_visit_date >= active_since), total),
            average_visit_gap=mean(c.average_visit_gap for c in customers),
            top_10_percent_ltv=by_ltv[:top_ltv_count],
            most_common_behavior_tags=_shares(common_tags, behavior_counts, total),
            new_customers_count=activity_counts[ActivityTag.NEW],
            spend_tag_distribution=_shares(SpendTag, spend_counts, total),
            activity_tag_distribution=_shares(ActivityTag, activity_counts, total),
            last_calculated=now,
        )
        logger.info(
            "Restaurant summary calculated",
            extra={
                "restaurant_id": restaurant_id,
                "customers": total,
                "churn_rate": summary.churn_rate,
            },
        )
        return summary


def _shares(tags: Iterable, counts: Counter, total: int) -> List[TagShare]:
    return [
        TagShare(tag=tag.value, count=counts[tag], percentage=percentage(counts[tag], total))
        for tag in tags
    ]
