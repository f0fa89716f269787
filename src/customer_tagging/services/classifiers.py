"""
Per-customer tag classifiers.

Each classifier is a plain function of the customer, the population thresholds
and the rule settings; none of them reads a clock or shared state.
"""

from __future__ import annotations

from collections import Counter
from datetime import datetime
from typing import Iterable, Optional, Set

from customer_tagging.config.settings import TaggingSettings
from customer_tagging.models.customer import (
    ActivityTag,
    BehaviorTag,
    Customer,
    CustomerOrder,
    SpendTag,
)
from customer_tagging.utils.stats import days_between

DEFAULT_SETTINGS = TaggingSettings()


def classify_spend(
    customer: Customer,
    ltv_90th: float,
    aov_80th: float,
    settings: TaggingSettings = DEFAULT_SETTINGS,
) -> SpendTag:
    """Assign a spend tier; first matching rule wins."""
    if customer.total_spend >= ltv_90th:
        return SpendTag.VIP
    if customer.average_order_value >= aov_80th:
        return SpendTag.HIGH_SPENDER
    if customer.average_order_value >= aov_80th * settings.mid_spender_aov_ratio:
        return SpendTag.MID_SPENDER
    return SpendTag.LOW_SPENDER


def classify_activity(
    customer: Customer,
    restaurant_avg_visit_gap: float,
    visit_freq_80th: float,
    now: datetime,
    settings: TaggingSettings = DEFAULT_SETTINGS,
) -> ActivityTag:
    """
    Assign a lifecycle stage; first matching rule wins.

    The active (<= 1.5x gap) and churn (>= 2x gap) windows do not partition the
    timeline, and the inactive rule is only reached between them. The order
    below is the contract and must not be rearranged.
    """
    days_since_first = days_between(customer.first_visit_date, now)
    days_since_last = days_between(customer.last_visit_date, now)
    gap = customer.average_visit_gap

    if days_since_first <= settings.new_customer_gap_ratio * restaurant_avg_visit_gap:
        return ActivityTag.NEW
    if customer.total_visits >= visit_freq_80th:
        return ActivityTag.LOYAL
    if days_since_last <= settings.active_gap_ratio * gap:
        return ActivityTag.ACTIVE
    if days_since_last >= settings.churn_gap_ratio * gap:
        return ActivityTag.CHURN_RISK
    if days_since_last > settings.inactive_after_days:
        return ActivityTag.INACTIVE
    return ActivityTag.ACTIVE


def category_counts(orders: Iterable[CustomerOrder]) -> Counter:
    """Number of orders touching each category."""
    counts: Counter = Counter()
    for order in orders:
        counts.update(order.categories)
    return counts


def top_category(orders: Iterable[CustomerOrder]) -> Optional[str]:
    """Most-touched category; ties go to the lexicographically smallest name."""
    counts = category_counts(orders)
    if not counts:
        return None
    return min(counts, key=lambda name: (-counts[name], name))


def _share(orders: list, predicate) -> float:
    return sum(1 for order in orders if predicate(order)) / len(orders)


def tag_behavior(customer: Customer, settings: TaggingSettings = DEFAULT_SETTINGS) -> Set[BehaviorTag]:
    """Derive behavior tags from the order history; each rule is independent."""
    orders = customer.order_history
    tags: Set[BehaviorTag] = set()
    if not orders:
        return tags

    combo_orders = sum(1 for order in orders if order.has_combo)
    if combo_orders >= settings.combo_min_orders:
        tags.add(BehaviorTag.COMBO_RESPONDER)

    # Saturday=5, Sunday=6
    if _share(orders, lambda o: o.timestamp.weekday() >= 5) >= settings.weekend_share:
        tags.add(BehaviorTag.WEEKEND_ONLY)

    counts = category_counts(orders)
    total_touches = sum(counts.values())
    if total_touches and max(counts.values()) / total_touches > settings.category_loyalty_share:
        tags.add(BehaviorTag.CATEGORY_LOYALIST)

    if customer.guest_estimate_avg >= settings.family_min_guests:
        tags.add(BehaviorTag.FAMILY_DINER)

    lunch_start, lunch_end = settings.lunch_hours
    if _share(orders, lambda o: lunch_start <= o.timestamp.hour <= lunch_end) >= settings.time_slot_share:
        tags.add(BehaviorTag.LUNCH_REGULAR)

    dinner_start, dinner_end = settings.dinner_hours
    if _share(orders, lambda o: dinner_start <= o.timestamp.hour <= dinner_end) >= settings.time_slot_share:
        tags.add(BehaviorTag.DINNER_REGULAR)

    if customer.average_order_value < settings.price_sensitive_below:
        tags.add(BehaviorTag.PRICE_SENSITIVE)
    elif customer.average_order_value > settings.premium_above:
        tags.add(BehaviorTag.PREMIUM_SEEKER)

    return tags
