"""Tag calculation inputs, results and restaurant-level summary."""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional, Set

from pydantic import BaseModel, Field

from customer_tagging.models.automation import AutomationTrigger
from customer_tagging.models.customer import (
    ActivityTag,
    BehaviorTag,
    Customer,
    SpendTag,
    ordered_behavior_tags,
)


class TagSnapshot(BaseModel):
    """Tag state of one customer at a point in time."""

    spend_tag: SpendTag
    activity_tag: ActivityTag
    behavior_tags: Set[BehaviorTag] = Field(default_factory=set)

    @classmethod
    def of(cls, customer: Customer) -> "TagSnapshot":
        return cls(
            spend_tag=customer.spend_tag,
            activity_tag=customer.activity_tag,
            behavior_tags=set(customer.behavior_tags),
        )

    def flatten(self) -> List[str]:
        """Spend, activity, then behavior tags in declaration order."""
        return [
            self.spend_tag.value,
            self.activity_tag.value,
            *(tag.value for tag in ordered_behavior_tags(self.behavior_tags)),
        ]


class TagCalculationInput(BaseModel):
    """Customer population plus the restaurant-wide visit gap baseline."""

    customers: List[Customer] = Field(default_factory=list)
    restaurant_avg_visit_gap: float = Field(ge=0)


class TagCalculationResult(BaseModel):
    """Before/after tag state for one customer."""

    customer_id: str
    old_tags: TagSnapshot
    new_tags: TagSnapshot
    changes_detected: bool


class PopulationThresholds(BaseModel):
    """Percentile thresholds computed once per run from the current roster."""

    ltv_90th: float
    aov_80th: float
    visit_freq_80th: float


class TagShare(BaseModel):
    """Count and percentage of customers carrying a tag."""

    tag: str
    count: int
    percentage: float


class RestaurantCustomerSummary(BaseModel):
    """Aggregate view of a restaurant's tagged customer base."""

    restaurant_id: str
    total_customers: int
    churn_rate: float
    active_rate: float
    average_visit_gap: float

    top_10_percent_ltv: List[Customer] = Field(default_factory=list)
    most_common_behavior_tags: List[TagShare] = Field(default_factory=list)
    new_customers_count: int = 0

    spend_tag_distribution: List[TagShare] = Field(default_factory=list)
    activity_tag_distribution: List[TagShare] = Field(default_factory=list)

    last_calculated: datetime


class TaggingRun(BaseModel):
    """Everything produced by one end-to-end recalculation."""

    restaurant_id: str
    restaurant_avg_visit_gap: float
    customers: List[Customer]
    results: List[TagCalculationResult]
    triggers: List[AutomationTrigger] = Field(default_factory=list)
    summary: Optional[RestaurantCustomerSummary] = None

