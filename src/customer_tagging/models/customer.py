"""Customer, order and tag models."""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Iterable, List, Optional, Set

from pydantic import BaseModel, Field, field_validator, model_validator

from customer_tagging.utils.clock import ensure_aware


class SpendTag(str, Enum):
    """Spend tier, exactly one per customer."""

    LOW_SPENDER = "low_spender"
    MID_SPENDER = "mid_spender"
    HIGH_SPENDER = "high_spender"
    VIP = "vip"


class ActivityTag(str, Enum):
    """Lifecycle stage, exactly one per customer."""

    NEW = "new"
    ACTIVE = "active"
    LOYAL = "loyal"
    CHURN_RISK = "churn_risk"
    INACTIVE = "inactive"


class BehaviorTag(str, Enum):
    """Behavioral labels; a customer carries any subset.

    Declaration order is the order tags are evaluated and personalized in.
    """

    COMBO_RESPONDER = "combo_responder"
    WEEKEND_ONLY = "weekend_only"
    CATEGORY_LOYALIST = "category_loyalist"
    FAMILY_DINER = "family_diner"
    LUNCH_REGULAR = "lunch_regular"
    DINNER_REGULAR = "dinner_regular"
    PRICE_SENSITIVE = "price_sensitive"
    PREMIUM_SEEKER = "premium_seeker"


class OrderSource(str, Enum):
    """Channel an order was placed through."""

    DINE_IN = "dine_in"
    TAKEAWAY = "takeaway"
    DELIVERY = "delivery"
    ONLINE = "online"


def ordered_behavior_tags(tags: Iterable[BehaviorTag]) -> List[BehaviorTag]:
    """Return behavior tags in declaration order."""
    present = set(tags)
    return [tag for tag in BehaviorTag if tag in present]


class OrderItem(BaseModel):
    """Single line of an order."""

    id: str
    name: str
    category: str
    price: float = Field(ge=0)
    quantity: int = Field(default=1, ge=1)
    is_combo: bool = False


class CustomerOrder(BaseModel):
    """Historical order; timestamps are restaurant-local wall clock."""

    id: str
    timestamp: datetime
    items: List[OrderItem] = Field(default_factory=list)
    categories: Set[str] = Field(default_factory=set)
    total_amount: float = Field(default=0.0, ge=0)
    guest_count_estimate: float = Field(default=1.0, ge=0)
    order_source: OrderSource = OrderSource.DINE_IN

    @property
    def has_combo(self) -> bool:
        return any(item.is_combo for item in self.items)


class Customer(BaseModel):
    """Customer record as supplied by the store, with its current tags."""

    id: str
    name: str
    phone: Optional[str] = None
    email: Optional[str] = None
    restaurant_id: Optional[str] = None

    # Visit tracking
    first_visit_date: datetime
    last_visit_date: datetime
    total_visits: int = Field(ge=0)

    # Financial metrics
    total_spend: float = Field(ge=0)
    average_order_value: float = Field(ge=0)
    average_visit_gap: float = Field(ge=0, description="days between visits")
    guest_estimate_avg: float = Field(default=0.0, ge=0)

    order_history: List[CustomerOrder] = Field(default_factory=list)

    # Tags
    spend_tag: SpendTag = SpendTag.LOW_SPENDER
    activity_tag: ActivityTag = ActivityTag.NEW
    behavior_tags: Set[BehaviorTag] = Field(default_factory=set)

    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @field_validator("id", "name")
    @classmethod
    def validate_required(cls, value: str) -> str:
        """Identity fields must not be blank."""
        cleaned = (value or "").strip()
        if not cleaned:
            raise ValueError("id and name must be provided")
        return cleaned

    @field_validator("first_visit_date", "last_visit_date")
    @classmethod
    def normalize_timezone(cls, value: datetime) -> datetime:
        return ensure_aware(value)

    @model_validator(mode="after")
    def validate_visit_window(self) -> "Customer":
        if self.first_visit_date > self.last_visit_date:
            raise ValueError("first_visit_date must not be after last_visit_date")
        return self

    @property
    def first_name(self) -> str:
        return self.name.split()[0]
