"""
Personalization service.

Folds a customer's tags into a recommendation bundle. Behavior tags are applied
first, then the spend tag, then the activity tag; later folds override tone and
discount sensitivity set by earlier ones.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Tuple

from customer_tagging.models.automation import DiscountSensitivity, MessageTone, PersonalizationData
from customer_tagging.models.customer import (
    ActivityTag,
    BehaviorTag,
    Customer,
    SpendTag,
    ordered_behavior_tags,
)
from customer_tagging.services.classifiers import top_category

DEFAULT_CONTACT_TIME = "18:00"

BEHAVIOR_ITEMS: Dict[BehaviorTag, Tuple[str, ...]] = {
    BehaviorTag.COMBO_RESPONDER: ("combo_meals", "value_deals"),
    BehaviorTag.FAMILY_DINER: ("family_platters", "kids_meals", "sharing_options"),
    BehaviorTag.LUNCH_REGULAR: ("quick_bites", "lunch_specials"),
    BehaviorTag.DINNER_REGULAR: ("dinner_specials", "premium_dishes"),
    BehaviorTag.PRICE_SENSITIVE: ("budget_options", "daily_deals"),
    BehaviorTag.PREMIUM_SEEKER: ("chef_specials", "premium_items"),
}

CONTACT_TIMES: Dict[BehaviorTag, str] = {
    BehaviorTag.WEEKEND_ONLY: "19:00",
    BehaviorTag.LUNCH_REGULAR: "11:30",
    BehaviorTag.DINNER_REGULAR: "18:30",
}

SPEND_ITEMS: Dict[SpendTag, Tuple[str, ...]] = {
    SpendTag.VIP: ("exclusive_items", "chef_table"),
    SpendTag.HIGH_SPENDER: ("premium_dishes", "wine_pairings"),
    SpendTag.LOW_SPENDER: ("value_meals", "student_discounts"),
}

ACTIVITY_ITEMS: Dict[ActivityTag, Tuple[str, ...]] = {
    ActivityTag.NEW: ("popular_items", "signature_dishes"),
    ActivityTag.CHURN_RISK: ("comeback_offers", "loyalty_rewards"),
    ActivityTag.LOYAL: ("new_items", "seasonal_specials"),
}


def _dedupe(values: List[str]) -> List[str]:
    return list(dict.fromkeys(values))


@dataclass
class PersonalizationService:
    """Maps tag state to recommended items, timing and tone."""

    default_contact_time: str = DEFAULT_CONTACT_TIME

    def generate_personalized_content(self, customer: Customer) -> PersonalizationData:
        items: List[str] = []
        categories: List[str] = []
        sensitivity = DiscountSensitivity.MEDIUM
        tone = MessageTone.CASUAL
        contact_time = self.default_contact_time

        for tag in ordered_behavior_tags(customer.behavior_tags):
            items.extend(BEHAVIOR_ITEMS.get(tag, ()))
            contact_time = CONTACT_TIMES.get(tag, contact_time)

            if tag == BehaviorTag.FAMILY_DINER:
                tone = MessageTone.ENTHUSIASTIC
            elif tag == BehaviorTag.PRICE_SENSITIVE:
                sensitivity = DiscountSensitivity.HIGH
            elif tag == BehaviorTag.PREMIUM_SEEKER:
                sensitivity = DiscountSensitivity.LOW
                tone = MessageTone.FORMAL
            elif tag == BehaviorTag.CATEGORY_LOYALIST:
                category = top_category(customer.order_history)
                if category:
                    categories.append(category)

        items.extend(SPEND_ITEMS.get(customer.spend_tag, ()))
        if customer.spend_tag == SpendTag.VIP:
            tone = MessageTone.FORMAL
            sensitivity = DiscountSensitivity.LOW
        elif customer.spend_tag == SpendTag.LOW_SPENDER:
            sensitivity = DiscountSensitivity.HIGH

        # Activity has the final say on tone and sensitivity.
        items.extend(ACTIVITY_ITEMS.get(customer.activity_tag, ()))
        if customer.activity_tag == ActivityTag.NEW:
            tone = MessageTone.ENTHUSIASTIC
        elif customer.activity_tag == ActivityTag.CHURN_RISK:
            sensitivity = DiscountSensitivity.HIGH

        return PersonalizationData(
            customer=customer,
            recommended_items=_dedupe(items),
            preferred_categories=_dedupe(categories),
            optimal_contact_time=contact_time,
            discount_sensitivity=sensitivity,
            message_tone=tone,
        )
