"""
Campaign message composer.

Renders WhatsApp, email and SMS texts for a trigger by interpolating the
customer's first name, recommendations and discount into per-trigger templates.
Delivery is handled outside this package.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List

from customer_tagging.models.automation import (
    AutomationTrigger,
    CampaignMessage,
    DiscountSensitivity,
    EmailMessage,
    PersonalizationData,
    TriggerType,
)

FALLBACK_ITEM = "signature_dishes"
FALLBACK_CATEGORY = "dishes"

TEMPLATES: Dict[TriggerType, Dict[str, str]] = {
    TriggerType.NEW_CUSTOMER: {
        "whatsapp": (
            "Hi {first_name}! 🎉 Welcome to our restaurant family! As a new customer, "
            "enjoy 20% off your next order. What would you like to try? {top_two} are customer favorites!"
        ),
        "subject": "Welcome {first_name}! Your 20% discount awaits",
        "body": (
            "Dear {first_name},\n\nWelcome to our restaurant! We're excited to have you join our family. "
            "Enjoy 20% off your next visit and try our signature dishes: {top_three}.\n\n"
            "Best regards,\nThe Team"
        ),
        "sms": "Hi {first_name}! Welcome! Get 20% off your next order. Try our {top_item}!",
    },
    TriggerType.CHURN_RISK: {
        "whatsapp": (
            "Hi {first_name}, we miss you! 😊 It's been a while since your last visit. "
            "Come back and enjoy {discount} off + a complimentary {top_item}. When can we see you again?"
        ),
        "subject": "We miss you {first_name}! {discount} off to welcome you back",
        "body": (
            "Dear {first_name},\n\nWe noticed it's been a while since your last visit and we miss having you! "
            "Come back and enjoy {discount} off your meal plus a complimentary {top_item}.\n\n"
            "We'd love to see you again soon!\n\nWarm regards,\nThe Team"
        ),
        "sms": "Hi {first_name}! We miss you. Get {discount} off + free {top_item} on your comeback visit!",
    },
    TriggerType.VIP_UPGRADE: {
        "whatsapp": (
            "🌟 Congratulations {first_name}! You're now a VIP member! Enjoy exclusive perks: "
            "priority seating, chef's special tastings, and 15% off all orders. "
            "Thank you for being an amazing customer!"
        ),
        "subject": "🌟 Welcome to VIP Status, {first_name}!",
        "body": (
            "Dear {first_name},\n\nCongratulations! You've been upgraded to VIP status for being such a "
            "valued customer.\n\nYour VIP benefits include:\n- Priority seating\n- Exclusive chef's specials\n"
            "- 15% off all orders\n- Special event invitations\n\nThank you for your loyalty!\n\n"
            "Best regards,\nThe Management"
        ),
        "sms": "🌟 {first_name}, you're now VIP! Enjoy priority seating & 15% off all orders. Thank you for your loyalty!",
    },
    TriggerType.INACTIVE_CUSTOMER: {
        "whatsapp": (
            "Hi {first_name}, we haven't seen you in a while and wanted to check in! 😊 "
            "We have some exciting new {top_category} that we think you'd love. Come back with 25% off!"
        ),
        "subject": "{first_name}, we have something special for you!",
        "body": (
            "Dear {first_name},\n\nIt's been quite some time since your last visit, and we wanted to reach "
            "out personally. We've added some exciting new items to our menu that we think you'd enjoy.\n\n"
            "Come back and try them with 25% off your entire order!\n\nWe hope to see you soon,\nThe Team"
        ),
        "sms": "Hi {first_name}! New {top_category} added! Come back with 25% off your order.",
    },
}

DEFAULT_TEMPLATE: Dict[str, str] = {
    "whatsapp": "Hi {first_name}! We have something special for you based on your preferences. Visit us soon!",
    "subject": "Special offer for you, {first_name}!",
    "body": (
        "Dear {first_name},\n\nWe have a special offer just for you! Visit us soon to discover what we "
        "have in store.\n\nBest regards,\nThe Team"
    ),
    "sms": "Hi {first_name}! Special offer waiting for you. Visit us soon!",
}


@dataclass
class MessageComposer:
    """Pure template interpolation keyed by trigger type."""

    high_sensitivity_discount: str = "30%"
    standard_discount: str = "20%"

    def generate_campaign_message(
        self, trigger: AutomationTrigger, personalization: PersonalizationData
    ) -> CampaignMessage:
        template = TEMPLATES.get(trigger.trigger_type, DEFAULT_TEMPLATE)
        values = self._template_values(personalization)

        return CampaignMessage(
            whatsapp=template["whatsapp"].format(**values),
            email=EmailMessage(
                subject=template["subject"].format(**values),
                body=template["body"].format(**values),
            ),
            sms=template["sms"].format(**values),
        )

    def _template_values(self, personalization: PersonalizationData) -> Dict[str, str]:
        items: List[str] = personalization.recommended_items
        discount = (
            self.high_sensitivity_discount
            if personalization.discount_sensitivity == DiscountSensitivity.HIGH
            else self.standard_discount
        )
        return {
            "first_name": personalization.customer.first_name,
            "top_item": items[0] if items else FALLBACK_ITEM,
            "top_two": ", ".join(items[:2]) or FALLBACK_ITEM,
            "top_three": ", ".join(items[:3]) or FALLBACK_ITEM,
            "top_category": personalization.preferred_categories[0]
            if personalization.preferred_categories
            else FALLBACK_CATEGORY,
            "discount": discount,
        }
