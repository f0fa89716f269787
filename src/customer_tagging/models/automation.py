"""Automation trigger, personalization and campaign message models."""

from __future__ import annotations

import uuid
from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field

from customer_tagging.models.customer import Customer


class TriggerType(str, Enum):
    """Business-relevant tag transitions."""

    NEW_CUSTOMER = "new_customer"
    CHURN_RISK = "churn_risk"
    VIP_UPGRADE = "vip_upgrade"
    INACTIVE_CUSTOMER = "inactive_customer"
    TAG_CHANGED = "tag_changed"


class DiscountSensitivity(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class MessageTone(str, Enum):
    CASUAL = "casual"
    FORMAL = "formal"
    ENTHUSIASTIC = "enthusiastic"


class TriggerData(BaseModel):
    """Tags involved in the transition that fired a trigger."""

    old_tags: List[str] = Field(default_factory=list)
    new_tags: List[str] = Field(default_factory=list)


class AutomationTrigger(BaseModel):
    """Event handed to campaign automation; persisted by the caller."""

    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    customer_id: str
    trigger_type: TriggerType
    trigger_data: TriggerData = Field(default_factory=TriggerData)
    created_at: datetime
    processed: bool = False
    campaign_sent: Optional[datetime] = None


class PersonalizationData(BaseModel):
    """Recommendation bundle derived from a customer's current tags."""

    customer: Customer
    recommended_items: List[str] = Field(default_factory=list)
    preferred_categories: List[str] = Field(default_factory=list)
    optimal_contact_time: str = Field(pattern=r"^\d{2}:\d{2}$")
    discount_sensitivity: DiscountSensitivity = DiscountSensitivity.MEDIUM
    message_tone: MessageTone = MessageTone.CASUAL


class EmailMessage(BaseModel):
    subject: str
    body: str


class CampaignMessage(BaseModel):
    """Channel-specific texts for one trigger."""

    whatsapp: str
    email: EmailMessage
    sms: str


class ProcessedTrigger(BaseModel):
    """A trigger marked as handled, with the content composed for it."""

    trigger: AutomationTrigger
    personalization: PersonalizationData
    messages: CampaignMessage
