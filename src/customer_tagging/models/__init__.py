"""Pydantic models for the tagging engine."""

from customer_tagging.models.automation import (  # noqa: F401
    AutomationTrigger,
    CampaignMessage,
    DiscountSensitivity,
    EmailMessage,
    MessageTone,
    PersonalizationData,
    ProcessedTrigger,
    TriggerData,
    TriggerType,
)
from customer_tagging.models.customer import (  # noqa: F401
    ActivityTag,
    BehaviorTag,
    Customer,
    CustomerOrder,
    OrderItem,
    OrderSource,
    SpendTag,
    ordered_behavior_tags,
)
from customer_tagging.models.tagging import (  # noqa: F401
    PopulationThresholds,
    RestaurantCustomerSummary,
    TagCalculationInput,
    TagCalculationResult,
    TaggingRun,
    TagShare,
    TagSnapshot,
)
