"""Business logic services: tagging, triggers, personalization and messaging."""

from customer_tagging.services.message_service import MessageComposer  # noqa: F401
from customer_tagging.services.orchestration_service import TaggingOrchestrationService  # noqa: F401
from customer_tagging.services.personalization_service import PersonalizationService  # noqa: F401
from customer_tagging.services.roster_service import (  # noqa: F401
    apply_tag_results,
    customers_by_tag,
    load_roster,
    restaurant_average_visit_gap,
)
from customer_tagging.services.tagging_service import CustomerTaggingService  # noqa: F401
from customer_tagging.services.trigger_service import AutomationTriggerService  # noqa: F401
