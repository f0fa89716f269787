"""
End-to-end tagging run.

Mirrors the recalculation flow used by the dashboard: tag the roster, apply the
new tags, emit automation triggers and summarize. Campaign content for a single
trigger is composed on demand by process_trigger.
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Optional, Sequence

from customer_tagging.config.settings import TaggingSettings
from customer_tagging.models.automation import AutomationTrigger, ProcessedTrigger
from customer_tagging.models.customer import Customer
from customer_tagging.models.tagging import TaggingRun
from customer_tagging.services.message_service import MessageComposer
from customer_tagging.services.personalization_service import PersonalizationService
from customer_tagging.services.roster_service import apply_tag_results, restaurant_average_visit_gap
from customer_tagging.services.tagging_service import CustomerTaggingService
from customer_tagging.services.trigger_service import AutomationTriggerService
from customer_tagging.utils.clock import Clock, utc_now
from customer_tagging.utils.error_handling import NotFoundError
from customer_tagging.utils.logging_config import get_logger
from customer_tagging.utils.validators import ensure_present

logger = get_logger(__name__)


@dataclass
class TaggingOrchestrationService:
    """Sequential pipeline: tagging -> triggers -> summary."""

    settings: TaggingSettings = field(default_factory=TaggingSettings)
    clock: Clock = utc_now

    def __post_init__(self) -> None:
        self.tagger = CustomerTaggingService(settings=self.settings, clock=self.clock)
        self.triggers = AutomationTriggerService(clock=self.clock)
        self.personalizer = PersonalizationService()
        self.composer = MessageComposer()

    def recalculate(
        self,
        customers: Sequence[Customer],
        restaurant_id: str,
        restaurant_avg_visit_gap: Optional[float] = None,
    ) -> TaggingRun:
        """Retag the roster; the visit gap baseline defaults to the roster mean."""
        ensure_present(restaurant_id, "restaurant_id")
        start = time.perf_counter()
        if restaurant_avg_visit_gap is None:
            restaurant_avg_visit_gap = restaurant_average_visit_gap(customers)

        results = self.tagger.calculate_customer_tags(customers, restaurant_avg_visit_gap)
        updated = apply_tag_results(customers, results)
        triggers = self.triggers.process_tag_changes(results)
        summary = self.tagger.calculate_restaurant_summary(updated, restaurant_id)

        logger.info(
            "Tagging run completed",
            extra={
                "restaurant_id": restaurant_id,
                "customers": len(customers),
                "triggers": len(triggers),
                "duration_ms": int((time.perf_counter() - start) * 1000),
            },
        )
        return TaggingRun(
            restaurant_id=restaurant_id,
            restaurant_avg_visit_gap=restaurant_avg_visit_gap,
            customers=updated,
            results=results,
            triggers=triggers,
            summary=summary,
        )

    def process_trigger(
        self, trigger: AutomationTrigger, customers: Sequence[Customer]
    ) -> ProcessedTrigger:
        """Compose the campaign for a trigger and mark it processed."""
        customer = next((c for c in customers if c.id == trigger.customer_id), None)
        if customer is None:
            raise NotFoundError(f"Customer {trigger.customer_id} not found for trigger {trigger.id}")

        processed = self.triggers.mark_processed(trigger)
        personalization = self.personalizer.generate_personalized_content(customer)
        messages = self.composer.generate_campaign_message(processed, personalization)

        logger.info(
            "Trigger processed",
            extra={
                "trigger_id": trigger.id,
                "trigger_type": trigger.trigger_type.value,
                "customer_id": customer.id,
            },
        )
        return ProcessedTrigger(trigger=processed, personalization=personalization, messages=messages)
