"""
Automation trigger service.

Scans tag calculation results for business-relevant transitions and emits
trigger events for campaign automation. Persisting and dispatching the
triggers is up to the caller.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

from customer_tagging.models.automation import AutomationTrigger, TriggerData, TriggerType
from customer_tagging.models.customer import ActivityTag, SpendTag
from customer_tagging.models.tagging import TagCalculationResult
from customer_tagging.utils.clock import Clock, ensure_aware, utc_now
from customer_tagging.utils.error_handling import TriggerAlreadyProcessedError
from customer_tagging.utils.logging_config import get_logger

logger = get_logger(__name__)


@dataclass
class AutomationTriggerService:
    """Turns tag deltas into AutomationTrigger records."""

    clock: Clock = utc_now

    def process_tag_changes(self, results: List[TagCalculationResult]) -> List[AutomationTrigger]:
        """Emit triggers for every changed result; one result may emit several."""
        triggers: List[AutomationTrigger] = []

        for result in results:
            if not result.changes_detected:
                continue

            old, new = result.old_tags, result.new_tags
            customer_id = result.customer_id

            if old.activity_tag != ActivityTag.NEW and new.activity_tag == ActivityTag.NEW:
                triggers.append(
                    self._create_trigger(
                        customer_id,
                        TriggerType.NEW_CUSTOMER,
                        TriggerData(new_tags=[new.activity_tag.value]),
                    )
                )

            if old.activity_tag != ActivityTag.CHURN_RISK and new.activity_tag == ActivityTag.CHURN_RISK:
                triggers.append(
                    self._create_trigger(
                        customer_id,
                        TriggerType.CHURN_RISK,
                        TriggerData(old_tags=[old.activity_tag.value], new_tags=[new.activity_tag.value]),
                    )
                )

            if old.spend_tag != SpendTag.VIP and new.spend_tag == SpendTag.VIP:
                triggers.append(
                    self._create_trigger(
                        customer_id,
                        TriggerType.VIP_UPGRADE,
                        TriggerData(old_tags=[old.spend_tag.value], new_tags=[new.spend_tag.value]),
                    )
                )

            if old.activity_tag != ActivityTag.INACTIVE and new.activity_tag == ActivityTag.INACTIVE:
                triggers.append(
                    self._create_trigger(
                        customer_id,
                        TriggerType.INACTIVE_CUSTOMER,
                        TriggerData(old_tags=[old.activity_tag.value], new_tags=[new.activity_tag.value]),
                    )
                )

            triggers.append(
                self._create_trigger(
                    customer_id,
                    TriggerType.TAG_CHANGED,
                    TriggerData(old_tags=old.flatten(), new_tags=new.flatten()),
                )
            )

        logger.info(
            "Automation triggers generated",
            extra={"results": len(results), "triggers": len(triggers)},
        )
        return triggers

    def mark_processed(self, trigger: AutomationTrigger) -> AutomationTrigger:
        """Return a copy flagged as processed with the campaign timestamp set."""
        if trigger.processed:
            raise TriggerAlreadyProcessedError(f"Trigger {trigger.id} already processed")
        return trigger.model_copy(update={"processed": True, "campaign_sent": ensure_aware(self.clock())})

    def _create_trigger(
        self,
        customer_id: str,
        trigger_type: TriggerType,
        trigger_data: Optional[TriggerData] = None,
    ) -> AutomationTrigger:
        return AutomationTrigger(
            customer_id=customer_id,
            trigger_type=trigger_type,
            trigger_data=trigger_data or TriggerData(),
            created_at=ensure_aware(self.clock()),
        )
