"""
Roster helpers at the boundary with the customer store.

Raw records are validated here; everything downstream works on Customer models.
"""

from __future__ import annotations

from typing import Any, Iterable, List, Mapping, Sequence

from pydantic import ValidationError

from customer_tagging.models.customer import ActivityTag, BehaviorTag, Customer, SpendTag
from customer_tagging.models.tagging import TagCalculationResult
from customer_tagging.utils.error_handling import RosterValidationError
from customer_tagging.utils.logging_config import get_logger
from customer_tagging.utils.validators import ensure_unique

logger = get_logger(__name__)

TAG_DIMENSIONS = {
    "spend": SpendTag,
    "activity": ActivityTag,
    "behavior": BehaviorTag,
}


def load_roster(records: Iterable[Mapping[str, Any]]) -> List[Customer]:
    """Validate raw customer records; reject the whole roster on any error."""
    customers: List[Customer] = []
    errors: List[dict] = []
    for index, record in enumerate(records):
        try:
            customers.append(Customer.model_validate(record))
        except ValidationError as exc:
            for error in exc.errors(include_url=False, include_context=False, include_input=False):
                errors.append({"index": index, "loc": list(error["loc"]), "msg": error["msg"]})

    if errors:
        logger.warning("Customer roster rejected", extra={"error_count": len(errors)})
        raise RosterValidationError(f"{len(errors)} invalid field(s) in customer roster", errors=errors)

    try:
        ensure_unique((c.id for c in customers), "customer id")
    except ValueError as exc:
        raise RosterValidationError(str(exc)) from exc
    return customers


def restaurant_average_visit_gap(customers: Sequence[Customer]) -> float:
    """Unrounded mean visit gap across the roster, 0 when empty."""
    if not customers:
        return 0.0
    return sum(c.average_visit_gap for c in customers) / len(customers)


def apply_tag_results(
    customers: Sequence[Customer], results: Sequence[TagCalculationResult]
) -> List[Customer]:
    """Copies of the customers carrying their new tags; unmatched customers pass through."""
    by_id = {result.customer_id: result for result in results}
    updated: List[Customer] = []
    for customer in customers:
        result = by_id.get(customer.id)
        if result is None:
            updated.append(customer)
            continue
        updated.append(
            customer.model_copy(
                update={
                    "spend_tag": result.new_tags.spend_tag,
                    "activity_tag": result.new_tags.activity_tag,
                    "behavior_tags": set(result.new_tags.behavior_tags),
                }
            )
        )
    return updated


def customers_by_tag(customers: Sequence[Customer], dimension: str, value: str) -> List[Customer]:
    """Filter a roster by spend, activity or behavior tag value."""
    if dimension not in TAG_DIMENSIONS:
        raise ValueError(f"unknown tag dimension: {dimension}")
    tag = TAG_DIMENSIONS[dimension](value)

    if dimension == "spend":
        return [c for c in customers if c.spend_tag == tag]
    if dimension == "activity":
        return [c for c in customers if c.activity_tag == tag]
    return [c for c in customers if tag in c.behavior_tags]
