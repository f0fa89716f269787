"""
Tag aggregator and restaurant summary tests.

Run with: pytest tests/unit/test_tagging_service.py -v
"""

from datetime import datetime

import pytest

from customer_tagging.models.customer import ActivityTag, BehaviorTag, SpendTag
from customer_tagging.models.tagging import TagCalculationInput
from customer_tagging.services.roster_service import apply_tag_results
from customer_tagging.services.tagging_service import CustomerTaggingService

LUNCH = datetime(2026, 3, 9, 12, 30)


@pytest.fixture
def service(clock):
    return CustomerTaggingService(clock=clock)


@pytest.fixture
def roster(make_customer, make_order):
    """Ten customers with spend 100..1000 and varied habits."""
    customers = []
    for i in range(1, 11):
        customers.append(
            make_customer(
                f"cust-{i}",
                name=f"Guest {i}",
                total_spend=100.0 * i,
                average_order_value=50.0 * i + 100,
                total_visits=i,
                average_visit_gap=10.0,
                last_visit_days_ago=5 * i,
                guest_estimate_avg=3.5 if i % 3 == 0 else 1.5,
                order_history=[make_order(timestamp=LUNCH, combo=i % 2 == 0) for _ in range(3)],
            )
        )
    return customers


class TestThresholds:
    def test_scenario_ltv_threshold_is_max_of_ten(self, service, roster):
        thresholds = service.compute_thresholds(roster)
        assert thresholds.ltv_90th == 1000

    def test_aov_and_visit_thresholds(self, service, roster):
        thresholds = service.compute_thresholds(roster)
        # second highest of ten values
        assert thresholds.aov_80th == 550.0
        assert thresholds.visit_freq_80th == 9

    def test_empty_population(self, service):
        thresholds = service.compute_thresholds([])
        assert (thresholds.ltv_90th, thresholds.aov_80th, thresholds.visit_freq_80th) == (0, 0, 0)


class TestCalculateCustomerTags:
    def test_one_result_per_customer_in_order(self, service, roster):
        results = service.calculate_customer_tags(roster, 10)
        assert [r.customer_id for r in results] == [c.id for c in roster]

    def test_every_customer_gets_exactly_one_spend_and_activity_tag(self, service, roster):
        for result in service.calculate_customer_tags(roster, 10):
            assert isinstance(result.new_tags.spend_tag, SpendTag)
            assert isinstance(result.new_tags.activity_tag, ActivityTag)

    def test_only_top_spender_is_vip(self, service, roster):
        results = service.calculate_customer_tags(roster, 10)
        vips = [r.customer_id for r in results if r.new_tags.spend_tag == SpendTag.VIP]
        assert vips == ["cust-10"]

    def test_behavior_tags_computed(self, service, roster):
        results = {r.customer_id: r for r in service.calculate_customer_tags(roster, 10)}
        assert BehaviorTag.FAMILY_DINER in results["cust-3"].new_tags.behavior_tags
        assert BehaviorTag.COMBO_RESPONDER in results["cust-2"].new_tags.behavior_tags
        assert BehaviorTag.LUNCH_REGULAR in results["cust-1"].new_tags.behavior_tags
        assert BehaviorTag.PRICE_SENSITIVE in results["cust-1"].new_tags.behavior_tags

    def test_old_tags_snapshot_stored_state(self, service, make_customer):
        customer = make_customer(spend_tag="vip", activity_tag="loyal", behavior_tags=["weekend_only"])
        result = service.calculate_customer_tags([customer], 10)[0]
        assert result.old_tags.spend_tag == SpendTag.VIP
        assert result.old_tags.activity_tag == ActivityTag.LOYAL
        assert result.old_tags.behavior_tags == {BehaviorTag.WEEKEND_ONLY}

    def test_deterministic_for_fixed_clock(self, service, roster):
        assert service.calculate_customer_tags(roster, 10) == service.calculate_customer_tags(roster, 10)

    def test_naive_clock_is_read_as_utc(self, service, roster, now):
        naive = CustomerTaggingService(clock=lambda: now.replace(tzinfo=None))
        assert naive.calculate_customer_tags(roster, 10) == service.calculate_customer_tags(roster, 10)
        assert naive.calculate_restaurant_summary(roster, "rest-1").last_calculated == now

    def test_retagging_unchanged_population_detects_no_changes(self, service, roster):
        first = service.calculate_customer_tags(roster, 10)
        assert any(r.changes_detected for r in first)

        second = service.calculate_customer_tags(apply_tag_results(roster, first), 10)
        assert not any(r.changes_detected for r in second)

    def test_behavior_comparison_ignores_order(self, service, make_customer, make_order):
        orders = [make_order(timestamp=LUNCH, combo=True) for _ in range(3)]
        customer = make_customer(order_history=orders, average_order_value=150, total_spend=450)
        tags = service.calculate_customer_tags([customer], 10)[0].new_tags
        retagged = customer.model_copy(
            update={
                "spend_tag": tags.spend_tag,
                "activity_tag": tags.activity_tag,
                "behavior_tags": set(reversed(sorted(tags.behavior_tags))),
            }
        )
        assert not service.calculate_customer_tags([retagged], 10)[0].changes_detected

    def test_empty_population(self, service):
        assert service.calculate_customer_tags([], 10) == []

    def test_input_model_wrapper(self, service, roster):
        payload = TagCalculationInput(customers=roster, restaurant_avg_visit_gap=10)
        assert service.calculate(payload) == service.calculate_customer_tags(roster, 10)

    def test_does_not_mutate_customers(self, service, roster):
        before = [c.model_copy(deep=True) for c in roster]
        service.calculate_customer_tags(roster, 10)
        assert roster == before


class TestRestaurantSummary:
    def test_empty_roster_is_all_zero(self, service):
        summary = service.calculate_restaurant_summary([], "rest-1")
        assert summary.total_customers == 0
        assert summary.churn_rate == 0
        assert summary.active_rate == 0
        assert summary.average_visit_gap == 0
        assert summary.top_10_percent_ltv == []
        assert all(share.percentage == 0 for share in summary.spend_tag_distribution)

    def test_distributions_cover_every_tag(self, service, roster):
        summary = service.calculate_restaurant_summary(roster, "rest-1")
        assert [s.tag for s in summary.spend_tag_distribution] == [t.value for t in SpendTag]
        assert [s.tag for s in summary.activity_tag_distribution] == [t.value for t in ActivityTag]

    def test_spend_distribution_sums_to_hundred(self, service, make_customer):
        customers = [
            make_customer(f"c{i}", spend_tag=tag)
            for i, tag in enumerate(["vip", "low_spender", "low_spender", "mid_spender", "high_spender", "mid_spender"])
        ]
        summary = service.calculate_restaurant_summary(customers, "rest-1")
        assert sum(s.percentage for s in summary.spend_tag_distribution) == pytest.approx(100, abs=0.1)

    def test_rates(self, service, make_customer):
        customers = [
            make_customer("a", activity_tag="churn_risk", last_visit_days_ago=45, average_visit_gap=10),
            make_customer("b", activity_tag="new", last_visit_days_ago=2, average_visit_gap=20),
            make_customer("c", activity_tag="active", last_visit_days_ago=30, average_visit_gap=15),
        ]
        summary = service.calculate_restaurant_summary(customers, "rest-1")
        assert summary.churn_rate == 33.33
        assert summary.active_rate == 66.67
        assert summary.average_visit_gap == 15.0
        assert summary.new_customers_count == 1
        assert summary.last_calculated == service.clock()

    def test_top_ten_percent_rounds_up(self, service, roster):
        summary = service.calculate_restaurant_summary(roster[:9], "rest-1")
        assert [c.id for c in summary.top_10_percent_ltv] == ["cust-9"]

        summary = service.calculate_restaurant_summary(roster, "rest-1")
        assert [c.id for c in summary.top_10_percent_ltv] == ["cust-10"]

    def test_most_common_behavior_tags_top_five(self, service, make_customer):
        customers = [
            make_customer("a", behavior_tags=["family_diner", "weekend_only", "combo_responder"]),
            make_customer("b", behavior_tags=["family_diner", "weekend_only", "lunch_regular"]),
            make_customer("c", behavior_tags=["family_diner", "price_sensitive", "category_loyalist"]),
            make_customer("d", behavior_tags=["dinner_regular"]),
        ]
        summary = service.calculate_restaurant_summary(customers, "rest-1")
        tags = summary.most_common_behavior_tags
        assert len(tags) == 5
        assert tags[0].tag == "family_diner"
        assert tags[0].count == 3
        assert tags[0].percentage == 75.0
        assert tags[1].tag == "weekend_only"
        # equal counts keep declaration order
        assert [t.tag for t in tags[2:]] == ["combo_responder", "category_loyalist", "lunch_regular"]
