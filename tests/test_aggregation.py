from lead_quality.aggregation import group_leads, quality_stats, rank_leads, score_leads
from lead_quality.models import BusinessLead, QualityStats, Tier

SEARCH_LOCATION = "Dublin, Ireland"


def _scenario():
    return [
        BusinessLead(name="C"),
        BusinessLead(name="B", address="Dublin"),
        BusinessLead(name="A", email="a@x.com", phone="5551234567", website="a.com", address="Dublin"),
    ]


def _names(items):
    return [item.lead.name for item in items]


def test_group_leads_buckets_and_orders_by_score() -> None:
    grouped = group_leads(_scenario(), SEARCH_LOCATION)

    assert _names(grouped[Tier.EXCELLENT]) == ["A"]
    assert grouped.okay == []
    assert _names(grouped.poor) == ["B", "C"]
    assert _names(grouped.flatten()) == ["A", "B", "C"]
    assert grouped.total == 3


def test_ties_are_broken_by_case_insensitive_name() -> None:
    leads = [
        BusinessLead(name="delta", address="Dublin"),
        BusinessLead(name="Bravo", address="Dublin"),
        BusinessLead(name="alpha", address="Dublin"),
        BusinessLead(name="Charlie", address="Dublin"),
    ]

    grouped = group_leads(leads, SEARCH_LOCATION)

    assert _names(grouped.poor) == ["alpha", "Bravo", "Charlie", "delta"]


def test_grouping_ignores_input_order() -> None:
    leads = _scenario()

    forward = group_leads(leads, SEARCH_LOCATION)
    backward = group_leads(list(reversed(leads)), SEARCH_LOCATION)

    assert forward == backward


def test_same_named_leads_order_is_independent_of_input_order() -> None:
    first = BusinessLead(name="Same", email="first@x.com", address="Dublin")
    second = BusinessLead(name="Same", email="second@x.com", address="Dublin")

    forward = group_leads([first, second], SEARCH_LOCATION)
    backward = group_leads([second, first], SEARCH_LOCATION)

    assert forward == backward
    assert [item.key for item in forward.okay] == sorted([first.key, second.key])
    assert rank_leads([first, second], SEARCH_LOCATION) == rank_leads([second, first], SEARCH_LOCATION)


def test_grouping_is_deterministic_and_does_not_mutate_input() -> None:
    leads = _scenario()
    snapshot = list(leads)

    assert group_leads(leads, SEARCH_LOCATION) == group_leads(leads, SEARCH_LOCATION)
    assert leads == snapshot


def test_every_tier_is_present_for_empty_input() -> None:
    grouped = group_leads([], SEARCH_LOCATION)

    assert list(grouped) == [Tier.EXCELLENT, Tier.OKAY, Tier.POOR]
    assert grouped.flatten() == []


def test_rank_leads_sorts_across_tiers() -> None:
    ranked = rank_leads(_scenario(), SEARCH_LOCATION)

    assert _names(ranked) == ["A", "B", "C"]
    assert [item.quality.score for item in ranked] == [100, 40, 20]


def test_score_leads_keeps_input_order() -> None:
    assert _names(score_leads(_scenario(), SEARCH_LOCATION)) == ["C", "B", "A"]


def test_quality_stats_for_scenario() -> None:
    stats = quality_stats(_scenario(), SEARCH_LOCATION)

    assert stats == QualityStats(
        excellent=1,
        okay=0,
        poor=2,
        average_score=53,
        total_with_email=1,
        total_with_phone=1,
        total_with_website=1,
    )


def test_quality_stats_for_empty_input() -> None:
    stats = quality_stats([], SEARCH_LOCATION)

    assert stats.excellent == stats.okay == stats.poor == 0
    assert stats.average_score == 0
    assert stats.total == 0


def test_tier_counts_add_up_to_input_size() -> None:
    leads = [
        BusinessLead(name="Full", email="f@x.com", phone="5551234567", website="f.com", address="Dublin"),
        BusinessLead(name="Okay", email="o@x.com", address="Dublin"),
        BusinessLead(name="Far", email="far@x.com", phone="5551234567", website="far.com", address="Berlin"),
        BusinessLead(name="Bare"),
        BusinessLead(name="Cork", phone="021 123 4567", address="Cork, Ireland"),
    ]

    stats = quality_stats(leads, SEARCH_LOCATION)

    assert stats.excellent + stats.okay + stats.poor == len(leads)
    assert stats.total_with_email == 3
    assert stats.total_with_phone == 3
    assert stats.total_with_website == 2


def test_contact_totals_ignore_location() -> None:
    leads = [
        BusinessLead(name="Far", email="far@x.com", phone="5551234567", website="far.com", address="Berlin"),
    ]

    near = quality_stats(leads, "Berlin")
    far = quality_stats(leads, SEARCH_LOCATION)

    assert near.total_with_email == far.total_with_email == 1
    assert near.excellent == 1
    assert far.okay == 1
