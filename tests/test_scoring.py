import pytest

from lead_quality.config import EXCELLENT_THRESHOLD, OKAY_THRESHOLD, ScoringPolicy, round_half_up
from lead_quality.models import BusinessLead, Tier
from lead_quality.scoring import classify_score, combine_scores, score_lead

SEARCH_LOCATION = "Dublin, Ireland"


@pytest.fixture()
def scenario_leads():
    return [
        BusinessLead(name="A", email="a@x.com", phone="5551234567", website="a.com", address="Dublin"),
        BusinessLead(name="B", address="Dublin"),
        BusinessLead(name="C"),
    ]


def test_thresholds_are_pinned() -> None:
    assert EXCELLENT_THRESHOLD == 80
    assert OKAY_THRESHOLD == 50


@pytest.mark.parametrize(
    ("score", "tier"),
    [
        (100, Tier.EXCELLENT),
        (80, Tier.EXCELLENT),
        (79, Tier.OKAY),
        (50, Tier.OKAY),
        (49, Tier.POOR),
        (0, Tier.POOR),
    ],
)
def test_tier_boundaries(score, tier) -> None:
    assert classify_score(score) is tier


def test_tier_labels_and_order() -> None:
    assert [tier.label for tier in (Tier.EXCELLENT, Tier.OKAY, Tier.POOR)] == ["Excellent", "Good", "Basic"]
    assert Tier.EXCELLENT > Tier.OKAY > Tier.POOR
    assert sorted([Tier.POOR, Tier.EXCELLENT, Tier.OKAY]) == [Tier.POOR, Tier.OKAY, Tier.EXCELLENT]


def test_scenario_scores(scenario_leads) -> None:
    a, b, c = (score_lead(lead, SEARCH_LOCATION) for lead in scenario_leads)

    assert a.contact_completeness == 100
    assert a.location_relevance == 100
    assert a.score == 100
    assert a.tier is Tier.EXCELLENT
    assert a.label == "Excellent"

    assert b.contact_completeness == 0
    assert b.location_relevance == 100
    assert b.score == 40
    assert b.tier is Tier.POOR

    assert c.contact_completeness == 0
    assert c.location_relevance == 50
    assert c.score == 20
    assert c.tier is Tier.POOR

    assert a.score > b.score > c.score


def test_reasons_follow_fixed_order(scenario_leads) -> None:
    a = score_lead(scenario_leads[0], SEARCH_LOCATION)
    c = score_lead(scenario_leads[2], SEARCH_LOCATION)

    assert a.reasons == ("Has email", "Has phone", "Has website", "Located in target area")
    assert c.reasons == ("Missing email", "Missing phone", "Missing website", "No address to verify location")


def test_contact_completeness_is_weighted_above_location() -> None:
    contact_only = BusinessLead(name="Contact", email="c@x.com", phone="5551234567", website="c.com", address="Berlin")
    address_only = BusinessLead(name="Address", address="Dublin")

    assert score_lead(contact_only, SEARCH_LOCATION).score == 60
    assert score_lead(address_only, SEARCH_LOCATION).score == 40


def test_two_of_three_channels_in_target_city_reaches_excellent() -> None:
    lead = BusinessLead(name="Two", email="t@x.com", phone="5551234567", address="Dublin 8")

    result = score_lead(lead, SEARCH_LOCATION)

    assert result.score == 80
    assert result.tier is Tier.EXCELLENT


def test_scoring_is_deterministic(scenario_leads) -> None:
    first = [score_lead(lead, SEARCH_LOCATION) for lead in scenario_leads]
    second = [score_lead(lead, SEARCH_LOCATION) for lead in scenario_leads]

    assert first == second


def test_adding_contact_channels_never_lowers_the_score() -> None:
    steps = [
        BusinessLead(name="M", address="Cork"),
        BusinessLead(name="M", address="Cork", email="m@x.com"),
        BusinessLead(name="M", address="Cork", email="m@x.com", phone="5551234567"),
        BusinessLead(name="M", address="Cork", email="m@x.com", phone="5551234567", website="m.ie"),
    ]

    scores = [score_lead(lead, SEARCH_LOCATION).score for lead in steps]

    assert scores == sorted(scores)
    assert scores[0] < scores[-1]


def test_combine_scores_clamps_and_uses_policy_weights() -> None:
    policy = ScoringPolicy(contact_weight=0.5, location_weight=0.5)

    assert combine_scores(100, 0, policy) == 50
    assert combine_scores(150, 150) == 100
    assert combine_scores(0, 0) == 0


def test_round_half_up() -> None:
    assert round_half_up(2.5) == 3
    assert round_half_up(0.5) == 1
    assert round_half_up(49.8) == 50
    assert round_half_up(53.33) == 53
