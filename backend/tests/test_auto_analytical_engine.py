"""Resolution engine tests, against in-memory rule stores."""

import random

import pytest

from app.services.auto_analytical_engine import (
    MatchContext,
    ResolutionEngine,
    rank_rules,
    score_rule,
)
from factories import FailingRuleStore, InMemoryRuleStore, RecordingLogger, make_rule

V1, V2 = 101, 102
P1, P2 = 201, 202
C1, C9 = 301, 309
A1, A2, A3 = 1, 2, 3


def engine_for(*rules):
    return ResolutionEngine(InMemoryRuleStore(rules), logger=RecordingLogger())


# ── Scoring ───────────────────────────────────────────


def test_score_counts_each_matching_field():
    rule = make_rule(1, A1, partner_id=V1, partner_tag="wood", product_id=P1, product_category_id=C1)
    context = MatchContext(partner_id=V1, partner_tag="wood", product_id=P1, product_category_id=C1)
    assert score_rule(rule, context) == 4


def test_score_ignores_wildcards_and_mismatches():
    rule = make_rule(1, A1, partner_id=V1, product_id=P2)
    context = MatchContext(partner_id=V1, partner_tag="wood", product_id=P1, product_category_id=C1)
    assert score_rule(rule, context) == 1


def test_rule_without_criteria_scores_zero():
    rule = make_rule(1, A1)
    context = MatchContext(partner_id=V1, partner_tag="wood", product_id=P1, product_category_id=C1)
    assert score_rule(rule, context) == 0
    assert rank_rules([rule], context) == []


def test_null_context_field_never_matches():
    rule = make_rule(1, A1, partner_tag="wood")
    assert score_rule(rule, MatchContext(partner_id=V1, partner_tag=None)) == 0


def test_tag_comparison_is_exact():
    rule = make_rule(1, A1, partner_tag="Wood")
    assert score_rule(rule, MatchContext(partner_tag="wood")) == 0
    assert score_rule(rule, MatchContext(partner_tag="Wood ")) == 0
    assert score_rule(rule, MatchContext(partner_tag="Wood")) == 1


def test_ranking_does_not_depend_on_input_order():
    rules = [
        make_rule(1, A1, minutes=0, partner_id=V1),
        make_rule(2, A2, minutes=5, product_category_id=C1),
        make_rule(3, A3, minutes=5, partner_id=V1, product_id=P1),
        make_rule(4, A1, minutes=10, product_id=P2),
    ]
    context = MatchContext(partner_id=V1, product_id=P1, product_category_id=C1)
    expected = [(c.rule.id, c.score) for c in rank_rules(rules, context)]

    shuffled = rules[:]
    random.Random(7).shuffle(shuffled)
    assert [(c.rule.id, c.score) for c in rank_rules(shuffled, context)] == expected
    assert expected == [(3, 2), (2, 1), (1, 1)]


# ── Resolution ────────────────────────────────────────


@pytest.mark.asyncio
async def test_no_rules_resolves_to_none():
    engine = engine_for()
    assert await engine.resolve(MatchContext(partner_id=V1, product_id=P1)) is None
    assert await engine.resolve(MatchContext()) is None


@pytest.mark.asyncio
async def test_single_exact_match_wins():
    engine = engine_for(make_rule(1, A1, partner_id=V1))
    assert await engine.resolve(MatchContext(partner_id=V1)) == A1


@pytest.mark.asyncio
async def test_no_applicable_rule_resolves_to_none():
    engine = engine_for(make_rule(1, A1, partner_id=V2), make_rule(2, A2, product_category_id=C9))
    assert await engine.resolve(MatchContext(partner_id=V1, product_category_id=C1)) is None


@pytest.mark.asyncio
async def test_higher_score_beats_recency():
    older_two_fields = make_rule(1, A1, minutes=0, partner_id=V1, product_id=P1)
    newer_one_field = make_rule(2, A2, minutes=30, partner_id=V1)
    engine = engine_for(older_two_fields, newer_one_field)

    assert await engine.resolve(MatchContext(partner_id=V1, product_id=P1)) == A1


@pytest.mark.asyncio
async def test_tie_goes_to_most_recent_rule():
    older = make_rule(1, A1, minutes=0, partner_id=V1, product_id=P1)
    newer = make_rule(2, A2, minutes=1, partner_tag="wood", product_category_id=C1)
    engine = engine_for(older, newer)

    context = MatchContext(partner_id=V1, partner_tag="wood", product_id=P1, product_category_id=C1)
    assert await engine.resolve(context) == A2


@pytest.mark.asyncio
async def test_same_creation_time_goes_to_highest_id():
    first = make_rule(7, A1, minutes=0, partner_id=V1)
    second = make_rule(8, A2, minutes=0, product_id=P1)
    engine = engine_for(first, second)

    assert await engine.resolve(MatchContext(partner_id=V1, product_id=P1)) == A2


@pytest.mark.asyncio
async def test_unmatched_category_does_not_help_a_rule():
    category_rule = make_rule(1, A1, minutes=10, product_category_id=C1)
    partner_rule = make_rule(2, A2, minutes=0, partner_id=V1)
    engine = engine_for(category_rule, partner_rule)

    assert await engine.resolve(MatchContext(partner_id=V1, product_category_id=None)) == A2
    assert await engine.resolve(MatchContext(partner_id=V2, product_category_id=None)) is None


@pytest.mark.asyncio
async def test_inactive_rules_are_ignored():
    engine = engine_for(
        make_rule(1, A1, minutes=0, partner_id=V1),
        make_rule(2, A2, minutes=5, partner_id=V1, product_id=P1, is_active=False),
    )
    assert await engine.resolve(MatchContext(partner_id=V1, product_id=P1)) == A1


@pytest.mark.asyncio
async def test_resolution_is_idempotent():
    store = InMemoryRuleStore([
        make_rule(1, A1, minutes=0, partner_id=V1),
        make_rule(2, A2, minutes=1, product_category_id=C1),
    ])
    engine = ResolutionEngine(store, logger=RecordingLogger())
    context = MatchContext(partner_id=V1, product_category_id=C1)

    first = await engine.resolve(context)
    second = await engine.resolve(context)
    assert first == second == A2
    assert store.calls == 2


@pytest.mark.asyncio
async def test_scenario_partner_rule_vs_newer_category_rule():
    engine = engine_for(
        make_rule(1, A1, minutes=0, partner_id=V1),
        make_rule(2, A2, minutes=1, product_category_id=C1),
    )
    assert await engine.resolve(MatchContext(partner_id=V1, product_category_id=C1)) == A2


@pytest.mark.asyncio
async def test_scenario_partner_and_product_rule():
    engine = engine_for(make_rule(1, A1, partner_id=V1, product_id=P1))
    winner = await engine.resolve_with_details(
        MatchContext(partner_id=V1, product_id=P1, product_category_id=C9)
    )
    assert winner.score == 2
    assert winner.analytical_account_id == A1


@pytest.mark.asyncio
async def test_store_failures_propagate():
    engine = ResolutionEngine(FailingRuleStore(), logger=RecordingLogger())
    with pytest.raises(ConnectionError):
        await engine.resolve(MatchContext(partner_id=V1))


@pytest.mark.asyncio
async def test_resolution_reports_to_injected_logger():
    logger = RecordingLogger()
    engine = ResolutionEngine(InMemoryRuleStore([make_rule(1, A1, partner_id=V1)]), logger=logger)

    await engine.resolve(MatchContext(partner_id=V1))

    (_, event, fields), = logger.events
    assert event == "analytical_resolution"
    assert fields["winner_rule_id"] == 1
    assert fields["candidates"] == [(1, 1)]
