"""Context builder and line processor tests."""

from decimal import Decimal

import pytest
from fastapi import HTTPException

from app.models import AnalyticalAccount, Contact, Product
from app.schemas.document import DocumentLineCreate
from app.services.auto_analytical_engine import (
    ContextBuilder,
    LineProcessor,
    MatchContext,
    ResolutionEngine,
)
from factories import InMemoryEntityStore, InMemoryRuleStore, RecordingLogger, make_rule

VENDOR, UNTAGGED_VENDOR = 11, 12
CHAIRS, TABLES = 21, 22
CHAIR, TABLE, PART = 31, 32, 33
WORKSHOP, SHOWROOM, MANUAL = 1, 2, 99


@pytest.fixture
def partners():
    return InMemoryEntityStore([
        Contact(id=VENDOR, name="Oakwood", contact_type="VENDOR", tag="wood"),
        Contact(id=UNTAGGED_VENDOR, name="Metalworks", contact_type="VENDOR"),
    ])


@pytest.fixture
def products():
    return InMemoryEntityStore([
        Product(id=CHAIR, name="Oak Chair", category_id=CHAIRS),
        Product(id=TABLE, name="Walnut Table", category_id=TABLES),
        Product(id=PART, name="Loose Part", category_id=None),
    ])


@pytest.fixture
def builder(partners, products):
    return ContextBuilder(partners, products, logger=RecordingLogger())


def processor_for(builder, *rules, accounts=None):
    engine = ResolutionEngine(InMemoryRuleStore(rules), logger=RecordingLogger())
    if accounts is None:
        accounts = InMemoryEntityStore([
            AnalyticalAccount(id=account_id, code=f"CC-{account_id}", name=f"Center {account_id}")
            for account_id in (WORKSHOP, SHOWROOM, MANUAL)
        ])
    return LineProcessor(builder, engine, accounts)


def line(product_id, account_id=None):
    return DocumentLineCreate(
        product_id=product_id,
        quantity=Decimal("2"),
        unit_price=Decimal("50.00"),
        analytical_account_id=account_id,
    )


# ── Context builder ───────────────────────────────────


@pytest.mark.asyncio
async def test_context_carries_partner_tag_and_product_category(builder):
    context = await builder.build(VENDOR, CHAIR)
    assert context == MatchContext(
        partner_id=VENDOR, partner_tag="wood", product_id=CHAIR, product_category_id=CHAIRS
    )


@pytest.mark.asyncio
async def test_unknown_partner_and_product_keep_their_ids(builder):
    context = await builder.build(404, 405)
    assert context == MatchContext(partner_id=404, partner_tag=None, product_id=405, product_category_id=None)


@pytest.mark.asyncio
async def test_untagged_partner_and_uncategorized_product(builder):
    context = await builder.build(UNTAGGED_VENDOR, PART)
    assert context.partner_tag is None
    assert context.product_category_id is None


@pytest.mark.asyncio
async def test_required_product_must_exist(builder):
    with pytest.raises(HTTPException) as exc_info:
        await builder.build(VENDOR, 405, require_product=True)
    assert exc_info.value.status_code == 404
    assert "Product 405" in exc_info.value.detail


# ── Line processor ────────────────────────────────────


@pytest.mark.asyncio
async def test_each_line_is_resolved_with_its_own_product(builder):
    processor = processor_for(
        builder,
        make_rule(1, WORKSHOP, product_category_id=CHAIRS),
        make_rule(2, SHOWROOM, product_category_id=TABLES),
    )
    result = await processor.assign_accounts(VENDOR, [line(CHAIR), line(TABLE), line(PART)])
    assert [l.analytical_account_id for l in result] == [WORKSHOP, SHOWROOM, None]


@pytest.mark.asyncio
async def test_manual_account_is_never_replaced(builder, products):
    processor = processor_for(
        builder,
        make_rule(1, WORKSHOP, partner_id=VENDOR, partner_tag="wood", product_id=CHAIR, product_category_id=CHAIRS),
    )
    manual = line(CHAIR, account_id=MANUAL)

    result = await processor.assign_accounts(VENDOR, [manual])

    assert result == [manual]
    assert result[0].analytical_account_id == MANUAL
    assert products.lookups == [CHAIR]


@pytest.mark.asyncio
async def test_input_lines_are_not_mutated(builder):
    processor = processor_for(builder, make_rule(1, WORKSHOP, partner_tag="wood"))
    original = line(CHAIR)

    result = await processor.assign_accounts(VENDOR, [original])

    assert original.analytical_account_id is None
    assert result[0].analytical_account_id == WORKSHOP
    assert result[0].quantity == original.quantity


@pytest.mark.asyncio
async def test_context_is_built_once_per_product(builder, products):
    processor = processor_for(builder, make_rule(1, WORKSHOP, product_id=CHAIR))
    await processor.assign_accounts(VENDOR, [line(CHAIR), line(CHAIR), line(TABLE)])
    assert products.lookups == [CHAIR, TABLE]


@pytest.mark.asyncio
async def test_line_order_does_not_change_assignments(builder):
    rules = [
        make_rule(1, WORKSHOP, minutes=0, partner_id=VENDOR),
        make_rule(2, SHOWROOM, minutes=1, product_category_id=TABLES),
    ]
    lines = [line(CHAIR), line(TABLE), line(PART)]

    forward = await processor_for(builder, *rules).assign_accounts(VENDOR, lines)
    backward = await processor_for(builder, *rules).assign_accounts(VENDOR, lines[::-1])

    by_product = {l.product_id: l.analytical_account_id for l in forward}
    assert by_product == {l.product_id: l.analytical_account_id for l in backward}
    assert by_product == {CHAIR: WORKSHOP, TABLE: SHOWROOM, PART: WORKSHOP}


@pytest.mark.asyncio
async def test_missing_product_fails_the_whole_batch(builder):
    processor = processor_for(builder, make_rule(1, WORKSHOP, partner_id=VENDOR))
    with pytest.raises(HTTPException) as exc_info:
        await processor.assign_accounts(VENDOR, [line(CHAIR), line(999)])
    assert exc_info.value.status_code == 404


@pytest.mark.asyncio
async def test_no_match_leaves_account_empty(builder):
    processor = processor_for(builder)
    result = await processor.assign_accounts(UNTAGGED_VENDOR, [line(PART)])
    assert result[0].analytical_account_id is None


@pytest.mark.asyncio
async def test_manual_line_with_missing_product_is_rejected(builder):
    processor = processor_for(builder)
    with pytest.raises(HTTPException) as exc_info:
        await processor.assign_accounts(VENDOR, [line(999, account_id=MANUAL)])
    assert exc_info.value.status_code == 404
    assert exc_info.value.detail == "Product 999 not found"


@pytest.mark.asyncio
async def test_manual_line_with_unknown_account_is_rejected(builder):
    processor = processor_for(builder)
    with pytest.raises(HTTPException) as exc_info:
        await processor.assign_accounts(VENDOR, [line(CHAIR), line(TABLE, account_id=7777)])
    assert exc_info.value.status_code == 404
    assert exc_info.value.detail == "Analytical account 7777 not found"


@pytest.mark.asyncio
async def test_manual_references_are_checked_once(builder, products):
    accounts = InMemoryEntityStore([AnalyticalAccount(id=MANUAL, code="CC-M", name="Manual")])
    processor = processor_for(builder, accounts=accounts)

    await processor.assign_accounts(
        VENDOR, [line(CHAIR, account_id=MANUAL), line(CHAIR, account_id=MANUAL), line(TABLE)]
    )

    assert products.lookups == [CHAIR, TABLE]
    assert accounts.lookups == [MANUAL]
