from __future__ import annotations

import json

import pytest

from conftest import make_item, make_product
from storefront_cart.domain.cart import CartError, CartItem, Stock
from storefront_cart.domain.cart_rules import (
    AppendItem,
    IncrementItem,
    RemoveItem,
    SetItemAmount,
    apply_decision,
    check_stock,
    deserialize_cart,
    find_index,
    is_valid_amount,
    normalize_product_id,
    serialize_cart,
)


def test_serialized_cart_is_ordered_list_of_flat_records() -> None:
    raw = serialize_cart([make_item(2, 3), make_item(1, 1)])

    records = json.loads(raw)
    assert [record["id"] for record in records] == [2, 1]
    assert records[0] == {
        "id": 2,
        "title": "Sneaker 2",
        "price": 102.0,
        "image": "https://cdn.example.com/sneaker-2.jpg",
        "amount": 3,
    }


def test_serialization_round_trip_keeps_items_and_order() -> None:
    items = (make_item(3, 1), make_item(1, 4), make_item(2, 2))

    assert deserialize_cart(serialize_cart(items)) == items


def test_reads_records_written_by_web_client() -> None:
    raw = '[{"id": 1, "title": "Tênis", "price": 139.9, "image": "a.jpg", "amount": 2}]'

    (item,) = deserialize_cart(raw)

    assert item.id == 1
    assert item.product.title == "Tênis"
    assert item.amount == 2


@pytest.mark.parametrize(
    "raw",
    [
        None,
        "",
        "not json",
        '{"id": 1}',
        '[{"title": "no id", "amount": 1}]',
        '[{"id": 1, "title": "x"}]',
        '[{"id": 1, "amount": 0}]',
        '[{"id": 1, "amount": 1.9}]',
        '[{"id": 1, "amount": true}]',
        '[{"id": 1, "amount": "2"}]',
        '["oops"]',
    ],
)
def test_missing_or_corrupt_entry_is_empty_cart(raw) -> None:
    assert deserialize_cart(raw) == ()


@pytest.mark.parametrize("amount", ["1.9", "true", '"2"'])
def test_non_integer_stored_amount_is_not_coerced(amount) -> None:
    raw = f'[{{"id": 1, "title": "Tênis", "price": 139.9, "image": "a.jpg", "amount": {amount}}}]'

    assert deserialize_cart(raw) == ()


def test_duplicate_ids_keep_first_occurrence() -> None:
    raw = serialize_cart([make_item(1, 2), make_item(2, 1), make_item(1, 5)])

    items = deserialize_cart(raw)

    assert [(item.id, item.amount) for item in items] == [(1, 2), (2, 1)]


def test_find_index() -> None:
    items = (make_item(4, 1), make_item(7, 1))

    assert find_index(items, 7) == 1
    assert find_index(items, 5) is None


@pytest.mark.parametrize(
    ("amount", "expected"),
    [(1, True), (5, True), (0, False), (-3, False), (True, False), (1.5, False), ("2", False)],
)
def test_is_valid_amount(amount, expected) -> None:
    assert is_valid_amount(amount) is expected


def test_check_stock() -> None:
    assert check_stock(Stock(id=1, amount=3), 3) is None
    assert check_stock(Stock(id=1, amount=3), 4) == CartError.INSUFFICIENT_STOCK


def test_apply_decision_never_mutates_input() -> None:
    items = (make_item(1, 1), make_item(2, 2))

    appended = apply_decision(items, AppendItem(make_product(3)))
    incremented = apply_decision(items, IncrementItem(2))
    updated = apply_decision(items, SetItemAmount(1, 4))
    removed = apply_decision(items, RemoveItem(0))

    assert items == (make_item(1, 1), make_item(2, 2))
    assert appended[-1] == CartItem(product=make_product(3), amount=1)
    assert incremented[1].amount == 3
    assert updated[0].amount == 4
    assert removed == (make_item(2, 2),)


def test_apply_decision_rejects_unknown_decision() -> None:
    with pytest.raises(TypeError):
        apply_decision((), object())


def test_apply_decision_targets_item_in_current_cart() -> None:
    # item 1 was removed between validation and commit
    current = (make_item(2, 1),)

    assert apply_decision(current, IncrementItem(1)) is None
    assert apply_decision(current, SetItemAmount(1, 3)) is None
    assert apply_decision(current, RemoveItem(5)) is None
    assert apply_decision(current, IncrementItem(2)) == (make_item(2, 2),)


def test_append_of_product_already_in_cart_increments_it() -> None:
    current = (make_item(1, 1), make_item(2, 1))

    updated = apply_decision(current, AppendItem(make_product(1)))

    assert [(item.id, item.amount) for item in updated] == [(1, 2), (2, 1)]


@pytest.mark.parametrize(
    ("value", "expected"),
    [(1, 1), ("1", 1), (" 7 ", 7), ("abc", None), (True, None), (None, None), (1.0, None)],
)
def test_normalize_product_id(value, expected) -> None:
    assert normalize_product_id(value) == expected
