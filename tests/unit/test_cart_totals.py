from decimal import Decimal

from storefront.cart.service import calculate_cart_total

SESSION = "s1"

def test_empty_cart_yields_zero(store):
    totals = calculate_cart_total(SESSION)
    assert totals.items == []
    assert totals.total_amount == Decimal("0.00")
    assert totals.is_empty

def test_single_line_example(store):
    store.add_product("A", "94.90")
    store.add_cart_line(SESSION, "A", 1)

    totals = calculate_cart_total(SESSION)

    assert totals.total_amount == Decimal("94.90")
    assert len(totals.items) == 1
    assert totals.items[0].total_price == Decimal("94.90")
    assert totals.items[0].unit_price == Decimal("94.90")

def test_total_is_exact_sum_of_lines(store):
    store.add_product("A", "19.99")
    store.add_product("B", 0.1)
    store.add_cart_line(SESSION, "A", 3)
    store.add_cart_line(SESSION, "B", 7)

    totals = calculate_cart_total(SESSION)

    assert totals.total_amount == Decimal("60.67")
    assert totals.total_amount == sum((i.total_price for i in totals.items), Decimal("0"))

def test_uses_current_catalog_price(store):
    store.add_product("A", "50.00")
    store.add_cart_line(SESSION, "A", 2)
    # Le prix change au catalogue après l'ajout au panier
    store.products["A"]["price"] = "45.00"

    assert calculate_cart_total(SESSION).total_amount == Decimal("90.00")

def test_missing_product_is_silently_dropped(store):
    store.add_product("A", "10.00")
    store.add_cart_line(SESSION, "A", 1)
    store.add_cart_line(SESSION, "deleted-product", 4)

    totals = calculate_cart_total(SESSION)

    assert [i.product_id for i in totals.items] == ["A"]
    assert totals.total_amount == Decimal("10.00")

def test_unreadable_price_is_dropped(store):
    store.add_product("A", "not-a-price")
    store.add_cart_line(SESSION, "A", 1)

    assert calculate_cart_total(SESSION).is_empty

def test_other_sessions_are_ignored(store):
    store.add_product("A", "10.00")
    store.add_cart_line("someone-else", "A", 5)

    assert calculate_cart_total(SESSION).is_empty

def test_catalog_failure_does_not_raise(monkeypatch):
    # Jointure catalogue en échec: fetch_products_by_ids journalise et renvoie []
    monkeypatch.setattr("storefront.cart.repository.fetch_cart_lines",
                        lambda session_id: [{"id": "l1", "user_id": SESSION, "product_id": "A", "quantity": 1}])
    def _boom():
        raise RuntimeError("db down")
    monkeypatch.setattr("storefront.infra.supabase_client.get_service_supabase", _boom)

    totals = calculate_cart_total(SESSION)
    assert totals.is_empty
