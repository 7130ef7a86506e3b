import pytest

from storefront.cart import service as cart_service
from storefront.errors import NotFoundError, RequestValidationError

def test_add_to_cart_inserts_new_line(store):
    store.add_product("A", "10.00")
    row = cart_service.add_to_cart("s1", "A", 2)
    assert row["quantity"] == 2
    assert len(store.lines_for("s1")) == 1

def test_add_to_cart_merges_quantity(store):
    store.add_product("A", "10.00")
    cart_service.add_to_cart("s1", "A", 2)
    row = cart_service.add_to_cart("s1", "A", 3)
    assert row["quantity"] == 5
    assert len(store.lines_for("s1")) == 1

def test_add_to_cart_merge_cannot_exceed_99(store):
    store.add_product("A", "10.00")
    cart_service.add_to_cart("s1", "A", 98)
    with pytest.raises(RequestValidationError):
        cart_service.add_to_cart("s1", "A", 2)
    assert store.lines_for("s1")[0]["quantity"] == 98

def test_add_unknown_product(store):
    with pytest.raises(NotFoundError):
        cart_service.add_to_cart("s1", "ghost", 1)

def test_update_line_of_other_session_is_not_found(store):
    store.add_product("A", "10.00")
    line = store.add_cart_line("owner", "A", 1)
    with pytest.raises(NotFoundError):
        cart_service.update_quantity("intruder", line["id"], 5)
    assert store.cart[line["id"]]["quantity"] == 1

def test_remove_line(store):
    store.add_product("A", "10.00")
    line = store.add_cart_line("s1", "A", 1)
    assert cart_service.remove_line("s1", line["id"]) is True
    assert store.lines_for("s1") == []

def test_clear_cart_only_touches_session(store):
    store.add_product("A", "10.00")
    store.add_cart_line("s1", "A", 1)
    store.add_cart_line("s1", "A", 2)
    store.add_cart_line("s2", "A", 1)
    assert cart_service.clear_cart("s1") == 2
    assert store.lines_for("s1") == []
    assert len(store.lines_for("s2")) == 1
