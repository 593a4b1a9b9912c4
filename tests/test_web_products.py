from catalog.models.product import Product
from conftest import auth_headers, make_product


def test_unauthenticated_user_is_redirected_to_login(client):
    response = client.get("/products")

    assert response.status_code == 302
    assert response.headers["location"] == "/login"


def test_products_page_shows_empty_state(client, user):
    response = client.get("/products", headers=auth_headers(user))

    assert response.status_code == 200
    assert "No products found" in response.text


def test_products_page_lists_products_in_order_with_eur_column(client, db, user):
    make_product(db, name="First table", price=10000)
    make_product(db, name="Second table", price=250)

    response = client.get("/products", headers=auth_headers(user))

    assert response.status_code == 200
    assert "No products found" not in response.text
    assert response.text.index("First table") < response.text.index("Second table")
    assert "100.00" in response.text
    assert "98.00" in response.text


def test_paginated_products_table_doesnt_contain_11th_record(client, db, user):
    for i in range(1, 12):
        make_product(db, name=f"Item {i:02d}", price=i * 100)

    response = client.get("/products", headers=auth_headers(user))

    assert response.status_code == 200
    assert "Item 10" in response.text
    assert "Item 11" not in response.text

    second_page = client.get("/products?page=2", headers=auth_headers(user))
    assert "Item 11" in second_page.text
    assert "Item 01" not in second_page.text


def test_non_admin_cannot_see_create_button(client, user):
    response = client.get("/products", headers=auth_headers(user))

    assert response.status_code == 200
    assert "Add new product" not in response.text


def test_admin_can_see_create_button(client, admin):
    response = client.get("/products", headers=auth_headers(admin))

    assert response.status_code == 200
    assert "Add new product" in response.text


def test_admin_can_access_create_page(client, admin):
    response = client.get("/products/create", headers=auth_headers(admin))
    assert response.status_code == 200


def test_non_admin_cannot_access_create_page(client, user):
    response = client.get("/products/create", headers=auth_headers(user))
    assert response.status_code == 403


def test_create_product_successful(client, db, admin):
    response = client.post(
        "/products",
        data={"name": "Product 123", "price": "1234"},
        headers=auth_headers(admin),
        follow_redirects=True,
    )

    assert response.status_code == 200
    assert "Product 123" in response.text

    last_product = db.query(Product).order_by(Product.id.desc()).first()
    assert last_product.name == "Product 123"
    assert last_product.price == 1234 * 100


def test_create_product_validation_error_redirects_back(client, db, admin):
    response = client.post(
        "/products",
        data={"name": "", "price": "12"},
        headers=auth_headers(admin),
    )

    assert response.status_code == 302
    assert response.headers["location"] == "/products/create"
    assert db.query(Product).count() == 0

    form = client.get("/products/create", headers=auth_headers(admin))
    assert "The name field is required." in form.text
    assert 'value="12"' in form.text

    # flashed errors are shown once
    again = client.get("/products/create", headers=auth_headers(admin))
    assert "The name field is required." not in again.text


def test_non_admin_cannot_create_product(client, db, user):
    response = client.post(
        "/products",
        data={"name": "Nope", "price": "1"},
        headers=auth_headers(user),
    )

    assert response.status_code == 403
    assert db.query(Product).count() == 0


def test_product_edit_contains_correct_values(client, db, admin):
    product = make_product(db, name="Editable", price=1234)

    response = client.get(f"/products/{product.id}/edit", headers=auth_headers(admin))

    assert response.status_code == 200
    assert 'value="Editable"' in response.text
    assert 'value="12.34"' in response.text


def test_product_edit_missing_product_returns_404(client, admin):
    response = client.get("/products/999999/edit", headers=auth_headers(admin))
    assert response.status_code == 404


def test_product_update_successful(client, db, admin):
    product = make_product(db, name="Old name", price=100)

    response = client.put(
        f"/products/{product.id}",
        data={"name": "New name", "price": "5.5", "description": "Updated"},
        headers=auth_headers(admin),
    )

    assert response.status_code == 302
    assert response.headers["location"] == "/products"
    db.refresh(product)
    assert product.name == "New name"
    assert product.price == 550
    assert product.description == "Updated"


def test_product_update_validation_error_redirects_back_to_form(client, db, admin):
    product = make_product(db, name="Keep me", price=100)

    response = client.put(
        f"/products/{product.id}",
        data={"name": "", "price": ""},
        headers=auth_headers(admin),
    )

    assert response.status_code == 302
    assert response.headers["location"] == f"/products/{product.id}/edit"

    form = client.get(f"/products/{product.id}/edit", headers=auth_headers(admin))
    assert "The name field is required." in form.text
    assert "The price field is required." in form.text

    db.refresh(product)
    assert product.name == "Keep me"


def test_product_update_through_method_override(client, db, admin):
    product = make_product(db, name="Form post", price=100)

    response = client.post(
        f"/products/{product.id}",
        data={"_method": "PUT", "name": "Form put", "price": "2"},
        headers=auth_headers(admin),
    )

    assert response.status_code == 302
    db.refresh(product)
    assert product.name == "Form put"
    assert product.price == 200


def test_product_delete_successful(client, db, admin):
    product = make_product(db)

    response = client.delete(f"/products/{product.id}", headers=auth_headers(admin))

    assert response.status_code == 302
    assert response.headers["location"] == "/products"
    assert db.query(Product).count() == 0


def test_product_delete_through_method_override(client, db, admin):
    product = make_product(db)

    response = client.post(
        f"/products/{product.id}",
        data={"_method": "DELETE"},
        headers=auth_headers(admin),
    )

    assert response.status_code == 302
    assert db.query(Product).count() == 0


def test_non_admin_cannot_delete_product(client, db, user):
    product = make_product(db)

    response = client.delete(f"/products/{product.id}", headers=auth_headers(user))

    assert response.status_code == 403
    assert db.query(Product).count() == 1


def test_invalid_page_number_falls_back_to_first_page(client, db, user):
    make_product(db, name="Only one", price=100)

    response = client.get("/products?page=abc", headers=auth_headers(user))

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/html")
    assert "Only one" in response.text


def test_long_description_failure_keeps_errors_in_a_small_cookie(client, db, admin):
    response = client.post(
        "/products",
        data={"name": "", "price": "10", "description": "x" * 6000},
        headers=auth_headers(admin),
    )

    assert response.status_code == 302
    assert len(response.headers["set-cookie"]) < 4096

    form = client.get("/products/create", headers=auth_headers(admin))
    assert "The name field is required." in form.text
    assert "The description field must not be greater than 2000 characters." in form.text
    assert 'value="10"' in form.text
    assert "x" * 6000 not in form.text


def test_create_form_errors_do_not_leak_into_edit_form(client, db, admin):
    product = make_product(db, name="Real", price=100)

    client.post(
        "/products",
        data={"name": "Other", "price": "not-a-number"},
        headers=auth_headers(admin),
    )

    form = client.get(f"/products/{product.id}/edit", headers=auth_headers(admin))

    assert 'value="Real"' in form.text
    assert 'value="Other"' not in form.text
    assert "The price field must be a number." not in form.text


def test_update_missing_product_returns_404(client, admin):
    response = client.put(
        "/products/999999",
        data={"name": "Ghost", "price": "1"},
        headers=auth_headers(admin),
    )
    assert response.status_code == 404


def test_delete_missing_product_returns_404(client, admin):
    response = client.delete("/products/999999", headers=auth_headers(admin))
    assert response.status_code == 404


def test_method_override_with_unknown_verb_returns_405(client, db, admin):
    product = make_product(db)

    response = client.post(
        f"/products/{product.id}",
        data={"_method": "PATCH"},
        headers=auth_headers(admin),
    )

    assert response.status_code == 405
    assert db.query(Product).count() == 1
