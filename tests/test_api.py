# /tests/test_api.py

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.exc import OperationalError

from app.main import app
from app.services.database_helpers.user_repository_sql import UserRepositorySQL


def _create_book(client, **overrides):
    payload = {"title": "X", "author": "Y", "ISBN": "123", "quantity": 1}
    payload.update(overrides)
    return client.post("/api/books", json=payload)


def test_root(client):
    response = client.get("/")
    assert response.status_code == 200
    assert "message" in response.json()


# --- Catalog ---

def test_create_and_fetch_book(client):
    response = _create_book(client, quantity=2)
    assert response.status_code == 201
    book = response.json()
    assert book["ISBN"] == "123"
    assert book["quantity"] == 2

    response = client.get(f"/api/books/{book['id']}")
    assert response.status_code == 200
    assert response.json()["title"] == "X"

    response = client.get("/api/books")
    assert response.status_code == 200
    assert [b["id"] for b in response.json()] == [book["id"]]


def test_create_book_missing_field(client):
    response = client.post("/api/books", json={"title": "X", "author": "Y", "ISBN": "123"})
    assert response.status_code == 400
    assert response.json() == {"message": "Please provide all required fields"}


def test_create_book_zero_quantity(client):
    assert _create_book(client, quantity=0).status_code == 400


def test_create_book_huge_quantity_is_a_client_error(client):
    response = _create_book(client, quantity=10**30)
    assert response.status_code == 400
    assert "exceed" in response.json()["message"]


def test_create_book_non_object_body(client):
    response = client.post("/api/books", json=["not", "an", "object"])
    assert response.status_code == 400
    assert "message" in response.json()


def test_create_book_duplicate_isbn(client):
    assert _create_book(client).status_code == 201
    response = _create_book(client, title="Another")
    assert response.status_code == 400
    assert response.json() == {"message": "Book with this ISBN already exists"}
    assert len(client.get("/api/books").json()) == 1


@pytest.mark.parametrize("book_id", ["book_000000000000", "definitely-not-an-id"])
def test_get_missing_book(client, book_id):
    response = client.get(f"/api/books/{book_id}")
    assert response.status_code == 404
    assert response.json() == {"message": "Book not found"}


# --- Borrow / Return ---

def test_borrow_and_return_scenario(client, make_user, auth_headers):
    book = _create_book(client).json()
    user_a, user_b = make_user(), make_user()

    response = client.post(f"/api/borrow/{book['id']}", headers=auth_headers(user_a.id))
    assert response.status_code == 200
    body = response.json()
    assert body["message"] == "Book borrowed successfully"
    assert body["book"]["quantity"] == 0
    assert body["user"]["borrowedBooks"] == [book["id"]]

    response = client.post(f"/api/borrow/{book['id']}", headers=auth_headers(user_b.id))
    assert response.status_code == 400
    assert response.json() == {"message": "This book is currently out of stock"}

    response = client.post(f"/api/return/{book['id']}", headers=auth_headers(user_a.id))
    assert response.status_code == 200
    body = response.json()
    assert body["book"]["quantity"] == 1
    assert body["user"]["borrowedBooks"] == []


def test_borrow_twice(client, make_user, auth_headers):
    book = _create_book(client, quantity=2).json()
    headers = auth_headers(make_user().id)
    assert client.post(f"/api/borrow/{book['id']}", headers=headers).status_code == 200

    response = client.post(f"/api/borrow/{book['id']}", headers=headers)
    assert response.status_code == 400
    assert response.json() == {"message": "You have already borrowed this book"}
    assert client.get(f"/api/books/{book['id']}").json()["quantity"] == 1


def test_return_not_borrowed(client, make_user, auth_headers):
    book = _create_book(client).json()
    response = client.post(f"/api/return/{book['id']}", headers=auth_headers(make_user().id))
    assert response.status_code == 400
    assert response.json() == {"message": "You have not borrowed this book"}


def test_borrow_unknown_book(client, make_user, auth_headers):
    response = client.post("/api/borrow/book_000000000000", headers=auth_headers(make_user().id))
    assert response.status_code == 404
    assert response.json() == {"message": "Book not found"}


def test_borrow_with_token_for_unknown_user(client, auth_headers):
    book = _create_book(client).json()
    response = client.post(f"/api/borrow/{book['id']}", headers=auth_headers("usr_000000000000"))
    assert response.status_code == 404
    assert response.json() == {"message": "User not found"}


@pytest.mark.parametrize("path", ["/api/borrow/book_000000000000", "/api/return/book_000000000000"])
def test_borrow_and_return_require_auth(client, path):
    response = client.post(path)
    assert response.status_code == 401
    assert response.headers["WWW-Authenticate"] == "Bearer"

    response = client.post(path, headers={"Authorization": "Bearer nonsense"})
    assert response.status_code == 401


def test_borrow_transaction_failure_is_a_500(client, make_user, auth_headers, monkeypatch):
    book = _create_book(client).json()

    def failing_add_borrowed(self, user, book_id):
        raise OperationalError("INSERT INTO borrowed_books", {}, Exception("database is locked"))

    monkeypatch.setattr(UserRepositorySQL, "add_borrowed", failing_add_borrowed)

    response = client.post(f"/api/borrow/{book['id']}", headers=auth_headers(make_user().id))
    assert response.status_code == 500
    assert response.json() == {"message": "Transaction failed"}
    assert client.get(f"/api/books/{book['id']}").json()["quantity"] == 1


def test_unexpected_error_is_a_generic_500(client, monkeypatch):
    def boom(db):
        raise RuntimeError("secret internals")

    monkeypatch.setattr("app.services.book_service.get_all_books", boom)

    safe_client = TestClient(app, raise_server_exceptions=False)
    response = safe_client.get("/api/books")
    assert response.status_code == 500
    assert response.json() == {"message": "Server error"}


# --- Borrowed-books query ---

def test_list_own_borrowed_books(client, make_user, auth_headers):
    book = _create_book(client).json()
    user = make_user()
    headers = auth_headers(user.id)
    client.post(f"/api/borrow/{book['id']}", headers=headers)

    response = client.get(f"/api/users/{user.id}/books", headers=headers)
    assert response.status_code == 200
    books = response.json()
    assert [b["id"] for b in books] == [book["id"]]
    assert books[0]["title"] == "X"


def test_list_other_users_books_is_forbidden(client, make_user, auth_headers):
    me, other = make_user(), make_user()
    response = client.get(f"/api/users/{other.id}/books", headers=auth_headers(me.id))
    assert response.status_code == 403
    assert response.json() == {"message": "Not authorized to view other users' books"}


def test_list_books_for_unknown_user(client, auth_headers):
    response = client.get("/api/users/usr_000000000000/books", headers=auth_headers("usr_000000000000"))
    assert response.status_code == 404


def test_list_borrowed_books_requires_auth(client, make_user):
    response = client.get(f"/api/users/{make_user().id}/books")
    assert response.status_code == 401
