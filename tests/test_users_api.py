from core.errors import ConnectivityError, ConstraintViolation

from conftest import NOW, user_row


def test_create_user_returns_public_projection(client, fake_db):
    fake_db.queue(user_row(id=7, name="Ada", email="ada@example.com", role="chef"))

    r = client.post(
        "/api/v1/users",
        json={"name": "  Ada ", "email": "ada@example.com", "password": "s3cret", "role": "chef"},
    )

    assert r.status_code == 201
    body = r.json()
    assert body["id"] == 7
    assert body["role"] == "chef"
    assert body["created_at"] is not None
    assert "password" not in body

    method, sql, args = fake_db.calls[0]
    assert method == "fetch_one"
    assert "INSERT INTO users" in sql
    assert "password" not in sql.split("RETURNING", 1)[1]
    assert args == ("Ada", "ada@example.com", "s3cret", "chef")


def test_create_user_defaults_role_to_client(client, fake_db):
    fake_db.queue(user_row())

    r = client.post("/api/v1/users", json={"name": "Ada", "email": "ada@example.com", "password": "pw"})

    assert r.status_code == 201
    assert fake_db.calls[0][2][3] == "client"


def test_create_user_missing_fields_rejected_before_store(client, fake_db):
    r = client.post("/api/v1/users", json={"email": "ada@example.com", "password": "pw"})
    assert r.status_code == 400
    assert r.json()["field"] == "name"

    r = client.post("/api/v1/users", json={"name": "Ada", "email": "ada@example.com"})
    assert r.status_code == 400
    assert r.json()["field"] == "password"

    r = client.post("/api/v1/users", json={"name": "Ada", "email": "x" * 101, "password": "pw"})
    assert r.status_code == 400
    assert r.json()["field"] == "email"

    assert fake_db.calls == []


def test_create_user_unknown_role_rejected(client, fake_db):
    r = client.post(
        "/api/v1/users",
        json={"name": "Ada", "email": "ada@example.com", "password": "pw", "role": "admin"},
    )

    assert r.status_code == 400
    assert r.json()["field"] == "role"
    assert fake_db.calls == []


def test_create_user_duplicate_email_is_conflict(client, fake_db):
    fake_db.queue(ConstraintViolation("duplicate key", sqlstate="23505", constraint="users_email_key"))

    r = client.post("/api/v1/users", json={"name": "Ada", "email": "ada@example.com", "password": "pw"})

    assert r.status_code == 409
    assert r.json() == {"error": "Conflict", "message": "Email is already registered."}


def test_create_user_store_fault_hides_details(client, fake_db):
    fake_db.queue(ConnectivityError("connection refused to 10.0.0.5"))

    r = client.post("/api/v1/users", json={"name": "Ada", "email": "ada@example.com", "password": "pw"})

    assert r.status_code == 500
    assert r.json() == {"error": "Internal server error", "message": "Could not create user"}


def test_get_user(client, fake_db):
    fake_db.queue(user_row(id=3))

    r = client.get("/api/v1/users/3")

    assert r.status_code == 200
    assert r.json()["id"] == 3
    assert fake_db.calls[0][2] == (3,)


def test_get_user_not_found(client, fake_db):
    r = client.get("/api/v1/users/42")

    assert r.status_code == 404
    assert r.json() == {"error": "Not found", "message": "User with ID 42 not found"}


def test_get_user_non_numeric_id(client, fake_db):
    r = client.get("/api/v1/users/abc")

    assert r.status_code == 400
    assert r.json()["message"] == "User ID must be a number"
    assert fake_db.calls == []


def test_list_users_keeps_store_order(client, fake_db):
    fake_db.queue([user_row(id=2, email="b@example.com"), user_row(id=1)])

    r = client.get("/api/v1/users")

    assert r.status_code == 200
    assert [u["id"] for u in r.json()] == [2, 1]
    assert "ORDER BY created_at DESC" in fake_db.calls[0][1]


def test_list_users_empty(client, fake_db):
    r = client.get("/api/v1/users")

    assert r.status_code == 200
    assert r.json() == []


def test_update_user_ignores_password(client, fake_db):
    fake_db.queue(user_row(id=5, name="Grace", email="grace@example.com", role="chef"))

    r = client.put(
        "/api/v1/users/5",
        json={"name": "Grace", "email": "grace@example.com", "role": "chef", "password": "new"},
    )

    assert r.status_code == 200
    assert r.json()["name"] == "Grace"
    method, sql, args = fake_db.calls[0]
    assert "password" not in sql
    assert "new" not in args
    assert args == ("Grace", "grace@example.com", "chef", 5)


def test_update_user_without_role_keeps_existing(client, fake_db):
    fake_db.queue(user_row(id=5))

    r = client.put("/api/v1/users/5", json={"name": "Ada", "email": "ada@example.com"})

    assert r.status_code == 200
    _, sql, args = fake_db.calls[0]
    assert "COALESCE" in sql
    assert args[2] is None


def test_update_missing_user_is_not_found(client, fake_db):
    r = client.put("/api/v1/users/999", json={"name": "Ada", "email": "ada@example.com"})

    assert r.status_code == 404
    assert r.json()["message"] == "User with ID 999 not found"


def test_response_timestamps_serialize(client, fake_db):
    fake_db.queue(user_row())

    r = client.get("/api/v1/users/1")

    assert r.json()["created_at"].startswith(NOW.strftime("%Y-%m-%dT%H:%M:%S"))


def test_get_user_non_ascii_digit_id(client, fake_db):
    # Superscript two and Arabic-Indic one are digits to str.isdigit().
    for raw in ("%C2%B2", "%D9%A1"):
        r = client.get(f"/api/v1/users/{raw}")
        assert r.status_code == 400
        assert r.json()["message"] == "User ID must be a number"
    assert fake_db.calls == []


def test_get_user_id_beyond_serial_range_is_not_found(client, fake_db):
    r = client.get("/api/v1/users/99999999999")

    assert r.status_code == 404
    assert r.json()["message"] == "User with ID 99999999999 not found"
    assert fake_db.calls == []


def test_update_user_invalid_input_rejected_before_store(client, fake_db):
    valid = {"name": "Ada", "email": "ada@example.com"}

    r = client.put("/api/v1/users/1", json={"email": "ada@example.com"})
    assert r.status_code == 400
    assert r.json()["field"] == "name"

    r = client.put("/api/v1/users/1", json={"name": "Ada"})
    assert r.status_code == 400
    assert r.json()["field"] == "email"

    r = client.put("/api/v1/users/1", json={"name": "Ada", "email": "not-an-email"})
    assert r.status_code == 400
    assert r.json()["field"] == "email"

    r = client.put("/api/v1/users/1", json={**valid, "role": "admin"})
    assert r.status_code == 400
    assert r.json()["field"] == "role"

    for raw in ("abc", "%C2%B2", "%D9%A1"):
        r = client.put(f"/api/v1/users/{raw}", json=valid)
        assert r.status_code == 400
        assert r.json()["field"] == "id"

    assert fake_db.calls == []


def test_update_user_id_beyond_serial_range_is_not_found(client, fake_db):
    r = client.put("/api/v1/users/99999999999", json={"name": "Ada", "email": "ada@example.com"})

    assert r.status_code == 404
    assert fake_db.calls == []


def test_update_user_duplicate_email_is_conflict(client, fake_db):
    fake_db.queue(ConstraintViolation("duplicate key", sqlstate="23505", constraint="users_email_key"))

    r = client.put("/api/v1/users/1", json={"name": "Ada", "email": "taken@example.com"})

    assert r.status_code == 409
    assert r.json() == {"error": "Conflict", "message": "Email is already registered."}
    assert len(fake_db.calls) == 1
