PASSWORD = "password123"


def test_health(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "healthy"
    assert "X-Request-ID" in response.headers


def test_request_id_is_echoed(client):
    response = client.get("/health", headers={"X-Request-ID": "abc-123"})

    assert response.headers["X-Request-ID"] == "abc-123"


def test_login_returns_token_and_user(client, admin_user):
    response = client.post(
        "/api/auth/login",
        json={"email": "admin@school.com", "password": PASSWORD},
    )

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["token"]
    assert data["user"]["email"] == "admin@school.com"
    assert data["user"]["role"] == "ADMIN"
    assert "passwordHash" not in data["user"]


def test_login_with_wrong_password(client, admin_user):
    response = client.post(
        "/api/auth/login",
        json={"email": "admin@school.com", "password": "wrong"},
    )

    assert response.status_code == 401
    assert response.json() == {"error": "Invalid credentials"}


def test_login_with_missing_field_is_bad_request(client):
    response = client.post("/api/auth/login", json={"email": "admin@school.com"})

    assert response.status_code == 400
    assert response.json()["error"].startswith("password:")


def test_inactive_account_cannot_login(client, db, teacher):
    teacher.user.is_active = False
    db.commit()

    response = client.post(
        "/api/auth/login",
        json={"email": "teacher1@school.com", "password": PASSWORD},
    )

    assert response.status_code == 403
    assert response.json() == {"error": "Account is inactive"}


def test_register_creates_teacher(client):
    response = client.post(
        "/api/auth/register",
        json={
            "email": "new.teacher@school.com",
            "password": "secret123",
            "name": "New Teacher",
            "employeeId": "T100",
            "phoneNumber": "5550199",
        },
    )

    assert response.status_code == 201
    user = response.json()["data"]["user"]
    assert user["role"] == "TEACHER"
    assert user["teacher"]["employeeId"] == "T100"


def test_register_duplicate_email(client, teacher):
    response = client.post(
        "/api/auth/register",
        json={
            "email": "teacher1@school.com",
            "password": "secret123",
            "name": "Copy",
            "employeeId": "T101",
            "phoneNumber": "5550199",
        },
    )

    assert response.status_code == 409


def test_profile_requires_token(client):
    response = client.get("/api/auth/profile")

    assert response.status_code == 401
    assert response.json() == {"error": "No token provided"}


def test_invalid_token(client):
    response = client.get("/api/auth/profile", headers={"Authorization": "Bearer nonsense"})

    assert response.status_code == 401
    assert response.json() == {"error": "Invalid or expired token"}


def test_profile(client, teacher_headers):
    response = client.get("/api/auth/profile", headers=teacher_headers)

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["email"] == "teacher1@school.com"
    assert data["teacher"]["employeeId"] == "T001"


def test_change_password(client, admin_headers):
    response = client.post(
        "/api/auth/change-password",
        headers=admin_headers,
        json={"currentPassword": PASSWORD, "newPassword": "newsecret"},
    )
    assert response.status_code == 200

    response = client.post(
        "/api/auth/login",
        json={"email": "admin@school.com", "password": "newsecret"},
    )
    assert response.status_code == 200


def test_change_password_with_wrong_current(client, admin_headers):
    response = client.post(
        "/api/auth/change-password",
        headers=admin_headers,
        json={"currentPassword": "wrong", "newPassword": "newsecret"},
    )

    assert response.status_code == 401
    assert response.json() == {"error": "Current password is incorrect"}


def test_logout(client):
    response = client.post("/api/auth/logout")

    assert response.json() == {"data": {"message": "Logged out successfully"}}
