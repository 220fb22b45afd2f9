"""Request helpers shared by the API tests."""


def register_and_login(client, email="admin@example.com", password="password123", full_name="Admin User", headers=None):
    """Register an account (ignoring duplicates) and return bearer headers for it."""
    client.post(
        "/api/v1/auth/register",
        json={"full_name": full_name, "email": email, "password": password},
        headers=headers or {},
    )
    response = client.post("/api/v1/auth/login", json={"email": email, "password": password})
    assert response.status_code == 200, response.text
    return {"Authorization": f"Bearer {response.json()['access_token']}"}
