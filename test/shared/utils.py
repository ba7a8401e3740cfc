from typing import Any, Dict

from fastapi.testclient import TestClient

from src.platform.config.core_setting import settings
from src.platform.constant.route_constant import RESERVATION_CREATE, USER_CREATE, USER_LOGIN


def login_user(client: TestClient, email: str, password: str) -> Any:
    """Helper function to login a user and set cookies."""
    login_response = client.post(
        USER_LOGIN,
        json={'email': email, 'password': password},
    )
    assert login_response.status_code == 200, f'Login failed: {login_response.text}'
    cookie_name = settings.AUTH_COOKIE_NAME
    if cookie_name in login_response.cookies:
        client.cookies.set(cookie_name, login_response.cookies[cookie_name])
    return login_response


def assert_response_status(response, expected_status: int, message: str | None = None):
    response_text = getattr(response, 'text', getattr(response, 'content', 'N/A'))
    assert response.status_code == expected_status, (
        message or f'Expected {expected_status}, got {response.status_code}: {response_text}'
    )


def create_user(
    client: TestClient, email: str, password: str, name: str, role: str
) -> Dict[str, Any] | None:
    user_data = {
        'email': email,
        'password': password,
        'name': name,
        'role': role,
    }
    response = client.post(USER_CREATE, json=user_data)
    if response.status_code == 201:
        return response.json()
    elif response.status_code == 409:  # User already exists
        return None
    else:
        assert_response_status(response, 201, f'Failed to create {role} user')
        return None


def create_reservation(
    client: TestClient, *, date: str, time: str, party_size: int, **extra: Any
) -> Any:
    return client.post(
        RESERVATION_CREATE,
        json={'date': date, 'time': time, 'party_size': party_size, **extra},
    )
