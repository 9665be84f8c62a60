from datetime import timedelta

from fastapi.testclient import TestClient
import pytest

from src.platform.constant.route_constant import (
    AUTHEN_LOGIN,
    AUTHEN_SIGNUP,
    RESERVATION_LIST,
    RESERVATION_MY,
    USER_ME,
)
from test.shared.utils import auth_header, sign_token
from test.util_constant import DEFAULT_PASSWORD, TEST_USER_EMAIL


@pytest.mark.integration
class TestAuthAPI:
    def test_sign_up_returns_token(self, client: TestClient):
        response = client.post(
            AUTHEN_SIGNUP,
            json={
                'email': 'fresh@test.com',
                'password': DEFAULT_PASSWORD,
                'username': 'fresh',
                'phone_number': '0812345678',
            },
        )

        assert response.status_code == 201
        token = response.json()['token']
        # JWT tokens start with 'eyJ' (base64 encoded header)
        assert token.startswith('eyJ')

    def test_sign_up_duplicate_email_conflicts(self, client: TestClient, user_token: str):
        response = client.post(
            AUTHEN_SIGNUP, json={'email': TEST_USER_EMAIL, 'password': DEFAULT_PASSWORD}
        )

        assert response.status_code == 409
        assert response.json()['error'] == 'Conflict'

    def test_sign_up_ignores_requested_role(self, client: TestClient):
        response = client.post(
            AUTHEN_SIGNUP,
            json={'email': 'sneaky@test.com', 'password': DEFAULT_PASSWORD, 'role': 'admin'},
        )
        assert response.status_code == 201

        me = client.get(USER_ME, headers=auth_header(response.json()['token']))

        assert me.json()['role'] == 'user'

    def test_sign_up_rejects_invalid_email(self, client: TestClient):
        response = client.post(
            AUTHEN_SIGNUP, json={'email': 'not-an-email', 'password': DEFAULT_PASSWORD}
        )

        assert response.status_code == 400
        assert response.json()['error'] == 'InvalidArgument'

    def test_login_success(self, client: TestClient, user_token: str):
        response = client.post(
            AUTHEN_LOGIN, json={'email': TEST_USER_EMAIL, 'password': DEFAULT_PASSWORD}
        )

        assert response.status_code == 200
        assert client.get(USER_ME, headers=auth_header(response.json()['token'])).status_code == 200

    def test_login_wrong_password(self, client: TestClient, user_token: str):
        response = client.post(AUTHEN_LOGIN, json={'email': TEST_USER_EMAIL, 'password': 'wrong'})

        assert response.status_code == 400
        assert response.json() == {'error': 'LoginFailed', 'detail': 'LOGIN_BAD_CREDENTIALS'}

    def test_login_unknown_email(self, client: TestClient):
        response = client.post(
            AUTHEN_LOGIN, json={'email': 'ghost@test.com', 'password': DEFAULT_PASSWORD}
        )

        assert response.status_code == 400

    def test_me_returns_profile_without_password(self, client: TestClient, user_token: str):
        response = client.get(USER_ME, headers=auth_header(user_token))

        assert response.status_code == 200
        data = response.json()
        assert data['email'] == TEST_USER_EMAIL
        assert data['role'] == 'user'
        assert data['username'] == 'user'
        assert 'updatedAt' in data
        assert 'hashed_password' not in data
        assert 'password' not in data

    def test_me_accepts_raw_token_without_bearer(self, client: TestClient, user_token: str):
        response = client.get(USER_ME, headers={'Authorization': user_token})

        assert response.status_code == 200

    def test_me_for_token_of_unknown_user_is_not_found(self, client: TestClient):
        token = sign_token({'email': 'nobody@test.com', 'role': 'user'})

        response = client.get(USER_ME, headers=auth_header(token))

        assert response.status_code == 404
        assert response.json()['error'] == 'NotFound'


@pytest.mark.integration
class TestAuthorizationGate:
    def test_missing_header_is_unauthorized(self, client: TestClient):
        response = client.get(RESERVATION_MY)

        assert response.status_code == 401
        assert response.json()['error'] == 'Unauthorized'
        assert response.headers['www-authenticate'] == 'Bearer'

    def test_expired_token_is_unauthorized(self, client: TestClient, user_token: str):
        token = sign_token(
            {'email': TEST_USER_EMAIL, 'role': 'user'}, expires_in=timedelta(minutes=-1)
        )

        response = client.get(RESERVATION_MY, headers=auth_header(token))

        assert response.status_code == 401

    def test_foreign_algorithm_is_unauthorized(self, client: TestClient, user_token: str):
        token = sign_token({'email': TEST_USER_EMAIL, 'role': 'user'}, algorithm='HS384')

        response = client.get(RESERVATION_MY, headers=auth_header(token))

        assert response.status_code == 401

    def test_user_role_forbidden_on_admin_route_but_allowed_elsewhere(
        self, client: TestClient, user_token: str
    ):
        admin_response = client.get(RESERVATION_LIST, headers=auth_header(user_token))
        user_response = client.get(RESERVATION_MY, headers=auth_header(user_token))

        assert admin_response.status_code == 403
        assert admin_response.json()['error'] == 'Forbidden'
        assert user_response.status_code == 200

    def test_admin_passes_admin_route(self, client: TestClient, admin_token: str):
        response = client.get(RESERVATION_LIST, headers=auth_header(admin_token))

        assert response.status_code == 200
        assert response.json() == []

    def test_unknown_route_uses_error_envelope(self, client: TestClient):
        response = client.get('/no-such-route')

        assert response.status_code == 404
        assert response.json()['error'] == 'NotFound'
