"""
Integration tests for authentication on both surfaces.
"""
from django.test import Client, TestCase

from apps.identity.jwt_auth import (
    REFRESH,
    create_access_token,
    create_refresh_token,
    decode_token,
    get_user_id_from_token,
)
from apps.identity.models import Plan, User

JSON = 'application/json'


class MobileAuthTest(TestCase):

    def setUp(self):
        self.client = Client()
        self.user = User.objects.create_user(email='jane@test.com', password='secret123', name='Jane')

    def test_register_returns_token_pair(self):
        response = self.client.post(
            '/api/mobile/auth/register',
            {'name': 'New User', 'email': 'New@Test.com', 'password': 'secret123'},
            content_type=JSON,
        )
        self.assertEqual(response.status_code, 201)
        data = response.json()
        self.assertEqual(data['user']['email'], 'new@test.com')
        self.assertEqual(data['user']['plan'], Plan.FREE)
        self.assertEqual(decode_token(data['accessToken'])['type'], 'access')
        self.assertEqual(decode_token(data['refreshToken'])['type'], 'refresh')

    def test_register_duplicate_email_is_400(self):
        response = self.client.post(
            '/api/mobile/auth/register',
            {'name': 'Jane Again', 'email': 'JANE@test.com', 'password': 'secret123'},
            content_type=JSON,
        )
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json(), {'error': 'An account with this email already exists'})

    def test_register_validation_messages(self):
        response = self.client.post(
            '/api/mobile/auth/register',
            {'name': 'Jo', 'email': 'jo@test.com', 'password': '123'},
            content_type=JSON,
        )
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json(), {'error': 'Password must be at least 6 characters'})

        response = self.client.post(
            '/api/mobile/auth/register',
            {'name': 'Jo', 'email': 'not-an-email', 'password': 'secret123'},
            content_type=JSON,
        )
        self.assertEqual(response.json(), {'error': 'Invalid email address'})

    def test_register_rejects_malformed_email(self):
        for email in ('a@@b.co', 'a b@test.com', 'ann@test', '@test.com'):
            response = self.client.post(
                '/api/mobile/auth/register',
                {'name': 'Ann', 'email': email, 'password': 'secret123'},
                content_type=JSON,
            )
            self.assertEqual(response.status_code, 400, email)
            self.assertEqual(response.json(), {'error': 'Invalid email address'})
        self.assertFalse(User.objects.filter(name='Ann').exists())

    def test_login_and_me(self):
        response = self.client.post(
            '/api/mobile/auth/login', {'email': 'jane@test.com', 'password': 'secret123'}, content_type=JSON
        )
        self.assertEqual(response.status_code, 200)
        token = response.json()['accessToken']

        response = self.client.get('/api/mobile/auth/me', HTTP_AUTHORIZATION=f"Bearer {token}")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()['user']['name'], 'Jane')

    def test_login_wrong_password(self):
        response = self.client.post(
            '/api/mobile/auth/login', {'email': 'jane@test.com', 'password': 'wrong-pass'}, content_type=JSON
        )
        self.assertEqual(response.status_code, 401)
        self.assertEqual(response.json(), {'error': 'Invalid email or password'})

    def test_oauth_account_cannot_use_password_login(self):
        User.objects.create_user(email='oauth@test.com', name='OAuth')
        response = self.client.post(
            '/api/mobile/auth/login', {'email': 'oauth@test.com', 'password': 'anything'}, content_type=JSON
        )
        self.assertEqual(response.status_code, 401)

    def test_refresh_issues_new_pair(self):
        refresh = create_refresh_token(self.user.id, self.user.email)
        response = self.client.post('/api/mobile/auth/refresh', {'refreshToken': refresh}, content_type=JSON)
        self.assertEqual(response.status_code, 200)
        self.assertEqual(get_user_id_from_token(response.json()['accessToken']), self.user.id)

    def test_refresh_rejects_access_token(self):
        access = create_access_token(self.user.id, self.user.email)
        response = self.client.post('/api/mobile/auth/refresh', {'refreshToken': access}, content_type=JSON)
        self.assertEqual(response.status_code, 401)
        self.assertEqual(response.json(), {'error': 'Invalid refresh token'})

    def test_refresh_requires_token(self):
        response = self.client.post('/api/mobile/auth/refresh', {}, content_type=JSON)
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json(), {'error': 'Refresh token is required'})

    def test_refresh_token_is_not_a_bearer_credential(self):
        refresh = create_refresh_token(self.user.id, self.user.email)
        response = self.client.get('/api/mobile/auth/me', HTTP_AUTHORIZATION=f"Bearer {refresh}")
        self.assertEqual(response.status_code, 401)

    def test_garbage_token_rejected(self):
        response = self.client.get('/api/mobile/auth/me', HTTP_AUTHORIZATION='Bearer not.a.jwt')
        self.assertEqual(response.status_code, 401)
        self.assertIsNone(get_user_id_from_token('not.a.jwt', expected_type=REFRESH))

    def test_plan_is_read_per_request(self):
        token = create_access_token(self.user.id, self.user.email)
        User.objects.filter(id=self.user.id).update(plan=Plan.PRO)

        response = self.client.get('/api/mobile/auth/me', HTTP_AUTHORIZATION=f"Bearer {token}")
        self.assertEqual(response.json()['user']['plan'], Plan.PRO)

    def test_inactive_user_rejected(self):
        token = create_access_token(self.user.id, self.user.email)
        User.objects.filter(id=self.user.id).update(is_active=False)

        response = self.client.get('/api/mobile/auth/me', HTTP_AUTHORIZATION=f"Bearer {token}")
        self.assertEqual(response.status_code, 401)


class WebAuthTest(TestCase):

    def setUp(self):
        self.client = Client()

    def test_register_starts_session(self):
        response = self.client.post(
            '/api/web/auth/register',
            {'name': 'Sam Web', 'email': 'sam@test.com', 'password': 'secret123'},
            content_type=JSON,
        )
        self.assertEqual(response.status_code, 201)

        response = self.client.get('/api/web/auth/me')
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()['user']['email'], 'sam@test.com')

    def test_logout_ends_session(self):
        User.objects.create_user(email='sam@test.com', password='secret123')
        self.client.post('/api/web/auth/login', {'email': 'sam@test.com', 'password': 'secret123'}, content_type=JSON)

        response = self.client.post('/api/web/auth/logout')
        self.assertEqual(response.json(), {'message': 'Logged out'})
        self.assertEqual(self.client.get('/api/web/auth/me').status_code, 401)
