"""
Integration tests for task API endpoints on both client surfaces.
"""
from datetime import datetime, timezone as dt_timezone
from unittest import mock

from django.test import Client, TestCase, override_settings
from django.utils import timezone

from apps.identity.models import User
from apps.tasks.models import Task

JSON = 'application/json'

HVAC_TASK = {
    'title': 'Replace HVAC filter',
    'category': 'HOME',
    'scheduleType': 'EVERY_N_MONTHS',
    'scheduleValue': 3,
    'nextDueDate': '2024-01-15',
    'notes': 'MERV 11, 20x25x1',
    'cost': 25,
}


@override_settings(TIME_ZONE='UTC')
class MobileTaskFlowTest(TestCase):
    """Register -> login -> create -> complete over the bearer-token API."""

    def setUp(self):
        self.client = Client()
        response = self.client.post(
            '/api/mobile/auth/register',
            {'name': 'Alex Doe', 'email': 'alex@test.com', 'password': 'secret123'},
            content_type=JSON,
        )
        self.assertEqual(response.status_code, 201)
        self.auth = {'HTTP_AUTHORIZATION': f"Bearer {response.json()['accessToken']}"}

    def test_complete_quarterly_task_end_to_end(self):
        response = self.client.post(
            '/api/mobile/auth/login',
            {'email': 'alex@test.com', 'password': 'secret123'},
            content_type=JSON,
        )
        self.assertEqual(response.status_code, 200)
        auth = {'HTTP_AUTHORIZATION': f"Bearer {response.json()['accessToken']}"}

        response = self.client.post('/api/mobile/tasks', HVAC_TASK, content_type=JSON, **auth)
        self.assertEqual(response.status_code, 201)
        task = response.json()['task']
        self.assertEqual(task['scheduleDescription'], 'Quarterly')
        self.assertEqual(task['owner']['email'], 'alex@test.com')

        frozen = datetime(2024, 1, 15, 15, 30, tzinfo=dt_timezone.utc)
        with mock.patch('django.utils.timezone.now', return_value=frozen):
            response = self.client.post(f"/api/mobile/tasks/{task['id']}/complete", **auth)

        self.assertEqual(response.status_code, 200)
        completed = response.json()['task']
        self.assertEqual(completed['completionCount'], 1)
        self.assertEqual(completed['status'], 'COMPLETED_TODAY')
        self.assertTrue(completed['nextDueDate'].startswith('2024-04-15T12:00:00'))

        stored = Task.objects.get(id=task['id'])
        self.assertEqual(stored.next_due_date, timezone.make_aware(datetime(2024, 4, 15, 12, 0)))
        self.assertEqual(stored.last_completed_date, timezone.make_aware(datetime(2024, 1, 15, 12, 0)))

    def test_list_get_update_delete(self):
        created = self.client.post('/api/mobile/tasks', HVAC_TASK, content_type=JSON, **self.auth).json()['task']
        url = f"/api/mobile/tasks/{created['id']}"

        response = self.client.get('/api/mobile/tasks', **self.auth)
        self.assertEqual(response.status_code, 200)
        self.assertEqual([t['id'] for t in response.json()['tasks']], [created['id']])

        response = self.client.get(url, **self.auth)
        self.assertEqual(response.json()['task']['notes'], 'MERV 11, 20x25x1')

        response = self.client.put(url, {**HVAC_TASK, 'title': 'Replace furnace filter'}, content_type=JSON, **self.auth)
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()['task']['title'], 'Replace furnace filter')

        response = self.client.delete(url, **self.auth)
        self.assertEqual(response.json(), {'deleted': True})
        self.assertEqual(self.client.get(url, **self.auth).status_code, 404)

    def test_uncomplete_keeps_count(self):
        created = self.client.post('/api/mobile/tasks', HVAC_TASK, content_type=JSON, **self.auth).json()['task']
        self.client.post(f"/api/mobile/tasks/{created['id']}/complete", **self.auth)

        response = self.client.post(f"/api/mobile/tasks/{created['id']}/uncomplete", **self.auth)

        task = response.json()['task']
        self.assertIsNone(task['lastCompletedDate'])
        self.assertEqual(task['completionCount'], 1)

    def test_validation_errors_use_first_message(self):
        response = self.client.post(
            '/api/mobile/tasks', {**HVAC_TASK, 'title': ''}, content_type=JSON, **self.auth
        )
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json(), {'error': 'Title is required'})

        response = self.client.post(
            '/api/mobile/tasks', {**HVAC_TASK, 'scheduleValue': None}, content_type=JSON, **self.auth
        )
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json(), {'error': 'EVERY_N_MONTHS requires a positive schedule value'})

    def test_out_of_range_values_rejected_before_save(self):
        cases = (
            ({'scheduleValue': 200000}, 'EVERY_N_MONTHS allows at most 120 months'),
            ({'cost': '123456789.00'}, 'Cost is too large'),
            ({'cost': 1e30}, 'Cost is too large'),
            ({'cost': 0}, 'Cost must be a positive number'),
            ({'scheduleType': 'YEARLY', 'scheduleValue': 1225, 'nextDueDate': '9999-12-25'},
             'Due date must be before 3000'),
        )
        for fields, message in cases:
            response = self.client.post(
                '/api/mobile/tasks', {**HVAC_TASK, **fields}, content_type=JSON, **self.auth
            )
            self.assertEqual(response.status_code, 400, fields)
            self.assertEqual(response.json(), {'error': message})
        self.assertFalse(Task.objects.exists())

    def test_longest_interval_completes(self):
        response = self.client.post(
            '/api/mobile/tasks', {**HVAC_TASK, 'scheduleValue': 120, 'cost': '99999999.99'},
            content_type=JSON, **self.auth,
        )
        self.assertEqual(response.status_code, 201)
        task = response.json()['task']
        self.assertEqual(task['cost'], 99999999.99)

        frozen = datetime(2024, 1, 15, 15, 30, tzinfo=dt_timezone.utc)
        with mock.patch('django.utils.timezone.now', return_value=frozen):
            response = self.client.post(f"/api/mobile/tasks/{task['id']}/complete", **self.auth)

        self.assertEqual(response.status_code, 200)
        self.assertTrue(response.json()['task']['nextDueDate'].startswith('2034-01-15T12:00:00'))

    def test_free_plan_limit_is_forbidden(self):
        for index in range(5):
            self.client.post('/api/mobile/tasks', {**HVAC_TASK, 'title': f"Task {index}"}, content_type=JSON, **self.auth)

        response = self.client.post('/api/mobile/tasks', HVAC_TASK, content_type=JSON, **self.auth)

        self.assertEqual(response.status_code, 403)
        self.assertIn('limited to 5 tasks', response.json()['error'])

    def test_other_users_task_is_not_found(self):
        other = User.objects.create_user(email='other@test.com', password='secret123')
        task = Task.objects.create(
            user=other, title='Not yours', next_due_date=timezone.make_aware(datetime(2024, 1, 1, 12, 0))
        )

        for method, path in (
            ('get', f"/api/mobile/tasks/{task.id}"),
            ('post', f"/api/mobile/tasks/{task.id}/complete"),
            ('post', f"/api/mobile/tasks/{task.id}/uncomplete"),
            ('delete', f"/api/mobile/tasks/{task.id}"),
        ):
            response = getattr(self.client, method)(path, **self.auth)
            self.assertEqual(response.status_code, 404, path)
            self.assertEqual(response.json(), {'error': 'Task not found'})

    def test_requires_token(self):
        response = self.client.get('/api/mobile/tasks')
        self.assertEqual(response.status_code, 401)
        self.assertEqual(response.json(), {'error': 'Unauthorized'})

    def test_unexpected_error_is_opaque(self):
        with mock.patch('apps.tasks.services.list_tasks', side_effect=RuntimeError('db exploded')):
            with self.assertLogs('apps.core.handlers', level='ERROR'):
                response = self.client.get('/api/mobile/tasks', **self.auth)

        self.assertEqual(response.status_code, 500)
        self.assertEqual(response.json(), {'error': 'Internal server error'})


@override_settings(TIME_ZONE='UTC')
class WebTaskSessionTest(TestCase):
    """The browser surface serves the same operations over the session cookie."""

    def setUp(self):
        self.client = Client()
        self.user = User.objects.create_user(email='web@test.com', password='secret123', name='Web User')

    def test_session_login_then_create_task(self):
        response = self.client.post(
            '/api/web/auth/login', {'email': 'web@test.com', 'password': 'secret123'}, content_type=JSON
        )
        self.assertEqual(response.status_code, 200)

        response = self.client.post('/api/web/tasks', HVAC_TASK, content_type=JSON)
        self.assertEqual(response.status_code, 201)

        # Same task is visible from the mobile surface
        self.assertEqual(Task.objects.filter(user=self.user).count(), 1)

    def test_bearer_token_not_accepted_on_web_surface(self):
        login = self.client.post(
            '/api/mobile/auth/login', {'email': 'web@test.com', 'password': 'secret123'}, content_type=JSON
        ).json()
        response = self.client.get(
            '/api/web/tasks', HTTP_AUTHORIZATION=f"Bearer {login['accessToken']}"
        )
        self.assertEqual(response.status_code, 401)

    def test_requires_session(self):
        self.assertEqual(self.client.get('/api/web/tasks').status_code, 401)


class MobileCorsTest(TestCase):
    origin = {'HTTP_ORIGIN': 'http://localhost:8081'}

    def test_preflight_answered_without_auth(self):
        response = self.client.options(
            '/api/mobile/tasks',
            HTTP_ACCESS_CONTROL_REQUEST_METHOD='POST',
            HTTP_ACCESS_CONTROL_REQUEST_HEADERS='authorization, content-type',
            **self.origin,
        )
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response['Access-Control-Allow-Origin'], '*')
        self.assertIn('authorization', response['Access-Control-Allow-Headers'])
        self.assertIn('DELETE', response['Access-Control-Allow-Methods'])

    def test_mobile_responses_carry_cors_headers(self):
        response = self.client.get('/api/mobile/tasks', **self.origin)
        self.assertEqual(response.status_code, 401)
        self.assertEqual(response['Access-Control-Allow-Origin'], '*')

    def test_web_responses_untouched(self):
        response = self.client.get('/api/web/tasks', **self.origin)
        self.assertFalse(response.has_header('Access-Control-Allow-Origin'))

    @override_settings(CORS_ALLOW_ALL_ORIGINS=False, CORS_ALLOWED_ORIGINS=['https://app.lifeops.test'])
    def test_allow_list(self):
        allowed = self.client.get('/api/mobile/tasks', HTTP_ORIGIN='https://app.lifeops.test')
        self.assertEqual(allowed['Access-Control-Allow-Origin'], 'https://app.lifeops.test')

        denied = self.client.get('/api/mobile/tasks', **self.origin)
        self.assertFalse(denied.has_header('Access-Control-Allow-Origin'))
