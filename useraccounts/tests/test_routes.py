"""API tests for the accounts application."""

from unittest import TestCase, mock
from http import HTTPStatus as status

from ..factory import create_web_app
from ..store import accounts
from ..store.exceptions import Unavailable

USER = {
    'first_name': 'Jane',
    'last_name': 'Doe',
    'email': 'a@x.com',
    'password': 'rightpassword',
    'age': '33',
}


class APITestCase(TestCase):
    """Runs the application against an in-memory database."""

    def setUp(self):
        self.app = create_web_app({
            'SQLALCHEMY_DATABASE_URI': 'sqlite:///:memory:',
            'CREATE_DB': True,
            'PASSWORD_HASH_METHOD': 'pbkdf2:sha256:1000',
        })
        self.client = self.app.test_client()

    def register(self, **overrides):
        return self.client.post('/register', json={**USER, **overrides})

    def login(self, email=USER['email'], password=USER['password']):
        return self.client.post('/login',
                                json={'email': email, 'password': password})

    def api_key(self):
        self.register()
        return self.login().get_json()['user']['apiKey']


class TestRegister(APITestCase):
    """``POST /register``."""

    def test_register(self):
        """A new user is created."""
        response = self.register()
        self.assertEqual(response.status_code, status.CREATED)
        self.assertEqual(response.get_json(), {
            'error': False, 'message': 'USER_CREATED_SUCCESSFULLY'
        })

    def test_register_twice(self):
        """The same address cannot be registered twice."""
        self.register()
        response = self.register(first_name='John')
        self.assertEqual(response.status_code, status.OK)
        self.assertEqual(response.get_json(), {
            'error': True, 'message': 'EMAIL_ALREADY_TAKEN'
        })

    def test_missing_fields(self):
        """Missing and blank fields are listed, and nothing is created."""
        response = self.client.post('/register', json={
            'first_name': 'Jane', 'last_name': ' ', 'email': 'a@x.com'
        })
        self.assertEqual(response.status_code, status.BAD_REQUEST)
        self.assertEqual(response.get_json(), {
            'errorFields': 'last_name, password, age, ',
            'message': 'REQUIRED_FIELDS_ARE_MISSING'
        })
        with self.app.app_context():
            self.assertFalse(accounts.is_user_exists('a@x.com'))

    def test_no_body(self):
        """A request without a JSON body is missing every field."""
        response = self.client.post('/register', data='not json')
        self.assertEqual(response.status_code, status.BAD_REQUEST)
        self.assertEqual(response.get_json()['errorFields'],
                         'first_name, last_name, email, password, age, ')

    def test_numeric_values(self):
        """JSON numbers are accepted for text fields, and stored as text."""
        response = self.register(password=12345, age=33)
        self.assertEqual(response.status_code, status.CREATED)

        response = self.login(password=12345)
        self.assertEqual(response.status_code, status.OK)
        self.assertEqual(response.get_json()['user']['age'], '33')
        self.assertEqual(self.login(password='12345').status_code, status.OK)

    @mock.patch(f'{accounts.__name__}.create_user')
    def test_database_unavailable(self, mock_create_user):
        """The database cannot be reached."""
        mock_create_user.side_effect = Unavailable('nope')
        response = self.register()
        self.assertEqual(response.status_code, status.SERVICE_UNAVAILABLE)
        self.assertTrue(response.get_json()['error'])


class TestLogin(APITestCase):
    """``POST /login``."""

    def test_login(self):
        """The user's profile and API key are returned."""
        self.register()
        response = self.login()
        self.assertEqual(response.status_code, status.OK)
        user = response.get_json()['user']
        self.assertEqual(user['email'], 'a@x.com')
        self.assertEqual(user['firstName'], 'Jane')
        self.assertEqual(user['age'], '33')
        self.assertEqual(len(user['apiKey']), 32)
        self.assertIn('createdAt', user)
        self.assertNotIn('password', user)
        self.assertNotIn('password_hash', user)

    def test_bad_credentials_are_indistinguishable(self):
        """Wrong password and unknown address get the same response."""
        self.register()
        wrong_password = self.login(password='wrongpassword')
        unknown_email = self.login(email='unknown@x.com')
        self.assertEqual(wrong_password.status_code, status.UNAUTHORIZED)
        self.assertEqual(unknown_email.status_code, status.UNAUTHORIZED)
        self.assertEqual(wrong_password.get_json(), unknown_email.get_json())


class TestAuthenticatedUser(APITestCase):
    """``/user`` endpoints, which require an API key."""

    def test_no_api_key(self):
        """The Authorization header is missing."""
        response = self.client.get('/user')
        self.assertEqual(response.status_code, status.BAD_REQUEST)
        self.assertEqual(response.get_json()['message'], 'Api key is missing')

    def test_invalid_api_key(self):
        """Nobody holds the API key."""
        response = self.client.get('/user', headers={'Authorization': 'foo'})
        self.assertEqual(response.status_code, status.UNAUTHORIZED)
        self.assertEqual(response.get_json()['message'],
                         'Access Denied. Invalid Api key')

    def test_get_profile(self):
        """The key holder's profile is returned."""
        api_key = self.api_key()
        response = self.client.get('/user',
                                   headers={'Authorization': api_key})
        self.assertEqual(response.status_code, status.OK)
        self.assertEqual(response.get_json()['user']['apiKey'], api_key)

    def test_edit_profile(self):
        """The profile is updated, then updating again changes nothing."""
        api_key = self.api_key()
        body = {'email': 'b@x.com', 'first_name': 'Janet',
                'last_name': 'Doe', 'age': '34'}
        headers = {'Authorization': api_key}

        response = self.client.put('/user', json=body, headers=headers)
        self.assertEqual(response.status_code, status.OK)
        self.assertEqual(response.get_json()['message'], 'USER_UPDATED')

        response = self.client.put('/user', json=body, headers=headers)
        self.assertEqual(response.get_json()['message'], 'NO_CHANGE')

        user = self.client.get('/user', headers=headers).get_json()['user']
        self.assertEqual(user['email'], 'b@x.com')
        self.assertEqual(user['firstName'], 'Janet')

    def test_edit_profile_with_numeric_age(self):
        """A numeric age equal to the stored one is not a change."""
        api_key = self.api_key()
        body = {'email': 'a@x.com', 'first_name': 'Janet',
                'last_name': 'Doe', 'age': 33}
        headers = {'Authorization': api_key}

        response = self.client.put('/user', json=body, headers=headers)
        self.assertEqual(response.get_json()['message'], 'USER_UPDATED')
        response = self.client.put('/user', json=body, headers=headers)
        self.assertEqual(response.status_code, status.OK)
        self.assertEqual(response.get_json()['message'], 'NO_CHANGE')

    def test_edit_profile_with_taken_email(self):
        """The new address belongs to someone else."""
        api_key = self.api_key()
        self.register(email='other@x.com')
        response = self.client.put('/user', json={
            'email': 'other@x.com', 'first_name': 'Jane',
            'last_name': 'Doe', 'age': '33'
        }, headers={'Authorization': api_key})
        self.assertEqual(response.status_code, status.CONFLICT)
        self.assertEqual(response.get_json()['message'],
                         'EMAIL_ALREADY_TAKEN')

    def test_edit_profile_missing_fields(self):
        """Missing fields are reported before anything is changed."""
        api_key = self.api_key()
        response = self.client.put('/user', json={'email': 'b@x.com'},
                                   headers={'Authorization': api_key})
        self.assertEqual(response.status_code, status.BAD_REQUEST)
        self.assertEqual(response.get_json()['errorFields'],
                         'first_name, last_name, age, ')

    def test_change_password(self):
        """The old API key stops working, and the new one is returned."""
        api_key = self.api_key()
        response = self.client.put('/user/password', json={
            'old_password': 'rightpassword', 'new_password': 'newpassword'
        }, headers={'Authorization': api_key})
        self.assertEqual(response.status_code, status.OK)
        data = response.get_json()
        self.assertEqual(data['message'], 'PASSWORD_IS_CHANGED')
        self.assertNotEqual(data['apiKey'], api_key)

        response = self.client.get('/user', headers={'Authorization': api_key})
        self.assertEqual(response.status_code, status.UNAUTHORIZED)
        response = self.client.get('/user',
                                   headers={'Authorization': data['apiKey']})
        self.assertEqual(response.status_code, status.OK)
        self.assertEqual(self.login(password='newpassword').status_code,
                         status.OK)

    def test_change_password_numeric(self):
        """Numeric passwords are treated as their text."""
        api_key = self.api_key()
        response = self.client.put('/user/password', json={
            'old_password': 'rightpassword', 'new_password': 12345
        }, headers={'Authorization': api_key})
        self.assertEqual(response.status_code, status.OK)
        new_key = response.get_json()['apiKey']

        response = self.client.put('/user/password', json={
            'old_password': 12345, 'new_password': '12345'
        }, headers={'Authorization': new_key})
        self.assertEqual(response.status_code, status.OK)
        self.assertEqual(response.get_json()['message'], 'NO_CHANGE')

    def test_change_password_wrong_old_password(self):
        """The old password is wrong."""
        api_key = self.api_key()
        response = self.client.put('/user/password', json={
            'old_password': 'notit', 'new_password': 'newpassword'
        }, headers={'Authorization': api_key})
        self.assertEqual(response.status_code, status.UNAUTHORIZED)
        self.assertEqual(response.get_json()['message'],
                         'INCORRECT_CREDENTIALS')

    def test_change_password_to_same(self):
        """The new password is the current password."""
        api_key = self.api_key()
        response = self.client.put('/user/password', json={
            'old_password': 'rightpassword', 'new_password': 'rightpassword'
        }, headers={'Authorization': api_key})
        self.assertEqual(response.status_code, status.OK)
        self.assertEqual(response.get_json()['message'], 'NO_CHANGE')
        response = self.client.get('/user', headers={'Authorization': api_key})
        self.assertEqual(response.status_code, status.OK)


class TestStatus(APITestCase):
    """``GET /status``."""

    def test_ok(self):
        """The database is reachable."""
        response = self.client.get('/status')
        self.assertEqual(response.status_code, status.OK)

    @mock.patch('useraccounts.routes.is_available')
    def test_database_down(self, mock_is_available):
        """The database cannot be reached."""
        mock_is_available.return_value = False
        response = self.client.get('/status')
        self.assertEqual(response.status_code, status.SERVICE_UNAVAILABLE)
