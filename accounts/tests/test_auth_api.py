from django.contrib.auth import get_user_model
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from recipes.services.entities import CallerIdentity

User = get_user_model()


class AuthAPITestCase(APITestCase):

    def register(self, **overrides):
        payload = {
            'username': 'ada',
            'email': 'ada@example.com',
            'password': 'password123',
        }
        payload.update(overrides)
        return self.client.post(reverse('register'), payload, format='json')

    def test_register_defaults_to_user_role(self):
        response = self.register()
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['user']['role'], 'user')
        self.assertIn('access', response.data['tokens'])

    def test_register_as_chef(self):
        response = self.register(role='chef')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(User.objects.get(email='ada@example.com').role, User.ROLE_CHEF)

    def test_register_as_admin_is_refused(self):
        response = self.register(role='admin')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('role', response.data)

    def test_login(self):
        self.register()
        response = self.client.post(
            reverse('login'), {'email': 'ada@example.com', 'password': 'password123'}, format='json'
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertIn('refresh', response.data['tokens'])

    def test_login_with_bad_credentials(self):
        self.register()
        response = self.client.post(
            reverse('login'), {'email': 'ada@example.com', 'password': 'wrong-password'}, format='json'
        )
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_token_gives_access_to_catalog(self):
        tokens = self.register(role='chef').data['tokens']
        self.client.credentials(HTTP_AUTHORIZATION=f"Bearer {tokens['access']}")

        response = self.client.get(reverse('profile'))
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['email'], 'ada@example.com')

        response = self.client.get(reverse('recipe-list'))
        self.assertEqual(response.status_code, status.HTTP_200_OK)

    def test_logout_blacklists_refresh_token(self):
        tokens = self.register().data['tokens']
        self.client.credentials(HTTP_AUTHORIZATION=f"Bearer {tokens['access']}")

        response = self.client.post(reverse('logout'), {'refresh': tokens['refresh']}, format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)

        response = self.client.post(reverse('token_refresh'), {'refresh': tokens['refresh']}, format='json')
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_logout_with_invalid_token(self):
        tokens = self.register().data['tokens']
        self.client.credentials(HTTP_AUTHORIZATION=f"Bearer {tokens['access']}")
        response = self.client.post(reverse('logout'), {'refresh': 'not-a-token'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)


class CallerIdentityTestCase(APITestCase):

    def test_from_user(self):
        chef = User.objects.create_user(
            username='cook', email='cook@example.com', password='password123', role='chef'
        )
        self.assertEqual(CallerIdentity.from_user(chef), CallerIdentity(authenticated=True, role='chef'))
        self.assertEqual(CallerIdentity.from_user(None), CallerIdentity(authenticated=False))
