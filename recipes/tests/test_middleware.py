import re

from django.contrib.auth import get_user_model
from django.db import connection
from django.test import SimpleTestCase, override_settings
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from chefbook.exceptions import catalog_exception_handler
from recipes.exceptions import DuplicateKey, NotFound, ReferenceConflict, RoleRequired, ValidationError


class TimingMiddlewareTestCase(APITestCase):
    def setUp(self):
        self.user = get_user_model().objects.create_user(
            username='tester',
            email='tester@example.com',
            password='password123',
        )
        self.client.force_authenticate(self.user)

    @override_settings(DEBUG=True)
    def test_server_timing_header_in_debug(self):
        response = self.client.get(reverse('tag-list'))
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertIn('Server-Timing', response.headers)
        self.assertIn('queries;desc=', response.headers['Server-Timing'])

    @override_settings(DEBUG=True)
    def test_query_count_survives_full_query_log(self):
        # Journal plein : connection.queries est plafonné à queries_limit
        connection.queries_log.extend(
            [{'sql': 'SELECT 1', 'time': '0.000'}] * connection.queries_limit
        )
        response = self.client.get(reverse('tag-list'))

        match = re.search(r'queries;desc="(\d+) SQL"', response.headers['Server-Timing'])
        num_queries = int(match.group(1))
        self.assertGreaterEqual(num_queries, 1)
        self.assertLess(num_queries, connection.queries_limit)

    @override_settings(DEBUG=False)
    def test_no_header_outside_debug(self):
        response = self.client.get(reverse('tag-list'))
        self.assertNotIn('Server-Timing', response.headers)


class CatalogExceptionHandlerTestCase(SimpleTestCase):

    def test_domain_errors_map_to_status_codes(self):
        cases = [
            (ValidationError.for_field('name', 'vide'), status.HTTP_400_BAD_REQUEST),
            (NotFound('recipe', 1), status.HTTP_404_NOT_FOUND),
            (DuplicateKey('tag', 'name', 'spicy'), status.HTTP_409_CONFLICT),
            (ReferenceConflict('chef', 1, '2 recette(s)'), status.HTTP_409_CONFLICT),
            (RoleRequired('chef', 'Only chef can create recipes'), status.HTTP_403_FORBIDDEN),
        ]
        for exc, expected in cases:
            with self.subTest(exc=type(exc).__name__):
                response = catalog_exception_handler(exc, {})
                self.assertEqual(response.status_code, expected)

    @override_settings(DEBUG=False)
    def test_unhandled_error_is_logged_and_hidden(self):
        with self.assertLogs('chefbook.exceptions', level='ERROR'):
            response = catalog_exception_handler(RuntimeError('secret'), {})
        self.assertEqual(response.status_code, status.HTTP_500_INTERNAL_SERVER_ERROR)
        self.assertNotIn('detail', response.data)
