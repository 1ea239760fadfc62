"""
Tests for the email-based user model.
"""

from django.contrib.auth import get_user_model
from django.test import TestCase

from users.models import User


class UserManagerTest(TestCase):
    """Test user creation through the manager."""

    def test_create_user_defaults(self):
        user = get_user_model().objects.create_user(
            email='Alice@Example.COM',
            password='testpass123',
            name='Alice'
        )

        self.assertEqual(user.email, 'Alice@example.com')
        self.assertEqual(user.role, User.Role.USER)
        self.assertFalse(user.is_admin)
        self.assertFalse(user.is_staff)
        self.assertTrue(user.check_password('testpass123'))
        self.assertNotEqual(user.password, 'testpass123')
        self.assertIsNotNone(user.created_at)

    def test_create_user_requires_email(self):
        with self.assertRaises(ValueError):
            get_user_model().objects.create_user(email='', password='testpass123', name='Nobody')

    def test_create_superuser_is_admin(self):
        user = get_user_model().objects.create_superuser(
            email='root@example.com',
            password='testpass123',
            name='Root'
        )

        self.assertEqual(user.role, User.Role.ADMIN)
        self.assertTrue(user.is_admin)
        self.assertTrue(user.is_staff)
        self.assertTrue(user.is_superuser)

    def test_name_is_used_as_full_name(self):
        user = User.objects.create_user(email='bob@example.com', password='testpass123', name='Bob Stone')

        self.assertEqual(user.get_full_name(), 'Bob Stone')
        self.assertEqual(user.get_short_name(), 'Bob Stone')
        self.assertIn('bob@example.com', str(user))

    def test_users_ordered_newest_first(self):
        first = User.objects.create_user(email='first@example.com', password='testpass123', name='First')
        second = User.objects.create_user(email='second@example.com', password='testpass123', name='Second')

        self.assertEqual(list(User.objects.all()), [second, first])
