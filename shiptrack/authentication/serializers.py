from django.contrib.auth import authenticate
from django.contrib.auth.password_validation import validate_password
from rest_framework import serializers

from shiptrack.exceptions import InvalidCredentialsException, ValidationException
from users.models import User


class UserSerializer(serializers.ModelSerializer):
    """Serializer for users. The password is never exposed."""
    createdAt = serializers.DateTimeField(source='created_at', read_only=True)

    class Meta:
        model = User
        fields = ['id', 'name', 'email', 'role', 'createdAt']
        read_only_fields = fields


class UserCreateSerializer(serializers.ModelSerializer):
    """Serializer for creating users; the role is supplied by the caller of ``save``."""
    password = serializers.CharField(write_only=True)

    class Meta:
        model = User
        fields = ['name', 'email', 'password']

    def validate_password(self, value):
        validate_password(value)
        return value

    def create(self, validated_data):
        return User.objects.create_user(**validated_data)

    def to_representation(self, instance):
        return {
            'id': instance.id,
            'name': instance.name,
            'email': instance.email,
            'role': instance.role,
        }


class LoginSerializer(serializers.Serializer):
    """Serializer for user login."""
    email = serializers.CharField(required=False, allow_blank=True)
    password = serializers.CharField(required=False, allow_blank=True, trim_whitespace=False)

    def validate(self, data):
        email = data.get('email')
        password = data.get('password')

        if not email or not password:
            raise ValidationException('Please provide an email and password')

        user = authenticate(self.context.get('request'), email=email, password=password)
        if user is None:
            raise InvalidCredentialsException()

        data['user'] = user
        return data
