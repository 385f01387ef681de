from rest_framework import serializers

from caretrack.domain import AppUser, AuthSession
from caretrack.serializers.base import RecordSerializer
from caretrack.serializers.fields import optional_text


class AppUserSerializer(RecordSerializer):
    record_class = AppUser

    id = serializers.CharField()
    email = serializers.EmailField()
    name = optional_text()
    givenName = optional_text('given_name')
    familyName = optional_text('family_name')
    picture = optional_text()
    auth0Id = optional_text('auth0_id')


class AuthSessionSerializer(RecordSerializer):
    record_class = AuthSession

    accessToken = serializers.CharField(source='access_token')
    refreshToken = serializers.CharField(source='refresh_token')
    user = AppUserSerializer(required=False, allow_null=True)


class TokenPairSerializer(serializers.Serializer):
    accessToken = serializers.CharField(source='access_token')
    refreshToken = serializers.CharField(source='refresh_token')

    def validate(self, attrs):
        return attrs['access_token'], attrs['refresh_token']


class IdentityLoginSerializer(serializers.Serializer):
    access_token = serializers.CharField()

    def validate_access_token(self, v):
        v = (v or '').strip()
        if not v:
            raise serializers.ValidationError('Identity provider token must not be empty')
        return v
