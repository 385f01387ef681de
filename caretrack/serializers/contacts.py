from rest_framework import serializers

from caretrack.domain import EmergencyContact
from caretrack.serializers.base import RecordSerializer
from caretrack.serializers.fields import optional_datetime, optional_text


class EmergencyContactSerializer(RecordSerializer):
    record_class = EmergencyContact

    id = serializers.CharField()
    userId = optional_text('user_id')
    name = serializers.CharField()
    role = serializers.CharField(allow_blank=True)
    phone = serializers.CharField()
    isPrimary = serializers.BooleanField(source='is_primary', default=False)
    isDefault = serializers.BooleanField(source='is_default', default=False)
    email = optional_text()
    address = optional_text()
    notes = optional_text()
    createdAt = optional_datetime('created_at')
    updatedAt = optional_datetime('updated_at')


class EmergencyContactCreateSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=120)
    role = serializers.CharField(max_length=60)
    phone = serializers.RegexField(r'^\+?[0-9 ()\-]{6,20}$', max_length=20)
    is_primary = serializers.BooleanField(required=False)
    email = serializers.EmailField(required=False)
    address = serializers.CharField(required=False, allow_blank=True)
    notes = serializers.CharField(required=False, allow_blank=True)

    def validate_phone(self, v):
        return v.strip()


class EmergencyContactUpdateSerializer(EmergencyContactCreateSerializer):
    pass
