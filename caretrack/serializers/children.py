from django.utils import timezone
from rest_framework import serializers

from caretrack.domain import BLOOD_TYPES, DELIVERY_TYPES, GENDERS, ChildProfile
from caretrack.serializers.base import RecordSerializer
from caretrack.serializers.fields import (
    IsoDateField, StringListField, optional_datetime, optional_float, optional_text,
)


class ChildProfileSerializer(RecordSerializer):
    record_class = ChildProfile

    id = serializers.CharField()
    chdrNumber = optional_text('chdr_number')
    firstName = serializers.CharField(source='first_name')
    lastName = serializers.CharField(source='last_name', allow_blank=True)
    dateOfBirth = IsoDateField(source='date_of_birth')
    gender = serializers.ChoiceField(choices=GENDERS)
    photoUri = optional_text('photo_uri')
    birthWeight = optional_float('birth_weight')
    birthHeight = optional_float('birth_height')
    birthHeadCircumference = optional_float('birth_head_circumference')
    bloodType = optional_text('blood_type')
    placeOfBirth = optional_text('place_of_birth')
    deliveryType = optional_text('delivery_type')
    allergies = StringListField()
    specialConditions = StringListField(source='special_conditions')
    motherName = optional_text('mother_name')
    fatherName = optional_text('father_name')
    emergencyContact = optional_text('emergency_contact')
    address = optional_text()
    createdAt = optional_datetime('created_at')
    updatedAt = optional_datetime('updated_at')

    def validate(self, attrs):
        for key in ('chdr_number', 'mother_name', 'father_name', 'emergency_contact'):
            attrs[key] = attrs.get(key) or ''
        for key in ('birth_weight', 'birth_height'):
            attrs[key] = attrs.get(key) or 0
        attrs['blood_type'] = attrs.get('blood_type') or 'unknown'
        for key in ('delivery_type', 'photo_uri', 'place_of_birth', 'address'):
            attrs[key] = attrs.get(key) or None
        return super().validate(attrs)


class ChildCreateSerializer(serializers.Serializer):
    first_name = serializers.CharField(max_length=100)
    last_name = serializers.CharField(max_length=100)
    date_of_birth = serializers.DateField()
    gender = serializers.ChoiceField(choices=GENDERS)
    chdr_number = serializers.CharField(required=False, max_length=64)
    photo_uri = serializers.CharField(required=False)
    birth_weight = serializers.FloatField(required=False, min_value=0)
    birth_height = serializers.FloatField(required=False, min_value=0)
    birth_head_circumference = serializers.FloatField(required=False, min_value=0)
    blood_type = serializers.ChoiceField(choices=BLOOD_TYPES, required=False)
    place_of_birth = serializers.CharField(required=False)
    delivery_type = serializers.ChoiceField(choices=DELIVERY_TYPES, required=False)
    allergies = serializers.ListField(child=serializers.CharField(), required=False)
    special_conditions = serializers.ListField(child=serializers.CharField(), required=False)
    mother_name = serializers.CharField(required=False, allow_blank=True)
    father_name = serializers.CharField(required=False, allow_blank=True)
    emergency_contact = serializers.CharField(required=False, allow_blank=True)
    address = serializers.CharField(required=False, allow_blank=True)

    def validate_date_of_birth(self, v):
        if v > timezone.localdate():
            raise serializers.ValidationError('Date of birth can not be in the future.')
        return v
