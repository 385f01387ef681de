from rest_framework import serializers

from caretrack.domain import Activity
from caretrack.serializers.base import RecordSerializer
from caretrack.serializers.fields import optional_datetime, optional_text


class ActivitySerializer(RecordSerializer):
    record_class = Activity

    id = serializers.CharField()
    childId = serializers.CharField(source='child_id')
    type = serializers.ChoiceField(choices=Activity.TYPES)
    title = serializers.CharField()
    description = optional_text()
    date = serializers.DateTimeField()
    icon = optional_text()
    createdAt = optional_datetime('created_at')
    updatedAt = optional_datetime('updated_at')


class ActivityCreateSerializer(serializers.Serializer):
    type = serializers.ChoiceField(choices=Activity.TYPES)
    title = serializers.CharField(max_length=200)
    description = serializers.CharField(required=False, allow_blank=True)
    date = serializers.DateTimeField(required=False)
    icon = serializers.CharField(required=False)


class ActivityUpdateSerializer(ActivityCreateSerializer):
    pass
