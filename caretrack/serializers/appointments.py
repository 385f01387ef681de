from django.utils import timezone
from rest_framework import serializers

from caretrack.domain import Appointment, AppointmentSummary, ChildAppointments
from caretrack.serializers.base import RecordSerializer
from caretrack.serializers.fields import optional_datetime, optional_int, optional_text
from caretrack.serializers.vaccines import ChildSummarySerializer


class AppointmentSerializer(RecordSerializer):
    record_class = Appointment

    id = serializers.CharField()
    childId = serializers.CharField(source='child_id')
    title = serializers.CharField()
    type = serializers.ChoiceField(choices=Appointment.TYPES)
    dateTime = serializers.DateTimeField(source='date_time')
    duration = optional_int(min_value=0)
    location = serializers.CharField(allow_blank=True)
    address = optional_text()
    providerName = optional_text('provider_name')
    providerRole = optional_text('provider_role')
    providerPhone = optional_text('provider_phone')
    status = serializers.ChoiceField(choices=Appointment.STATUSES)
    notes = optional_text()
    reminderSent = serializers.BooleanField(source='reminder_sent', default=False)
    child = ChildSummarySerializer(required=False, allow_null=True)
    createdAt = optional_datetime('created_at')
    updatedAt = optional_datetime('updated_at')


class AppointmentSummarySerializer(RecordSerializer):
    record_class = AppointmentSummary

    totalAppointments = serializers.IntegerField(source='total_appointments', default=0)
    upcomingCount = serializers.IntegerField(source='upcoming_count', default=0)
    completedCount = serializers.IntegerField(source='completed_count', default=0)
    cancelledCount = serializers.IntegerField(source='cancelled_count', default=0)
    nextAppointment = AppointmentSerializer(source='next_appointment', required=False, allow_null=True)


class ChildAppointmentsSerializer(RecordSerializer):
    record_class = ChildAppointments

    childId = serializers.CharField(source='child_id')
    childName = serializers.CharField(source='child_name', allow_blank=True)
    appointments = AppointmentSerializer(many=True)
    upcoming = AppointmentSerializer(many=True, default=list)
    past = AppointmentSerializer(many=True, default=list)
    summary = AppointmentSummarySerializer(required=False)


class AppointmentCreateSerializer(serializers.Serializer):
    title = serializers.CharField(max_length=200)
    type = serializers.ChoiceField(choices=Appointment.TYPES)
    date_time = serializers.DateTimeField()
    duration = serializers.IntegerField(required=False, min_value=0)
    location = serializers.CharField(max_length=200)
    address = serializers.CharField(required=False, allow_blank=True)
    provider_name = serializers.CharField(required=False)
    provider_role = serializers.CharField(required=False)
    provider_phone = serializers.CharField(required=False)
    notes = serializers.CharField(required=False, allow_blank=True)

    def validate_date_time(self, v):
        if not self.partial and v < timezone.now():
            raise serializers.ValidationError('Appointments must be scheduled in the future.')
        return v


class AppointmentUpdateSerializer(AppointmentCreateSerializer):
    status = serializers.ChoiceField(choices=Appointment.STATUSES, required=False)
    reminder_sent = serializers.BooleanField(required=False)
