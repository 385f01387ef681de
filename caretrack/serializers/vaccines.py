from rest_framework import serializers

from caretrack.domain import (
    ChildSummary, ChildVaccinationData, VaccinationRecord, VaccinationStatistics, Vaccine, VaccineAgeGroup,
)
from caretrack.serializers.base import RecordSerializer
from caretrack.serializers.fields import IsoDateField, StringListField, optional_date, optional_int, optional_text


class VaccineSerializer(RecordSerializer):
    record_class = Vaccine

    id = serializers.CharField()
    name = serializers.CharField()
    shortName = serializers.CharField(source='short_name', allow_blank=True)
    description = optional_text()
    scheduledAgeMonths = serializers.IntegerField(source='scheduled_age_months', min_value=0)
    scheduledAgeDays = optional_int('scheduled_age_days')
    doseNumber = serializers.IntegerField(source='dose_number', min_value=1)
    totalDoses = serializers.IntegerField(source='total_doses', min_value=1)
    ageGroup = serializers.CharField(source='age_group')
    diseasesPrevented = StringListField(source='diseases_prevented')
    sideEffects = StringListField(source='side_effects')
    contraindications = StringListField()
    sortOrder = serializers.IntegerField(source='sort_order')
    isActive = serializers.BooleanField(source='is_active', default=True)


class VaccineAgeGroupSerializer(RecordSerializer):
    record_class = VaccineAgeGroup

    ageGroup = serializers.CharField(source='age_group')
    vaccines = VaccineSerializer(many=True)


class VaccinationRecordSerializer(RecordSerializer):
    record_class = VaccinationRecord

    id = optional_text()
    vaccineId = serializers.CharField(source='vaccine_id')
    vaccine = VaccineSerializer()
    childId = serializers.CharField(source='child_id')
    scheduledDate = IsoDateField(source='scheduled_date')
    administeredDate = optional_date('administered_date')
    administeredBy = optional_text('administered_by')
    location = optional_text()
    batchNumber = optional_text('batch_number')
    notes = optional_text()
    sideEffectsOccurred = StringListField(source='side_effects_occurred')
    status = serializers.ChoiceField(choices=VaccinationRecord.STATUSES)


class VaccinationStatisticsSerializer(RecordSerializer):
    record_class = VaccinationStatistics

    completed = serializers.IntegerField(min_value=0)
    total = serializers.IntegerField(min_value=0)
    overdue = serializers.IntegerField(min_value=0, default=0)
    pending = serializers.IntegerField(min_value=0, default=0)
    completionPercentage = serializers.FloatField(source='completion_percentage', default=0)

    def validate(self, attrs):
        if attrs['completed'] > attrs['total']:
            raise serializers.ValidationError('completed count exceeds total')
        return super().validate(attrs)


class ChildSummarySerializer(RecordSerializer):
    record_class = ChildSummary

    id = serializers.CharField()
    firstName = serializers.CharField(source='first_name')
    lastName = serializers.CharField(source='last_name', allow_blank=True)
    dateOfBirth = optional_date('date_of_birth')


class ChildVaccinationDataSerializer(RecordSerializer):
    record_class = ChildVaccinationData

    child = ChildSummarySerializer()
    schedule = VaccinationRecordSerializer(many=True)
    statistics = VaccinationStatisticsSerializer()
    nextVaccine = VaccinationRecordSerializer(source='next_vaccine', required=False, allow_null=True)


class AdministerVaccineSerializer(serializers.Serializer):
    administered_date = serializers.DateField(required=False)
    administered_by = serializers.CharField(required=False, max_length=200)
    location = serializers.CharField(required=False, max_length=200)
    batch_number = serializers.CharField(required=False, max_length=100)
    notes = serializers.CharField(required=False, allow_blank=True)
    side_effects_occurred = serializers.ListField(child=serializers.CharField(), required=False)


class VaccinationRecordUpdateSerializer(AdministerVaccineSerializer):
    status = serializers.ChoiceField(choices=VaccinationRecord.STATUSES, required=False)
