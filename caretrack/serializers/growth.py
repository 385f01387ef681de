from django.utils import timezone
from rest_framework import serializers

from caretrack.domain import (
    CHART_TYPES, GENDERS, PERCENTILE_CURVES, ChartData, ChartDataPoint, ChildGrowthData, GrowthMeasurement,
    GrowthSummary, PercentilePoint,
)
from caretrack.serializers.base import RecordSerializer
from caretrack.serializers.fields import IsoDateField, optional_date, optional_datetime, optional_float, optional_int, optional_text


class GrowthMeasurementSerializer(RecordSerializer):
    record_class = GrowthMeasurement

    id = serializers.CharField()
    childId = serializers.CharField(source='child_id')
    measurementDate = IsoDateField(source='measurement_date')
    ageInMonths = serializers.FloatField(source='age_in_months', min_value=0)
    ageInDays = optional_int('age_in_days')
    weight = serializers.FloatField(min_value=0)
    height = serializers.FloatField(min_value=0)
    headCircumference = optional_float('head_circumference')
    weightPercentile = optional_float('weight_percentile')
    heightPercentile = optional_float('height_percentile')
    headCircumferencePercentile = optional_float('head_circumference_percentile')
    weightZScore = optional_float('weight_z_score')
    heightZScore = optional_float('height_z_score')
    headCircumferenceZScore = optional_float('head_circumference_z_score')
    bmi = optional_float()
    bmiPercentile = optional_float('bmi_percentile')
    bmiZScore = optional_float('bmi_z_score')
    measuredBy = optional_text('measured_by')
    location = optional_text()
    notes = optional_text()
    createdAt = optional_datetime('created_at')
    updatedAt = optional_datetime('updated_at')


class GrowthSummarySerializer(RecordSerializer):
    record_class = GrowthSummary

    latestWeight = serializers.FloatField(source='latest_weight')
    latestHeight = serializers.FloatField(source='latest_height')
    latestHeadCircumference = optional_float('latest_head_circumference')
    latestWeightPercentile = optional_float('latest_weight_percentile')
    latestHeightPercentile = optional_float('latest_height_percentile')
    latestHeadCircumferencePercentile = optional_float('latest_head_circumference_percentile')
    totalMeasurements = serializers.IntegerField(source='total_measurements', min_value=0)
    lastMeasurementDate = optional_date('last_measurement_date')


class ChildGrowthDataSerializer(RecordSerializer):
    record_class = ChildGrowthData

    childId = serializers.CharField(source='child_id')
    childName = serializers.CharField(source='child_name', allow_blank=True)
    dateOfBirth = IsoDateField(source='date_of_birth')
    gender = serializers.ChoiceField(choices=GENDERS)
    birthWeight = optional_float('birth_weight')
    birthHeight = optional_float('birth_height')
    birthHeadCircumference = optional_float('birth_head_circumference')
    measurements = GrowthMeasurementSerializer(many=True)
    summary = GrowthSummarySerializer(required=False, allow_null=True)


class ChartDataPointSerializer(RecordSerializer):
    record_class = ChartDataPoint

    date = IsoDateField()
    ageInMonths = serializers.FloatField(source='age_in_months')
    value = optional_float()
    percentile = optional_float()


class PercentilePointSerializer(RecordSerializer):
    record_class = PercentilePoint

    age = serializers.FloatField()
    value = serializers.FloatField()


class ReferenceCurvesSerializer(serializers.Serializer):
    p3 = PercentilePointSerializer(many=True, default=list)
    p15 = PercentilePointSerializer(many=True, default=list)
    p50 = PercentilePointSerializer(many=True, default=list)
    p85 = PercentilePointSerializer(many=True, default=list)
    p97 = PercentilePointSerializer(many=True, default=list)

    def validate(self, attrs):
        return {name: list(attrs.get(name) or []) for name in PERCENTILE_CURVES}


class ChartDataSerializer(RecordSerializer):
    record_class = ChartData

    childId = serializers.CharField(source='child_id')
    chartType = serializers.ChoiceField(source='chart_type', choices=CHART_TYPES)
    gender = serializers.ChoiceField(choices=GENDERS)
    dataPoints = ChartDataPointSerializer(source='data_points', many=True)
    referenceData = ReferenceCurvesSerializer(source='reference_data')


class GrowthMeasurementCreateSerializer(serializers.Serializer):
    measurement_date = serializers.DateField()
    weight = serializers.FloatField(min_value=0.3, max_value=150)
    height = serializers.FloatField(min_value=20, max_value=250)
    head_circumference = serializers.FloatField(required=False, min_value=15, max_value=70)
    measured_by = serializers.CharField(required=False)
    location = serializers.CharField(required=False)
    notes = serializers.CharField(required=False, allow_blank=True)

    def validate_measurement_date(self, v):
        if v > timezone.localdate():
            raise serializers.ValidationError('Date can not be in the future.')
        return v


class GrowthMeasurementUpdateSerializer(GrowthMeasurementCreateSerializer):
    pass
