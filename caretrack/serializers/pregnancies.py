from rest_framework import serializers

from caretrack.domain import (
    BLOOD_TYPES, DELIVERY_TYPES, GENDERS, PregnancyCheckup, PregnancyMeasurement, PregnancyProfile,
)
from caretrack.serializers.base import RecordSerializer
from caretrack.serializers.children import ChildProfileSerializer
from caretrack.serializers.fields import (
    IsoDateField, StringListField, optional_date, optional_datetime, optional_float, optional_int, optional_text,
)


class PregnancyCheckupSerializer(RecordSerializer):
    record_class = PregnancyCheckup

    id = serializers.CharField()
    pregnancyId = serializers.CharField(source='pregnancy_id')
    checkupDate = IsoDateField(source='checkup_date')
    weekOfPregnancy = serializers.IntegerField(source='week_of_pregnancy', min_value=0, max_value=45)
    weight = optional_float()
    bloodPressure = optional_text('blood_pressure')
    bloodPressureSystolic = optional_int('blood_pressure_systolic')
    bloodPressureDiastolic = optional_int('blood_pressure_diastolic')
    fundalHeight = optional_float('fundal_height')
    fetalHeartRate = optional_int('fetal_heart_rate')
    fetalWeight = optional_float('fetal_weight')
    fetalLength = optional_float('fetal_length')
    amnioticFluid = optional_text('amniotic_fluid')
    placentaPosition = optional_text('placenta_position')
    urineProtein = optional_text('urine_protein')
    urineGlucose = optional_text('urine_glucose')
    hemoglobin = optional_float()
    notes = optional_text()
    recommendations = StringListField()
    nextCheckupDate = optional_date('next_checkup_date')
    providerName = optional_text('provider_name')
    location = optional_text()
    createdAt = optional_datetime('created_at')
    updatedAt = optional_datetime('updated_at')


class PregnancyMeasurementSerializer(RecordSerializer):
    record_class = PregnancyMeasurement

    id = serializers.CharField()
    pregnancyId = serializers.CharField(source='pregnancy_id')
    measurementDate = IsoDateField(source='measurement_date')
    weekOfPregnancy = serializers.IntegerField(source='week_of_pregnancy', min_value=0, max_value=45)
    weight = serializers.FloatField()
    bellyCircumference = optional_float('belly_circumference')
    bloodPressure = optional_text('blood_pressure')
    bloodPressureSystolic = optional_int('blood_pressure_systolic')
    bloodPressureDiastolic = optional_int('blood_pressure_diastolic')
    symptoms = StringListField()
    mood = optional_text()
    notes = optional_text()
    createdAt = optional_datetime('created_at')
    updatedAt = optional_datetime('updated_at')


class PregnancyProfileSerializer(RecordSerializer):
    record_class = PregnancyProfile

    id = serializers.CharField()
    userId = optional_text('user_id')
    motherFirstName = serializers.CharField(source='mother_first_name')
    motherLastName = serializers.CharField(source='mother_last_name', allow_blank=True)
    motherFullName = optional_text('mother_full_name')
    motherDateOfBirth = IsoDateField(source='mother_date_of_birth')
    motherBloodType = optional_text('mother_blood_type')
    motherPhotoUri = optional_text('mother_photo_uri')
    expectedDeliveryDate = IsoDateField(source='expected_delivery_date')
    lastMenstrualPeriod = optional_date('last_menstrual_period')
    conceptionDate = optional_date('conception_date')
    status = serializers.ChoiceField(choices=PregnancyProfile.STATUSES)
    currentWeek = optional_int('current_week')
    trimester = optional_int(min_value=1, max_value=3)
    gravida = optional_int()
    para = optional_int()
    bloodPressure = optional_text('blood_pressure')
    prePregnancyWeight = optional_float('pre_pregnancy_weight')
    currentWeight = optional_float('current_weight')
    height = optional_float()
    isHighRisk = serializers.BooleanField(source='is_high_risk', default=False)
    riskFactors = StringListField(source='risk_factors')
    medicalConditions = StringListField(source='medical_conditions')
    allergies = StringListField()
    medications = StringListField()
    hospitalName = optional_text('hospital_name')
    obgynName = optional_text('obgyn_name')
    obgynContact = optional_text('obgyn_contact')
    midwifeName = optional_text('midwife_name')
    midwifeContact = optional_text('midwife_contact')
    expectedGender = optional_text('expected_gender')
    babyNickname = optional_text('baby_nickname')
    numberOfBabies = optional_int('number_of_babies', min_value=1)
    convertedToChildId = optional_text('converted_to_child_id')
    deliveryDate = optional_date('delivery_date')
    deliveryType = optional_text('delivery_type')
    deliveryNotes = optional_text('delivery_notes')
    emergencyContactName = optional_text('emergency_contact_name')
    emergencyContactPhone = optional_text('emergency_contact_phone')
    emergencyContactRelation = optional_text('emergency_contact_relation')
    checkups = PregnancyCheckupSerializer(many=True, required=False, allow_null=True)
    measurements = PregnancyMeasurementSerializer(many=True, required=False, allow_null=True)
    createdAt = optional_datetime('created_at')
    updatedAt = optional_datetime('updated_at')

    def validate(self, attrs):
        attrs['mother_blood_type'] = attrs.get('mother_blood_type') if attrs.get('mother_blood_type') in BLOOD_TYPES else 'unknown'
        attrs['mother_full_name'] = attrs.get('mother_full_name') or f"{attrs['mother_first_name']} {attrs['mother_last_name']}".strip()
        for key, fallback in (('current_week', 0), ('trimester', 1), ('number_of_babies', 1)):
            if attrs.get(key) is None:
                attrs[key] = fallback
        if attrs.get('expected_gender') not in GENDERS:
            attrs['expected_gender'] = None
        if attrs.get('delivery_type') not in DELIVERY_TYPES:
            attrs['delivery_type'] = None
        return super().validate(attrs)


class ConvertedPregnancySerializer(serializers.Serializer):
    pregnancy = PregnancyProfileSerializer()
    child = ChildProfileSerializer()

    def validate(self, attrs):
        return attrs['pregnancy'], attrs['child']


# ---------------------------------------------------------------------------
# Request bodies
# ---------------------------------------------------------------------------

class PregnancyCreateSerializer(serializers.Serializer):
    mother_first_name = serializers.CharField(max_length=100)
    mother_last_name = serializers.CharField(max_length=100)
    mother_date_of_birth = serializers.DateField()
    expected_delivery_date = serializers.DateField()
    mother_blood_type = serializers.ChoiceField(choices=BLOOD_TYPES, required=False)
    mother_photo_uri = serializers.CharField(required=False)
    last_menstrual_period = serializers.DateField(required=False)
    conception_date = serializers.DateField(required=False)
    gravida = serializers.IntegerField(required=False, min_value=0)
    para = serializers.IntegerField(required=False, min_value=0)
    pre_pregnancy_weight = serializers.FloatField(required=False, min_value=0)
    current_weight = serializers.FloatField(required=False, min_value=0)
    height = serializers.FloatField(required=False, min_value=0)
    is_high_risk = serializers.BooleanField(required=False)
    risk_factors = serializers.ListField(child=serializers.CharField(), required=False)
    medical_conditions = serializers.ListField(child=serializers.CharField(), required=False)
    allergies = serializers.ListField(child=serializers.CharField(), required=False)
    medications = serializers.ListField(child=serializers.CharField(), required=False)
    hospital_name = serializers.CharField(required=False, allow_blank=True)
    obgyn_name = serializers.CharField(required=False, allow_blank=True)
    obgyn_contact = serializers.CharField(required=False, allow_blank=True)
    midwife_name = serializers.CharField(required=False, allow_blank=True)
    midwife_contact = serializers.CharField(required=False, allow_blank=True)
    expected_gender = serializers.ChoiceField(choices=GENDERS, required=False)
    baby_nickname = serializers.CharField(required=False, allow_blank=True)
    number_of_babies = serializers.IntegerField(required=False, min_value=1)
    emergency_contact_name = serializers.CharField(required=False, allow_blank=True)
    emergency_contact_phone = serializers.CharField(required=False, allow_blank=True)
    emergency_contact_relation = serializers.CharField(required=False, allow_blank=True)

    def validate(self, attrs):
        lmp = attrs.get('last_menstrual_period')
        edd = attrs.get('expected_delivery_date')
        if lmp and edd and lmp >= edd:
            raise serializers.ValidationError('Last menstrual period must be before the expected delivery date.')
        return attrs


class PregnancyUpdateSerializer(PregnancyCreateSerializer):
    delivery_date = serializers.DateField(required=False)
    delivery_type = serializers.ChoiceField(choices=DELIVERY_TYPES, required=False)
    delivery_notes = serializers.CharField(required=False, allow_blank=True)


class ConvertToChildSerializer(serializers.Serializer):
    first_name = serializers.CharField(max_length=100)
    last_name = serializers.CharField(max_length=100)
    date_of_birth = serializers.DateField()
    gender = serializers.ChoiceField(choices=GENDERS)
    chdr_number = serializers.CharField(required=False)
    photo_uri = serializers.CharField(required=False)
    birth_weight = serializers.FloatField(required=False, min_value=0)
    birth_height = serializers.FloatField(required=False, min_value=0)
    birth_head_circumference = serializers.FloatField(required=False, min_value=0)
    blood_type = serializers.ChoiceField(choices=BLOOD_TYPES, required=False)
    place_of_birth = serializers.CharField(required=False)
    delivery_type = serializers.ChoiceField(choices=DELIVERY_TYPES, required=False)
    delivery_notes = serializers.CharField(required=False, allow_blank=True)
    allergies = serializers.ListField(child=serializers.CharField(), required=False)
    special_conditions = serializers.ListField(child=serializers.CharField(), required=False)
    address = serializers.CharField(required=False, allow_blank=True)


class CheckupCreateSerializer(serializers.Serializer):
    checkup_date = serializers.DateField()
    week_of_pregnancy = serializers.IntegerField(min_value=0, max_value=45)
    weight = serializers.FloatField(required=False, min_value=0)
    blood_pressure_systolic = serializers.IntegerField(required=False, min_value=0)
    blood_pressure_diastolic = serializers.IntegerField(required=False, min_value=0)
    fundal_height = serializers.FloatField(required=False, min_value=0)
    fetal_heart_rate = serializers.IntegerField(required=False, min_value=0)
    fetal_weight = serializers.FloatField(required=False, min_value=0)
    fetal_length = serializers.FloatField(required=False, min_value=0)
    amniotic_fluid = serializers.CharField(required=False)
    placenta_position = serializers.CharField(required=False)
    urine_protein = serializers.CharField(required=False)
    urine_glucose = serializers.CharField(required=False)
    hemoglobin = serializers.FloatField(required=False, min_value=0)
    notes = serializers.CharField(required=False, allow_blank=True)
    recommendations = serializers.ListField(child=serializers.CharField(), required=False)
    next_checkup_date = serializers.DateField(required=False)
    provider_name = serializers.CharField(required=False)
    location = serializers.CharField(required=False)


class MeasurementCreateSerializer(serializers.Serializer):
    measurement_date = serializers.DateField()
    week_of_pregnancy = serializers.IntegerField(min_value=0, max_value=45)
    weight = serializers.FloatField(min_value=0)
    belly_circumference = serializers.FloatField(required=False, min_value=0)
    blood_pressure_systolic = serializers.IntegerField(required=False, min_value=0)
    blood_pressure_diastolic = serializers.IntegerField(required=False, min_value=0)
    symptoms = serializers.ListField(child=serializers.CharField(), required=False)
    mood = serializers.CharField(required=False)
    notes = serializers.CharField(required=False, allow_blank=True)
