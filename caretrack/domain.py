"""
Client-side records for the health record backend.

Every record here is a read-through copy of a backend row; nothing is
created locally without a successful round-trip.  Status vocabularies are
kept as class constants next to the record they describe.
"""
from __future__ import annotations

import datetime
from dataclasses import dataclass, field
from typing import Optional


# ---------------------------------------------------------------------------
# Children
# ---------------------------------------------------------------------------

GENDERS = ('male', 'female')
BLOOD_TYPES = ('A+', 'A-', 'B+', 'B-', 'AB+', 'AB-', 'O+', 'O-', 'unknown')
DELIVERY_TYPES = ('normal', 'cesarean', 'assisted')


@dataclass
class ChildProfile:
    id: str
    first_name: str
    last_name: str
    date_of_birth: datetime.date
    gender: str
    chdr_number: str = ''
    photo_uri: Optional[str] = None
    birth_weight: float = 0
    birth_height: float = 0
    birth_head_circumference: Optional[float] = None
    blood_type: str = 'unknown'
    place_of_birth: Optional[str] = None
    delivery_type: Optional[str] = None
    allergies: list[str] = field(default_factory=list)
    special_conditions: list[str] = field(default_factory=list)
    mother_name: str = ''
    father_name: str = ''
    emergency_contact: str = ''
    address: Optional[str] = None
    created_at: Optional[datetime.datetime] = None
    updated_at: Optional[datetime.datetime] = None

    @property
    def full_name(self) -> str:
        return f'{self.first_name} {self.last_name}'.strip()


# ---------------------------------------------------------------------------
# Pregnancies
# ---------------------------------------------------------------------------

@dataclass
class PregnancyCheckup:
    id: str
    pregnancy_id: str
    checkup_date: datetime.date
    week_of_pregnancy: int
    weight: Optional[float] = None
    blood_pressure: Optional[str] = None
    blood_pressure_systolic: Optional[int] = None
    blood_pressure_diastolic: Optional[int] = None
    fundal_height: Optional[float] = None
    fetal_heart_rate: Optional[int] = None
    fetal_weight: Optional[float] = None
    fetal_length: Optional[float] = None
    amniotic_fluid: Optional[str] = None
    placenta_position: Optional[str] = None
    urine_protein: Optional[str] = None
    urine_glucose: Optional[str] = None
    hemoglobin: Optional[float] = None
    notes: Optional[str] = None
    recommendations: list[str] = field(default_factory=list)
    next_checkup_date: Optional[datetime.date] = None
    provider_name: Optional[str] = None
    location: Optional[str] = None
    created_at: Optional[datetime.datetime] = None
    updated_at: Optional[datetime.datetime] = None


@dataclass
class PregnancyMeasurement:
    id: str
    pregnancy_id: str
    measurement_date: datetime.date
    week_of_pregnancy: int
    weight: float
    belly_circumference: Optional[float] = None
    blood_pressure: Optional[str] = None
    blood_pressure_systolic: Optional[int] = None
    blood_pressure_diastolic: Optional[int] = None
    symptoms: list[str] = field(default_factory=list)
    mood: Optional[str] = None
    notes: Optional[str] = None
    created_at: Optional[datetime.datetime] = None
    updated_at: Optional[datetime.datetime] = None


@dataclass
class PregnancyProfile:
    STATUS_ACTIVE = 'active'
    STATUS_DELIVERED = 'delivered'
    STATUS_TERMINATED = 'terminated'
    STATUS_CONVERTED = 'converted'
    STATUSES = (STATUS_ACTIVE, STATUS_DELIVERED, STATUS_TERMINATED, STATUS_CONVERTED)

    id: str
    mother_first_name: str
    mother_last_name: str
    mother_date_of_birth: datetime.date
    expected_delivery_date: datetime.date
    status: str = STATUS_ACTIVE
    user_id: Optional[str] = None
    mother_full_name: str = ''
    mother_blood_type: str = 'unknown'
    mother_photo_uri: Optional[str] = None
    last_menstrual_period: Optional[datetime.date] = None
    conception_date: Optional[datetime.date] = None
    current_week: int = 0
    trimester: int = 1
    gravida: Optional[int] = None
    para: Optional[int] = None
    blood_pressure: Optional[str] = None
    pre_pregnancy_weight: Optional[float] = None
    current_weight: Optional[float] = None
    height: Optional[float] = None
    is_high_risk: bool = False
    risk_factors: list[str] = field(default_factory=list)
    medical_conditions: list[str] = field(default_factory=list)
    allergies: list[str] = field(default_factory=list)
    medications: list[str] = field(default_factory=list)
    hospital_name: Optional[str] = None
    obgyn_name: Optional[str] = None
    obgyn_contact: Optional[str] = None
    midwife_name: Optional[str] = None
    midwife_contact: Optional[str] = None
    expected_gender: Optional[str] = None
    baby_nickname: Optional[str] = None
    number_of_babies: int = 1
    converted_to_child_id: Optional[str] = None
    delivery_date: Optional[datetime.date] = None
    delivery_type: Optional[str] = None
    delivery_notes: Optional[str] = None
    emergency_contact_name: Optional[str] = None
    emergency_contact_phone: Optional[str] = None
    emergency_contact_relation: Optional[str] = None
    checkups: Optional[list[PregnancyCheckup]] = None
    measurements: Optional[list[PregnancyMeasurement]] = None
    created_at: Optional[datetime.datetime] = None
    updated_at: Optional[datetime.datetime] = None

    @property
    def is_active(self) -> bool:
        return self.status == self.STATUS_ACTIVE


# Status moves forward only: active -> delivered/terminated, delivered -> converted.
PREGNANCY_TRANSITIONS = {
    PregnancyProfile.STATUS_ACTIVE: {PregnancyProfile.STATUS_DELIVERED, PregnancyProfile.STATUS_TERMINATED,
                                     PregnancyProfile.STATUS_CONVERTED},
    PregnancyProfile.STATUS_DELIVERED: {PregnancyProfile.STATUS_CONVERTED},
    PregnancyProfile.STATUS_TERMINATED: set(),
    PregnancyProfile.STATUS_CONVERTED: set(),
}


# ---------------------------------------------------------------------------
# Vaccination
# ---------------------------------------------------------------------------

@dataclass
class Vaccine:
    id: str
    name: str
    short_name: str
    scheduled_age_months: int
    dose_number: int
    total_doses: int
    age_group: str
    sort_order: int
    description: Optional[str] = None
    scheduled_age_days: Optional[int] = None
    diseases_prevented: list[str] = field(default_factory=list)
    side_effects: list[str] = field(default_factory=list)
    contraindications: list[str] = field(default_factory=list)
    is_active: bool = True


@dataclass
class VaccineAgeGroup:
    age_group: str
    vaccines: list[Vaccine] = field(default_factory=list)


@dataclass
class VaccinationRecord:
    STATUS_SCHEDULED = 'scheduled'
    STATUS_PENDING = 'pending'
    STATUS_DUE = 'due'
    STATUS_OVERDUE = 'overdue'
    STATUS_COMPLETED = 'completed'
    STATUS_MISSED = 'missed'
    STATUSES = (STATUS_SCHEDULED, STATUS_PENDING, STATUS_DUE, STATUS_OVERDUE, STATUS_COMPLETED, STATUS_MISSED)

    vaccine_id: str
    vaccine: Vaccine
    child_id: str
    scheduled_date: datetime.date
    status: str
    id: Optional[str] = None
    administered_date: Optional[datetime.date] = None
    administered_by: Optional[str] = None
    location: Optional[str] = None
    batch_number: Optional[str] = None
    notes: Optional[str] = None
    side_effects_occurred: list[str] = field(default_factory=list)


@dataclass
class VaccinationStatistics:
    completed: int = 0
    total: int = 0
    overdue: int = 0
    pending: int = 0
    completion_percentage: float = 0


@dataclass
class ChildSummary:
    id: str
    first_name: str
    last_name: str
    date_of_birth: Optional[datetime.date] = None


@dataclass
class ChildVaccinationData:
    child: ChildSummary
    schedule: list[VaccinationRecord]
    statistics: VaccinationStatistics
    next_vaccine: Optional[VaccinationRecord] = None


@dataclass
class VaccineRecordGroup:
    age_group: str
    records: list[VaccinationRecord]


# ---------------------------------------------------------------------------
# Growth
# ---------------------------------------------------------------------------

CHART_TYPES = ('weight', 'height', 'head')
PERCENTILE_CURVES = ('p3', 'p15', 'p50', 'p85', 'p97')


@dataclass
class GrowthMeasurement:
    id: str
    child_id: str
    measurement_date: datetime.date
    age_in_months: float
    weight: float
    height: float
    age_in_days: Optional[int] = None
    head_circumference: Optional[float] = None
    weight_percentile: Optional[float] = None
    height_percentile: Optional[float] = None
    head_circumference_percentile: Optional[float] = None
    weight_z_score: Optional[float] = None
    height_z_score: Optional[float] = None
    head_circumference_z_score: Optional[float] = None
    bmi: Optional[float] = None
    bmi_percentile: Optional[float] = None
    bmi_z_score: Optional[float] = None
    measured_by: Optional[str] = None
    location: Optional[str] = None
    notes: Optional[str] = None
    created_at: Optional[datetime.datetime] = None
    updated_at: Optional[datetime.datetime] = None


@dataclass
class GrowthSummary:
    latest_weight: float
    latest_height: float
    total_measurements: int
    last_measurement_date: Optional[datetime.date] = None
    latest_head_circumference: Optional[float] = None
    latest_weight_percentile: Optional[float] = None
    latest_height_percentile: Optional[float] = None
    latest_head_circumference_percentile: Optional[float] = None


@dataclass
class ChildGrowthData:
    child_id: str
    child_name: str
    date_of_birth: datetime.date
    gender: str
    measurements: list[GrowthMeasurement]
    birth_weight: Optional[float] = None
    birth_height: Optional[float] = None
    birth_head_circumference: Optional[float] = None
    summary: Optional[GrowthSummary] = None


@dataclass
class ChartDataPoint:
    date: datetime.date
    age_in_months: float
    value: Optional[float] = None
    percentile: Optional[float] = None


@dataclass
class PercentilePoint:
    age: float
    value: float


@dataclass
class ChartData:
    child_id: str
    chart_type: str
    gender: str
    data_points: list[ChartDataPoint]
    # keyed by PERCENTILE_CURVES names
    reference_data: dict[str, list[PercentilePoint]]


# ---------------------------------------------------------------------------
# Appointments
# ---------------------------------------------------------------------------

@dataclass
class Appointment:
    TYPES = ('vaccination', 'growth_check', 'development_check', 'general_checkup', 'specialist', 'emergency')

    STATUS_SCHEDULED = 'scheduled'
    STATUS_COMPLETED = 'completed'
    STATUS_CANCELLED = 'cancelled'
    STATUS_RESCHEDULED = 'rescheduled'
    STATUS_MISSED = 'missed'
    STATUSES = (STATUS_SCHEDULED, STATUS_COMPLETED, STATUS_CANCELLED, STATUS_RESCHEDULED, STATUS_MISSED)

    id: str
    child_id: str
    title: str
    type: str
    date_time: datetime.datetime
    location: str
    status: str = STATUS_SCHEDULED
    duration: Optional[int] = None
    address: Optional[str] = None
    provider_name: Optional[str] = None
    provider_role: Optional[str] = None
    provider_phone: Optional[str] = None
    notes: Optional[str] = None
    reminder_sent: bool = False
    child: Optional[ChildSummary] = None
    created_at: Optional[datetime.datetime] = None
    updated_at: Optional[datetime.datetime] = None


@dataclass
class AppointmentSummary:
    total_appointments: int = 0
    upcoming_count: int = 0
    completed_count: int = 0
    cancelled_count: int = 0
    next_appointment: Optional[Appointment] = None


@dataclass
class ChildAppointments:
    child_id: str
    child_name: str
    appointments: list[Appointment]
    upcoming: list[Appointment] = field(default_factory=list)
    past: list[Appointment] = field(default_factory=list)
    summary: AppointmentSummary = field(default_factory=AppointmentSummary)


# ---------------------------------------------------------------------------
# Emergency contacts
# ---------------------------------------------------------------------------

@dataclass
class EmergencyContact:
    id: str
    name: str
    role: str
    phone: str
    is_primary: bool = False
    is_default: bool = False
    user_id: Optional[str] = None
    email: Optional[str] = None
    address: Optional[str] = None
    notes: Optional[str] = None
    created_at: Optional[datetime.datetime] = None
    updated_at: Optional[datetime.datetime] = None


# ---------------------------------------------------------------------------
# Activity timeline
# ---------------------------------------------------------------------------

@dataclass
class Activity:
    TYPES = ('vaccination', 'growth', 'milestone', 'appointment', 'checkup')

    id: str
    child_id: str
    type: str
    title: str
    date: datetime.datetime
    description: Optional[str] = None
    icon: Optional[str] = None
    created_at: Optional[datetime.datetime] = None
    updated_at: Optional[datetime.datetime] = None


# ---------------------------------------------------------------------------
# Auth
# ---------------------------------------------------------------------------

@dataclass
class AppUser:
    id: str
    email: str
    name: Optional[str] = None
    given_name: Optional[str] = None
    family_name: Optional[str] = None
    picture: Optional[str] = None
    auth0_id: Optional[str] = None


@dataclass
class AuthSession:
    access_token: str
    refresh_token: str
    user: Optional[AppUser] = None
