import datetime

import pytest

from caretrack.client import ApiClient
from caretrack.domain import ChildProfile, PregnancyProfile
from caretrack.exceptions import InvalidRequest, SchemaError
from caretrack.services import activities, appointments, auth, children, contacts, growth, pregnancies, vaccines
from caretrack.tests import fakes
from caretrack.tests.fakes import FakeBackend, FakeResponse, envelope


class Creds:
    access_token = 'access-1'
    refresh_token = 'refresh-1'

    def set_tokens(self, access_token, refresh_token):
        self.access_token, self.refresh_token = access_token, refresh_token

    def clear_credentials(self):
        self.access_token = self.refresh_token = None


@pytest.fixture
def fake():
    return FakeBackend()


@pytest.fixture
def client(fake):
    return ApiClient(credentials=Creds(), session=fake)


def test_child_with_missing_optional_fields(fake, client):
    sparse = {
        'id': 'c9', 'firstName': 'Kavin', 'lastName': 'Silva', 'dateOfBirth': '2023-11-02',
        'gender': 'male', 'chdrNumber': None, 'birthWeight': None, 'bloodType': None,
        'deliveryType': None, 'motherName': None, 'photoUri': '', 'allergies': None,
    }
    fake.on('GET', '/children/c9', envelope(sparse))
    profile = children.get_child(client, 'c9')

    assert isinstance(profile, ChildProfile)
    assert profile.date_of_birth == datetime.date(2023, 11, 2)
    assert profile.chdr_number == ''
    assert profile.mother_name == ''
    assert profile.father_name == ''
    assert profile.emergency_contact == ''
    assert profile.birth_weight == 0
    assert profile.birth_height == 0
    assert profile.blood_type == 'unknown'
    assert profile.delivery_type is None
    assert profile.photo_uri is None
    assert profile.allergies == []
    assert profile.full_name == 'Kavin Silva'


def test_child_keeps_server_blood_and_delivery_types(fake, client):
    fake.on('GET', '/children/c9', envelope(fakes.child(id='c9', bloodType='A2B+', deliveryType='breech')))
    profile = children.get_child(client, 'c9')
    assert profile.blood_type == 'A2B+'
    assert profile.delivery_type == 'breech'


def test_child_list_and_timestamp_dates(fake, client):
    fake.on('GET', '/children', envelope([fakes.child(), fakes.child(id='child-2', firstName='Amaya')]))
    profiles = children.get_children(client)
    assert [p.id for p in profiles] == ['child-1', 'child-2']
    assert profiles[0].date_of_birth == datetime.date(2024, 3, 15)
    assert profiles[0].created_at.year == 2024


def test_create_child_validates_before_sending(fake, client):
    with pytest.raises(InvalidRequest) as exc:
        children.create_child(client, {'first_name': 'Nethmi', 'gender': 'female'})
    assert 'last_name' in exc.value.errors
    assert fake.calls == []


def test_create_child_sends_camel_case_body(fake, client):
    fake.on('POST', '/children', envelope(fakes.child()))
    children.create_child(client, {
        'first_name': 'Nethmi', 'last_name': 'Perera', 'date_of_birth': '2024-03-15',
        'gender': 'female', 'birth_weight': 3.1, 'chdr_number': 'CHDR-2024-0001',
    })
    body = fake.calls[0].json
    assert body['firstName'] == 'Nethmi'
    assert body['dateOfBirth'] == '2024-03-15'
    assert body['chdrNumber'] == 'CHDR-2024-0001'
    assert body['birthWeight'] == 3.1


def test_update_child_is_partial_patch(fake, client):
    fake.on('PATCH', '/children/child-1', envelope(fakes.child(address='Kandy')))
    profile = children.update_child(client, 'child-1', {'address': 'Kandy'})
    assert fake.calls[0].json == {'address': 'Kandy'}
    assert profile.address == 'Kandy'


def test_malformed_payload_is_schema_error(fake, client):
    fake.on('GET', '/children/c1', envelope({'id': 'c1', 'firstName': 'X'}))
    with pytest.raises(SchemaError) as exc:
        children.get_child(client, 'c1')
    assert 'dateOfBirth' in exc.value.errors


def test_vaccine_catalogue_is_public(fake, client):
    fake.on('GET', '/vaccines', envelope([fakes.vaccine('bcg', 'Birth', 1, description=None)]))
    catalogue = vaccines.get_all_vaccines(client)
    assert catalogue[0].short_name == 'BCG'
    assert catalogue[0].description is None
    assert 'Authorization' not in fake.calls[0].headers


def test_child_vaccination_records(fake, client):
    bcg = fakes.vaccine('bcg', 'Birth', 1)
    records = [fakes.vaccination_record(bcg, 'completed', administeredDate='2024-03-16')]
    payload = fakes.vaccination_data(records, next_vaccine=None)
    fake.on('GET', '/vaccines/child/child-1', envelope(payload))

    data = vaccines.get_child_vaccination_records(client, 'child-1')
    assert data.statistics.completed == 1
    assert data.schedule[0].administered_date == datetime.date(2024, 3, 16)
    assert data.schedule[0].vaccine.age_group == 'Birth'
    assert data.next_vaccine is None


def test_statistics_with_completed_above_total_is_rejected(fake, client):
    payload = fakes.vaccination_data([])
    payload['statistics'].update(completed=3, total=2)
    fake.on('GET', '/vaccines/child/child-1', envelope(payload))
    with pytest.raises(SchemaError):
        vaccines.get_child_vaccination_records(client, 'child-1')


def test_administer_vaccine_posts_to_child_route(fake, client):
    bcg = fakes.vaccine('bcg', 'Birth', 1)
    fake.on('POST', '/vaccines/child/child-1/administer/bcg',
            envelope(fakes.vaccination_record(bcg, 'completed')))
    record = vaccines.administer_vaccine(client, 'child-1', 'bcg', {'batch_number': 'B-77'})
    assert record.status == 'completed'
    assert fake.calls[0].json == {'batchNumber': 'B-77'}


def test_growth_measurements_keep_nulls(fake, client):
    fake.on('GET', '/growth/child/child-1', envelope(fakes.growth_data([fakes.measurement('m1', 3)])))
    data = growth.get_child_measurements(client, 'child-1')
    m = data.measurements[0]
    assert m.head_circumference is None
    assert m.height_percentile is None
    assert m.weight_percentile == 50.0
    assert data.summary.total_measurements == 1


def test_chart_type_is_checked_client_side(fake, client):
    with pytest.raises(InvalidRequest):
        growth.get_chart_data(client, 'child-1', 'bmi')
    assert fake.calls == []


def test_chart_data_reference_curves(fake, client):
    chart = {
        'childId': 'child-1', 'chartType': 'weight', 'gender': 'female',
        'dataPoints': [{'date': '2024-06-15', 'ageInMonths': 3, 'value': 6.2, 'percentile': 50}],
        'referenceData': {'p3': [{'age': 3, 'value': 4.9}], 'p50': [{'age': 3, 'value': 5.8}]},
    }
    fake.on('GET', '/growth/child/child-1/chart', envelope(chart))
    data = growth.get_chart_data(client, 'child-1', 'weight')
    assert set(data.reference_data) == {'p3', 'p15', 'p50', 'p85', 'p97'}
    assert data.reference_data['p15'] == []
    assert data.reference_data['p50'][0].value == 5.8
    assert fake.calls[0].params == {'type': 'weight'}


def test_appointments_accept_bare_payloads(fake, client):
    fake.on('PATCH', '/appointments/a1/cancel',
            FakeResponse(200, fakes.appointment('a1', '2099-01-01T09:00:00Z', 'cancelled')))
    appt = appointments.cancel_appointment(client, 'a1')
    assert appt.status == 'cancelled'
    assert fake.calls[0].json == {}


def test_child_appointments_summary_defaults(fake, client):
    payload = {'childId': 'child-1', 'childName': 'Nethmi Perera',
               'appointments': [fakes.appointment('a1', '2099-01-01T09:00:00Z')]}
    fake.on('GET', '/appointments/child/child-1', FakeResponse(200, payload))
    result = appointments.get_child_appointments(client, 'child-1')
    assert result.summary.total_appointments == 0
    assert result.upcoming == []
    assert result.appointments[0].duration == 30


def test_set_primary_contact_uses_put(fake, client):
    fake.on('PUT', '/emergency-contacts/k2/primary', envelope(fakes.contact('k2', is_primary=True)))
    contact = contacts.set_primary_contact(client, 'k2')
    assert contact.is_primary


def test_pregnancy_defaults_and_convert(fake, client):
    fake.on('GET', '/pregnancies/p1', envelope(fakes.pregnancy('p1', currentWeek=None, trimester=None)))
    profile = pregnancies.get_pregnancy(client, 'p1')
    assert isinstance(profile, PregnancyProfile)
    assert profile.current_week == 0
    assert profile.trimester == 1
    assert profile.mother_full_name == 'Kumari Perera'
    assert profile.risk_factors == []
    assert profile.is_active

    fake.on('POST', '/pregnancies/p1/convert-to-child', envelope({
        'pregnancy': fakes.pregnancy('p1', status='converted', convertedToChildId='child-7'),
        'child': fakes.child(id='child-7'),
    }))
    converted, child = pregnancies.convert_to_child(client, 'p1', {
        'first_name': 'Baby', 'last_name': 'Perera', 'date_of_birth': '2029-12-30', 'gender': 'male',
    })
    assert converted.status == 'converted'
    assert converted.converted_to_child_id == child.id == 'child-7'


def test_pregnancy_lmp_must_precede_edd(client):
    with pytest.raises(InvalidRequest):
        pregnancies.create_pregnancy(client, {
            'mother_first_name': 'K', 'mother_last_name': 'P', 'mother_date_of_birth': '1995-01-01',
            'expected_delivery_date': '2030-01-01', 'last_menstrual_period': '2030-02-01',
        })


def test_identity_login_and_nested_profile(fake, client):
    fake.on('POST', '/auth/auth0', envelope({
        'accessToken': 'a', 'refreshToken': 'r', 'user': {'id': 'u1', 'email': 'amma@example.lk'},
    }))
    session = auth.validate_identity_token(client, 'idp-token')
    assert session.access_token == 'a'
    assert session.user.email == 'amma@example.lk'
    assert fake.calls[0].json == {'auth0Token': 'idp-token'}
    assert 'Authorization' not in fake.calls[0].headers

    fake.on('GET', '/auth/me', envelope({'user': {'id': 'u1', 'email': 'amma@example.lk', 'name': 'Kumari'}}))
    assert auth.get_profile(client).name == 'Kumari'


def test_vaccines_by_age_group_is_public(fake, client):
    fake.on('GET', '/vaccines/by-age-group', envelope([
        {'ageGroup': 'Birth', 'vaccines': [fakes.vaccine('bcg', 'Birth', 1)]},
        {'ageGroup': '2 months', 'vaccines': [fakes.vaccine('opv', '2 months', 2), fakes.vaccine('penta', '2 months', 3)]},
    ]))
    groups = vaccines.get_vaccines_by_age_group(client)
    assert [g.age_group for g in groups] == ['Birth', '2 months']
    assert [v.id for v in groups[1].vaccines] == ['opv', 'penta']
    assert 'Authorization' not in fake.calls[0].headers


def test_upcoming_and_single_appointment(fake, client):
    fake.on('GET', '/appointments/upcoming', FakeResponse(200, [fakes.appointment('a1', '2099-01-01T09:00:00Z')]))
    fake.on('GET', '/appointments/a1', envelope(fakes.appointment('a1', '2099-01-01T09:00:00Z')))
    assert [a.id for a in appointments.get_upcoming_appointments(client)] == ['a1']
    appointment = appointments.get_appointment(client, 'a1')
    assert appointment.date_time.year == 2099
    assert fake.calls_to('GET', '/appointments/a1')[0].headers['Authorization'] == 'Bearer access-1'


def test_get_contact(fake, client):
    fake.on('GET', '/emergency-contacts/k1', envelope(fakes.contact('k1', is_primary=True, email='k1@example.lk')))
    contact = contacts.get_contact(client, 'k1')
    assert contact.is_primary is True
    assert contact.email == 'k1@example.lk'
    assert contact.notes is None


def test_get_activity(fake, client):
    fake.on('GET', '/activity/x1', envelope(fakes.activity('x1', '2024-06-01T10:00:00Z', 'vaccination')))
    activity = activities.get_activity(client, 'x1')
    assert activity.type == 'vaccination'
    assert activity.date.year == 2024


def test_get_activity_rejects_unknown_type(fake, client):
    fake.on('GET', '/activity/x1', envelope(fakes.activity('x1', '2024-06-01T10:00:00Z', 'teleport')))
    with pytest.raises(SchemaError):
        activities.get_activity(client, 'x1')


def test_refresh_tokens_and_logout_all(fake, client):
    fake.on('POST', '/auth/refresh', envelope({'accessToken': 'a2', 'refreshToken': 'r2'}))
    fake.on('POST', '/auth/logout-all', envelope(None))
    assert auth.refresh_tokens(client, 'refresh-1') == ('a2', 'r2')
    refresh = fake.calls_to('POST', '/auth/refresh')[0]
    assert refresh.json == {'refreshToken': 'refresh-1'}
    assert 'Authorization' not in refresh.headers

    auth.logout_all(client)
    assert fake.calls_to('POST', '/auth/logout-all')[0].headers['Authorization'] == 'Bearer access-1'


def test_refresh_tokens_requires_token(fake, client):
    with pytest.raises(InvalidRequest):
        auth.refresh_tokens(client, '')
    assert fake.calls == []
