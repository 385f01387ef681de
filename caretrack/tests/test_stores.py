import datetime

import pytest
from django.utils import timezone

from caretrack.exceptions import InvalidRequest, NetworkError
from caretrack.stores import appointments as appointment_selectors
from caretrack.stores import contacts as contact_selectors
from caretrack.stores import growth as growth_selectors
from caretrack.stores import pregnancies as pregnancy_selectors
from caretrack.stores import vaccines as vaccine_selectors
from caretrack.stores.auth import STATUS_AUTHENTICATED, STATUS_UNAUTHENTICATED, is_authenticated
from caretrack.stores.base import Outcome
from caretrack.stores.children import age_display, age_in_months
from caretrack.stores.pregnancies import trimester_label, week_display
from caretrack.stores.registry import build_stores
from caretrack.tests import fakes
from caretrack.tests.fakes import FakeResponse, envelope, error


# -- scenarios ---------------------------------------------------------------

def test_administer_vaccine_refreshes_schedule(backend, stores):
    bcg = fakes.vaccine('bcg', 'Birth', 1)
    opv = fakes.vaccine('opv', '2 months', 2)
    before = fakes.vaccination_data([fakes.vaccination_record(bcg, 'due'), fakes.vaccination_record(opv, 'scheduled')])
    after = fakes.vaccination_data([fakes.vaccination_record(bcg, 'completed'), fakes.vaccination_record(opv, 'scheduled')])
    backend.on('GET', '/vaccines/child/child-1', envelope(before), envelope(after))
    backend.on('POST', '/vaccines/child/child-1/administer/bcg', envelope(fakes.vaccination_record(bcg, 'completed')))

    store = stores.vaccines
    store.fetch_child_vaccination_records('child-1')
    completed_before = vaccine_selectors.completed_count(store.state)

    store.administer_vaccine('child-1', 'bcg', {})

    assert vaccine_selectors.completed_count(store.state) == completed_before + 1
    statuses = {r.vaccine_id: r.status for r in store.state.vaccination_data.schedule}
    assert statuses['bcg'] == 'completed'
    assert store.state.is_loading is False
    assert store.state.error is None
    assert store.state.outcome == Outcome.OK


def test_growth_not_found_is_silent(backend, stores):
    backend.on('GET', '/growth/child/ghost', error(404, 'Child not found'))
    store = stores.growth
    store.fetch_growth_data('ghost')

    assert store.state.growth_data is None
    assert store.state.error is None
    assert store.state.outcome == Outcome.NOT_FOUND
    assert store.state.is_loading is False


def test_set_primary_contact_leaves_exactly_one(backend, stores):
    backend.on('GET', '/emergency-contacts', envelope([
        fakes.contact('k1', is_primary=True), fakes.contact('k2'), fakes.contact('k3', is_default=True),
    ]))
    backend.on('PUT', '/emergency-contacts/k2/primary', envelope(fakes.contact('k2', is_primary=True)))
    store = stores.contacts
    store.fetch_contacts()
    store.set_primary_contact('k2')

    primaries = [c for c in store.state.contacts if c.is_primary]
    assert [c.id for c in primaries] == ['k2']
    assert contact_selectors.primary_contact(store.state).id == 'k2'
    assert [c.id for c in contact_selectors.default_contacts(store.state)] == ['k3']
    assert [c.id for c in contact_selectors.user_contacts(store.state)] == ['k1', 'k2']


def test_records_grouped_by_age_group_in_first_seen_order(backend, stores):
    schedule = [
        fakes.vaccination_record(fakes.vaccine('hepb', 'Birth', 2)),
        fakes.vaccination_record(fakes.vaccine('penta', '2 months', 5)),
        fakes.vaccination_record(fakes.vaccine('bcg', 'Birth', 1)),
        fakes.vaccination_record(fakes.vaccine('opv', '2 months', 4)),
    ]
    backend.on('GET', '/vaccines/child/child-1', envelope(fakes.vaccination_data(schedule)))
    stores.vaccines.fetch_child_vaccination_records('child-1')

    groups = vaccine_selectors.group_by_age_group(stores.vaccines.state)
    assert [g.age_group for g in groups] == ['Birth', '2 months']
    assert [r.vaccine_id for r in groups[0].records] == ['bcg', 'hepb']
    assert [r.vaccine_id for r in groups[1].records] == ['opv', 'penta']


def test_cancel_moves_appointment_from_upcoming_to_past(backend, stores):
    future = '2099-05-01T09:00:00Z'
    payload = {'childId': 'child-1', 'childName': 'Nethmi Perera', 'appointments': [
        fakes.appointment('a1', future), fakes.appointment('a2', '2099-06-01T09:00:00Z'),
    ]}
    backend.on('GET', '/appointments/child/child-1', FakeResponse(200, payload))
    backend.on('PATCH', '/appointments/a1/cancel', FakeResponse(200, fakes.appointment('a1', future, 'cancelled')))
    store = stores.appointments
    store.fetch_appointments('child-1')
    assert [a.id for a in appointment_selectors.upcoming_appointments(store.state)] == ['a1', 'a2']

    store.cancel_appointment('a1')

    upcoming = appointment_selectors.upcoming_appointments(store.state)
    past = appointment_selectors.past_appointments(store.state)
    assert [a.id for a in upcoming] == ['a2']
    assert [a.id for a in past] == ['a1']
    assert past[0].status == 'cancelled'
    assert appointment_selectors.next_appointment(store.state).id == 'a2'


# -- action lifecycle ------------------------------------------------------

def test_fetch_failure_is_recorded_not_raised(backend, stores):
    backend.on('GET', '/children', error(500, 'database unavailable'))
    store = stores.children
    store.fetch_children()
    assert store.state.error == 'database unavailable'
    assert store.state.error_code == 'api_error'
    assert store.state.outcome == Outcome.ERROR
    assert store.state.is_loading is False


def test_mutation_failure_is_recorded_and_raised(backend, stores):
    backend.on('POST', '/emergency-contacts', NetworkError())
    with pytest.raises(NetworkError):
        stores.contacts.create_contact({'name': 'Nimal', 'role': 'Uncle', 'phone': '+94 77 123 4567'})
    assert stores.contacts.state.error == NetworkError.default_message
    assert stores.contacts.state.is_loading is False


def test_next_action_clears_previous_error(backend, stores):
    backend.on('GET', '/children', error(500), envelope([fakes.child()]))
    store = stores.children
    store.fetch_children()
    assert store.state.error
    store.fetch_children()
    assert store.state.error is None
    assert store.state.outcome == Outcome.OK
    assert store.state.selected_child_id == 'child-1'


def test_invalid_request_never_reaches_backend(backend, stores):
    with pytest.raises(InvalidRequest):
        stores.growth.add_measurement('child-1', {'weight': 6.1})
    assert backend.calls == []
    assert 'measurement_date' in stores.growth.state.error


def test_last_child_profile_can_not_be_deleted(backend, stores):
    backend.on('GET', '/children', envelope([fakes.child()]))
    stores.children.fetch_children()
    with pytest.raises(InvalidRequest):
        stores.children.delete_child('child-1')
    assert backend.calls_to('DELETE', '/children/child-1') == []
    assert len(stores.children.state.profiles) == 1


def test_growth_other_failures_set_error(backend, stores):
    backend.on('GET', '/growth/child/child-1', error(500, 'boom'))
    stores.growth.fetch_growth_data('child-1')
    assert stores.growth.state.error == 'boom'
    assert stores.growth.state.outcome == Outcome.ERROR


def test_switching_growth_child_clears_stale_data(backend, stores):
    backend.on('GET', '/growth/child/child-1', envelope(fakes.growth_data([fakes.measurement('m1', 2)])))
    backend.on('GET', '/growth/child/child-2', NetworkError())
    store = stores.growth
    store.fetch_growth_data('child-1')
    assert growth_selectors.latest_measurement(store.state).id == 'm1'

    store.fetch_growth_data('child-2')
    assert store.state.growth_data is None
    assert growth_selectors.latest_measurement(store.state) is None


def test_add_measurement_refetches(backend, stores):
    backend.on('POST', '/growth/child/child-1', envelope(fakes.measurement('m2', 4)))
    backend.on('GET', '/growth/child/child-1', envelope(fakes.growth_data([
        fakes.measurement('m1', 2), fakes.measurement('m2', 4),
    ])))
    stores.growth.add_measurement('child-1', {'measurement_date': '2024-07-15', 'weight': 6.8, 'height': 64})
    assert [m.id for m in growth_selectors.measurements(stores.growth.state)] == ['m1', 'm2']
    assert backend.calls_to('POST', '/growth/child/child-1')[0].json['measurementDate'] == '2024-07-15'


def test_pregnancy_delete_reselects_first_active(backend, stores):
    backend.on('GET', '/pregnancies', envelope([
        fakes.pregnancy('p1'), fakes.pregnancy('p2', status='delivered'), fakes.pregnancy('p3'),
    ]))
    backend.on('DELETE', '/pregnancies/p1', FakeResponse(204))
    store = stores.pregnancies
    store.fetch_pregnancies()
    assert store.state.selected_pregnancy_id == 'p1'

    store.delete_pregnancy('p1')
    assert store.state.selected_pregnancy_id == 'p3'
    assert store.state.current_pregnancy.id == 'p3'


def test_activity_create_prepends(backend, stores):
    backend.on('GET', '/activity/child/child-1', envelope([fakes.activity('x1', '2024-05-01T10:00:00Z')]))
    backend.on('POST', '/activity/child/child-1',
               envelope(fakes.activity('x2', '2024-06-01T10:00:00Z', 'vaccination')))
    store = stores.activities
    store.fetch_activities('child-1')
    store.create_activity('child-1', {'type': 'vaccination', 'title': 'BCG given'})
    assert [a.id for a in store.state.activities] == ['x2', 'x1']


# -- auth ------------------------------------------------------------------

def test_login_and_logout(backend):
    backend.on('POST', '/auth/auth0', envelope({
        'accessToken': 'a1', 'refreshToken': 'r1', 'user': {'id': 'u1', 'email': 'amma@example.lk'},
    }))
    backend.on('POST', '/auth/logout', error(500))
    s = build_stores('login-test')
    s.auth.login_with_identity_token('idp')
    assert is_authenticated(s.auth.state)
    assert s.auth.state.status == STATUS_AUTHENTICATED

    s.auth.logout()
    assert s.auth.state.access_token is None
    assert s.auth.state.status == STATUS_UNAUTHENTICATED
    assert backend.calls_to('POST', '/auth/logout')[0].json == {'refreshToken': 'r1'}


def test_profile_fetch_failure_is_swallowed(backend, stores):
    backend.on('GET', '/auth/me', error(500))
    assert stores.auth.fetch_profile() is None
    assert stores.auth.access_token == 'access-1'


def test_expired_refresh_token_signs_out(backend, stores):
    backend.on('GET', '/children', error(401))
    backend.on('POST', '/auth/refresh', error(401))
    stores.children.fetch_children()
    assert stores.children.state.error_code == 'unauthorized'
    assert stores.auth.access_token is None


# -- persistence -----------------------------------------------------------

def test_vaccine_store_persists_catalogue_but_not_schedule(backend, stores):
    backend.on('GET', '/vaccines', envelope([fakes.vaccine('bcg', 'Birth', 1)]))
    backend.on('GET', '/vaccines/child/child-1', envelope(fakes.vaccination_data([])))
    stores.vaccines.fetch_vaccines()
    stores.vaccines.fetch_child_vaccination_records('child-1')

    again = build_stores('test-owner')
    assert [v.id for v in again.vaccines.state.vaccines] == ['bcg']
    assert again.vaccines.state.current_child_id == 'child-1'
    assert again.vaccines.state.vaccination_data is None
    assert again.auth.access_token == 'access-1'


def test_namespaces_are_isolated(backend, stores):
    other = build_stores('someone-else')
    assert other.auth.access_token is None
    assert other.auth.storage_key == 'someone-else:auth-storage'


# -- selectors ---------------------------------------------------------------

def test_completion_percentage_is_clamped(backend, stores):
    payload = fakes.vaccination_data([])
    payload['statistics']['completionPercentage'] = 130
    backend.on('GET', '/vaccines/child/child-1', envelope(payload))
    stores.vaccines.fetch_child_vaccination_records('child-1')
    assert vaccine_selectors.completion_percentage(stores.vaccines.state) == 100.0
    assert vaccine_selectors.completion_percentage(build_stores('empty').vaccines.state) == 0


def test_latest_measurement_requires_current_child(backend, stores):
    backend.on('GET', '/growth/child/child-1', envelope(fakes.growth_data([fakes.measurement('m1', 2)], child_id='other')))
    stores.growth.fetch_growth_data('child-1')
    assert growth_selectors.latest_measurement(stores.growth.state) is None


def test_reference_curves_trimmed_to_observed_ages(backend, stores):
    chart = {
        'childId': 'child-1', 'chartType': 'weight', 'gender': 'female',
        'dataPoints': [{'date': '2024-05-15', 'ageInMonths': 2, 'value': 5.0},
                       {'date': '2024-07-15', 'ageInMonths': 4, 'value': 6.4}],
        'referenceData': {'p50': [{'age': a, 'value': 3 + a} for a in range(0, 8)]},
    }
    backend.on('GET', '/growth/child/child-1/chart', envelope(chart))
    stores.growth.fetch_chart_data('child-1', 'weight')
    curves = growth_selectors.reference_curves(stores.growth.state.chart_data)
    assert [p.age for p in curves['p50']] == [2, 3, 4]
    assert curves['p97'] == []


def test_age_helpers():
    dob = datetime.date(2024, 1, 20)
    assert age_in_months(dob, today=datetime.date(2024, 4, 1)) == 3
    assert age_in_months(dob, today=datetime.date(2023, 12, 1)) == 0
    assert age_display(dob, today=datetime.date(2024, 3, 5)) == {'months': 1, 'weeks': 2}


def test_pregnancy_week_display():
    today = datetime.date(2030, 1, 1)
    assert week_display(today + datetime.timedelta(days=140), today) == {'weeks': 20, 'days': 0}
    assert week_display(today + datetime.timedelta(days=137), today) == {'weeks': 20, 'days': 3}
    assert week_display(today - datetime.timedelta(days=30), today)['weeks'] == 42
    assert week_display(today + datetime.timedelta(days=400), today) == {'weeks': 0, 'days': 0}
    assert trimester_label(2) == 'Second Trimester'
    assert trimester_label(None) == 'Unknown'


def test_past_appointments_include_elapsed_scheduled():
    from caretrack.domain import Appointment
    from caretrack.stores.appointments import AppointmentState

    now = timezone.now()
    state = AppointmentState(appointments=[
        Appointment(id='old', child_id='c', title='t', type='vaccination', date_time=now - datetime.timedelta(days=3),
                    location='x'),
        Appointment(id='done', child_id='c', title='t', type='vaccination', date_time=now + datetime.timedelta(days=3),
                    location='x', status=Appointment.STATUS_COMPLETED),
    ])
    assert [a.id for a in appointment_selectors.past_appointments(state, now)] == ['done', 'old']
    assert appointment_selectors.upcoming_appointments(state, now) == []


def test_update_contact_to_primary_demotes_previous(backend, stores):
    backend.on('GET', '/emergency-contacts', envelope([fakes.contact('k1', is_primary=True), fakes.contact('k2')]))
    backend.on('PUT', '/emergency-contacts/k2', envelope(fakes.contact('k2', is_primary=True)))
    store = stores.contacts
    store.fetch_contacts()
    store.update_contact('k2', {'is_primary': True})

    assert [c.id for c in store.state.contacts if c.is_primary] == ['k2']
    assert backend.calls_to('PUT', '/emergency-contacts/k2')[0].json == {'isPrimary': True}


def test_refresh_access_token_rotates_pair(backend, stores):
    backend.on('POST', '/auth/refresh', envelope({'accessToken': 'access-2', 'refreshToken': 'refresh-2'}))
    assert stores.auth.refresh_access_token() is True
    assert stores.auth.access_token == 'access-2'
    assert build_stores('test-owner').auth.refresh_token == 'refresh-2'


def test_rejected_refresh_clears_credentials(backend, stores):
    backend.on('POST', '/auth/refresh', error(401, 'refresh token revoked'))
    assert stores.auth.refresh_access_token() is False
    assert stores.auth.access_token is None
    assert stores.auth.refresh_token is None
    assert stores.auth.state.status == STATUS_UNAUTHENTICATED


def test_refresh_without_refresh_token_is_noop(backend):
    s = build_stores('no-refresh')
    assert s.auth.refresh_access_token() is False
    assert backend.calls == []


def test_logout_everywhere_revokes_all_sessions(backend, stores):
    backend.on('POST', '/auth/logout-all', envelope(None))
    stores.auth.logout(everywhere=True)
    assert len(backend.calls_to('POST', '/auth/logout-all')) == 1
    assert backend.calls_to('POST', '/auth/logout') == []
    assert stores.auth.access_token is None


def test_active_pregnancies_selector(backend, stores):
    backend.on('GET', '/pregnancies', envelope([
        fakes.pregnancy('p1', status='delivered'), fakes.pregnancy('p2'), fakes.pregnancy('p3', status='converted'),
    ]))
    stores.pregnancies.fetch_pregnancies()
    assert [p.id for p in pregnancy_selectors.active_pregnancies(stores.pregnancies.state)] == ['p2']
    assert stores.pregnancies.state.selected_pregnancy_id == 'p2'


def test_fetch_failure_keeps_upstream_status(backend, stores):
    backend.on('GET', '/children', error(403, 'forbidden'), envelope([]))
    stores.children.fetch_children()
    assert stores.children.state.error_status == 403
    stores.children.fetch_children()
    assert stores.children.state.error_status is None
