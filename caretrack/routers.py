"""
URL mappings for the operator console.

Every console route lives under ``/api/console/`` and mirrors the backend
resource it renders.  Trailing slashes are omitted, as on the backend.
"""
from django.urls import path

from .views import health
from .views.activities import activity_detail_view, child_activities_view
from .views.appointments import (
    appointment_detail_view,
    cancel_appointment_view,
    child_appointments_view,
    complete_appointment_view,
)
from .views.auth import login_view, logout_view, me_view
from .views.children import child_detail_view, children_view
from .views.contacts import contact_detail_view, contacts_view, set_primary_contact_view
from .views.growth import child_growth_view, growth_chart_view, growth_measurement_view
from .views.pregnancies import (
    convert_to_child_view,
    pregnancies_view,
    pregnancy_checkups_view,
    pregnancy_detail_view,
)
from .views.vaccines import administer_vaccine_view, child_vaccines_view, vaccine_catalog_view

urlpatterns = [
    path('healthz', health.healthz, name='healthz'),

    # Session
    path('api/console/auth/login', login_view, name='console_login'),
    path('api/console/auth/me', me_view, name='console_me'),
    path('api/console/auth/logout', logout_view, name='console_logout'),

    # Children
    path('api/console/children', children_view, name='console_children'),
    path('api/console/children/<str:child_id>', child_detail_view, name='console_child_detail'),

    # Vaccination
    path('api/console/vaccines', vaccine_catalog_view, name='console_vaccine_catalog'),
    path('api/console/children/<str:child_id>/vaccines', child_vaccines_view, name='console_child_vaccines'),
    path('api/console/children/<str:child_id>/vaccines/<str:vaccine_id>/administer', administer_vaccine_view,
         name='console_administer_vaccine'),

    # Growth
    path('api/console/children/<str:child_id>/growth', child_growth_view, name='console_child_growth'),
    path('api/console/children/<str:child_id>/growth/chart', growth_chart_view, name='console_growth_chart'),
    path('api/console/growth/<str:measurement_id>', growth_measurement_view, name='console_growth_measurement'),

    # Appointments
    path('api/console/children/<str:child_id>/appointments', child_appointments_view,
         name='console_child_appointments'),
    path('api/console/appointments/<str:appointment_id>', appointment_detail_view, name='console_appointment_detail'),
    path('api/console/appointments/<str:appointment_id>/cancel', cancel_appointment_view,
         name='console_cancel_appointment'),
    path('api/console/appointments/<str:appointment_id>/complete', complete_appointment_view,
         name='console_complete_appointment'),

    # Emergency contacts
    path('api/console/contacts', contacts_view, name='console_contacts'),
    path('api/console/contacts/<str:contact_id>', contact_detail_view, name='console_contact_detail'),
    path('api/console/contacts/<str:contact_id>/primary', set_primary_contact_view, name='console_primary_contact'),

    # Activity timeline
    path('api/console/children/<str:child_id>/activities', child_activities_view, name='console_child_activities'),
    path('api/console/activities/<str:activity_id>', activity_detail_view, name='console_activity_detail'),

    # Pregnancies
    path('api/console/pregnancies', pregnancies_view, name='console_pregnancies'),
    path('api/console/pregnancies/<str:pregnancy_id>', pregnancy_detail_view, name='console_pregnancy_detail'),
    path('api/console/pregnancies/<str:pregnancy_id>/convert-to-child', convert_to_child_view,
         name='console_convert_to_child'),
    path('api/console/pregnancies/<str:pregnancy_id>/checkups', pregnancy_checkups_view,
         name='console_pregnancy_checkups'),
]
