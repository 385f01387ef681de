from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated

from caretrack.serializers.appointments import AppointmentSerializer
from caretrack.serializers.base import decamelize_keys
from caretrack.stores import appointments as selectors
from caretrack.views.common import ok, store_failure, stores_of


def _render(state):
    nxt = selectors.next_appointment(state)
    return {
        'upcoming': AppointmentSerializer(selectors.upcoming_appointments(state), many=True).data,
        'past': AppointmentSerializer(selectors.past_appointments(state), many=True).data,
        'next': AppointmentSerializer(nxt).data if nxt else None,
    }


@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated])
def child_appointments_view(request, child_id):
    store = stores_of(request).appointments
    if request.method == 'POST':
        appointment = store.create_appointment(child_id, decamelize_keys(request.data))
        return ok(AppointmentSerializer(appointment).data, status=201)
    store.fetch_appointments(child_id)
    failed = store_failure(store)
    if failed:
        return failed
    return ok(_render(store.state))


@api_view(['PATCH', 'DELETE'])
@permission_classes([IsAuthenticated])
def appointment_detail_view(request, appointment_id):
    store = stores_of(request).appointments
    if request.method == 'DELETE':
        store.delete_appointment(appointment_id)
        return ok()
    appointment = store.update_appointment(appointment_id, decamelize_keys(request.data))
    return ok(AppointmentSerializer(appointment).data)


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def cancel_appointment_view(request, appointment_id):
    store = stores_of(request).appointments
    appointment = store.cancel_appointment(appointment_id)
    return ok(AppointmentSerializer(appointment).data)


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def complete_appointment_view(request, appointment_id):
    store = stores_of(request).appointments
    appointment = store.complete_appointment(appointment_id)
    return ok(AppointmentSerializer(appointment).data)
