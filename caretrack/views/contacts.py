from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated

from caretrack.serializers.base import decamelize_keys
from caretrack.serializers.contacts import EmergencyContactSerializer
from caretrack.stores import contacts as selectors
from caretrack.views.common import ok, store_failure, stores_of


def _render(state):
    primary = selectors.primary_contact(state)
    return {
        'primary': EmergencyContactSerializer(primary).data if primary else None,
        'contacts': EmergencyContactSerializer(selectors.user_contacts(state), many=True).data,
        'defaults': EmergencyContactSerializer(selectors.default_contacts(state), many=True).data,
    }


@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated])
def contacts_view(request):
    store = stores_of(request).contacts
    if request.method == 'POST':
        contact = store.create_contact(decamelize_keys(request.data))
        return ok(EmergencyContactSerializer(contact).data, status=201)
    store.fetch_contacts()
    failed = store_failure(store)
    if failed:
        return failed
    return ok(_render(store.state))


@api_view(['PUT', 'DELETE'])
@permission_classes([IsAuthenticated])
def contact_detail_view(request, contact_id):
    store = stores_of(request).contacts
    if request.method == 'DELETE':
        store.delete_contact(contact_id)
        return ok()
    contact = store.update_contact(contact_id, decamelize_keys(request.data))
    return ok(EmergencyContactSerializer(contact).data)


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def set_primary_contact_view(request, contact_id):
    store = stores_of(request).contacts
    store.set_primary_contact(contact_id)
    return ok(_render(store.state))
