from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import AllowAny, IsAuthenticated

from caretrack.exceptions import InvalidRequest
from caretrack.serializers.auth import AppUserSerializer, IdentityLoginSerializer
from caretrack.stores.registry import build_stores, namespace_for_token
from caretrack.views.common import ok, stores_of


@api_view(['POST'])
@permission_classes([AllowAny])
def login_view(request):
    """Exchange an identity-provider access token for a backend session."""
    s = IdentityLoginSerializer(data=request.data)
    if not s.is_valid():
        raise InvalidRequest(s.errors)
    identity_token = s.validated_data['access_token']
    # the pre-login store is throwaway; the session lives under the backend token's namespace
    pending = build_stores(namespace_for_token(identity_token))
    user = pending.auth.login_with_identity_token(identity_token)
    access, refresh = pending.auth.access_token, pending.auth.refresh_token
    pending.auth.clear_storage()

    stores = build_stores(namespace_for_token(access))
    stores.auth.update(user=user, access_token=access, refresh_token=refresh,
                       identity_token=identity_token, status=pending.auth.state.status)
    return ok({
        'accessToken': access,
        'refreshToken': refresh,
        'user': AppUserSerializer(user).data if user else None,
    })


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def me_view(request):
    auth = stores_of(request).auth
    user = auth.fetch_profile() or auth.state.user
    return ok(AppUserSerializer(user).data if user else None)


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def logout_view(request):
    stores = stores_of(request)
    stores.auth.logout(everywhere=request.query_params.get('all') == '1')
    stores.clear()
    return ok()
