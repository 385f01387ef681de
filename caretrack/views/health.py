from django.conf import settings
from django.core.cache import cache
from django.http import JsonResponse


def healthz(request):
    try:
        cache.set('healthz', 1, 5)
        cached = cache.get('healthz') == 1
        return JsonResponse({'ok': True, 'cache': cached, 'backend': settings.CARETRACK_API_BASE_URL})
    except Exception as e:
        return JsonResponse({'ok': False, 'error': str(e)}, status=500)
