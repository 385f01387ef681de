import os
import subprocess
import sys

import pytest
from django.conf import settings

SCRIPT = """
import importlib, django
django.setup()
importlib.import_module({module!r})
from rest_framework.views import APIView
assert [c.__name__ for c in APIView.authentication_classes] == ['BackendTokenAuthentication']
"""


@pytest.mark.parametrize('module', [
    'caretrack.exceptions',
    'caretrack.authentication',
    'caretrack.stores.registry',
    'caretrack.routers',
])
def test_modules_import_cold(module):
    env = dict(os.environ, DJANGO_SETTINGS_MODULE='mch.settings')
    env['PYTHONPATH'] = os.pathsep.join(filter(None, [str(settings.BASE_DIR), env.get('PYTHONPATH')]))
    result = subprocess.run([sys.executable, '-c', SCRIPT.format(module=module)],
                            cwd=settings.BASE_DIR, env=env, capture_output=True, text=True)
    assert result.returncode == 0, result.stderr
