# uicms/common/tests/test_startup.py
import os
import subprocess
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[3]


def _run(code: str) -> subprocess.CompletedProcess:
    env = {**os.environ, "DJANGO_SETTINGS_MODULE": "config.settings.test"}
    return subprocess.run(
        [sys.executable, "-c", code],
        cwd=REPO_ROOT,
        env=env,
        capture_output=True,
        text=True,
        timeout=120,
    )


def test_django_setup_configures_logging_in_a_fresh_process():
    res = _run(
        "import django, logging; django.setup(); "
        "logging.getLogger('uicms').warning('started')"
    )
    assert res.returncode == 0, res.stderr
    assert "[-] started" in res.stderr


def test_log_filter_module_does_not_load_drf():
    res = _run(
        "import sys; import uicms.common.observability; "
        "assert 'rest_framework' not in sys.modules, sorted(m for m in sys.modules if m.startswith('rest'))"
    )
    assert res.returncode == 0, res.stderr
