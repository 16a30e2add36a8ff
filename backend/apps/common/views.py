import time
import uuid
from typing import Any, Dict

from django.core.cache import cache
from django.db import connections
from django.db.utils import OperationalError
from django.http import JsonResponse

from .logger import get_logger

logger = get_logger(__name__).bind(component='common', layer='health')


def _elapsed_ms(started: float) -> float:
    return round((time.monotonic() - started) * 1000, 2)


def _db_check(alias: str = 'default') -> Dict[str, Any]:
    started = time.monotonic()
    try:
        with connections[alias].cursor() as cursor:
            cursor.execute('SELECT 1')
    except OperationalError as exc:
        logger.warning('Database probe failed', alias=alias, error=str(exc))
        return {'status': 'fail', 'error': str(exc)}
    except Exception as exc:
        logger.exception('Database probe raised unexpectedly', alias=alias)
        return {'status': 'fail', 'error': str(exc), 'exception': exc.__class__.__name__}
    latency = _elapsed_ms(started)
    logger.debug('Database probe succeeded', alias=alias, latency_ms=latency)
    return {'status': 'ok', 'latency_ms': latency}


def _cache_check() -> Dict[str, Any]:
    # Round-trips a throwaway key; the redis backend fails open, so a miss
    # on read-back is how an outage shows up here.
    probe_key = f'health:probe:{uuid.uuid4().hex}'
    started = time.monotonic()
    try:
        cache.set(probe_key, 'ok', timeout=5)
        value = cache.get(probe_key)
        cache.delete(probe_key)
    except Exception as exc:
        logger.warning('Cache probe failed', error=str(exc))
        return {'status': 'fail', 'error': str(exc)}
    if value != 'ok':
        logger.warning('Cache probe returned no value')
        return {'status': 'fail', 'error': 'cache did not return the probe value'}
    return {'status': 'ok', 'latency_ms': _elapsed_ms(started)}


def live_health(request):
    """Liveness probe: the process is up and answering."""
    return JsonResponse({'status': 'alive'})


def ready_health(request):
    """Readiness probe: database and cache must both answer."""
    checks = {
        'database': _db_check(),
        'cache': _cache_check(),
    }
    failing = sorted(name for name, result in checks.items() if result.get('status') == 'fail')
    overall = 'degraded' if failing else 'ok'
    logger.info('Readiness probe evaluated', status=overall, failing_components=failing)
    return JsonResponse({'status': overall, 'checks': checks}, status=503 if failing else 200)
