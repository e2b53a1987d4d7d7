import time
import uuid

from django.core.cache import cache
from django.db import connections
from django.db.utils import OperationalError
from django.http import JsonResponse

from .logger import get_logger

logger = get_logger(__name__).bind(component='common', layer='health')

_CACHE_PROBE_KEY = 'health:probe'


def _cache_check():
    """Round-trip a throwaway value through the configured cache backend."""
    started = time.time()
    token = uuid.uuid4().hex
    try:
        cache.set(_CACHE_PROBE_KEY, token, timeout=5)
        echoed = cache.get(_CACHE_PROBE_KEY)
    except Exception as e:  # backend/driver errors surface as a failed check
        logger.warning('Cache health check failed', error=str(e))
        return {'status': 'fail', 'error': str(e)}
    latency = round((time.time() - started) * 1000, 2)
    if echoed != token:
        # django-redis swallows connection errors (IGNORE_EXCEPTIONS), so a miss means unreachable
        logger.warning('Cache health check returned stale or missing value')
        return {'status': 'fail', 'error': 'cache unreachable'}
    logger.debug('Cache health check succeeded', latency_ms=latency)
    return {'status': 'ok', 'latency_ms': latency}


def _db_check(alias='default'):
    started = time.time()
    try:
        conn = connections[alias]
        conn.cursor().execute('SELECT 1')
        latency = round((time.time() - started) * 1000, 2)
        logger.debug('Database health check succeeded', alias=alias, latency_ms=latency)
        return {'status': 'ok', 'latency_ms': latency}
    except OperationalError as e:
        logger.warning('Database health check encountered operational error', alias=alias, error=str(e))
        return {'status': 'fail', 'error': str(e)}
    except Exception as e:
        logger.error('Database health check failed unexpectedly', alias=alias, error=str(e), exception=e.__class__.__name__)
        return {'status': 'fail', 'error': str(e), 'exception': e.__class__.__name__}


def live_health(request):
    """Liveness probe: process is up and can service requests."""
    logger.debug('Liveness probe served')
    return JsonResponse({'status': 'alive'})


def ready_health(request):
    """Readiness probe: verifies the database and the cache backend."""
    checks = {
        'database': _db_check(),
        'cache': _cache_check(),
    }
    failing = [name for name, r in checks.items() if r.get('status') == 'fail']
    overall_status = 'ok' if not failing else 'degraded'
    http_status = 200 if not failing else 503
    logger.info('Readiness probe evaluated', status=overall_status, failing_components=failing)
    return JsonResponse({'status': overall_status, 'checks': checks}, status=http_status)
