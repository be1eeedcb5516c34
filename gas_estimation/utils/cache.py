from hashlib import md5

from aiocache import Cache
from aiocache.serializers import PickleSerializer

from gas_estimation.config.cache import CacheConfig


def key_from_args(func, *args, **kwargs) -> str:
    """Cache key of a call, estimation limits are plain numbers so repr is stable."""
    key = f'{func.__module__}.{func.__qualname__}{args!r}{sorted(kwargs.items())!r}'
    return md5(key.encode()).hexdigest()


def get_cache_config(config: CacheConfig) -> dict:
    """Arguments for aiocache.cached, picked by config.CACHE ('memory' or 'redis')."""
    if config.CACHE == 'redis':
        return {
            'cache': Cache.REDIS,
            'endpoint': config.CACHE_HOST,
            'port': config.CACHE_PORT,
            'db': config.CACHE_DB,
            'password': config.CACHE_PASSWORD,
            'timeout': config.CACHE_TIMEOUT,
            'serializer': PickleSerializer(),
            'key_builder': key_from_args,
        }
    if config.CACHE == 'memory':
        return {'cache': Cache.MEMORY, 'key_builder': key_from_args}
    raise ValueError(f'Unknown cache backend {config.CACHE}')
