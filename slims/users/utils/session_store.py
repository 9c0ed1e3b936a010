# slims/users/utils/session_store.py
import logging
from django.core.cache import cache

logger = logging.getLogger(__name__)

KEY_PREFIX = "session:"


def _key(token):
    return f"{KEY_PREFIX}{token}"


def get(token):
    """Cached session payload or None. Cache errors count as a miss."""
    try:
        return cache.get(_key(token))
    except Exception as e:
        logger.error(f"Failed to retrieve session from cache: {str(e)}")
        return None


def set(token, payload, ttl):
    if ttl <= 0:
        return
    try:
        cache.set(_key(token), payload, timeout=ttl)
    except Exception as e:
        logger.error(f"Failed to cache session: {str(e)}")


def delete(token):
    try:
        cache.delete(_key(token))
    except Exception as e:
        logger.error(f"Failed to delete session from cache: {str(e)}")
