from __future__ import annotations

import logging

from supabase import Client, create_client

from ..core.exceptions import AuthBackendError

logger = logging.getLogger(__name__)


def create_supabase_client(url: str, anon_key: str) -> Client:
    if not url or not anon_key:
        raise AuthBackendError("Supabase URL / anon key missing")
    logger.info("Supabase client configured for %s", url)
    return create_client(url, anon_key)
