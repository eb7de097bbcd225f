"""
Reporting Module - mirrors session events to the session-tracking backend
"""

import config
from .client import BackendClient
from .ledger import SessionLedger
from .remote_config import RemoteConfigCache
from .reporter import NullReporter, SessionReporter


def create_client(base_url=None):
    """
    Backend client for this installation, or None when running offline
    """
    url = config.BACKEND_URL if base_url is None else base_url
    if not url:
        return None
    return BackendClient(url, dry_run=config.DRY_RUN)


def create_reporter(client=None):
    """
    SessionReporter for a backend client, NullReporter without one
    """
    if client is None:
        return NullReporter()
    return SessionReporter(client)


def create_config_cache(client=None):
    """
    Background config fetcher when remote configs are enabled, else None
    """
    if client is None or not config.FETCH_REMOTE_CONFIG:
        return None
    return RemoteConfigCache(client)


__all__ = ['BackendClient', 'SessionLedger', 'NullReporter', 'SessionReporter',
           'RemoteConfigCache', 'create_client', 'create_reporter', 'create_config_cache']
