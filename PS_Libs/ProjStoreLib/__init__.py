"""
ProjStoreLib - Session state persistence

This module provides the key/value store interface with in-memory and
JSON file implementations, the AI quota governor and the daily action
counter built on top of it.
"""

from PS_Libs.ProjStoreLib.persistence import InMemoryStore, JsonFileStore, KeyValueStore
from PS_Libs.ProjStoreLib.quota_governor import QuotaGovernor, QuotaState
from PS_Libs.ProjStoreLib.action_counter import ActionCounter

__all__ = [
    "InMemoryStore",
    "JsonFileStore",
    "KeyValueStore",
    "QuotaGovernor",
    "QuotaState",
    "ActionCounter",
]
