"""
EditorLib - Editing session

This module provides the linear history timeline, transient status
notifications and the orchestrator that ties geometry, selection, AI and
quota together into user commands.
"""

from PS_Libs.EditorLib.history_timeline import HistoryEntry, HistoryTimeline
from PS_Libs.EditorLib.status import StatusMessage, StatusNotifier, status_text
from PS_Libs.EditorLib.orchestrator import PackshotEditor

__all__ = [
    "HistoryEntry",
    "HistoryTimeline",
    "StatusMessage",
    "StatusNotifier",
    "status_text",
    "PackshotEditor",
]
