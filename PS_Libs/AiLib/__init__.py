"""
AiLib - AI collaborator

This module defines the interface the editor uses for classification,
background removal and white balance. The Gemini implementation lives in
``PS_Libs.AiLib.gemini_client`` and is imported on demand so the editing
engine does not require the Google SDK.
"""

from PS_Libs.AiLib.ai_collaborator import IMAGE_KINDS, AiCollaborator

__all__ = [
    "IMAGE_KINDS",
    "AiCollaborator",
]
