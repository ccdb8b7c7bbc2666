"""
PS_Libs - Packshot Studio Library Modules

This package contains the interactive editing engine for Packshot Studio,
organized into specialized sub-packages:

- ImageEditingLib: Pixel geometry operations, masked blur and frame encoding
- SelectionLib: Pointer-driven crop rectangle and blur lasso selection
- ProjStoreLib: Key/value persistence, AI quota governor and action counter
- AiLib: AI collaborator interface and the Gemini-backed implementation
- EditorLib: History timeline, status notifications and the command orchestrator
"""

__version__ = "0.1.0"
