"""
louvor - Chord sheet and team assistant toolkit for a worship ministry

Transposes chord sheets ("cifras") by semitones and answers common
questions about the ministry with a small rule-based assistant.
"""

__version__ = "1.0.0"

from louvor.core.transposer import transpose
from louvor.core.notes import semitones_between
from louvor.assistant.responder import ChatAssistant
from louvor.config import Config

__all__ = ["transpose", "semitones_between", "ChatAssistant", "Config", "__version__"]
