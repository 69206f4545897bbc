"""
Rule-based assistant for the worship ministry.
"""

from louvor.assistant.classifier import (
    QueryType,
    ClassifiedQuery,
    classify_query,
    extract_mentioned_music,
    get_query_type_description,
)
from louvor.assistant.agents import AgentResponse, GeneralAgent, HistoryAgent
from louvor.assistant.responder import ChatAssistant, ChatReply

__all__ = [
    "QueryType",
    "ClassifiedQuery",
    "classify_query",
    "extract_mentioned_music",
    "get_query_type_description",
    "AgentResponse",
    "GeneralAgent",
    "HistoryAgent",
    "ChatAssistant",
    "ChatReply",
]
