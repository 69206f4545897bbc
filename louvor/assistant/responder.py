"""
Chat Assistant - Route messages to the agent for their topic.

Only the agents that answer from fixed content are built in. Agents
backed by the ministry's data store (songs, schedules, members) can be
plugged in with register_agent(); topics without an agent are answered
by the general agent.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional, Protocol
import logging

from louvor.config import AssistantConfig
from louvor.assistant.agents import AgentResponse, GeneralAgent, HistoryAgent
from louvor.assistant.classifier import ClassifiedQuery, QueryType, classify_query

logger = logging.getLogger(__name__)


class Agent(Protocol):
    """Anything that can answer a message."""
    name: str

    def process(self, query: str) -> AgentResponse:
        ...


@dataclass
class ChatReply:
    """Answer returned to the chat UI."""
    success: bool
    response: str
    agent: str
    query_type: str
    classification: ClassifiedQuery


class ChatAssistant:
    """
    Rule-based assistant for the worship ministry.

    Example:
        >>> assistant = ChatAssistant()
        >>> reply = assistant.respond("Quem são os pastores da igreja?")
        >>> reply.agent
        'Agente de História'
    """

    def __init__(self, config: Optional[AssistantConfig] = None):
        self.config = config or AssistantConfig()
        self.general_agent = GeneralAgent(self.config)
        self._agents: Dict[QueryType, Agent] = {
            QueryType.HISTORY: HistoryAgent(self.config),
            QueryType.GENERAL: self.general_agent,
        }

    def register_agent(self, query_type: QueryType, agent: Agent) -> None:
        """Use agent to answer every query of the given type."""
        self._agents[query_type] = agent

    def agent_for(self, query_type: QueryType) -> Agent:
        """Get the agent for a query type, falling back to the general agent."""
        return self._agents.get(query_type, self.general_agent)

    def respond(self, message: str) -> ChatReply:
        """
        Classify a message and let the matching agent answer it.

        Args:
            message: Text typed by the user

        Returns:
            ChatReply with the answer and how the message was classified
        """
        classification = classify_query(message)

        if not message.strip():
            answer = self.general_agent.handle_general()
            return ChatReply(
                success=False,
                response=answer.response,
                agent=self.general_agent.name,
                query_type=classification.type.description(),
                classification=classification,
            )

        agent = self.agent_for(classification.type)
        logger.debug(f"Routing {classification.type.value} query to {agent.name}")

        # /commands are stripped before the query reaches the agent
        query = classification.cleaned_query or message
        answer = agent.process(query)

        return ChatReply(
            success=answer.success,
            response=answer.response,
            agent=agent.name,
            query_type=classification.type.description(),
            classification=classification,
        )
