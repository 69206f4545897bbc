"""
Tests for the query classifier, agents and chat assistant.
"""

import pytest

from louvor.config import AssistantConfig
from louvor.assistant.classifier import (
    QueryType, classify_query, extract_mentioned_music, extract_command,
    get_query_type_description,
)
from louvor.assistant.agents import AgentResponse, GeneralAgent, HistoryAgent
from louvor.assistant.responder import ChatAssistant


class TestClassifier:
    """Tests for classify_query."""

    def test_history_developer(self):
        """Test questions about the developer go to history."""
        result = classify_query("Quem desenvolveu o sistema?")
        assert result.type == QueryType.HISTORY

    def test_history_pastors(self):
        """Test questions about the pastors go to history."""
        result = classify_query("Quem são os pastores da igreja?")
        assert result.type == QueryType.HISTORY

    def test_greeting(self):
        """Test greetings."""
        for text in ("oi", "Bom dia pessoal", "olá"):
            result = classify_query(text)
            assert result.type == QueryType.GENERAL
            assert result.intent == "Saudação"

    def test_help(self):
        """Test help requests."""
        result = classify_query("ajuda")
        assert result.type == QueryType.GENERAL
        assert result.intent == "Ajuda"

    def test_theology_command(self):
        """Test the /teologia command forces a theological analysis."""
        result = classify_query("/teologia analise a música @pao da vida?")

        assert result.type == QueryType.THEOLOGICAL
        assert result.requires_theology is True
        assert result.requires_music is True
        assert result.mentioned_music == "pao da vida"
        assert result.cleaned_query == "analise a música @pao da vida?"

    def test_music_search(self):
        """Test looking up a song link."""
        result = classify_query("Qual o link da música 10000 Razões?")
        assert result.type == QueryType.MUSIC_SEARCH
        assert result.requires_music is True
        assert "link" in result.keywords

    def test_user_info(self):
        """Test questions about members."""
        result = classify_query("Quem toca violão?")
        assert result.type == QueryType.USER_INFO

    def test_schedule(self):
        """Test questions about rosters."""
        result = classify_query("Qual a próxima escala?")
        assert result.type == QueryType.SCHEDULE
        assert result.requires_schedule is True

    def test_bible_based_music(self):
        """Test songs based on a Bible passage are theological."""
        result = classify_query("Quais músicas têm como base o Salmo 23?")
        assert result.type == QueryType.THEOLOGICAL
        assert result.requires_music is True
        assert result.requires_theology is True

    def test_hybrid(self):
        """Test two strong topics make a hybrid query."""
        result = classify_query("Qual a cifra da música para o culto de domingo?")
        assert result.type == QueryType.HYBRID

    def test_unknown(self):
        """Test messages with no topic."""
        result = classify_query("xyz")
        assert result.type == QueryType.GENERAL
        assert result.intent == "Informação geral"

    def test_keywords_unique(self):
        """Test keywords are reported once each."""
        result = classify_query("Qual o link da música 10000 Razões?")
        assert len(result.keywords) == len(set(result.keywords))

    def test_description(self):
        """Test friendly descriptions."""
        assert get_query_type_description(QueryType.HISTORY) == "📚 História da Igreja"
        assert QueryType.SCHEDULE.description() == "📅 Escalas e Disponibilidade"


class TestMentionsAndCommands:
    """Tests for @mentions and /commands."""

    def test_mention(self):
        """Test extracting a mentioned song."""
        assert extract_mentioned_music("Qual a cifra de @Alfa e Ômega!") == "Alfa e Ômega"
        assert extract_mentioned_music("toque @pao da vida, por favor") == "pao da vida, por favor"

    def test_no_mention(self):
        """Test messages without a mention."""
        assert extract_mentioned_music("Qual a próxima escala?") is None

    def test_command(self):
        """Test splitting a leading command."""
        assert extract_command("/Teologia Salmo 23") == ("teologia", "Salmo 23")
        assert extract_command("Salmo 23") == (None, "Salmo 23")


class TestAgents:
    """Tests for the built-in agents."""

    def test_general_greeting(self):
        """Test the greeting answer."""
        response = GeneralAgent().process("oi")
        assert response.success is True
        assert "Olá" in response.response

    def test_general_help(self):
        """Test the help answer."""
        response = GeneralAgent().process("ajuda")
        assert "Central de Ajuda" in response.response

    def test_general_about(self):
        """Test the about answer."""
        response = GeneralAgent().process("quem é você")
        assert "Sobre Mim" in response.response

    def test_general_fallback(self):
        """Test the fallback answer."""
        response = GeneralAgent().process("xyz")
        assert response.success is True
        assert "Não entendi" in response.response

    def test_history_answers(self):
        """Test each history question type."""
        agent = HistoryAgent()

        assert "Josué Alisson" in agent.process("quem desenvolveu o sistema?").response
        assert "Pastor Gadiel Lima" in agent.process("Quem são os pastores da igreja?").response
        assert "Igreja Batista Central em Estância" in agent.process("qual é a nossa igreja?").response

        leaders = agent.process("Quem são os líderes do ministério de louvor?").response
        assert "Josué Alisson" in leaders
        assert "Bruno Barros" in leaders

    def test_history_unknown(self):
        """Test history questions the agent cannot answer."""
        response = HistoryAgent().process("fale sobre a história")
        assert response.success is False

    def test_history_uses_config(self):
        """Test facts come from the assistant config."""
        config = AssistantConfig(pastors=["Pastor Fulano"], church_short_name="IBX")
        response = HistoryAgent(config).process("quem são os pastores da igreja?")
        assert "Pastor Fulano" in response.response
        assert "IBX" in response.response


class TestChatAssistant:
    """Tests for routing messages to agents."""

    def test_routes_history(self):
        """Test history questions reach the history agent."""
        reply = ChatAssistant().respond("Quem são os pastores da igreja?")

        assert reply.success is True
        assert reply.agent == "Agente de História"
        assert reply.query_type == "📚 História da Igreja"
        assert "Pastor Daniel Lima" in reply.response

    def test_routes_greeting(self):
        """Test greetings reach the general agent."""
        reply = ChatAssistant().respond("oi")
        assert reply.agent == "Agente Geral"
        assert "Olá" in reply.response

    def test_unregistered_topic_falls_back(self):
        """Test topics without an agent get the general answer."""
        reply = ChatAssistant().respond("Qual a próxima escala?")

        assert reply.agent == "Agente Geral"
        assert reply.query_type == "📅 Escalas e Disponibilidade"
        assert reply.classification.type == QueryType.SCHEDULE

    def test_register_agent(self):
        """Test plugging in an agent for a topic."""

        class ScheduleStub:
            name = "Agente de Escalas"

            def process(self, query):
                return AgentResponse(True, f"escala: {query}")

        assistant = ChatAssistant()
        assistant.register_agent(QueryType.SCHEDULE, ScheduleStub())
        reply = assistant.respond("Qual a próxima escala?")

        assert reply.agent == "Agente de Escalas"
        assert reply.response == "escala: Qual a próxima escala?"

    def test_command_stripped_before_agent(self):
        """Test agents receive the query without the /command."""
        received = []

        class TheologyStub:
            name = "Agente Teológico"

            def process(self, query):
                received.append(query)
                return AgentResponse(True, "ok")

        assistant = ChatAssistant()
        assistant.register_agent(QueryType.THEOLOGICAL, TheologyStub())
        assistant.respond("/teologia Salmo 23")

        assert received == ["Salmo 23"]

    def test_empty_message(self):
        """Test an empty message is not a success."""
        reply = ChatAssistant().respond("   ")
        assert reply.success is False
        assert reply.agent == "Agente Geral"


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
