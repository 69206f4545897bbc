"""
Assistant agents that answer from fixed content.

GeneralAgent handles greetings, help and "who are you" questions.
HistoryAgent answers facts about the church, its pastors, the ministry
leaders and the system's developer, taken from AssistantConfig.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional
import logging

from louvor.config import AssistantConfig

logger = logging.getLogger(__name__)


@dataclass
class AgentResponse:
    """Answer produced by an agent."""
    success: bool
    response: str


class GeneralAgent:
    """Answers greetings, help requests and questions about the assistant."""

    name = "Agente Geral"

    GREETINGS = ("oi", "olá", "ola", "bom dia", "boa tarde", "boa noite", "hey", "e aí", "e ai")
    HELP_MARKERS = ("ajuda", "help", "o que você faz", "o que voce faz", "como funciona", "comandos")
    ABOUT_MARKERS = (
        "quem desenvolveu", "quem criou", "quem fez", "quem te criou",
        "quem é você", "quem e voce", "o que é você", "o que e voce",
    )

    def __init__(self, config: Optional[AssistantConfig] = None):
        self.config = config or AssistantConfig()

    def process(self, query: str) -> AgentResponse:
        """Pick the canned answer matching the query."""
        lower_query = query.lower().strip()

        if self.is_greeting(lower_query):
            return self.handle_greeting()
        if self.is_help_query(lower_query):
            return self.handle_help()
        if self.is_about_query(lower_query):
            return self.handle_about()
        return self.handle_general()

    def is_greeting(self, query: str) -> bool:
        return any(
            query == g or query.startswith(g + " ") or query.startswith(g + ",")
            for g in self.GREETINGS
        )

    def is_help_query(self, query: str) -> bool:
        return any(marker in query for marker in self.HELP_MARKERS)

    def is_about_query(self, query: str) -> bool:
        return any(marker in query for marker in self.ABOUT_MARKERS)

    def handle_greeting(self) -> AgentResponse:
        short = self.config.church_short_name
        return AgentResponse(True, f"""## 👋 Olá! Bem-vindo ao Assistente do Ministério de Louvor {short}!

Sou seu assistente e posso ajudá-lo de várias formas:

### 🎵 **Músicas**
- Buscar músicas, cifras e letras
- Transpor cifras para outro tom
- Informações sobre o repertório

### 📅 **Escalas**
- Ver escalas futuras e passadas
- Consultar disponibilidade
- Próximos dias de atuação

### 👥 **Membros**
- Informações sobre membros
- Quem toca cada instrumento

### 📚 **História**
- Nossa igreja, pastores e líderes

**Como posso ajudá-lo hoje?** 🙏""")

    def handle_help(self) -> AgentResponse:
        short = self.config.church_short_name
        return AgentResponse(True, f"""## 📚 Central de Ajuda - Assistente {short}

### 🎵 **Músicas:**
```
"Qual o link da música 10000 Razões?"
"Liste todas as músicas"
"Quantas músicas temos?"
```

### 📅 **Escalas:**
```
"Qual a próxima escala?"
"Quem está escalado no domingo?"
```

### 👥 **Membros:**
```
"Quem toca violão?"
"Lista de cantores"
```

### 📚 **História:**
```
"Quem são os pastores da igreja?"
"Quem são os líderes do ministério de louvor?"
"Quem desenvolveu o sistema?"
```

### 💡 **Dicas:**
- Seja específico nas perguntas
- **Use `@nome da música` para mencionar músicas específicas** (ex: `@pao da vida`)
- Use `/teologia` no início da mensagem para pedir uma análise teológica

**Pronto para começar?** 🚀""")

    def handle_about(self) -> AgentResponse:
        short = self.config.church_short_name
        return AgentResponse(True, f"""## 🤖 Sobre Mim - Assistente {short}

Fui desenvolvido para o **Ministério de Louvor da {self.config.church_name} ({short})**.

### 🤖 **Como Funciono:**
Classifico sua pergunta pelo assunto e aciono o agente adequado:

- 📖 **Agente Teológico** - Análises bíblicas
- 🎵 **Agente de Músicas** - Busca no repertório
- 📅 **Agente de Escalas** - Escalas e disponibilidade
- 👥 **Agente de Usuários** - Informações de membros
- 📚 **Agente de História** - Igreja, pastores e líderes
- ℹ️ **Agente Geral** - Ajuda e saudações

### 💡 **Posso Ajudar?**
Digite **"ajuda"** para ver exemplos de perguntas!

*Soli Deo Gloria* ✝️""")

    def handle_general(self) -> AgentResponse:
        return AgentResponse(True, """## ℹ️ Assistente do Ministério de Louvor

Não entendi sua pergunta, mas posso ajudá-lo com:

**🎵 Músicas:** repertório, cifras e letras
**📅 Escalas:** escalas, disponibilidade e próximos cultos
**👥 Membros:** integrantes e instrumentos
**📚 História:** igreja, pastores e líderes

**💡 Dica:** Digite "ajuda" para ver exemplos de perguntas!""")


class HistoryAgent:
    """Answers questions about the church, pastors, leaders and developer."""

    name = "Agente de História"

    DEVELOPER_PATTERNS = (
        re.compile(r"quem (desenvolveu|te desenvolveu|criou|te criou|fez|te fez)", re.IGNORECASE),
        re.compile(r"quem é (o|a) desenvolvedor", re.IGNORECASE),
        re.compile(r"quem programou", re.IGNORECASE),
        re.compile(r"quem fez (o|a) (sistema|aplicação|app)", re.IGNORECASE),
    )
    PASTOR_PATTERNS = (
        re.compile(r"quem (é|são) (o|a|os|as) pastor", re.IGNORECASE),
        re.compile(r"(pastor|pastores) (da|do|da nossa) igreja", re.IGNORECASE),
        re.compile(r"(pastor|pastores) (são|é)", re.IGNORECASE),
        re.compile(r"nome (do|dos) (pastor|pastores)", re.IGNORECASE),
    )
    CHURCH_PATTERNS = (
        re.compile(r"(qual|de qual) (é|é a|é o) (nossa|a nossa) igreja", re.IGNORECASE),
        re.compile(r"(qual|de qual) igreja", re.IGNORECASE),
        re.compile(r"nome (da|do) igreja", re.IGNORECASE),
        re.compile(r"(somos|é) (de|da) qual igreja", re.IGNORECASE),
    )
    LEADER_PATTERNS = (
        re.compile(r"(quem|quais) (é|são) (o|a|os|as) líder", re.IGNORECASE),
        re.compile(r"líder (do|da) (ministério|louvor)", re.IGNORECASE),
        re.compile(r"(quem|quais) lidera (o|a) (ministério|louvor)", re.IGNORECASE),
        re.compile(r"líderes (do|da) (ministério|louvor)", re.IGNORECASE),
    )

    def __init__(self, config: Optional[AssistantConfig] = None):
        self.config = config or AssistantConfig()

    def process(self, query: str) -> AgentResponse:
        """
        Answer a church history question.

        Checked in order: developer, pastors, church, ministry leaders.
        """
        lower_query = query.lower().strip()

        if self._matches(self.DEVELOPER_PATTERNS, lower_query):
            return self.handle_developer()
        if self._matches(self.PASTOR_PATTERNS, lower_query):
            return self.handle_pastors()
        if self._matches(self.CHURCH_PATTERNS, lower_query):
            return self.handle_church()
        if self._matches(self.LEADER_PATTERNS, lower_query):
            return self.handle_leaders()

        logger.info(f"No history answer for: {query!r}")
        return AgentResponse(
            False,
            "Desculpe, não entendi sua pergunta sobre a história da igreja. "
            "Você pode perguntar sobre:\n"
            "- Quem desenvolveu o sistema\n"
            "- Quem são os pastores\n"
            "- Qual é a igreja\n"
            "- Quem são os líderes do ministério de louvor",
        )

    @staticmethod
    def _matches(patterns, query: str) -> bool:
        return any(p.search(query) for p in patterns)

    def _full_church_name(self) -> str:
        return f"{self.config.church_name} - {self.config.church_short_name}"

    def handle_developer(self) -> AgentResponse:
        return AgentResponse(True, f"""## 👨‍💻 Desenvolvedor do Sistema

**{self.config.developer}** desenvolveu este sistema de organização do Ministério de Louvor {self.config.church_short_name}.

O sistema foi criado para facilitar a gestão de escalas, músicas, membros e disponibilidade.""")

    def handle_pastors(self) -> AgentResponse:
        pastors = "\n".join(f"- **{p}**" for p in self.config.pastors)
        return AgentResponse(True, f"""## 👨‍🦳 Pastores da {self.config.church_short_name}

Os pastores da **{self._full_church_name()}** são:

{pastors}""")

    def handle_church(self) -> AgentResponse:
        return AgentResponse(True, f"""## ⛪ Nossa Igreja

Somos da **{self._full_church_name()}**.

A {self.config.church_short_name} é uma igreja comprometida com a pregação fiel da Palavra de Deus e com a adoração genuína através do ministério de louvor.""")

    def handle_leaders(self) -> AgentResponse:
        leaders = "\n".join(f"- **{name}**" for name in self.config.leaders)
        return AgentResponse(True, f"""## 🎵 Líderes do Ministério de Louvor

Os líderes do **Ministério de Louvor {self.config.church_short_name}** são:

{leaders}""")
