"""
Query Classifier - Decide which assistant agent should answer a message.

Messages are scored against keyword lists and regex patterns for each
topic (theology, music, schedules, members, church history). The highest
score wins; two or more strong topics make a hybrid query.

Special syntax:
    /teologia <pergunta>    # Force a theological analysis
    @nome da música         # Mention a specific song
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple
import logging

logger = logging.getLogger(__name__)


class QueryType(Enum):
    """Topics an incoming message can be about."""
    THEOLOGICAL = "theological"
    MUSIC_SEARCH = "music_search"
    SCHEDULE = "schedule"
    USER_INFO = "user_info"
    HISTORY = "history"
    HYBRID = "hybrid"
    GENERAL = "general"

    def description(self) -> str:
        """Get the label shown next to an answer."""
        return QUERY_TYPE_DESCRIPTIONS[self]


QUERY_TYPE_DESCRIPTIONS = {
    QueryType.THEOLOGICAL: "📖 Análise Teológica",
    QueryType.MUSIC_SEARCH: "🎵 Busca de Músicas",
    QueryType.SCHEDULE: "📅 Escalas e Disponibilidade",
    QueryType.USER_INFO: "👥 Informações de Membros",
    QueryType.HISTORY: "📚 História da Igreja",
    QueryType.HYBRID: "🔀 Consulta Múltipla",
    QueryType.GENERAL: "ℹ️ Informação Geral",
}


@dataclass
class ClassifiedQuery:
    """Result of classifying a message."""
    type: QueryType
    intent: str
    keywords: List[str] = field(default_factory=list)
    requires_music: bool = False
    requires_schedule: bool = False
    requires_user: bool = False
    requires_theology: bool = False
    mentioned_music: Optional[str] = None  # song mentioned with @
    original_query: str = ""
    cleaned_query: str = ""  # query without a leading /command


_BIBLE_BOOKS = (
    "gênesis|êxodo|levítico|números|deuteronômio|josué|juízes|rute|samuel|"
    "reis|crônicas|esdras|neemias|ester|jó|salmos|provérbios|eclesiastes|"
    "cantares|isaías|jeremias|lamentações|ezequiel|daniel|oséias|joel|amós|"
    "obadias|jonas|miquéias|naum|habacuque|sofonias|ageu|zacarias|malaquias|"
    "mateus|marcos|lucas|joão|atos|romanos|coríntios|gálatas|efésios|"
    "filipenses|colossenses|tessalonicenses|timóteo|tito|filemom|hebreus|"
    "tiago|pedro|judas|apocalipse|revelação"
)

# Shorter list used when looking for "<livro> capítulo N" near a song request
_COMMON_BOOKS = (
    "gênesis|êxodo|salmo|mateus|marcos|lucas|joão|atos|romanos|coríntios|"
    "gálatas|efésios|filipenses|colossenses|tessalonicenses|timóteo|tito|"
    "filemom|hebreus|tiago|pedro|judas|apocalipse|revelação"
)

THEOLOGICAL_KEYWORDS = (
    "teologia", "teológic", "bíblic", "escritur", "doutrina", "doutrinar",
    "reformad", "calvinis", "westminster", "heidelberg", "dort",
    "salmo", "versículo", "passagem", "livro da bíblia",
    "analise", "avalie", "avaliação", "ortodox", "heresia", "heretic",
    "base bíblica", "fundamento", "exegese", "interpretação",
    "confissão de fé", "catecismo", "soberania de deus", "graça",
    "justificação", "santificação", "redenção", "expiação",
    "sermão", "pregação", "mateus 5", "mateus 6", "mateus 7",
    "bem-aventurança", "sal da terra", "luz do mundo",
) + tuple(_BIBLE_BOOKS.split("|"))

MUSIC_KEYWORDS = (
    "música", "musica", "canção", "cançao", "hino",
    "cifra", "acorde", "tom", "transpor",
    "letra", "verso", "estrofe",
    "youtube", "link", "video", "vídeo", "ouvir", "escutar",
    "compositor", "autor", "cantor",
)

SCHEDULE_KEYWORDS = (
    "escala", "escalado", "escalada",
    "domingo", "sábado", "semana", "mês", "próxim", "hoje",
    "atuação", "culto", "louvor", "ministração",
    "disponibilidade", "disponível", "indisponível",
    "quando", "que dia", "data",
)

USER_KEYWORDS = (
    "quem", "fulano", "membro", "membros", "integrante", "integrantes",
    "cantor", "cantora", "cantores", "pessoas",
    "músico", "musico", "instrumentista",
    "violão", "guitarra", "bateria", "teclado", "baixo", "piano",
    "instrumento", "toca", "canta",
    "aniversariante", "aniversário", "nascimento",
    "lista de", "nomes dos", "nomes de", "quem são",
)

HISTORY_KEYWORDS = (
    "desenvolveu", "desenvolvedor", "criou", "programou", "fez o sistema",
    "pastor", "pastores", "igreja", "nossa igreja",
    "líder", "líderes", "lidera", "ministério de louvor",
)

GREETINGS = ("oi", "olá", "ola", "bom dia", "boa tarde", "boa noite", "hey")
HELP_WORDS = ("ajuda", "help", "como", "o que você faz", "o que voce faz")


def _compile(*patterns: str) -> Tuple[re.Pattern, ...]:
    return tuple(re.compile(p, re.IGNORECASE) for p in patterns)


HISTORY_PATTERNS = _compile(
    r"quem (desenvolveu|te desenvolveu|criou|te criou|fez|te fez|programou)",
    r"quem é (o|a) desenvolvedor",
    r"quem (é|são) (o|a|os|as) pastor",
    r"(pastor|pastores) (da|do|da nossa) igreja",
    r"(qual|de qual) (é|é a|é o) (nossa|a nossa) igreja",
    r"(qual|de qual) igreja",
    r"(quem|quais) (é|são) (o|a|os|as) líder",
    r"(quem|quais) (é|são) (o|a) líder (do|da) (ministério|louvor)",
    r"líder (do|da) (ministério|louvor)",
    r"líderes (do|da) (ministério|louvor)",
)

# Weighted +3 per match
TOPIC_PATTERNS = {
    QueryType.THEOLOGICAL: _compile(
        r"analise? (teológic|doutrinar|bíblic)",
        r"(base (bíblica|teológica)|fundamento bíblico)",
        r"(está de acordo|ortodox|heresi)",
        r"(salmo|gênesis|êxodo|apocalipse) \d+",
        r"confissão de (fé|westminster)",
        r"(música|louvor|hino) (sobre|com base|baseado|do) (salmo|sermão|passagem)",
        r"sermão da montanha",
        r"(mateus|marcos|lucas|joão|romanos|apocalipse) \d+",
        r"qual (música|louvor) (para |sobre )?louvar",
        r"estudo (bíblico|teológico)",
        r"(quais|quais são) (as )?música",
        r"música (com|tendo) (como )?base",
        r"música (sobre|baseado|baseada) (em|no|na)",
        r"(quais|quais são) (as )?música.*(com|tendo) (como )?base",
        r"(quais|quais são) (as )?música.*(sobre|baseado|baseada)",
        rf"({_BIBLE_BOOKS}) (capítulo|cap|capitulo) \d+",
        r"louvar.*(com|tendo) (como )?base",
    ),
    QueryType.MUSIC_SEARCH: _compile(
        r"(qual|mostre|tem) (o )?link",
        r"link (d[ao]|para) (música|musica)",
        r"(lista|mostre|quais|todas) (as |todas )?música",
        r"quantas (música|cifra|letra)",
        r"(cifra|letra) d[ea]",
    ),
    QueryType.SCHEDULE: _compile(
        r"escala d[aeo]",
        r"quem (está|esta) escalado",
        r"(próxim[ao]|próxim[ao]s) (escala|culto|domingo)",
        r"disponibilidade d[eo]",
        r"está disponível",
        r"dia \d{1,2}/\d{1,2}",
    ),
    QueryType.USER_INFO: _compile(
        r"quem toca",
        r"lista de (cantor|músico|membro|integrante)",
        r"instrumento d[eo]",
        r"aniversariante",
        r"(quais|nomes) (os |dos |de )?(integrante|membro)",
        r"quem (são|sao) (os |as )?",
    ),
}

BIBLE_BASED_MUSIC_PATTERNS = _compile(
    r"(quais|quais são).*música.*(com|tendo).*base",
    r"(quais|quais são).*música.*(sobre|baseado|baseada)",
    r"música.*(com|tendo).*base",
    r"(quais|quais são).*louvar.*(com|tendo).*base",
    r"louvar.*(com|tendo).*base",
    rf"(quais|quais são).*música.*({_COMMON_BOOKS}).*(capítulo|cap|capitulo)",
    rf"({_COMMON_BOOKS}).*(capítulo|cap|capitulo).*\d+.*música",
)

MENTION_PATTERN = re.compile(r"@([^\s@?!.]+(?:\s+[^\s@?!.]+)*)", re.IGNORECASE)
COMMAND_PATTERN = re.compile(r"^/(\w+)\s+(.+)$", re.IGNORECASE | re.DOTALL)

_THEOLOGY_HINT = re.compile(r"(base|análise|analise|estudo|teológic|bíblic|doutrin)", re.IGNORECASE)
_BIBLE_REFERENCE = re.compile(
    r"(gênesis|êxodo|levítico|números|deuteronômio|salmo|mateus|marcos|lucas|"
    r"joão|atos|romanos|coríntios|gálatas|efésios|filipenses|colossenses|"
    r"tessalonicenses|timóteo|tito|filemom|hebreus|tiago|pedro|judas|"
    r"apocalipse|revelação).*(capítulo|cap|capitulo)",
    re.IGNORECASE,
)
_MUSIC_OR_PRAISE = re.compile(r"(música|músicas|louvar|louvor)", re.IGNORECASE)
_BASED_ON = re.compile(r"(com|tendo).*base|baseado|baseada", re.IGNORECASE)
_TRAILING_PUNCTUATION = re.compile(r"[?!.,;:]+$")


def extract_mentioned_music(query: str) -> Optional[str]:
    """
    Extract a song mentioned with @ (e.g. "@pao da vida").

    Returns:
        Song name without the @ or trailing punctuation, or None
    """
    match = MENTION_PATTERN.search(query)
    if not match:
        return None
    return _TRAILING_PUNCTUATION.sub("", match.group(1).strip()).strip()


def extract_command(query: str) -> Tuple[Optional[str], str]:
    """
    Split a leading "/command" off a message.

    Returns:
        Tuple of (command or None, remaining query)
    """
    match = COMMAND_PATTERN.match(query)
    if match:
        return match.group(1).lower(), match.group(2).strip()
    return None, query


def _unique(items: List[str]) -> List[str]:
    return list(dict.fromkeys(items))


def _is_help_query(lower_query: str) -> bool:
    for word in HELP_WORDS:
        if word in ("ajuda", "help"):
            if (lower_query in (word, f"{word}?", f"o que é {word}", f"o que e {word}")
                    or lower_query.startswith(f"{word} ")):
                return True
        elif word == "como":
            if lower_query == "como" or lower_query.startswith("como "):
                return True
        elif word in lower_query and "louvar" not in lower_query:
            return True
    return False


def classify_query(query: str) -> ClassifiedQuery:
    """
    Classify a message and decide which agent should answer it.

    Args:
        query: Message typed by the user

    Returns:
        ClassifiedQuery describing the topic and what data it needs
    """
    command, cleaned = extract_command(query)

    if command == "teologia":
        mentioned = extract_mentioned_music(cleaned)
        return ClassifiedQuery(
            type=QueryType.THEOLOGICAL,
            intent="Análise teológica (comando /teologia)",
            keywords=["teologia", "comando"],
            requires_music=mentioned is not None,
            requires_theology=True,
            mentioned_music=mentioned,
            original_query=query,
            cleaned_query=cleaned,
        )

    lower_query = cleaned.lower()
    keywords: List[str] = []
    mentioned = extract_mentioned_music(cleaned)

    def count(words: Tuple[str, ...]) -> int:
        found = [w for w in words if w in lower_query]
        keywords.extend(found)
        return len(found)

    scores = {
        QueryType.THEOLOGICAL: count(THEOLOGICAL_KEYWORDS),
        QueryType.MUSIC_SEARCH: count(MUSIC_KEYWORDS),
        QueryType.SCHEDULE: count(SCHEDULE_KEYWORDS),
        QueryType.USER_INFO: count(USER_KEYWORDS),
    }

    # Specific history phrasing outweighs any generic keyword
    has_history_pattern = any(p.search(query) for p in HISTORY_PATTERNS)
    history_score = 10 if has_history_pattern else count(HISTORY_KEYWORDS)

    if mentioned:
        if scores[QueryType.THEOLOGICAL] > 0 or _THEOLOGY_HINT.search(query):
            scores[QueryType.THEOLOGICAL] += 5
        else:
            scores[QueryType.MUSIC_SEARCH] += 5

    for query_type, patterns in TOPIC_PATTERNS.items():
        for pattern in patterns:
            if pattern.search(lower_query):
                scores[query_type] += 3

    logger.debug(f"Classifier scores for {query!r}: {scores}, history={history_score}")

    base = dict(
        keywords=_unique(keywords),
        mentioned_music=mentioned,
        original_query=query,
        cleaned_query=cleaned,
    )

    is_bible_based = any(p.search(query) for p in BIBLE_BASED_MUSIC_PATTERNS)
    if is_bible_based or (
        _BIBLE_REFERENCE.search(query)
        and _MUSIC_OR_PRAISE.search(query)
        and _BASED_ON.search(query)
    ):
        return ClassifiedQuery(
            type=QueryType.THEOLOGICAL,
            intent="Análise teológica de músicas com base bíblica",
            requires_music=True,
            requires_theology=True,
            **base,
        )

    if history_score > 0:
        return ClassifiedQuery(
            type=QueryType.HISTORY,
            intent="História da igreja, pastores, líderes ou desenvolvedor",
            **base,
        )

    if any(lower_query == g or lower_query.startswith(g + " ") for g in GREETINGS):
        return ClassifiedQuery(
            type=QueryType.GENERAL,
            intent="Saudação",
            keywords=["saudação"],
            original_query=query,
            cleaned_query=cleaned,
        )

    if _is_help_query(lower_query):
        return ClassifiedQuery(
            type=QueryType.GENERAL,
            intent="Ajuda",
            keywords=["ajuda"],
            original_query=query,
            cleaned_query=cleaned,
        )

    strong = [t for t, score in scores.items() if score >= 2]
    if len(strong) >= 2:
        query_type = QueryType.HYBRID
        intent = "Combina " + " + ".join(t.value for t in strong)
    else:
        best = max(scores.values())
        if best == 0:
            query_type = QueryType.GENERAL
            intent = "Informação geral"
        else:
            # Ties resolve in declaration order: theology, music, schedule, users
            query_type = next(t for t, score in scores.items() if score == best)
            intent = TOPIC_INTENTS[query_type]

    return ClassifiedQuery(
        type=query_type,
        intent=intent,
        requires_music=scores[QueryType.MUSIC_SEARCH] > 0,
        requires_schedule=scores[QueryType.SCHEDULE] > 0,
        requires_user=scores[QueryType.USER_INFO] > 0,
        requires_theology=scores[QueryType.THEOLOGICAL] > 0,
        **base,
    )


TOPIC_INTENTS = {
    QueryType.THEOLOGICAL: "Análise teológica",
    QueryType.MUSIC_SEARCH: "Busca de músicas",
    QueryType.SCHEDULE: "Informações de escalas",
    QueryType.USER_INFO: "Informações de usuários",
}


def get_query_type_description(query_type: QueryType) -> str:
    """Return a friendly label for a query type."""
    return query_type.description()
