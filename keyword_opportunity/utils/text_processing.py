"""Text processing utilities for keyword strings."""

import re

# Words ignored when picking the main term of a keyword.
STOP_WORDS: frozenset[str] = frozenset({
    "the", "a", "an", "and", "or", "but", "in", "on", "at", "to", "for",
    "of", "with", "by", "is", "are", "was", "were", "be", "been", "being",
    "have", "has", "had", "do", "does", "did", "will", "would", "could",
    "should", "may", "might", "must", "can", "best", "top", "how", "what",
    "when", "where", "why",
})

TECHNICAL_TERMS: tuple[str, ...] = (
    "json", "api", "javascript", "html", "css", "code", "coding", "programming",
    "developer", "development", "framework", "library", "function", "variable",
    "array", "object", "string", "boolean", "null", "undefined", "console",
    "log", "error", "debug", "github", "npm", "node", "react", "vue", "angular",
    "webpack", "babel", "typescript", "php", "python", "java", "sql", "database",
    "server", "localhost", "http", "https", "url", "endpoint", "crud", "rest",
    "graphql", "oauth", "jwt", "cookie", "session", "cache", "cdn", "aws",
    "docker", "kubernetes", "deployment", "pipeline", "repository", "commit",
    "markdown", "syntax", "script", "tag", "element", "attribute", "dom",
    "cli", "terminal", "command", "install", "package", "module", "import",
)

GENERIC_TERMS: frozenset[str] = frozenset({
    "data", "information", "content", "text", "format", "file", "system",
    "service", "solution", "platform", "tool", "tools", "software", "app",
    "application", "program", "website", "site",
})

_LONE_STOP_WORDS = frozenset({
    "the", "and", "or", "but", "in", "on", "at", "to", "for", "of", "with", "by",
})

_CODE_CHARS = re.compile(r"[{}\[\]<>()=+\-*/\\|&^%$#@!~`]")
_VERSION_NUMBER = re.compile(r"\b\d+\.\d+\.\d+\b")
_MOSTLY_DIGITS = re.compile(r"^\d+$|^\d+[a-zA-Z]{1,2}$")
_CODE_PREFIXES = ("function", "var ", "const ", "let ", "class ")


def tokenize(keyword: str) -> list[str]:
    """Lowercase *keyword* and split it on whitespace."""
    return keyword.lower().split()


def normalize_keyword_key(keyword: str) -> str:
    """Return the lookup key used to deduplicate keywords.

    Examples:
        >>> normalize_keyword_key("  Buy   Running Shoes ")
        'buy running shoes'
    """
    return " ".join(keyword.casefold().split())


def find_main_term(keyword: str) -> str:
    """Return the representative term of *keyword*.

    The longest word that is not a stop word wins; ties keep the earliest
    word.  When every word is a stop word the first word is returned.

    Examples:
        >>> find_main_term("best running shoes")
        'running'
        >>> find_main_term("how to")
        'how'
    """
    words = tokenize(keyword)
    if not words:
        return ""
    main_term = ""
    for word in words:
        if word in STOP_WORDS:
            continue
        if len(word) > len(main_term):
            main_term = word
    return main_term or words[0]


def is_technical_keyword(keyword: str) -> bool:
    """Return True when *keyword* looks like developer jargon or noise.

    Flags keywords that contain a programming term, look like source code
    or a version number, are a lone generic word or stop word, are shorter
    than three characters, or consist mostly of digits.
    """
    lower = keyword.lower().strip()
    if len(keyword.strip()) < 3:
        return True
    if any(term in lower for term in TECHNICAL_TERMS):
        return True
    if (
        _CODE_CHARS.search(keyword)
        or "::" in keyword
        or keyword.startswith(_CODE_PREFIXES)
        or _VERSION_NUMBER.search(keyword)
    ):
        return True
    if lower in GENERIC_TERMS or lower in _LONE_STOP_WORDS:
        return True
    return bool(_MOSTLY_DIGITS.match(keyword.strip()))
