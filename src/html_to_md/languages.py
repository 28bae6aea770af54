"""Programming language detection for fenced code blocks."""

from __future__ import annotations

from collections.abc import Callable

KNOWN_LANGUAGES = frozenset({
    "apl", "asm", "assembly", "bash", "c", "c#", "c++", "clojure", "cobol",
    "cpp", "csharp", "css", "d", "dart", "elixir", "elm", "erlang", "f#",
    "fish", "fortran", "fsharp", "go", "groovy", "guile", "haskell", "html",
    "java", "javascript", "js", "julia", "kotlin", "less", "lisp", "lua",
    "matlab", "objectivec", "objective-c", "ocaml", "perl", "php",
    "powershell", "python", "python2", "python3", "r", "racket", "raku",
    "ruby", "rust", "sass", "scala", "scheme", "sgml", "sh", "shell", "sql",
    "swift", "typescript", "ts", "vba", "xml", "zsh",
})

# Checked in order when no class name names the language.
LANGUAGE_ATTRIBUTES = (
    "data-lang",
    "data-language",
    "data-codetag",
    "syntax",
    "data-programming-language",
    "type",
)

CLASS_PREFIX = "language-"


def _usable(lang: str) -> str:
    lang = lang.strip()
    return "" if lang.endswith("`") else lang


def infer_language(
    class_names: list[str],
    get_attribute: Callable[[str], str | bool | None],
) -> str:
    """Return the language of a ``<code>`` element, or ``""`` if unknown."""
    for class_name in class_names:
        lowered = class_name.lower()
        if lowered.startswith(CLASS_PREFIX):
            lang = _usable(lowered[len(CLASS_PREFIX):])
        elif lowered in KNOWN_LANGUAGES:
            lang = lowered
        else:
            continue
        if lang:
            return lang
        break

    for attribute in LANGUAGE_ATTRIBUTES:
        value = get_attribute(attribute)
        if isinstance(value, str) and value.strip() in KNOWN_LANGUAGES:
            return value.strip()
    return ""
