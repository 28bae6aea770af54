"""Word segmentation and greedy line wrapping measured in grapheme clusters."""

from __future__ import annotations

import regex

_GRAPHEME = regex.compile(r"\X")
_WORD_BOUNDARY = regex.compile(r"\b", regex.WORD | regex.V1)
_RUNS = regex.compile(r"\n+|[ \t]+|[^ \t\n]+")

# Scripts written without spaces; a line may break between their words.
_NO_SPACE_SCRIPT = regex.compile(
    r"[\p{Han}\p{Hiragana}\p{Katakana}\p{Thai}\p{Lao}\p{Khmer}\p{Myanmar}]"
)
_TRAILING_PUNCTUATION = regex.compile(r"(?:\\?[,.;:?!]|[。、，．！？；：])+")
_OPENING = regex.compile(r"[\p{Ps}\p{Pi}\\]")


def grapheme_length(text: str) -> int:
    """Return the number of user-perceived characters in *text*."""
    if text.isascii():
        return len(text)
    return len(_GRAPHEME.findall(text))


def is_trailing_punctuation(word: str) -> bool:
    return _TRAILING_PUNCTUATION.fullmatch(word.strip()) is not None


def _can_break(previous: str, word: str) -> bool:
    """Whether a line may break between two words not separated by space."""
    if is_trailing_punctuation(word) or _OPENING.match(previous[-1]):
        return False
    return bool(_NO_SPACE_SCRIPT.match(previous[-1]) or _NO_SPACE_SCRIPT.match(word[0]))


def _segment(token: str) -> list[str]:
    """Split a whitespace-free token where a line may break inside it."""
    pieces: list[str] = []
    for segment in _WORD_BOUNDARY.split(token):
        if not segment:
            continue
        if pieces and not _can_break(pieces[-1], segment):
            pieces[-1] += segment
        else:
            pieces.append(segment)
    return pieces


def split_words(text: str) -> list[str]:
    """Split *text* into wrappable words.

    The result holds three kinds of entries: a single ``" "`` for a
    whitespace run, newline runs, and words.  A word is never split inside
    a backslash escape, and a token made only of trailing punctuation stays
    with the word before it even when a space separates them.
    """
    words: list[str] = []
    for run in _RUNS.findall(text):
        previous = words[-1] if words else None
        if run[0] == "\n":
            if previous is not None and previous[0] == "\n":
                words[-1] = previous + run
            else:
                words.append(run)
        elif run[0] in " \t":
            if previous != " ":
                words.append(" ")
        elif (
            previous == " "
            and len(words) > 1
            and words[-2][0] != "\n"
            and is_trailing_punctuation(run)
        ):
            words.pop()
            words[-1] += " " + run
        else:
            words.extend(_segment(run))
    return words


def wrap_words(
    words: list[str],
    width: int,
    first_prefix: str = "",
    continuation_prefix: str = "",
) -> list[str]:
    """Greedily fill lines up to *width* grapheme clusters.

    Only the first line carries *first_prefix*; later lines, including the
    ones forced by newline runs, start with *continuation_prefix*.  A word
    wider than the remaining space moves to a new line, and a word wider
    than the whole line is placed alone rather than split.
    """
    lines: list[str] = []
    indent = grapheme_length(continuation_prefix)
    current = first_prefix
    column = grapheme_length(first_prefix)
    has_content = False
    pending_space = False

    for word in words:
        if word[0] == "\n":
            lines.append(current if has_content else current.rstrip())
            current, column = continuation_prefix, indent
            has_content = pending_space = False
            continue
        if word == " ":
            pending_space = has_content
            continue

        length = grapheme_length(word)
        gap = 1 if pending_space else 0
        if has_content and column + gap + length > width:
            lines.append(current)
            current, column = continuation_prefix + word, indent + length
        else:
            current += " " * gap + word
            column += gap + length
        has_content = True
        pending_space = False

    lines.append(current if has_content else current.rstrip())
    return lines
