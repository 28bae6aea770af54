"""Block context tracking: quote, list, and code prefixes for each output line."""

from __future__ import annotations

from dataclasses import dataclass, field

from .wrap import grapheme_length

HEADING_TAGS = frozenset({"H1", "H2", "H3", "H4", "H5", "H6"})
LIST_TAGS = frozenset({"OL", "UL"})
BLOCK_FRAME_TAGS = frozenset({"BLOCKQUOTE", "CODE", "LI", "PRE"}) | HEADING_TAGS | LIST_TAGS

UNORDERED_MARKERS = "*+-"
MAX_ORDERED_MARKER = 999_999_999


@dataclass
class OrderedList:
    counter: int = 0

    def advance(self) -> None:
        self.counter += 1

    def marker(self) -> str:
        # CommonMark caps list numbers at nine digits.
        return f"{min(max(self.counter, 1), MAX_ORDERED_MARKER)}."


@dataclass
class UnorderedList:
    occurrence: int = 0

    def advance(self) -> None:
        pass

    def marker(self) -> str:
        # Sibling lists rotate markers so adjacent lists stay separate.
        return UNORDERED_MARKERS[self.occurrence % len(UNORDERED_MARKERS)]


ListContext = OrderedList | UnorderedList


@dataclass
class Frame:
    name: str
    marker_emitted: bool = False


@dataclass
class LinePrefix:
    first: str = ""
    continuation: str = ""
    in_pre: bool = False
    no_newlines: bool = False
    item: Frame | None = field(default=None, repr=False)


class BlockContext:
    """Stack of open block frames plus the open list contexts.

    Frames cover an element's interior: the converter enters a frame after
    handling the element's opener and leaves it before handling its closer.
    """

    def __init__(self) -> None:
        self._frames: list[Frame] = []
        self._lists: list[ListContext] = []
        # Unordered lists seen so far per nesting depth, under the current item.
        self._unordered_seen: list[int] = [0]

    def enter(self, name: str) -> None:
        if name in BLOCK_FRAME_TAGS:
            self._frames.append(Frame(name))

    def leave(self, name: str) -> None:
        for i in range(len(self._frames) - 1, -1, -1):
            if self._frames[i].name == name:
                del self._frames[i]
                return

    def open_list(self, ordered: bool) -> ListContext:
        if ordered:
            context: ListContext = OrderedList()
        else:
            depth = len(self._lists)
            while len(self._unordered_seen) <= depth:
                self._unordered_seen.append(0)
            context = UnorderedList(occurrence=self._unordered_seen[depth])
            self._unordered_seen[depth] += 1
        self._lists.append(context)
        return context

    def close_list(self) -> None:
        if self._lists:
            self._lists.pop()

    def start_item(self) -> None:
        """Count a new item in the innermost list; nested lists restart rotation."""
        if not self._lists:
            return
        self._lists[-1].advance()
        del self._unordered_seen[len(self._lists):]

    def prefix(self) -> LinePrefix:
        """Walk the open frames root-first and build the prefixes for a flush."""
        result = LinePrefix()
        list_depth = 0
        innermost_item = next((f for f in reversed(self._frames) if f.name == "LI"), None)

        for frame in self._frames:
            name = frame.name
            if name == "BLOCKQUOTE":
                result.first += "> "
                result.continuation += "> "
            elif name == "PRE":
                result.in_pre = True
            elif name == "CODE":
                if result.in_pre:
                    result.first += "    "
                    result.continuation += "    "
            elif name in HEADING_TAGS:
                result.no_newlines = True
            elif name in LIST_TAGS:
                list_depth += 1
            elif name == "LI":
                if list_depth == 0 or list_depth > len(self._lists):
                    continue
                marker = self._lists[list_depth - 1].marker()
                indent = " " * grapheme_length(marker)
                if frame is innermost_item and not frame.marker_emitted:
                    result.first += f"{marker} "
                else:
                    result.first += f"{indent} "
                result.continuation += f"{indent} "
                if frame is innermost_item:
                    result.item = frame

        return result
