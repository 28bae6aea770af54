"""Tests for block context tracking."""

from html_to_md.blocks import BlockContext, LinePrefix, OrderedList, UnorderedList


def _open_list(ctx: BlockContext, ordered: bool) -> None:
    ctx.open_list(ordered=ordered)
    ctx.enter("OL" if ordered else "UL")


def _open_item(ctx: BlockContext) -> None:
    ctx.start_item()
    ctx.enter("LI")


class TestListMarkers:
    def test_ordered_marker_is_clamped(self):
        assert OrderedList(counter=0).marker() == "1."
        assert OrderedList(counter=7).marker() == "7."
        assert OrderedList(counter=10**12).marker() == "999999999."

    def test_unordered_marker_rotates(self):
        markers = [UnorderedList(occurrence=i).marker() for i in range(4)]
        assert markers == ["*", "+", "-", "*"]


class TestBlockContext:
    def test_empty_prefix(self):
        prefix = BlockContext().prefix()
        assert prefix.first == ""
        assert prefix.continuation == ""
        assert not prefix.in_pre
        assert not prefix.no_newlines

    def test_item_marker_only_on_first_line(self):
        ctx = BlockContext()
        _open_list(ctx, ordered=True)
        _open_item(ctx)
        prefix = ctx.prefix()
        assert prefix.first == "1. "
        assert prefix.continuation == "   "

        prefix.item.marker_emitted = True
        assert ctx.prefix().first == "   "

    def test_counter_advances_per_item(self):
        ctx = BlockContext()
        _open_list(ctx, ordered=True)
        _open_item(ctx)
        ctx.leave("LI")
        _open_item(ctx)
        assert ctx.prefix().first == "2. "

    def test_sibling_lists_rotate(self):
        ctx = BlockContext()
        markers = []
        for _ in range(3):
            _open_list(ctx, ordered=False)
            _open_item(ctx)
            markers.append(ctx.prefix().first)
            ctx.leave("LI")
            ctx.leave("UL")
            ctx.close_list()
        assert markers == ["* ", "+ ", "- "]

    def test_nested_item_indents_under_parent(self):
        ctx = BlockContext()
        _open_list(ctx, ordered=True)
        _open_item(ctx)
        _open_list(ctx, ordered=False)
        _open_item(ctx)
        prefix = ctx.prefix()
        assert prefix.first == "   * "
        assert prefix.continuation == "     "

    def test_blockquote_prefix(self):
        ctx = BlockContext()
        ctx.enter("BLOCKQUOTE")
        ctx.enter("BLOCKQUOTE")
        prefix = ctx.prefix()
        assert prefix.first == "> > "
        assert prefix.continuation == "> > "

    def test_heading_disables_wrapping(self):
        ctx = BlockContext()
        ctx.enter("H2")
        assert ctx.prefix().no_newlines

    def test_code_inside_pre_is_indented(self):
        ctx = BlockContext()
        ctx.enter("PRE")
        ctx.enter("CODE")
        prefix = ctx.prefix()
        assert prefix.in_pre
        assert prefix.first == "    "

    def test_code_outside_pre_adds_nothing(self):
        ctx = BlockContext()
        ctx.enter("CODE")
        assert ctx.prefix().first == ""

    def test_untracked_elements_are_ignored(self):
        ctx = BlockContext()
        ctx.enter("DIV")
        ctx.enter("SPAN")
        ctx.leave("DIV")
        assert ctx.prefix().first == ""

    def test_close_list_on_empty_stack(self):
        ctx = BlockContext()
        ctx.close_list()
        ctx.start_item()
        assert ctx.prefix() == LinePrefix()
