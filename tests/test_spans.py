from __future__ import annotations

from enlighten.services import spans


def test_visible_text_drops_ignore_regions_and_tags() -> None:
    raw = "aaa <b>dada</b> <en-ignore>asexual</en-ignore> ads"
    assert spans.visible_text(raw) == "aaa dada  ads"


def test_visible_text_keeps_forced_keyword() -> None:
    assert spans.visible_text("x <enlighten asexual>random</enlighten> y") == "x asexual y"
    assert spans.visible_text('x <enlighten data-word="gender">RANDOM</enlighten> y') == "x gender y"


def test_forced_keyword_forms() -> None:
    assert spans.forced_keyword(" data-word='age'") == "age"
    assert spans.forced_keyword(" asexual") == "asexual"


def test_find_protected_types_in_order() -> None:
    raw = "<p>a <a href='x'>b</a> <en-ignore>c</en-ignore> <enlighten data-word='d'>e</enlighten></p>"
    found = spans.find_protected(raw)
    assert [span.type for span in found] == [
        spans.SpanType.TAG,
        spans.SpanType.ANCHOR,
        spans.SpanType.IGNORE,
        spans.SpanType.FORCED,
        spans.SpanType.TAG,
    ]
    assert found[1].original == "<a href='x'>b</a>"


def test_nested_regions_are_not_split() -> None:
    raw = "<en-ignore><a href='x'>asexual</a></en-ignore>"
    found = spans.find_protected(raw)
    assert len(found) == 1
    assert found[0].type is spans.SpanType.IGNORE


def test_split_protected_rebuilds_input() -> None:
    raw = "Here <b>bold</b> and <a href='#'>link</a> end"
    pieces = spans.split_protected(raw)
    assert "".join(chunk for chunk, _ in pieces) == raw
    assert [chunk for chunk, protected in pieces if not protected] == ["Here ", "bold", " and ", " end"]


def test_enclosing_anchor_wins_over_nested_regions() -> None:
    raw = "<a href='x'><en-ignore>note</en-ignore> gender</a> tail"
    found = spans.find_protected(raw)
    assert [span.type for span in found] == [spans.SpanType.ANCHOR]
    assert found[0].original == "<a href='x'><en-ignore>note</en-ignore> gender</a>"
