from log2curl.body.blocks import TextBlock, scan_blocks


def _balanced(content: str) -> bool:
    depth = 0
    quote = ""
    i = 0
    while i < len(content):
        ch = content[i]
        if ch == "\\":
            i += 2
            continue
        if quote:
            if ch == quote:
                quote = ""
        elif ch in "'\"":
            quote = ch
        elif ch == "{":
            depth += 1
        elif ch == "}":
            depth -= 1
        i += 1
    return depth == 0


def test_top_level_blocks_in_order():
    blocks = scan_blocks("a {x: 1} b {y: {z: 2}} c")
    assert [b.content for b in blocks] == ["{x: 1}", "{y: {z: 2}}"]
    assert blocks[0] == TextBlock(content="{x: 1}", start_index=2, end_index=7, preceding_text="a ")


def test_braces_inside_strings_ignored():
    assert [b.content for b in scan_blocks('{"a": "}"} tail')] == ['{"a": "}"}']
    assert [b.content for b in scan_blocks("{'a': '{'}")] == ["{'a': '{'}"]


def test_escaped_quote_inside_string():
    text = r'{"a": "\"}"} after'
    assert [b.content for b in scan_blocks(text)] == [r'{"a": "\"}"}']


def test_unmatched_closing_brace_is_ignored():
    blocks = scan_blocks("} {a: 1} }} {b: 2}")
    assert [b.content for b in blocks] == ["{a: 1}", "{b: 2}"]


def test_preceding_text_is_capped():
    blocks = scan_blocks("x" * 400 + "{a: 1}")
    assert len(blocks[0].preceding_text) == 300
    assert len(scan_blocks("x" * 400 + "{a: 1}", lookback=10)[0].preceding_text) == 10


def test_no_blocks():
    assert scan_blocks("plain text") == []
    assert scan_blocks("{ never closed") == []


def test_blocks_are_balanced():
    text = "HEADERS: {a: {b: '}'}, c: \"{\"}\nDATA: {x: [1, {y: 2}]} } extra"
    blocks = scan_blocks(text)
    assert blocks
    for b in blocks:
        assert b.content[0] == "{" and b.content[-1] == "}"
        assert b.start_index < b.end_index
        assert text[b.start_index : b.end_index + 1] == b.content
        assert _balanced(b.content)
