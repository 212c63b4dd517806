from log2curl.interface.prefixes import strip_line_prefix, strip_log_prefixes


def test_known_prefixes_removed():
    cases = {
        "flutter: hello": "hello",
        "I/flutter (12345): {a: 1}": "{a: 1}",
        "D/OkHttp ( 987): --> POST": "--> POST",
        "[2024-01-15 10:23:45] local.INFO: payload": "payload",
        "[Nest] 38453  - 01/15/2024, 10:23:45 AM     LOG [RouterExplorer] Mapped": "Mapped",
        "2024-01-15T10:23:45.123Z GET /x": "GET /x",
        "> curl": "curl",
    }
    for raw, expected in cases.items():
        assert strip_line_prefix(raw) == expected


def test_stacked_prefixes_removed_in_one_call():
    assert strip_line_prefix("flutter: > x") == "x"
    assert strip_line_prefix("> > > x") == "x"


def test_unmatched_lines_pass_through():
    for line in ["plain text", "  flutter: indented", "", "{a: 1}", "Host: example.com"]:
        assert strip_line_prefix(line) == line


def test_multiline_keeps_line_count():
    text = "flutter: BODY:\nflutter: {\nflutter:   a: 1\nflutter: }"
    out = strip_log_prefixes(text)
    assert out == "BODY:\n{\na: 1\n}"
    assert out.count("\n") == text.count("\n")


def test_idempotent():
    samples = [
        "> > > x",
        "flutter: flutter: I/flutter (1): data",
        "[2024-01-15 10:23:45] local.INFO: [2024-01-15 10:23:46] local.DEBUG: x",
        "2024-01-15 10:23:45 > body: {a: 1}",
        "no prefix at all\n  > indented prompt",
    ]
    for s in samples:
        once = strip_log_prefixes(s)
        assert strip_log_prefixes(once) == once
