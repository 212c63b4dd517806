from log2curl.interface.components import CustomHeader
from log2curl.interface.fields import (
    extract_custom_headers,
    extract_method,
    extract_token,
    extract_url,
    is_separator_line,
)


# ---- url

def test_labelled_url_trims_trailing_punctuation():
    assert extract_url("FULL URL: https://api.example.com/v1/login,") == "https://api.example.com/v1/login"


def test_labelled_url_beats_earlier_raw_url():
    text = "see https://docs.example.com\nENDPOINT: https://api.x.com/a"
    assert extract_url(text) == "https://api.x.com/a"


def test_base_url_plus_path():
    text = "BASE URL: https://api.x.com/\nPATH: /v1/users)"
    assert extract_url(text) == "https://api.x.com/v1/users"


def test_base_url_without_path():
    assert extract_url("BASE URL: https://api.x.com/") == "https://api.x.com"


def test_first_raw_url():
    assert extract_url('curl "https://api.x.com/v1/items?id=3";') == "https://api.x.com/v1/items?id=3"


def test_rebuilt_from_request_line_and_host():
    text = "POST /v1/orders HTTP/1.1\nHost: api.shop.io"
    assert extract_url(text) == "https://api.shop.io/v1/orders"


def test_rebuilt_url_uses_http_on_port_80_only():
    assert extract_url('GET /health HTTP/1.1 server_name="svc.local:80"') == "http://svc.local:80/health"
    assert extract_url('GET /health HTTP/1.1 server_name="svc.local:8080"') == "https://svc.local:8080/health"


def test_host_only():
    assert extract_url("host=api.svc.local status=200") == "https://api.svc.local"


def test_no_url():
    assert extract_url("nothing to see here") is None


# ---- method

def test_explicit_methods():
    assert extract_method("Method: post") == "POST"
    assert extract_method("GET /v1/users HTTP/1.1") == "GET"
    assert extract_method("log line\n  DELETE https://api.x.com/a/1") == "DELETE"
    assert extract_method("POST REQUEST DETAILS") == "POST"
    assert extract_method("fetch(url, { method: 'PATCH' })") == "PATCH"


def test_framework_hints():
    assert extract_method("axios.put(url, data)") == "PUT"
    assert extract_method("Http::patch($url, $payload)") == "PATCH"
    assert extract_method("DATA in postRequest") == "POST"
    assert extract_method("DATA in putData") == "PUT"
    assert extract_method("calling deleteRequest()") == "DELETE"
    assert extract_method("http.get(uri)") == "GET"


def test_explicit_wins_over_hint():
    assert extract_method("axios.post(...)\nMethod: PUT") == "PUT"


def test_no_method():
    assert extract_method("hello world") is None


# ---- token

def test_authorization_header_token():
    assert extract_token("Authorization: Bearer abc.def-123") == "abc.def-123"


def test_logfmt_authorization_token():
    assert extract_token('authorization="Bearer tok1234567890" status=200') == "tok1234567890"


def test_user_token():
    assert extract_token("user token 123abc") == "123abc"


def test_generic_token_needs_ten_chars():
    assert extract_token("token: short") is None
    assert extract_token("token: 'abcdefghijk'") == "abcdefghijk"


def test_access_token():
    assert extract_token("access_token=abcdefghij12") == "abcdefghij12"


def test_bare_bearer():
    assert extract_token("sent with Bearer eyJhbGciOi.xyz") == "eyJhbGciOi.xyz"


# ---- headers

def test_headers_section_with_log_prefixes():
    text = (
        "flutter: \U0001f4cb HEADERS:\n"
        "flutter:    Server-Key: QH6bb\n"
        "flutter:    X-Device: ios\n"
        "flutter: ──────\n"
        "flutter:    Ignored: yes\n"
    )
    assert extract_custom_headers(text) == [
        CustomHeader("Server-Key", "QH6bb"),
        CustomHeader("X-Device", "ios"),
    ]


def test_headers_stop_at_section_label():
    text = "HEADERS:\nX-Api-Key: k1\nREQUEST BODY: {a: 1}\nX-Other: 2"
    assert extract_custom_headers(text) == [CustomHeader("X-Api-Key", "k1")]


def test_header_value_keeps_colons_and_duplicates():
    text = "Request Headers:\nX-Time: 10:20\nX-Time: 11:30\n"
    assert extract_custom_headers(text) == [CustomHeader("X-Time", "10:20"), CustomHeader("X-Time", "11:30")]


def test_malformed_line_stops_section():
    assert extract_custom_headers("HEADERS:\n: bad\nX-A: b") == []
    assert extract_custom_headers("HEADERS:\nno colon here\nX-A: b") == []


def test_no_headers_section():
    assert extract_custom_headers("Authorization: Bearer x") == []


def test_separator_lines():
    assert is_separator_line("")
    assert is_separator_line("   ")
    assert is_separator_line("----====****")
    assert is_separator_line("═══")
    assert not is_separator_line("X-A: b")
