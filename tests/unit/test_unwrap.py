from log2curl.body.unwrap import looks_like_request_config, unwrap_body


def test_wrapper_yields_nested_payload():
    wrapper = {"method": "POST", "url": "/x", "headers": {}, "data": {"a": 1}}
    assert unwrap_body(wrapper) == {"a": 1}


def test_single_indicator_is_not_a_wrapper():
    obj = {"method": "POST", "data": {"a": 1}}
    assert not looks_like_request_config(obj)
    assert unwrap_body(obj) is obj


def test_keys_compared_case_insensitively():
    assert unwrap_body({"Method": "POST", "URL": "x", "Body": {"a": 1}}) == {"a": 1}


def test_non_object_body_keeps_wrapper():
    obj = {"method": "GET", "url": "x", "data": "str"}
    assert unwrap_body(obj) is obj


def test_body_key_priority():
    obj = {"method": "PUT", "baseUrl": "x", "data": {"d": 1}, "body": {"b": 1}}
    assert unwrap_body(obj) == {"b": 1}


def test_non_objects_pass_through():
    assert unwrap_body([{"method": "POST", "url": "x", "data": {}}]) == [{"method": "POST", "url": "x", "data": {}}]
    assert unwrap_body(3) == 3
    assert unwrap_body(None) is None


def test_array_body_keeps_wrapper():
    obj = {"method": "POST", "url": "x", "data": [1, 2]}
    assert unwrap_body(obj) is obj
