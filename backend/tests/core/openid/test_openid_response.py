from steam_openid.core.openid import parse_check_authentication

NS = "http://specs.openid.net/auth/2.0"


def test_valid_response():
    result = parse_check_authentication(f"ns:{NS}\nis_valid:true\n", NS)

    assert result.namespace_ok
    assert result.is_valid
    assert result.fields == {"ns": NS, "is_valid": "true"}


def test_invalid_flag():
    result = parse_check_authentication(f"ns:{NS}\nis_valid:false\n", NS)

    assert result.namespace_ok
    assert not result.is_valid
    assert result.validity_line == "is_valid:false"


def test_validity_is_positional():
    # Line 1 decides, even if a later line says otherwise
    result = parse_check_authentication(f"ns:{NS}\nis_valid:false\nis_valid:true", NS)

    assert not result.is_valid


def test_invalidate_handle_is_kept_as_field():
    body = f"ns:{NS}\nis_valid:true\ninvalidate_handle:abc"

    result = parse_check_authentication(body, NS)

    assert result.is_valid
    assert result.fields["invalidate_handle"] == "abc"


def test_namespace_must_match_exactly():
    assert not parse_check_authentication(f"ns:{NS}/\nis_valid:true", NS).namespace_ok
    assert not parse_check_authentication(f" ns:{NS}\nis_valid:true", NS).namespace_ok
    assert not parse_check_authentication(f"ns:{NS}\r\nis_valid:true", NS).namespace_ok


def test_single_line_body_is_not_valid():
    result = parse_check_authentication(f"ns:{NS}", NS)

    assert result.namespace_ok
    assert not result.is_valid
    assert result.validity_line == ""


def test_empty_body():
    result = parse_check_authentication("", NS)

    assert not result.namespace_ok
    assert not result.is_valid
    assert result.fields == {}
