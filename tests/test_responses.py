import pytest

from jira_client.responses import ErrorEnvelope, IssueResult, extract_envelope, parse_response


def test_issue_needs_both_id_and_key():
    assert isinstance(parse_response({"id": "1", "key": "PROJ-1"}), IssueResult)
    assert isinstance(parse_response({"id": "1"}), ErrorEnvelope)
    assert isinstance(parse_response({"key": "PROJ-1", "id": None}), ErrorEnvelope)


@pytest.mark.parametrize("payload", [None, [], "text", 3, [{"id": "1", "key": "PROJ-1"}]])
def test_non_mapping_payloads_carry_no_errors(payload):
    parsed = parse_response(payload)

    assert isinstance(parsed, ErrorEnvelope)
    assert parsed.present is False
    assert parsed.collection() == []


def test_collection_orders_messages_before_field_errors():
    envelope = parse_response(
        {"errorMessages": ["bad", "worse"], "errors": {"summary": "required", "project": "bad"}}
    )

    assert envelope.collection() == ["bad", "worse", "required", "bad"]


def test_wrongly_shaped_keys_are_present_but_contribute_nothing():
    envelope = parse_response({"errorMessages": "not a list", "errors": ["not", "a", "map"]})

    assert envelope.present is True
    assert envelope.collection() == []


def test_only_errors_key():
    envelope = parse_response({"errors": {"summary": "required"}})

    assert envelope.error_messages == ()
    assert envelope.collection() == ["required"]


def test_null_error_keys_count_as_absent():
    envelope = parse_response({"errorMessages": None, "errors": None})

    assert envelope.present is False


def test_extract_envelope_reads_issue_shaped_payloads():
    payload = {"id": "1", "key": "PROJ-1", "errors": {"labels": "ignored"}}

    assert isinstance(parse_response(payload), IssueResult)
    assert extract_envelope(payload).collection() == ["ignored"]


def test_issue_result_accessors():
    issue = parse_response({"id": "10001", "key": "PROJ-1"})

    assert issue.id == "10001"
    assert issue.key == "PROJ-1"
