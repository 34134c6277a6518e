"""Pruebas del extractor heurístico de identificadores."""

import pytest

from leadlookup.services.extraction import (
    RULES,
    OutboundIds,
    _rule,
    extract_outbound_ids,
)


def _participant(**attributes: str) -> dict:
    return {"purpose": "customer", "attributes": attributes}


def test_extracts_ids_from_participant_attributes() -> None:
    conversation = {
        "participants": [
            {"purpose": "agent"},
            _participant(outboundContactId="C1", outboundContactListId="L1"),
        ]
    }

    assert extract_outbound_ids(conversation) == OutboundIds("C1", "L1")


def test_empty_conversation_yields_absent_ids() -> None:
    ids = extract_outbound_ids({})

    assert ids == OutboundIds(None, None)
    assert not ids.complete


@pytest.mark.parametrize(
    "conversation",
    [
        None,
        {"participants": None, "attributes": None},
        {"participants": "oops", "attributes": ["x"]},
        {"participants": [None, 3, {"attributes": "nope"}]},
    ],
)
def test_malformed_payloads_never_raise(conversation) -> None:
    assert extract_outbound_ids(conversation) == OutboundIds()


@pytest.mark.parametrize("key", ["ContactId", "CONTACTID", "contactid", "outboundContactId"])
def test_contact_id_key_spellings_match(key: str) -> None:
    ids = extract_outbound_ids({"participants": [_participant(**{key: "C9"})]})

    assert ids.contact_id == "C9"


@pytest.mark.parametrize(
    "key", ["contactlistid", "OutboundContactListId", "dialerContactListId", "outbound.contactlist"]
)
def test_contact_list_id_key_spellings_match(key: str) -> None:
    ids = extract_outbound_ids({"participants": [_participant(**{key: "L9"})]})

    assert ids.contact_list_id == "L9"


def test_participant_pass_requires_exact_contact_id_key() -> None:
    conversation = {"participants": [_participant(dialerContactId="C1")]}

    assert extract_outbound_ids(conversation).contact_id is None


def test_participant_values_win_over_top_level_attributes() -> None:
    conversation = {
        "participants": [_participant(outboundContactId="P-C", outboundContactListId="P-L")],
        "attributes": {"contactId": "T-C", "contactListId": "T-L"},
    }

    assert extract_outbound_ids(conversation) == OutboundIds("P-C", "P-L")


def test_top_level_attributes_fill_missing_fields() -> None:
    conversation = {
        "participants": [_participant(contactListId="P-L")],
        "attributes": {"crm.contactId": "T-C", "contactListId": "T-L"},
    }

    assert extract_outbound_ids(conversation) == OutboundIds("T-C", "P-L")


def test_top_level_contact_list_matches_loose_key() -> None:
    conversation = {"attributes": {"ContactId": "C1", "campaign_contactlist": "L1"}}

    assert extract_outbound_ids(conversation) == OutboundIds("C1", "L1")


def test_first_match_in_iteration_order_wins() -> None:
    conversation = {
        "participants": [
            _participant(outboundContactId="first", contactId="second"),
            _participant(outboundContactId="third"),
        ]
    }

    assert extract_outbound_ids(conversation).contact_id == "first"


def test_empty_values_are_skipped() -> None:
    conversation = {
        "participants": [
            _participant(outboundContactId="", outboundContactListId=""),
            _participant(outboundContactId="C2", outboundContactListId="L2"),
        ]
    }

    assert extract_outbound_ids(conversation) == OutboundIds("C2", "L2")


def test_extraction_is_deterministic() -> None:
    conversation = {
        "participants": [_participant(outboundContactId="C1", someContactListId="L1")],
        "attributes": {"contactId": "X"},
    }

    results = {extract_outbound_ids(conversation) for _ in range(10)}

    assert results == {OutboundIds("C1", "L1")}


def test_extra_rules_can_be_added_without_changing_control_flow() -> None:
    rules = RULES + (_rule("participants", "contact_id", r"^dialer_record$"),)
    conversation = {"participants": [_participant(dialer_record="C7", contactListId="L7")]}

    assert extract_outbound_ids(conversation) == OutboundIds(None, "L7")
    assert extract_outbound_ids(conversation, rules=rules) == OutboundIds("C7", "L7")
