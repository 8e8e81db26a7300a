"""
Unit tests for holder records, block tags and holder query construction.
"""

import pytest
import sys
from pathlib import Path

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from synthetix_votes.core.models import HolderRecord, ScoreResult, normalize_block_tag


class TestHolderRecord:

    @pytest.mark.unit
    def test_from_subgraph_row(self, make_holder_row, alice):
        record = HolderRecord.from_dict(make_holder_row(alice, 2 * 10 ** 26, 10 ** 27))

        assert record.id == alice.lower()
        assert record.initial_debt_ownership == 2 * 10 ** 26
        assert record.debt_entry_at_index == 10 ** 27

    @pytest.mark.unit
    def test_mixed_case_id_lowered(self, alice):
        record = HolderRecord.from_dict({"id": alice, "initialDebtOwnership": 1, "debtEntryAtIndex": 2})

        assert record.id == alice.lower()

    @pytest.mark.unit
    def test_missing_field_raises(self, alice):
        with pytest.raises(KeyError):
            HolderRecord.from_dict({"id": alice, "initialDebtOwnership": "1"})

    @pytest.mark.unit
    def test_null_debt_fields_read_as_zero(self, alice):
        record = HolderRecord.from_dict(
            {"id": alice, "initialDebtOwnership": None, "debtEntryAtIndex": None}
        )

        assert record.initial_debt_ownership == 0
        assert record.debt_entry_at_index == 0

    @pytest.mark.unit
    def test_to_dict_uses_subgraph_names(self, make_holder_row, alice):
        row = make_holder_row(alice, 5, 7)

        assert HolderRecord.from_dict(row).to_dict() == row


class TestBlockTag:

    @pytest.mark.unit
    @pytest.mark.parametrize("snapshot,expected", [
        (13000000, 13000000),
        ("latest", "latest"),
        ("13000000", "latest"),
        (None, "latest"),
        (True, "latest"),
    ])
    def test_normalize(self, snapshot, expected):
        assert normalize_block_tag(snapshot) == expected


class TestScoreResult:

    @pytest.mark.unit
    def test_empty_result(self):
        result = ScoreResult()

        assert result.scores == {}
        assert result.to_dict()["any_rate_invalid"] is False


class TestBuildHoldersQuery:
    """Tests for the GraphQL request body."""

    @pytest.mark.unit
    @pytest.mark.fetcher
    def test_ids_lowercased_and_deduplicated(self, alice, bob):
        from synthetix_votes.fetchers.subgraph import build_holders_query

        body = build_holders_query([alice, alice.lower(), alice.upper().replace("0X", "0x"), bob], 100)

        assert body["variables"]["ids"] == [alice.lower(), bob.lower()]

    @pytest.mark.unit
    @pytest.mark.fetcher
    def test_block_number_included(self, alice):
        from synthetix_votes.fetchers.subgraph import build_holders_query

        body = build_holders_query([alice], 1770186)

        assert body["variables"]["block"] == 1770186
        assert "block: { number: $block }" in body["query"]

    @pytest.mark.unit
    @pytest.mark.fetcher
    def test_latest_omits_block(self, alice):
        from synthetix_votes.fetchers.subgraph import build_holders_query

        body = build_holders_query([alice], "latest")

        assert "block" not in body["variables"]
        assert "$block" not in body["query"]

    @pytest.mark.unit
    @pytest.mark.fetcher
    def test_first_capped_at_1000(self, alice):
        from synthetix_votes.fetchers.subgraph import build_holders_query

        assert build_holders_query([alice], "latest")["variables"]["first"] == 1000
        assert build_holders_query([alice], "latest", first=5000)["variables"]["first"] == 1000
        assert build_holders_query([alice], "latest", first=10)["variables"]["first"] == 10


class TestParseHolders:
    """Tests for permissive / strict response parsing."""

    @pytest.mark.unit
    @pytest.mark.fetcher
    def test_valid_payload(self, make_holder_row, alice):
        from synthetix_votes.fetchers.subgraph import parse_holders

        holders = parse_holders({"data": {"snxholders": [make_holder_row(alice, 1, 2)]}})

        assert [h.id for h in holders] == [alice.lower()]

    @pytest.mark.unit
    @pytest.mark.fetcher
    @pytest.mark.parametrize("payload", [
        None,
        [],
        {},
        {"data": None},
        {"data": {"snxholders": None}},
        {"data": {"snxholders": "oops"}},
        {"errors": [{"message": "indexing error"}]},
        {"data": {"snxholders": [{"id": "0xabc"}]}},
    ])
    def test_malformed_payload_gives_no_holders(self, payload):
        from synthetix_votes.fetchers.subgraph import parse_holders

        assert parse_holders(payload) == []

    @pytest.mark.unit
    @pytest.mark.fetcher
    @pytest.mark.parametrize("payload", [
        {},
        {"errors": [{"message": "indexing error"}]},
        {"data": {"snxholders": [{"id": "0xabc"}]}},
    ])
    def test_malformed_payload_strict_raises(self, payload):
        from synthetix_votes.core.exceptions import MalformedResponseError
        from synthetix_votes.fetchers.subgraph import parse_holders

        with pytest.raises(MalformedResponseError):
            parse_holders(payload, endpoint="https://graph.test", strict=True)

    @pytest.mark.unit
    @pytest.mark.fetcher
    def test_null_row_keeps_other_holders(self, make_holder_row, alice, bob):
        from synthetix_votes.fetchers.subgraph import parse_holders

        payload = {"data": {"snxholders": [
            make_holder_row(alice, 2 * 10 ** 26, 10 ** 27),
            {"id": bob.lower(), "initialDebtOwnership": None, "debtEntryAtIndex": None},
        ]}}

        holders = parse_holders(payload)

        assert [h.id for h in holders] == [alice.lower(), bob.lower()]
        assert holders[1].initial_debt_ownership == 0

    @pytest.mark.unit
    @pytest.mark.fetcher
    def test_unreadable_row_skipped_alone(self, make_holder_row, alice, bob, caplog):
        from synthetix_votes.fetchers.subgraph import parse_holders

        payload = {"data": {"snxholders": [
            {"id": bob.lower(), "initialDebtOwnership": "not a number", "debtEntryAtIndex": "1"},
            make_holder_row(alice, 1, 2),
        ]}}

        with caplog.at_level("WARNING"):
            holders = parse_holders(payload, endpoint="https://graph.test")

        assert [h.id for h in holders] == [alice.lower()]
        assert "Unreadable holder row" in caplog.text

    @pytest.mark.unit
    @pytest.mark.fetcher
    def test_unreadable_row_strict_raises(self, make_holder_row, alice, bob):
        from synthetix_votes.core.exceptions import MalformedResponseError
        from synthetix_votes.fetchers.subgraph import parse_holders

        payload = {"data": {"snxholders": [
            make_holder_row(alice, 1, 2),
            {"id": bob.lower(), "initialDebtOwnership": "1"},
        ]}}

        with pytest.raises(MalformedResponseError) as exc_info:
            parse_holders(payload, endpoint="https://graph.test", strict=True)

        assert isinstance(exc_info.value.original_error, KeyError)
