"""Unit tests for check-in service."""
import threading
import time
from concurrent.futures import ThreadPoolExecutor
from datetime import datetime, timezone

import pytest
from gspread.utils import a1_to_rowcol

from guestlist.core.exceptions import BackendError, SchemaError
from guestlist.core.locks import KeyedLock
from guestlist.services.checkin import (
    CheckinOutcome,
    attempt_check_in,
    cell_address,
    check_in,
    column_letter,
)
from guestlist.services.locator import locate
from guestlist.services.schema import resolve
from guestlist.sheets.base import InputMode
from tests.utils import FakeTableStore

SCENARIO_GRID = [
    ["id", "email", "checked"],
    ["42", "a@x.com", ""],
    ["7", "b@x.com", "true"],
]


@pytest.mark.unit
class TestColumnLetter:
    """Test zero-based column index to A1 letters."""

    @pytest.mark.parametrize(
        "index,letters",
        [(0, "A"), (1, "B"), (25, "Z"), (26, "AA"), (27, "AB"), (51, "AZ"), (52, "BA"), (701, "ZZ"), (702, "AAA")],
    )
    def test_known_values(self, index, letters):
        assert column_letter(index) == letters

    def test_distinct_for_every_index(self):
        seen = {column_letter(i) for i in range(2000)}
        assert len(seen) == 2000

    def test_negative_index_rejected(self):
        with pytest.raises(ValueError):
            column_letter(-1)

    def test_cell_address(self):
        assert cell_address(2, 5) == "C5"
        assert cell_address(26, 10) == "AA10"

    def test_cell_address_matches_gspread_decoding(self):
        for column in (0, 5, 25, 26, 701, 702):
            assert a1_to_rowcol(cell_address(column, 7)) == (7, column + 1)

    def test_cell_address_negative_column_rejected(self):
        with pytest.raises(ValueError):
            cell_address(-1, 2)


@pytest.mark.unit
class TestCheckIn:
    """Test the decision and writes for a located record."""

    def test_applies_flag_and_timestamp(self):
        store = FakeTableStore([
            ["id", "email", "username", "teamname", "tshirt", "checked", "checked_at"],
            ["42", "a@x.com", "ana", "Rockets", "M", "", ""],
        ])
        table = resolve(store.read_table())
        record = locate(table.data_rows, table.column_map, "42")
        now = datetime(2025, 1, 31, 18, 4, 5, 123000, tzinfo=timezone.utc)

        result = check_in(store, record, table.column_map, now=now)

        assert result.outcome is CheckinOutcome.APPLIED
        assert result.applied
        assert result.row_number == 2
        assert result.profile == {
            "email": "a@x.com",
            "username": "ana",
            "team_name": "Rockets",
            "tshirt": "M",
        }
        assert store.writes == [
            ("F2", True, InputMode.USER_ENTERED),
            ("G2", "2025-01-31T18:04:05.123Z", InputMode.RAW),
        ]

    def test_already_checked_writes_nothing(self):
        store = FakeTableStore(SCENARIO_GRID)
        table = resolve(store.read_table())
        record = locate(table.data_rows, table.column_map, "7")

        result = check_in(store, record, table.column_map)

        assert result.outcome is CheckinOutcome.ALREADY_CHECKED
        assert result.profile == {}
        assert store.writes == []

    def test_none_record_is_not_found(self):
        store = FakeTableStore(SCENARIO_GRID)
        table = resolve(store.read_table())

        result = check_in(store, None, table.column_map)

        assert result.outcome is CheckinOutcome.NOT_FOUND
        assert store.writes == []

    def test_missing_checked_column_raises(self):
        store = FakeTableStore([["id", "email"], ["42", "a@x.com"]])
        table = resolve(store.read_table())
        record = locate(table.data_rows, table.column_map, "42")

        with pytest.raises(SchemaError, match="checked column missing"):
            check_in(store, record, table.column_map)
        assert store.writes == []

    def test_missing_checked_at_column_is_skipped(self):
        store = FakeTableStore(SCENARIO_GRID)
        table = resolve(store.read_table())
        record = locate(table.data_rows, table.column_map, "42")

        result = check_in(store, record, table.column_map)

        assert result.applied
        assert store.writes == [("C2", True, InputMode.USER_ENTERED)]

    def test_timestamp_write_failure_keeps_flag(self):
        store = FakeTableStore(
            [["id", "checked", "checked_at"], ["42", "", ""]],
            fail_writes_to=("C2",),
        )
        table = resolve(store.read_table())
        record = locate(table.data_rows, table.column_map, "42")

        with pytest.raises(BackendError):
            check_in(store, record, table.column_map)

        # Degraded but valid: checked in without a timestamp
        assert store.cell("B2") == "TRUE"
        assert store.cell("C2") == ""

    def test_flag_write_failure_writes_nothing(self):
        store = FakeTableStore(
            [["id", "checked", "checked_at"], ["42", "", ""]],
            fail_writes_to=("B2",),
        )
        table = resolve(store.read_table())
        record = locate(table.data_rows, table.column_map, "42")

        with pytest.raises(BackendError):
            check_in(store, record, table.column_map)
        assert store.writes == []

    def test_default_timestamp_is_current_utc(self):
        store = FakeTableStore([["id", "checked", "checked_at"], ["42", "", ""]])
        table = resolve(store.read_table())
        record = locate(table.data_rows, table.column_map, "42")

        before = datetime.now(timezone.utc)
        check_in(store, record, table.column_map)
        after = datetime.now(timezone.utc)

        written = store.cell("C2")
        assert written.endswith("Z")
        stamp = datetime.fromisoformat(written.replace("Z", "+00:00"))
        assert before.replace(microsecond=before.microsecond // 1000 * 1000) <= stamp <= after


@pytest.mark.unit
class TestAttemptCheckIn:
    """Test the full read, resolve, locate, write sequence."""

    def test_scenario(self):
        store = FakeTableStore(SCENARIO_GRID)

        applied = attempt_check_in(store, "42")
        assert applied.outcome is CheckinOutcome.APPLIED
        assert applied.profile["email"] == "a@x.com"
        assert store.writes == [("C2", True, InputMode.USER_ENTERED)]

        already = attempt_check_in(store, "7")
        assert already.outcome is CheckinOutcome.ALREADY_CHECKED

        missing = attempt_check_in(store, "99")
        assert missing.outcome is CheckinOutcome.NOT_FOUND

        assert len(store.writes) == 1

    def test_second_attempt_is_already_checked(self):
        store = FakeTableStore(SCENARIO_GRID)

        first = attempt_check_in(store, "42")
        second = attempt_check_in(store, "42")

        assert first.outcome is CheckinOutcome.APPLIED
        assert second.outcome is CheckinOutcome.ALREADY_CHECKED
        assert len(store.writes) == 1

    def test_every_attempt_reads_fresh(self):
        store = FakeTableStore(SCENARIO_GRID)
        attempt_check_in(store, "99")
        attempt_check_in(store, "99")
        assert store.reads == 2

    def test_identifier_is_trimmed(self):
        store = FakeTableStore(SCENARIO_GRID)
        assert attempt_check_in(store, " 42 ").applied

    def test_empty_sheet_is_not_found(self):
        store = FakeTableStore([])
        result = attempt_check_in(store, "42")
        assert result.outcome is CheckinOutcome.NOT_FOUND
        assert store.writes == []

    def test_missing_id_header_raises(self):
        store = FakeTableStore([["email", "checked"], ["42", ""]])
        with pytest.raises(SchemaError):
            attempt_check_in(store, "42")

    def test_read_failure_propagates(self):
        store = FakeTableStore(SCENARIO_GRID, fail_reads=True)
        with pytest.raises(BackendError):
            attempt_check_in(store, "42")

    def test_serialized_attempts_apply_once(self):
        """Concurrent attempts for one identifier apply exactly once when locked."""
        store = FakeTableStore(SCENARIO_GRID, on_read=lambda: time.sleep(0.05))
        locks = KeyedLock()

        with ThreadPoolExecutor(max_workers=4) as pool:
            results = list(pool.map(lambda _: attempt_check_in(store, "42", locks=locks), range(4)))

        outcomes = sorted(r.outcome.value for r in results)
        assert outcomes.count(CheckinOutcome.APPLIED.value) == 1
        assert outcomes.count(CheckinOutcome.ALREADY_CHECKED.value) == 3
        assert len(store.writes) == 1
        assert len(locks) == 0

    def test_unserialized_attempts_can_both_apply(self):
        """Without the lock both readers see 'not checked' and both write."""
        barrier = threading.Barrier(2, timeout=5)
        store = FakeTableStore(SCENARIO_GRID, on_read=barrier.wait)

        with ThreadPoolExecutor(max_workers=2) as pool:
            results = list(pool.map(lambda _: attempt_check_in(store, "42"), range(2)))

        assert all(r.applied for r in results)
        assert len(store.writes) == 2

    def test_different_identifiers_do_not_block(self):
        store = FakeTableStore(
            [["id", "checked"], ["1", ""], ["2", ""]],
        )
        locks = KeyedLock()

        with ThreadPoolExecutor(max_workers=2) as pool:
            results = list(pool.map(lambda i: attempt_check_in(store, i, locks=locks), ["1", "2"]))

        assert all(r.applied for r in results)
        assert sorted(w[0] for w in store.writes) == ["B2", "B3"]
