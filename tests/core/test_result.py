"""Tests for folio.core.result module."""

import errno

import pytest

from folio.core.errors import ResultDecodeError, ResultError
from folio.core.result import (
    Aggregate,
    Err,
    LocatedMessage,
    Message,
    Ok,
    Result,
    aggregate,
    aggregate_values,
    error,
    from_optional,
    located,
    partition_results,
    result_from_dict,
    succeeded,
    try_result,
)


class TestOk:
    """Test Ok class."""

    def test_valueless_ok(self):
        result = Ok()
        assert result.value is None
        assert result.is_ok() is True
        assert result.is_err() is False

    def test_value_carrying_ok(self):
        assert Ok(42).unwrap() == 42

    def test_unwrap_or(self):
        assert Ok(10).unwrap_or(99) == 10

    def test_map_chaining(self):
        result = Ok(3).map(lambda x: x * 2).map(lambda x: x + 1)
        assert result.unwrap() == 7

    def test_flat_map(self):
        def half(x: int) -> Result[int]:
            if x % 2 == 0:
                return Ok(x // 2)
            return error("odd number")

        assert Ok(4).flat_map(half).unwrap() == 2
        assert Ok(3).flat_map(half).is_err()

    def test_and_then_is_flat_map(self):
        assert Ok(10).and_then(lambda x: Ok(x + 5)).unwrap() == 15

    def test_map_err_no_op(self):
        assert Ok(42).map_err(lambda d: Message("new")) == Ok(42)

    def test_inspect(self):
        seen = []
        Ok(42).inspect(seen.append)
        assert seen == [42]

    def test_to_dict(self):
        assert Ok({"key": "value"}).to_dict() == {"ok": True, "value": {"key": "value"}}

    def test_ok_is_immutable(self):
        result = Ok(42)
        with pytest.raises(Exception):  # FrozenInstanceError or AttributeError
            result.value = 99


class TestErr:
    """Test Err class."""

    def test_string_shortcut_becomes_message(self):
        assert Err("bad input").error == Message("bad input")

    def test_rejects_non_detail(self):
        with pytest.raises(TypeError):
            Err(ValueError("nope"))

    def test_unwrap_raises_result_error(self):
        with pytest.raises(ResultError, match="bad input") as exc_info:
            Err("bad input").unwrap()
        assert exc_info.value.detail == Message("bad input")

    def test_unwrap_error_message_is_rendered_tree(self):
        result = aggregate([error("leaf")], "stage")
        with pytest.raises(ResultError) as exc_info:
            result.unwrap()
        assert exc_info.value.message == "stage:\n- leaf"

    def test_unwrap_or(self):
        assert Err("x").unwrap_or(99) == 99

    def test_unwrap_or_else_receives_detail(self):
        assert Err("x").unwrap_or_else(lambda d: d.text) == "x"

    def test_map_short_circuits(self):
        calls = []
        result = Err("x").map(lambda v: calls.append(v))
        assert result == Err("x")
        assert calls == []

    def test_map_err_transforms_detail(self):
        result = Err("x").map_err(lambda d: LocatedMessage(d.text, "a.md", 3))
        assert result.error == LocatedMessage("x", "a.md", 3)

    def test_or_else_recovers(self):
        assert Err("x").or_else(lambda d: Ok("backup")).unwrap() == "backup"

    def test_inspect_err(self):
        seen = []
        Err("x").inspect_err(seen.append)
        assert seen == [Message("x")]

    def test_pattern_matching(self):
        match Err(LocatedMessage("oops", "a.md", 2)):
            case Err(LocatedMessage(message, file, line)):
                assert (message, file, line) == ("oops", "a.md", 2)
            case _:
                pytest.fail("pattern did not match")


class TestDetails:
    def test_negative_line_rejected(self):
        with pytest.raises(ValueError):
            LocatedMessage("x", "a.md", -1)

    def test_is_code(self):
        assert LocatedMessage(errno.ENOENT, "a.md").is_code is True
        assert LocatedMessage("text", "a.md").is_code is False

    def test_from_os_error_keeps_errno(self):
        exc = FileNotFoundError(errno.ENOENT, "No such file or directory", "posts/x.md")
        detail = LocatedMessage.from_os_error(exc)
        assert detail == LocatedMessage(errno.ENOENT, "posts/x.md", 0)

    def test_aggregate_rejects_empty(self):
        with pytest.raises(ValueError):
            Aggregate("stage", ())

    def test_aggregate_rejects_success_children(self):
        with pytest.raises(ValueError):
            Aggregate("stage", (Ok(),))

    def test_aggregate_children_stored_as_tuple(self):
        detail = Aggregate("stage", [Err("a")])
        assert isinstance(detail.errors, tuple)

    def test_succeeded_count(self):
        assert Aggregate("stage", (Err("a"),), total=4).succeeded == 3
        assert Aggregate("stage", (Err("a"),)).succeeded is None


class TestSucceeded:
    def test_predicate(self):
        assert succeeded(Ok()) is True
        assert succeeded(Ok(1)) is True
        assert succeeded(Err("x")) is False

    def test_rejects_non_result(self):
        with pytest.raises(TypeError):
            succeeded("ok")


class TestAggregate:
    def test_all_success_returns_valueless_ok(self):
        assert aggregate([Ok(), Ok(1), Ok()], "stage") == Ok()

    def test_empty_returns_ok(self):
        assert aggregate([], "stage") == Ok()

    def test_failures_kept_in_order_successes_dropped(self):
        a, b = error("a"), located("b", "b.md", 4)
        result = aggregate([Ok(), a, Ok(), b], "stage")
        assert result == Err(Aggregate("stage", (a, b), total=4))
        assert result.error.errors == (a, b)

    def test_single_failure(self):
        failed = error("bad input")
        result = aggregate([Ok(), failed, Ok()], "stage A")
        assert result.error.label == "stage A"
        assert result.error.errors == (failed,)

    def test_nesting_is_not_flattened(self):
        inner = aggregate([error("leaf")], "inner")
        outer = aggregate([inner, Ok()], "outer")
        assert outer.error.errors == (inner,)
        assert outer.error.errors[0].error.label == "inner"

    def test_accepts_generators(self):
        result = aggregate((r for r in [error("x")]), "gen")
        assert len(result.error.errors) == 1

    def test_label_can_be_any_token(self):
        result = aggregate([error("x")], ("posts", 3))
        assert result.error.label == ("posts", 3)


class TestAggregateValues:
    def test_values_in_order(self):
        assert aggregate_values([Ok(3), Ok(1), Ok(2)], "stage") == Ok([3, 1, 2])

    def test_empty_returns_empty_list(self):
        assert aggregate_values([], "stage") == Ok([])

    def test_failure_path_matches_aggregate(self):
        results = [Ok(1), error("a"), Ok(2), error("b")]
        assert aggregate_values(results, "stage") == aggregate(results, "stage")


class TestConstructors:
    def test_try_result_success(self):
        assert try_result(lambda: 1 + 1) == Ok(2)

    def test_try_result_exception_becomes_message(self):
        result = try_result(lambda: int("x"))
        assert isinstance(result.error, Message)
        assert "invalid literal" in result.error.text

    def test_try_result_with_file_is_located(self):
        result = try_result(lambda: int("x"), file="a.md")
        assert isinstance(result.error, LocatedMessage)
        assert result.error.file == "a.md"

    def test_try_result_os_error_keeps_code(self, tmp_path):
        missing = tmp_path / "missing.md"
        result = try_result(missing.read_text)
        assert result.error == LocatedMessage(errno.ENOENT, str(missing), 0)

    def test_from_optional(self):
        assert from_optional(5, "missing") == Ok(5)
        assert from_optional(None, "missing") == Err("missing")

    def test_partition_results(self):
        values, errors = partition_results([Ok(1), error("a"), Ok(2)])
        assert values == [1, 2]
        assert errors == [Message("a")]


class TestSerialization:
    def test_nested_failure_survives_round_trip(self, nested_failure):
        assert result_from_dict(nested_failure.to_dict()) == nested_failure

    def test_located_payload(self):
        payload = located(errno.EACCES, "a.md", 7).to_dict()
        assert payload == {
            "ok": False,
            "error": {"type": "located", "message": errno.EACCES, "file": "a.md", "line": 7},
        }

    def test_aggregate_payload_includes_total(self):
        payload = aggregate([Ok(), error("x")], "stage").to_dict()
        assert payload["error"]["total"] == 2
        assert payload["error"]["label"] == "stage"

    @pytest.mark.parametrize(
        "payload",
        [
            [],
            {"value": 1},
            {"ok": "yes"},
            {"ok": False},
            {"ok": False, "error": {"type": "mystery"}},
            {"ok": False, "error": {"type": "message"}},
            {"ok": False, "error": {"type": "located", "message": True, "file": "a"}},
            {"ok": False, "error": {"type": "aggregate", "label": "x", "errors": []}},
            {"ok": False, "error": {"type": "aggregate", "label": "x", "errors": [{"ok": True}]}},
        ],
    )
    def test_malformed_payloads(self, payload):
        with pytest.raises(ResultDecodeError):
            result_from_dict(payload)
