"""
Tests for filters and filter sets
"""

import itertools
import logging

import pytest

from destination_logging.event import LogEvent
from destination_logging.filtering import (
    Comparator,
    Filter,
    FilterResult,
    Filters,
    FilterSet,
    TargetType,
)
from destination_logging.levels import LogLevel


def make_event(
    level=LogLevel.INFO,
    message="request finished",
    file="/app/api/views.py",
    function="handle_request",
):
    return LogEvent(
        level=level,
        message=message,
        thread="MainThread",
        file=file,
        function=function,
        line=10,
    )


def constant(value, required):
    return Filters.Path.custom(lambda _: value, required=required)


class TestFilterResult:
    def test_filter_result_creation(self):
        result = FilterResult(should_log=True, reason="test")
        assert result.should_log is True
        assert result.reason == "test"
        assert result.metadata == {}


class TestTextFilters:
    def test_starts_with_any_prefix(self):
        filter_obj = Filters.Path.starts_with("/lib", "/app")
        assert filter_obj.apply("/app/api/views.py") is True
        assert filter_obj.apply("/usr/app") is False

    def test_ends_with(self):
        filter_obj = Filters.Path.ends_with(".py")
        assert filter_obj.apply("/app/views.py") is True
        assert filter_obj.apply("/app/views.pyc") is False

    def test_contains(self):
        filter_obj = Filters.Message.contains("timeout", "refused")
        assert filter_obj.apply("connection refused by peer") is True
        assert filter_obj.apply("all good") is False

    def test_excludes_passes_when_none_contained(self):
        filter_obj = Filters.Message.excludes("secret", "token")
        assert filter_obj.apply("user logged in") is True
        assert filter_obj.apply("token expired") is False

    def test_equals(self):
        filter_obj = Filters.Function.equals("handle_request")
        assert filter_obj.apply("handle_request") is True
        assert filter_obj.apply("handle_request_v2") is False

    def test_case_insensitive_by_default(self):
        filter_obj = Filters.Message.contains("ERROR")
        assert filter_obj.apply("an error occurred") is True

    def test_case_sensitive(self):
        filter_obj = Filters.Message.contains("ERROR", case_sensitive=True)
        assert filter_obj.apply("an error occurred") is False
        assert filter_obj.apply("an ERROR occurred") is True

    def test_unresolved_value_never_passes(self):
        assert Filters.Message.excludes("x").apply(None) is False

    def test_requires_values(self):
        with pytest.raises(ValueError):
            Filters.Path.starts_with()

    def test_targets(self):
        assert Filters.Path.contains("a").target is TargetType.PATH
        assert Filters.Function.contains("a").target is TargetType.FUNCTION
        assert Filters.Message.contains("a").target is TargetType.MESSAGE
        assert Filters.Message.contains("a").comparator is Comparator.CONTAINS

    def test_value_of_selects_target_attribute(self):
        event = make_event()
        assert Filters.Path.contains("a").value_of(event) == event.file
        assert Filters.Function.contains("a").value_of(event) == event.function
        assert Filters.Message.contains("a").value_of(event) == event.message
        assert Filters.Level.at_least(LogLevel.INFO).value_of(event) is event.level


class TestLevelFilter:
    def test_at_least(self):
        filter_obj = Filters.Level.at_least(LogLevel.WARNING)
        assert filter_obj.apply(LogLevel.ERROR) is True
        assert filter_obj.apply(LogLevel.WARNING) is True
        assert filter_obj.apply(LogLevel.INFO) is False

    def test_level_filter_is_required_by_default(self):
        assert Filters.Level.at_least(LogLevel.INFO).required is True


class TestCustomFilter:
    def test_custom_filter_function(self):
        filter_obj = Filters.Function.custom(lambda name: name.startswith("test_"))
        assert filter_obj.apply("test_login") is True
        assert filter_obj.apply("login") is False

    def test_custom_filter_exception_handling(self, caplog):
        def failing(value):
            raise ValueError("Test error")

        filter_obj = Filters.Message.custom(failing)
        with caplog.at_level(logging.DEBUG, logger="destination_logging"):
            # Should default to logging on error
            assert filter_obj.apply("anything") is True
        assert "Test error" in caplog.text


class TestFilterIdentity:
    def test_equal_arguments_are_distinct_filters(self):
        first = Filters.Path.contains("api")
        second = Filters.Path.contains("api")
        assert first != second
        assert first.filter_id != second.filter_id

    def test_filter_is_immutable(self):
        filter_obj = Filters.Path.contains("api")
        with pytest.raises(AttributeError):
            filter_obj.required = True


class TestFilterSet:
    def setup_method(self):
        self.filters = FilterSet()

    def test_starts_empty_and_passes_everything(self):
        assert len(self.filters) == 0
        assert self.filters.should_log(make_event()) is True

    def test_second_level_filter_replaces_first(self):
        self.filters.add(Filters.Path.contains("api"))
        self.filters.add(Filters.Level.at_least(LogLevel.DEBUG))
        newest = Filters.Level.at_least(LogLevel.ERROR)
        self.filters.add(newest)

        level_filters = self.filters.targeting(TargetType.LEVEL)
        assert level_filters == (newest,)
        assert len(self.filters) == 2

    def test_remove_matches_exact_instance(self):
        first = Filters.Path.contains("api")
        second = Filters.Path.contains("api")
        self.filters.add(first)
        self.filters.add(second)

        self.filters.remove(first)

        assert self.filters.filters == (second,)

    def test_remove_absent_filter_is_noop(self):
        kept = Filters.Path.contains("api")
        self.filters.add(kept)
        self.filters.remove(Filters.Path.contains("api"))
        assert self.filters.filters == (kept,)

    def test_has_message_filters(self):
        assert self.filters.has_message_filters() is False
        self.filters.add(Filters.Message.contains("x"))
        assert self.filters.has_message_filters() is True

    def test_required_and_optional_combination(self):
        for r1, r2, n1, n2 in itertools.product([True, False], repeat=4):
            filters = FilterSet()
            filters.add(constant(r1, required=True))
            filters.add(constant(r2, required=True))
            filters.add(constant(n1, required=False))
            filters.add(constant(n2, required=False))

            expected = r1 and r2 and (n1 or n2)
            assert filters.should_log(make_event()) is expected, (r1, r2, n1, n2)

    def test_required_only(self):
        for r1, r2 in itertools.product([True, False], repeat=2):
            filters = FilterSet()
            filters.add(constant(r1, required=True))
            filters.add(constant(r2, required=True))
            assert filters.should_log(make_event()) is (r1 and r2)

    def test_optional_filters_are_alternatives(self):
        self.filters.add(Filters.Level.at_least(LogLevel.INFO))
        self.filters.add(Filters.Path.starts_with("/app/api"))
        self.filters.add(Filters.Function.equals("main"))

        assert self.filters.should_log(make_event()) is True
        assert self.filters.should_log(make_event(file="/app/web/x.py")) is False
        assert (
            self.filters.should_log(make_event(file="/app/web/x.py", function="main"))
            is True
        )
        assert self.filters.should_log(make_event(level=LogLevel.DEBUG)) is False

    def test_evaluate_reports_reason(self):
        level_filter = Filters.Level.at_least(LogLevel.ERROR)
        self.filters.add(level_filter)

        result = self.filters.evaluate(make_event())
        assert result.should_log is False
        assert result.reason.startswith("required_filter_failed")
        assert result.metadata["filter_id"] == level_filter.filter_id

        self.filters.clear()
        self.filters.add(Filters.Message.contains("nothing like this"))
        result = self.filters.evaluate(make_event())
        assert result.reason == "no_optional_filter_matched"

        self.filters.clear()
        assert self.filters.evaluate(make_event()).reason == "all_filters_passed"

    def test_metrics(self):
        filters = FilterSet(collect_metrics=True)
        filters.add(Filters.Level.at_least(LogLevel.WARNING))

        filters.should_log(make_event(level=LogLevel.ERROR))
        filters.should_log(make_event(level=LogLevel.INFO))
        filters.should_log(make_event(level=LogLevel.DEBUG))

        metrics = filters.get_metrics()
        assert metrics["summary"] == {
            "total_evaluated": 3,
            "passed_through": 1,
            "filtered_out": 2,
        }
        assert metrics["pass_rate"] == pytest.approx(1 / 3)

        filters.reset_metrics()
        assert filters.get_metrics()["summary"]["total_evaluated"] == 0

    def test_metrics_disabled(self):
        self.filters.should_log(make_event())
        assert self.filters.get_metrics()["summary"]["total_evaluated"] == 0

    def test_iteration_returns_snapshot(self):
        self.filters.add(Filters.Path.contains("a"))
        for filter_obj in self.filters:
            self.filters.add(Filters.Path.contains("b"))
            assert isinstance(filter_obj, Filter)
        assert len(self.filters) == 2
