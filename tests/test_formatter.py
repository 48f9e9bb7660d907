import json
import logging
import re

from destination_logging.event import LogEvent
from destination_logging.formatter import (
    DEFAULT_FORMAT,
    PatternFormatter,
    file_name,
    file_name_without_suffix,
    json_message,
)
from destination_logging.levels import LevelColor, LevelString, LogLevel


def make_event(level=LogLevel.INFO, message="boom"):
    return LogEvent(
        level=level,
        message=message,
        thread="worker-1",
        file="/a/b/Foo.swift",
        function="bar",
        line=42,
    )


class TestPatternFormatter:
    def setup_method(self):
        self.formatter = PatternFormatter()

    def test_level_and_message(self):
        event = make_event(level=LogLevel.ERROR)
        assert self.formatter.render("$L: $M", event) == "ERROR: boom"

    def test_file_function_line(self):
        assert self.formatter.render("$N.$F:$l", make_event()) == "Foo.bar:42"

    def test_file_name_with_suffix_and_thread(self):
        assert self.formatter.render("$n [$T]", make_event()) == "Foo.swift [worker-1]"

    def test_json_message_token(self):
        event = make_event(message='say "hi"\n\tnow')
        rendered = self.formatter.render('{"msg":"$m"}', event)

        assert rendered == '{"msg":"say \\"hi\\"\\n\\tnow"}'
        assert json.loads(rendered)["msg"] == event.message

    def test_date_token_consumes_until_next_dollar(self):
        rendered = self.formatter.render("$Dyyyy-MM-dd$d done", make_event())
        assert re.fullmatch(r"\d{4}-\d{2}-\d{2} done", rendered)

    def test_default_format(self):
        rendered = self.formatter.render(DEFAULT_FORMAT, make_event())
        assert re.fullmatch(
            r"\d{4}-\d{2}-\d{2} \d{2}:\d{2}:\d{2}\.\d{3} Foo\.bar:42 INFO: boom",
            rendered,
        )

    def test_colour_tokens(self):
        formatter = PatternFormatter(
            level_color=LevelColor.ansi(), escape="<esc>", reset="<reset>"
        )
        rendered = formatter.render("$C$L$c $M", make_event(level=LogLevel.ERROR))
        assert rendered == "<esc>197mERROR<reset> boom"

    def test_colour_tokens_empty_by_default(self):
        assert self.formatter.render("$C$L$c", make_event()) == "INFO"

    def test_custom_level_words(self):
        formatter = PatternFormatter(level_string=LevelString(warning="WARN"))
        assert formatter.render("$L", make_event(level=LogLevel.WARNING)) == "WARN"

    def test_rendered_level_word_round_trip(self):
        words = LevelString(debug="dbg", info="inf")
        formatter = PatternFormatter(pattern="$L", level_string=words)
        for level in LogLevel:
            rendered = formatter.format_event(make_event(level=level))
            assert words.parse(rendered) is level

    def test_unknown_tokens_are_verbatim(self):
        assert self.formatter.render("$Xyz $M", make_event()) == "Xyz boom"

    def test_empty_phrases_are_skipped(self):
        assert self.formatter.render("$$L$$", make_event()) == "INFO"
        assert self.formatter.render("", make_event()) == ""

    def test_leading_literal_without_token(self):
        assert self.formatter.render("> $M", make_event()) == "> boom"

    def test_format_event_uses_own_pattern(self):
        formatter = PatternFormatter(pattern="[$L] $M")
        assert formatter.format_event(make_event()) == "[INFO] boom"

    def test_stdlib_format(self):
        formatter = PatternFormatter(pattern="$L|$M|$F|$n")
        record = logging.LogRecord(
            name="test_logger",
            level=logging.WARNING,
            pathname="/srv/app/views.py",
            lineno=3,
            msg="hi %s",
            args=("there",),
            exc_info=None,
            func="handler",
        )
        assert formatter.format(record) == "WARNING|hi there|handler|views.py"


def test_file_name_helpers():
    assert file_name("/a/b/Foo.swift") == "Foo.swift"
    assert file_name("Foo.swift") == "Foo.swift"
    assert file_name("") == ""
    assert file_name_without_suffix("/a/b/Foo.test.swift") == "Foo"
    assert file_name_without_suffix("/a/b/") == ""


def test_json_message_escapes_value_only():
    assert json_message("plain") == "plain"
    assert json_message('a"b') == 'a\\"b'
    assert json_message("line\nbreak") == "line\\nbreak"
    assert json_message("back\\slash") == "back\\\\slash"
    assert json_message("ünïcode") == "ünïcode"


def test_json_message_unencodable_value_is_empty():
    assert json_message(object()) == ""
