import logging
from unittest.mock import MagicMock

import pytest
from verboselogs import VerboseLogger

from regex_parser.errors import MissingRequiredOption, OptionError, PatternCompileFailure
from regex_parser.helpers import init_logger
from regex_parser.models import LogMessage
from regex_parser.parsing.parsers.regex_parser import (
    LOGGEN_EXPR,
    REGEX_OPTION,
    RegexParser,
    RegexParserBuilder,
)
from regex_parser.parsing.pattern import CompiledPattern

LOGGEN_LINE = "seq: 0000000000, thread: 0000, runid: 1456947132, stamp: 2016-03-02T20:32:12 PAD"


def _build(pattern: str) -> RegexParser:
    builder = RegexParserBuilder(logger=init_logger("test_regex_parser", "INFO"))
    builder.option(REGEX_OPTION, pattern)
    return builder.build()


def _capturing_logger(caplog) -> VerboseLogger:
    logger = VerboseLogger("test_regex_parser.diagnostics")
    logger.setLevel(logging.DEBUG)
    logger.propagate = False
    logger.addHandler(caplog.handler)
    return logger


def test_loggen_line_is_split_into_fields():
    parser = _build(LOGGEN_EXPR)
    msg = LogMessage()
    assert parser.parse(msg, LOGGEN_LINE) is True
    assert msg.fields == {
        "seq": "0000000000",
        "thread": "0000",
        "runid": "1456947132",
        "stamp": "2016-03-02T20:32:12",
        "padding": "PAD",
    }


def test_non_matching_input_leaves_record_untouched():
    parser = _build(LOGGEN_EXPR)
    msg = LogMessage(fields={"MESSAGE": "garbage", "HOST": "localhost"})
    before = dict(msg.fields)
    assert parser.parse(msg, "garbage") is False
    assert msg.fields == before


def test_build_without_options_names_regex():
    builder = RegexParserBuilder(logger=MagicMock())
    with pytest.raises(MissingRequiredOption) as excinfo:
        builder.build()
    assert excinfo.value.option_name == "regex"
    assert "'regex'" in str(excinfo.value)
    assert isinstance(excinfo.value, OptionError)


def test_invalid_pattern_is_logged_not_raised(caplog):
    builder = RegexParserBuilder(logger=_capturing_logger(caplog))
    builder.option(REGEX_OPTION, "[")

    with pytest.raises(PatternCompileFailure) as excinfo:
        CompiledPattern.compile("[")
    assert "Trying to compile regular expression: '['" in caplog.messages
    errors = [r.getMessage() for r in caplog.records if r.levelno == logging.ERROR]
    assert errors == [str(excinfo.value)]
    with pytest.raises(MissingRequiredOption):
        builder.build()


def test_invalid_pattern_keeps_previous_one():
    builder = RegexParserBuilder(logger=MagicMock())
    builder.option(REGEX_OPTION, r"(?P<word>\w+)")
    builder.option(REGEX_OPTION, "(?P<broken>")
    parser = builder.build()
    assert parser.pattern.source == r"(?P<word>\w+)"
    msg = LogMessage()
    assert parser.parse(msg, "hello world")
    assert msg.fields == {"word": "hello"}


def test_last_valid_pattern_wins():
    builder = RegexParserBuilder(logger=MagicMock())
    builder.option(REGEX_OPTION, r"(?P<first>a)")
    builder.option(REGEX_OPTION, r"(?P<second>b)")
    parser = builder.build()
    assert parser.pattern.group_names == ("second",)


def test_unknown_options_are_ignored():
    builder = RegexParserBuilder(logger=MagicMock())
    builder.option("flags", "ignore-case")
    builder.option(REGEX_OPTION, r"(?P<n>\d+)")
    builder.option("template", "$n")
    parser = builder.build()
    assert parser.pattern.source == r"(?P<n>\d+)"


def test_builder_is_single_use():
    builder = RegexParserBuilder(logger=MagicMock())
    builder.option(REGEX_OPTION, "x")
    builder.build()
    with pytest.raises(RuntimeError):
        builder.build()


def test_non_participating_group_is_not_written():
    parser = _build(r"(?P<a>x)|(?P<b>y)")
    msg = LogMessage()
    assert parser.parse(msg, "x")
    assert msg.fields == {"a": "x"}
    assert "b" not in msg


def test_empty_capture_is_still_written():
    parser = _build(r"key=(?P<value>\w*);")
    msg = LogMessage()
    assert parser.parse(msg, "key=;")
    assert msg.fields == {"value": ""}


def test_values_are_verbatim():
    parser = _build(r"^(?P<head>.*?)\|(?P<tail>.*)$")
    msg = LogMessage()
    assert parser.parse(msg, "  Mixed Case  |\tTAB ")
    assert msg["head"] == "  Mixed Case  "
    assert msg["tail"] == "\tTAB "


def test_existing_fields_are_overwritten():
    parser = _build(r"user=(?P<user>\w+)")
    msg = LogMessage(fields={"user": "old", "other": "kept"})
    assert parser.parse(msg, "login user=alice")
    assert msg.fields == {"user": "alice", "other": "kept"}


def test_calls_do_not_share_state():
    parser = _build(r"(?P<a>a+)|(?P<b>b+)")
    first, second = LogMessage(), LogMessage()
    assert parser.parse(first, "aaa")
    assert parser.parse(second, "bb")
    assert first.fields == {"a": "aaa"}
    assert second.fields == {"b": "bb"}


def test_pattern_without_named_groups_matches_without_writes():
    parser = _build(r"\d+")
    msg = LogMessage()
    assert parser.parse(msg, "abc 123")
    assert len(msg) == 0


def test_match_is_searched_anywhere_in_line():
    parser = _build(r"pid=(?P<pid>\d+)")
    msg = LogMessage()
    assert parser.parse(msg, "sshd[1]: started pid=4242 ok")
    assert msg["pid"] == "4242"


def test_nested_backtracking_pattern_stays_linear():
    parser = _build(r"^(?P<run>(a+)+)$")
    msg = LogMessage()
    assert parser.parse(msg, "a" * 64 + "b") is False
    assert len(msg) == 0


def test_backreferences_are_rejected(caplog):
    builder = RegexParserBuilder(logger=_capturing_logger(caplog))
    builder.option(REGEX_OPTION, r"(?P<a>a)\1")
    assert any(r.levelno == logging.ERROR for r in caplog.records)
    with pytest.raises(MissingRequiredOption):
        builder.build()


def test_word_class_keeps_non_ascii_letters():
    parser = _build(r"user=(?P<user>\w+)")
    msg = LogMessage()
    assert parser.parse(msg, "user=José logged in")
    assert msg["user"] == "José"

    msg = LogMessage()
    assert _build(r"(?P<word>\w+)").parse(msg, "日本z")
    assert msg["word"] == "日本z"


def test_unicode_digits_and_spaces():
    parser = _build(r"(?P<num>\d+)\s(?P<rest>\S+)")
    msg = LogMessage()
    assert parser.parse(msg, "id ٣٤ ñandú")
    assert msg.fields == {"num": "٣٤", "rest": "ñandú"}


def test_classes_inside_brackets_and_escapes():
    parser = _build(r"(?P<host>[\w.-]+):(?P<lit>\\w)")
    msg = LogMessage()
    assert parser.parse(msg, "münchen.example-1:\\w")
    assert msg.fields == {"host": "münchen.example-1", "lit": "\\w"}


def test_lone_surrogates_do_not_raise():
    parser = _build(r"(?P<head>x)(?P<tail>.*)")
    msg = LogMessage()
    assert parser.parse(msg, "x\udcff") is True
    assert msg["head"] == "x"
    assert msg["tail"] == "?"
