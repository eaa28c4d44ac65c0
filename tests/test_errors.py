"""Tests for the string-math error hierarchy."""

from strmath.errors import (
    ErrorKind,
    StrMathError,
    ParseError,
    UnexpectedCharacter,
    UnclosedGroup,
    MalformedNumber,
    UnknownIdentifier,
    TrailingInput,
    NestingTooDeep,
    ConfigError,
)


def test_strmath_error_is_exception():
    assert issubclass(StrMathError, Exception)


def test_parse_error_inherits_strmath_error():
    assert issubclass(ParseError, StrMathError)


def test_config_error_is_not_a_parse_error():
    assert issubclass(ConfigError, StrMathError)
    assert not issubclass(ConfigError, ParseError)


def test_each_error_has_its_own_kind():
    classes = [UnexpectedCharacter, UnclosedGroup, MalformedNumber,
               UnknownIdentifier, TrailingInput, NestingTooDeep, ConfigError]
    kinds = [cls.kind for cls in classes]
    assert len(set(kinds)) == len(kinds)
    assert set(kinds) == set(ErrorKind)


def test_message_with_position():
    err = TrailingInput("Unexpected: ')'", 3)
    assert str(err) == "Unexpected: ')' at index 3"
    assert err.message == "Unexpected: ')'"
    assert err.position == 3


def test_message_without_position():
    err = ConfigError("bad depth")
    assert str(err) == "bad depth"
    assert err.position == -1


def test_unknown_identifier_carries_name():
    err = UnknownIdentifier("Unknown function: foo", "foo", 0)
    assert err.name == "foo"
    assert err.kind is ErrorKind.UNKNOWN_IDENTIFIER


def test_errors_are_catchable_as_strmath_error():
    try:
        raise MalformedNumber("Malformed number: '1..2'", 0)
    except StrMathError as e:
        assert "1..2" in str(e)
