from surface_math import ValidationIssue, validate


def test_balanced_expression_is_valid():
    result = validate("x+y")
    assert result.valid
    assert result.issue is None
    assert bool(result)


def test_unclosed_group_is_unbalanced():
    result = validate("(x+y")
    assert not result.valid
    assert result.issue == ValidationIssue.UNBALANCED_GROUPING


def test_close_before_open_is_unbalanced():
    result = validate(")x+y(")
    assert result.issue == ValidationIssue.UNBALANCED_GROUPING
    assert "position 0" in result.reason


def test_invalid_character():
    result = validate("x&y")
    assert not result.valid
    assert result.issue == ValidationIssue.INVALID_CHARACTER
    assert "'&'" in result.reason


def test_uppercase_is_rejected():
    assert validate("X+y").issue == ValidationIssue.INVALID_CHARACTER


def test_empty_expression():
    assert validate("   ").issue == ValidationIssue.EMPTY


def test_functions_decimals_and_whitespace_pass():
    assert validate("sqrt(x^2 + y^2) * 0.5 - pi").valid


def test_malformed_but_well_formed_characters_pass():
    # left for the parser to refuse
    assert validate("x++").valid
