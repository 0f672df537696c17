import pytest

from mocapbvh.errors import TokenizeError
from mocapbvh.tokenizer import TokenKind, tokenize


def test_symbols_and_braces():
    tokens = tokenize("ROOT Hips\n{\n  OFFSET 0 -1.5 2e3\n}")
    kinds = [t.kind for t in tokens]
    assert kinds == [
        TokenKind.SYMBOL, TokenKind.SYMBOL, TokenKind.LBRACE,
        TokenKind.SYMBOL, TokenKind.SYMBOL, TokenKind.SYMBOL, TokenKind.SYMBOL,
        TokenKind.RBRACE, TokenKind.END,
    ]
    assert [t.value for t in tokens[3:7]] == ["OFFSET", "0", "-1.5", "2e3"]


def test_braces_split_adjacent_symbols():
    tokens = tokenize("JOINT Spine{OFFSET 1 2 3}")
    assert [t.value for t in tokens[:-1]] == ["JOINT", "Spine", "{", "OFFSET", "1", "2", "3", "}"]


def test_positions_are_one_based():
    tokens = tokenize("HIERARCHY\n  ROOT Hips\r\n{")
    assert (tokens[0].line, tokens[0].column) == (1, 1)
    assert (tokens[1].line, tokens[1].column) == (2, 3)
    assert (tokens[2].line, tokens[2].column) == (2, 8)
    assert (tokens[3].line, tokens[3].column) == (3, 1)


def test_empty_input_yields_only_end():
    tokens = tokenize("   \n\t ")
    assert len(tokens) == 1
    assert tokens[0].kind is TokenKind.END


def test_keyword_match_is_exact_and_case_insensitive():
    root, lower, prefixed = tokenize("ROOT root ROOTS")[:3]
    assert root.is_keyword("ROOT")
    assert lower.is_keyword("ROOT")
    assert not prefixed.is_keyword("ROOT")


def test_brace_is_never_a_keyword():
    assert not tokenize("{")[0].is_keyword("{")


def test_control_character_fails():
    with pytest.raises(TokenizeError) as excinfo:
        tokenize("ROOT Hips\n{\x00}", source="bad.bvh")
    err = excinfo.value
    assert err.line == 2
    assert err.column == 2
    assert "HIERARCHY" in str(err)
    assert "bad.bvh" in str(err)
