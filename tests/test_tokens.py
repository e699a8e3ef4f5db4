import pytest

from jackanalyzer.syntax.tokens import (
    KEYWORDS,
    SYMBOLS,
    IdentifierToken,
    IntConstToken,
    Keyword,
    KeywordToken,
    StringConstToken,
    SymbolToken,
    TokenKind,
    classify,
    make_token,
)


def test_keyword_and_symbol_sets_are_closed():
    assert len(KEYWORDS) == 21
    assert set(KEYWORDS) == {
        "class", "constructor", "function", "method", "field", "static", "var",
        "int", "char", "boolean", "void", "true", "false", "null", "this",
        "let", "do", "if", "else", "while", "return",
    }
    assert SYMBOLS == frozenset("{}()[].,;+-*/&|<>=~")


@pytest.mark.parametrize(
    ("lexeme", "kind"),
    [
        ("class", TokenKind.KEYWORD),
        ("return", TokenKind.KEYWORD),
        ("{", TokenKind.SYMBOL),
        ("~", TokenKind.SYMBOL),
        ("0", TokenKind.INT_CONST),
        ("32767", TokenKind.INT_CONST),
        ('"hello world"', TokenKind.STRING_CONST),
        ('""', TokenKind.STRING_CONST),
        ("x", TokenKind.IDENTIFIER),
        ("Class", TokenKind.IDENTIFIER),
        ("_tmp1", TokenKind.IDENTIFIER),
        ("3abc", TokenKind.IDENTIFIER),
        ('"', TokenKind.IDENTIFIER),
    ],
)
def test_classify_depends_only_on_lexeme(lexeme, kind):
    assert classify(lexeme) is kind


def test_make_token_builds_typed_payloads():
    assert make_token("while", 3) == KeywordToken(Keyword.WHILE, 3)
    assert make_token(";", 3) == SymbolToken(";", 3)
    assert make_token("count", 3) == IdentifierToken("count", 3)
    assert make_token("42", 3) == IntConstToken(42, 3)
    assert make_token('"a b"', 3) == StringConstToken("a b", 3)


def test_int_constant_keeps_source_spelling():
    token = make_token("007", 1)

    assert isinstance(token, IntConstToken)
    assert token.value == 7
    assert token.lexeme == "007"
    assert token.text == "007"
    assert token == IntConstToken(7, 1)


def test_string_constant_text_is_unquoted():
    token = make_token('"Hello, World!"')

    assert token.lexeme == '"Hello, World!"'
    assert token.text == "Hello, World!"


def test_kind_values_are_output_tags():
    assert [kind.value for kind in TokenKind] == [
        "keyword",
        "symbol",
        "identifier",
        "integerConstant",
        "stringConstant",
    ]
    assert make_token("12").kind is TokenKind.INT_CONST
    assert make_token('"s"').kind is TokenKind.STRING_CONST
