import pytest

from numerus.errors import LexError
from numerus.lexer import Lexer, tokenize


def kinds(source):
    return [t.kind for t in tokenize(source)]


def test_declaration_tokens():
    tokens = tokenize('DECLARA x EST 10')
    assert [t.kind for t in tokens] == ['DECLARA', 'IDENT', 'EST', 'NUMBER', 'NEWLINE', 'EOF']
    assert tokens[1].lexeme == 'x'
    assert tokens[3].literal == 10
    assert tokens[3].form == 'arabic'


def test_roman_literal_resolved_at_lex_time():
    tokens = tokenize('SCRIBE(XXXII)')
    number = tokens[2]
    assert number.kind == 'NUMBER'
    assert number.literal == 32
    assert number.form == 'roman'
    assert number.lexeme == 'XXXII'


def test_single_letter_stays_identifier():
    tokens = tokenize('DECLARA I EST V')
    assert [t.kind for t in tokens][:4] == ['DECLARA', 'IDENT', 'EST', 'IDENT']


def test_mixed_case_word_is_identifier():
    assert kinds('Mix')[0] == 'IDENT'
    assert kinds('mcm')[0] == 'IDENT'


def test_keywords_are_case_sensitive():
    assert kinds('scribe')[0] == 'IDENT'


def test_comment_is_skipped():
    assert kinds('NOTA: nothing to see\nAVTEM') == ['AVTEM', 'NEWLINE', 'EOF']
    assert kinds('AVTEM NOTA: trailing') == ['AVTEM', 'NEWLINE', 'EOF']


def test_nota_without_colon_is_identifier():
    assert kinds('NOTA EST 1')[0] == 'IDENT'


def test_blank_lines_produce_no_newlines():
    assert kinds('\n\nAVTEM\n\n\nAVTEM\n') == ['AVTEM', 'NEWLINE', 'AVTEM', 'NEWLINE', 'EOF']


def test_empty_source():
    assert kinds('') == ['EOF']
    assert kinds('NOTA: only a comment\n') == ['EOF']


def test_newlines_inside_parentheses_are_ignored():
    source = 'SCRIBE(1\nADDIUS\n2)\nAVTEM'
    assert kinds(source) == ['SCRIBE', 'LPAR', 'NUMBER', 'ADDIUS', 'NUMBER', 'RPAR', 'NEWLINE',
                             'AVTEM', 'NEWLINE', 'EOF']


def test_string_escapes():
    tokens = tokenize(r'SCRIBE("a\"b\\c\nd\te\q")')
    string = tokens[2]
    assert string.kind == 'STRING'
    assert string.literal == 'a"b\\c\nd\te\\q'
    assert string.lexeme == r'"a\"b\\c\nd\te\q"'


def test_spans():
    tokens = tokenize('AVTEM\n  DECLARA xy EST 3')
    decl = tokens[2]
    assert (decl.span.line, decl.span.column) == (2, 3)
    assert (decl.span.start, decl.span.end) == (8, 15)
    ident = tokens[3]
    assert (ident.span.line, ident.span.column, ident.span.end_column) == (2, 11, 13)


def test_unterminated_string():
    with pytest.raises(LexError) as excinfo:
        tokenize('SCRIBE("open')
    assert excinfo.value.kind == LexError.UNTERMINATED_STRING
    assert excinfo.value.span.column == 8


def test_unexpected_character():
    with pytest.raises(LexError) as excinfo:
        tokenize('DECLARA x EST 1 + 2')
    err = excinfo.value
    assert err.kind == LexError.UNEXPECTED_CHARACTER
    assert err.character == '+'
    assert (err.span.line, err.span.column) == (1, 17)


def test_invalid_roman_numeral():
    with pytest.raises(LexError) as excinfo:
        tokenize('DECLARA x EST IIII')
    assert excinfo.value.kind == LexError.INVALID_NUMERAL
    assert excinfo.value.span.column == 15


def test_number_out_of_range():
    assert tokenize('3999')[0].literal == 3999
    with pytest.raises(LexError) as excinfo:
        tokenize('4000')
    assert excinfo.value.kind == LexError.NUMBER_OUT_OF_RANGE


def test_recovery_collects_errors_and_skips_statement():
    errors = []
    tokens = Lexer('DECLARA x EST 1 $ 2\nSCRIBE("unterminated\nAVTEM').tokenize(errors=errors)
    assert [e.kind for e in errors] == [LexError.UNEXPECTED_CHARACTER, LexError.UNTERMINATED_STRING]
    assert [e.span.line for e in errors] == [1, 2]
    assert [t.kind for t in tokens] == ['AVTEM', 'NEWLINE', 'EOF']


def test_recovery_resets_paren_depth():
    errors = []
    tokens = Lexer('SCRIBE(1 ? 2\nAVTEM').tokenize(errors=errors)
    assert len(errors) == 1
    assert [t.kind for t in tokens] == ['AVTEM', 'NEWLINE', 'EOF']


def test_statement_line_closes_unbalanced_parenthesis():
    tokens = tokenize('SCRIBE(1\nDECLARA x EST 2\ny EST 3')
    assert [t.kind for t in tokens] == ['SCRIBE', 'LPAR', 'NUMBER', 'NEWLINE',
                                        'DECLARA', 'IDENT', 'EST', 'NUMBER', 'NEWLINE',
                                        'IDENT', 'EST', 'NUMBER', 'NEWLINE', 'EOF']
    assert tokens[3].span.line == 1


def test_expression_continuation_keeps_parenthesis_open():
    assert kinds('SCRIBE(x\nADDIUS y)') == ['SCRIBE', 'LPAR', 'IDENT', 'ADDIUS', 'IDENT', 'RPAR',
                                           'NEWLINE', 'EOF']


@pytest.mark.parametrize("source", ['DECLARA x EST ²\n', 'SCRIBE(1٣)\n'])
def test_non_ascii_digits_are_rejected(source):
    with pytest.raises(LexError) as excinfo:
        tokenize(source)
    assert excinfo.value.kind == LexError.UNEXPECTED_CHARACTER


def test_non_ascii_digit_ends_identifier():
    with pytest.raises(LexError) as excinfo:
        tokenize('x² EST 1')
    assert excinfo.value.character == '²'
