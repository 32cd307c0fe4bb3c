"""
Pygments lexers for Typst

Typst source switches between three grammars: markup (the document),
code (after `#`, inside `{}`/`()`) and math (between `$`). One state table
covers all three; the lexer classes only differ in the state they start in.

Token types:
- Generic.Heading / Generic.Strong / Generic.Emph: markup structure
- String.Backtick: raw text and raw blocks
- Name.Label: <labels> and @references
- Name.Entity: links
- Keyword / Keyword.Constant / Operator.Word: code keywords
- Name.Function: called identifiers (`#text(...)`, `cal(A)`)
- Name.Variable: embedded identifiers and multi-letter math identifiers
- String.Delimiter: `$` math delimiters
- Comment: line and block comments
"""

from typing import Iterator, Tuple

from pygments.lexer import RegexLexer, bygroups, default, include, words
from pygments.token import (
    Comment,
    Generic,
    Keyword,
    Name,
    Number,
    Operator,
    Punctuation,
    String,
    Text,
    Whitespace,
    _TokenType,
)

from ..models.pipeline import SyntaxMode


IDENT = r'[^\W\d][\w-]*'
MATH_IDENT = r'[^\W\d_]{2,}(?:\.[^\W\d_]+)*'

KEYWORDS = (
    'let', 'set', 'show', 'if', 'else', 'for', 'while', 'break', 'continue',
    'return', 'context',
)
EMBED_KEYWORDS = (
    'let', 'set', 'show', 'import', 'include', 'if', 'for', 'while',
    'break', 'continue', 'return', 'context',
)
NUMBER = (
    r'0x[0-9a-fA-F]+|0b[01]+|0o[0-7]+'
    r'|\d+(?:\.\d+)?(?:[eE][+-]?\d+)?(?:pt|mm|cm|in|em|fr|deg|rad|%)?'
)


class TypstLexerBase(RegexLexer):
    """
    Shared Typst state table

    Not usable on its own: subclasses provide the 'root' state.
    """

    name = 'Typst'
    url = 'https://typst.app'

    tokens = {
        'comments': [
            (r'//[^\n]*', Comment.Single),
            (r'/\*', Comment.Multiline, 'comment-block'),
        ],

        'comment-block': [
            (r'[^*/]+', Comment.Multiline),
            (r'/\*', Comment.Multiline, '#push'),
            (r'\*/', Comment.Multiline, '#pop'),
            (r'[*/]', Comment.Multiline),
        ],

        # `#` switches from markup or math into a single code expression
        'embedded': [
            (r'(#)(' + '|'.join(EMBED_KEYWORDS) + r')(?![\w-])',
             bygroups(Keyword, Keyword), 'code-statement'),
            (r'(#)((?:none|auto|true|false)(?![\w-]))',
             bygroups(Keyword.Constant, Keyword.Constant)),
            (r'(#)(' + IDENT + r')(?=[(\[])',
             bygroups(Name.Function, Name.Function), 'embed-tail'),
            (r'(#)(' + IDENT + r')',
             bygroups(Name.Variable, Name.Variable), 'embed-tail'),
            (r'#\{', Punctuation, 'code-brace'),
            (r'#\(', Punctuation, 'code-paren'),
            (r'#\[', Punctuation, 'markup-content'),
            (r'#"', String.Double, 'string'),
        ],

        # Calls, content arguments and field accesses after `#ident`
        'embed-tail': [
            (r'\(', Punctuation, 'code-paren'),
            (r'\[', Punctuation, 'markup-content'),
            (r'(\.)(' + IDENT + r')(?=[(\[])', bygroups(Punctuation, Name.Function)),
            (r'(\.)(' + IDENT + r')', bygroups(Punctuation, Name.Attribute)),
            default('#pop'),
        ],

        'markup': [
            include('comments'),
            (r'```', String.Backtick, 'raw-block'),
            (r'`[^`]*`', String.Backtick),
            (r'\\u\{[0-9a-fA-F]+\}', String.Escape),
            (r'\\\S', String.Escape),
            (r'\\', Punctuation),
            (r'^([ \t]*)(=+[ \t][^\n]*)', bygroups(Whitespace, Generic.Heading)),
            (r'^([ \t]*)([-+]|\d+\.)(?=[ \t\n])', bygroups(Whitespace, Punctuation)),
            (r'^([ \t]*)(/)([ \t]+)([^:\n]+)(:)',
             bygroups(Whitespace, Punctuation, Whitespace, Generic.Strong, Punctuation)),
            (r'\*[^*\n]*\*', Generic.Strong),
            (r'(?<!\w)_[^_\n]*_(?!\w)', Generic.Emph),
            (r'\$', String.Delimiter, 'math-content'),
            (r'<[\w\-.:]+>', Name.Label),
            (r'@[\w\-.:]*\w', Name.Label),
            (r'https?://[^\s\]\)]+', Name.Entity),
            include('embedded'),
            (r'---|--|\.\.\.|~', Operator),
            (r'\w+', Text),
            (r'\s+', Whitespace),
            (r'.', Text),
        ],

        'markup-content': [
            (r'\]', Punctuation, '#pop'),
            (r'\[', Text, '#push'),
            include('markup'),
        ],

        'raw-block': [
            (r'```', String.Backtick, '#pop'),
            (r'[^`]+', String.Backtick),
            (r'`', String.Backtick),
        ],

        'string': [
            (r'\\(?:u\{[0-9a-fA-F]+\}|.)', String.Escape),
            (r'"', String.Double, '#pop'),
            (r'[^"\\]+', String.Double),
        ],

        # No catch-all here: whatever is not code ends an embedded statement
        'code-common': [
            include('comments'),
            (r'"', String.Double, 'string'),
            (words(KEYWORDS, suffix=r'(?![\w-])'), Keyword),
            (words(('import', 'include', 'as'), suffix=r'(?![\w-])'), Keyword.Namespace),
            (words(('not', 'and', 'or', 'in'), suffix=r'(?![\w-])'), Operator.Word),
            (words(('none', 'auto', 'true', 'false'), suffix=r'(?![\w-])'), Keyword.Constant),
            (NUMBER, Number),
            (r'<[\w\-.:]+>', Name.Label),
            (IDENT + r'(?=[(\[])', Name.Function),
            (IDENT, Name),
            (r'=>|==|!=|<=|>=|\+=|-=|\*=|/=|\.\.|[+\-*/=<>]', Operator),
            (r'[.,:]', Punctuation),
            (r'\(', Punctuation, 'code-paren'),
            (r'\{', Punctuation, 'code-brace'),
            (r'\[', Punctuation, 'markup-content'),
            (r'\$', String.Delimiter, 'math-content'),
            (r'[ \t]+', Whitespace),
        ],

        'code-statement': [
            (r';', Punctuation, '#pop'),
            include('code-common'),
            default('#pop'),
        ],

        'code-paren': [
            (r'\)', Punctuation, '#pop'),
            include('code-common'),
            (r';', Punctuation),
            (r'\s+', Whitespace),
            (r'.', Text),
        ],

        'code-brace': [
            (r'\}', Punctuation, '#pop'),
            include('code-common'),
            (r';', Punctuation),
            (r'\s+', Whitespace),
            (r'.', Text),
        ],

        'code': [
            include('code-common'),
            (r';', Punctuation),
            (r'[)\]}]', Punctuation),
            (r'\s+', Whitespace),
            (r'.', Text),
        ],

        'math-common': [
            include('comments'),
            (r'\\u\{[0-9a-fA-F]+\}', String.Escape),
            (r'\\\S', String.Escape),
            (r'\\', Punctuation),
            include('embedded'),
            (r'"', String.Double, 'string'),
            (r'\d+(?:\.\d+)?', Number),
            (r'(' + MATH_IDENT + r')(?=\()', Name.Function),
            (MATH_IDENT, Name.Variable),
            (r'[^\W\d_]', Name),
            (r'->|=>|<-|<=|>=|!=|:=|\.\.\.|\|\||[=<>+\-*/^_&|!\']', Operator),
            (r'[()\[\]{},;.:]', Punctuation),
            (r'\s+', Whitespace),
            (r'.', Text),
        ],

        'math-content': [
            (r'\$', String.Delimiter, '#pop'),
            include('math-common'),
        ],
    }


class TypstMarkupLexer(TypstLexerBase):
    """
    Lexer for Typst documents (markup mode)

    Example:
        = Intro
        Some *bold* text and $x^2$ with #emph[style].
    """

    name = 'Typst (markup)'
    aliases = ['typst', 'typ']
    filenames = ['*.typ']

    tokens = {
        'root': [include('markup')],
    }


class TypstCodeLexer(TypstLexerBase):
    """Lexer for Typst code mode, as found inside `#{ ... }`"""

    name = 'Typst (code)'
    aliases = ['typst-code']

    tokens = {
        'root': [include('code')],
    }


class TypstMathLexer(TypstLexerBase):
    """Lexer for Typst math mode, as found inside `$ ... $`"""

    name = 'Typst (math)'
    aliases = ['typst-math']

    tokens = {
        'root': [include('math-common')],
    }


LEXERS = {
    SyntaxMode.CODE: TypstCodeLexer,
    SyntaxMode.MARKUP: TypstMarkupLexer,
    SyntaxMode.MATH: TypstMathLexer,
}


def lexer_get(mode: SyntaxMode) -> TypstLexerBase:
    """
    Get a lexer instance for the given syntax mode

    The lexer keeps every input character: leading and trailing newlines
    are not stripped and no final newline is added.
    """
    return LEXERS[mode](stripnl=False, ensurenl=False)


def tokens_get(text: str, mode: SyntaxMode) -> Iterator[Tuple[_TokenType, str]]:
    """
    Tokenize text without any input preprocessing.

    Lexer.get_tokens() would rewrite CRLF line endings; the raw token
    stream reproduces the input exactly when its values are joined.
    """
    for _, ttype, value in lexer_get(mode).get_tokens_unprocessed(text):
        if value:
            yield ttype, value
