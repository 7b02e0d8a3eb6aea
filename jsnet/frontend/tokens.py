"""C# tokenizer: lexes source into a flat token list.

Tokens keep their source offsets so the parser can slice verbatim text for
statements, initializers and attribute arguments. Literal values are never
decoded; the raw text is all the backend needs.
"""

from __future__ import annotations


# Token type constants
TK_IDENT = "IDENT"
TK_NUMBER = "NUMBER"
TK_STRING = "STRING"
TK_CHAR = "CHAR"
TK_OP = "OP"
TK_EOF = "EOF"

KEYWORDS: set[str] = {
    "abstract",
    "base",
    "break",
    "case",
    "catch",
    "checked",
    "class",
    "const",
    "continue",
    "default",
    "delegate",
    "do",
    "else",
    "enum",
    "event",
    "explicit",
    "extern",
    "finally",
    "fixed",
    "for",
    "foreach",
    "goto",
    "if",
    "implicit",
    "in",
    "interface",
    "internal",
    "lock",
    "namespace",
    "new",
    "operator",
    "out",
    "override",
    "params",
    "private",
    "protected",
    "public",
    "readonly",
    "ref",
    "return",
    "sealed",
    "stackalloc",
    "static",
    "struct",
    "switch",
    "this",
    "throw",
    "try",
    "unchecked",
    "unsafe",
    "using",
    "virtual",
    "volatile",
    "while",
}

# Multi-character operators, sorted by length descending for greedy matching.
# '>>' and '>>=' are left as single '>' tokens so nested generic argument
# lists close one level at a time.
MULTI_OPS: list[str] = [
    "<<=",
    "??=",
    "=>",
    "==",
    "!=",
    "<=",
    ">=",
    "&&",
    "||",
    "++",
    "--",
    "+=",
    "-=",
    "*=",
    "/=",
    "%=",
    "&=",
    "|=",
    "^=",
    "->",
    "??",
    "::",
    "<<",
    "..",
]

SINGLE_OPS: set[str] = {
    "+",
    "-",
    "*",
    "/",
    "%",
    "&",
    "|",
    "^",
    "~",
    "!",
    "<",
    ">",
    "=",
    "(",
    ")",
    "[",
    "]",
    "{",
    "}",
    ",",
    ":",
    ";",
    ".",
    "?",
}


class TokenizeError(Exception):
    """Error during tokenization."""

    def __init__(self, msg: str, line: int, col: int):
        self.msg: str = msg
        self.line: int = line
        self.col: int = col
        super().__init__(msg + " at line " + str(line) + " col " + str(col))


class Token:
    """A token with type, raw text, position and source span."""

    def __init__(self, type_: str, value: str, line: int, col: int, start: int, end: int):
        self.type: str = type_
        self.value: str = value
        self.line: int = line
        self.col: int = col
        self.start: int = start
        self.end: int = end

    def __repr__(self) -> str:
        return (
            "Token("
            + self.type
            + ", "
            + repr(self.value)
            + ", "
            + str(self.line)
            + ", "
            + str(self.col)
            + ")"
        )


def _is_digit(c: str) -> bool:
    return c >= "0" and c <= "9"


def _is_alpha(c: str) -> bool:
    return c.isalpha() or c == "_"


def _is_alnum(c: str) -> bool:
    return _is_alpha(c) or _is_digit(c)


class _Scanner:
    """Cursor over the source that keeps line and column in step."""

    def __init__(self, source: str):
        self.src: str = source
        self.pos: int = 0
        self.line: int = 1
        self.col: int = 1

    def at_end(self) -> bool:
        return self.pos >= len(self.src)

    def peek(self, offset: int = 0) -> str:
        idx = self.pos + offset
        if idx < len(self.src):
            return self.src[idx]
        return ""

    def startswith(self, text: str) -> bool:
        return self.src.startswith(text, self.pos)

    def advance(self, n: int = 1) -> None:
        i = 0
        while i < n and self.pos < len(self.src):
            if self.src[self.pos] == "\n":
                self.line += 1
                self.col = 1
            else:
                self.col += 1
            self.pos += 1
            i += 1


def _skip_block_comment(sc: _Scanner) -> None:
    line = sc.line
    col = sc.col
    sc.advance(2)
    while not sc.at_end():
        if sc.startswith("*/"):
            sc.advance(2)
            return
        sc.advance()
    raise TokenizeError("unterminated comment", line, col)


def _scan_regular_string(sc: _Scanner, line: int, col: int) -> None:
    """Scan "..." with backslash escapes; cursor is on the opening quote."""
    sc.advance()
    while True:
        c = sc.peek()
        if c == "" or c == "\n":
            raise TokenizeError("unterminated string literal", line, col)
        if c == "\\":
            sc.advance(2)
            continue
        sc.advance()
        if c == '"':
            return


def _scan_verbatim_string(sc: _Scanner, line: int, col: int) -> None:
    """Scan @"..." content where "" is an escaped quote; cursor is on the quote."""
    sc.advance()
    while True:
        c = sc.peek()
        if c == "":
            raise TokenizeError("unterminated string literal", line, col)
        if c == '"':
            if sc.peek(1) == '"':
                sc.advance(2)
                continue
            sc.advance()
            return
        sc.advance()


def _scan_raw_string(sc: _Scanner, line: int, col: int) -> None:
    """Scan a raw string literal delimited by three or more quotes."""
    count = 0
    while sc.peek() == '"':
        count += 1
        sc.advance()
    delim = '"' * count
    while not sc.at_end():
        if sc.startswith(delim):
            sc.advance(count)
            return
        sc.advance()
    raise TokenizeError("unterminated raw string literal", line, col)


def _scan_interpolated_string(sc: _Scanner, verbatim: bool, line: int, col: int) -> None:
    """Scan the body of $"..." or $@"..."; cursor is on the opening quote.

    Interpolation holes may contain nested string literals, so braces are
    tracked and quoted text inside a hole is scanned as its own literal.
    """
    sc.advance()
    depth = 0
    while True:
        c = sc.peek()
        if c == "" or (c == "\n" and not verbatim and depth == 0):
            raise TokenizeError("unterminated string literal", line, col)
        if depth == 0:
            if c == "{" and sc.peek(1) == "{":
                sc.advance(2)
                continue
            if c == "{":
                depth = 1
                sc.advance()
                continue
            if c == "\\" and not verbatim:
                sc.advance(2)
                continue
            if c == '"':
                if verbatim and sc.peek(1) == '"':
                    sc.advance(2)
                    continue
                sc.advance()
                return
            sc.advance()
            continue
        if c == "{":
            depth += 1
            sc.advance()
        elif c == "}":
            depth -= 1
            sc.advance()
        elif c == '"':
            _scan_regular_string(sc, sc.line, sc.col)
        elif c == "'":
            _scan_char(sc, sc.line, sc.col)
        else:
            sc.advance()


def _scan_char(sc: _Scanner, line: int, col: int) -> None:
    """Scan a character literal; cursor is on the opening quote."""
    sc.advance()
    while True:
        c = sc.peek()
        if c == "" or c == "\n":
            raise TokenizeError("unterminated character literal", line, col)
        if c == "\\":
            sc.advance(2)
            continue
        sc.advance()
        if c == "'":
            return


def _scan_number(sc: _Scanner) -> None:
    if sc.peek() == "0" and sc.peek(1) in ("x", "X", "b", "B"):
        sc.advance(2)
        while _is_alnum(sc.peek()):
            sc.advance()
        return
    while _is_digit(sc.peek()) or sc.peek() == "_":
        sc.advance()
    if sc.peek() == "." and _is_digit(sc.peek(1)):
        sc.advance()
        while _is_digit(sc.peek()) or sc.peek() == "_":
            sc.advance()
    if sc.peek() in ("e", "E") and (
        _is_digit(sc.peek(1)) or (sc.peek(1) in ("+", "-") and _is_digit(sc.peek(2)))
    ):
        sc.advance(2)
        while _is_digit(sc.peek()):
            sc.advance()
    # Type suffixes: L, U, UL, F, D, M in any case
    while sc.peek() in ("l", "L", "u", "U", "f", "F", "d", "D", "m", "M"):
        sc.advance()


def _at_line_start(src: str, pos: int) -> bool:
    i = pos - 1
    while i >= 0 and src[i] in (" ", "\t"):
        i -= 1
    return i < 0 or src[i] == "\n"


def tokenize(source: str) -> list[Token]:
    """Tokenize C# source into a flat list ending with TK_EOF."""
    tokens: list[Token] = []
    sc = _Scanner(source)

    while not sc.at_end():
        c = sc.peek()

        # Whitespace (BOM included)
        if c in (" ", "\t", "\r", "\n", "\ufeff"):
            sc.advance()
            continue

        # Comments
        if sc.startswith("//"):
            while not sc.at_end() and sc.peek() != "\n":
                sc.advance()
            continue
        if sc.startswith("/*"):
            _skip_block_comment(sc)
            continue

        # Preprocessor directives occupy a whole line
        if c == "#" and _at_line_start(source, sc.pos):
            while not sc.at_end() and sc.peek() != "\n":
                sc.advance()
            continue

        start = sc.pos
        line = sc.line
        col = sc.col

        # String literals with optional $ / @ prefixes
        if c == '"' or (
            c in ("$", "@")
            and (sc.peek(1) == '"' or (sc.peek(1) in ("$", "@") and sc.peek(2) == '"'))
        ):
            prefix = ""
            while sc.peek() in ("$", "@"):
                prefix += sc.peek()
                sc.advance()
            if sc.startswith('"""'):
                _scan_raw_string(sc, line, col)
            elif "$" in prefix:
                _scan_interpolated_string(sc, "@" in prefix, line, col)
            elif "@" in prefix:
                _scan_verbatim_string(sc, line, col)
            else:
                _scan_regular_string(sc, line, col)
            tokens.append(Token(TK_STRING, source[start : sc.pos], line, col, start, sc.pos))
            continue

        if c == "'":
            _scan_char(sc, line, col)
            tokens.append(Token(TK_CHAR, source[start : sc.pos], line, col, start, sc.pos))
            continue

        if _is_digit(c) or (c == "." and _is_digit(sc.peek(1))):
            _scan_number(sc)
            tokens.append(Token(TK_NUMBER, source[start : sc.pos], line, col, start, sc.pos))
            continue

        # Identifier, keyword, or @verbatim identifier
        if _is_alpha(c) or (c == "@" and _is_alpha(sc.peek(1))):
            if c == "@":
                sc.advance()
            word_start = sc.pos
            while _is_alnum(sc.peek()):
                sc.advance()
            word = source[word_start : sc.pos]
            if c != "@" and word in KEYWORDS:
                tokens.append(Token(word, word, line, col, start, sc.pos))
            else:
                tokens.append(Token(TK_IDENT, word, line, col, start, sc.pos))
            continue

        matched = False
        for op in MULTI_OPS:
            if sc.startswith(op):
                sc.advance(len(op))
                tokens.append(Token(TK_OP, op, line, col, start, sc.pos))
                matched = True
                break
        if matched:
            continue

        if c in SINGLE_OPS:
            sc.advance()
            tokens.append(Token(TK_OP, c, line, col, start, sc.pos))
            continue

        raise TokenizeError("unexpected character: " + repr(c), line, col)

    tokens.append(Token(TK_EOF, "", sc.line, sc.col, sc.pos, sc.pos))
    return tokens
