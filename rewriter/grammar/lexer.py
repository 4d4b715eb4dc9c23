r"""Lazy tokenizer for the term language.

Tokens, by kind:

```
"let" "in"                      ; keywords (exact identifiers)
"\" "(" ")" "+" "-" "*" "/" "=" ; single-character symbols
"->"                            ; "-" immediately followed by ">" (maximal munch over "-")
VAR      ::= [a-z_]\w*'*        ; trailing primes are produced by alpha-renaming
CONSTR   ::= [A-Z]\w*
LITERAL  ::= \d+                ; nonnegative decimal integer
END                             ; end of input, returned again on every further request
ERROR                           ; any other character, never consumed silently
```

Whitespace (space, tab, newline) between tokens is skipped.
"""

import re
from dataclasses import dataclass, field

from rewriter.lang.error import UnexpectedTokenKind


KEYWORDS = ("let", "in")
SYMBOLS = ("\\", "(", ")", "+", "-", "*", "/", "=")
WHITESPACE = " \t\n"

LITERAL_RE = re.compile(r"\d+")
CONSTR_RE = re.compile(r"[A-Z]\w*")
VAR_RE = re.compile(r"[a-z_]\w*'*")


@dataclass(frozen=True)
class Token:
    """A token of the given kind. value is the identifier text (VAR, CONSTR), the integer (LITERAL), or the
    offending character (ERROR). start/end delimit the token in the input and are ignored by equality.
    """
    kind: str
    value: object = None
    start: int = field(default=0, compare=False)
    end: int = field(default=0, compare=False)

    def __repr__(self):
        if self.value is None:
            return f"Token({self.kind!r})"
        return f"Token({self.kind!r}, {self.value!r})"


class Lexer:
    """Produces tokens from text on demand. The only mutable state is the current input offset."""

    def __init__(self, text):
        self.text = text
        self.pos = 0
        self._cur = self._scan()

    def _scan(self):
        """Reads the token starting at (or after whitespace following) self.pos."""
        text = self.text
        while self.pos < len(text) and text[self.pos] in WHITESPACE:
            self.pos += 1

        start = self.pos
        if start >= len(text):
            return Token("END", start=start, end=start)

        char = text[start]
        if char == "-" and text.startswith(">", start + 1):
            self.pos += 2
            return Token("->", start=start, end=self.pos)
        elif char in SYMBOLS:
            self.pos += 1
            return Token(char, start=start, end=self.pos)

        match = LITERAL_RE.match(text, start)
        if match:
            self.pos = match.end()
            return Token("LITERAL", int(match.group()), start, self.pos)

        match = CONSTR_RE.match(text, start)
        if match:
            self.pos = match.end()
            return Token("CONSTR", match.group(), start, self.pos)

        match = VAR_RE.match(text, start)
        if match:
            self.pos = match.end()
            if match.group() in KEYWORDS:
                return Token(match.group(), start=start, end=self.pos)
            return Token("VAR", match.group(), start, self.pos)

        # ERROR does not advance: peek/next keep returning it until a parser rule rejects it
        return Token("ERROR", char, start, start + 1)

    def peek(self):
        """Returns the current token without consuming it."""
        return self._cur

    def next(self):
        """Consumes and returns the current token. END and ERROR are sticky."""
        token = self._cur
        if token.kind not in ("END", "ERROR"):
            self._cur = self._scan()
        return token

    def expect(self, kind):
        """Consumes the current token if it is of the given kind, raises UnexpectedTokenKind otherwise."""
        token = self._cur
        if token.kind != kind:
            raise UnexpectedTokenKind(kind, token.kind, self.text, start=token.start, end=max(token.end, token.start + 1))
        return self.next()

    def __iter__(self):
        """Yields the remaining tokens, up to and including the first END or ERROR."""
        while True:
            token = self.next()
            yield token
            if token.kind in ("END", "ERROR"):
                return
