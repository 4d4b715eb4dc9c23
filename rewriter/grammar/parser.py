"""Recursive-descent parser with interleaved scope resolution.

Grammar, loosest tier first:

```
<term>   ::= "let" VAR "=" <term> "in" <term>   ; binder bodies extend as far right as possible
           | "\" VAR "->" <term>
           | <sum>
<sum>    ::= <prod> (("+" | "-") <prod>)*       ; left-associative
<prod>   ::= <unary> (("*" | "/") <unary>)*     ; left-associative
<unary>  ::= "-" <unary> | <app>
<app>    ::= <atom> <atom>*                     ; application, left-associative, binds tighter than arithmetic
<atom>   ::= VAR | CONSTR | LITERAL | "(" <term> ")"
```

Every VAR must refer to an enclosing binder: the parser passes an immutable name -> binder mapping down the
recursion, each binder extending a copy of it, and rejects unbound names with FreeVariableError. Free names must be
written as (capitalized) constructors instead.
"""

from rewriter.grammar.lexer import Lexer
from rewriter.lang.error import FreeVariableError, LexError, ParseError
from rewriter.pure.term import App, Arith, Constr, Lambda, Let, Literal, Neg, Var


ATOM_START = ("VAR", "CONSTR", "LITERAL", "(")
UNARY_START = ATOM_START + ("-",)
TERM_START = ("let", "\\") + UNARY_START


class Parser:
    """Parses one term from a Lexer. Holds the binding id counter, so ids are unique per parser."""

    def __init__(self, lexer):
        self.lexer = lexer
        self.binding_count = 0

    def fail(self, expected):
        """Raises the error for the current token not being one of the expected kinds."""
        token = self.lexer.peek()
        text = self.lexer.text
        if token.kind == "ERROR":
            raise LexError(expected, token.value, text, start=token.start)
        raise ParseError(expected, token.kind, text, start=token.start, end=max(token.end, token.start + 1))

    def expect(self, kind):
        """Lexer.expect, except that an ERROR token is reported as a LexError."""
        if self.lexer.peek().kind == "ERROR":
            self.fail((kind,))
        return self.lexer.expect(kind)

    def next_binding_id(self):
        binding_id = self.binding_count
        self.binding_count += 1
        return binding_id

    def parse_term(self, scope):
        kind = self.lexer.peek().kind
        if kind == "let":
            self.lexer.next()
            name = self.expect("VAR").value
            binding_id = self.next_binding_id()
            self.expect("=")
            value = self.parse_term(scope)  # name is not in scope in its own definition
            self.expect("in")
            binder = Let(name, value, None, binding_id)
            binder.body = self.parse_term({**scope, name: binder})
            return binder

        elif kind == "\\":
            self.lexer.next()
            param = self.expect("VAR").value
            binder = Lambda(param, None, self.next_binding_id())
            self.expect("->")
            binder.body = self.parse_term({**scope, param: binder})
            return binder

        elif kind in UNARY_START:
            return self.parse_sum(scope)

        self.fail(TERM_START)

    def parse_sum(self, scope):
        left = self.parse_prod(scope)
        while self.lexer.peek().kind in ("+", "-"):
            op = self.lexer.next().kind
            left = Arith(op, left, self.parse_prod(scope))
        return left

    def parse_prod(self, scope):
        left = self.parse_unary(scope)
        while self.lexer.peek().kind in ("*", "/"):
            op = self.lexer.next().kind
            left = Arith(op, left, self.parse_unary(scope))
        return left

    def parse_unary(self, scope):
        kind = self.lexer.peek().kind
        if kind == "-":
            self.lexer.next()
            return Neg(self.parse_unary(scope))
        elif kind in ATOM_START:
            return self.parse_app(scope)
        self.fail(UNARY_START)

    def parse_app(self, scope):
        fn = self.parse_atom(scope)
        while self.lexer.peek().kind in ATOM_START:
            fn = App(fn, self.parse_atom(scope))
        return fn

    def parse_atom(self, scope):
        token = self.lexer.peek()
        if token.kind == "VAR":
            self.lexer.next()
            if token.value not in scope:
                raise FreeVariableError(token.value, self.lexer.text, start=token.start, end=token.end)
            return Var(token.value, scope[token.value].binding_id)

        elif token.kind == "CONSTR":
            self.lexer.next()
            return Constr(token.value)

        elif token.kind == "LITERAL":
            self.lexer.next()
            return Literal(token.value)

        elif token.kind == "(":
            self.lexer.next()
            inner = self.parse_term(scope)
            self.expect(")")
            return inner

        self.fail(ATOM_START)


def parse_term(lexer):
    """Parses one term from lexer, leaving any following tokens unconsumed."""
    return Parser(lexer).parse_term({})


def parse(text):
    """Parses text, which must consist of exactly one term. Raises ParseError (or its subclasses) on grammar
    violations and FreeVariableError on unbound variables.
    """
    lexer = Lexer(text)
    term = parse_term(lexer)
    if lexer.peek().kind != "END":
        Parser(lexer).fail(("END",))
    return term
