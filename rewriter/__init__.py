"""Interactive term rewriter for an untyped lambda calculus with let, constructors, integers and arithmetic.

Basic program flow:
    1. Lexer (rewriter/grammar/lexer.py): text -> tokens, on demand
    2. Parser (rewriter/grammar/parser.py): tokens -> scope-resolved term (rewriter/pure/term.py), rejecting free
       variables
    3. Classifier (rewriter/pure/redex.py): marks the beta and arithmetic redexes of a term
    4. Reducer (rewriter/pure/reducer.py): rewrites one chosen redex in place, using capture-avoiding substitution
       (rewriter/pure/substitution.py)

The result can be classified and reduced again; nothing is ever reduced automatically.
"""

from rewriter.grammar.parser import parse
from rewriter.pure.pretty import display, pretty
from rewriter.pure.redex import RedexKind, classify, redexes
from rewriter.pure.reducer import reduce_at
from rewriter.pure.term import (App, Arith, Binder, Constr, Lambda, Let, Literal, Neg, Term, TermVisitor, Var,
                                clone, find_binder)
