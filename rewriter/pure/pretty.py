"""Plain-text renderings of terms: pretty (source syntax, re-parseable) and display (one node per line).

pretty inserts parentheses only where the parser's precedence tiers demand them, so parse(pretty(term)) gives back
a term equal to term up to binding ids.
"""

from rewriter.pure.term import TermVisitor


# precedence tiers, loosest first (see rewriter.grammar.parser)
TERM, SUM, PROD, UNARY, APP, ATOM = range(6)


class Printer(TermVisitor):
    """Each visit returns (text, tier), tier being the loosest grammar tier text parses at."""

    def at(self, term, tier):
        """term's text, parenthesized if it would not parse at tier."""
        text, term_tier = term.accept(self)
        return text if term_tier >= tier else f"({text})"

    def visit_var(self, term):
        return term.name, ATOM

    def visit_constr(self, term):
        return term.name, ATOM

    def visit_literal(self, term):
        if term.value < 0:
            return f"({term.value})", ATOM
        return str(term.value), ATOM

    def visit_lambda(self, term):
        return f"\\{term.param} -> {self.at(term.body, TERM)}", TERM

    def visit_let(self, term):
        return f"let {term.name} = {self.at(term.value, TERM)} in {self.at(term.body, TERM)}", TERM

    def visit_app(self, term):
        return f"{self.at(term.fn, APP)} {self.at(term.arg, ATOM)}", APP

    def visit_arith(self, term):
        tier = SUM if term.op in ("+", "-") else PROD
        return f"{self.at(term.left, tier)} {term.op} {self.at(term.right, tier + 1)}", tier

    def visit_neg(self, term):
        return f"-{self.at(term.operand, UNARY)}", UNARY


class TreeDisplay(TermVisitor):
    """Renders the parse tree, one node per line:

    lambda [x/0]
        +
            var [x/0]
            literal [1]
    """
    INDENT = "    "

    def __init__(self):
        self.depth = 0

    def line(self, text):
        return f"{TreeDisplay.INDENT * self.depth}{text}"

    def block(self, text, nodes):
        lines = [self.line(text)]
        self.depth += 1
        try:
            lines.extend(node.accept(self) for node in nodes)
        finally:
            self.depth -= 1
        return "\n".join(lines)

    @staticmethod
    def binding(name, binding_id):
        return f"[{name}/{'?' if binding_id is None else binding_id}]"

    def visit_var(self, term):
        return self.line(f"var {TreeDisplay.binding(term.name, term.binding_id)}")

    def visit_constr(self, term):
        return self.line(f"constr [{term.name}]")

    def visit_literal(self, term):
        return self.line(f"literal [{term.value}]")

    def visit_lambda(self, term):
        return self.block(f"lambda {TreeDisplay.binding(term.param, term.binding_id)}", term.nodes)

    def visit_let(self, term):
        return self.block(f"let {TreeDisplay.binding(term.name, term.binding_id)}", term.nodes)

    def visit_app(self, term):
        return self.block("app", term.nodes)

    def visit_arith(self, term):
        return self.block(term.op, term.nodes)

    def visit_neg(self, term):
        return self.block("neg", term.nodes)


def pretty(term):
    """term in the input syntax."""
    return Printer().at(term, TERM)


def display(term):
    """term as an indented parse tree."""
    return term.accept(TreeDisplay())
