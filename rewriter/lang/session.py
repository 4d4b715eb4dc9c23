"""Session control: the single owner of the live term. A session parses submitted input, lists the redexes of the
current term, reduces the one the user picks and keeps a history of snapshots taken before every step.
"""

from rewriter.grammar.parser import parse
from rewriter.lang.error import GenericException
from rewriter.pure.pretty import pretty
from rewriter.pure.reducer import reduce_at
from rewriter.pure.redex import RedexKind, redexes
from rewriter.pure.term import clone


class Session:
    """Governs a rewriting session. The term is only ever mutated through reduce, one step at a time."""
    RULES = {RedexKind.BETA: "β", RedexKind.ARITHMETIC: "δ"}

    def __init__(self, error_handler):
        self.error_handler = error_handler

        self.text = None   # input the current term was parsed from
        self.term = None   # live term, None until something is submitted
        self.history = []  # clones of self.term taken before each step, oldest first

    def submit(self, text):
        """Parses text and makes it the current term, discarding the previous term and its history. On a parse
        failure the previous term is kept. Warns if there is nothing to reduce.
        """
        term = parse(text)

        self.text = text
        self.term = term
        self.history = []

        if not redexes(term):
            self.error_handler.warn("'{}' has no redexes", text, diagnosis=False)
        return term

    def _check_term(self):
        if self.term is None:
            raise GenericException("no term has been entered yet", diagnosis=False)

    def redexes(self):
        """[(path, node, kind)] for the current term, numbered by position for reduce."""
        self._check_term()
        return redexes(self.term)

    def reduce(self, index):
        """Reduces the index-th redex of the current term in place. The term and history are unchanged if the
        reduction fails.
        """
        found = self.redexes()
        if not 0 <= index < len(found):
            raise GenericException("no redex numbered '{}'", str(index), diagnosis=False)

        __, node, __ = found[index]
        snapshot = clone(self.term)

        kind = reduce_at(node)

        self.history.append(snapshot)
        self.error_handler.register_step(Session.RULES[kind], pretty(self.term))
        return kind

    def undo(self):
        """Restores the term as it was before the last reduction."""
        if not self.history:
            raise GenericException("nothing to undo", diagnosis=False)
        self.term = self.history.pop()
        return self.term

    def __str__(self):
        return pretty(self.term) if self.term is not None else ""
