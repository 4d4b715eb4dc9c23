"""Single-step reduction at a chosen node. The engine never looks for a redex itself and never takes more than one
step per call.
"""

from rewriter.lang.error import DivisionByZero, NotARedex
from rewriter.pure.redex import RedexKind, classify
from rewriter.pure.substitution import substitute
from rewriter.pure.term import Literal, Neg


def evaluate(op, left, right):
    """Integer result of left op right. Division floors, and a zero divisor raises DivisionByZero."""
    if op == "+":
        return left + right
    elif op == "-":
        return left - right
    elif op == "*":
        return left * right
    elif right == 0:
        raise DivisionByZero(left)
    return left // right


def beta_reduce(node):
    """(\\x -> body) arg  ~>  body[x := arg], written over node."""
    abstraction, arg = node.fn, node.arg
    substitute(abstraction.body, abstraction.param, arg)
    node.overwrite(abstraction.body)


def arith_reduce(node):
    """Operator over literals  ~>  literal, written over node. node is untouched if evaluation fails."""
    if isinstance(node, Neg):
        result = -node.operand.value
    else:
        result = evaluate(node.op, node.left.value, node.right.value)
    node.overwrite(Literal(result))


def reduce_at(node):
    """Performs one reduction step at node, in place. Raises NotARedex if node is not a redex. Returns the kind of
    step taken.
    """
    kind = classify(node)
    if kind is RedexKind.BETA:
        beta_reduce(node)
    elif kind is RedexKind.ARITHMETIC:
        arith_reduce(node)
    else:
        raise NotARedex(node)
    return kind
