"""Structural redex classification. Reducibility changes as the tree is rewritten, so classify on demand."""

from enum import Enum

from rewriter.pure.term import App, Arith, Lambda, Literal, Neg


class RedexKind(Enum):
    NONE = "none"
    BETA = "beta"
    ARITHMETIC = "arithmetic"


def classify(node):
    """BETA for a lambda applied to an argument, ARITHMETIC for an operator over literals, NONE otherwise."""
    if isinstance(node, App) and isinstance(node.fn, Lambda):
        return RedexKind.BETA
    elif isinstance(node, Arith) and isinstance(node.left, Literal) and isinstance(node.right, Literal):
        return RedexKind.ARITHMETIC
    elif isinstance(node, Neg) and isinstance(node.operand, Literal):
        return RedexKind.ARITHMETIC
    return RedexKind.NONE


def redexes(root):
    """Returns [(path, node, kind)] for every redex in root, in pre-order. Nothing is selected or reduced."""
    found = []
    for path, node in root.walk():
        kind = classify(node)
        if kind is not RedexKind.NONE:
            found.append((path, node, kind))
    return found
