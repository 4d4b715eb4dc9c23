"""Capture-avoiding substitution over the term model.

substitute(target, x, r) replaces every free occurrence of x in target with its own copy of r, in place. A binder
of some other name y is alpha-renamed first whenever y is free in r, since r's y would otherwise be captured:

    (\\y -> x)[x := y]  =  \\y' -> y

Fresh names are made by appending MARKER until the name occurs nowhere in the binder's scope and is not free in r,
which keeps renaming deterministic.
"""

from rewriter.pure.term import Binder, Let, Var, clone


MARKER = "'"


def is_free(name, term):
    """Whether or not name occurs free in term. A binder blocks its own name in its scope, but a let's definition
    lies outside that scope.
    """
    if isinstance(term, Var):
        return term.name == name
    elif isinstance(term, Binder):
        if isinstance(term, Let) and is_free(name, term.value):
            return True
        return term.bound_name != name and is_free(name, term.scope)
    return any(is_free(name, node) for node in term.nodes)


def free_variables(term):
    """Set of names occurring free in term."""
    if isinstance(term, Var):
        return {term.name}
    elif isinstance(term, Binder):
        free = free_variables(term.scope) - {term.bound_name}
        if isinstance(term, Let):
            free |= free_variables(term.value)
        return free

    free = set()
    for node in term.nodes:
        free |= free_variables(node)
    return free


def names(term):
    """Set of every name in term, bound or free."""
    if isinstance(term, Var):
        return {term.name}

    found = {term.bound_name} if isinstance(term, Binder) else set()
    for node in term.nodes:
        found |= names(node)
    return found


def fresh_name(name, scope, replacement):
    """name with MARKER appended until it is free in replacement and occurs nowhere in scope. Binders inside scope
    count too: renamed references pushed under a binder of the fresh name would be captured by it.
    """
    taken = names(scope) | free_variables(replacement)
    new_name = name + MARKER
    while new_name in taken:
        new_name += MARKER
    return new_name


def rename(term, old, new):
    """In-place renaming of the free occurrences of old in term to new."""
    if isinstance(term, Var):
        if term.name == old:
            term.name = new
    elif isinstance(term, Binder):
        if isinstance(term, Let):
            rename(term.value, old, new)
        if term.bound_name != old:
            rename(term.scope, old, new)
    else:
        for node in term.nodes:
            rename(node, old, new)


def alpha_convert(binder, replacement):
    """Renames binder (and the references to it in its scope) to a name that does not capture replacement."""
    new_name = fresh_name(binder.bound_name, binder.scope, replacement)
    rename(binder.scope, binder.bound_name, new_name)
    binder.bound_name = new_name


def substitute(target, name, replacement):
    """In-place substitution of replacement for the free occurrences of name in target. Each occurrence gets a
    fresh copy of replacement, so target never shares structure with it.
    """
    if isinstance(target, Var):
        if target.name == name:
            target.overwrite(clone(replacement))

    elif isinstance(target, Binder):
        if isinstance(target, Let):
            substitute(target.value, name, replacement)
        if target.bound_name == name:
            return  # shadowed

        if is_free(target.bound_name, replacement):
            alpha_convert(target, replacement)
        substitute(target.scope, name, replacement)

    else:
        for node in target.nodes:
            substitute(node, name, replacement)
