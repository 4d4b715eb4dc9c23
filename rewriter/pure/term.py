"""Term model: the abstract syntax tree produced by the parser and rewritten by the reducer.

```
<term> ::= Var(name, binding_id)           ; reference to the nearest enclosing binder of name
         | Constr(name)                    ; opaque symbolic constant
         | Literal(value)                  ; integer
         | Lambda(param, body)             ; binder, owns body
         | Let(name, value, body)          ; binder, owns value and body (name is in scope in body only)
         | App(fn, arg)
         | Arith(op, left, right)          ; op is one of + - * /
         | Neg(operand)
```

A tree is owned by whoever holds its root. Parents own their children directly, so replacing a subterm is done by
overwriting the subterm's node in place (see Term.overwrite), never by reassigning the parent's child attribute.
A Var refers to its binder by binding_id only, so the tree stays a strict tree.
"""

from abc import abstractmethod, ABC
from copy import deepcopy


class Term(ABC):
    """Superclass of every AST node variant."""

    @property
    @abstractmethod
    def nodes(self):
        """Owned child terms, in source order."""

    @abstractmethod
    def accept(self, visitor):
        """Calls the visitor callback for this node's variant and returns its result."""

    @abstractmethod
    def _alpha_equals(self, other, mapping, other_mapping):
        """Alpha-equivalence given the bound-name mappings self -> other and other -> self."""

    @abstractmethod
    def _fields(self):
        """Non-term fields compared by ==. Binding ids are identity metadata and are left out."""

    def overwrite(self, other):
        """In-place rewrite: self takes over other's variant and contents while keeping its own identity, so every
        holder of a reference to self observes the change. other should not be used afterwards.
        """
        if other is self:
            return
        contents = dict(other.__dict__)
        self.__class__ = other.__class__
        self.__dict__.clear()
        self.__dict__.update(contents)

    def alpha_equals(self, other):
        """Whether or not two terms are equal up to consistent renaming of bound names."""
        return self._alpha_equals(other, {}, {})

    def get(self, idxs):
        """Gets node at positions specified by idxs. idxs=() will return self."""
        node = self
        for idx in idxs:
            node = node.nodes[idx]
        return node

    def walk(self, path=()):
        """Yields (path, node) for self and every descendant, in pre-order."""
        yield path, self
        for idx, node in enumerate(self.nodes):
            yield from node.walk(path + (idx,))

    def __eq__(self, other):
        if type(self) is not type(other) or self._fields() != other._fields():
            return False
        return all(node == other_node for node, other_node in zip(self.nodes, other.nodes))

    __hash__ = None


class Binder(Term):
    """Superclass for let and lambda, the nodes that introduce a name into scope."""
    binding_id: int

    @property
    @abstractmethod
    def bound_name(self):
        """The name this binder introduces."""

    @bound_name.setter
    @abstractmethod
    def bound_name(self, name):
        """Renames the binder itself (not its references)."""

    @property
    @abstractmethod
    def scope(self):
        """The subterm in which bound_name refers to this binder."""

    def _alpha_equals_scope(self, other, mapping, other_mapping):
        mapping = {**mapping, self.bound_name: other.bound_name}
        other_mapping = {**other_mapping, other.bound_name: self.bound_name}
        return self.scope._alpha_equals(other.scope, mapping, other_mapping)


class Var(Term):
    """Reference to a bound variable."""

    def __init__(self, name, binding_id=None):
        self.name = name
        self.binding_id = binding_id

    @property
    def nodes(self):
        return []

    def accept(self, visitor):
        return visitor.visit_var(self)

    def _alpha_equals(self, other, mapping, other_mapping):
        if not isinstance(other, Var):
            return False
        if self.name in mapping or other.name in other_mapping:
            return mapping.get(self.name) == other.name and other_mapping.get(other.name) == self.name
        return self.name == other.name

    def _fields(self):
        return (self.name,)

    def __repr__(self):
        return f"Var({self.name!r})"


class Constr(Term):
    """Uninterpreted symbolic constant (capitalized identifier)."""

    def __init__(self, name):
        self.name = name

    @property
    def nodes(self):
        return []

    def accept(self, visitor):
        return visitor.visit_constr(self)

    def _alpha_equals(self, other, mapping, other_mapping):
        return self == other

    def _fields(self):
        return (self.name,)

    def __repr__(self):
        return f"Constr({self.name!r})"


class Literal(Term):
    """Integer literal. The parser only produces nonnegative values; arithmetic reduction may go below zero."""

    def __init__(self, value):
        self.value = value

    @property
    def nodes(self):
        return []

    def accept(self, visitor):
        return visitor.visit_literal(self)

    def _alpha_equals(self, other, mapping, other_mapping):
        return self == other

    def _fields(self):
        return (self.value,)

    def __repr__(self):
        return f"Literal({self.value!r})"


class Lambda(Binder):
    """Abstraction: \\param -> body."""

    def __init__(self, param, body, binding_id=None):
        self.param = param
        self.body = body
        self.binding_id = binding_id

    @property
    def bound_name(self):
        return self.param

    @bound_name.setter
    def bound_name(self, name):
        self.param = name

    @property
    def scope(self):
        return self.body

    @property
    def nodes(self):
        return [self.body]

    def accept(self, visitor):
        return visitor.visit_lambda(self)

    def _alpha_equals(self, other, mapping, other_mapping):
        return isinstance(other, Lambda) and self._alpha_equals_scope(other, mapping, other_mapping)

    def _fields(self):
        return (self.param,)

    def __repr__(self):
        return f"Lambda({self.param!r}, {self.body!r})"


class Let(Binder):
    """let name = value in body. name is bound in body only, not in its own definition."""

    def __init__(self, name, value, body, binding_id=None):
        self.name = name
        self.value = value
        self.body = body
        self.binding_id = binding_id

    @property
    def bound_name(self):
        return self.name

    @bound_name.setter
    def bound_name(self, name):
        self.name = name

    @property
    def scope(self):
        return self.body

    @property
    def nodes(self):
        return [self.value, self.body]

    def accept(self, visitor):
        return visitor.visit_let(self)

    def _alpha_equals(self, other, mapping, other_mapping):
        if not isinstance(other, Let) or not self.value._alpha_equals(other.value, mapping, other_mapping):
            return False
        return self._alpha_equals_scope(other, mapping, other_mapping)

    def _fields(self):
        return (self.name,)

    def __repr__(self):
        return f"Let({self.name!r}, {self.value!r}, {self.body!r})"


class App(Term):
    """Function application: fn arg."""

    def __init__(self, fn, arg):
        self.fn = fn
        self.arg = arg

    @property
    def nodes(self):
        return [self.fn, self.arg]

    def accept(self, visitor):
        return visitor.visit_app(self)

    def _alpha_equals(self, other, mapping, other_mapping):
        if not isinstance(other, App):
            return False
        return (self.fn._alpha_equals(other.fn, mapping, other_mapping)
                and self.arg._alpha_equals(other.arg, mapping, other_mapping))

    def _fields(self):
        return ()

    def __repr__(self):
        return f"App({self.fn!r}, {self.arg!r})"


class Arith(Term):
    """Binary arithmetic: left op right."""
    OPS = ("+", "-", "*", "/")

    def __init__(self, op, left, right):
        assert op in Arith.OPS, f"{op} not an arithmetic operator"
        self.op = op
        self.left = left
        self.right = right

    @property
    def nodes(self):
        return [self.left, self.right]

    def accept(self, visitor):
        return visitor.visit_arith(self)

    def _alpha_equals(self, other, mapping, other_mapping):
        if not isinstance(other, Arith) or self.op != other.op:
            return False
        return (self.left._alpha_equals(other.left, mapping, other_mapping)
                and self.right._alpha_equals(other.right, mapping, other_mapping))

    def _fields(self):
        return (self.op,)

    def __repr__(self):
        return f"Arith({self.op!r}, {self.left!r}, {self.right!r})"


class Neg(Term):
    """Unary negation: -operand."""

    def __init__(self, operand):
        self.operand = operand

    @property
    def nodes(self):
        return [self.operand]

    def accept(self, visitor):
        return visitor.visit_neg(self)

    def _alpha_equals(self, other, mapping, other_mapping):
        return isinstance(other, Neg) and self.operand._alpha_equals(other.operand, mapping, other_mapping)

    def _fields(self):
        return ()

    def __repr__(self):
        return f"Neg({self.operand!r})"


class TermVisitor(ABC):
    """One callback per term variant. Walks must not be interleaved with reductions of the same tree."""

    @abstractmethod
    def visit_var(self, term): ...

    @abstractmethod
    def visit_constr(self, term): ...

    @abstractmethod
    def visit_literal(self, term): ...

    @abstractmethod
    def visit_lambda(self, term): ...

    @abstractmethod
    def visit_let(self, term): ...

    @abstractmethod
    def visit_app(self, term): ...

    @abstractmethod
    def visit_arith(self, term): ...

    @abstractmethod
    def visit_neg(self, term): ...


def clone(term):
    """Fully independent deep copy of term. Binders keep their binding ids."""
    return deepcopy(term)


def find_binder(root, var):
    """Returns the binder node in root that var (a node of root) refers to, or None if var is not in root or is
    not bound inside it.
    """

    def search(node, binders):
        if node is var:
            for binder in reversed(binders):
                if binder.bound_name == var.name:
                    return binder
            return None

        for idx, sub_node in enumerate(node.nodes):
            in_scope = isinstance(node, Binder) and sub_node is node.scope
            result = search(sub_node, binders + [node] if in_scope else binders)
            if result is not None:
                return result

    return search(root, [])
