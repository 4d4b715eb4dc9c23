import unittest

from rewriter.grammar.parser import parse
from rewriter.lang.error import DivisionByZero, NotARedex, ReductionError
from rewriter.pure.redex import RedexKind, classify
from rewriter.pure.reducer import evaluate, reduce_at
from rewriter.pure.term import App, Arith, Constr, Lambda, Literal, Neg, Var, clone, find_binder


class ArithmeticTestCase(unittest.TestCase):

    def test_evaluate(self):
        cases = {
            ("+", 2, 3): 5,
            ("-", 2, 3): -1,
            ("*", 4, 5): 20,
            ("/", 7, 2): 3,
            ("/", 6, 3): 2,
            ("/", -7, 2): -4,
        }
        for (op, left, right), expected in cases.items():
            self.assertEqual(expected, evaluate(op, left, right), (op, left, right))

        self.assertRaises(DivisionByZero, evaluate, "/", 5, 0)

    def test_reduce_in_place(self):
        node = Arith("+", Literal(2), Literal(3))
        parent = Neg(node)
        self.assertEqual(RedexKind.ARITHMETIC, reduce_at(node))

        self.assertEqual(Literal(5), node)
        self.assertIs(node, parent.operand)
        self.assertEqual(Neg(Literal(5)), parent)

    def test_reduce_arith(self):
        cases = {
            "2 + 3": Literal(5),
            "2 - 3": Literal(-1),
            "6 * 7": Literal(42),
            "9 / 2": Literal(4),
            "-4": Literal(-4),
        }
        for case, expected in cases.items():
            term = parse(case)
            reduce_at(term)
            self.assertEqual(expected, term, case)

        term = Neg(Literal(-4))
        reduce_at(term)
        self.assertEqual(Literal(4), term)

    def test_division_by_zero(self):
        node = parse("5 / 0")
        with self.assertRaises(DivisionByZero):
            reduce_at(node)
        self.assertEqual(Arith("/", Literal(5), Literal(0)), node)

    def test_not_a_redex(self):
        should_raise = [
            Var("x"),
            Constr("A"),
            Literal(1),
            parse("\\x -> x"),
            parse("F 1"),
            parse("1 + (2 + 3)"),
            parse("let x = 1 in x"),
        ]
        for case in should_raise:
            before = clone(case)
            with self.assertRaises(NotARedex, msg=repr(case)):
                reduce_at(case)
            self.assertEqual(before, case)

        self.assertTrue(issubclass(NotARedex, ReductionError))
        self.assertTrue(issubclass(DivisionByZero, ReductionError))


class BetaTestCase(unittest.TestCase):

    def test_reduce_beta(self):
        cases = {
            "(\\x -> x) 1": Literal(1),
            "(\\x -> x + x) 2": Arith("+", Literal(2), Literal(2)),
            "(\\x -> F) 2": Constr("F"),
            "(\\f -> f 1) (\\y -> y)": App(Lambda("y", Var("y")), Literal(1)),
            "(\\x -> \\y -> x) A": Lambda("y", Constr("A")),
            "(\\x -> let y = x in y * x) 3": parse("let y = 3 in y * 3"),
        }
        for case, expected in cases.items():
            term = parse(case)
            self.assertEqual(RedexKind.BETA, reduce_at(term))
            self.assertEqual(expected, term, case)

    def test_reduce_nested(self):
        term = parse("F ((\\x -> x * 2) 5)")
        node = term.arg
        reduce_at(node)

        self.assertIs(node, term.arg)
        self.assertEqual(App(Constr("F"), Arith("*", Literal(5), Literal(2))), term)

        reduce_at(term.arg)
        self.assertEqual(App(Constr("F"), Literal(10)), term)

    def test_capture_avoiding_beta(self):
        term = parse("\\y -> (\\x -> \\y -> x) y")
        reduce_at(term.body)

        self.assertEqual(Lambda("y", Lambda("y'", Var("y"))), term)
        self.assertTrue(term.alpha_equals(parse("\\a -> \\b -> a")))

    def test_renaming_does_not_capture(self):
        term = parse("\\y -> (\\x -> \\y -> \\y' -> y) y")
        reduce_at(term.body)

        self.assertEqual(Lambda("y", Lambda("y''", Lambda("y'", Var("y''")))), term)
        self.assertTrue(term.alpha_equals(parse("\\a -> \\b -> \\c -> b")))

        var = term.body.body.body
        self.assertEqual(2, var.binding_id)
        self.assertIs(term.body, find_binder(term, var))
        self.assertEqual(var.binding_id, find_binder(term, var).binding_id)

    def test_classification_after_beta(self):
        cases = {
            "(\\x -> x) 1": RedexKind.NONE,
            "(\\x -> x 1) (\\y -> y)": RedexKind.BETA,
            "(\\x -> x + 1) 2": RedexKind.ARITHMETIC,
            "(\\x -> \\y -> x) 1": RedexKind.NONE,
        }
        for case, expected in cases.items():
            term = parse(case)
            reduce_at(term)
            self.assertEqual(expected, classify(term), case)

    def test_binding_ids_survive(self):
        term = parse("\\z -> (\\x -> \\y -> x z) 1")
        reduce_at(term.body)

        inner = term.body
        self.assertIsInstance(inner, Lambda)
        self.assertEqual(2, inner.binding_id)
        self.assertEqual(0, inner.body.arg.binding_id)


if __name__ == '__main__':
    unittest.main()
