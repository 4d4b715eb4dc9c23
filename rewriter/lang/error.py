"""Error handling for the rewriter. Only GenericExceptions should be encountered during running: if another type of
error is raised and makes it all the way to ErrorHandler, it is assumed to be an internal issue.

Every error leaves the term it was raised for untouched: parse failures produce no partial tree and reduction
failures are detected before any node is overwritten.
"""

import sys

from termcolor import colored


class GenericException(Exception):
    """Templates an error/warning message so that it can be used to throw a rewriter error/warning."""

    def __init__(self, msg, exprs=None, start=0, end=-1, diagnosis=True, internal=False):
        if exprs is None:
            exprs = ""
        if isinstance(exprs, str):
            exprs = [exprs]

        self.msg = msg.format(*(colored(str(expr), attrs=["bold"]) for expr in exprs))  # color expr snippets
        self.expr = str(exprs[0]) if exprs else ""  # exprs[0] should be the offending expr that caused the error
        self.end = end if end != -1 else len(self.expr)  # needed for error display

        self.start = start
        self.diagnosis = diagnosis
        self.internal = internal

        super().__init__(self.msg)


class ParseError(GenericException):
    """Grammar violation: none of the token kinds in `expected` was found, `got` was found instead."""

    def __init__(self, expected, got, text="", start=0, end=-1):
        if isinstance(expected, str):
            expected = (expected,)
        self.expected = tuple(expected)
        self.got = got
        self.text = text

        msg = f"expected {ParseError.describe(self.expected)}, got {got}"
        super().__init__(msg + (" in '{}'" if text else ""), text, start=start, end=end)

    @staticmethod
    def describe(kinds):
        """Human-readable list of token kinds: 'a', 'a or b', 'a, b, or c'."""
        kinds = [kind if kind in ("END", "VAR", "CONSTR", "LITERAL") else f'"{kind}"' for kind in kinds]
        if len(kinds) == 1:
            return kinds[0]
        elif len(kinds) == 2:
            return f"{kinds[0]} or {kinds[1]}"
        return ", ".join(kinds[:-1]) + f", or {kinds[-1]}"


class UnexpectedTokenKind(ParseError):
    """Raised by Lexer.expect when the current token is not of the required kind."""


class LexError(ParseError):
    """A character the lexer does not recognize. It surfaces as an ERROR token and is raised at first use."""

    def __init__(self, expected, char, text="", start=0):
        self.char = char
        super().__init__(expected, "ERROR", text, start=start, end=start + 1)
        self.msg = f"unrecognized character {colored(repr(char), attrs=['bold'])} ({self.msg})"
        self.args = (self.msg,)


class FreeVariableError(GenericException):
    """Static scope violation: a variable is used where no binder for it is active."""

    def __init__(self, name, text="", start=0, end=-1):
        self.name = name
        msg = ("use of free variable '{}'; free variables are not allowed, use constructors instead")
        super().__init__(msg, [name], diagnosis=False)
        if text:
            self.expr = text
            self.start, self.end = start, end if end != -1 else len(text)
            self.diagnosis = True


class ReductionError(GenericException):
    """Superclass for errors raised while reducing a term."""


class NotARedex(ReductionError):
    """Reduction requested at a node that is neither a beta nor an arithmetic redex."""

    def __init__(self, node):
        self.node = node
        super().__init__("'{}' is not a redex", type(node).__name__, diagnosis=False)


class DivisionByZero(ReductionError):
    """Arithmetic reduction of a division by a zero literal."""

    def __init__(self, dividend):
        self.dividend = dividend
        super().__init__("division by zero in '{}'", f"{dividend} / 0", diagnosis=False)


class ErrorHandler:
    """Context manager that will silently suppress Python errors and report rewriter errors/warnings."""
    ERROR = "red"
    WARNING = "magenta"
    STEP = "magenta"

    def __init__(self, fatal=True, verbose=False):
        self.fatal = fatal
        self.verbose = verbose
        self.steps = []  # (rule, expr) for every reduction step taken under this handler

    @staticmethod
    def diagnose(error, warning=False):
        """Returns offending part of error.expr highlighted and bolded."""
        color = ErrorHandler.WARNING if warning else ErrorHandler.ERROR

        diagnosis = "  " + error.expr[:error.start]

        end = max(error.end, error.start + 1)
        diagnosis += colored(error.expr[error.start:end], color, attrs=["bold"])
        diagnosis += error.expr[end:] + "\n"

        diagnosis += "  " + " " * error.start
        diagnosis += colored("^" + "~" * (end - error.start - 1), color, attrs=["bold"])

        return diagnosis

    def register_step(self, rule, expr):
        """Records a reduction step: rule is 'β' or 'δ', expr is the term after the step."""
        self.steps.append((rule, expr))
        if self.verbose:
            print(colored(f"{rule} ", ErrorHandler.STEP, attrs=["bold"]) + expr)

    def warn(self, *args, **kwargs):
        """Generates and prints runtime warning message based on args."""
        error = GenericException(*args, **kwargs)
        print(colored("warning: ", ErrorHandler.WARNING, attrs=["bold"]) + error.msg)

        if not error.internal and error.expr and error.diagnosis:
            print(ErrorHandler.diagnose(error, warning=True))

    def throw(self, error):
        """Reports error, a GenericException. Exits the process if this handler is fatal."""
        error_msg = ""
        if error.internal:
            error_msg += colored("[internal] ", ErrorHandler.ERROR, attrs=["bold"])

        error_msg += colored("error: ", ErrorHandler.ERROR, attrs=["bold"]) + error.msg
        print(error_msg)

        if not error.internal and error.expr and error.diagnosis:
            print(ErrorHandler.diagnose(error))

        if self.fatal:
            sys.exit(1)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        do_exit = False
        if exc_type is KeyboardInterrupt:
            self.throw(GenericException("keyboard interrupt"))
        elif exc_type is SystemExit:
            do_exit = True
        elif exc_type is RecursionError:
            self.throw(GenericException("term is nested too deeply, maximum recursion depth exceeded"))
        elif exc_type is not None and issubclass(exc_type, GenericException):
            self.throw(exc_val)
        elif exc_type is not None:
            self.throw(GenericException(f"unknown error: '{exc_type.__name__}: {exc_val}'", internal=True))
            do_exit = True

        return not do_exit
