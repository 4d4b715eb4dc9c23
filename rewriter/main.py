"""Runs the rewriter on a single term given on the command line, or in interactive mode. Also uses the error handling
context manager. Called from the rewriter console script.
"""

import argparse

from rewriter.lang.error import ErrorHandler
from rewriter.lang.session import Session
from rewriter.lang.shell import Shell
from rewriter.pure.pretty import display, pretty


def build_parser():
    parser = argparse.ArgumentParser(description="Click-to-reduce rewriter for a small lambda calculus.")
    parser.add_argument("term", help="term to rewrite (if empty, goes to interactive mode)", nargs="?")
    parser.add_argument("--step", help="reduce redex number N of the current term (repeatable)", type=int,
                        action="append", default=[], metavar="N")
    parser.add_argument("--tree", help="display the parse tree of the result", action="store_true")
    parser.add_argument("--trace", help="print every reduction step as it is taken", action="store_true")
    return parser


def main(argv=None):
    """Runs the rewriter. Called from the rewriter console script."""
    args = build_parser().parse_args(argv)

    with ErrorHandler(fatal=args.term is not None, verbose=args.trace) as error_handler:
        sess = Session(error_handler)

        if args.term is not None:
            sess.submit(args.term)
            for index in args.step:
                sess.reduce(index)

            print(pretty(sess.term))
            if args.tree:
                print(display(sess.term))
            for idx, (__, node, kind) in enumerate(sess.redexes()):
                print(f"  [{idx}] {kind.value.ljust(10)} {pretty(node)}")

        else:
            Shell(sess).cmdloop()


if __name__ == "__main__":
    main()
