"""Handles interactive mode for the rewriter. Uses cmd as backend."""

import cmd

from termcolor import colored

from rewriter.lang.error import GenericException
from rewriter.pure.pretty import display, pretty


class Shell(cmd.Cmd):
    """Term rewriting shell: enter a term, then reduce its redexes one step at a time."""
    intro = "Click-to-reduce term rewriter :: Python backend\nType '?' or 'help' for more information."
    prompt = "> "

    def __init__(self, sess, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.sess = sess

    def show(self):
        """Prints the current term followed by its numbered redexes."""
        print(pretty(self.sess.term))
        for idx, (__, node, kind) in enumerate(self.sess.redexes()):
            print(f"  [{idx}] {colored(kind.value.ljust(10), attrs=['bold'])} {pretty(node)}")

    def default(self, line):
        """Parses an arbitrary term and makes it the current one."""
        with self.sess.error_handler:  # needed because cmd.Cmd automatically exits on Exception
            self.sess.submit(line)
            self.show()

    def do_redexes(self, arg):
        """Lists the redexes of the current term."""
        with self.sess.error_handler:
            self.show()

    def do_step(self, arg):
        """step N: reduces redex number N (see 'redexes')."""
        with self.sess.error_handler:
            try:
                index = int(arg)
            except ValueError:
                raise GenericException("step expects a redex number, got '{}'", arg, diagnosis=False)
            self.sess.reduce(index)
            self.show()

    def do_tree(self, arg):
        """Displays the parse tree of the current term."""
        with self.sess.error_handler:
            if self.sess.term is None:
                raise GenericException("no term has been entered yet", diagnosis=False)
            print(display(self.sess.term))

    def do_history(self, arg):
        """Lists the terms reduced so far, oldest first."""
        for idx, snapshot in enumerate(self.sess.history):
            print(f"  {idx}: {pretty(snapshot)}")

    def do_undo(self, arg):
        """Goes back to the term before the last step."""
        with self.sess.error_handler:
            self.sess.undo()
            self.show()

    def do_help(self, arg):
        """Doesnt return docs, but rather a short intro."""
        if arg:
            return super().do_help(arg)
        print("Welcome to the term rewriter!\n\n"
              "Enter a term such as '(\\x -> x + 1) (2 * 3)'. Terms are built from variables (which must be\n"
              "bound by 'let' or '\\'), Constructors, integers, application and + - * /.\n\n"
              "Every reducible subterm (redex) is listed with a number. 'step N' reduces redex N by one\n"
              "step. 'tree' shows the parse tree, 'history' the previous terms and 'undo' reverts a step.")

    def emptyline(self):
        """Do not repeat previous command on empty line."""
        return ""

    def do_EOF(self, arg):
        """Exits the rewriter."""
        print()
        return self.do_exit(arg)

    def do_exit(self, arg):
        """Exits the rewriter."""
        return True
