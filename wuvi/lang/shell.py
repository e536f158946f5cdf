"""Handles interactive/command-line mode for the Wuvi interpreter. Uses cmd as backend."""

import cmd


class Shell(cmd.Cmd):
    """Wuvi interpreter shell."""
    intro = "Wuvi Interpreter\nType 'help' for more information, 'exit' to leave."
    prompt = "> "
    secondary_prompt = ". "  # used while a function body is being captured
    _tmp_prompt = "> "       # also used for prompt swapping while capturing

    def __init__(self, sess, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.sess = sess

    def cmdloop(self, intro=None):
        """Same loop as cmd.Cmd.cmdloop, except that end of input calls do_EOF directly instead of arriving as the
        line 'EOF', which a function body may legitimately contain.
        """
        self.preloop()
        if intro is not None:
            self.intro = intro
        if self.intro:
            self.stdout.write(str(self.intro) + "\n")

        stop = None
        while not stop:
            line = self.read_line()
            if line is None:
                stop = self.do_EOF("")
            else:
                line = self.precmd(line)
                stop = self.onecmd(line)
                stop = self.postcmd(stop, line)
        self.postloop()

    def read_line(self):
        """Returns the next input line without its line ending, or None at end of input."""
        if self.use_rawinput:
            try:
                return input(self.prompt)
            except EOFError:
                return None

        self.stdout.write(self.prompt)
        self.stdout.flush()
        line = self.stdin.readline()
        return line.rstrip("\r\n") if line else None

    def onecmd(self, line):
        """Function bodies are captured verbatim, so they must not be parsed as shell commands."""
        if self.sess.capturing is not None:
            return self.default(line)
        return super().onecmd(line)

    def default(self, line):
        """Executes an arbitrary Wuvi line."""
        with self.sess.error_handler:  # needed because cmd.Cmd automatically exits on Exception
            self.sess.feed(line)

        self.prompt = self.secondary_prompt if self.sess.capturing is not None else self._tmp_prompt

    def do_help(self, arg):
        """Doesn't return docs, but rather a short intro."""
        if arg:
            return self.default(f"help {arg}")  # e.g. 'help = >>+> me' assigns a variable named help
        print("Welcome to the Wuvi interpreter!\n\n"
              "Assign with 'NAME = TYPE [VALUE]' where TYPE is one of >>+> (string), <<- (integer), \n"
              ">>+>> (float), >><<++--__ (double), <<>> (bool), _+_ (char) or _-_ (null). The bool \n"
              "literals are <<>> for true and >> for false.\n\n"
              "Call builtins with 'OPCODE ARG': 58 prints ARG, 67 reads a line into ARG.\n\n"
              "Try 'msg = >>+> Hello_World!' followed by '58 msg'.")

    def emptyline(self):
        """Do not repeat previous command on empty line."""
        return ""

    def do_EOF(self, arg):
        """Exits interpreter."""
        print()
        self.sess.finish()
        return True

    def do_exit(self, arg):
        """Exits interpreter."""
        if arg:
            return self.default(f"exit {arg}")
        self.sess.finish()
        return True
