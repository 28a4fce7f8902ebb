"""Handles interactive/command-line mode for the Phoenix interpreter. Uses cmd as backend."""

import cmd


class Shell(cmd.Cmd):
    """Phoenix interpreter shell."""
    prompt = ">"
    secondary_prompt = "."  # used for line continuations
    _tmp_prompt = ">"       # also used for prompt swapping in line continuations

    def __init__(self, sess, version, *args, **kwargs):
        super().__init__(*args, **kwargs)

        self.sess = sess
        self.intro = f"Phoenix v{version}"

        self._tmp_line = ""
        self.line_num = 0

    def default(self, line):
        """Runs a line of Phoenix, printing its value."""
        with self.sess.error_handler:  # needed because cmd.Cmd automatically exits on Exception
            self.line_num += 1
            line, add_to_prev = self.sess.preprocess_line(line, self._tmp_line)

            if add_to_prev:
                self._tmp_line = line
                self.prompt = self.secondary_prompt
                return

            self._tmp_line = ""
            self.prompt = self._tmp_prompt
            if line:
                print(self.sess.execute(line, self.line_num))

    def emptyline(self):
        """Do not repeat previous command on empty line."""
        if self._tmp_line:
            return self.default("")
        return False

    def do_help(self, arg):
        """Doesnt return docs, but rather a short intro."""
        print("Welcome to the Phoenix interpreter!\n\n"
              "Every line is an expression: try '1 + 2 * 3'. Bind a variable with 'let x = 5' and use it on the \n"
              "next line. 'if', 'while' and 'for' are expressions too:\n\n"
              "    let total = 0\n"
              "    for i in 0 to 3 then let total = total + i\n\n"
              "Type 'exit' to leave.")

    def do_EOF(self, arg):
        """Exits interpreter."""
        print()
        return self.do_exit(arg)

    def do_exit(self, arg):
        """Exits interpreter."""
        return True
