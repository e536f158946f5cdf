import io
import os
import tempfile
import unittest
from contextlib import redirect_stderr, redirect_stdout

from wuvi.main import main


class MainTestCase(unittest.TestCase):

    def setUp(self):
        self.stdout = io.StringIO()
        self.stderr = io.StringIO()

    def run_main(self, *argv):
        with redirect_stdout(self.stdout), redirect_stderr(self.stderr):
            main(list(argv))
        return self.stdout.getvalue()

    def write_program(self, text):
        fd, path = tempfile.mkstemp(suffix=".wv")
        with os.fdopen(fd, "w") as file:
            file.write(text)
        self.addCleanup(os.remove, path)
        return path

    def test_demo(self):
        expected = "Wuvi Interpreter\nExecuting program...\n\nHello_World!\n42\n<<>>\n\nWuvin' done\n"
        self.assertEqual(expected, self.run_main("--demo"))

    def test_file(self):
        path = self.write_program("x = <<- 7\n58 x\ninit f a b c\n58 x\nend\n58 bye\n")
        self.assertEqual("7\nbye\n", self.run_main(path))

    def test_parse_error_exits(self):
        path = self.write_program("58 first\nn = <<- abc\n58 never\n")

        with self.assertRaises(SystemExit) as cm:
            self.run_main(path)

        self.assertEqual(1, cm.exception.code)
        self.assertEqual("first\n", self.stdout.getvalue())
        self.assertIn("line 2", self.stderr.getvalue())

    def test_missing_file_exits(self):
        with self.assertRaises(SystemExit) as cm:
            self.run_main(os.path.join(tempfile.gettempdir(), "no-such-wuvi-program.wv"))

        self.assertEqual(1, cm.exception.code)
        self.assertIn("could not be opened", self.stderr.getvalue())


if __name__ == '__main__':
    unittest.main()
