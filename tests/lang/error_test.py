import io
import unittest
from contextlib import redirect_stderr

from wuvi.lang.error import ErrorHandler, InputError, ParseError, WuviException
from wuvi.lang.values import Tag


class ErrorHandlerTestCase(unittest.TestCase):

    def setUp(self):
        self.stderr = io.StringIO()

    def test_fatal_error_exits(self):
        with redirect_stderr(self.stderr), self.assertRaises(SystemExit) as cm:
            with ErrorHandler() as handler:
                handler.register_file("prog.wv")
                handler.register_line("prog.wv", "n = <<- abc", 4)
                raise ParseError("abc", Tag.INTEGER)

        self.assertEqual(1, cm.exception.code)
        output = self.stderr.getvalue()
        self.assertIn("File 'prog.wv', line 4:", output)
        self.assertIn("error: ", output)
        self.assertIn("abc", output)

    def test_non_fatal_error_is_reported(self):
        handler = ErrorHandler(fatal=False)
        with redirect_stderr(self.stderr):
            with handler:
                handler.register_line("<in>", "x = _+_ q", 1)
                raise WuviException("something about '{}'", "q")

        self.assertIn("error: ", self.stderr.getvalue())
        self.assertEqual({}, handler.traceback)

    def test_internal_error_propagates(self):
        handler = ErrorHandler(fatal=False)
        with redirect_stderr(self.stderr), self.assertRaises(ValueError):
            with handler:
                raise ValueError("{unexpected}")

        self.assertIn("[internal] ", self.stderr.getvalue())
        self.assertIn("ValueError", self.stderr.getvalue())

    def test_warn(self):
        handler = ErrorHandler(fatal=False)
        handler.register_file("prog.wv")
        handler.register_line("prog.wv", "67 name", 2)

        with redirect_stderr(self.stderr):
            handler.warn(InputError("name"))

        output = self.stderr.getvalue()
        self.assertIn("prog.wv:2:3: ", output)
        self.assertIn("warning: ", output)
        self.assertIn("^", output)

    def test_empty_char_message(self):
        error = ParseError("", Tag.CHAR)
        self.assertEqual("cannot parse an empty literal as char", str(error))
        self.assertFalse(error.diagnosis)


if __name__ == '__main__':
    unittest.main()
