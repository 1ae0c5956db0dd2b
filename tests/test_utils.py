import io
import os
import unittest
from unittest import mock

from lsgrid import utils


class _TTY(io.StringIO):
    def isatty(self):
        return True


class _ClosedStream:
    def isatty(self):
        raise ValueError("I/O operation on closed file")


class UtilsTests(unittest.TestCase):
    def test_divide_rounding_up(self):
        self.assertEqual(utils.divide_rounding_up(7, 3), 3)
        self.assertEqual(utils.divide_rounding_up(6, 3), 2)
        self.assertEqual(utils.divide_rounding_up(0, 4), 0)

    def test_parse_width(self):
        self.assertEqual(utils.parse_width("80"), 80)
        self.assertEqual(utils.parse_width(" 120 "), 120)
        self.assertIsNone(utils.parse_width("0"))
        self.assertIsNone(utils.parse_width("-4"))
        self.assertIsNone(utils.parse_width("wide"))
        self.assertIsNone(utils.parse_width(None))

    def test_is_terminal(self):
        self.assertTrue(utils.is_terminal(_TTY()))
        self.assertFalse(utils.is_terminal(io.StringIO()))
        self.assertFalse(utils.is_terminal(object()))
        self.assertFalse(utils.is_terminal(_ClosedStream()))

    def test_columns_environment_wins(self):
        with mock.patch.dict(os.environ, {"COLUMNS": "132"}):
            self.assertEqual(utils.detect_console_width(io.StringIO()), 132)

    def test_piped_output_has_no_width(self):
        with mock.patch.dict(os.environ):
            os.environ.pop("COLUMNS", None)
            self.assertIsNone(utils.detect_console_width(io.StringIO()))

    def test_terminal_size_for_a_tty(self):
        with mock.patch.dict(os.environ):
            os.environ.pop("COLUMNS", None)
            with mock.patch.object(utils.shutil, "get_terminal_size", return_value=os.terminal_size((97, 30))):
                self.assertEqual(utils.detect_console_width(_TTY()), 97)
            with mock.patch.object(utils.shutil, "get_terminal_size", return_value=os.terminal_size((0, 0))):
                self.assertIsNone(utils.detect_console_width(_TTY()))


if __name__ == '__main__':
    unittest.main()
