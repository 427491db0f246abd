import io
import sys
import tempfile
import unittest
from pathlib import Path
from unittest import mock

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from colstats.errors import FileCloseError, FileOpenError, FileReadError, NotNumberError  # noqa: E402
from colstats.extract import extract_column, extract_file  # noqa: E402


class _FailingClose(io.StringIO):
    def close(self):
        super().close()
        raise OSError("disk went away")


class _FailingRead(io.StringIO):
    def __next__(self):
        raise OSError(5, "Input/output error")


class ExtractColumnTestCase(unittest.TestCase):
    def test_selects_one_based_column(self):
        data = io.StringIO("1,10\n2,20\n")
        self.assertEqual(extract_column(data, 1), [1.0, 2.0])
        data = io.StringIO("1,10\n2,20\n")
        self.assertEqual(extract_column(data, 2), [10.0, 20.0])

    def test_parses_floats_and_whitespace(self):
        data = io.StringIO("x, 1.5\ny,-2e3\nz,3 \n")
        self.assertEqual(extract_column(data, 2), [1.5, -2000.0, 3.0])

    def test_non_numeric_field_aborts_with_context(self):
        data = io.StringIO("1,10\n2,bad\n3,30\n")
        with self.assertRaises(NotNumberError) as ctx:
            extract_column(data, 2, source="a.csv")
        err = ctx.exception
        self.assertEqual(err.path, "a.csv")
        self.assertEqual(err.row, 2)
        self.assertEqual(err.column, 2)
        self.assertEqual(err.value, "bad")
        self.assertIsInstance(err.cause, ValueError)
        self.assertIn("a.csv", str(err))
        self.assertIn("bad", str(err))

    def test_row_narrower_than_column(self):
        data = io.StringIO("1,10\n2\n")
        with self.assertRaises(NotNumberError) as ctx:
            extract_column(data, 2, source="short.csv")
        self.assertIsNone(ctx.exception.value)
        self.assertEqual(ctx.exception.row, 2)

    def test_header_is_data_unless_skipped(self):
        with self.assertRaises(NotNumberError):
            extract_column(io.StringIO("name,value\na,1\n"), 2)
        self.assertEqual(extract_column(io.StringIO("name,value\na,1\nb,2\n"), 2, skip_header=True), [1.0, 2.0])

    def test_blank_lines_are_ignored(self):
        data = io.StringIO("1,2\n\n3,4\n")
        self.assertEqual(extract_column(data, 2), [2.0, 4.0])

    def test_custom_delimiter(self):
        data = io.StringIO("1;2\n3;4\n")
        self.assertEqual(extract_column(data, 2, delimiter=";"), [2.0, 4.0])

    def test_empty_stream(self):
        self.assertEqual(extract_column(io.StringIO(""), 3), [])

    def test_stream_read_failure(self):
        with self.assertRaises(FileReadError) as ctx:
            extract_column(_FailingRead("1\n"), 1, source="x.csv")
        self.assertEqual(ctx.exception.path, "x.csv")
        self.assertIn("Cannot read data from file x.csv", str(ctx.exception))


class ExtractFileTestCase(unittest.TestCase):
    def test_reads_file(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "a.csv"
            path.write_text("1,10\n2,20\n")
            self.assertEqual(extract_file(path, 2), [10.0, 20.0])

    def test_missing_file_is_open_error(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "missing.csv"
            with self.assertRaises(FileOpenError) as ctx:
                extract_file(path, 1)
            self.assertEqual(ctx.exception.path, str(path))
            self.assertIsInstance(ctx.exception.cause, FileNotFoundError)

    def test_non_utf8_label_column_is_ignored(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "latin1.csv"
            path.write_bytes(b"caf\xe9,10\nna\xefve,20\n")
            self.assertEqual(extract_file(path, 2), [10.0, 20.0])

    def test_non_utf8_bytes_in_selected_column(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "blob.csv"
            path.write_bytes(b"1,2\n\xff\xfe\xfa,3\n")
            with self.assertRaises(NotNumberError) as ctx:
                extract_file(path, 1)
            self.assertEqual(ctx.exception.row, 2)

    def test_leading_bom_is_dropped(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "excel.csv"
            path.write_bytes(b"\xef\xbb\xbf1,10\n2,20\n")
            self.assertEqual(extract_file(path, 1), [1.0, 2.0])

    def test_read_failure_is_read_error(self):
        handle = _FailingRead("1,2\n")
        with mock.patch("colstats.extract.open", return_value=handle, create=True):
            with self.assertRaises(FileReadError) as ctx:
                extract_file("x.csv", 2)
        self.assertEqual(ctx.exception.path, "x.csv")
        self.assertIsInstance(ctx.exception.cause, OSError)
        self.assertTrue(handle.closed)

    def test_close_failure_is_reported(self):
        handle = _FailingClose("1,2\n")
        with mock.patch("colstats.extract.open", return_value=handle, create=True):
            with self.assertRaises(FileCloseError) as ctx:
                extract_file("x.csv", 2)
        self.assertEqual(ctx.exception.path, "x.csv")

    def test_close_failure_after_parse_error_keeps_cause(self):
        handle = _FailingClose("1,oops\n")
        with mock.patch("colstats.extract.open", return_value=handle, create=True):
            with self.assertRaises(FileCloseError) as ctx:
                extract_file("x.csv", 2)
        self.assertIsInstance(ctx.exception.__cause__, NotNumberError)

    def test_handle_closed_after_parse_error(self):
        handle = io.StringIO("1,oops\n")
        with mock.patch("colstats.extract.open", return_value=handle, create=True):
            with self.assertRaises(NotNumberError):
                extract_file("x.csv", 2)
        self.assertTrue(handle.closed)


if __name__ == "__main__":
    unittest.main()
