from __future__ import annotations

import io
import tempfile
import unittest
from contextlib import redirect_stderr, redirect_stdout
from pathlib import Path
from unittest.mock import patch

from _fixtures import FakeEngine, make_pdf
from scan2txt.cli import main
from scan2txt.exceptions import NoEngineAvailableError
from scan2txt.postprocess import END_MARKER, START_MARKER, parse_marked_output


class TestCli(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.tmp = Path(self._tmp.name)
        self.pdf = make_pdf(self.tmp / "doc.pdf")

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def _run(self, argv):
        out, err = io.StringIO(), io.StringIO()
        with redirect_stdout(out), redirect_stderr(err):
            code = main(argv)
        return code, out.getvalue(), err.getvalue()

    def test_success_prints_marked_block(self) -> None:
        body = "=== Page 1 ===\nHello World\n\n"
        with patch("scan2txt.cli.extract_text", return_value=body) as extract:
            code, out, err = self._run([str(self.pdf), "en-US"])
        self.assertEqual(code, 0)
        self.assertEqual(out, f"{START_MARKER}\n{body}\n{END_MARKER}\n")
        self.assertEqual(parse_marked_output(out), "=== Page 1 ===\nHello World")
        options = extract.call_args.args[1]
        self.assertEqual((options.language, options.dpi), ("en-US", 300))

    def test_defaults(self) -> None:
        with patch("scan2txt.cli.extract_text", return_value="") as extract:
            code, out, _ = self._run([str(self.pdf)])
        self.assertEqual(code, 0)
        self.assertEqual(out, f"{START_MARKER}\n\n{END_MARKER}\n")
        options = extract.call_args.args[1]
        self.assertEqual((options.language, options.dpi), ("fr-FR", 300))
        self.assertEqual(options.ocr_backend_kwargs, {})

    def test_options_are_forwarded(self) -> None:
        with patch("scan2txt.cli.extract_text", return_value="") as extract:
            self._run([str(self.pdf), "de-DE", "150", "--psm", "6", "--max-pixels", "1000000",
                       "--temp-dir", str(self.tmp)])
        options = extract.call_args.args[1]
        self.assertEqual(options.dpi, 150)
        self.assertEqual(options.max_pixels, 1000000)
        self.assertEqual(options.temp_dir, self.tmp)
        self.assertEqual(options.ocr_backend_kwargs, {"psm": 6})

    def test_missing_file(self) -> None:
        with patch("scan2txt.cli.extract_text") as extract:
            code, out, err = self._run([str(self.tmp / "missing.pdf")])
        self.assertEqual(code, 1)
        self.assertEqual(out, "")
        self.assertIn("file does not exist", err)
        extract.assert_not_called()

    def test_usage_errors_exit_1(self) -> None:
        for argv in ([], [str(self.pdf), "fr-FR", "abc"], [str(self.pdf), "fr-FR", "0"]):
            with self.subTest(argv=argv):
                code, out, err = self._run(argv)
                self.assertEqual(code, 1)
                self.assertEqual(out, "")
                self.assertIn("usage:", err)

    def test_pipeline_error(self) -> None:
        with patch("scan2txt.cli.extract_text", side_effect=NoEngineAvailableError("no OCR language")):
            code, out, err = self._run([str(self.pdf)])
        self.assertEqual(code, 1)
        self.assertEqual(out, "")
        self.assertIn("Error: no OCR language", err)
        self.assertNotIn("Traceback", err)

    def test_unexpected_error_has_traceback(self) -> None:
        with patch("scan2txt.cli.extract_text", side_effect=RuntimeError("kaboom")):
            code, out, err = self._run([str(self.pdf)])
        self.assertEqual(code, 1)
        self.assertIn("Error: kaboom", err)
        self.assertIn("Traceback", err)

    def test_end_to_end_with_fake_engine(self) -> None:
        engine = FakeEngine(["Hello World"])
        with patch("scan2txt.pipeline.create_engine", return_value=engine):
            code, out, err = self._run([str(self.pdf), "en-US", "72", "--temp-dir", str(self.tmp)])
        self.assertEqual(code, 0)
        self.assertIn("=== Page 1 ===\nHello World\n\n", out)
        self.assertIn("Processing 1 page(s)...", err)
        self.assertIn("Page 1/1, text extracted: 11 characters", err)
        self.assertNotIn("Processing", out)
        self.assertEqual(sorted(p.name for p in self.tmp.iterdir()), ["doc.pdf"])


if __name__ == "__main__":
    unittest.main()
