from __future__ import annotations

import tempfile
import unittest
from pathlib import Path

from _fixtures import make_pdf
from scan2txt.document import open_document
from scan2txt.exceptions import DocumentOpenError


class TestOpenDocument(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.tmp = Path(self._tmp.name)

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def test_missing_file(self) -> None:
        with self.assertRaises(DocumentOpenError) as ctx:
            open_document(self.tmp / "missing.pdf")
        self.assertIn("does not exist", str(ctx.exception))

    def test_corrupt_file(self) -> None:
        bad = self.tmp / "bad.pdf"
        bad.write_bytes(b"this is not a pdf at all")
        with self.assertRaises(DocumentOpenError):
            open_document(bad)

    def test_directory_is_not_a_document(self) -> None:
        with self.assertRaises(DocumentOpenError):
            open_document(self.tmp)

    def test_page_count_and_sizes(self) -> None:
        pdf = make_pdf(self.tmp / "doc.pdf", pages=3, size=(612, 792))
        with open_document(pdf) as doc:
            self.assertEqual(doc.page_count, 3)
            self.assertEqual(doc.page_size(2), (612, 792))
            with self.assertRaises(IndexError):
                doc.page_size(3)
            with self.assertRaises(IndexError):
                doc.page_size(-1)


if __name__ == "__main__":
    unittest.main()
