from __future__ import annotations

import shutil
import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

from scan2txt.exceptions import WorkspaceError
from scan2txt.workspace import WORKSPACE_PREFIX, workspace


class TestWorkspace(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.tmp = Path(self._tmp.name)

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def test_created_then_removed(self) -> None:
        with workspace(self.tmp) as path:
            self.assertTrue(path.is_dir())
            self.assertTrue(path.name.startswith(WORKSPACE_PREFIX))
            (path / "page_0001.png").write_bytes(b"x")
        self.assertFalse(path.exists())
        self.assertEqual(list(self.tmp.iterdir()), [])

    def test_removed_when_body_raises(self) -> None:
        with self.assertRaises(RuntimeError):
            with workspace(self.tmp) as path:
                (path / "page_0001.png").write_bytes(b"x")
                raise RuntimeError("page failed")
        self.assertFalse(path.exists())

    def test_names_are_unique(self) -> None:
        with workspace(self.tmp) as a, workspace(self.tmp) as b:
            self.assertNotEqual(a, b)

    def test_default_parent_is_system_temp(self) -> None:
        with workspace() as path:
            self.assertEqual(path.parent, Path(tempfile.gettempdir()))
        self.assertFalse(path.exists())

    def test_cleanup_failure_is_swallowed(self) -> None:
        with patch("scan2txt.workspace.shutil.rmtree", side_effect=OSError("locked")):
            with workspace(self.tmp) as path:
                pass
        self.assertTrue(path.exists())
        shutil.rmtree(path)

    def test_cannot_create(self) -> None:
        blocker = self.tmp / "file"
        blocker.write_text("not a directory")
        with self.assertRaises(WorkspaceError):
            with workspace(blocker):
                self.fail("body must not run")


if __name__ == "__main__":
    unittest.main()
