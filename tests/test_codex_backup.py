import re
import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

from zcf.codex.backup import (
    backup_codex_agents,
    backup_codex_config,
    backup_codex_files,
    backup_codex_prompts,
    create_backup_directory,
    get_backup_message,
)
from zcf.errors import FileSystemError
from zcf.i18n import init_i18n


class CodexBackupTests(unittest.TestCase):
    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.home = Path(self._tmp.name)
        self.codex_dir = self.home / ".codex"
        home_patch = patch.object(Path, "home", return_value=self.home)
        home_patch.start()
        self.addCleanup(home_patch.stop)
        self.addCleanup(self._tmp.cleanup)
        init_i18n("en")

    def test_backup_is_noop_without_codex_directory(self):
        self.assertIsNone(backup_codex_files())
        self.assertEqual(list(self.home.iterdir()), [])

    def test_create_backup_directory_is_idempotent(self):
        first = create_backup_directory("2025-01-02_03-04-05")
        second = create_backup_directory("2025-01-02_03-04-05")

        self.assertEqual(first, second)
        self.assertEqual(first, self.codex_dir / "backup" / "backup_2025-01-02_03-04-05")
        self.assertTrue(first.is_dir())

    def test_full_backup_copies_everything_except_previous_backups(self):
        self.codex_dir.mkdir()
        (self.codex_dir / "config.toml").write_text('model = "gpt-5"\n', encoding="utf-8")
        (self.codex_dir / "prompts").mkdir()
        (self.codex_dir / "prompts" / "review.md").write_text("review", encoding="utf-8")
        old_backup = self.codex_dir / "backup" / "backup_2024-01-01_00-00-00"
        old_backup.mkdir(parents=True)
        (old_backup / "config.toml").write_text("old", encoding="utf-8")

        backup_dir = backup_codex_files()

        self.assertIsNotNone(backup_dir)
        self.assertRegex(backup_dir.name, r"^backup_\d{4}-\d{2}-\d{2}_\d{2}-\d{2}-\d{2}$")
        self.assertEqual((backup_dir / "config.toml").read_text(encoding="utf-8"), 'model = "gpt-5"\n')
        self.assertTrue((backup_dir / "prompts" / "review.md").exists())
        self.assertFalse((backup_dir / "backup").exists())

    def test_single_artifact_backups_return_none_when_missing(self):
        self.codex_dir.mkdir()

        self.assertIsNone(backup_codex_config())
        self.assertIsNone(backup_codex_agents())
        self.assertIsNone(backup_codex_prompts())

    def test_single_artifact_backups_copy_file_and_directory(self):
        self.codex_dir.mkdir()
        (self.codex_dir / "config.toml").write_text("x = 1\n", encoding="utf-8")
        (self.codex_dir / "AGENTS.md").write_text("# agents", encoding="utf-8")
        (self.codex_dir / "prompts").mkdir()
        (self.codex_dir / "prompts" / "a.md").write_text("a", encoding="utf-8")

        config_copy = backup_codex_config()
        agents_copy = backup_codex_agents()
        prompts_copy = backup_codex_prompts()

        self.assertEqual(config_copy.read_text(encoding="utf-8"), "x = 1\n")
        self.assertEqual(agents_copy.name, "AGENTS.md")
        self.assertTrue((prompts_copy / "a.md").exists())

    def test_copy_failure_propagates(self):
        self.codex_dir.mkdir()
        with patch("zcf.codex.backup.copy_dir", side_effect=FileSystemError("disk full")):
            with self.assertRaises(FileSystemError):
                backup_codex_files()

    def test_backup_message(self):
        self.assertEqual(get_backup_message(None), "")
        message = get_backup_message(Path("/tmp/backup_x"))
        self.assertTrue(re.search(r"/tmp/backup_x", message))


if __name__ == "__main__":
    unittest.main()
