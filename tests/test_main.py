import logging
import unittest
from pathlib import Path
from unittest import mock

from _support import make_repo_tmpdir

import gopher.__main__ as main_mod
from gopher.core.config import AppConfig


class ConfigureLoggingTests(unittest.TestCase):
    def setUp(self):
        root = logging.getLogger()
        self._saved = (root.level, list(root.handlers))

    def tearDown(self):
        root = logging.getLogger()
        for handler in list(root.handlers):
            if handler not in self._saved[1]:
                root.removeHandler(handler)
                handler.close()
        root.setLevel(self._saved[0])

    def test_appends_to_log_file(self):
        with make_repo_tmpdir("_tmp_log_") as tmp:
            log_path = Path(tmp) / "gopherlog"
            log_path.write_text("earlier run\n", encoding="utf-8")
            with mock.patch.dict(main_mod.os.environ, {"GOPHER_DEBUG": "1"}):
                handler = main_mod.configure_logging(AppConfig(log_path=log_path))
            logging.getLogger("gopher.test").debug("hello log")
            handler.flush()
            logging.getLogger().removeHandler(handler)
            handler.close()
            content = log_path.read_text(encoding="utf-8")
        self.assertTrue(content.startswith("earlier run\n"))
        self.assertIn("[DEBUG] gopher.test: hello log", content)

    def test_unwritable_log_falls_back_to_null_handler(self):
        config = AppConfig(log_path=Path("/nonexistent-dir/for/gopher/log"))
        with mock.patch.dict(main_mod.os.environ, {}, clear=False):
            handler = main_mod.configure_logging(config)
        self.assertIsInstance(handler, logging.NullHandler)


class RunTests(unittest.TestCase):
    def setUp(self):
        patcher = mock.patch.object(main_mod, "configure_logging")
        patcher.start()
        self.addCleanup(patcher.stop)
        patcher = mock.patch.object(main_mod, "load_config", return_value=AppConfig())
        patcher.start()
        self.addCleanup(patcher.stop)

    def test_clean_exit(self):
        with mock.patch.object(main_mod.curses, "wrapper") as wrapper:
            self.assertEqual(main_mod.main_cli(), 0)
        wrapper.assert_called_once_with(main_mod.main, main_mod.load_config.return_value)

    def test_keyboard_interrupt(self):
        with mock.patch.object(main_mod.curses, "wrapper", side_effect=KeyboardInterrupt):
            self.assertEqual(main_mod.run(), 130)

    def test_crash_restores_terminal(self):
        with (
            mock.patch.object(main_mod.curses, "wrapper", side_effect=RuntimeError("boom")),
            mock.patch.object(main_mod.curses, "endwin") as endwin,
            mock.patch.object(main_mod.traceback, "print_exc"),
            mock.patch("builtins.print"),
            mock.patch.object(main_mod.logging.getLogger("gopher.__main__"), "exception"),
        ):
            self.assertEqual(main_mod.run(), 1)
        endwin.assert_called_once_with()


if __name__ == "__main__":
    unittest.main()
