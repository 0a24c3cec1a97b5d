"""Tests for nemwallet_core.logging_config — formatters and root logger setup."""

import json
import logging
import os
import sys
import tempfile
import unittest

from nemwallet_core.logging_config import (
    REDACTED,
    KeyMaterialFilter,
    _HumanFormatter,
    _JSONFormatter,
    redact,
    setup_logging,
)
from nemwallet_core.serialization import Deserializer
from nemwallet_core.wallet_account import WalletAccount

from conftest import GENERATOR_ADDRESS_V0


def _record(msg="hello %s", args=("world",), level=logging.INFO, exc_info=None):
    return logging.LogRecord("nemwallet.test", level, __file__, 1, msg, args, exc_info)


class TestFormatters(unittest.TestCase):

    def test_json_fields(self):
        out = json.loads(_JSONFormatter().format(_record()))
        self.assertEqual(out["level"], "INFO")
        self.assertEqual(out["logger"], "nemwallet.test")
        self.assertEqual(out["msg"], "hello world")
        self.assertIn("ts", out)
        self.assertNotIn("exception", out)

    def test_json_exception(self):
        try:
            raise RuntimeError("boom")
        except RuntimeError:
            rec = _record(exc_info=sys.exc_info())
        out = json.loads(_JSONFormatter().format(rec))
        self.assertIn("RuntimeError: boom", out["exception"])

    def test_human_line(self):
        line = _HumanFormatter().format(_record(level=logging.WARNING))
        self.assertIn("[WARNING]", line)
        self.assertIn("nemwallet.test: hello world", line)
        self.assertIn(_HumanFormatter.COLOURS["WARNING"], line)


class TestSetupLogging(unittest.TestCase):

    def setUp(self):
        self.root = logging.getLogger()
        self._saved_handlers = list(self.root.handlers)
        self._saved_level = self.root.level

    def tearDown(self):
        for h in self.root.handlers:
            if h not in self._saved_handlers:
                h.close()
        self.root.handlers[:] = self._saved_handlers
        self.root.setLevel(self._saved_level)

    def test_level_and_single_console_handler(self):
        setup_logging(level="debug")
        self.assertEqual(self.root.level, logging.DEBUG)
        self.assertEqual(len(self.root.handlers), 1)
        self.assertIsInstance(self.root.handlers[0].formatter, _HumanFormatter)

    def test_unknown_level_falls_back_to_info(self):
        setup_logging(level="chatty")
        self.assertEqual(self.root.level, logging.INFO)

    def test_json_console(self):
        setup_logging(fmt="json")
        self.assertIsInstance(self.root.handlers[0].formatter, _JSONFormatter)

    def test_file_handler_writes_json(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, "logs", "nemwallet.log")
            setup_logging(level="INFO", log_file=path)
            self.assertEqual(len(self.root.handlers), 2)
            logging.getLogger("nemwallet.test").info("written %d", 7)
            for h in self.root.handlers:
                h.flush()
            self.root.handlers[1].close()
            with open(path, encoding="utf-8") as f:
                out = json.loads(f.readline())
        self.assertEqual(out["msg"], "written 7")


class TestKeyMaterialFilter(unittest.TestCase):

    HEX_KEY = "ab" * 32

    def test_redact_hex_and_decimal(self):
        self.assertEqual(redact(f"key 0x{self.HEX_KEY} end"), f"key {REDACTED} end")
        self.assertEqual(redact(f"'{self.HEX_KEY}z'"), f"'{REDACTED}z'")
        self.assertEqual(redact(str(2 ** 200)), REDACTED)

    def test_short_values_and_addresses_kept(self):
        text = f"port 7890 for {GENERATOR_ADDRESS_V0}"
        self.assertEqual(redact(text), text)

    def test_filter_rewrites_args(self):
        rec = _record(msg="remote key %s", args=(self.HEX_KEY,))
        self.assertTrue(KeyMaterialFilter().filter(rec))
        self.assertEqual(rec.getMessage(), f"remote key {REDACTED}")

    def test_filter_leaves_clean_record_untouched(self):
        rec = _record()
        KeyMaterialFilter().filter(rec)
        self.assertEqual(rec.msg, "hello %s")
        self.assertEqual(rec.args, ("world",))

    def test_filter_redacts_exception_text(self):
        try:
            raise ValueError(f"bad key {self.HEX_KEY}")
        except ValueError:
            rec = _record(exc_info=sys.exc_info())
        KeyMaterialFilter().filter(rec)
        out = json.loads(_JSONFormatter().format(rec))
        self.assertNotIn(self.HEX_KEY, out["exception"])
        self.assertIn(REDACTED, out["exception"])


class TestRedactionInstalled(unittest.TestCase):

    def setUp(self):
        self.root = logging.getLogger()
        self._saved_handlers = list(self.root.handlers)
        self._saved_level = self.root.level
        self._tmp = tempfile.TemporaryDirectory()
        self.path = os.path.join(self._tmp.name, "nemwallet.log")

    def tearDown(self):
        for h in self.root.handlers:
            if h not in self._saved_handlers:
                h.close()
        self.root.handlers[:] = self._saved_handlers
        self.root.setLevel(self._saved_level)
        self._tmp.cleanup()

    def _file_lines(self):
        for h in self.root.handlers:
            h.flush()
        with open(self.path, encoding="utf-8") as f:
            return [json.loads(line) for line in f if line.strip()]

    def test_every_handler_filters(self):
        setup_logging(log_file=self.path)
        for h in self.root.handlers:
            self.assertTrue(any(isinstance(f, KeyMaterialFilter) for f in h.filters))

    def test_malformed_remote_key_not_leaked(self):
        setup_logging(level="WARNING", log_file=self.path)
        leaked = "cd" * 32
        data = {"privateKey": "01", "remoteHarvestingPrivateKey": leaked + "-"}
        WalletAccount.deserialize(Deserializer(data))
        lines = self._file_lines()
        self.assertTrue(lines)
        self.assertTrue(all(leaked not in line["msg"] for line in lines))
        self.assertTrue(any(REDACTED in line["msg"] for line in lines))


if __name__ == "__main__":
    unittest.main()
