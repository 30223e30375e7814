import os
import tempfile
import unittest
from unittest import mock

import index_worker
from pulse.config import PulseConfig
from pulse.storage.index_reader import latest_index_dir

from tests.helpers import write_jsonl


class TestConfig(unittest.TestCase):
    def test_from_env(self):
        env = {
            "PULSE_INPUT_GLOB": "data/*.jsonl",
            "PULSE_INDEX_ROOT": "out",
            "PULSE_COMMIT_EVERY": "250",
            "LOG_LEVEL": "debug",
        }
        with mock.patch.dict(os.environ, env, clear=True):
            cfg = PulseConfig.from_env()
        self.assertEqual(cfg.input_glob, "data/*.jsonl")
        self.assertEqual(cfg.index_root, "out")
        self.assertEqual(cfg.commit_every, 250)
        self.assertEqual(cfg.preview_chars, 500)
        self.assertEqual(cfg.log_level, "DEBUG")

    def test_defaults(self):
        with mock.patch.dict(os.environ, {}, clear=True):
            cfg = PulseConfig.from_env()
        self.assertEqual(cfg.input_glob, "analyses/partition=*/*.jsonl")
        self.assertEqual(cfg.index_root, "pulse_indexes")
        self.assertEqual(cfg.blocklist_path, "top_1m_nsfw_sites.txt")
        self.assertEqual(cfg.commit_every, 1000)

    def test_invalid_values(self):
        with mock.patch.dict(os.environ, {"PULSE_COMMIT_EVERY": "many"}, clear=True):
            with self.assertRaises(ValueError):
                PulseConfig.from_env()
        with self.assertRaises(ValueError):
            PulseConfig(commit_every=0)

    def test_overrides_skip_none(self):
        cfg = PulseConfig().with_overrides(index_root="x", commit_every=None)
        self.assertEqual(cfg.index_root, "x")
        self.assertEqual(cfg.commit_every, 1000)


class TestIndexWorker(unittest.TestCase):
    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.tmp = self._tmp.name
        self.index_root = os.path.join(self.tmp, "idx")
        self.pattern = os.path.join(self.tmp, "partition=*", "*.jsonl")

    def tearDown(self):
        self._tmp.cleanup()

    def _argv(self):
        return [
            "--input-glob", self.pattern,
            "--index-root", self.index_root,
            "--blocklist", os.path.join(self.tmp, "missing.txt"),
        ]

    def test_exit_code_1_without_input(self):
        with mock.patch.object(index_worker, "load_dotenv"):
            self.assertEqual(index_worker.main(self._argv()), 1)
        self.assertFalse(os.path.exists(self.index_root))

    def test_exit_code_0_and_index_written(self):
        write_jsonl(os.path.join(self.tmp, "partition=1", "a.jsonl"), [{"url": "https://a.example/"}])
        with mock.patch.object(index_worker, "load_dotenv"):
            self.assertEqual(index_worker.main(self._argv()), 0)
        self.assertIsNotNone(latest_index_dir(self.index_root))


if __name__ == "__main__":
    unittest.main()
