import tempfile
import unittest
from pathlib import Path

from rational64 import DEFAULT_CONFIG, Config, ConfigError, OverflowPolicy


class OverflowPolicyTests(unittest.TestCase):
    def test_policy_values(self):
        self.assertEqual(OverflowPolicy.RAISE.value, "raise")
        self.assertEqual(OverflowPolicy.WRAP.value, "wrap")
        self.assertIs(OverflowPolicy("wrap"), OverflowPolicy.WRAP)


class ConfigTests(unittest.TestCase):
    def test_defaults(self):
        config = Config()
        self.assertIs(config.overflow, OverflowPolicy.RAISE)
        self.assertFalse(config.strict)
        self.assertEqual(config, DEFAULT_CONFIG)
        self.assertEqual(Config.default(), DEFAULT_CONFIG)

    def test_presets(self):
        self.assertIs(Config.parity().overflow, OverflowPolicy.WRAP)
        self.assertFalse(Config.parity().strict)
        self.assertIs(Config.checked().overflow, OverflowPolicy.RAISE)
        self.assertTrue(Config.checked().strict)

    def test_policy_from_string(self):
        self.assertIs(Config(overflow="WRAP").overflow, OverflowPolicy.WRAP)

    def test_invalid_values(self):
        with self.assertRaises(ConfigError):
            Config(overflow="saturate")
        with self.assertRaises(ConfigError):
            Config(strict="yes")
        with self.assertRaises(ValueError):
            Config.from_mapping({"precision": 64})

    def test_frozen(self):
        with self.assertRaises(AttributeError):
            Config().strict = True

    def test_combine(self):
        parity = Config.parity()
        self.assertIs(parity.combine(parity), parity)
        combined = parity.combine(Config(strict=True))
        self.assertIs(combined.overflow, OverflowPolicy.RAISE)
        self.assertTrue(combined.strict)
        both_wrap = parity.combine(Config(overflow=OverflowPolicy.WRAP, strict=True))
        self.assertIs(both_wrap.overflow, OverflowPolicy.WRAP)
        self.assertTrue(both_wrap.strict)

    def test_from_toml(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            flat = Path(tmpdir) / "flat.toml"
            flat.write_text('overflow = "wrap"\n')
            self.assertEqual(Config.from_toml(flat), Config.parity())

            nested = Path(tmpdir) / "nested.toml"
            nested.write_text('[rational64]\noverflow = "raise"\nstrict = true\n')
            self.assertEqual(Config.from_toml(nested), Config.checked())

            bad = Path(tmpdir) / "bad.toml"
            bad.write_text('rational64 = 3\n')
            with self.assertRaises(ConfigError):
                Config.from_toml(bad)


if __name__ == "__main__":  # pragma: no cover - direct execution helper
    unittest.main()
