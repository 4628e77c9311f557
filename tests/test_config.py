"""Tests for configuration defaults and validation."""

import unittest

from kiku import keys
from kiku.config import Config, ConfigError


class ConfigTests(unittest.TestCase):
    """Config merges defaults once and refuses bad values."""

    def test_defaults(self):
        config = Config()
        self.assertEqual(config.activation_key_code, keys.ENTER)
        self.assertEqual(config.dismiss_key_code, keys.ESCAPE)
        self.assertEqual(config.dismiss_key, "Escape")
        self.assertTrue(config.case_sensitive)
        self.assertEqual(config.blacklisted_key_codes, frozenset({keys.SHIFT}))

    def test_from_mapping_fills_missing_fields(self):
        config = Config.from_mapping({"case_sensitive": False})
        self.assertFalse(config.case_sensitive)
        self.assertEqual(config.activation_key_code, keys.ENTER)

    def test_from_mapping_none_is_default(self):
        self.assertEqual(Config.from_mapping(None), Config())

    def test_blacklist_is_frozen(self):
        config = Config(blacklisted_key_codes=[keys.SHIFT, keys.ALT, keys.SHIFT])
        self.assertEqual(config.blacklisted_key_codes, frozenset({keys.SHIFT, keys.ALT}))
        self.assertTrue(config.is_blacklisted(keys.ALT))
        self.assertFalse(config.is_blacklisted(keys.CTRL))

    def test_type_mismatches_raise(self):
        bad = [
            {"activation_key_code": "13"},
            {"activation_key_code": True},
            {"dismiss_key_code": -1},
            {"case_sensitive": "yes"},
            {"case_sensitive": 1},
            {"blacklisted_key_codes": 16},
            {"blacklisted_key_codes": "16"},
            {"blacklisted_key_codes": ["16"]},
            {"dismiss_key": ""},
            {"dismiss_key": 27},
        ]
        for fields in bad:
            with self.subTest(fields=fields):
                with self.assertRaises(ConfigError):
                    Config.from_mapping(fields)

    def test_conflicting_codes_raise(self):
        with self.assertRaises(ConfigError):
            Config(activation_key_code=keys.ESCAPE)
        with self.assertRaises(ConfigError):
            Config(blacklisted_key_codes={keys.ENTER})

    def test_unknown_fields_raise(self):
        with self.assertRaises(ConfigError) as ctx:
            Config.from_mapping({"triggerKey": 13})
        self.assertIn("triggerKey", str(ctx.exception))

    def test_non_mapping_raises(self):
        with self.assertRaises(ConfigError):
            Config.from_mapping(["case_sensitive"])

    def test_config_error_is_value_error(self):
        self.assertTrue(issubclass(ConfigError, ValueError))

    def test_describe_lists_every_setting(self):
        lines = Config(blacklisted_key_codes={keys.ALT, keys.SHIFT}).describe()
        self.assertEqual(
            lines,
            [
                "activation_key_code: 13",
                "dismiss_key_code: 27",
                "dismiss_key: Escape",
                "case_sensitive: True",
                "blacklisted_key_codes: [16, 18]",
            ],
        )


if __name__ == "__main__":
    unittest.main()
