from unittest import TestCase

from json_schema_toolkit.config import FuzzConfig, ToolkitConfig, ValidatorConfig


class TestConfig(TestCase):
    def test_defaults(self):
        config = ToolkitConfig()
        self.assertFalse(config.validator.strict_refs)
        self.assertFalse(config.validator.enforce_property_bounds)
        self.assertEqual(config.fuzz.tuple_filler_slack, 100)

    def test_from_dict_ignores_unknown_keys(self):
        config = ValidatorConfig.from_dict({"strict_refs": True, "no_such_option": 1})
        self.assertTrue(config.strict_refs)
        self.assertFalse(hasattr(config, "no_such_option"))

    def test_nested_sections(self):
        config = ToolkitConfig.from_dict({"validator": {"strict_refs": True}, "fuzz": {"array_length_slack": 3}})
        self.assertTrue(config.validator.strict_refs)
        self.assertEqual(config.fuzz.array_length_slack, 3)
        self.assertEqual(config.fuzz.boundary_offset, 10)

    def test_round_trip_through_dict(self):
        config = ToolkitConfig(
            validator=ValidatorConfig(enforce_property_bounds=True),
            fuzz=FuzzConfig(tuple_filler_slack=5),
        )
        self.assertEqual(ToolkitConfig.from_dict(config.to_dict()), config)
