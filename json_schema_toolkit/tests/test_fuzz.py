"""
Tests for the generator: every drawn value must validate against its schema.
"""

import unittest

import pytest
from hypothesis import HealthCheck, given, settings
from hypothesis.strategies import SearchStrategy

from json_schema_toolkit import FuzzConfig, Unsupported, UnsupportedSchemaError, draw_samples, fuzz, strategy_for, validate
from json_schema_toolkit.builder import (
    all_of,
    any_of,
    array,
    boolean,
    fallback,
    integer,
    lazy,
    null,
    number,
    object_,
    one_of,
    optional,
    recurse,
    ref,
    required,
    string,
    tuple_,
)
from json_schema_toolkit.fuzz import _fit_length

property_settings = settings(
    max_examples=150,
    deadline=None,
    suppress_health_check=[HealthCheck.too_slow, HealthCheck.data_too_large, HealthCheck.filter_too_much],
)


def linked_list():
    return object_(required("value", integer()), optional("next", lazy(linked_list)))


SUPPORTED_SCHEMAS = {
    "person": object_(
        required("lastName", string(min_length=1, max_length=20)),
        optional("age", integer(minimum=0, maximum=150)),
        optional("tags", array(items=string(enum=["a", "b"]), max_items=3)),
    ),
    "bounded_array": array(items=number(minimum=-1.5, maximum=1.5), min_items=2, max_items=5),
    "min_only_array": array(items=boolean(), min_items=3),
    "array_without_items": array(min_items=2),
    "long_string": string(min_length=50),
    "short_string": string(max_length=3),
    "integer_min_only": integer(minimum=1000),
    "integer_max_only": integer(maximum=-1000),
    "number_min_only": number(minimum=0.25),
    "number_max_only": number(maximum=-0.25),
    "unbounded_number": number(),
    "nullable": any_of([null(), integer(enum=[1, 2, 3])]),
    "tuple_with_additional": tuple_([integer(), string()], additional_items=boolean(), min_items=3, max_items=6),
    "tuple_without_positional": tuple_(additional_items=integer(minimum=0), max_items=4),
    "tuple_truncated": tuple_([integer(), string(), number()], min_items=1, max_items=2),
    "fallback": fallback({"type": "unknown"}),
    "linked_list": linked_list(),
}


@pytest.mark.parametrize("name", sorted(SUPPORTED_SCHEMAS))
def test_generated_values_validate(name):
    schema = SUPPORTED_SCHEMAS[name]

    @property_settings
    @given(strategy_for(schema))
    def check(value):
        assert validate(schema, value) == []

    check()


@given(strategy_for(string(enum=["e1", "e2"])))
def test_string_enum_containment(value):
    assert value in ("e1", "e2")


@given(strategy_for(integer(enum=[7, 11])))
def test_integer_enum_containment(value):
    assert value in (7, 11)


@property_settings
@given(strategy_for(tuple_([integer(), string(), number()], max_items=2)))
def test_tuple_truncated_to_max_items(value):
    assert len(value) == 2
    assert isinstance(value[0], int)
    assert isinstance(value[1], str)


@property_settings
@given(strategy_for(tuple_(min_items=4)))
def test_tuple_padded_to_min_items(value):
    assert 4 <= len(value) <= 104
    assert all(item is None for item in value)


@property_settings
@given(strategy_for(tuple_([integer(), integer()], max_items=2)))
def test_tuple_max_equal_to_positional_count(value):
    assert len(value) == 2


@property_settings
@given(strategy_for(tuple_([integer()], max_items=4)))
def test_tuple_filler_up_to_max_items(value):
    assert 1 <= len(value) <= 4


@given(strategy_for(tuple_([integer()], min_items=5, max_items=2)))
def test_tuple_with_contradictory_bounds_is_empty(value):
    assert value == []


@property_settings
@given(strategy_for(object_(optional("a", integer()), optional("b", integer()))))
def test_optional_properties_are_subsets(value):
    assert set(value) <= {"a", "b"}


class TestOptionalPresence(unittest.TestCase):
    def test_optional_properties_are_both_present_and_absent(self):
        samples = draw_samples(object_(optional("a", integer())), 100, seed=0)
        self.assertTrue(any("a" in sample for sample in samples))
        self.assertTrue(any("a" not in sample for sample in samples))


class TestUnsupported(unittest.TestCase):
    def test_refused_kinds(self):
        cases = {
            "ref": ref("anything"),
            "one_of": one_of([integer(), string()]),
            "all_of": all_of([integer(), integer(minimum=1)]),
            "min_properties": object_(min_properties=1),
            "max_properties": object_(max_properties=1),
            "recursive": recurse("node", lambda node: array(items=node)),
            "empty_enum": string(enum=[]),
            "empty_any_of": any_of([]),
            "integer_bounds_crossed": integer(minimum=5, maximum=1),
            "number_bounds_crossed": number(minimum=2.5, maximum=-2.5),
        }
        for name, schema in cases.items():
            with self.subTest(name=name):
                self.assertIsInstance(fuzz(schema), Unsupported)

    def test_refusal_inside_object_reports_pointer(self):
        schema = object_(required("outer", object_(optional("inner", one_of([integer()])))))
        result = fuzz(schema)
        self.assertIsInstance(result, Unsupported)
        self.assertEqual(result.pointer, ("outer", "inner"))

    def test_crossed_bounds_report_pointer(self):
        result = fuzz(object_(required("n", number(minimum=1, maximum=0))))
        self.assertEqual(result, Unsupported("minimum is greater than maximum", ("n",)))

    def test_any_of_with_unsupported_member_is_refused(self):
        self.assertIsInstance(fuzz(any_of([integer(), ref("x")])), Unsupported)

    def test_strategy_for_raises(self):
        with self.assertRaises(UnsupportedSchemaError) as ctx:
            strategy_for(one_of([integer()]))
        self.assertIsInstance(ctx.exception.unsupported, Unsupported)

    def test_supported_schema_gives_strategy(self):
        self.assertIsInstance(fuzz(integer()), SearchStrategy)


class TestDrawSamples(unittest.TestCase):
    def test_draws_valid_samples(self):
        schema = integer(minimum=5, maximum=50)
        samples = draw_samples(schema, 5, seed=1)
        self.assertGreaterEqual(len(samples), 1)
        self.assertLessEqual(len(samples), 5)
        for sample in samples:
            self.assertEqual(validate(schema, sample), [])

    def test_unsupported_schema_raises(self):
        with self.assertRaises(UnsupportedSchemaError):
            draw_samples(ref("x"), 3)

    def test_array_length_slack_is_configurable(self):
        config = FuzzConfig(array_length_slack=0)
        for sample in draw_samples(array(items=integer(), min_items=2), 20, seed=2, config=config):
            self.assertEqual(len(sample), 2)


class TestFitLength(unittest.TestCase):
    def test_pads_by_self_concatenation(self):
        self.assertEqual(_fit_length("ab", 6, None), "ababxababxx")

    def test_pads_empty_string(self):
        self.assertEqual(_fit_length("", 3, None), "xxx")

    def test_truncates(self):
        self.assertEqual(_fit_length("abcdef", None, 2), "ab")

    def test_pads_then_truncates_exactly(self):
        self.assertEqual(len(_fit_length("a", 4, 5)), 5)
        self.assertEqual(_fit_length("a", 4, 4), "aaxa")
