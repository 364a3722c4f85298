"""
Tests for the restricted-products specification (parsing and matching).
"""
from django.test import SimpleTestCase

from discount_rules.has_one_product.specification import (
    ByProduct,
    ExactQuantity,
    Malformed,
    QuantityRange,
    RuleSpecification,
    aggregate_cart_lines,
    evaluate,
    invalid_entries,
    parse_entry,
    parse_int,
    referenced_product_ids,
)


class ParseIntTests(SimpleTestCase):
    def test_accepts_plain_signed_and_padded_numbers(self):
        self.assertEqual(parse_int("77"), 77)
        self.assertEqual(parse_int(" 77 "), 77)
        self.assertEqual(parse_int("+3"), 3)
        self.assertEqual(parse_int("-3"), -3)

    def test_rejects_non_integers(self):
        for text in ("", " ", "abc", "1.5", "1_000", "7a", None):
            self.assertIsNone(parse_int(text), text)

    def test_rejects_values_outside_32_bit_range(self):
        self.assertEqual(parse_int("2147483647"), 2147483647)
        self.assertIsNone(parse_int("2147483648"))
        self.assertIsNone(parse_int("-2147483649"))


class ParseEntryTests(SimpleTestCase):
    def test_three_entry_shapes(self):
        self.assertEqual(parse_entry("77"), ByProduct(77))
        self.assertEqual(parse_entry("77:2"), ExactQuantity(77, 2))
        self.assertEqual(parse_entry("77:1-3"), QuantityRange(77, 1, 3))

    def test_bare_entry_that_is_not_a_number_is_ignored(self):
        self.assertIsNone(parse_entry("notanumber"))

    def test_bad_numbers_in_quantity_forms_are_malformed(self):
        for entry in ("77:abc", "x:2", "77:", "77:1-", "77:a-3", "77:1-b", "77:-1-3", "-5:2"):
            self.assertIsInstance(parse_entry(entry), Malformed, entry)

    def test_extra_segments_are_ignored(self):
        self.assertEqual(parse_entry("77:2:9"), ExactQuantity(77, 2))
        self.assertEqual(parse_entry("77:1-3-9"), QuantityRange(77, 1, 3))

    def test_whitespace_around_numbers(self):
        self.assertEqual(parse_entry("77 : 2"), ExactQuantity(77, 2))

    def test_parse_keeps_entry_order(self):
        parsed = RuleSpecification.parse(" 5 , foo, 6:2 ,, 7:1-4 ")
        self.assertFalse(parsed.blank)
        self.assertEqual(parsed.entries, (ByProduct(5), ExactQuantity(6, 2), QuantityRange(7, 1, 4)))


class EvaluateTests(SimpleTestCase):
    def test_blank_specification_always_matches(self):
        for text in ("", "   ", None, "\t\n"):
            self.assertTrue(evaluate(text, {}), repr(text))
            self.assertTrue(evaluate(text, {1: 1}), repr(text))

    def test_only_empty_entries_does_not_match(self):
        self.assertFalse(evaluate(",", {77: 1}))
        self.assertFalse(evaluate(" , ,", {77: 1}))

    def test_bare_product(self):
        self.assertTrue(evaluate("77", {77: 1}))
        self.assertFalse(evaluate("77", {78: 1}))

    def test_exact_quantity(self):
        self.assertTrue(evaluate("77:2", {77: 2}))
        self.assertFalse(evaluate("77:2", {77: 3}))

    def test_quantity_range_is_inclusive(self):
        self.assertTrue(evaluate("77:1-3", {77: 2}))
        self.assertTrue(evaluate("77:1-3", {77: 1}))
        self.assertTrue(evaluate("77:1-3", {77: 3}))
        self.assertFalse(evaluate("77:1-3", {77: 5}))

    def test_malformed_quantity_fails_whole_specification(self):
        self.assertFalse(evaluate("77:abc", {77: 1}))
        self.assertFalse(evaluate("77:abc", {}))
        self.assertFalse(evaluate("77:abc,78", {78: 1}))
        self.assertFalse(evaluate("77:1-x,78", {78: 1}))

    def test_malformed_entry_stops_matching_of_later_entries(self):
        parsed = RuleSpecification(entries=(Malformed("77:x"), ByProduct(78)), blank=False)
        self.assertFalse(parsed.matches({78: 1}))
        parsed = RuleSpecification(entries=(ByProduct(78), Malformed("77:x")), blank=False)
        self.assertTrue(parsed.matches({78: 1}))

    def test_malformed_entry_after_a_match_is_not_reached(self):
        self.assertTrue(evaluate("78,77:abc", {78: 1}))

    def test_malformed_bare_entry_is_skipped(self):
        self.assertTrue(evaluate("notanumber,78", {78: 1}))
        self.assertFalse(evaluate("notanumber", {78: 1}))

    def test_any_entry_matching_is_enough(self):
        self.assertTrue(evaluate("10, 20:5, 77:1-3", {77: 2, 99: 4}))
        self.assertFalse(evaluate("10, 20:5, 77:4-6", {77: 2, 20: 4}))

    def test_product_missing_from_cart_never_matches_quantity(self):
        self.assertFalse(evaluate("77:0", {78: 1}))
        self.assertFalse(evaluate("77:0-3", {78: 1}))

    def test_empty_cart_never_matches_configured_specification(self):
        self.assertFalse(evaluate("77", {}))
        self.assertFalse(evaluate("77:1-3", {}))

    def test_repeated_evaluation_is_stable(self):
        totals = {77: 2}
        results = {evaluate("77:abc,77:2", totals) for _ in range(5)}
        self.assertEqual(results, {False})
        parsed = RuleSpecification.parse("77:2")
        self.assertEqual([parsed.matches(totals) for _ in range(3)], [True, True, True])
        self.assertEqual(totals, {77: 2})


class CartLine:
    def __init__(self, product_id, quantity):
        self.product_id = product_id
        self.quantity = quantity


class AggregateCartLinesTests(SimpleTestCase):
    def test_lines_for_same_product_are_summed(self):
        totals = aggregate_cart_lines([CartLine(77, 1), CartLine(77, 2), CartLine(5, 1)])
        self.assertEqual(totals, {77: 3, 5: 1})
        self.assertTrue(evaluate("77:3", totals))
        self.assertFalse(evaluate("77:1", totals))

    def test_no_lines(self):
        self.assertEqual(aggregate_cart_lines([]), {})


class ReferencedProductIdsTests(SimpleTestCase):
    def test_quantities_and_ranges_are_dropped(self):
        self.assertEqual(referenced_product_ids("77, 123:2, 156:3-8"), [77, 123, 156])

    def test_unparsable_and_empty_entries_are_skipped(self):
        self.assertEqual(referenced_product_ids("abc, ,5, x:3, :9"), [5, 9])
        self.assertEqual(referenced_product_ids(""), [])


class InvalidEntriesTests(SimpleTestCase):
    def test_documented_formats_are_valid(self):
        self.assertEqual(invalid_entries("77, 123:2, 156:3-8"), [])
        self.assertEqual(invalid_entries("77 : 2, 8 : 1 - 4"), [])

    def test_reports_each_bad_entry(self):
        self.assertEqual(
            invalid_entries("77, abc, 5:x, 6:1-, 0, 7:5-2, -3"),
            ["abc", "5:x", "6:1-", "0", "7:5-2", "-3"],
        )
