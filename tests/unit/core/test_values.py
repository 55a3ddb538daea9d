"""
Test cases for the jsontree value tree.

Tests focus on payload access, ownership and container growth.
"""

import unittest

from jsontree.core.values import (
    JsonArray,
    JsonBoolean,
    JsonNull,
    JsonNumber,
    JsonObject,
    JsonString,
    Member,
    ValueType,
    from_python,
)
from jsontree.security.exceptions import OwnershipError, ValueTypeError


class TestScalarValues(unittest.TestCase):
    """Test scalar node construction and payload access."""

    def test_type_tags(self):
        """Every node reports its discriminant."""
        cases = [
            (JsonNull(), ValueType.NULL),
            (JsonBoolean(True), ValueType.BOOLEAN),
            (JsonNumber(1), ValueType.NUMBER),
            (JsonString("x"), ValueType.STRING),
            (JsonArray(), ValueType.ARRAY),
            (JsonObject(), ValueType.OBJECT),
        ]
        for value, expected in cases:
            with self.subTest(value=value):
                self.assertIs(value.type, expected)

    def test_numbers_are_floats(self):
        """Integers collapse to 64-bit floats."""
        number = JsonNumber(3)
        self.assertIsInstance(number.as_number(), float)
        self.assertEqual(number, JsonNumber(3.0))

    def test_matching_accessors(self):
        """Each accessor returns the payload of its own variant."""
        self.assertTrue(JsonBoolean(True).as_bool())
        self.assertEqual(JsonNumber(2.5).as_number(), 2.5)
        self.assertEqual(JsonString("hi").as_string(), "hi")
        self.assertTrue(JsonNull().is_null())

    def test_wrong_accessor_raises(self):
        """Reading the wrong payload fails instead of returning garbage."""
        with self.assertRaises(ValueTypeError) as cm:
            JsonString("1").as_number()
        self.assertIn("Expected number value, got string", str(cm.exception))

        with self.assertRaises(ValueTypeError):
            JsonNull().as_bool()
        with self.assertRaises(ValueTypeError):
            JsonNumber(0).as_array()
        with self.assertRaises(ValueTypeError):
            JsonArray().as_object()

    def test_value_type_error_is_type_error(self):
        """ValueTypeError can be caught as a plain TypeError."""
        with self.assertRaises(TypeError):
            JsonBoolean(False).as_string()

    def test_payload_validation(self):
        """Constructors reject payloads of the wrong Python type."""
        with self.assertRaises(ValueTypeError):
            JsonBoolean(1)
        with self.assertRaises(ValueTypeError):
            JsonNumber(True)
        with self.assertRaises(ValueTypeError):
            JsonNumber("1")
        with self.assertRaises(ValueTypeError):
            JsonString(b"bytes")

    def test_unpaired_surrogates_rejected(self):
        """Strings and keys must be encodable as UTF-8."""
        for code_point in (0xD800, 0xDBFF, 0xDC00, 0xDFFF):
            with self.subTest(code_point=hex(code_point)):
                with self.assertRaises(ValueTypeError) as cm:
                    JsonString("a" + chr(code_point))
                self.assertIn(f"U+{code_point:04X}", str(cm.exception))
                with self.assertRaises(ValueTypeError):
                    from_python(chr(code_point))
                with self.assertRaises(ValueTypeError):
                    JsonObject().append(chr(code_point), JsonNull())

    def test_astral_characters_accepted(self):
        """A character outside the BMP is one code point, not a surrogate pair."""
        self.assertEqual(JsonString(chr(0x1F600)).as_string(), chr(0x1F600))

    def test_huge_integer_rejected(self):
        """Integers beyond float range cannot become numbers."""
        with self.assertRaises(ValueTypeError):
            JsonNumber(10 ** 400)

    def test_scalars_have_no_children(self):
        """Lookups on scalars are absent."""
        self.assertIsNone(JsonString("abc").get(0))
        self.assertIsNone(JsonNumber(1).get("a"))


class TestArrayValues(unittest.TestCase):
    """Test arrays: ordering, lookup and growth."""

    def test_append_preserves_order(self):
        """Elements come back in insertion order."""
        array = JsonArray()
        for i in range(3):
            array.append(JsonNumber(i))
        self.assertEqual([item.as_number() for item in array], [0.0, 1.0, 2.0])
        self.assertEqual(len(array), 3)

    def test_bounds_checked_get(self):
        """Out-of-range and non-integer indexes are absent."""
        array = JsonArray([JsonNumber(1), JsonNumber(2)])
        self.assertEqual(array.get(1), JsonNumber(2))
        self.assertIsNone(array.get(2))
        self.assertIsNone(array.get(-1))
        self.assertIsNone(array.get("0"))
        self.assertIsNone(array.get(True))

    def test_getitem_raises_index_error(self):
        """Subscripting past the end raises IndexError."""
        array = JsonArray([JsonNull()])
        self.assertEqual(array[0], JsonNull())
        with self.assertRaises(IndexError):
            array[1]

    def test_initial_capacity(self):
        """A new container reserves sixteen slots."""
        self.assertEqual(JsonArray().capacity, 16)
        self.assertEqual(JsonObject().capacity, 16)

    def test_capacity_doubles(self):
        """Growing past the capacity doubles it and keeps every element."""
        array = JsonArray()
        for i in range(16):
            array.append(JsonNumber(i))
        self.assertEqual(array.capacity, 16)

        array.append(JsonNumber(16))
        self.assertEqual(array.capacity, 32)

        for i in range(17, 40):
            array.append(JsonNumber(i))
        self.assertEqual(array.capacity, 64)
        self.assertLessEqual(len(array), array.capacity)
        for i in range(40):
            self.assertEqual(array.get(i).as_number(), float(i))

    def test_as_array_is_a_copy(self):
        """Mutating the returned list does not change the array."""
        array = JsonArray([JsonNumber(1)])
        items = array.as_array()
        items.clear()
        self.assertEqual(len(array), 1)

    def test_structural_equality(self):
        """Arrays compare by content."""
        self.assertEqual(
            JsonArray([JsonNumber(1), JsonString("a")]),
            JsonArray([JsonNumber(1.0), JsonString("a")]),
        )
        self.assertNotEqual(JsonArray([JsonNumber(1)]), JsonArray([JsonNumber(2)]))
        self.assertNotEqual(JsonArray(), JsonObject())


class TestObjectValues(unittest.TestCase):
    """Test objects: ordering, duplicate keys and lookup."""

    def test_insertion_order(self):
        """Members keep insertion order, not sorted order."""
        obj = JsonObject()
        obj.append("b", JsonNumber(1))
        obj.append("a", JsonNumber(2))
        self.assertEqual(obj.keys(), ["b", "a"])

    def test_duplicate_keys_first_match(self):
        """Duplicate keys are kept and lookups return the first."""
        obj = JsonObject()
        obj.append("x", JsonNumber(1))
        obj.append("x", JsonNumber(2))
        self.assertEqual(len(obj), 2)
        self.assertEqual(obj.get("x"), JsonNumber(1))
        self.assertEqual(obj.get_all("x"), [JsonNumber(1), JsonNumber(2)])

    def test_missing_key_is_absent(self):
        """Unknown keys and non-string selectors are absent."""
        obj = JsonObject({"a": JsonNull()})
        self.assertIsNone(obj.get("b"))
        self.assertIsNone(obj.get(0))
        with self.assertRaises(KeyError):
            obj["b"]

    def test_key_match_is_exact(self):
        """Keys match case-sensitively with no normalization."""
        obj = JsonObject({"Key": JsonNumber(1)})
        self.assertIsNone(obj.get("key"))
        self.assertIsNone(obj.get("Key "))
        self.assertIn("Key", obj)

    def test_members(self):
        """Members are key/value named tuples."""
        obj = JsonObject([("a", JsonNumber(1))])
        member = obj.as_object()[0]
        self.assertIsInstance(member, Member)
        self.assertEqual(member.key, "a")
        self.assertEqual(member.value, JsonNumber(1))

    def test_non_string_key_rejected(self):
        """Keys must be str."""
        with self.assertRaises(ValueTypeError):
            JsonObject().append(1, JsonNull())

    def test_growth_past_sixteen(self):
        """Objects grow like arrays and every key stays reachable."""
        obj = JsonObject()
        for i in range(20):
            obj.append(f"k{i}", JsonNumber(i))
        self.assertEqual(obj.capacity, 32)
        for i in range(20):
            self.assertEqual(obj.get(f"k{i}"), JsonNumber(i))


class TestOwnership(unittest.TestCase):
    """Test exclusive ownership and acyclicity."""

    def test_child_knows_owner(self):
        """Attaching records the owning container."""
        child = JsonNumber(1)
        array = JsonArray([child])
        self.assertIs(child.owner, array)
        self.assertIsNone(array.owner)

    def test_child_cannot_be_shared(self):
        """A node already attached cannot join a second container."""
        child = JsonString("shared")
        JsonArray([child])
        with self.assertRaises(OwnershipError):
            JsonObject({"k": child})

    def test_same_child_twice_rejected(self):
        """A node cannot appear twice in one container."""
        child = JsonNull()
        array = JsonArray([child])
        with self.assertRaises(OwnershipError):
            array.append(child)

    def test_container_cannot_contain_itself(self):
        """Self-insertion would create a cycle."""
        array = JsonArray()
        with self.assertRaises(OwnershipError):
            array.append(array)

    def test_ancestor_cannot_be_attached(self):
        """Attaching an ancestor below its descendant is rejected."""
        root = JsonObject()
        inner = JsonArray()
        root.append("inner", inner)
        with self.assertRaises(OwnershipError):
            inner.append(root)

    def test_non_value_rejected(self):
        """Containers only hold Value nodes."""
        with self.assertRaises(ValueTypeError):
            JsonArray().append(1)


class TestPythonConversion(unittest.TestCase):
    """Test conversion to and from plain Python objects."""

    def test_from_python(self):
        """Nested Python data becomes an equivalent tree."""
        tree = from_python({"a": [1, 2.5, None, True, "s"], "b": {}})
        self.assertIs(tree.type, ValueType.OBJECT)
        inner = tree.get("a")
        self.assertEqual(
            inner,
            JsonArray([
                JsonNumber(1),
                JsonNumber(2.5),
                JsonNull(),
                JsonBoolean(True),
                JsonString("s"),
            ]),
        )
        self.assertEqual(tree.get("b"), JsonObject())

    def test_from_python_booleans_are_not_numbers(self):
        """bool is checked before int."""
        self.assertIs(from_python(False).type, ValueType.BOOLEAN)

    def test_from_python_rejects_unknown_types(self):
        """Sets, bytes and other objects have no JSON form."""
        for obj in ({1, 2}, b"x", object()):
            with self.subTest(obj=obj):
                with self.assertRaises(ValueTypeError):
                    from_python(obj)

    def test_to_python(self):
        """Trees convert back to dicts, lists and scalars."""
        data = {"a": [1.0, None, True], "b": {"c": "d"}}
        self.assertEqual(from_python(data).to_python(), data)

    def test_to_python_keeps_first_duplicate(self):
        """Conversion follows first-match lookup for duplicate keys."""
        obj = JsonObject([("x", JsonNumber(1)), ("x", JsonNumber(2))])
        self.assertEqual(obj.to_python(), {"x": 1.0})


if __name__ == "__main__":
    unittest.main()
