"""
Security limits demonstration for jsontree.
"""

import jsontree
from jsontree import ParseConfig, ParseLimits, SecurityError


def attempt(description, text, config=None):
    try:
        jsontree.parse(text, config)
        print(f"✓ {description}: parsed")
    except SecurityError as e:
        print(f"✗ {description}: blocked ({e})")


def main():
    print("jsontree - Security Limits Demo")
    print("=" * 35)

    print("\n1. Input Size Limits")
    config = ParseConfig(limits=ParseLimits(max_input_size=100))
    attempt("Small input", '{"test": "value"}', config)
    attempt("Large input", '{"test": "' + "x" * 200 + '"}', config)

    print("\n2. String Length Limits")
    config = ParseConfig(limits=ParseLimits(max_string_length=20))
    attempt("Short string", '{"name": "John"}', config)
    attempt("Long string", '{"name": "' + "x" * 50 + '"}', config)

    print("\n3. Nesting Depth Limits")
    config = ParseConfig(limits=ParseLimits(max_nesting_depth=3))
    attempt("Shallow nesting", '{"a": {"b": {"c": "value"}}}', config)
    attempt("Deep nesting", '{"a": {"b": {"c": {"d": "value"}}}}', config)

    print("\n4. Default Depth Ceiling (128)")
    attempt("128 nested arrays", "[" * 128 + "]" * 128)
    attempt("129 nested arrays", "[" * 129 + "]" * 129)

    print("\n5. Number Length Limits")
    config = ParseConfig(limits=ParseLimits(max_number_length=10))
    attempt("Short number", "[12345]", config)
    attempt("Long number", "[" + "9" * 30 + "]", config)


if __name__ == "__main__":
    main()
