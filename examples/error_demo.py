"""
Error reporting demonstration for jsontree.
"""

import jsontree
from jsontree import ParseConfig, ParseError
from jsontree.utils.config import ErrorReporting


def show(label, text, config=None):
    print(f"\n{label}")
    try:
        jsontree.parse(text, config)
        print("Parsed without error")
    except ParseError as e:
        print(f"[{e.kind.value}]")
        print(e.describe())


def main():
    print("jsontree - Error Reporting Demo")
    print("=" * 35)

    show("1. Missing value after colon", '{"key": }')
    show("2. Missing colon", '{"key" "value"}')
    show("3. Unclosed object", '{"key": "value"')
    show(
        "4. Multiline document",
        '{\n    "name": "John Doe",\n    "age": 30,\n    "invalid": \n}',
    )
    show(
        "5. Error in a nested structure",
        '{\n  "user": {\n    "settings": {\n      "theme": dark\n    }\n  }\n}',
    )
    show("6. Double comma in an array", '["item1", "item2",, "item3"]')
    show("7. Leading zero", "[01]")
    show("8. Raw newline inside a string", '"line one\nline two"')

    print("\n9. Diagnostic only, no source context")
    config = ParseConfig(error_reporting=ErrorReporting(include_context=False))
    try:
        jsontree.parse("[1, 2, 3] extra", config)
    except ParseError as e:
        print(str(e))


if __name__ == "__main__":
    main()
