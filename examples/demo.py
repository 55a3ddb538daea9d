"""
jsontree demonstration script.
"""

import jsontree


def main():
    print("jsontree - Strict JSON Value Tree Demo")
    print("=" * 40)

    examples = [
        ('{"name": "John", "age": 30}', "Simple object"),
        ('[1, -2.5, 3e2, true, null, "text"]', "Mixed array"),
        ('{"test": "value1", "test": "value2"}', "Duplicate keys (both kept)"),
        ('"caf\\u00e9 \\ud83d\\ude00"', "Unicode escapes and a surrogate pair"),
        ("{name: 'John'}", "Unquoted key (rejected)"),
        ("[1, 2, 3,]", "Trailing comma (rejected)"),
    ]

    for i, (json_str, description) in enumerate(examples, 1):
        print(f"\n{i}. {description}")
        print(f"Input:  {json_str}")

        try:
            result = jsontree.parse(json_str)
            print(f"Tree:   {result!r}")
            print(f"Output: {jsontree.dumps(result)}")
        except jsontree.ParseError as e:
            print(f"Error:  {e}")

    print(f"\n{len(examples) + 1}. Accessors")
    doc = jsontree.parse('{"a": 1, "b": [1, 2, 3], "b": "shadowed"}')
    print(f"get(doc, 'a')      -> {jsontree.get(doc, 'a')!r}")
    print(f"get(doc, 'b')      -> {jsontree.get(doc, 'b')!r}")
    print(f"get(doc, 'c')      -> {jsontree.get(doc, 'c')!r}")
    print(f"get_path(doc, 'b.2') -> {jsontree.get_path(doc, 'b.2')!r}")

    print(f"\n{len(examples) + 2}. Pretty printing")
    print(jsontree.dumps(doc, "pretty"))


if __name__ == "__main__":
    main()
