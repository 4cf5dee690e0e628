"""
quickdatastore demonstration script.
"""

import tempfile
from pathlib import Path

import quickdatastore


class Window:
    """Window geometry remembered between runs."""

    def __init__(self, width=800, height=600, maximized=False):
        self.width = width
        self.height = height
        self.maximized = maximized

    def to_json_object(self):
        return quickdatastore.JsonObject(
            {"width": self.width, "height": self.height, "maximized": self.maximized}
        )

    @classmethod
    def from_json_object(cls, data):
        return cls(
            data.opt_int("width", 800),
            data.opt_int("height", 600),
            data.opt_bool("maximized"),
        )

    def __repr__(self):
        return f"Window({self.width}x{self.height}, maximized={self.maximized})"


def main():
    print("quickdatastore - Forgiving JSON and Quick Storage Demo")
    print("=" * 40)

    examples = [
        # Unquoted keys and values
        ("{name: John, age: 30, active: true}", "Unquoted keys and values"),
        # Single quotes
        ("{'name': 'John', 'age': 30}", "Single quotes"),
        # Alternative separators and trailing commas
        ("{a = 1; b => 2, items: [1, 2, 3,],}", "Separators and trailing commas"),
        # Empty array slots
        ("[1,,3]", "Empty array slots"),
        # Commented configuration
        (
            """
        // server settings
        {
            server: {
                host: 'localhost',
                port: 8080,   # default port
                ssl: false,
            },
            features: ['auth', 'logging', metrics],
            /* quoted text still works */
            message: "Server says \\"Hello world!\\"",
        }
        """,
            "Commented configuration",
        ),
        # Duplicate keys
        ('{"test": "value1", "test": "value2"}', "Duplicate keys"),
    ]

    for i, (json_str, description) in enumerate(examples, 1):
        print(f"\n{i}. {description}")
        print(f"Input:  {json_str.strip()}")

        try:
            result = quickdatastore.parse(json_str)
            print(f"Output: {result}")
        except quickdatastore.JsonError as e:
            print(f"Error:  {e}")

    print(f"\n{len(examples) + 1}. Pretty printing")
    tree = quickdatastore.parse("{a: 1, b: [1, 2], c: {d: null}}")
    print(quickdatastore.format_pretty(tree, 2))

    print(f"\n{len(examples) + 2}. Streaming writer")
    writer = quickdatastore.JsonWriter()
    writer.begin_object().key("status").value("ok")
    writer.key("values").begin_array().value(1).value(2.5).value(None).end_array()
    writer.end_object()
    print(writer.getvalue())

    print(f"\n{len(examples) + 3}. Saving and loading")
    with tempfile.TemporaryDirectory() as tmp:
        path = quickdatastore.default_store_path("demo", home=tmp)
        store = quickdatastore.DataStore.for_path(path)
        store.register(Window)
        store.save("launches", 12)
        store.save("window", Window(1280, 720, True))
        store.save("recent", ["notes.txt", "todo.md"])

        print(f"Store file: {Path(path).name}")
        print(Path(path).read_text(encoding="utf-8").rstrip())
        print(f"launches = {store.load('launches')}")
        print(f"window   = {store.load('window')}")
        print(f"recent   = {store.load('recent')}")
        print(f"missing  = {store.load('missing')}")


if __name__ == "__main__":
    main()
