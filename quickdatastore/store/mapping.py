"""
Envelope mapping between Python values and stored JSON documents.

Every stored document is a JSON object tagged with its shape:

    {"type":"primitive","class":"int","primitive":42}
    {"type":"object","class":"app.models.Point","data":{"x":1,"y":2}}
    {"type":"list","value":[{"primitive":"a","class":"str"},
                            {"class":"app.models.Point","data":{...}}]}

Primitives are str, int, float and bool. Records are classes following the
JsonSerializable protocol, registered in a TypeRegistry under a class id.
"""

from collections.abc import Mapping
from typing import Any, Callable, Optional

from ..core.interfaces import JsonSerializable
from ..core.values import JsonArray, JsonObject
from ..core.writer import JsonWriter
from ..security.exceptions import JsonError, StoreError

# Class ids of the primitive kinds, with the typed accessor that reads them back
PRIMITIVE_READERS: dict[str, Callable[[JsonObject, str], Any]] = {
    "str": JsonObject.get_string,
    "int": JsonObject.get_long,
    "float": JsonObject.get_double,
    "bool": JsonObject.get_bool,
}


def primitive_class_id(value: Any) -> Optional[str]:
    """The class id for a primitive value, or None if value is not one."""
    # bool first: it is an int subclass
    if isinstance(value, bool):
        return "bool"
    if isinstance(value, int):
        return "int"
    if isinstance(value, float):
        return "float"
    if isinstance(value, str):
        return "str"
    return None


class TypeRegistry:
    """Maps record classes to the class ids written into stored documents."""

    def __init__(self) -> None:
        self._classes: dict[str, type] = {}
        self._ids: dict[type, str] = {}

    def register(self, cls: Optional[type] = None, type_id: Optional[str] = None) -> Any:
        """Register a record class; usable as a plain or parameterised decorator.

            @registry.register
            class Point: ...

            @registry.register(type_id="point")
            class Point: ...
        """
        if cls is None:
            return lambda klass: self.register(klass, type_id)

        if not callable(getattr(cls, "to_json_object", None)) or not callable(
            getattr(cls, "from_json_object", None)
        ):
            raise StoreError(
                f"{cls.__name__} must define to_json_object() and from_json_object()"
            )
        type_id = type_id or f"{cls.__module__}.{cls.__qualname__}"
        if type_id in PRIMITIVE_READERS:
            raise StoreError(f"Class id {type_id!r} is reserved for primitives")
        registered = self._classes.get(type_id)
        if registered is not None and registered is not cls:
            raise StoreError(
                f"Class id {type_id!r} is already registered to {registered.__name__}"
            )

        self._classes[type_id] = cls
        self._ids[cls] = type_id
        return cls

    def type_id_for(self, value: Any) -> str:
        """The class id for a record instance."""
        type_id = self._ids.get(type(value))
        if type_id is None:
            raise StoreError(f"I can't write the value type {type(value).__name__}")
        return type_id

    def lookup(self, type_id: str) -> Optional[type]:
        return self._classes.get(type_id)

    def __contains__(self, item: object) -> bool:
        return item in self._classes or item in self._ids

    def __len__(self) -> int:
        return len(self._classes)


def _record_data(record: JsonSerializable) -> JsonObject:
    data = record.to_json_object()
    if isinstance(data, JsonObject):
        return data
    if isinstance(data, Mapping):
        return JsonObject(data)
    raise StoreError(
        f"{type(record).__name__}.to_json_object() returned {type(data).__name__}"
    )


def _write_list_item(writer: JsonWriter, item: Any, registry: TypeRegistry) -> None:
    writer.begin_object()
    class_id = primitive_class_id(item)
    if class_id is not None:
        writer.key("primitive").value(item).key("class").value(class_id)
    else:
        class_id = registry.type_id_for(item)
        writer.key("class").value(class_id).key("data").value(_record_data(item))
    writer.end_object()


def encode(value: Any, registry: TypeRegistry) -> str:
    """
    Serialize value into its envelope document.

    Args:
        value: A primitive, a registered record, or a list/tuple of those.
        registry: Resolves record classes to class ids.

    Returns:
        Compact JSON text for a single line of the backing store.

    Raises:
        StoreError: If value (or a list item) has an unsupported type.
        InvalidNumberError: If value holds a non-finite float.
    """
    writer = JsonWriter()
    writer.begin_object()
    class_id = primitive_class_id(value)
    if class_id is not None:
        writer.key("type").value("primitive")
        writer.key("class").value(class_id)
        writer.key("primitive").value(value)
    elif isinstance(value, (list, tuple)):
        writer.key("type").value("list")
        writer.key("value").begin_array()
        for item in value:
            _write_list_item(writer, item, registry)
        writer.end_array()
    else:
        class_id = registry.type_id_for(value)
        writer.key("type").value("object")
        writer.key("class").value(class_id)
        writer.key("data").value(_record_data(value))
    writer.end_object()
    return writer.getvalue()


def _read_primitive(envelope: JsonObject) -> Any:
    reader = PRIMITIVE_READERS.get(envelope.get_string("class"))
    if reader is None:
        return None
    return reader(envelope, "primitive")


def _read_record(envelope: JsonObject, registry: TypeRegistry) -> Any:
    class_id = envelope.get_string("class")
    cls = registry.lookup(class_id)
    if cls is None:
        raise StoreError(f"Unknown class id {class_id!r}")
    return cls.from_json_object(envelope.get_object("data"))


def _read_list_item(item: JsonObject, registry: TypeRegistry) -> Any:
    if item.get_string("class") in PRIMITIVE_READERS:
        return _read_primitive(item)
    return _read_record(item, registry)


def decode(text: str, registry: TypeRegistry) -> Any:
    """Rebuild the value stored in an envelope document.

    Returns None for an envelope whose type is not recognised.
    """
    try:
        envelope = JsonObject.from_text(text)
        kind = envelope.get_string("type")
        if kind == "primitive":
            return _read_primitive(envelope)
        if kind == "object":
            return _read_record(envelope, registry)
        if kind == "list":
            items: JsonArray = envelope.get_array("value")
            return [
                _read_list_item(items.get_object(index), registry)
                for index in range(len(items))
            ]
        return None
    except StoreError:
        raise
    except JsonError as e:
        raise StoreError(f"Error parsing stored document: {e}") from e
