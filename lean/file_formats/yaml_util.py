"""
YAML file storage.
"""

from io import StringIO
from pathlib import Path
from typing import Any, Callable, Optional, TextIO

from ruamel.yaml import YAML
from ruamel.yaml.constructor import SafeConstructor
from strif import atomic_output_file


def none_or_empty_dict(val: Any) -> bool:
    return val is None or val == {}


class _PlainTimestampConstructor(SafeConstructor):
    """
    Leaves timestamps as strings so they are parsed later with their UTC offset intact
    (the safe loader would otherwise convert them to naive UTC datetimes).
    """


_PlainTimestampConstructor.add_constructor(
    "tag:yaml.org,2002:timestamp", SafeConstructor.construct_yaml_str
)


def new_yaml(suppress_vals: Optional[Callable[[Any], bool]] = none_or_empty_dict) -> YAML:
    """
    Configure a new YAML instance with custom settings.
    """
    yaml = YAML(typ="safe")
    yaml.Constructor = _PlainTimestampConstructor
    yaml.default_flow_style = False  # Block style dictionaries.
    yaml.allow_unicode = True

    suppr = suppress_vals or (lambda v: False)

    # Ignore None values in output.
    def represent_dict(dumper, data):
        return dumper.represent_dict({k: v for k, v in data.items() if not suppr(v)})

    yaml.representer.add_representer(dict, represent_dict)

    # Multi-line text is much easier to edit as a literal block.
    def represent_str(dumper, data):
        if "\n" in data:
            return dumper.represent_scalar("tag:yaml.org,2002:str", data, style="|")
        return dumper.represent_str(data)

    yaml.representer.add_representer(str, represent_str)

    # Keep keys in the order given, which for tasks is field order.
    yaml.representer.sort_base_mapping_type_on_output = False

    return yaml


def from_yaml_string(yaml_string: str) -> Any:
    """
    Read a YAML string into a Python object.
    """
    return new_yaml().load(yaml_string)


def read_yaml_file(filename: str | Path) -> Any:
    """
    Read YAML file into a Python object.
    """
    with open(filename, "r", encoding="utf-8") as f:
        return new_yaml().load(f)


def to_yaml_string(value: Any) -> str:
    """
    Convert a Python object to a YAML string.
    """
    stream = StringIO()
    new_yaml().dump(value, stream)
    return stream.getvalue()


def write_yaml(value: Any, stream: TextIO):
    """
    Write a Python object to a YAML stream.
    """
    new_yaml().dump(value, stream)


def write_yaml_file(value: Any, filename: str | Path):
    """
    Atomic write of the given value to the YAML file.
    """
    with atomic_output_file(filename) as tmp_path:
        with open(tmp_path, "w", encoding="utf-8") as f:
            write_yaml(value, f)


## Tests


def test_suppress_vals():
    data = {
        "title": "Test Title",
        "empty_dict": {},
        "none_value": None,
        "effort": [],
    }
    read_data = from_yaml_string(to_yaml_string(data))

    assert "empty_dict" not in read_data
    assert "none_value" not in read_data
    assert read_data["title"] == "Test Title"
    assert read_data["effort"] == []


def test_multiline_literal():
    yaml_str = to_yaml_string({"description": "This\nis a\n\nmulti line\n"})
    assert "description: |" in yaml_str
    assert from_yaml_string(yaml_str) == {"description": "This\nis a\n\nmulti line\n"}


def test_timestamps_stay_strings():
    data = from_yaml_string("created_at: 2019-10-09T13:00:00+02:00\n")
    assert data["created_at"] == "2019-10-09T13:00:00+02:00"
