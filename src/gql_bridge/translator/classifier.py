"""Splits declared type names into input and output roles by naming convention."""

from collections.abc import Iterable

from gql_bridge.config import DEFAULT_INPUT_MARKER


def is_input_name(name: str, marker: str = DEFAULT_INPUT_MARKER) -> bool:
    """True if ``name`` contains the input marker, ignoring case."""
    return marker.lower() in name.lower()


def classify_names(
    names: Iterable[str], marker: str = DEFAULT_INPUT_MARKER
) -> tuple[list[str], list[str]]:
    """Partition type names into (input_names, output_names).

    Both lists are de-duplicated and keep first-seen order. A name carrying
    the marker is always an input type, even if it only ever appears as a
    response shape.
    """
    input_names = []
    output_names = []
    for name in dict.fromkeys(names):
        if is_input_name(name, marker):
            input_names.append(name)
        else:
            output_names.append(name)
    return input_names, output_names
