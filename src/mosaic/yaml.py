"""YAML encoding of ordered arrays."""

from __future__ import annotations

import yaml
import yaml.constructor

import mosaic.log
from mosaic.error import MosaicError

from typing import TYPE_CHECKING

try:
    from yaml import CSafeLoader as SafeLoader, CSafeDumper as SafeDumper
except ImportError:  # defensive code
    from yaml import SafeLoader, SafeDumper  # type: ignore

if TYPE_CHECKING:
    from typing import Any


class YamlError(MosaicError):
    pass


class OrderedYAMLLoader(SafeLoader):
    """A YAML loader that keeps mapping order and rejects duplicate keys."""

    def __init__(self, stream: Any) -> None:
        super().__init__(stream)
        self.add_constructor("tag:yaml.org,2002:map", type(self).construct_yaml_map)
        self.add_constructor("tag:yaml.org,2002:omap", type(self).construct_yaml_map)

    def construct_yaml_map(self, node: yaml.Node) -> Any:
        data: dict = {}
        yield data
        data.update(self.construct_mapping(node))

    def construct_mapping(self, node: yaml.Node, deep: bool = False) -> dict:
        if isinstance(node, yaml.MappingNode):
            self.flatten_mapping(node)
        else:
            raise yaml.constructor.ConstructorError(
                context=None,
                context_mark=None,
                problem="expected a mapping node, but found %s" % node.id,
                problem_mark=node.start_mark,
            )

        mapping = {}
        for key_node, value_node in node.value:
            key = self.construct_object(key_node, deep=deep)
            try:
                hash(key)
            except TypeError as exc:
                raise yaml.constructor.ConstructorError(
                    context="while constructing a mapping",
                    context_mark=node.start_mark,
                    problem="found unacceptable key (%s)" % exc,
                    problem_mark=key_node.start_mark,
                )
            value = self.construct_object(value_node, deep=deep)
            if key in mapping:
                raise yaml.constructor.ConstructorError(
                    context="while constructing a mapping",
                    context_mark=node.start_mark,
                    problem="found duplicate key (%s)" % key,
                    problem_mark=key_node.start_mark,
                )
            mapping[key] = value
        return mapping


def load_ordered(content: str) -> Any:
    """Load a YAML document, keep the mapping order.

    :param content: the YAML text
    :return: the python object described by the document
    :raise: :class:`YamlError` when the document cannot be parsed
    """
    try:
        return yaml.load(content, OrderedYAMLLoader)
    except yaml.YAMLError as e:
        raise YamlError(f"invalid yaml content: {e}", "load_ordered") from e


def dump_ordered(data: Any) -> str:
    """Dump a python object to YAML without sorting mapping keys.

    :param data: object made of mappings, sequences and scalars
    :return: the YAML text
    :raise: :class:`YamlError` when data holds objects YAML cannot represent
    """
    mosaic.log.debug("dump %s to yaml", type(data).__name__)
    try:
        return yaml.dump(
            data, Dumper=SafeDumper, sort_keys=False, default_flow_style=False
        )
    except yaml.YAMLError as e:
        raise YamlError(f"cannot represent data in yaml: {e}", "dump_ordered") from e
