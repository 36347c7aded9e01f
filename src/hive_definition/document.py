"""
Read and write hive definition documents (YAML or JSON)
"""

import json
import logging
import pathlib
import sys
import typing

import pydantic
import yaml

from .errors import HiveDefinitionError
from .schema.models import HiveDefinition

logger = logging.getLogger(__name__)

DocumentFormat = typing.Literal["yaml", "json"]


def guess_format(path: typing.Union[str, pathlib.Path]) -> DocumentFormat:
    return "json" if str(path).lower().endswith(".json") else "yaml"


def _validation_error(e: pydantic.ValidationError) -> HiveDefinitionError:
    """ Convert the first pydantic error into a field path error """
    err = e.errors()[0]
    path = ".".join([HiveDefinition.__name__] + [str(part) for part in err["loc"]])
    if err["loc"] and "input" in err and not isinstance(err["input"], (dict, list)):
        return HiveDefinitionError(f"[{path}={err['input']}] {err['msg']}.", path=path, value=err["input"])
    return HiveDefinitionError(f"[{path}] {err['msg']}.", path=path)


def parse_definition(text: str, fmt: DocumentFormat = "yaml") -> HiveDefinition:
    try:
        doc = json.loads(text) if fmt == "json" else yaml.safe_load(text)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise HiveDefinitionError(f"hive definition is not valid {fmt}: {e}") from e

    if not isinstance(doc, dict):
        raise HiveDefinitionError(f"hive definition must be a {fmt} object, got {type(doc).__name__}")

    try:
        return HiveDefinition.model_validate(doc)
    except pydantic.ValidationError as e:
        raise _validation_error(e) from e


def load_definition(path: typing.Union[str, pathlib.Path],
                    fmt: typing.Optional[DocumentFormat] = None) -> HiveDefinition:
    """ Load a definition from a file, or stdin when path is "-" """
    if str(path) == "-":
        return parse_definition(sys.stdin.read(), fmt or "yaml")

    fmt = fmt or guess_format(path)
    logger.debug(f"loading {fmt} hive definition from {path}")
    return parse_definition(pathlib.Path(path).read_text(), fmt)


def dump_definition(hive: HiveDefinition, fmt: DocumentFormat = "yaml") -> str:
    json_doc = hive.model_dump_json(indent=2, by_alias=True)
    if fmt == "json":
        return json_doc
    doc = yaml.safe_load(json_doc)
    return yaml.safe_dump(doc, default_flow_style=False, sort_keys=False)


def save_definition(hive: HiveDefinition, path: typing.Union[str, pathlib.Path],
                    fmt: typing.Optional[DocumentFormat] = None):
    if str(path) == "-":
        sys.stdout.write(dump_definition(hive, fmt or "yaml"))
        return
    pathlib.Path(path).write_text(dump_definition(hive, fmt or guess_format(path)))
