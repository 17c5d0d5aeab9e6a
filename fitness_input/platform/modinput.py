"""Host boundary: configuration documents, scheme and validation replies."""

from __future__ import annotations

import xml.etree.ElementTree as ET
from typing import Dict, List, TextIO

from ..errors import ConfigurationError
from ..models import (
    CERT_VALIDATION_PARAM,
    PROVIDER_PARAM,
    InputConfig,
    Provider,
    Stanza,
    ValidationItem,
)

SCHEME_TITLE = "Google Fitness"
SCHEME_DESCRIPTION = "Retrieves fitness data from Google Fitness."

SCHEME_ARGUMENTS = (
    {
        "name": CERT_VALIDATION_PARAM,
        "title": "ForceCertValidation",
        "description": (
            "If true the input requires certificate validation when making "
            "REST calls to Splunk"
        ),
        "data_type": "boolean",
    },
    {
        "name": PROVIDER_PARAM,
        "title": "FitnessService",
        "description": (
            "Enter the name of the Fitness Service to be polled.  Options are: "
            + ", ".join(f"'{name}'" for name in Provider.names())
        ),
        "data_type": "string",
    },
)


def _parse(stream: TextIO) -> ET.Element:
    try:
        return ET.fromstring(stream.read())
    except ET.ParseError as exc:
        raise ConfigurationError(f"Unable to parse configuration. {exc}") from exc


def _params(element: ET.Element) -> Dict[str, str]:
    return {
        param.get("name", ""): (param.text or "").strip()
        for param in element.findall("param")
    }


def _text(root: ET.Element, tag: str) -> str:
    return (root.findtext(tag) or "").strip()


def read_input_config(stream: TextIO) -> InputConfig:
    """Parse the ``<input>`` document the host writes to stdin for a run."""

    root = _parse(stream)
    if root.tag != "input":
        raise ConfigurationError(f"Expected <input> document, found <{root.tag}>")

    stanzas: List[Stanza] = [
        Stanza(name=element.get("name", ""), params=_params(element))
        for element in root.iterfind("configuration/stanza")
    ]
    return InputConfig(
        server_host=_text(root, "server_host"),
        server_uri=_text(root, "server_uri"),
        session_key=_text(root, "session_key"),
        checkpoint_dir=_text(root, "checkpoint_dir"),
        stanzas=stanzas,
    )


def read_validation_item(stream: TextIO) -> ValidationItem:
    """Parse the ``<items>`` document sent with ``--validate-arguments``."""

    root = _parse(stream)
    item = root.find("item")
    if item is None:
        raise ConfigurationError("Validation document contains no <item>")
    return ValidationItem(name=item.get("name", ""), params=_params(item))


def render_scheme() -> str:
    """Return the scheme document used to register the input with the host."""

    scheme = ET.Element("scheme")
    ET.SubElement(scheme, "title").text = SCHEME_TITLE
    ET.SubElement(scheme, "description").text = SCHEME_DESCRIPTION
    ET.SubElement(scheme, "use_external_validation").text = "true"
    ET.SubElement(scheme, "streaming_mode").text = "simple"
    args = ET.SubElement(ET.SubElement(scheme, "endpoint"), "args")
    for argument in SCHEME_ARGUMENTS:
        arg = ET.SubElement(args, "arg", name=argument["name"])
        ET.SubElement(arg, "title").text = argument["title"]
        ET.SubElement(arg, "description").text = argument["description"]
        ET.SubElement(arg, "data_type").text = argument["data_type"]
    ET.indent(scheme, space="   ")
    return ET.tostring(scheme, encoding="unicode")


def render_error(message: str) -> str:
    """Return the error document the host shows when validation fails."""

    error = ET.Element("error")
    ET.SubElement(error, "message").text = message
    return ET.tostring(error, encoding="unicode")


__all__ = [
    "read_input_config",
    "read_validation_item",
    "render_error",
    "render_scheme",
]
