"""Reporters rendering a resolution result map as human text, JSON or XML."""

from __future__ import annotations

import json
import xml.etree.ElementTree as ET
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Mapping, Tuple

from constants import OutputFormats
from versioning.models import Gav, ResolutionResult
from versioning.parser import format_gav

Results = Mapping[Gav, ResolutionResult]


def _ordered(results: Results, count: int) -> List[Tuple[Gav, ResolutionResult]]:
    """Sort by GAV string and apply the display limit.

    A found exact match keeps its single matched version regardless of count.
    """
    ordered = []
    for gav in sorted(results, key=format_gav):
        result = results[gav]
        if not (result.exact_match and result.available):
            result = result.limit(count)
        ordered.append((gav, result))
    return ordered


def result_to_dict(gav: Gav, result: ResolutionResult) -> Dict[str, Any]:
    return {
        "group": gav.group,
        "artifact": gav.artifact,
        "version": gav.version,
        "exactMatch": result.exact_match,
        "available": result.available,
        "versioning": {
            "latest": result.version_index.latest,
            "release": result.version_index.release,
            "versions": list(result.version_index.versions),
        },
    }


class Reporter(ABC):
    """Renders results for one output format."""

    format_specifier = ""

    @abstractmethod
    def render(self, results: Results, repo_root: str, count: int = -1) -> str:
        """Render ``results`` as text, showing at most ``count`` versions each."""


class HumanReporter(Reporter):
    format_specifier = OutputFormats.HUMAN.value

    def render(self, results: Results, repo_root: str, count: int = -1) -> str:
        blocks = []
        for gav, result in _ordered(results, count):
            index = result.version_index
            if result.exact_match:
                if result.available:
                    blocks.append(
                        f"{format_gav(gav)} is available as {index.versions[0]} in {repo_root}"
                    )
                else:
                    listing = "\n".join(f"\t{v}" for v in index.versions)
                    blocks.append(
                        f"{format_gav(gav)} is NOT available in {repo_root}.\navailable:\n{listing}"
                    )
            else:
                listing = "\n".join(f"\t\t{v}" for v in index.versions)
                blocks.append(
                    f"{format_gav(gav)}\nlatest:\t\t{index.latest}\n"
                    f"release:\t{index.release}\navailable:\n{listing}"
                )
        return "\n".join(blocks)


class JsonReporter(Reporter):
    format_specifier = OutputFormats.JSON.value

    def render(self, results: Results, repo_root: str, count: int = -1) -> str:
        doc = {
            "repository": repo_root,
            "results": [result_to_dict(g, r) for g, r in _ordered(results, count)],
        }
        return json.dumps(doc, indent=2)


class XmlReporter(Reporter):
    format_specifier = OutputFormats.XML.value

    def render(self, results: Results, repo_root: str, count: int = -1) -> str:
        report = ET.Element("report", {"repository": repo_root})
        for gav, result in _ordered(results, count):
            attrs = {
                "group": gav.group,
                "artifact": gav.artifact,
                "exactMatch": str(result.exact_match).lower(),
                "available": str(result.available).lower(),
            }
            if gav.version is not None:
                attrs["version"] = gav.version
            node = ET.SubElement(report, "result", attrs)
            versioning = ET.SubElement(node, "versioning")
            ET.SubElement(versioning, "latest").text = result.version_index.latest
            ET.SubElement(versioning, "release").text = result.version_index.release
            versions = ET.SubElement(versioning, "versions")
            for v in result.version_index.versions:
                ET.SubElement(versions, "version").text = v
        ET.indent(report)
        return ET.tostring(report, encoding="unicode")


REPORTERS: Tuple[Reporter, ...] = (HumanReporter(), JsonReporter(), XmlReporter())


def get_reporter(output_format: str) -> Reporter:
    """Return the reporter for ``output_format``.

    Raises:
        ValueError: If no reporter handles that format.
    """
    for reporter in REPORTERS:
        if reporter.format_specifier == output_format:
            return reporter
    raise ValueError(f'Unknown output format "{output_format}"')
