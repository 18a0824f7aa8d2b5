"""
Field mapping between the reference and extraction schemas.
Single responsibility: build, check and apply header-to-header mappings.
"""

from typing import Dict, List, Sequence

from .table import Record, Table
from ..utils.logger import get_logger
from ..utils.normalizers import best_matching_column


logger = get_logger()


# Reference header -> extraction header
FieldMapping = Dict[str, str]


def project_row(row: Record, mapping: FieldMapping,
                output_headers: Sequence[str]) -> Record:
    """
    Reshape an extraction row into the reference column layout.

    Args:
        row: Row in extraction-table shape
        mapping: Reference header -> extraction header
        output_headers: Reference headers, in output order

    Returns:
        Row keyed by ``output_headers``; unmapped or absent cells are empty
    """
    projected = {}
    for header in output_headers:
        source = mapping.get(header)
        projected[header] = Table.cell(row, source) if source else ""
    return projected


def describe_reuse_gaps(mapping: FieldMapping, headers_a: Sequence[str],
                        headers_b: Sequence[str]) -> List[str]:
    """
    List the problems a saved mapping has against the current files.

    Gaps are not fatal: projection leaves the affected cells empty.

    Args:
        mapping: Saved mapping
        headers_a: Current reference headers
        headers_b: Current extraction headers

    Returns:
        Human-readable descriptions, empty when the mapping fits
    """
    gaps = []
    known_b = set(headers_b)

    for header in headers_a:
        if header not in mapping:
            gaps.append(f"'{header}' has no saved mapping")
        elif mapping[header] not in known_b:
            gaps.append(f"'{header}' maps to '{mapping[header]}', which File B does not have")

    for header in mapping:
        if header not in headers_a:
            gaps.append(f"saved mapping for '{header}' is not a File A column")

    return gaps


class FieldMapper:
    """
    Builds a total mapping from every reference header to an extraction header.
    """

    def suggest(self, header_a: str, headers_b: Sequence[str]) -> str:
        """
        Pick the extraction header to pre-select for a reference header.

        Args:
            header_a: Reference header
            headers_b: Extraction headers

        Returns:
            Best name match, or the first extraction header
        """
        return best_matching_column(header_a, list(headers_b)) or headers_b[0]

    def build(self, headers_a: Sequence[str], headers_b: Sequence[str],
              prompts) -> FieldMapping:
        """
        Ask for the extraction header to use for each reference header.

        Args:
            headers_a: Reference headers
            headers_b: Extraction headers
            prompts: PromptProvider used for the choices

        Returns:
            Mapping with one entry per reference header

        Raises:
            ValueError: If File B has no columns to map to
        """
        if not headers_b:
            raise ValueError("File B has no columns to map to")

        choices = [(f"{i}. {header}", header) for i, header in enumerate(headers_b, 1)]
        mapping: FieldMapping = {}

        for header in headers_a:
            selected = prompts.select(
                f"Map File A field \"{header}\" to File B field:",
                choices,
                default=self.suggest(header, headers_b),
            )
            mapping[header] = selected

        logger.info("mapping.built", fields=len(mapping))
        return mapping
