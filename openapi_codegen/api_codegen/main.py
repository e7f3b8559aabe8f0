"""
OpenAPI code generator - TypeScript models and request wrappers from API specs.

For every configured API the document is fetched once; each path pattern then
runs reference discovery, model emission and request-wrapper emission, and
the resulting files are written below the configured output path.

Failures are isolated: a spec that cannot be fetched skips its API, an
error while generating one pattern skips that pattern, and a file that
cannot be written is counted and skipped.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Mapping

from ..clean import delete_all_files, write_to_file
from ..config import CodegenConfig, CodegenOptions, EndpointEntry
from ..shared.errors import GenerationError, SpecFetchError
from ..shared.spec_loader import fetch_spec
from .document import HTTP_METHODS, ApiDocument
from .generators import DTOGenerator, create_request_generator
from .models import GeneratedOutput
from .spec_parser import ModelReferenceWalker

logger = logging.getLogger(__name__)

SpecFetcher = Callable[[str], Mapping[str, Any]]
FileWriter = Callable[[Path, str], None]


@dataclass(slots=True)
class GenerationSummary:
    """Counters reported at the end of a run."""

    files_written: int = 0
    write_errors: int = 0
    failed_endpoints: int = 0
    failed_patterns: int = 0

    @property
    def ok(self) -> bool:
        return not (self.write_errors or self.failed_endpoints or self.failed_patterns)


def generate_outputs(
    spec: Mapping[str, Any],
    path_pattern: str | None,
    options: CodegenOptions | None = None,
    source: str | None = None,
) -> list[GeneratedOutput]:
    """Generate every file for one path pattern of one document.

    Models come first (parents before children), then request wrappers in
    ``get``, ``post``, ``put``, ``delete`` order. All accumulator state is
    created here and discarded afterwards, so repeated calls are independent.
    """
    options = options or CodegenOptions()
    document = ApiDocument.from_spec(spec)

    model_paths = ModelReferenceWalker(document).discover_model_paths(path_pattern)
    logger.info("Discovered %d model references", len(model_paths))

    outputs = DTOGenerator(document.definitions, options, source).generate(model_paths)
    logger.info("Generated %d DTO models", len(outputs))

    for method in HTTP_METHODS:
        generator = create_request_generator(method, document, options, source)
        wrappers = [
            generator.emit(endpoint, document.base_path)
            for endpoint in generator.resolve(path_pattern)
        ]
        logger.info("Generated %d %s request classes", len(wrappers), method.upper())
        outputs.extend(wrappers)

    return outputs


class OpenAPICodeGenerator:
    """Runs generation for every API in a configuration."""

    def __init__(
        self,
        config: CodegenConfig,
        fetcher: SpecFetcher | None = None,
        writer: FileWriter | None = None,
    ) -> None:
        self.config = config
        self.fetcher = fetcher or fetch_spec
        self.writer = writer or write_to_file

    def generate(self) -> GenerationSummary:
        summary = GenerationSummary()
        if self.config.options.clean_output_dir:
            self.clean_output_directory()

        for endpoint in self.config.endpoints:
            self.generate_for_endpoint(endpoint, summary)
        return summary

    def clean_output_directory(self) -> None:
        output_dir = Path(self.config.options.output_path)
        logger.info("Cleaning output directory: %s", output_dir)
        result = delete_all_files(output_dir, self.config.options.files_to_keep)
        logger.info(
            "Removed %d files and %d folders", result.files_removed, result.folders_removed
        )

    def generate_for_endpoint(self, endpoint: EndpointEntry, summary: GenerationSummary) -> None:
        logger.info("Processing API: %s", endpoint.url)
        try:
            spec = self.fetcher(endpoint.url)
        except SpecFetchError as e:
            logger.error("Error processing API %s: %s", endpoint.url, e)
            summary.failed_endpoints += 1
            return

        for pattern in endpoint.paths:
            try:
                outputs = self.generate_for_pattern(spec, pattern, endpoint.url)
            except GenerationError as e:
                logger.error("%s", e)
                summary.failed_patterns += 1
                continue
            self.write_outputs(outputs, summary)

        logger.info("Processed API spec from %s", endpoint.url)

    def generate_for_pattern(
        self, spec: Mapping[str, Any], pattern: str, source: str | None = None
    ) -> list[GeneratedOutput]:
        logger.info("Generating code for path pattern: %s", pattern)
        try:
            return generate_outputs(spec, pattern, self.config.options, source)
        except Exception as e:
            raise GenerationError(f"Error processing path pattern: {e}", pattern) from e

    def write_outputs(self, outputs: list[GeneratedOutput], summary: GenerationSummary) -> None:
        logger.info("Writing %d files to disk...", len(outputs))
        written = errors = 0
        for output in outputs:
            if self.config.verbose:
                logger.info("Writing file: %s", output.path)
            try:
                self.writer(Path(output.path), output.content)
            except OSError as e:
                logger.error("Error writing file %s: %s", output.path, e)
                errors += 1
                continue
            written += 1

        summary.files_written += written
        summary.write_errors += errors
        logger.info("Wrote %d files (%d errors)", written, errors)
