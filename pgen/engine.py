"""
Main processing pipeline.

Parses the template once, expands it the requested number of times
and hands the results to the output layer.
"""

from __future__ import annotations

import logging
from typing import List

from .grammar import (
    Template,
    analyze_template,
    generate,
    list_alternatives,
    make_random_source,
    parse_template,
)
from .io import write_prompts
from .protocol import PROTOCOL_VERSION
from .report_schema import AlternativeRow, GenerateResult, InspectReport, Stats
from .types import RunOptions
from .version import tool_version

_LOG = logging.getLogger("pgen.engine")


class Engine:
    """
    Engine coordinating class.

    Holds the run options and a single random source, so that every
    prompt of one run draws from the same seeded stream.
    """

    def __init__(self, options: RunOptions):
        """
        Initialize engine with specified options.

        Args:
            options: Execution options
        """
        self.options = options
        self.rng = make_random_source(options.seed)

    def parse(self, source: str) -> Template:
        """Parse the template; parse errors propagate unchanged."""
        template = parse_template(source, lenient=self.options.lenient)
        _LOG.debug("Parsed template: %s", template)
        return template

    def expand(self, template: Template) -> List[str]:
        """Expand the template options.num times with the configured policy."""
        return generate(template, self.options.policy, self.options.num, self.rng)

    def run(self, source: str) -> GenerateResult:
        """
        Full pipeline: parse, expand, write.

        Nothing is written when parsing fails or when dry_run is set.
        """
        template = self.parse(source)
        prompts = self.expand(template)

        out_path = None
        if not self.options.dry_run:
            write_prompts(self.options.out, prompts)
            out_path = str(self.options.out)

        return GenerateResult(
            protocol=PROTOCOL_VERSION,
            toolVersion=tool_version(),
            policy=self.options.policy.value,
            count=len(prompts),
            seed=self.options.seed,
            outPath=out_path,
            prompts=prompts,
        )


def run_generate(source: str, options: RunOptions) -> GenerateResult:
    """Entry point for generation."""
    return Engine(options).run(source)


def run_inspect(source: str, lenient: bool = False) -> InspectReport:
    """Entry point for template inspection (no randomness, no output files)."""
    template = parse_template(source, lenient=lenient)
    stats = analyze_template(template)

    return InspectReport(
        protocol=PROTOCOL_VERSION,
        toolVersion=tool_version(),
        source=source,
        stats=Stats(
            choices=stats.choices,
            maxDepth=stats.max_depth,
            variants=stats.variants,
            minLength=stats.min_length,
            maxLength=stats.max_length,
        ),
        alternatives=[
            AlternativeRow(path=a.path, text=a.text, weight=a.weight, probability=a.probability)
            for a in list_alternatives(template)
        ],
    )


__all__ = [
    "Engine",
    "run_generate",
    "run_inspect",
]
