from __future__ import annotations

import logging

from ..dom.document import RenderedDocument
from ..types import ExtractionErrorRecord, ExtractionResult, Section
from .assembler import SectionAssembler
from .classifier import classify
from .collector import collect
from .grouper import group_candidates
from .state import ExtractionRun

logger = logging.getLogger(__name__)


def extract(document: RenderedDocument) -> ExtractionResult:
    """Extract and classify the sections of ``document``.

    Never raises: a failure mid-pass is reported in ``errors`` alongside the
    sections fully assembled before it.
    """

    sections: list[Section] = []
    errors: list[ExtractionErrorRecord] = []
    try:
        run = ExtractionRun(document)
        candidates = collect(run)
        logger.debug(
            "Found %d raw candidates (%d nodes consumed)",
            len(candidates),
            run.consumed_count(),
            extra={"candidates": len(candidates), "consumed_nodes": run.consumed_count()},
        )

        groups = group_candidates(candidates)
        logger.debug("Grouped into %d sections", len(groups))

        assembler = SectionAssembler()
        for group in groups:
            section = assembler.assemble(group, classify(group))
            sections.append(section)
            logger.debug("Section %s: %s...", section.section_id, section.text[:50])
    except Exception as exc:
        logger.exception("Extraction failed after %d sections", len(sections))
        errors.append(ExtractionErrorRecord(message=str(exc) or exc.__class__.__name__))

    logger.info("Extraction complete: %d sections found", len(sections), extra={"sections_found": len(sections)})
    return ExtractionResult(title=document.title, sections=sections, errors=errors)
