"""Atlassian Document Format (ADF) comment builder for change analyses."""

from pushbrief.llm.models import FileAnalysis


REPORT_TITLE = "AI Analysis Report"
REPORT_FOOTER = "This analysis was generated automatically by AI."


def _paragraph(text: str) -> dict:
    return {"type": "paragraph", "content": [{"type": "text", "text": text}]}


def build_analysis_comment(results: dict[str, FileAnalysis]) -> dict:
    """Format per-file analysis results as a Jira comment body.

    Args:
        results: Analysis per file path, in display order.

    Returns:
        The request body for the add-comment endpoint.
    """
    content = [_paragraph(REPORT_TITLE)]

    for path, analysis in results.items():
        content.append(_paragraph(f"File: {path}"))

        if analysis.summary:
            content.append(_paragraph("Change summary:"))
            content.append(_paragraph(analysis.summary))

        if analysis.quality_score is not None:
            content.append(_paragraph(f"Code quality: {analysis.quality_score}/10"))
            if analysis.quality_reasons:
                content.append(_paragraph("Reasons:"))
                content.extend(_paragraph(f"- {reason}") for reason in analysis.quality_reasons)

        if analysis.suggestions:
            content.append(_paragraph("Suggestions:"))
            content.extend(_paragraph(f"- {suggestion}") for suggestion in analysis.suggestions)

        content.append(_paragraph("---"))

    content.append(_paragraph(REPORT_FOOTER))

    return {"body": {"type": "doc", "version": 1, "content": content}}
