"""Prompt templates shared across providers."""

# ============================================================
# CHANGE ANALYSIS
# ============================================================

ANALYSIS_SYSTEM_PROMPT = """You are a code analyst and technical writer.
You analyze code changes and write concise technical summaries."""

ANALYSIS_FILE_TEMPLATE = """File: {path}
Status: {status}
Changes: +{additions}, -{deletions}

Patch: {patch}"""

ANALYSIS_FILE_SEPARATOR = "\n\n-----------------\n\n"

ANALYSIS_EMPTY_PROMPT = "No files to analyze."

ANALYSIS_USER_PROMPT_TEMPLATE = """Analyze the changes made to the following files:

Total changes: +{total_additions}, -{total_deletions}

{files}

For each file provide:

1. CHANGE SUMMARY:
- A detailed technical description of the changes
- Their potential impact

2. CODE QUALITY:
- A score out of 10 (1-10)
- The reasons for the score

3. SUGGESTIONS:
- Improvements if the quality score is below 7
- Best practice recommendations
- Security advice (if any)

Respond with JSON in exactly this structure, using the file paths above as keys:
{{
  "overall_summary": "summary of all changes",
  "files": {{
    "path/to/file": {{
      "summary": "change summary",
      "quality_score": 8,
      "quality_reasons": ["reason1", "reason2"],
      "suggestions": ["suggestion1", "suggestion2"]
    }}
  }}
}}"""


# ============================================================
# COMMIT MESSAGES
# ============================================================

COMMIT_SYSTEM_PROMPT = """You are an expert software engineer writing git commit messages.
Be precise: only describe changes actually shown in the diff.
The [FILE_CHANGES] section tells you which files are NEW vs MODIFIED - use this to write accurate descriptions."""

COMMIT_USER_PROMPT_TEMPLATE = """Given the following git context, produce a JSON object with exactly these keys:
- "title": string (imperative mood, <=72 chars)
- "body_bullets": array of 2-7 strings (each concise, describe what changed and why)

Rules:
- Output ONLY valid JSON. No markdown fences. No extra keys. No commentary.
- Title in imperative mood (e.g., "Add feature" not "Added feature").
- Only describe changes shown in the diff. Do not infer or assume other changes.
- [FILE_CHANGES] shows NEW, MODIFIED, DELETED and RENAMED files.
  Use these to write accurate descriptions.

GIT CONTEXT:
{context_bundle}"""
