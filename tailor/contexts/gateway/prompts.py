"""
Prompt templates for resume optimization.

One deterministic template serves every provider and both resume formats. The only
content difference between LaTeX and plain-text runs is the format label and the
formatting guideline line.
"""

# =============================================================================
# PROMPT TEMPLATES
# =============================================================================

SYSTEM_PROMPT = (
    "You are a professional resume optimization expert. "
    "Always respond with valid JSON only, no additional text or formatting."
)

_RESUME_PROMPT_TEMPLATE = """\
You are an expert resume consultant and ATS (Applicant Tracking System) optimization specialist. Analyze the resume against the job description and provide targeted improvements.

## Job Description:
{job_description}

## Current Resume ({format_label}):
{resume}

## Instructions:
1. **Analyze Job Requirements:**
   - Identify required and preferred skills
   - Note key technologies and tools mentioned
   - Extract important keywords and phrases
   - Understand the role's core responsibilities

2. **Evaluate Resume Match:**
   - Calculate a match score (0-100) based on skill and keyword alignment
   - Identify which skills/experiences align well
   - Find gaps that could be addressed

3. **Generate Improvements:**
   - Rewrite bullet points to better match job requirements
   - Use action verbs and quantifiable achievements
   - Incorporate missing keywords naturally
   - Suggest skills to add or emphasize

4. **Important Guidelines:**
   - Don't fabricate experience - only reframe existing content
   - Maintain professional tone and ATS compatibility
   - {formatting_guideline}
   - Focus on relevant improvements, not wholesale rewrites

## Response Format (strict JSON):
{{
  "matchScore": <number 0-100>,
  "analysis": {{
    "matchingSkills": ["skill1", "skill2", ...],
    "missingSkills": ["skill1", "skill2", ...],
    "keywordsFound": ["keyword1", "keyword2", ...],
    "keywordsMissing": ["keyword1", "keyword2", ...]
  }},
  "suggestions": [
    {{
      "type": "bullet",
      "section": "<section name>",
      "original": "<original bullet text>",
      "text": "<improved bullet text>"
    }},
    {{
      "type": "skill",
      "text": "<skill to add>"
    }},
    {{
      "type": "keyword",
      "text": "<keyword to incorporate and where>"
    }}
  ],
  "updatedResume": "<complete updated {format_label} with all improvements applied>"
}}

CRITICAL: Respond with ONLY valid JSON. No markdown, no explanations, just the JSON object."""

LATEX_LABEL = "LaTeX"
PLAIN_TEXT_LABEL = "plain text"


def format_label(is_latex: bool) -> str:
    return LATEX_LABEL if is_latex else PLAIN_TEXT_LABEL


def build_resume_prompt(resume: str, job_description: str, is_latex: bool) -> str:
    """
    Build the optimization prompt.

    Resume and job description are inserted verbatim.

    Args:
        resume: LaTeX source or plain resume text
        job_description: Job description text
        is_latex: Whether the resume is LaTeX

    Returns:
        User prompt string for the provider
    """
    guideline = (
        "Preserve all LaTeX formatting and commands" if is_latex else "Keep formatting simple"
    )
    return _RESUME_PROMPT_TEMPLATE.format(
        job_description=job_description,
        resume=resume,
        format_label=format_label(is_latex),
        formatting_guideline=guideline,
    )
