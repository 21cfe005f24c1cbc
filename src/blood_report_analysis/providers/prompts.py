# ============================================================================
# src/blood_report_analysis/providers/prompts.py
# ============================================================================
"""
Analysis Prompt Templates

The JSON shape described here must match validators/schema.py field by
field. Change both together.
"""

ANALYSIS_INSTRUCTION = "Analyze the following blood test results and return ONLY valid JSON."

RESULT_SHAPE = """{
  "bloodType": "string | optional",
  "keyFindings": "string[]",
  "supplements": [
    {
      "name": "string",
      "reason": "string",
      "dosage": "string | optional",
      "priority": "high | medium | low"
    }
  ],
  "healthStatus": "good | attention | concern",
  "summary": "string"
}"""

# System message for chat-completion providers
JSON_ONLY_SYSTEM_INSTRUCTION = (
    "You are a medical assistant. ONLY output valid JSON that matches the "
    "AnalysisResult schema. Do not include explanations, markdown, or text "
    "outside the JSON object."
)


def build_analysis_prompt(extracted_text: str) -> str:
    """
    Render the analysis prompt for a report's extracted text.

    The text is appended verbatim as the final part of the prompt.
    """
    return (
        f"{ANALYSIS_INSTRUCTION}\n\n"
        f"JSON schema:\n{RESULT_SHAPE}\n\n"
        "Blood test data: "
        + extracted_text
    )
