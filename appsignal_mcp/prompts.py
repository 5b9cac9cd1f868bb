"""Static prompt templates for incident triage."""

from __future__ import annotations

from mcp.types import GetPromptResult, Prompt, PromptArgument, PromptMessage, TextContent


def analyze_incident(incident_number: str) -> str:
    return (
        f"Please analyze AppSignal incident #{incident_number} and provide insights on:\n"
        "1. What is the root cause of this error?\n"
        "2. How severe is this issue?\n"
        "3. What are potential solutions to fix it?\n"
        "4. Are there any patterns or trends to be aware of?"
    )


def suggest_fixes(incident_number: str) -> str:
    return (
        f"For AppSignal incident #{incident_number}, please:\n"
        "1. Analyze the error and backtrace\n"
        "2. Suggest specific code changes to fix the issue\n"
        "3. Provide any additional context or recommendations for preventing similar issues"
    )


PROMPT_TEMPLATES = {
    "analyzeIncident": (analyze_incident, "Analyze the root cause and severity of an incident"),
    "suggestFixes": (suggest_fixes, "Suggest code changes that fix an incident"),
}


def list_prompts() -> list[Prompt]:
    return [
        Prompt(
            name=name,
            description=description,
            arguments=[
                PromptArgument(
                    name="incidentNumber",
                    description="AppSignal incident number",
                    required=True,
                ),
            ],
        )
        for name, (_, description) in PROMPT_TEMPLATES.items()
    ]


def get_prompt(name: str, arguments: dict[str, str] | None = None) -> GetPromptResult:
    if name not in PROMPT_TEMPLATES:
        raise ValueError(f"Unknown prompt: {name}")
    incident_number = (arguments or {}).get("incidentNumber")
    if not isinstance(incident_number, str):
        raise ValueError(f"Prompt {name} requires a string incidentNumber argument")

    template, description = PROMPT_TEMPLATES[name]
    return GetPromptResult(
        description=description,
        messages=[
            PromptMessage(
                role="user",
                content=TextContent(type="text", text=template(incident_number)),
            ),
        ],
    )
