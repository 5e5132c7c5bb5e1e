"""
Extraction prompt and field schema for passport recognition.
"""

from __future__ import annotations

from typing import Any

PASSPORT_SCHEMA: dict[str, Any] = {
    "type": "object",
    "properties": {
        "title": {"type": "string", "description": "Title (e.g., MR, MS, MRS, MASTER)"},
        "firstName": {
            "type": "string",
            "description": "The first/given name of the passport holder (UPPERCASE)",
        },
        "lastName": {
            "type": "string",
            "description": "The last/surname of the passport holder (UPPERCASE)",
        },
        "passportNumber": {"type": "string", "description": "The unique passport number"},
        "nationality": {"type": "string", "description": "Country of nationality"},
        "gender": {"type": "string", "enum": ["MALE", "FEMALE"], "description": "Gender"},
        "dateOfBirth": {"type": "string", "description": "Date of birth in DD/MM/YYYY format"},
        "issueDate": {
            "type": "string",
            "description": "Passport issue date in DD/MM/YYYY format",
        },
        "expiryDate": {
            "type": "string",
            "description": "Passport expiry date in DD/MM/YYYY format",
        },
    },
    "required": ["firstName", "lastName", "passportNumber"],
}

EXTRACTION_INSTRUCTIONS = """Extract passport details from this image.
MANDATORY:
1. Prioritize the Machine Readable Zone (MRZ) at the bottom for Passport Number and Name.
2. Determine the Title (MR, MS, MRS) based on Gender and Names.
3. Extract Gender (MALE/FEMALE).
4. Extract all dates (DOB, Issue Date, Expiry Date) and format them as DD/MM/YYYY.
5. Ensure names and nationality are in ALL CAPS."""


def describe_schema(schema: dict[str, Any]) -> str:
    """Convert a flat JSON schema into a readable field list."""
    lines = []
    required = set(schema.get("required", []))

    for field_name, field_schema in schema.get("properties", {}).items():
        marker = " (required)" if field_name in required else " (optional)"
        enum_values = field_schema.get("enum")
        if enum_values:
            values_str = ", ".join(f'"{v}"' for v in enum_values)
            lines.append(f"- {field_name}{marker}: one of [{values_str}]")
        else:
            lines.append(f"- {field_name}{marker}: {field_schema.get('type', 'any')}")
        description = field_schema.get("description")
        if description:
            lines.append(f"  Description: {description}")

    return "\n".join(lines)


def build_extraction_prompt(schema: dict[str, Any] = PASSPORT_SCHEMA) -> str:
    """
    Build the prompt sent alongside the document image.

    Example:
        >>> "passportNumber (required)" in build_extraction_prompt()
        True
    """
    return f"""{EXTRACTION_INSTRUCTIONS}

Return these fields:
{describe_schema(schema)}

Respond with a JSON object containing the extracted fields. Use null for fields that cannot be read."""
