"""
JSON Schema for rule lexicons passed as dicts instead of mapping files.

Shape mirrors the regex lexicons used elsewhere in the pipeline:

    {
        "RELIGION": [
            {"regex_pattern": "Christianity", "priority": 2.0},
            {"regex_pattern": "Early Christianity", "label": "RELIGION"},
        ],
    }

The top-level key is the default label for its entries.
"""

RULE_LEXICON_SCHEMA: dict = {
    "type": "object",
    "additionalProperties": {
        "type": "array",
        "items": {
            "type": "object",
            "additionalProperties": False,
            "required": ["regex_pattern"],
            "properties": {
                "regex_pattern": {
                    "type": "string",
                    "minLength": 1,
                    "description": "Whitespace-separated per-token regular expressions",
                },
                "label": {
                    "type": "string",
                    "minLength": 1,
                    "description": "Entity label; defaults to the enclosing key",
                },
                "priority": {
                    "type": "number",
                    "description": "Higher priority rules pre-empt lower ones",
                },
                "overwritable_types": {
                    "type": "array",
                    "items": {"type": "string", "minLength": 1},
                    "description": "Pre-existing labels this rule may always replace",
                },
            },
        },
    },
}
