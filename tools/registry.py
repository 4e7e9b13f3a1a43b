TOOL_DEFINITIONS = [
    {
        "name": "excalidraw_read_me",
        "description": (
            "Returns the Excalidraw element format reference with color palettes, examples, and tips. "
            "Call this BEFORE using create_excalidraw_diagram for the first time."
        ),
        "input_schema": {
            "type": "object",
            "properties": {},
        },
        "annotations": {"readOnlyHint": True},
    },
    {
        "name": "create_excalidraw_diagram",
        "description": (
            "Renders a hand-drawn Excalidraw diagram to a PNG or SVG file. "
            "Call excalidraw_read_me first to learn the element format. "
            "Returns the file path of the saved file."
        ),
        "input_schema": {
            "type": "object",
            "properties": {
                "elements": {
                    "type": "string",
                    "description": (
                        "JSON array string of Excalidraw elements. Must be valid JSON: "
                        "no comments, no trailing commas. Keep compact. "
                        "Call read_me first for format reference."
                    ),
                },
                "outputPath": {
                    "type": "string",
                    "description": (
                        "Optional absolute file path for the output file. "
                        "If omitted, saves to a temp file."
                    ),
                },
                "format": {
                    "type": "string",
                    "description": (
                        "Output format: 'png' (default, rasterized) or 'svg' (vector, scalable). "
                        "SVG is best for high-quality output that needs to scale to any size."
                    ),
                    "enum": ["png", "svg"],
                },
            },
            "required": ["elements"],
        },
        "annotations": {"readOnlyHint": True},
    },
]

TOOL_NAMES = {tool["name"] for tool in TOOL_DEFINITIONS}
