from block_canvas.catalog import load_block_catalog
from block_canvas.ir.diagram import BLOCK_COUNT, BLOCK_TYPES

TOOL_NAME = "generate_block_diagram"


def build_system_prompt() -> str:
    catalog = load_block_catalog()

    block_lines = "\n".join(f"   - {info.label}" for info in catalog.block_types)
    guideline_lines = "\n".join(
        f"- {info.label}: {info.guideline}" for info in catalog.block_types
    )

    return f"""You are an electronics system architect that converts natural language descriptions of electronics products into structured block diagrams.

CRITICAL RULES:
1. You MUST always generate EXACTLY {BLOCK_COUNT} blocks, no more, no less
2. The {BLOCK_COUNT} blocks are ALWAYS:
{block_lines}

For each block, you must infer appropriate electronic components based on the product description.
If the description doesn't mention specific components for a block, use sensible defaults.

COMPONENT GUIDELINES:
{guideline_lines}

You must respond with a JSON object using tool calling. The response must follow the exact schema provided."""


def build_user_prompt(description: str) -> str:
    return (
        f'Generate a block diagram for the following electronics product: "{description}"\n\n'
        f"Make sure to include relevant components for each of the {BLOCK_COUNT} required "
        "blocks based on the product description."
    )


BLOCK_DIAGRAM_TOOL = {
    "type": "function",
    "function": {
        "name": TOOL_NAME,
        "description": f"Generate a structured block diagram with exactly {BLOCK_COUNT} blocks",
        "parameters": {
            "type": "object",
            "properties": {
                "blocks": {
                    "type": "array",
                    "items": {
                        "type": "object",
                        "properties": {
                            "id": {"type": "string", "description": "Unique identifier for the block"},
                            "type": {
                                "type": "string",
                                "enum": BLOCK_TYPES,
                                "description": "Block type category",
                            },
                            "title": {"type": "string", "description": "Display title for the block"},
                            "components": {
                                "type": "array",
                                "items": {"type": "string"},
                                "description": "List of electronic components in this block",
                            },
                            "annotation": {"type": "string", "description": "Optional annotation or notes"},
                        },
                        "required": ["id", "type", "title", "components"],
                    },
                    "minItems": BLOCK_COUNT,
                    "maxItems": BLOCK_COUNT,
                },
                "connections": {
                    "type": "array",
                    "items": {
                        "type": "object",
                        "properties": {
                            "source": {"type": "string", "description": "Source block ID"},
                            "target": {"type": "string", "description": "Target block ID"},
                            "label": {"type": "string", "description": "Connection label"},
                        },
                        "required": ["source", "target"],
                    },
                    "description": "Connections between blocks",
                },
            },
            "required": ["blocks", "connections"],
        },
    },
}
