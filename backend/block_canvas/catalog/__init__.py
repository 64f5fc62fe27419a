from block_canvas.catalog.loader import (
    BlockCatalog,
    BlockTypeInfo,
    load_block_catalog,
    parse_block_catalog,
)
from block_canvas.catalog.templates import (
    DEFAULT_TEMPLATE_DESCRIPTION,
    EXAMPLE_DESCRIPTIONS,
    default_diagram,
)

__all__ = [
    "BlockCatalog",
    "BlockTypeInfo",
    "load_block_catalog",
    "parse_block_catalog",
    "DEFAULT_TEMPLATE_DESCRIPTION",
    "EXAMPLE_DESCRIPTIONS",
    "default_diagram",
]
