from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


BLOCK_COUNT = 5


class BlockType(str, Enum):
    POWER = "power"
    INPUTS = "inputs"
    PROCESSING = "processing"
    OUTPUTS = "outputs"
    PERIPHERALS = "peripherals"


BLOCK_TYPES = [t.value for t in BlockType]


class Block(BaseModel):
    model_config = ConfigDict(use_enum_values=True)

    id: str
    type: BlockType
    title: str
    components: List[str] = Field(default_factory=list)
    annotation: Optional[str] = None


class Connection(BaseModel):
    source: str                    # Block.id
    target: str                    # Block.id
    label: Optional[str] = None


class Diagram(BaseModel):
    """Canonical {blocks, connections} form exchanged with the endpoint and exported."""

    blocks: List[Block] = Field(default_factory=list)
    connections: List[Connection] = Field(default_factory=list)

    def block_ids(self) -> set[str]:
        return {b.id for b in self.blocks}

    def to_payload(self) -> dict:
        return self.model_dump(mode="json", exclude_none=True)
