from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from block_canvas.ir.diagram import BlockType


class Position(BaseModel):
    x: float
    y: float


class BlockData(BaseModel):
    """What a block node carries besides its id and position."""

    model_config = ConfigDict(use_enum_values=True)

    type: BlockType
    title: str
    components: List[str] = Field(default_factory=list)
    annotation: Optional[str] = None


class FlowNode(BaseModel):
    id: str
    type: str = "block"                     # canvas node renderer
    position: Position
    data: BlockData
    draggable: bool = True


class FlowEdge(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    source: str
    target: str
    label: Any = None                       # the canvas allows rich (non-string) labels
    type: str = "smoothstep"
    animated: bool = True
    style: Dict[str, Any] = Field(default_factory=dict)
    marker_end: Dict[str, Any] = Field(default_factory=dict, alias="markerEnd")

    def to_canvas(self) -> dict:
        return self.model_dump(by_alias=True)
