from block_canvas.client.diagram_client import DiagramClient, user_message

__all__ = ["DiagramClient", "user_message"]
