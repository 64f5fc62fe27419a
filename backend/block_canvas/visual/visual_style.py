EDGE_COLOR = "hsl(199 89% 48%)"

EDGE_STYLE = {
    "stroke": EDGE_COLOR,
    "strokeWidth": 2,
}

EDGE_MARKER = {
    "type": "arrowclosed",
    "color": EDGE_COLOR,
}

DEFAULT_EDGE_OPTIONS = {
    "type": "smoothstep",
    "animated": True,
    "style": EDGE_STYLE,
    "markerEnd": EDGE_MARKER,
}


def default_edge_options() -> dict:
    """Independent copy of DEFAULT_EDGE_OPTIONS for a new edge."""
    return {
        "type": DEFAULT_EDGE_OPTIONS["type"],
        "animated": DEFAULT_EDGE_OPTIONS["animated"],
        "style": dict(EDGE_STYLE),
        "markerEnd": dict(EDGE_MARKER),
    }
