"""
Shared test fixtures.

Provides: canonical diagram payloads, fake HTTP responses for the AI
gateway and the diagram endpoint, API key environment.
"""

import json
from unittest.mock import MagicMock

import pytest

from block_canvas.catalog import default_diagram


def make_response(status_code=200, body=None, text=None):
    """requests.Response stand-in with the attributes our code reads."""
    response = MagicMock()
    response.status_code = status_code
    response.ok = 200 <= status_code < 300
    if body is None and text is not None:
        response.json.side_effect = ValueError("not json")
        response.text = text
    else:
        response.json.return_value = body
        response.text = text if text is not None else json.dumps(body)
    return response


def tool_call_body(arguments, name="generate_block_diagram"):
    if not isinstance(arguments, str):
        arguments = json.dumps(arguments)
    return {
        "choices": [
            {
                "message": {
                    "role": "assistant",
                    "tool_calls": [
                        {
                            "id": "call_1",
                            "type": "function",
                            "function": {"name": name, "arguments": arguments},
                        }
                    ],
                }
            }
        ]
    }


@pytest.fixture
def diagram_payload():
    """Canonical JSON form of the built-in template."""
    return default_diagram().to_payload()


@pytest.fixture
def speaker_payload():
    """What the model typically answers for a Bluetooth speaker."""
    return {
        "blocks": [
            {"id": "pwr", "type": "power", "title": "Power Supply",
             "components": ["Li-ion Battery", "USB-C Charger", "LDO Regulator"]},
            {"id": "in", "type": "inputs", "title": "Inputs Block",
             "components": ["Bluetooth Receiver", "Volume Buttons"]},
            {"id": "cpu", "type": "processing", "title": "Control and Processing",
             "components": ["Bluetooth SoC", "Audio DSP"],
             "annotation": "Handles A2DP decoding"},
            {"id": "out", "type": "outputs", "title": "Outputs Block",
             "components": ["Class-D Amplifier", "Speaker Driver", "RGB LED Ring"]},
            {"id": "per", "type": "peripherals", "title": "Other Peripherals",
             "components": ["Flash Storage", "Debug UART"]},
        ],
        "connections": [
            {"source": "pwr", "target": "cpu", "label": "3.3V"},
            {"source": "in", "target": "cpu", "label": "Audio stream"},
            {"source": "cpu", "target": "out"},
            {"source": "cpu", "target": "per", "label": "SPI"},
        ],
    }


@pytest.fixture
def api_key(monkeypatch):
    monkeypatch.setenv("AI_API_KEY", "test-key")
    return "test-key"
