"""
Built-in diagram template and example descriptions.

Loading the template never touches the network.
"""

from block_canvas.ir.diagram import Block, Connection, Diagram


DEFAULT_TEMPLATE_DESCRIPTION = "Default template diagram"

EXAMPLE_DESCRIPTIONS = [
    "Smart doorbell with camera and motion sensor",
    "Wireless temperature monitoring device with LCD display",
    "Bluetooth speaker with RGB lighting effects",
    "Solar-powered weather station with WiFi connectivity",
    "Smart home hub with voice control and touch screen",
]


def default_diagram() -> Diagram:
    """Five fixed blocks wired around the processing block. Fresh copy on every call."""
    return Diagram(
        blocks=[
            Block(
                id="power-1",
                type="power",
                title="Power Supply",
                components=["Battery", "Voltage Regulator"],
            ),
            Block(
                id="inputs-1",
                type="inputs",
                title="Inputs Block",
                components=["Sensor Module", "Button Interface"],
            ),
            Block(
                id="processing-1",
                type="processing",
                title="Control and Processing",
                components=["Microcontroller", "Memory"],
            ),
            Block(
                id="outputs-1",
                type="outputs",
                title="Outputs Block",
                components=["LED Indicator", "Display"],
            ),
            Block(
                id="peripherals-1",
                type="peripherals",
                title="Other Peripherals",
                components=["Debug Interface", "External Connector"],
            ),
        ],
        connections=[
            Connection(source="power-1", target="processing-1", label="VCC"),
            Connection(source="inputs-1", target="processing-1", label="Data"),
            Connection(source="processing-1", target="outputs-1", label="Control"),
            Connection(source="processing-1", target="peripherals-1", label="I/O"),
        ],
    )
