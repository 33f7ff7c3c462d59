#!/usr/bin/env python3
"""Example: Writing and reading a delimited message stream.

This example demonstrates:
1. Writing several messages to a file with DelimitedWriter
2. Reading them back with DelimitedReader until the clean end of stream
3. Telling a truncated stream apart from a finished one
"""

from __future__ import annotations

import io
import logging
import tempfile
from pathlib import Path
from typing import Optional

from protoio import BaseMessage, DelimitedReader, DelimitedWriter, UnexpectedEOFError


class SensorReading(BaseMessage):
    """Reading reported by a field sensor."""

    sensor_id: int = 0
    temperature_c: Optional[float] = None
    label: Optional[str] = None


def main() -> None:
    """Run the delimited stream example."""
    logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    readings = [
        SensorReading(sensor_id=1, temperature_c=3.14),
        SensorReading(sensor_id=2, temperature_c=-2.0),
        SensorReading(sensor_id=3, label="hello"),
    ]

    with tempfile.TemporaryDirectory() as tmp:
        path = Path(tmp) / "readings.bin"

        with DelimitedWriter(path.open("wb")) as writer:
            for reading in readings:
                writer.write_message(reading)
        print(f"Wrote {len(readings)} messages, {path.stat().st_size} bytes")

        with DelimitedReader(path.open("rb"), max_size=1024 * 1024) as reader:
            while True:
                reading = SensorReading()
                try:
                    reader.read_message(reading)
                except EOFError:
                    print("Clean end of stream")
                    break
                print(f"  {reading}")

        # Drop the last byte: the reader must report truncation, not a clean end
        damaged = path.read_bytes()[:-1]

    reader = DelimitedReader(io.BytesIO(damaged))
    try:
        for reading in reader.iter_messages(SensorReading):
            print(f"  {reading}")
    except UnexpectedEOFError as e:
        print(f"Truncated stream detected: {e}")


if __name__ == "__main__":
    main()
