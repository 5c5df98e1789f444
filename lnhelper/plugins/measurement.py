from __future__ import annotations
import json
from typing import List

from ..core.errors import MeasurementParseFailure
from ..core.models import LoudnessMeasurement

# loudnorm JSON key -> LoudnessMeasurement attribute
RECORD_FIELDS = {
    "input_i": "integrated_loudness",
    "input_tp": "true_peak",
    "input_lra": "loudness_range",
    "input_thresh": "threshold",
    "target_offset": "target_offset",
}

BEFORE_RECORD = "before-record"
IN_RECORD = "in-record"
DONE = "done"


def isolate_record(text: str) -> str:
    """Cut the loudnorm JSON record out of ffmpeg's diagnostic output.

    ffmpeg prints an arbitrary number of log lines around the record, so the scan is
    driven by line content: a line holding only ``{`` opens the record and a line
    holding only ``}`` closes it. Everything outside is dropped.
    """
    state = BEFORE_RECORD
    kept: List[str] = []
    for line in text.splitlines():
        marker = line.strip()
        if state == BEFORE_RECORD:
            if marker == "{":
                kept.append(line)
                state = IN_RECORD
        elif state == IN_RECORD:
            if marker == "}":
                state = DONE
                break
            kept.append(line)

    if state == BEFORE_RECORD:
        raise MeasurementParseFailure("no measurement record found", text)
    # A record cut off before its closing line still gets closed here.
    return "\n".join(kept) + "\n}"


def decode_measurement(record: str) -> LoudnessMeasurement:
    try:
        data = json.loads(record)
    except json.JSONDecodeError as e:
        raise MeasurementParseFailure(f"malformed record ({e.msg} at line {e.lineno})", record) from e
    if not isinstance(data, dict):
        raise MeasurementParseFailure("record is not a JSON object", record)

    values = {}
    for key, attr in RECORD_FIELDS.items():
        if key not in data:
            raise MeasurementParseFailure(f"missing field '{key}'", record)
        if not isinstance(data[key], str):
            raise MeasurementParseFailure(f"field '{key}' is not a string", record)
        values[attr] = data[key]
    return LoudnessMeasurement(**values)


def extract_measurement(text: str) -> LoudnessMeasurement:
    return decode_measurement(isolate_record(text))
