from __future__ import annotations


class LoudnormHelperError(Exception):
    """Base class for every failure that ends a helper run."""


class InvalidNumericInput(LoudnormHelperError, ValueError):
    def __init__(self, option: str, value: object):
        self.option = option
        self.value = value
        super().__init__(f"Invalid value for {option}: {value!r} is not a decimal number.")


class ProcessLaunchFailure(LoudnormHelperError, RuntimeError):
    def __init__(self, binary: str, reason: str):
        self.binary = binary
        self.reason = reason
        super().__init__(f"Failed to start {binary}: {reason}")


class AnalysisPassFailed(LoudnormHelperError, RuntimeError):
    """The measurement pass exited with a non-zero status.

    ``output`` holds the captured diagnostic text exactly as the engine wrote it.
    """

    def __init__(self, returncode: int, output: str):
        self.returncode = returncode
        self.output = output
        super().__init__(f"Loudness analysis pass failed (exit status {returncode}).")


class MeasurementParseFailure(LoudnormHelperError, ValueError):
    def __init__(self, reason: str, raw: str):
        self.reason = reason
        self.raw = raw
        super().__init__(f"Error parsing the loudnorm measurement output: {reason}\n{raw}")


class MeasurementFieldNotNumeric(LoudnormHelperError, ValueError):
    def __init__(self, field: str, value: str):
        self.field = field
        self.value = value
        super().__init__(f"Measured {field} value is not a valid number: {value!r}")
