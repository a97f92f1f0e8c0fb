from typing import Any


class ByteSizeError(Exception):
    pass


class OutOfRangeError(ByteSizeError, ValueError):
    def __init__(self, argument: str, value: Any, *args: Any):
        super().__init__(argument, value, *args)
        self.argument = argument
        self.value = value

    def __str__(self) -> str:
        return f"`{self.argument}` out of range (got `{self.value}`)"


class InvalidArgumentError(ByteSizeError, ValueError):
    def __init__(self, argument: str, reason: str, *args: Any):
        super().__init__(argument, reason, *args)
        self.argument = argument
        self.reason = reason

    def __str__(self) -> str:
        return f"`{self.argument}`: {self.reason}"


class UnknownUnitError(ByteSizeError, ValueError):
    def __init__(self, text: str, *args: Any):
        super().__init__(text, *args)
        self.text = text

    def __str__(self) -> str:
        return f"Invalid size suffix in `{self.text}`"


class MalformedNumberError(ByteSizeError, ValueError):
    def __init__(self, text: str, *args: Any):
        super().__init__(text, *args)
        self.text = text

    def __str__(self) -> str:
        return f"Invalid number format: `{self.text}`"


def negative_bytes_error(value: int) -> OutOfRangeError:
    return OutOfRangeError("bytes", value, "Value must be non-negative.")
