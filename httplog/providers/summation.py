"""Sum of three required numeric parameters."""

from httplog.core.exceptions import InvalidArgumentError

Number = int | float


def compute(
    param1: Number | None = None,
    param2: Number | None = None,
    param3: Number | None = None,
) -> Number:
    """Return ``param1 + param2 + param3``.

    Every parameter must be truthy. A zero counts as missing, so
    ``compute(0, 2, 3)`` is rejected just like ``compute(1, 2)``.

    Raises:
        InvalidArgumentError: if any parameter is missing or falsy.
    """
    if not (param1 and param2 and param3):
        raise InvalidArgumentError(
            "Invalid parameters in function: compute.",
            arguments={"param1": param1, "param2": param2, "param3": param3},
        )

    return param1 + param2 + param3
