import json
import logging
import math
from typing import Any

logger = logging.getLogger(__name__)


def format_number(num: float) -> str:
    """Format a float for formula text: integers without a decimal point,
    everything else with the shortest representation that reads back exactly."""
    if float(num).is_integer() and abs(num) < 1e16:
        return str(int(num))
    return repr(float(num))


def format_fixed(num: float, digits: int = 2) -> str:
    """Fixed-point text with ``digits`` decimals; negative zero prints as zero."""
    if math.isnan(num):
        return "NaN"
    if math.isinf(num):
        return "Infinity" if num > 0 else "-Infinity"
    if num == 0:
        num = 0.0
    return f"{num:.{digits}f}"


def format_value(num: float | None) -> str:
    """Human-readable sample value for CLI tables."""
    if num is None:
        return "undefined"
    return f"{num:.6g}"


def print_result_pretty(res: dict[str, Any], output_format: str = "human") -> None:
    """Print an API result dict in the requested format."""
    if output_format == "json":
        print(json.dumps(res, indent=2, ensure_ascii=False))
        return
    if not res.get("ok"):
        position = res.get("position")
        if position is not None:
            print(f"Error: {res.get('error')} (at position {position})")
        else:
            print("Error:", res.get("error"))
        return

    typ = res.get("type", "value")
    if typ == "validation":
        print(f"Valid formula: f(x) = {res.get('formula')}")
    elif typ == "value":
        print(f"f({format_value(res.get('x'))}) = {format_value(res.get('value'))}")
        print(
            f"f'({format_value(res.get('x'))}) = "
            f"{format_value(res.get('derivative_value'))}"
        )
    elif typ == "derivative":
        print(f"f(x) = {res.get('formula')}")
        print(f"f'(x) = {res.get('derivative')}")
    elif typ == "tangents":
        print(f"Current function: f(x) = {res.get('formula')}")
        print(f"Derivative: f'(x) = {res.get('derivative')}")
        for tangent in res.get("tangents", []):
            print(
                f"  x = {format_fixed(tangent['dot'])}: "
                f"f = {format_value(tangent.get('value'))}, {tangent['label']}"
            )
    elif typ == "plot":
        print(f"Plot saved to: {res.get('file')}")
    else:
        logger.debug("Unknown result type %r", typ)
        print(res.get("result"))
