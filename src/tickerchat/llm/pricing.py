"""Per-request cost estimates for known chat models."""

# USD per 1K tokens: (input, output)
MODEL_PRICES: dict[str, tuple[float, float]] = {
    "gpt-4o": (0.005, 0.015),
    "gpt-4o-mini": (0.00015, 0.0006),
    "gpt-3.5-turbo": (0.0015, 0.002),
}


def estimate_cost(usage: dict[str, int] | None, model: str) -> float | None:
    """Estimate the USD cost of one completion.

    Dated snapshots such as ``gpt-4o-mini-2024-07-18`` are priced as their
    base model. When only ``total_tokens`` is reported, 70% is counted as
    input and 30% as output.

    Returns:
        Cost rounded to 5 decimals, or None for unknown models or usage
    """
    if not usage:
        return None

    prices = None
    for name in sorted(MODEL_PRICES, key=len, reverse=True):
        if model == name or model.startswith(f"{name}-"):
            prices = MODEL_PRICES[name]
            break
    if prices is None:
        return None

    if "prompt_tokens" in usage and "completion_tokens" in usage:
        input_tokens = usage["prompt_tokens"]
        output_tokens = usage["completion_tokens"]
    elif "total_tokens" in usage:
        input_tokens = usage["total_tokens"] * 0.7
        output_tokens = usage["total_tokens"] * 0.3
    else:
        return None

    cost = input_tokens / 1000 * prices[0] + output_tokens / 1000 * prices[1]
    return round(cost, 5)
