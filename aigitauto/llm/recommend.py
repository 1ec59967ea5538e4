"""Model name annotations shown during model selection.

The table is checked top to bottom; the first rule whose substrings all
occur in the lowercased model name wins.
"""

# (required substrings, annotation)
MODEL_RECOMMENDATIONS: list[tuple[tuple[str, ...], str]] = [
    (("llama3",), "Recommended - Great for code"),
    (("codellama",), "Best for coding"),
    (("qwen", "32b"), "Powerful but slow"),
    (("qwen", "7b"), "Good balance"),
    (("qwen",), "Smart choice"),
    (("mistral",), "Fast and efficient"),
    (("llama2",), "Reliable classic"),
    (("13b",), "Slow but accurate"),
    (("32b",), "Slow but accurate"),
    (("3b",), "Fast and light"),
    (("7b",), "Balanced"),
]


def recommend_model(model_name: str) -> str:
    """Return a short annotation for a model name, or "" if none applies."""
    name = model_name.lower()
    for patterns, annotation in MODEL_RECOMMENDATIONS:
        if all(pattern in name for pattern in patterns):
            return annotation
    return ""
