from .records import coerce_case, coerce_cases

__all__ = ["coerce_case", "coerce_cases"]
