def constant_time_equals(a: bytes, b: bytes) -> bool:
    """Compare two byte strings without exiting early.

    The length difference is folded into the same accumulator as the byte
    differences, and the loop always walks ``min(len(a), len(b))`` pairs,
    so the work done does not depend on where the first mismatch is.
    """
    diff = len(a) ^ len(b)
    for x, y in zip(a, b):
        diff |= x ^ y
    return diff == 0
