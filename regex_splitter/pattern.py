"""
Delimiter pattern construction.
Everything that can fail on a bad pattern happens here, before any byte is read.
"""
import regex as re

from regex_splitter.errors import PatternCompileError


def compile_delimiter(pattern, flags: int = 0) -> re.Pattern:
    """Compile a delimiter into a bytes pattern usable by the splitter.

    Args:
        pattern: A regular expression as str (UTF-8 encoded before compiling) or bytes,
            an already compiled `regex` pattern, or a compiled `re` pattern.
        flags: Extra flags passed to `regex.compile`. Ignored for compiled patterns.

    Returns:
        A compiled `regex` pattern over bytes.

    Raises:
        PatternCompileError: The pattern is malformed, is not a bytes pattern, or
            matches the empty input (such a pattern cannot delimit anything).
    """
    if isinstance(pattern, re.Pattern):
        compiled = pattern
    else:
        if hasattr(pattern, "pattern") and hasattr(pattern, "flags"):
            # A stdlib re.Pattern; its flag values line up with the regex module's.
            flags = pattern.flags
            pattern = pattern.pattern
        if isinstance(pattern, str):
            pattern = pattern.encode("utf-8")
        if not isinstance(pattern, (bytes, bytearray)):
            raise PatternCompileError(f"delimiter must be str or bytes, not {type(pattern).__name__}")
        try:
            compiled = re.compile(bytes(pattern), flags)
        except re.error as exc:
            raise PatternCompileError(f"invalid delimiter pattern {pattern!r}: {exc}") from exc

    if not isinstance(compiled.pattern, bytes):
        raise PatternCompileError(f"delimiter pattern {compiled.pattern!r} is not a bytes pattern")
    if compiled.search(b"") is not None:
        raise PatternCompileError(f"delimiter pattern {compiled.pattern!r} matches the empty input")
    return compiled


def literal_delimiter(tokens: list[str | bytes]) -> re.Pattern:
    """Build a delimiter matching any of the given literal tokens."""
    encoded = [t.encode("utf-8") if isinstance(t, str) else bytes(t) for t in tokens]
    encoded = [t for t in encoded if t]
    if not encoded:
        raise PatternCompileError("literal delimiter needs at least one non-empty token")
    # Longest first so "<|eot|><|eot|>" matches before "<|eot|>"
    encoded.sort(key=len, reverse=True)
    return compile_delimiter(b"|".join(re.escape(t) for t in encoded))
