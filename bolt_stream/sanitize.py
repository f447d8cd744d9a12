"""Content sanitization for streamed file actions.

Models often wrap file bodies in a markdown code fence, and an intermediate
markdown renderer may have escaped angle brackets. Both are undone here
before the content is handed to the consumer.
"""

import re
from typing import Iterable, Optional

from .constants import DEFAULT_MARKDOWN_EXTENSIONS

_CODE_FENCE_PATTERN = re.compile(r'\s*```\w*\n(.*?)\n\s*```\s*', re.DOTALL)


def clean_markdown_fence(content: str) -> str:
    """Unwrap content enclosed in a single markdown code fence.

    Content that is not fully enclosed is returned unchanged.

    Examples:
        >>> clean_markdown_fence("```ts\\nconst x=1;\\n```")
        'const x=1;'
        >>> clean_markdown_fence("const x=1;")
        'const x=1;'
    """
    match = _CODE_FENCE_PATTERN.fullmatch(content)
    if match:
        return match.group(1)
    return content


def unescape_angle_brackets(content: str) -> str:
    """Turn ``&lt;`` and ``&gt;`` back into angle brackets, nothing else."""
    return content.replace("&lt;", "<").replace("&gt;", ">")


def is_markdown_path(
    file_path: Optional[str],
    markdown_extensions: Iterable[str] = DEFAULT_MARKDOWN_EXTENSIONS,
) -> bool:
    """Check whether a file path names a markdown document."""
    if not file_path:
        return False
    return file_path.endswith(tuple(markdown_extensions))


def sanitize_file_content(
    content: str,
    file_path: Optional[str],
    markdown_extensions: Iterable[str] = DEFAULT_MARKDOWN_EXTENSIONS,
) -> str:
    """Strip fence and escape artifacts unless the target is markdown.

    Args:
        content: Raw or partial file content
        file_path: Target path of the file action, may be None
        markdown_extensions: Suffixes whose content is kept verbatim

    Returns:
        The sanitized content
    """
    if is_markdown_path(file_path, markdown_extensions):
        return content

    content = clean_markdown_fence(content)
    return unescape_angle_brackets(content)


def strip_partial_marker(text: str, marker: str) -> str:
    """Remove a trailing incomplete prefix of ``marker`` from ``text``.

    Used on streamed previews so a close tag split across chunks never
    shows up as content.

    Examples:
        >>> strip_partial_marker("echo hi</bolt", "</boltAction>")
        'echo hi'
    """
    for size in range(min(len(marker) - 1, len(text)), 0, -1):
        if text.endswith(marker[:size]):
            return text[:-size]
    return text
